#!/usr/bin/env python3
"""Example: Quickstart — slsa-attest

Writes a few fake build outputs to a temporary directory, generates the
attestation file for them, and re-checks it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install slsa-attest
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import slsa_attest
from slsa_attest import HashConfig, HashGenerator, check_collection, load_collection


def main() -> None:
    print(f"slsa-attest version: {slsa_attest.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / "target"
        target.mkdir()

        # Step 1: Simulate the outputs of a packaging step
        (target / "app-1.0.jar").write_bytes(b"PK\x03\x04 app classes")
        (target / "app-1.0.pom").write_text("<project/>", encoding="utf-8")
        (target / "app-1.0.jar.original").write_bytes(b"PK\x03\x04 pre-shade")
        (target / "build.log").write_text("BUILD SUCCESS", encoding="utf-8")

        # Step 2: Generate hash.json
        generator = HashGenerator(HashConfig(run_hash_jarfile=True))
        written = generator.run(target)
        print(f"\nAttestation file: {written}")
        print(written.read_text(encoding="utf-8"))

        # Step 3: Re-check the attested files
        collection = load_collection(written)
        for result in check_collection(collection, target):
            print(f"  {result.name:<16} {result.status.value}")


if __name__ == "__main__":
    main()
