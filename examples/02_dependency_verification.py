#!/usr/bin/env python3
"""Example: Dependency provenance verification

Builds a tiny Maven-layout repository with two dependencies, only one of
which publishes provenance, and runs the verifier over both.  The real
verifier is replaced by the Python interpreter running a stand-in
``verify-artifact`` script, so the example runs anywhere.

Usage:
    python examples/02_dependency_verification.py

Requirements:
    pip install slsa-attest
"""
from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path

from slsa_attest import (
    DependencyCoordinate,
    LocalRepositoryFetcher,
    ProvenanceVerifier,
    VerifierConfig,
)


def _publish(repository: Path, coordinate: DependencyCoordinate, provenance: bool) -> None:
    directory = (
        repository.joinpath(*coordinate.group_id.split("."))
        / coordinate.artifact_id
        / coordinate.version
    )
    directory.mkdir(parents=True)
    (directory / coordinate.artifact_file_name).write_bytes(b"jar")
    if provenance:
        (directory / coordinate.provenance_file_name).write_text("{}", encoding="utf-8")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    dependencies = [
        DependencyCoordinate.parse("com.acme:legacy-utils:0.9"),
        DependencyCoordinate.parse("com.acme:signed-core:2.3.1"),
    ]

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        repository = root / "repository"
        _publish(repository, dependencies[0], provenance=False)
        _publish(repository, dependencies[1], provenance=True)

        (root / "verify-artifact").write_text(
            "import sys\nprint('PASSED: verified provenance for', sys.argv[-1])\n",
            encoding="utf-8",
        )
        os.chdir(root)

        config = VerifierConfig(verifier_path=sys.executable, work_dir=root / "target" / "slsa")
        verifier = ProvenanceVerifier.from_config(config, LocalRepositoryFetcher(repository))
        report = verifier.verify(dependencies)

        print()
        for outcome in report.outcomes:
            print(f"  {outcome.coordinate.coordinate:<28} {outcome.status.value:<9} {outcome.reason}")


if __name__ == "__main__":
    main()
