"""Digest and attestation generation for build outputs.

Submodules
----------
- ``digest``      Eligibility rule and SHA-256 helpers
- ``model``       AttestationCollection, AttestationRecord, Subject
- ``generator``   HashGenerator — scans a directory and writes ``hash.json``
- ``integrity``   check_collection — re-checks a written file
- ``errors``      ScanError, ReadError, WriteError
"""
from __future__ import annotations

from slsa_attest.hashing.digest import is_eligible, sha256_file, sha256_hex
from slsa_attest.hashing.errors import HashingError, ReadError, ScanError, WriteError
from slsa_attest.hashing.generator import DEFAULT_OUTPUT_NAME, HashGenerator
from slsa_attest.hashing.integrity import IntegrityResult, IntegrityStatus, check_collection
from slsa_attest.hashing.model import (
    COLLECTION_VERSION,
    AttestationCollection,
    AttestationRecord,
    Subject,
    load_collection,
)

__all__ = [
    # Digest
    "is_eligible",
    "sha256_file",
    "sha256_hex",
    # Model
    "COLLECTION_VERSION",
    "AttestationCollection",
    "AttestationRecord",
    "Subject",
    "load_collection",
    # Generator
    "DEFAULT_OUTPUT_NAME",
    "HashGenerator",
    # Integrity
    "IntegrityResult",
    "IntegrityStatus",
    "check_collection",
    # Errors
    "HashingError",
    "ReadError",
    "ScanError",
    "WriteError",
]
