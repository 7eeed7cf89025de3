"""Exceptions raised by the attestation generator.

Each one is fatal for a generator run: the caller sees the failure and
no output file is produced.
"""
from __future__ import annotations


class HashingError(Exception):
    """Base class for generator failures."""


class ScanError(HashingError):
    """Raised when the artifact directory cannot be listed."""


class ReadError(HashingError):
    """Raised when an eligible artifact cannot be read."""


class WriteError(HashingError):
    """Raised when the attestation file cannot be written."""


__all__ = [
    "HashingError",
    "ReadError",
    "ScanError",
    "WriteError",
]
