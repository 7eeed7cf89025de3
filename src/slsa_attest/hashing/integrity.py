"""Re-check an attestation file against the files it describes."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from slsa_attest.hashing.digest import sha256_file
from slsa_attest.hashing.model import AttestationCollection


class IntegrityStatus(str, Enum):
    """Result of comparing one subject with the file on disk."""

    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING = "missing"


@dataclass(frozen=True)
class IntegrityResult:
    """Comparison result for one subject.

    Attributes
    ----------
    name:
        Subject file name.
    status:
        Whether the recorded digest still matches.
    expected:
        Digest recorded in the attestation file.
    actual:
        Digest of the file on disk, or ``None`` if it is missing.
    """

    name: str
    status: IntegrityStatus
    expected: str
    actual: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is IntegrityStatus.MATCH


def check_collection(
    collection: AttestationCollection, target_dir: Path
) -> list[IntegrityResult]:
    """Compare every subject in *collection* with the file in *target_dir*.

    Raises
    ------
    ReadError
        If a subject file exists but cannot be read.
    """
    results: list[IntegrityResult] = []
    for record in collection.attestations:
        for subject in record.subjects:
            path = target_dir / subject.name
            if not path.is_file():
                results.append(
                    IntegrityResult(subject.name, IntegrityStatus.MISSING, subject.sha256)
                )
                continue
            actual = sha256_file(path)
            status = (
                IntegrityStatus.MATCH if actual == subject.sha256 else IntegrityStatus.MISMATCH
            )
            results.append(IntegrityResult(subject.name, status, subject.sha256, actual))
    return results


__all__ = [
    "IntegrityResult",
    "IntegrityStatus",
    "check_collection",
]
