"""Attestation records written by the generator.

The on-disk document has a fixed shape::

    {
        "version": 1,
        "attestations": [
            {
                "name": "app-1.0.jar",
                "subjects": [
                    {"name": "app-1.0.jar", "digest": {"sha256": "<hex>"}}
                ]
            }
        ]
    }

Classes
-------
- Subject                 One named digest inside a record.
- AttestationRecord       One record per attested file.
- AttestationCollection   The full document, serialisable to JSON.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

COLLECTION_VERSION: int = 1
JSON_INDENT: int = 4

_PATH_SEPARATORS: frozenset[str] = frozenset({"/", "\\", "\x00"})


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Subject:
    """A file name bound to its SHA-256 digest.

    Attributes
    ----------
    name:
        Artifact file name (no directory component).
    sha256:
        Lowercase hex SHA-256 of the file content.
    """

    name: str
    sha256: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Subject.name must be a non-empty string.")
        if self.name in {".", ".."} or _PATH_SEPARATORS.intersection(self.name):
            raise ValueError(f"Subject.name must be a bare file name, got {self.name!r}")
        if not isinstance(self.sha256, str) or not self.sha256:
            raise ValueError("Subject.sha256 must be a non-empty string.")

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "digest": {"sha256": self.sha256}}


@dataclass(frozen=True)
class AttestationRecord:
    """Attestation for a single build output.

    Attributes
    ----------
    name:
        Artifact file name the record is about.
    subjects:
        Digests covered by the record.  Records produced by the generator
        always carry exactly one subject named like the record itself.
    """

    name: str
    subjects: tuple[Subject, ...]

    @classmethod
    def for_artifact(cls, name: str, digest: str) -> AttestationRecord:
        """Build the single-subject record for artifact *name*."""
        return cls(name=name, subjects=(Subject(name=name, sha256=digest),))

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "subjects": [subject.to_dict() for subject in self.subjects],
        }


@dataclass
class AttestationCollection:
    """The document written once per generator run.

    Attributes
    ----------
    attestations:
        Records in output order.
    version:
        Document format version; always ``1``.
    """

    attestations: list[AttestationRecord] = field(default_factory=list)
    version: int = COLLECTION_VERSION

    def add(self, record: AttestationRecord) -> None:
        self.attestations.append(record)

    @property
    def names(self) -> list[str]:
        """Return the record names in output order."""
        return [record.name for record in self.attestations]

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "attestations": [record.to_dict() for record in self.attestations],
        }

    def to_json(self) -> str:
        """Render the document as pretty-printed JSON (4-space indent)."""
        return json.dumps(self.to_dict(), indent=JSON_INDENT)

    @classmethod
    def from_dict(cls, data: object) -> AttestationCollection:
        """Rebuild a collection from a decoded JSON document.

        Raises
        ------
        ValueError
            If *data* does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise ValueError("Attestation document must be a JSON object.")
        version = data.get("version")
        if version != COLLECTION_VERSION:
            raise ValueError(f"Unsupported attestation document version: {version!r}")
        raw_records = data.get("attestations")
        if not isinstance(raw_records, list):
            raise ValueError("Attestation document must have an 'attestations' list.")

        collection = cls(version=version)
        for raw in raw_records:
            collection.add(_record_from_dict(raw))
        return collection


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_collection(path: Path) -> AttestationCollection:
    """Load a document previously written by the generator.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is not valid JSON or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Attestation file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Attestation file {path} is not valid JSON: {exc}") from exc
    return AttestationCollection.from_dict(data)


def _record_from_dict(raw: object) -> AttestationRecord:
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise ValueError(f"Malformed attestation record: {raw!r}")
    raw_subjects = raw.get("subjects", [])
    if not isinstance(raw_subjects, list):
        raise ValueError(f"Record {raw['name']!r} must have a 'subjects' list.")
    subjects: list[Subject] = []
    for subject in raw_subjects:
        try:
            subjects.append(
                Subject(name=subject["name"], sha256=subject["digest"]["sha256"])
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed subject in record {raw['name']!r}: {subject!r}") from exc
    return AttestationRecord(name=raw["name"], subjects=tuple(subjects))


__all__ = [
    "COLLECTION_VERSION",
    "AttestationCollection",
    "AttestationRecord",
    "Subject",
    "load_collection",
]
