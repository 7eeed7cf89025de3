"""Dependency coordinates and the files derived from them.

A coordinate is the ``groupId:artifactId:version`` triple of a direct
dependency.  The provenance file and the artifact downloaded for it are
named from the coordinate, so every component is validated to keep those
names inside the working directory.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

PROVENANCE_CLASSIFIER: str = "jar"
PROVENANCE_TYPE: str = "intoto.build.slsa"

_FORBIDDEN_CHARACTERS: frozenset[str] = frozenset({"/", "\\", ":", "\x00"})


@dataclass(frozen=True)
class DependencyCoordinate:
    """Identifies one direct dependency of the current build.

    Attributes
    ----------
    group_id:
        Maven group, e.g. ``"org.apache.commons"``.
    artifact_id:
        Maven artifact, e.g. ``"commons-lang3"``.
    version:
        Exact version string, e.g. ``"3.14.0"``.
    """

    group_id: str
    artifact_id: str
    version: str

    def __post_init__(self) -> None:
        for label, value in (
            ("group_id", self.group_id),
            ("artifact_id", self.artifact_id),
            ("version", self.version),
        ):
            if not value:
                raise ValueError(f"DependencyCoordinate.{label} must not be empty.")
            if value in {".", ".."} or _FORBIDDEN_CHARACTERS.intersection(value):
                raise ValueError(
                    f"DependencyCoordinate.{label} contains a path component: {value!r}"
                )

    @classmethod
    def parse(cls, text: str) -> DependencyCoordinate:
        """Parse ``"groupId:artifactId:version"``.

        Raises
        ------
        ValueError
            If *text* does not have exactly three non-empty parts.
        """
        parts = text.strip().split(":")
        if len(parts) != 3:
            raise ValueError(
                f"Expected 'groupId:artifactId:version', got {text!r}"
            )
        return cls(group_id=parts[0], artifact_id=parts[1], version=parts[2])

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def provenance_file_name(self) -> str:
        """``<artifactId>-<version>-jar.intoto.build.slsa``"""
        return f"{self.artifact_id}-{self.version}-{PROVENANCE_CLASSIFIER}.{PROVENANCE_TYPE}"

    @property
    def artifact_file_name(self) -> str:
        """``<artifactId>-<version>.jar``"""
        return f"{self.artifact_id}-{self.version}.jar"

    def __str__(self) -> str:
        return self.coordinate


def load_dependencies(path: Path) -> list[DependencyCoordinate]:
    """Load dependency coordinates from a YAML file.

    The file has a top-level ``dependencies`` list.  Each entry is either
    a ``"groupId:artifactId:version"`` string or a mapping with
    ``groupId``, ``artifactId`` and ``version`` keys.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is malformed or an entry is not a valid coordinate.
    """
    if not path.exists():
        raise FileNotFoundError(f"Dependency list not found: {path}")
    return parse_dependencies(path.read_text(encoding="utf-8"))


def parse_dependencies(yaml_text: str) -> list[DependencyCoordinate]:
    """Parse a dependency list from YAML.  Duplicates keep their first position."""
    try:
        data = yaml.safe_load(io.StringIO(yaml_text))
    except yaml.YAMLError as exc:
        raise ValueError(f"Dependency list is not valid YAML: {exc}") from exc
    if not isinstance(data, dict) or "dependencies" not in data:
        raise ValueError("Dependency YAML must have a top-level 'dependencies' key.")
    entries = data["dependencies"] or []
    if not isinstance(entries, list):
        raise ValueError("'dependencies' must be a list.")

    coordinates: list[DependencyCoordinate] = []
    seen: set[DependencyCoordinate] = set()
    for entry in entries:
        coordinate = _coordinate_from_entry(entry)
        if coordinate in seen:
            logger.debug("Ignoring duplicate dependency %s", coordinate)
            continue
        seen.add(coordinate)
        coordinates.append(coordinate)
    return coordinates


def _coordinate_from_entry(entry: object) -> DependencyCoordinate:
    if isinstance(entry, str):
        return DependencyCoordinate.parse(entry)
    if isinstance(entry, dict):
        fields: list[str] = []
        for key in ("groupId", "artifactId", "version"):
            if key not in entry:
                raise ValueError(f"Dependency entry {entry!r} is missing '{key}'")
            value = entry[key]
            # Unquoted YAML scalars such as 1.10 or null would not round-trip.
            if not isinstance(value, str):
                raise ValueError(
                    f"Dependency entry {entry!r}: {key} must be a string, "
                    f"got {type(value).__name__} (quote it in the YAML file)."
                )
            fields.append(value)
        return DependencyCoordinate(*fields)
    raise ValueError(f"Unsupported dependency entry: {entry!r}")


__all__ = [
    "PROVENANCE_CLASSIFIER",
    "PROVENANCE_TYPE",
    "DependencyCoordinate",
    "load_dependencies",
    "parse_dependencies",
]
