"""Collaborators that place provenance files and artifacts in the work dir.

The verifier only depends on the two protocols below.  Resolution
failures (the file simply does not exist) are reported through dedicated
exceptions so the verifier can tell "no provenance published" apart from
other problems.

:class:`LocalRepositoryFetcher` implements both protocols on top of a
Maven-layout repository directory such as ``~/.m2/repository``::

    <repository>/<groupId with dots as slashes>/<artifactId>/<version>/<file>
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Protocol

from slsa_attest.verification.coordinates import DependencyCoordinate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FetchError(Exception):
    """Base class for collaborator fetch failures."""


class ProvenanceNotFoundError(FetchError):
    """Raised when a dependency has no published provenance file."""


class ArtifactFetchError(FetchError):
    """Raised when the dependency artifact itself cannot be obtained."""


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class ProvenanceFetcher(Protocol):
    def fetch_provenance(
        self,
        coordinate: DependencyCoordinate,
        classifier: str,
        type_: str,
        destination: Path,
    ) -> Path:
        """Copy the provenance file into *destination* and return its path.

        Raises :class:`ProvenanceNotFoundError` if it does not exist.
        """


class ArtifactFetcher(Protocol):
    def fetch_artifact(self, coordinate: str, destination: Path) -> Path:
        """Copy the ``groupId:artifactId:version`` jar into *destination*.

        Raises :class:`ArtifactFetchError` on failure.
        """


# ---------------------------------------------------------------------------
# Local repository implementation
# ---------------------------------------------------------------------------


class LocalRepositoryFetcher:
    """Fetches files from a Maven-layout directory.

    Parameters
    ----------
    repository:
        Root of the repository.
    """

    def __init__(self, repository: Path) -> None:
        self._repository = Path(repository)

    @property
    def repository(self) -> Path:
        return self._repository

    def artifact_directory(self, coordinate: DependencyCoordinate) -> Path:
        """Return the repository directory holding *coordinate*'s files."""
        return (
            self._repository.joinpath(*coordinate.group_id.split("."))
            / coordinate.artifact_id
            / coordinate.version
        )

    def fetch_provenance(
        self,
        coordinate: DependencyCoordinate,
        classifier: str,
        type_: str,
        destination: Path,
    ) -> Path:
        file_name = f"{coordinate.artifact_id}-{coordinate.version}-{classifier}.{type_}"
        source = self.artifact_directory(coordinate) / file_name
        if not source.is_file():
            raise ProvenanceNotFoundError(f"{coordinate}: {source} does not exist")
        try:
            return self._copy(source, destination)
        except OSError as exc:
            raise FetchError(f"{coordinate}: could not copy {source}: {exc}") from exc

    def fetch_artifact(self, coordinate: str, destination: Path) -> Path:
        try:
            parsed = DependencyCoordinate.parse(coordinate)
        except ValueError as exc:
            raise ArtifactFetchError(str(exc)) from exc
        source = self.artifact_directory(parsed) / parsed.artifact_file_name
        if not source.is_file():
            raise ArtifactFetchError(f"{coordinate}: {source} does not exist")
        try:
            return self._copy(source, destination)
        except OSError as exc:
            raise ArtifactFetchError(f"{coordinate}: could not copy {source}: {exc}") from exc

    @staticmethod
    def _copy(source: Path, destination: Path) -> Path:
        destination.mkdir(parents=True, exist_ok=True)
        target = destination / source.name
        shutil.copyfile(source, target)
        logger.debug("Copied %s -> %s", source, target)
        return target


__all__ = [
    "ArtifactFetchError",
    "ArtifactFetcher",
    "FetchError",
    "LocalRepositoryFetcher",
    "ProvenanceFetcher",
    "ProvenanceNotFoundError",
]
