"""Tests for LocalRepositoryFetcher."""
from __future__ import annotations

from pathlib import Path

import pytest

from slsa_attest.verification.coordinates import (
    PROVENANCE_CLASSIFIER,
    PROVENANCE_TYPE,
    DependencyCoordinate,
)
from slsa_attest.verification.fetcher import (
    ArtifactFetchError,
    LocalRepositoryFetcher,
    ProvenanceNotFoundError,
)

COORD = DependencyCoordinate("org.example.libs", "widget", "1.4.0")


def _publish(repository: Path, coordinate: DependencyCoordinate, *, provenance: bool) -> Path:
    directory = (
        repository.joinpath(*coordinate.group_id.split("."))
        / coordinate.artifact_id
        / coordinate.version
    )
    directory.mkdir(parents=True, exist_ok=True)
    (directory / coordinate.artifact_file_name).write_bytes(b"jar:" + coordinate.coordinate.encode())
    if provenance:
        (directory / coordinate.provenance_file_name).write_text('{"payload": "..."}')
    return directory


@pytest.fixture()
def repository(tmp_path: Path) -> Path:
    repo = tmp_path / "repository"
    repo.mkdir()
    return repo


class TestLocalRepositoryFetcher:
    def test_artifact_directory_layout(self, repository: Path) -> None:
        fetcher = LocalRepositoryFetcher(repository)
        assert fetcher.artifact_directory(COORD) == (
            repository / "org" / "example" / "libs" / "widget" / "1.4.0"
        )

    def test_fetch_provenance_copies_file(self, repository: Path, tmp_path: Path) -> None:
        _publish(repository, COORD, provenance=True)
        work = tmp_path / "work"
        path = LocalRepositoryFetcher(repository).fetch_provenance(
            COORD, PROVENANCE_CLASSIFIER, PROVENANCE_TYPE, work
        )
        assert path == work / "widget-1.4.0-jar.intoto.build.slsa"
        assert path.read_text() == '{"payload": "..."}'

    def test_missing_provenance_raises_not_found(self, repository: Path, tmp_path: Path) -> None:
        _publish(repository, COORD, provenance=False)
        with pytest.raises(ProvenanceNotFoundError):
            LocalRepositoryFetcher(repository).fetch_provenance(
                COORD, PROVENANCE_CLASSIFIER, PROVENANCE_TYPE, tmp_path / "work"
            )

    def test_unknown_dependency_raises_not_found(self, repository: Path, tmp_path: Path) -> None:
        with pytest.raises(ProvenanceNotFoundError):
            LocalRepositoryFetcher(repository).fetch_provenance(
                COORD, PROVENANCE_CLASSIFIER, PROVENANCE_TYPE, tmp_path
            )

    def test_fetch_artifact_copies_jar(self, repository: Path, tmp_path: Path) -> None:
        _publish(repository, COORD, provenance=False)
        work = tmp_path / "work"
        path = LocalRepositoryFetcher(repository).fetch_artifact(COORD.coordinate, work)
        assert path == work / "widget-1.4.0.jar"
        assert path.read_bytes() == b"jar:org.example.libs:widget:1.4.0"

    def test_fetch_artifact_missing_raises(self, repository: Path, tmp_path: Path) -> None:
        with pytest.raises(ArtifactFetchError):
            LocalRepositoryFetcher(repository).fetch_artifact(COORD.coordinate, tmp_path)

    def test_fetch_artifact_bad_coordinate_raises(self, repository: Path, tmp_path: Path) -> None:
        with pytest.raises(ArtifactFetchError):
            LocalRepositoryFetcher(repository).fetch_artifact("not-a-coordinate", tmp_path)
