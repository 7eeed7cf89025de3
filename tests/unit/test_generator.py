"""Tests for HashGenerator.

Covers:
- The runHashJarfile execution gate
- Eligible file selection and name-sorted output order
- Non-recursive scanning
- Empty directories
- Output path resolution: default, explicit, created parents, fallbacks
- ScanError / ReadError / WriteError propagation
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

from slsa_attest.config import HashConfig
from slsa_attest.hashing.digest import sha256_hex
from slsa_attest.hashing.errors import ReadError, ScanError, WriteError
from slsa_attest.hashing.generator import HashGenerator
from slsa_attest.hashing.model import AttestationCollection


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_files(directory: Path, files: dict[str, bytes]) -> None:
    for name, content in files.items():
        (directory / name).write_bytes(content)


def _generator(output_json_path: str = "", run: bool = True) -> HashGenerator:
    return HashGenerator(HashConfig(output_json_path=output_json_path, run_hash_jarfile=run))


@pytest.fixture()
def build_dir(tmp_path: Path) -> Path:
    target = tmp_path / "target"
    target.mkdir()
    _write_files(
        target,
        {
            "foo.jar": b"foo jar bytes",
            "foo-original.jar": b"pre-shade bytes",
            "bar.pom": b"<project/>",
            "readme.txt": b"not an artifact",
        },
    )
    return target


# ---------------------------------------------------------------------------
# Execution gate
# ---------------------------------------------------------------------------


class TestRunGate:
    def test_disabled_by_default(self, build_dir: Path) -> None:
        assert HashGenerator().run(build_dir) is None
        assert not (build_dir / "hash.json").exists()

    def test_disabled_generator_does_not_touch_missing_dir(self, tmp_path: Path) -> None:
        assert _generator(run=False).run(tmp_path / "absent") is None

    def test_enabled_writes_default_file(self, build_dir: Path) -> None:
        written = _generator().run(build_dir)
        assert written == build_dir / "hash.json"
        assert written.exists()


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


class TestScan:
    def test_selects_only_eligible_files(self, build_dir: Path) -> None:
        collection = _generator().scan(build_dir)
        assert collection.names == ["bar.pom", "foo.jar"]

    def test_records_carry_digests(self, build_dir: Path) -> None:
        collection = _generator().scan(build_dir)
        by_name = {r.name: r for r in collection.attestations}
        assert by_name["foo.jar"].subjects[0].sha256 == sha256_hex(b"foo jar bytes")
        assert by_name["bar.pom"].subjects[0].name == "bar.pom"

    def test_output_is_sorted_by_name(self, tmp_path: Path) -> None:
        _write_files(tmp_path, {"z.jar": b"z", "a.jar": b"a", "m.pom": b"m"})
        assert _generator().scan(tmp_path).names == ["a.jar", "m.pom", "z.jar"]

    def test_does_not_recurse(self, tmp_path: Path) -> None:
        (tmp_path / "lib").mkdir()
        _write_files(tmp_path / "lib", {"nested.jar": b"n"})
        _write_files(tmp_path, {"top.jar": b"t"})
        assert _generator().scan(tmp_path).names == ["top.jar"]

    def test_directory_named_like_jar_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "exploded.jar").mkdir()
        assert _generator().scan(tmp_path).names == []

    def test_empty_directory(self, tmp_path: Path) -> None:
        collection = _generator().scan(tmp_path)
        assert collection.attestations == []

    def test_missing_directory_raises_scan_error(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError, match="Could not list"):
            _generator().scan(tmp_path / "missing")

    def test_file_instead_of_directory_raises_scan_error(self, tmp_path: Path) -> None:
        not_a_dir = tmp_path / "file.txt"
        not_a_dir.write_text("x")
        with pytest.raises(ScanError):
            _generator().scan(not_a_dir)

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_file_raises_read_error(self, tmp_path: Path) -> None:
        locked = tmp_path / "locked.jar"
        locked.write_bytes(b"secret")
        locked.chmod(0)
        try:
            with pytest.raises(ReadError):
                _generator().scan(tmp_path)
        finally:
            locked.chmod(0o644)


# ---------------------------------------------------------------------------
# Output document
# ---------------------------------------------------------------------------


class TestOutputDocument:
    def test_document_shape(self, build_dir: Path) -> None:
        written = _generator().run(build_dir)
        data = json.loads(written.read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["attestations"][1] == {
            "name": "foo.jar",
            "subjects": [
                {"name": "foo.jar", "digest": {"sha256": sha256_hex(b"foo jar bytes")}}
            ],
        }

    def test_empty_directory_writes_empty_collection(self, tmp_path: Path) -> None:
        written = _generator().run(tmp_path)
        assert json.loads(written.read_text(encoding="utf-8")) == {
            "version": 1,
            "attestations": [],
        }

    def test_overwrites_existing_file(self, build_dir: Path) -> None:
        (build_dir / "hash.json").write_text("stale content that is much longer " * 50)
        written = _generator().run(build_dir)
        assert json.loads(written.read_text(encoding="utf-8"))["version"] == 1

    def test_hash_json_itself_is_not_attested(self, build_dir: Path) -> None:
        _generator().run(build_dir)
        written = _generator().run(build_dir)
        names = [a["name"] for a in json.loads(written.read_text())["attestations"]]
        assert "hash.json" not in names

    def test_write_failure_raises_write_error(self, tmp_path: Path) -> None:
        target = tmp_path / "is-a-dir"
        target.mkdir()
        with pytest.raises(WriteError, match="Could not write"):
            _generator().write(AttestationCollection(), target)


# ---------------------------------------------------------------------------
# Output path resolution
# ---------------------------------------------------------------------------


class TestResolveOutputPath:
    def test_default_location(self, build_dir: Path) -> None:
        assert _generator().resolve_output_path(build_dir) == build_dir / "hash.json"

    def test_explicit_path_is_used(self, build_dir: Path, tmp_path: Path) -> None:
        explicit = tmp_path / "out.json"
        assert _generator(str(explicit)).resolve_output_path(build_dir) == explicit
        assert explicit.exists()

    def test_missing_parents_are_created(self, build_dir: Path, tmp_path: Path) -> None:
        explicit = tmp_path / "a" / "b" / "out.json"
        written = _generator(str(explicit)).run(build_dir)
        assert written == explicit
        assert json.loads(explicit.read_text())["version"] == 1

    def test_existing_explicit_file_is_reused(self, build_dir: Path, tmp_path: Path) -> None:
        explicit = tmp_path / "existing.json"
        explicit.write_text("old")
        assert _generator(str(explicit)).resolve_output_path(build_dir) == explicit

    def test_parent_collides_with_file_falls_back(
        self, build_dir: Path, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("I am a file")
        explicit = blocker / "out.json"
        resolved = _generator(str(explicit)).resolve_output_path(build_dir)
        assert resolved == build_dir / "hash.json"

    def test_parent_collision_still_writes_default(
        self, build_dir: Path, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("I am a file")
        written = _generator(str(blocker / "out.json")).run(build_dir)
        assert written == build_dir / "hash.json"
        assert written.exists()

    def test_directory_path_falls_back(self, build_dir: Path, tmp_path: Path) -> None:
        directory = tmp_path / "dir-target"
        directory.mkdir()
        resolved = _generator(str(directory)).resolve_output_path(build_dir)
        assert resolved == build_dir / "hash.json"

    def test_fallback_logs_warning(
        self, build_dir: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with caplog.at_level("WARNING", logger="slsa_attest.hashing.generator"):
            _generator(str(blocker / "out.json")).resolve_output_path(build_dir)
        assert "Could not use output file" in caplog.text
