"""Tests for VerifierRunner.

The subprocess seam is exercised both through ``unittest.mock`` and through
a real interpreter: with ``sys.executable`` as the verifier path, the
``verify-artifact`` argument names a script in the working directory, so
the stand-in verifier runs without needing an executable bit.
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from slsa_attest.verification.runner import VerifierLaunchError, VerifierRunner


def _fake_verifier(directory: Path, exit_code: int, body: str = "") -> str:
    script = directory / "verify-artifact"
    script.write_text(
        "import sys\n"
        "print('args=' + ' '.join(sys.argv[1:]))\n"
        f"{body}\n"
        f"sys.exit({exit_code})\n",
        encoding="utf-8",
    )
    return sys.executable


class TestBuildCommand:
    def test_argument_vector(self) -> None:
        runner = VerifierRunner("/opt/slsa-verifier")
        assert runner.build_command(Path("w/p.slsa"), Path("w/a.jar")) == [
            "/opt/slsa-verifier",
            "verify-artifact",
            "--provenance-path",
            str(Path("w/p.slsa")),
            "--source-uri",
            "./",
            str(Path("w/a.jar")),
        ]

    def test_paths_with_spaces_stay_single_tokens(self) -> None:
        runner = VerifierRunner("verifier")
        command = runner.build_command(Path("a b/p; rm -rf"), Path("x y.jar"))
        assert str(Path("a b/p; rm -rf")) in command
        assert str(Path("x y.jar")) in command
        assert len(command) == 7


class TestRunMocked:
    def test_passes_list_without_shell(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="PASSED\n")
        with patch("slsa_attest.verification.runner.subprocess.run", return_value=completed) as run:
            result = VerifierRunner("verifier").run(Path("p"), Path("a.jar"))
        args, kwargs = run.call_args
        assert isinstance(args[0], list)
        assert "shell" not in kwargs
        assert result.passed
        assert result.output == "PASSED\n"

    def test_non_zero_exit(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="FAILED\n")
        with patch("slsa_attest.verification.runner.subprocess.run", return_value=completed):
            result = VerifierRunner("verifier").run(Path("p"), Path("a.jar"))
        assert not result.passed
        assert result.returncode == 1

    def test_permission_error_is_launch_error(self) -> None:
        with patch(
            "slsa_attest.verification.runner.subprocess.run",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(VerifierLaunchError, match="Could not launch verifier"):
                VerifierRunner("verifier").run(Path("p"), Path("a.jar"))

    def test_timeout_is_reported(self) -> None:
        timeout = subprocess.TimeoutExpired(cmd=["verifier"], timeout=5, output=b"partial\n")
        with patch("slsa_attest.verification.runner.subprocess.run", side_effect=timeout):
            result = VerifierRunner("verifier", timeout=5).run(Path("p"), Path("a.jar"))
        assert result.timed_out
        assert result.returncode is None
        assert not result.passed
        assert result.output == "partial\n"

    def test_timeout_is_passed_to_subprocess(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="")
        run = MagicMock(return_value=completed)
        with patch("slsa_attest.verification.runner.subprocess.run", run):
            VerifierRunner("verifier", timeout=12.5).run(Path("p"), Path("a.jar"))
        assert run.call_args.kwargs["timeout"] == 12.5


class TestRunProcess:
    @pytest.fixture(autouse=True)
    def _in_tmp(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

    def test_missing_executable_raises_launch_error(self, tmp_path: Path) -> None:
        with pytest.raises(VerifierLaunchError):
            VerifierRunner(tmp_path / "no-such-verifier").run(Path("p"), Path("a.jar"))

    def test_successful_process(self, tmp_path: Path) -> None:
        verifier = _fake_verifier(tmp_path, 0)
        result = VerifierRunner(verifier).run(Path("p.slsa"), Path("a.jar"))
        assert result.passed
        assert "args=--provenance-path p.slsa --source-uri ./ a.jar" in result.output

    def test_failing_process(self, tmp_path: Path) -> None:
        verifier = _fake_verifier(tmp_path, 3, body="print('FAILED: bad digest', file=sys.stderr)")
        result = VerifierRunner(verifier).run(Path("p.slsa"), Path("a.jar"))
        assert result.returncode == 3
        assert "FAILED: bad digest" in result.output

    def test_output_is_forwarded_to_log(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        verifier = _fake_verifier(tmp_path, 0, body="print('Verified signature')")
        with caplog.at_level("INFO", logger="slsa_attest.verification.runner"):
            VerifierRunner(verifier).run(Path("p.slsa"), Path("a.jar"))
        assert "[verifier] Verified signature" in caplog.text

    def test_undecodable_output_is_replaced(self, tmp_path: Path) -> None:
        verifier = _fake_verifier(
            tmp_path, 0, body="sys.stdout.flush(); sys.stdout.buffer.write(b'bad \\xff\\xfe bytes\\n')"
        )
        result = VerifierRunner(verifier).run(Path("p.slsa"), Path("a.jar"))
        assert result.passed
        assert "bad �� bytes" in result.output


class TestVerifierOutputDecoding:
    def test_bytes_from_subprocess_are_decoded_with_replacement(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=b"FAILED \xff\n")
        with patch("slsa_attest.verification.runner.subprocess.run", return_value=completed):
            result = VerifierRunner("verifier").run(Path("p"), Path("a.jar"))
        assert result.returncode == 1
        assert result.output == "FAILED �\n"
