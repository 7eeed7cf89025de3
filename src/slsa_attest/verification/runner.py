"""Invocation of the external provenance verifier.

The verifier is launched with an explicit argument list, never through a
shell, so coordinate-derived paths are passed verbatim::

    <verifier> verify-artifact --provenance-path <provenance> --source-uri ./ <artifact>

Its combined stdout/stderr is captured as bytes, decoded as UTF-8 with
undecodable bytes replaced, and forwarded line by line to the log.  Only
the exit status is interpreted.
"""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

VERIFY_SUBCOMMAND: str = "verify-artifact"
SOURCE_URI: str = "./"


class VerifierLaunchError(Exception):
    """Raised when the verifier executable cannot be started at all."""


@dataclass(frozen=True)
class VerifierResult:
    """Result of one verifier process.

    Attributes
    ----------
    returncode:
        Process exit status, or ``None`` if it was killed on timeout.
    output:
        Combined stdout and stderr.
    timed_out:
        ``True`` if the process exceeded the configured timeout.
    """

    returncode: int | None
    output: str = ""
    timed_out: bool = False

    @property
    def passed(self) -> bool:
        return not self.timed_out and self.returncode == 0


class VerifierRunner:
    """Runs the verifier executable for one provenance/artifact pair.

    Parameters
    ----------
    verifier_path:
        Path to the verifier executable.
    timeout:
        Seconds to wait for the process.  ``None`` waits indefinitely.
    """

    def __init__(self, verifier_path: str | Path, timeout: float | None = None) -> None:
        self._verifier_path = str(verifier_path)
        self._timeout = timeout

    @property
    def verifier_path(self) -> str:
        return self._verifier_path

    def build_command(self, provenance_path: Path, artifact_path: Path) -> list[str]:
        """Return the argument vector for one verification."""
        return [
            self._verifier_path,
            VERIFY_SUBCOMMAND,
            "--provenance-path",
            str(provenance_path),
            "--source-uri",
            SOURCE_URI,
            str(artifact_path),
        ]

    def run(self, provenance_path: Path, artifact_path: Path) -> VerifierResult:
        """Run the verifier and wait for it to exit.

        Raises
        ------
        VerifierLaunchError
            If the executable is missing or cannot be executed.
        """
        command = self.build_command(provenance_path, artifact_path)
        logger.debug("Running %s", command)
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            output = _decode(exc.output)
            self._forward(output)
            logger.warning(
                "Verifier did not finish within %s seconds: %s", self._timeout, artifact_path
            )
            return VerifierResult(returncode=None, output=output, timed_out=True)
        except OSError as exc:
            raise VerifierLaunchError(
                f"Could not launch verifier {self._verifier_path!r}: {exc}"
            ) from exc

        output = _decode(completed.stdout)
        self._forward(output)
        return VerifierResult(returncode=completed.returncode, output=output)

    @staticmethod
    def _forward(output: str) -> None:
        for line in output.splitlines():
            logger.info("[verifier] %s", line)


def _decode(raw: str | bytes | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


__all__ = [
    "VerifierLaunchError",
    "VerifierResult",
    "VerifierRunner",
]
