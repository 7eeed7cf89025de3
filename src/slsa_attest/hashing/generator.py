"""Attestation generator — digests build outputs into ``hash.json``.

The generator runs once per build after packaging:

1. Lists the immediate entries of the build output directory.
2. Keeps the ``.pom`` and ``.jar`` files that are not ``original``
   leftovers of a repackaging step.
3. Computes a SHA-256 digest for each one.
4. Writes an :class:`AttestationCollection` to the configured path, or
   to ``<output dir>/hash.json`` when that path is unusable.

Entries are processed in file-name order so that two runs over the same
directory produce byte-identical output.

Classes
-------
- HashGenerator   Stateless generator bound to a :class:`HashConfig`.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from slsa_attest.config import HashConfig
from slsa_attest.hashing.digest import is_eligible, sha256_file
from slsa_attest.hashing.errors import ScanError, WriteError
from slsa_attest.hashing.model import AttestationCollection, AttestationRecord

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME: str = "hash.json"


class HashGenerator:
    """Produces the attestation file for a directory of build outputs.

    Parameters
    ----------
    config:
        Output location and execution gate.
    """

    def __init__(self, config: HashConfig | None = None) -> None:
        self._config = config or HashConfig()

    @property
    def config(self) -> HashConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, target_dir: Path) -> Path | None:
        """Generate the attestation file for *target_dir*.

        Parameters
        ----------
        target_dir:
            Build output directory to scan.

        Returns
        -------
        Path | None
            The file that was written, or ``None`` when the generator is
            disabled by ``run_hash_jarfile``.

        Raises
        ------
        ScanError
            If *target_dir* cannot be listed.
        ReadError
            If an eligible file cannot be read.
        WriteError
            If the output file cannot be written.
        """
        if not self._config.run_hash_jarfile:
            logger.info("Artifact hashing is skipped.")
            return None

        logger.info("Hashing build outputs in %s", target_dir)
        collection = self.scan(target_dir)
        output_path = self.resolve_output_path(target_dir)
        self.write(collection, output_path)
        logger.info(
            "Wrote %d attestation(s) to %s", len(collection.attestations), output_path
        )
        return output_path

    def scan(self, target_dir: Path) -> AttestationCollection:
        """Digest every eligible file directly under *target_dir*.

        Sub-directories are not descended into.

        Raises
        ------
        ScanError
            If *target_dir* cannot be listed.
        ReadError
            If an eligible file cannot be read.  The first unreadable
            file aborts the scan.
        """
        try:
            with os.scandir(target_dir) as listing:
                entries = sorted(listing, key=lambda entry: entry.name)
        except OSError as exc:
            raise ScanError(f"Could not list build output directory {target_dir}: {exc}") from exc

        collection = AttestationCollection()
        for entry in entries:
            if not is_eligible(entry.name):
                continue
            if not entry.is_file():
                continue
            digest = sha256_file(Path(entry.path))
            logger.debug("sha256(%s) = %s", entry.name, digest)
            collection.add(AttestationRecord.for_artifact(entry.name, digest))
        return collection

    def resolve_output_path(self, target_dir: Path) -> Path:
        """Return where the attestation file should be written.

        Uses the configured ``output_json_path`` when it can be prepared:
        missing parent directories are created and an empty file is
        created if none exists yet.  Any failure falls back to
        ``<target_dir>/hash.json``.  This method never raises.
        """
        default = Path(target_dir) / DEFAULT_OUTPUT_NAME
        configured = self._config.output_json_path
        if not configured:
            return default

        output = Path(configured)
        try:
            if output.is_dir():
                raise IsADirectoryError(f"{output} is a directory")
            if not output.exists():
                output.parent.mkdir(parents=True, exist_ok=True)
                output.touch()
            if not os.access(output, os.W_OK):
                raise PermissionError(f"{output} is not writable")
        except OSError as exc:
            logger.warning(
                "Could not use output file %s (%s); writing to %s instead.",
                output,
                exc,
                default,
            )
            return default
        return output

    def write(self, collection: AttestationCollection, path: Path) -> None:
        """Write *collection* to *path*, replacing any existing content.

        Raises
        ------
        WriteError
            If the file cannot be written.
        """
        try:
            path.write_text(collection.to_json(), encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Could not write attestation file {path}: {exc}") from exc


__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "HashGenerator",
]
