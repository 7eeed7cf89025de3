"""SHA-256 digests for build outputs.

Only two kinds of build output are attested: ``.pom`` descriptors and
``.jar`` archives.  Repackaging plugins leave the pre-shading archive
behind with an ``original`` marker (``foo.jar.original`` or
``foo-original.jar``); those are never attested.
"""
from __future__ import annotations

import hashlib
from pathlib import Path

from slsa_attest.hashing.errors import ReadError

ELIGIBLE_SUFFIXES: tuple[str, ...] = (".pom", ".jar")
EXCLUDED_SUFFIX: str = "original"

_CHUNK_SIZE = 1024 * 1024


def is_eligible(name: str) -> bool:
    """Return True if a file called *name* should be attested."""
    if name.endswith(EXCLUDED_SUFFIX):
        return False
    if not name.endswith(ELIGIBLE_SUFFIXES):
        return False
    return not Path(name).stem.endswith(EXCLUDED_SUFFIX)


def sha256_hex(data: bytes) -> str:
    """Return the lowercase hex SHA-256 of *data*.

    The result is always 64 characters: leading zero nibbles are kept so
    that the string round-trips through ``int(value, 16)`` to the same
    integer as the raw digest bytes.
    """
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Path) -> str:
    """Digest the full byte content of *path*.

    Raises
    ------
    ReadError
        If the file cannot be opened or read.
    """
    digest = hashlib.sha256()
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise ReadError(f"Could not read {path}: {exc}") from exc
    return digest.hexdigest()
