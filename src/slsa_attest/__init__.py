"""slsa-attest — build output attestation and dependency provenance checks.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import slsa_attest
>>> slsa_attest.__version__
'0.1.0'

Hashing
-------
>>> from pathlib import Path
>>> from slsa_attest import HashConfig, HashGenerator
>>> generator = HashGenerator(HashConfig(run_hash_jarfile=True))
>>> generator.run(Path("target"))  # doctest: +SKIP
PosixPath('target/hash.json')

Verification
------------
>>> from slsa_attest import DependencyCoordinate, LocalRepositoryFetcher, ProvenanceVerifier
>>> DependencyCoordinate.parse("org.example:lib:1.0").provenance_file_name
'lib-1.0-jar.intoto.build.slsa'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from slsa_attest.config import (
    HashConfig,
    PluginConfig,
    VerifierConfig,
    load_config,
)

# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------
from slsa_attest.hashing.errors import HashingError, ReadError, ScanError, WriteError
from slsa_attest.hashing.generator import HashGenerator
from slsa_attest.hashing.integrity import IntegrityResult, IntegrityStatus, check_collection
from slsa_attest.hashing.model import (
    AttestationCollection,
    AttestationRecord,
    Subject,
    load_collection,
)

# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------
from slsa_attest.verification.coordinates import DependencyCoordinate, load_dependencies
from slsa_attest.verification.fetcher import (
    ArtifactFetchError,
    LocalRepositoryFetcher,
    ProvenanceNotFoundError,
)
from slsa_attest.verification.outcome import (
    OutcomeStatus,
    VerificationOutcome,
    VerificationReport,
)
from slsa_attest.verification.runner import VerifierLaunchError, VerifierRunner
from slsa_attest.verification.verifier import ProvenanceVerifier

__all__ = [
    # Version
    "__version__",
    # Configuration
    "HashConfig",
    "PluginConfig",
    "VerifierConfig",
    "load_config",
    # Hashing
    "AttestationCollection",
    "AttestationRecord",
    "HashGenerator",
    "HashingError",
    "IntegrityResult",
    "IntegrityStatus",
    "ReadError",
    "ScanError",
    "Subject",
    "WriteError",
    "check_collection",
    "load_collection",
    # Verification
    "ArtifactFetchError",
    "DependencyCoordinate",
    "LocalRepositoryFetcher",
    "OutcomeStatus",
    "ProvenanceNotFoundError",
    "ProvenanceVerifier",
    "VerificationOutcome",
    "VerificationReport",
    "VerifierLaunchError",
    "VerifierRunner",
    "load_dependencies",
]
