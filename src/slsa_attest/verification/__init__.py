"""Provenance verification for a build's direct dependencies.

Submodules
----------
- ``coordinates``  DependencyCoordinate and dependency-list loading
- ``fetcher``      Fetch collaborator protocols and LocalRepositoryFetcher
- ``runner``       VerifierRunner — launches the external verifier
- ``outcome``      VerificationOutcome and VerificationReport
- ``verifier``     ProvenanceVerifier — the per-dependency pipeline
"""
from __future__ import annotations

from slsa_attest.verification.coordinates import (
    PROVENANCE_CLASSIFIER,
    PROVENANCE_TYPE,
    DependencyCoordinate,
    load_dependencies,
    parse_dependencies,
)
from slsa_attest.verification.fetcher import (
    ArtifactFetcher,
    ArtifactFetchError,
    FetchError,
    LocalRepositoryFetcher,
    ProvenanceFetcher,
    ProvenanceNotFoundError,
)
from slsa_attest.verification.outcome import (
    OutcomeStatus,
    VerificationOutcome,
    VerificationReport,
)
from slsa_attest.verification.runner import VerifierLaunchError, VerifierResult, VerifierRunner
from slsa_attest.verification.verifier import ProvenanceVerifier

__all__ = [
    # Coordinates
    "PROVENANCE_CLASSIFIER",
    "PROVENANCE_TYPE",
    "DependencyCoordinate",
    "load_dependencies",
    "parse_dependencies",
    # Fetchers
    "ArtifactFetchError",
    "ArtifactFetcher",
    "FetchError",
    "LocalRepositoryFetcher",
    "ProvenanceFetcher",
    "ProvenanceNotFoundError",
    # Runner
    "VerifierLaunchError",
    "VerifierResult",
    "VerifierRunner",
    # Outcomes
    "OutcomeStatus",
    "VerificationOutcome",
    "VerificationReport",
    # Verifier
    "ProvenanceVerifier",
]
