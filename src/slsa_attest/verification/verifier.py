"""Dependency provenance verifier.

For every direct dependency of a build:

1. Fetch ``<artifactId>-<version>-jar.intoto.build.slsa`` into the work
   directory.  A dependency without one is skipped; most dependencies do
   not publish provenance yet.
2. Fetch the dependency jar into the same directory.  Skipped if that
   fails.
3. Run the external verifier on the pair and record whether it passed.

Verification is advisory: failures are logged and recorded, and the run
moves on to the next dependency.  The one exception is a verifier that
cannot be launched at all, which stops the whole run.

Classes
-------
- ProvenanceVerifier   Drives the fetch collaborators and the verifier.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from slsa_attest.config import VerifierConfig
from slsa_attest.verification.coordinates import (
    PROVENANCE_CLASSIFIER,
    PROVENANCE_TYPE,
    DependencyCoordinate,
)
from slsa_attest.verification.fetcher import (
    ArtifactFetcher,
    FetchError,
    ProvenanceFetcher,
    ProvenanceNotFoundError,
)
from slsa_attest.verification.outcome import (
    REASON_ARTIFACT_UNAVAILABLE,
    REASON_EXIT_STATUS,
    REASON_LAUNCH_FAILED,
    REASON_NO_PROVENANCE,
    REASON_TIMED_OUT,
    OutcomeStatus,
    VerificationOutcome,
    VerificationReport,
)
from slsa_attest.verification.runner import VerifierLaunchError, VerifierRunner

logger = logging.getLogger(__name__)


class ProvenanceVerifier:
    """Verifies the provenance of a build's direct dependencies.

    Parameters
    ----------
    provenance_fetcher:
        Collaborator that retrieves provenance files.
    artifact_fetcher:
        Collaborator that retrieves dependency jars.
    runner:
        Launches the external verifier.
    work_dir:
        Directory receiving downloaded files.  Created if missing and
        shared by all dependencies of a run.
    """

    def __init__(
        self,
        provenance_fetcher: ProvenanceFetcher,
        artifact_fetcher: ArtifactFetcher,
        runner: VerifierRunner,
        work_dir: Path,
    ) -> None:
        self._provenance_fetcher = provenance_fetcher
        self._artifact_fetcher = artifact_fetcher
        self._runner = runner
        self._work_dir = Path(work_dir)

    @classmethod
    def from_config(
        cls,
        config: VerifierConfig,
        fetcher: ProvenanceFetcher | ArtifactFetcher,
    ) -> ProvenanceVerifier:
        """Build a verifier whose fetch collaborators are one object."""
        return cls(
            provenance_fetcher=fetcher,
            artifact_fetcher=fetcher,
            runner=VerifierRunner(config.verifier_path, timeout=config.timeout),
            work_dir=config.work_dir,
        )

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def verify(self, dependencies: Iterable[DependencyCoordinate]) -> VerificationReport:
        """Verify every dependency in order and return the outcomes.

        Never raises for a dependency that is skipped or fails.  If the
        verifier cannot be launched the report is marked ``aborted`` and
        the remaining dependencies are not processed.
        """
        report = VerificationReport()
        self._work_dir.mkdir(parents=True, exist_ok=True)

        for coordinate in dependencies:
            try:
                outcome = self.verify_one(coordinate)
            except VerifierLaunchError as exc:
                logger.error("%s", exc)
                logger.info("Skipping provenance verification: failed to run the verifier.")
                report.add(VerificationOutcome.failed(coordinate, REASON_LAUNCH_FAILED))
                report.aborted = True
                break
            _log_outcome(outcome)
            report.add(outcome)

        logger.info(
            "Provenance verification finished: %d verified, %d failed, %d skipped%s.",
            len(report.verified),
            len(report.failed),
            len(report.skipped),
            " (aborted)" if report.aborted else "",
        )
        return report

    def verify_one(self, coordinate: DependencyCoordinate) -> VerificationOutcome:
        """Fetch and verify a single dependency.

        Raises
        ------
        VerifierLaunchError
            If the verifier executable cannot be started.
        """
        try:
            provenance_path = self._provenance_fetcher.fetch_provenance(
                coordinate, PROVENANCE_CLASSIFIER, PROVENANCE_TYPE, self._work_dir
            )
        except ProvenanceNotFoundError:
            return VerificationOutcome.skipped(coordinate, REASON_NO_PROVENANCE)
        except FetchError as exc:
            logger.debug("Provenance fetch failed for %s: %s", coordinate, exc)
            return VerificationOutcome.skipped(coordinate, REASON_NO_PROVENANCE)

        try:
            artifact_path = self._artifact_fetcher.fetch_artifact(
                coordinate.coordinate, self._work_dir
            )
        except FetchError as exc:
            logger.debug("Artifact fetch failed for %s: %s", coordinate, exc)
            return VerificationOutcome.skipped(coordinate, REASON_ARTIFACT_UNAVAILABLE)

        result = self._runner.run(provenance_path, artifact_path)
        if result.passed:
            return VerificationOutcome.verified(coordinate)
        if result.timed_out:
            return VerificationOutcome.failed(coordinate, REASON_TIMED_OUT)
        return VerificationOutcome.failed(
            coordinate, REASON_EXIT_STATUS.format(returncode=result.returncode)
        )


def _log_outcome(outcome: VerificationOutcome) -> None:
    if outcome.status is OutcomeStatus.VERIFIED:
        logger.info("Provenance verified for %s.", outcome.coordinate)
    elif outcome.status is OutcomeStatus.SKIPPED:
        logger.info(
            "Skipping provenance verification for %s: %s.", outcome.coordinate, outcome.reason
        )
    else:
        logger.warning(
            "Provenance verification failed for %s: %s.", outcome.coordinate, outcome.reason
        )


__all__ = ["ProvenanceVerifier"]
