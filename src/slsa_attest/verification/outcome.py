"""Per-dependency verification outcomes.

Every dependency ends in exactly one of three states.  Outcomes are
collected in a :class:`VerificationReport`; nothing here raises on a
failed verification, the caller decides what a failure means.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from slsa_attest.verification.coordinates import DependencyCoordinate

REASON_NO_PROVENANCE: str = "no provenance file"
REASON_ARTIFACT_UNAVAILABLE: str = "dependency artifact unavailable"
REASON_LAUNCH_FAILED: str = "verifier could not be launched"
REASON_TIMED_OUT: str = "verifier timed out"
REASON_EXIT_STATUS: str = "verifier exited with status {returncode}"


class OutcomeStatus(str, Enum):
    """Terminal state of one dependency."""

    SKIPPED = "skipped"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass(frozen=True)
class VerificationOutcome:
    """What happened to one dependency.

    Attributes
    ----------
    coordinate:
        The dependency.
    status:
        Terminal state.
    reason:
        Why the dependency was skipped or failed.  Empty when verified.
    """

    coordinate: DependencyCoordinate
    status: OutcomeStatus
    reason: str = ""

    @classmethod
    def skipped(cls, coordinate: DependencyCoordinate, reason: str) -> VerificationOutcome:
        return cls(coordinate, OutcomeStatus.SKIPPED, reason)

    @classmethod
    def verified(cls, coordinate: DependencyCoordinate) -> VerificationOutcome:
        return cls(coordinate, OutcomeStatus.VERIFIED)

    @classmethod
    def failed(cls, coordinate: DependencyCoordinate, reason: str) -> VerificationOutcome:
        return cls(coordinate, OutcomeStatus.FAILED, reason)

    def to_dict(self) -> dict[str, str]:
        return {
            "dependency": self.coordinate.coordinate,
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass
class VerificationReport:
    """Ordered outcomes of one verifier run.

    Attributes
    ----------
    outcomes:
        One entry per processed dependency, in processing order.
    aborted:
        ``True`` when the run stopped early because the verifier could
        not be launched.  Dependencies after that point have no outcome.
    """

    outcomes: list[VerificationOutcome] = field(default_factory=list)
    aborted: bool = False

    def add(self, outcome: VerificationOutcome) -> None:
        self.outcomes.append(outcome)

    def _with_status(self, status: OutcomeStatus) -> list[VerificationOutcome]:
        return [o for o in self.outcomes if o.status is status]

    @property
    def verified(self) -> list[VerificationOutcome]:
        return self._with_status(OutcomeStatus.VERIFIED)

    @property
    def failed(self) -> list[VerificationOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> list[VerificationOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def has_failures(self) -> bool:
        """Return True if any dependency failed or the run was aborted."""
        return self.aborted or bool(self.failed)

    def to_dict(self) -> dict[str, object]:
        return {
            "aborted": self.aborted,
            "verified": len(self.verified),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


__all__ = [
    "REASON_ARTIFACT_UNAVAILABLE",
    "REASON_EXIT_STATUS",
    "REASON_LAUNCH_FAILED",
    "REASON_NO_PROVENANCE",
    "REASON_TIMED_OUT",
    "OutcomeStatus",
    "VerificationOutcome",
    "VerificationReport",
]
