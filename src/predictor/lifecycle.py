"""
Request lifecycle state machine and prediction result.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .errors import InvalidTransitionError


class RequestLifecycle(str, Enum):
    """Progress of one prediction request."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Lifecycle states from which a new submission may be dispatched
SUBMITTABLE_STATES = frozenset(
    {RequestLifecycle.IDLE, RequestLifecycle.SUCCEEDED, RequestLifecycle.FAILED}
)

TRANSITIONS: dict[RequestLifecycle, frozenset[RequestLifecycle]] = {
    RequestLifecycle.IDLE: frozenset({RequestLifecycle.PENDING}),
    RequestLifecycle.PENDING: frozenset(
        {RequestLifecycle.SUCCEEDED, RequestLifecycle.FAILED}
    ),
    RequestLifecycle.SUCCEEDED: frozenset(
        {RequestLifecycle.PENDING, RequestLifecycle.IDLE}
    ),
    RequestLifecycle.FAILED: frozenset(
        {RequestLifecycle.PENDING, RequestLifecycle.IDLE}
    ),
}


def check_transition(current: RequestLifecycle, target: RequestLifecycle) -> None:
    """Raise if moving from current to target is not allowed."""
    if target not in TRANSITIONS[current]:
        raise InvalidTransitionError(
            f"Cannot move from {current.value} to {target.value}"
        )


@dataclass(frozen=True)
class PredictionResult:
    """
    Outcome of a completed prediction request.

    Exactly one of win_probability or error_message is set.
    """

    team1: str
    team2: str
    win_probability: float | None = None
    error_message: str | None = None
    completed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        has_probability = self.win_probability is not None
        has_error = bool(self.error_message)
        if has_probability == has_error:
            raise ValueError(
                "PredictionResult needs exactly one of win_probability or error_message"
            )

    @classmethod
    def success(cls, team1: str, team2: str, win_probability: float) -> "PredictionResult":
        return cls(team1=team1, team2=team2, win_probability=float(win_probability))

    @classmethod
    def failure(cls, team1: str, team2: str, error_message: str) -> "PredictionResult":
        return cls(team1=team1, team2=team2, error_message=error_message)

    @property
    def is_success(self) -> bool:
        return self.win_probability is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape shown to the user."""
        if not self.is_success:
            return {"error": self.error_message}
        return {
            "team1": self.team1,
            "team2": self.team2,
            "win_probability": self.win_probability,
        }
