"""
Display derivation.

Pure functions from controller state to what the view shows. Nothing here
mutates state or talks to the service.
"""

from dataclasses import dataclass, field
from typing import Any

from .catalog import team_candidates, toss_candidates, venue_candidates
from .lifecycle import SUBMITTABLE_STATES, PredictionResult, RequestLifecycle
from .selection import SelectionState

SUBMIT_LABEL = "Predict Match Outcome"
PENDING_LABEL = "Predicting..."


def predicted_winner(win_probability: float, team1: str, team2: str) -> str:
    """Team1 wins only above 50%; exactly 50% goes to team2."""
    return team1 if win_probability > 50 else team2


def progress_fill(win_probability: float) -> float:
    """Progress bar fill width in percent."""
    return float(win_probability)


def format_probability(win_probability: float) -> str:
    return f"{win_probability:.2f}%"


@dataclass(frozen=True)
class ResultView:
    """Rendered result panel: either an error or a winner with progress bar."""

    error: str | None = None
    winner: str | None = None
    fill_width: float | None = None
    label: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        if self.is_error:
            return {"error": self.error}
        return {
            "winner": self.winner,
            "fill_width": self.fill_width,
            "label": self.label,
        }


@dataclass(frozen=True)
class FormView:
    """Options and affordances offered by the form."""

    team1_options: list[str] = field(default_factory=list)
    team2_options: list[str] = field(default_factory=list)
    toss_options: list[str] = field(default_factory=list)
    venue_options: list[str] = field(default_factory=list)
    submit_label: str = SUBMIT_LABEL
    submit_enabled: bool = True

    @property
    def show_toss(self) -> bool:
        return bool(self.toss_options)


def render_result(result: PredictionResult | None) -> ResultView | None:
    """Single render path for the result panel; None while there is no result."""
    if result is None:
        return None
    if not result.is_success:
        return ResultView(error=result.error_message)

    probability = result.win_probability
    return ResultView(
        winner=predicted_winner(probability, result.team1, result.team2),
        fill_width=progress_fill(probability),
        label=format_probability(probability),
    )


def render_form(selection: SelectionState, lifecycle: RequestLifecycle) -> FormView:
    """Derive selectable options and the submit button from state."""
    pending = lifecycle is RequestLifecycle.PENDING
    return FormView(
        # Both selectors share one catalog; each hides the other's pick
        team1_options=team_candidates(exclude=selection.team2),
        team2_options=team_candidates(exclude=selection.team1),
        toss_options=toss_candidates(selection.team1, selection.team2),
        venue_options=venue_candidates(selection.venue_category),
        submit_label=PENDING_LABEL if pending else SUBMIT_LABEL,
        submit_enabled=lifecycle in SUBMITTABLE_STATES,
    )
