"""
Selection state and its transactional update.

Every change to the form goes through update_selection(), which validates
the new value. By default the setters are independent: a team change keeps
the toss winner and a category switch keeps the venue string. With
dependent-field reset on, it also checks venue membership and clears
fields whose governing field changed underneath them:
- toss_winner is cleared when it is no longer one of the two teams
- venue is cleared when it is not in the new category's catalog
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from src.predictor.catalog import (
    TEAMS,
    VenueCategory,
    is_team,
    toss_candidates,
    venue_candidates,
)
from src.predictor.errors import SelectionError


class SelectionField(str, Enum):
    """Fields of the selection form."""

    TEAM1 = "team1"
    TEAM2 = "team2"
    TOSS_WINNER = "toss_winner"
    VENUE_CATEGORY = "venue_category"
    VENUE = "venue"


REQUIRED_FIELDS: tuple[SelectionField, ...] = (
    SelectionField.TEAM1,
    SelectionField.TEAM2,
    SelectionField.TOSS_WINNER,
    SelectionField.VENUE,
)


@dataclass(frozen=True)
class SelectionState:
    """Current form selections. Empty slots are None."""

    team1: str | None = None
    team2: str | None = None
    toss_winner: str | None = None
    venue_category: VenueCategory = VenueCategory.COUNTRIES
    venue: str | None = None

    def missing_fields(self) -> list[str]:
        """Names of required fields that are still empty."""
        return [f.value for f in REQUIRED_FIELDS if not getattr(self, f.value)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "team1": self.team1,
            "team2": self.team2,
            "toss_winner": self.toss_winner,
            "venue_category": self.venue_category.value,
            "venue": self.venue,
        }


def _normalize(value: str | None) -> str | None:
    # Empty string is the "nothing selected" option
    return value or None


def _check_team(field: SelectionField, value: str | None) -> None:
    if value is not None and not is_team(value):
        raise SelectionError(field.value, value, list(TEAMS))


def update_selection(
    state: SelectionState,
    field: SelectionField | str,
    value: Any,
    reset_dependents: bool = False,
) -> SelectionState:
    """
    Apply one field change and return the new state.

    Args:
        state: Current selection state
        field: Field being changed
        value: New value (None or "" clears the field)
        reset_dependents: Clear toss winner / venue when they become stale
            and check venue membership. Off by default; only the toss
            winner membership rule is always enforced.

    Returns:
        New SelectionState; the input state is never mutated

    Raises:
        SelectionError: If the value is not allowed for the field
    """
    field = SelectionField(field)

    if field is SelectionField.VENUE_CATEGORY:
        try:
            category = VenueCategory(value)
        except ValueError:
            raise SelectionError(
                field.value, value, [c.value for c in VenueCategory]
            ) from None
        new_state = replace(state, venue_category=category)
        if reset_dependents and new_state.venue not in venue_candidates(category):
            new_state = replace(new_state, venue=None)
        return new_state

    value = _normalize(value)

    if field in (SelectionField.TEAM1, SelectionField.TEAM2):
        _check_team(field, value)
        new_state = replace(state, **{field.value: value})
        if reset_dependents and new_state.toss_winner not in (
            new_state.team1,
            new_state.team2,
        ):
            new_state = replace(new_state, toss_winner=None)
        return new_state

    if field is SelectionField.TOSS_WINNER:
        allowed = toss_candidates(state.team1, state.team2)
        if value is not None and value not in allowed:
            raise SelectionError(field.value, value, allowed)
        return replace(state, toss_winner=value)

    # SelectionField.VENUE
    if reset_dependents and value is not None:
        allowed = venue_candidates(state.venue_category)
        if value not in allowed:
            raise SelectionError(field.value, value, allowed)
    return replace(state, venue=value)
