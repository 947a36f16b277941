"""
Static team and venue catalogs.

The catalogs are configuration, not user data. Candidate helpers return
fresh lists in catalog order so callers can render them directly.
"""

from enum import Enum


class VenueCategory(str, Enum):
    """Kinds of venue the user can pick from."""

    COUNTRIES = "Countries"
    CITIES = "Cities"


TEAMS: tuple[str, ...] = (
    "India",
    "Australia",
    "England",
    "Pakistan",
    "New Zealand",
)

VENUES: dict[VenueCategory, tuple[str, ...]] = {
    VenueCategory.COUNTRIES: TEAMS,
    VenueCategory.CITIES: (
        "Mumbai",
        "Sydney",
        "London",
        "Lahore",
        "Auckland",
    ),
}


def is_team(value: str | None) -> bool:
    """Check if a value is a catalog team."""
    return value in TEAMS


def team_candidates(exclude: str | None = None) -> list[str]:
    """Teams offerable for a slot, minus the team already chosen for the other slot."""
    return [team for team in TEAMS if team != exclude]


def toss_candidates(team1: str | None, team2: str | None) -> list[str]:
    """Toss winner options; empty until both teams are chosen."""
    if not team1 or not team2:
        return []
    return [team1, team2]


def venue_candidates(category: VenueCategory | str) -> list[str]:
    """Venues belonging to a category."""
    return list(VENUES[VenueCategory(category)])
