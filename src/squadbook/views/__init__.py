"""View derivation engine (search, team filter, captains and favorites views)."""

from .derivation import (
    ALL_TEAMS,
    CAPTAIN_MIN_AGE,
    PlayerRow,
    ViewQuery,
    captains_view,
    derive_view,
    favorites_view,
    filter_by_team,
    is_captain_candidate,
    is_favorite,
    search,
    team_options,
    to_rows,
)

__all__ = [
    "ALL_TEAMS",
    "CAPTAIN_MIN_AGE",
    "PlayerRow",
    "ViewQuery",
    "captains_view",
    "derive_view",
    "favorites_view",
    "filter_by_team",
    "is_captain_candidate",
    "is_favorite",
    "search",
    "team_options",
    "to_rows",
]
