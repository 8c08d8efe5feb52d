"""Pure view derivation over the canonical player list.

Nothing here holds state: every function takes the canonical list (and the
favorite ids where relevant) and returns a new list, so re-running a
derivation with the same inputs always gives the same rows.
"""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass
from typing import Iterable, Sequence

from squadbook.models import Player


ALL_TEAMS = "All"
CAPTAIN_MIN_AGE = 34


@dataclass(frozen=True)
class PlayerRow:
    """A player as a screen renders it, with its favorite icon state."""

    player: Player
    is_favorite: bool

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass(frozen=True)
class ViewQuery:
    """Parameters for one screen's view.

    Filters compose in a fixed order: team, favorites-only, captains rule,
    then the name search on whatever is left.
    """

    term: str = ""
    team: str = ALL_TEAMS
    favorites_only: bool = False
    captains_only: bool = False


def search(players: Iterable[Player], term: str) -> list[Player]:
    needle = term.lower()
    if not needle:
        return list(players)
    return [player for player in players if needle in player.name.lower()]


def filter_by_team(players: Iterable[Player], team: str) -> list[Player]:
    if not team or team == ALL_TEAMS:
        return list(players)
    return [player for player in players if player.team == team]


def is_captain_candidate(player: Player) -> bool:
    return player.is_captain and player.age > CAPTAIN_MIN_AGE


def captains_view(players: Iterable[Player]) -> list[Player]:
    """Captains older than 34, fewest minutes played first."""
    return sorted(
        (player for player in players if is_captain_candidate(player)),
        key=lambda player: player.minutes_played,
    )


def favorites_view(players: Iterable[Player], favorite_ids: Container[str]) -> list[Player]:
    # Ids without a matching player simply produce no row.
    return [player for player in players if player.player_id in favorite_ids]


def is_favorite(player: Player | str, favorite_ids: Container[str]) -> bool:
    player_id = player.player_id if isinstance(player, Player) else player
    return player_id in favorite_ids


def team_options(players: Iterable[Player]) -> list[str]:
    teams = sorted({player.team for player in players if player.team})
    return [ALL_TEAMS, *teams]


def to_rows(players: Iterable[Player], favorite_ids: Container[str]) -> list[PlayerRow]:
    return [PlayerRow(player=player, is_favorite=player.player_id in favorite_ids) for player in players]


def derive_view(
    players: Sequence[Player],
    favorite_ids: Container[str],
    query: ViewQuery = ViewQuery(),
) -> list[PlayerRow]:
    selected: list[Player] = filter_by_team(players, query.team)
    if query.favorites_only:
        selected = favorites_view(selected, favorite_ids)
    if query.captains_only:
        selected = captains_view(selected)
    selected = search(selected, query.term)
    return to_rows(selected, favorite_ids)
