"""Holder of the canonical player list."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, Sequence

from squadbook.errors import FetchError, NotFound
from squadbook.models import Player


logger = logging.getLogger(__name__)

CatalogListener = Callable[[tuple[Player, ...]], None]


class PlayerSource(Protocol):
    async def fetch_all(self) -> Sequence[Player]: ...


class Catalog:
    """Canonical list since the last successful fetch.

    A refresh either replaces the whole list in one assignment or leaves it
    alone. Overlapping refreshes are not cancelled: whichever completes last
    wins, even if it was issued first.
    """

    def __init__(self, source: PlayerSource):
        self._source = source
        self._players: tuple[Player, ...] = ()
        self._index: dict[str, Player] = {}
        self._issued = 0
        self._applied_ticket = 0
        self._listeners: List[CatalogListener] = []
        self.version = 0
        self.last_error: Optional[FetchError] = None

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    @property
    def loaded(self) -> bool:
        return self.version > 0

    def get(self, player_id: str) -> Player:
        try:
            return self._index[player_id]
        except KeyError:
            raise NotFound(player_id) from None

    def subscribe(self, listener: CatalogListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh(self) -> tuple[Player, ...]:
        self._issued += 1
        ticket = self._issued
        try:
            fetched = await self._source.fetch_all()
        except FetchError as exc:
            self.last_error = exc
            logger.warning(
                "Catalog refresh #%s failed; keeping %s cached players: %s",
                ticket,
                len(self._players),
                exc,
            )
            raise

        players = tuple(fetched)
        if ticket < self._applied_ticket:
            logger.debug(
                "Catalog refresh #%s completed after #%s; replacing the newer list",
                ticket,
                self._applied_ticket,
            )
        self._players = players
        self._index = {player.player_id: player for player in players}
        self._applied_ticket = ticket
        self.version += 1
        self.last_error = None
        logger.info("Catalog refresh #%s applied %s players", ticket, len(players))
        self._notify()
        return players

    def _notify(self) -> None:
        snapshot = self._players
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Catalog listener %r failed", listener)
