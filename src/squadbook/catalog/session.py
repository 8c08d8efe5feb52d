"""Inbound interface used by the Browse, Favorites and Captains screens."""

from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional, Union

import httpx

from squadbook.catalog.repository import Catalog
from squadbook.config import Settings
from squadbook.errors import FetchError
from squadbook.favorites import FavoriteStore
from squadbook.models import Player
from squadbook.persistence import BlobStore, JsonFileBlobStore, SqliteBlobStore
from squadbook.source import CatalogClient
from squadbook.views import ALL_TEAMS, PlayerRow, ViewQuery, derive_view, team_options


logger = logging.getLogger(__name__)


class Screen(str, enum.Enum):
    BROWSE = "browse"
    FAVORITES = "favorites"
    CAPTAINS = "captains"


_DEFAULT_QUERIES: dict[Screen, ViewQuery] = {
    Screen.BROWSE: ViewQuery(),
    Screen.FAVORITES: ViewQuery(favorites_only=True),
    Screen.CAPTAINS: ViewQuery(captains_only=True),
}


@dataclass(frozen=True)
class LoadResult:
    """Players visible after a fetch, with the fetch error if it failed."""

    players: tuple[Player, ...]
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ConfirmationPrompt:
    title: str
    message: str
    player_id: str | None = None


Confirm = Callable[[ConfirmationPrompt], Union[bool, Awaitable[bool]]]


def toggle_prompt(player_id: str, currently_favorite: bool) -> ConfirmationPrompt:
    action = "remove from" if currently_favorite else "add to"
    return ConfirmationPrompt(
        title="Confirm Action",
        message=f"Are you sure you want to {action} favorites?",
        player_id=player_id,
    )


def clear_prompt() -> ConfirmationPrompt:
    return ConfirmationPrompt(
        title="Clear Favorites",
        message="Are you sure you want to remove all players from favorites?",
    )


async def _ask(confirm: Confirm, prompt: ConfirmationPrompt) -> bool:
    answer = confirm(prompt)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)


class CatalogSession:
    """One catalog and one favorite store shared by every screen.

    Each screen keeps only an immutable :class:`ViewQuery`; rows are derived
    from the current canonical list and favorite set on every call, so a
    toggle made on one screen shows up on all of them immediately.
    """

    def __init__(self, catalog: Catalog, favorites: FavoriteStore, *, client: CatalogClient | None = None):
        self.catalog = catalog
        self.favorites = favorites
        self._client = client
        self._queries: dict[Screen, ViewQuery] = dict(_DEFAULT_QUERIES)

    async def __aenter__(self) -> "CatalogSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def open(self) -> LoadResult:
        _, result = await asyncio.gather(self.favorites.load(), self.fetch_all())
        return result

    async def fetch_all(self) -> LoadResult:
        try:
            players = await self.catalog.refresh()
        except FetchError as exc:
            return LoadResult(players=self.catalog.players, error=exc)
        return LoadResult(players=players)

    async def refresh(self) -> LoadResult:
        return await self.fetch_all()

    # Queries

    def query(self, screen: Screen = Screen.BROWSE) -> ViewQuery:
        return self._queries[Screen(screen)]

    def view(self, screen: Screen = Screen.BROWSE) -> list[PlayerRow]:
        return derive_view(self.catalog.players, self.favorites.ids, self.query(screen))

    def search(self, term: str, screen: Screen = Screen.BROWSE) -> list[PlayerRow]:
        screen = Screen(screen)
        self._queries[screen] = replace(self._queries[screen], term=term)
        return self.view(screen)

    def filter_by_team(self, team: str) -> list[PlayerRow]:
        self._queries[Screen.BROWSE] = replace(self._queries[Screen.BROWSE], team=team or ALL_TEAMS)
        return self.view(Screen.BROWSE)

    def get_browse_view(self) -> list[PlayerRow]:
        return self.view(Screen.BROWSE)

    def get_captains_view(self) -> list[PlayerRow]:
        return self.view(Screen.CAPTAINS)

    def get_favorites_view(self) -> list[PlayerRow]:
        return self.view(Screen.FAVORITES)

    def team_options(self) -> list[str]:
        return team_options(self.catalog.players)

    def get_player(self, player_id: str) -> Player:
        return self.catalog.get(player_id)

    async def fetch_player(self, player_id: str) -> Player:
        """Load a single player from the remote detail endpoint."""
        if self._client is None:
            return self.catalog.get(player_id)
        return await self._client.fetch_one(player_id)

    def is_favorite(self, player_id: str) -> bool:
        return self.favorites.contains(player_id)

    # Favorite mutations; callers obtain user confirmation first.

    async def toggle_favorite(self, player_id: str) -> frozenset[str]:
        return await self.favorites.toggle(player_id)

    async def clear_favorites(self) -> frozenset[str]:
        return await self.favorites.clear()

    async def request_toggle(self, player_id: str, confirm: Confirm) -> Optional[frozenset[str]]:
        prompt = toggle_prompt(player_id, self.favorites.contains(player_id))
        if not await _ask(confirm, prompt):
            logger.debug("Favorite toggle for %s declined", player_id)
            return None
        return await self.toggle_favorite(player_id)

    async def request_clear(self, confirm: Confirm) -> Optional[frozenset[str]]:
        if not await _ask(confirm, clear_prompt()):
            logger.debug("Clearing favorites declined")
            return None
        return await self.clear_favorites()


def build_backend(settings: Settings) -> BlobStore:
    if settings.storage == "json":
        return JsonFileBlobStore(settings.data_dir)
    return SqliteBlobStore(settings.db_path)


def create_session(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    backend: BlobStore | None = None,
) -> CatalogSession:
    settings = settings or Settings.from_env()
    client = CatalogClient(settings.api_url, timeout=settings.timeout, client=http_client)
    favorites = FavoriteStore(backend or build_backend(settings), key=settings.favorites_key)
    return CatalogSession(Catalog(client), favorites, client=client)
