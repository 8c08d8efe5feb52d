"""Async client for the remote players endpoint."""

from __future__ import annotations

import logging
from typing import Any, List

import httpx
from pydantic import ValidationError

from squadbook.errors import FetchError, NotFound
from squadbook.models import Player


logger = logging.getLogger(__name__)


class CatalogClient:
    """Read-only access to the full player list.

    One GET returns every player; there is no pagination and no retry. A
    ``client`` may be injected (tests pass one built on ``httpx.MockTransport``)
    and is left open on :meth:`aclose`.
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_all(self) -> List[Player]:
        payload = await self._get_json(self.api_url)
        if not isinstance(payload, list):
            raise FetchError(f"Expected a JSON array from {self.api_url}, got {type(payload).__name__}")

        players: list[Player] = []
        seen: set[str] = set()
        for index, item in enumerate(payload):
            player = _parse_player(item, where=f"record {index}")
            if player.player_id in seen:
                raise FetchError(f"Duplicate player id {player.player_id!r} in catalog response")
            seen.add(player.player_id)
            players.append(player)
        logger.info("Fetched %s players from %s", len(players), self.api_url)
        return players

    async def fetch_one(self, player_id: str) -> Player:
        url = f"{self.api_url}/{player_id}"
        try:
            payload = await self._get_json(url)
        except FetchError as exc:
            if exc.status_code == 404:
                raise NotFound(player_id) from exc
            raise
        return _parse_player(payload, where=f"player {player_id!r}")

    async def _get_json(self, url: str) -> Any:
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        if not resp.is_success:
            raise FetchError(
                f"GET {url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}") from exc


def _parse_player(item: Any, *, where: str) -> Player:
    if not isinstance(item, dict):
        raise FetchError(f"Invalid {where}: expected an object")
    try:
        return Player.model_validate(item)
    except ValidationError as exc:
        raise FetchError(f"Invalid {where}: {exc.error_count()} validation error(s)") from exc
