"""Single owner of the persisted favorite id set.

Every screen reads and mutates favorites through one :class:`FavoriteStore`.
Mutations are serialized by an ``asyncio.Lock`` so that read-modify-persist
is one step: two toggles issued back to back apply in order and neither works
from a stale copy of the set.

The blob write is the commit point. The in-memory copy is only replaced after
the write returns; if the write fails the attempted state is still adopted
for the rest of the session and the failure is logged and kept on
:attr:`FavoriteStore.last_error`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Callable, Iterable, List, Optional

from squadbook.errors import PersistenceError
from squadbook.persistence import BlobStore


logger = logging.getLogger(__name__)

FavoritesListener = Callable[[frozenset[str]], None]


def encode_ids(ids: Iterable[str]) -> str:
    return json.dumps(list(ids))


def decode_ids(raw: str) -> tuple[str, ...]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Favorites blob is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceError("Favorites blob must be a JSON array")
    ids: dict[str, None] = {}
    for item in data:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            logger.warning("Ignoring non-string favorite id %r", item)
            continue
        ids[str(item)] = None
    return tuple(ids)


class FavoriteStore:
    def __init__(self, backend: BlobStore, *, key: str = "favorites"):
        self._backend = backend
        self.key = key
        self._ids: tuple[str, ...] = ()
        self._loaded = False
        self._dirty = False
        self._lock = asyncio.Lock()
        self._listeners: List[FavoritesListener] = []
        self.last_error: Optional[PersistenceError] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    @property
    def ordered_ids(self) -> tuple[str, ...]:
        """Favorite ids in the order they were added."""
        return self._ids

    def contains(self, player_id: str) -> bool:
        return player_id in self._ids

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def subscribe(self, listener: FavoritesListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> frozenset[str]:
        """Read the persisted set; a missing blob is an empty set."""
        async with self._lock:
            await self._load_locked()
            return self.ids

    async def toggle(self, player_id: str) -> frozenset[str]:
        async with self._lock:
            await self._ensure_loaded()
            if player_id in self._ids:
                updated = tuple(fav for fav in self._ids if fav != player_id)
            else:
                updated = self._ids + (player_id,)
            return await self._commit(updated)

    async def add(self, player_id: str) -> frozenset[str]:
        async with self._lock:
            await self._ensure_loaded()
            if player_id in self._ids:
                return self.ids
            return await self._commit(self._ids + (player_id,))

    async def remove(self, player_id: str) -> frozenset[str]:
        async with self._lock:
            await self._ensure_loaded()
            if player_id not in self._ids:
                return self.ids
            return await self._commit(tuple(fav for fav in self._ids if fav != player_id))

    async def clear(self) -> frozenset[str]:
        async with self._lock:
            # The whole set is overwritten, so no prior read is needed.
            self._loaded = True
            return await self._commit(())

    async def _ensure_loaded(self) -> None:
        if not self._loaded:
            await self._load_locked()

    async def _load_locked(self) -> None:
        if self._dirty:
            # Unsaved ids stay authoritative until a write succeeds.
            await self._write(self._ids)
            self._notify()
            return
        try:
            raw = await asyncio.to_thread(self._backend.read, self.key)
            ids = decode_ids(raw) if raw is not None else ()
        except PersistenceError as exc:
            self.last_error = exc
            logger.warning("Failed to load favorites; keeping %s in-memory ids: %s", len(self._ids), exc)
        else:
            self._ids = ids
            self.last_error = None
        self._loaded = True
        self._notify()

    async def _write(self, ids: tuple[str, ...]) -> None:
        try:
            await asyncio.to_thread(self._backend.write, self.key, encode_ids(ids))
        except PersistenceError as exc:
            self.last_error = exc
            self._dirty = True
            logger.warning("Failed to save favorites; change kept for this session only: %s", exc)
        else:
            self.last_error = None
            self._dirty = False

    async def _commit(self, updated: tuple[str, ...]) -> frozenset[str]:
        await self._write(updated)
        self._ids = updated
        self._notify()
        return self.ids

    def _notify(self) -> None:
        snapshot = self.ids
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Favorites listener %r failed", listener)
