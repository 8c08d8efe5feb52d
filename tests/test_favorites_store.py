import asyncio
import json
import logging

import pytest

from squadbook.errors import PersistenceError
from squadbook.favorites import FavoriteStore, decode_ids
from squadbook.persistence import JsonFileBlobStore

from tests.helpers import BrokenBlobStore, MemoryBlobStore, ReadOnlyBlobStore


async def test_load_missing_blob_is_empty():
    store = FavoriteStore(MemoryBlobStore())

    assert await store.load() == frozenset()
    assert store.loaded
    assert store.last_error is None


async def test_toggle_adds_then_removes():
    backend = MemoryBlobStore()
    store = FavoriteStore(backend)

    assert await store.toggle("1") == frozenset({"1"})
    assert json.loads(backend.blobs["favorites"]) == ["1"]
    assert await store.toggle("1") == frozenset()
    assert json.loads(backend.blobs["favorites"]) == []


async def test_toggle_pair_restores_membership():
    store = FavoriteStore(MemoryBlobStore({"favorites": json.dumps(["9"])}))

    before = store.contains("9")
    await store.toggle("9")
    await store.toggle("9")
    assert store.contains("9") == before


async def test_first_mutation_loads_persisted_ids():
    backend = MemoryBlobStore({"favorites": json.dumps(["1", "2"])})
    store = FavoriteStore(backend)

    assert await store.toggle("3") == frozenset({"1", "2", "3"})
    assert json.loads(backend.blobs["favorites"]) == ["1", "2", "3"]


async def test_concurrent_toggles_do_not_lose_updates():
    backend = MemoryBlobStore()
    store = FavoriteStore(backend)

    await asyncio.gather(*(store.toggle(str(n)) for n in range(10)))

    assert store.ids == frozenset(str(n) for n in range(10))
    assert sorted(json.loads(backend.blobs["favorites"]), key=int) == [str(n) for n in range(10)]


async def test_back_to_back_toggles_apply_in_order():
    backend = MemoryBlobStore()
    store = FavoriteStore(backend)

    await asyncio.gather(store.toggle("1"), store.toggle("1"))

    assert store.ids == frozenset()
    assert [json.loads(blob) for blob in backend.writes] == [["1"], []]


async def test_add_remove_are_noops_when_already_applied():
    backend = MemoryBlobStore()
    store = FavoriteStore(backend)

    await store.add("1")
    await store.add("1")
    await store.remove("2")
    assert store.ordered_ids == ("1",)
    assert len(backend.writes) == 1


async def test_clear_empties_and_persists():
    backend = MemoryBlobStore({"favorites": json.dumps(["1", "2"])})
    store = FavoriteStore(backend)
    await store.load()

    assert await store.clear() == frozenset()
    assert backend.blobs["favorites"] == "[]"
    assert await store.load() == frozenset()


async def test_write_failure_keeps_attempted_state(caplog):
    store = FavoriteStore(BrokenBlobStore())

    with caplog.at_level(logging.WARNING, logger="squadbook.favorites.store"):
        result = await store.toggle("1")

    assert result == frozenset({"1"})
    assert store.contains("1")
    assert isinstance(store.last_error, PersistenceError)
    assert "Failed to save favorites" in caplog.text


async def test_unsaved_toggle_survives_reload():
    store = FavoriteStore(ReadOnlyBlobStore({"favorites": "[]"}))

    assert await store.toggle("1") == frozenset({"1"})
    assert await store.load() == frozenset({"1"})
    assert store.contains("1")
    assert isinstance(store.last_error, PersistenceError)


async def test_reload_retries_unsaved_write():
    backend = ReadOnlyBlobStore({"favorites": json.dumps(["7"])}, failures=1)
    store = FavoriteStore(backend)

    await store.toggle("1")
    assert json.loads(backend.blobs["favorites"]) == ["7"]

    assert await store.load() == frozenset({"7", "1"})
    assert json.loads(backend.blobs["favorites"]) == ["7", "1"]
    assert store.last_error is None

    backend.blobs["favorites"] = json.dumps(["7"])
    assert await store.load() == frozenset({"7"})


async def test_corrupt_blob_is_reported_and_treated_as_empty(caplog):
    store = FavoriteStore(MemoryBlobStore({"favorites": "{not json"}))

    with caplog.at_level(logging.WARNING, logger="squadbook.favorites.store"):
        assert await store.load() == frozenset()

    assert isinstance(store.last_error, PersistenceError)
    assert "Failed to load favorites" in caplog.text


async def test_listeners_see_every_mutation():
    store = FavoriteStore(MemoryBlobStore())
    seen: list[frozenset[str]] = []
    unsubscribe = store.subscribe(seen.append)

    await store.toggle("1")
    await store.toggle("2")
    unsubscribe()
    await store.toggle("3")

    assert seen == [frozenset(), frozenset({"1"}), frozenset({"1", "2"})]


async def test_failing_listener_does_not_undo_mutation():
    store = FavoriteStore(MemoryBlobStore())

    def explode(_ids):
        raise RuntimeError("render failed")

    store.subscribe(explode)
    assert await store.toggle("1") == frozenset({"1"})


async def test_favorites_survive_restart(tmp_path):
    first = FavoriteStore(JsonFileBlobStore(tmp_path))
    await first.toggle("1")
    await first.toggle("2")

    second = FavoriteStore(JsonFileBlobStore(tmp_path))
    assert await second.load() == frozenset({"1", "2"})
    assert second.ordered_ids == ("1", "2")


def test_decode_ids_drops_duplicates_and_non_strings():
    assert decode_ids(json.dumps(["1", "1", 2, None, True, "3"])) == ("1", "2", "3")


def test_decode_ids_rejects_non_array():
    with pytest.raises(PersistenceError):
        decode_ids(json.dumps({"ids": ["1"]}))
