"""Shared builders for the squadbook tests."""

from __future__ import annotations

from typing import Optional

from squadbook.errors import PersistenceError


class MemoryBlobStore:
    def __init__(self, blobs: Optional[dict[str, str]] = None):
        self.blobs = dict(blobs or {})
        self.writes: list[str] = []

    def read(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def write(self, key: str, value: str) -> None:
        self.blobs[key] = value
        self.writes.append(value)


class BrokenBlobStore:
    def read(self, key: str) -> Optional[str]:
        raise PersistenceError("disk unavailable")

    def write(self, key: str, value: str) -> None:
        raise PersistenceError("disk unavailable")


def player_payload(player_id: str, name: str, team: str, **overrides) -> dict:
    payload = {
        "id": player_id,
        "playerName": name,
        "teamName": team,
        "isCaptain": False,
        "image": f"https://img.example/{player_id}.png",
        "position": "Midfielder",
        "age": 28,
        "minutesPlayed": 1000,
        "passingAccuracy": 80.5,
    }
    payload.update(overrides)
    return payload


def sample_payload() -> list[dict]:
    return [
        player_payload("1", "Kevin De Bruyne", "Manchester City", isCaptain=True, age=36, minutesPlayed=900),
        player_payload("2", "Virgil van Dijk", "Liverpool", isCaptain=True, age=30, minutesPlayed=100),
        player_payload("3", "Thiago Silva", "Chelsea", isCaptain=True, age=40, minutesPlayed=200),
        player_payload("4", "Bukayo Saka", "Arsenal", age=23, minutesPlayed=2500),
        player_payload("5", "Mohamed Salah", "Liverpool", age=32, minutesPlayed=2700),
    ]


class ReadOnlyBlobStore(MemoryBlobStore):
    """Reads succeed; the first ``failures`` writes raise."""

    def __init__(self, blobs: Optional[dict[str, str]] = None, *, failures: int = -1):
        super().__init__(blobs)
        self.failures = failures

    def write(self, key: str, value: str) -> None:
        if self.failures != 0:
            self.failures -= 1
            raise PersistenceError("read-only storage")
        super().write(key, value)
