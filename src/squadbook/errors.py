"""Error kinds raised by the catalog and favorites layers.

None of these are fatal: callers report them upward and keep whatever state
they already hold.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error raised by squadbook."""


class FetchError(CatalogError):
    """Loading players from the remote catalog failed."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(CatalogError):
    """Reading or writing a stored blob failed."""


class NotFound(CatalogError):
    """No player with the requested id is available."""

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} not found")
        self.player_id = player_id
