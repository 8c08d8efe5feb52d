"""Player catalog browsing with a shared, persisted favorite set."""

from .catalog import Catalog, CatalogSession, LoadResult, Screen, create_session
from .config import Settings
from .errors import CatalogError, FetchError, NotFound, PersistenceError
from .favorites import FavoriteStore
from .models import Player
from .views import PlayerRow, ViewQuery

__all__ = [
    "Catalog",
    "CatalogError",
    "CatalogSession",
    "FavoriteStore",
    "FetchError",
    "LoadResult",
    "NotFound",
    "PersistenceError",
    "Player",
    "PlayerRow",
    "Screen",
    "Settings",
    "ViewQuery",
    "create_session",
]
