"""Persisted favorite set shared by every screen."""

from .store import FavoriteStore, FavoritesListener, decode_ids, encode_ids

__all__ = ["FavoriteStore", "FavoritesListener", "decode_ids", "encode_ids"]
