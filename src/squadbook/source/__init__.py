"""Remote catalog source."""

from .client import CatalogClient

__all__ = ["CatalogClient"]
