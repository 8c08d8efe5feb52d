"""Canonical catalog and the session facade the screens talk to."""

from .repository import Catalog, CatalogListener, PlayerSource
from .session import (
    CatalogSession,
    Confirm,
    ConfirmationPrompt,
    LoadResult,
    Screen,
    build_backend,
    clear_prompt,
    create_session,
    toggle_prompt,
)

__all__ = [
    "Catalog",
    "CatalogListener",
    "CatalogSession",
    "Confirm",
    "ConfirmationPrompt",
    "LoadResult",
    "PlayerSource",
    "Screen",
    "build_backend",
    "clear_prompt",
    "create_session",
    "toggle_prompt",
]
