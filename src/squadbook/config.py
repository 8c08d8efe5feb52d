"""Runtime settings read from ``SQUADBOOK_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

_API_URL_ENV = "SQUADBOOK_API_URL"
_TIMEOUT_ENV = "SQUADBOOK_TIMEOUT"
_FAVORITES_KEY_ENV = "SQUADBOOK_FAVORITES_KEY"
_STORAGE_ENV = "SQUADBOOK_STORAGE"
_DATA_DIR_ENV = "SQUADBOOK_DATA_DIR"

DEFAULT_API_URL = "https://672263622108960b9cc43af6.mockapi.io/players"
DEFAULT_TIMEOUT = 10.0
DEFAULT_FAVORITES_KEY = "favorites"
STORAGE_BACKENDS = ("sqlite", "json")


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = _env_str(name, default).lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, value, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    favorites_key: str = DEFAULT_FAVORITES_KEY
    storage: str = "sqlite"
    data_dir: Path = Path.home() / ".squadbook"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=_env_str(_API_URL_ENV, DEFAULT_API_URL).rstrip("/"),
            timeout=_env_float(_TIMEOUT_ENV, DEFAULT_TIMEOUT, clamp_min=0.1),
            favorites_key=_env_str(_FAVORITES_KEY_ENV, DEFAULT_FAVORITES_KEY),
            storage=_env_choice(_STORAGE_ENV, "sqlite", STORAGE_BACKENDS),
            data_dir=Path(_env_str(_DATA_DIR_ENV, str(Path.home() / ".squadbook"))).expanduser(),
        )

    @property
    def db_path(self) -> Path:
        return self.data_dir / "squadbook.sqlite"
