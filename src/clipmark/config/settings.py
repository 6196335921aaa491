"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

logger = logging.getLogger(__name__)

StorageKind = Literal["sqlite", "memory"]

_STORAGE_ENV = "CLIPMARK_STORAGE"
_DB_PATH_ENV = "CLIPMARK_DB_PATH"
_SEED_ENV = "CLIPMARK_SEED_DEFAULTS"

_STORAGE_CHOICES = ("sqlite", "memory")
_STORAGE_DEFAULT: StorageKind = "sqlite"
_DB_PATH_DEFAULT = "clipmark.sqlite"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    storage: StorageKind = _STORAGE_DEFAULT
    db_path: Path = Path(_DB_PATH_DEFAULT)
    seed_defaults: bool = True


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean for %s: %s; using default %s", name, raw, default)
    return default


def _env_storage(name: str, default: StorageKind) -> StorageKind:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in _STORAGE_CHOICES:
        logger.warning("Unknown storage backend for %s: %s; using %s", name, raw, default)
        return default
    return cast(StorageKind, value)


def load_settings() -> Settings:
    """Read settings from ``CLIPMARK_*`` environment variables."""

    return Settings(
        storage=_env_storage(_STORAGE_ENV, _STORAGE_DEFAULT),
        db_path=Path(os.getenv(_DB_PATH_ENV) or _DB_PATH_DEFAULT),
        seed_defaults=_env_bool(_SEED_ENV, True),
    )
