"""Storage backends behind the ``Repository`` contract."""

from __future__ import annotations

import logging

from clipmark.config import Settings

from .base import Repository
from .memory import MemoryRepository
from .sqlite import SqliteRepository

logger = logging.getLogger(__name__)


def create_repository(settings: Settings) -> Repository:
    """Build the backend selected by ``settings.storage``."""

    if settings.storage == "memory":
        logger.info("Using in-memory tag store")
        return MemoryRepository(seed=settings.seed_defaults)
    logger.info("Using SQLite tag store at %s", settings.db_path)
    return SqliteRepository(settings.db_path, seed=settings.seed_defaults)


__all__ = [
    "Repository",
    "MemoryRepository",
    "SqliteRepository",
    "create_repository",
]
