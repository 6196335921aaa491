"""Timestamped tagging of sports video: storage, lookup and export."""

from clipmark.errors import (
    ClipmarkError,
    DuplicateNameError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

__all__ = [
    "ClipmarkError",
    "DuplicateNameError",
    "NotFoundError",
    "StorageUnavailableError",
    "ValidationError",
]
