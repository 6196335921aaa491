"""Error taxonomy raised by the tagging core."""

from __future__ import annotations


class ClipmarkError(Exception):
    """Base class for every error raised by clipmark."""


class ValidationError(ClipmarkError, ValueError):
    """Raised when input is missing or malformed. Never worth retrying."""


class DuplicateNameError(ValidationError):
    """Raised when a category name is already taken."""


class NotFoundError(ClipmarkError, KeyError):
    """Raised when an entity id, or a foreign reference on a tag, does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class StorageUnavailableError(ClipmarkError, RuntimeError):
    """Raised when the backing store cannot be reached."""


__all__ = [
    "ClipmarkError",
    "ValidationError",
    "DuplicateNameError",
    "NotFoundError",
    "StorageUnavailableError",
]
