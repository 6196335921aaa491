"""Configuration helpers: runtime settings and default seed data."""

from .defaults import DEFAULT_CATEGORIES, DEFAULT_PLAYERS, DefaultPlayer
from .settings import Settings, load_settings

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_PLAYERS",
    "DefaultPlayer",
    "Settings",
    "load_settings",
]
