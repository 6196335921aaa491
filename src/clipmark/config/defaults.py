"""Default categories and roster seeded into an empty store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class DefaultPlayer:
    name: str
    number: int


DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Offensive Play",
    "Defensive Play",
    "Turnover",
    "Goal",
    "Penalty",
)

DEFAULT_PLAYERS: Tuple[DefaultPlayer, ...] = (
    DefaultPlayer(name="Sarah Johnson", number=7),
    DefaultPlayer(name="Mike Chen", number=23),
    DefaultPlayer(name="Alex Rivera", number=12),
    DefaultPlayer(name="Taylor Kim", number=5),
    DefaultPlayer(name="Jordan Smith", number=18),
    DefaultPlayer(name="Casey Williams", number=9),
)

# Category names the analysis summary breaks out per player.
GOAL_CATEGORY = "Goal"
TURNOVER_CATEGORY = "Turnover"


def iter_default_categories() -> Iterable[str]:
    return iter(DEFAULT_CATEGORIES)


def iter_default_players() -> Iterable[DefaultPlayer]:
    return iter(DEFAULT_PLAYERS)
