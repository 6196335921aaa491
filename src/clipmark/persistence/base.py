"""Repository contract shared by every storage backend."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from clipmark.config.defaults import iter_default_categories, iter_default_players
from clipmark.models import Category, Player, Tag

logger = logging.getLogger(__name__)


class Repository(ABC):
    """CRUD operations over categories, players and tags.

    Implementations must behave identically for the same sequence of calls:
    ``list_tags`` is ordered by timestamp with ties in insertion order,
    ``create_tag`` validates and assigns ``id``/``created_at``, and deletes
    never cascade or check for referencing tags.
    """

    # Categories

    @abstractmethod
    def list_categories(self) -> List[Category]:
        ...

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    @abstractmethod
    def create_category(self, name: Any) -> Category:
        ...

    @abstractmethod
    def update_category(self, category_id: str, partial: Mapping[str, Any]) -> Category:
        ...

    @abstractmethod
    def delete_category(self, category_id: str) -> bool:
        ...

    # Players

    @abstractmethod
    def list_players(self) -> List[Player]:
        ...

    @abstractmethod
    def get_player(self, player_id: str) -> Optional[Player]:
        ...

    @abstractmethod
    def create_player(self, name: Any, number: Any) -> Player:
        ...

    @abstractmethod
    def update_player(self, player_id: str, partial: Mapping[str, Any]) -> Player:
        ...

    @abstractmethod
    def delete_player(self, player_id: str) -> bool:
        ...

    # Tags

    @abstractmethod
    def list_tags(self) -> List[Tag]:
        ...

    @abstractmethod
    def get_tag(self, tag_id: str) -> Optional[Tag]:
        ...

    @abstractmethod
    def create_tag(self, draft: Mapping[str, Any]) -> Tag:
        ...

    @abstractmethod
    def update_tag(self, tag_id: str, partial: Mapping[str, Any]) -> Tag:
        ...

    @abstractmethod
    def delete_tag(self, tag_id: str) -> bool:
        ...

    def seed_defaults(self) -> None:
        """Insert the default categories and roster into empty tables."""

        if not self.list_categories():
            names = list(iter_default_categories())
            for name in names:
                self.create_category(name)
            logger.info("Seeded %s default categories", len(names))
        if not self.list_players():
            players = list(iter_default_players())
            for player in players:
                self.create_player(player.name, player.number)
            logger.info("Seeded %s default players", len(players))
