"""Dictionary-backed repository for tests and throwaway sessions."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from clipmark.errors import NotFoundError
from clipmark.models import (
    Category,
    Player,
    Tag,
    merge_category,
    merge_player,
    merge_tag,
    validate_category,
    validate_player,
    validate_tag_draft,
)

from .base import Repository


class MemoryRepository(Repository):
    """Keeps every table in an insertion-ordered dict keyed by id."""

    def __init__(self, *, seed: bool = True):
        self._categories: Dict[str, Category] = {}
        self._players: Dict[str, Player] = {}
        self._tags: Dict[str, Tag] = {}
        if seed:
            self.seed_defaults()

    def list_categories(self) -> List[Category]:
        return list(self._categories.values())

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def create_category(self, name: Any) -> Category:
        category = validate_category(name, (c.name for c in self._categories.values()))
        self._categories[category.id] = category
        return category

    def update_category(self, category_id: str, partial: Mapping[str, Any]) -> Category:
        current = self._categories.get(category_id)
        if current is None:
            raise NotFoundError(f"Category {category_id} not found")
        updated = merge_category(current, partial, (c.name for c in self._categories.values()))
        self._categories[category_id] = updated
        return updated

    def delete_category(self, category_id: str) -> bool:
        return self._categories.pop(category_id, None) is not None

    def list_players(self) -> List[Player]:
        return list(self._players.values())

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def create_player(self, name: Any, number: Any) -> Player:
        player = validate_player(name, number)
        self._players[player.id] = player
        return player

    def update_player(self, player_id: str, partial: Mapping[str, Any]) -> Player:
        current = self._players.get(player_id)
        if current is None:
            raise NotFoundError(f"Player {player_id} not found")
        updated = merge_player(current, partial)
        self._players[player_id] = updated
        return updated

    def delete_player(self, player_id: str) -> bool:
        return self._players.pop(player_id, None) is not None

    def list_tags(self) -> List[Tag]:
        # sorted() is stable, so equal timestamps keep insertion order.
        return sorted(self._tags.values(), key=lambda tag: tag.timestamp)

    def get_tag(self, tag_id: str) -> Optional[Tag]:
        return self._tags.get(tag_id)

    def create_tag(self, draft: Mapping[str, Any]) -> Tag:
        tag = validate_tag_draft(draft, self._categories.keys())
        self._tags[tag.id] = tag
        return tag

    def update_tag(self, tag_id: str, partial: Mapping[str, Any]) -> Tag:
        current = self._tags.get(tag_id)
        if current is None:
            raise NotFoundError(f"Tag {tag_id} not found")
        updated = merge_tag(current, partial, self._categories.keys())
        self._tags[tag_id] = updated
        return updated

    def delete_tag(self, tag_id: str) -> bool:
        return self._tags.pop(tag_id, None) is not None
