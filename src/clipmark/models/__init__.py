"""Entity models and validation rules."""

from .entities import MAX_INTEGER, Category, Player, Tag, normalize_player_ids
from .validation import (
    merge_category,
    merge_player,
    merge_tag,
    validate_category,
    validate_player,
    validate_tag,
    validate_tag_draft,
)

__all__ = [
    "MAX_INTEGER",
    "Category",
    "Player",
    "Tag",
    "normalize_player_ids",
    "validate_category",
    "validate_player",
    "validate_tag",
    "validate_tag_draft",
    "merge_category",
    "merge_player",
    "merge_tag",
]
