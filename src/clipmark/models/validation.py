"""Validation predicates that turn raw input into entity models."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Collection, Dict, Iterable, Mapping
from uuid import uuid4

from clipmark.errors import DuplicateNameError, NotFoundError, ValidationError

from .entities import MAX_INTEGER, Category, Player, Tag, normalize_player_ids

# Wire (camelCase) and attribute (snake_case) spellings of mutable tag fields.
_TAG_FIELD_ALIASES: Mapping[str, str] = {
    "timestamp": "timestamp",
    "categoryId": "category_id",
    "category_id": "category_id",
    "description": "description",
    "playerIds": "player_ids",
    "player_ids": "player_ids",
    "videoUrl": "video_url",
    "video_url": "video_url",
}

_PLAYER_FIELDS = ("name", "number")


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean_name(name: Any, *, entity: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{entity} name must be a non-empty string")
    return name.strip()


def _coerce_timestamp(value: Any) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("timestamp is required")
    if isinstance(value, bool):
        raise ValidationError("timestamp must be numeric")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise ValidationError(f"timestamp must be numeric, got {text!r}") from None
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("timestamp must be a finite number")
        value = math.floor(value)
    if not isinstance(value, int):
        raise ValidationError(f"timestamp must be numeric, got {type(value).__name__}")
    if value < 0:
        raise ValidationError("timestamp must be zero or positive")
    if value > MAX_INTEGER:
        raise ValidationError(f"timestamp must not exceed {MAX_INTEGER}")
    return value


def _coerce_number(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("number must be a non-negative integer")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise ValidationError("number must be a non-negative integer")
    if value > MAX_INTEGER:
        raise ValidationError(f"number must not exceed {MAX_INTEGER}")
    return value


def _clean_category_id(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("categoryId is required")
    return value.strip()


def _clean_video_url(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("videoUrl must be a string")
    return value.strip() or None


def validate_category(
    name: Any,
    existing_names: Iterable[str] = (),
    *,
    category_id: str | None = None,
) -> Category:
    """Build a category, rejecting blank names and exact duplicates."""

    cleaned = _clean_name(name, entity="category")
    if cleaned in set(existing_names):
        raise DuplicateNameError(f"Category '{cleaned}' already exists")
    return Category(id=category_id or new_id(), name=cleaned)


def validate_player(name: Any, number: Any, *, player_id: str | None = None) -> Player:
    cleaned = _clean_name(name, entity="player")
    return Player(id=player_id or new_id(), name=cleaned, number=_coerce_number(number))


def validate_tag(
    timestamp: Any,
    category_id: Any,
    description: Any,
    player_ids: Any = None,
    video_url: Any = None,
    existing_category_ids: Collection[str] = (),
    *,
    tag_id: str | None = None,
    created_at: datetime | None = None,
) -> Tag:
    """Validate raw tag fields against the current set of category ids.

    Raises ``ValidationError`` for missing or malformed input and
    ``NotFoundError`` when ``category_id`` does not reference a known category.
    A new id and creation time are assigned unless supplied.
    """

    seconds = _coerce_timestamp(timestamp)
    category = _clean_category_id(category_id)
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description must be a non-empty string")
    if category not in existing_category_ids:
        raise NotFoundError(f"Category {category} not found")
    return Tag(
        id=tag_id or new_id(),
        timestamp=seconds,
        category_id=category,
        description=description.strip(),
        player_ids=normalize_player_ids(player_ids),
        video_url=_clean_video_url(video_url),
        created_at=created_at or utcnow(),
    )


def tag_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a request body or partial onto snake_case tag fields.

    ``id`` and ``createdAt`` are not mutable and unknown keys are dropped.
    """

    if not isinstance(data, Mapping):
        raise ValidationError("tag payload must be an object")
    fields: Dict[str, Any] = {}
    for key, value in data.items():
        target = _TAG_FIELD_ALIASES.get(key)
        if target is not None:
            fields[target] = value
    return fields


def player_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError("player payload must be an object")
    return {key: data[key] for key in _PLAYER_FIELDS if key in data}


def validate_tag_draft(draft: Mapping[str, Any], existing_category_ids: Collection[str]) -> Tag:
    fields = tag_fields(draft)
    return validate_tag(
        fields.get("timestamp"),
        fields.get("category_id"),
        fields.get("description"),
        fields.get("player_ids"),
        fields.get("video_url"),
        existing_category_ids,
    )


def merge_tag(current: Tag, partial: Mapping[str, Any], existing_category_ids: Collection[str]) -> Tag:
    """Apply a partial update to ``current`` and re-validate the result.

    The stored category is accepted as-is when the partial leaves it alone or
    repeats it, even if it has since been deleted.
    """

    changes = tag_fields(partial)
    known = set(existing_category_ids)
    if changes.get("category_id", current.category_id) == current.category_id:
        known.add(current.category_id)
    merged = {
        "timestamp": current.timestamp,
        "category_id": current.category_id,
        "description": current.description,
        "player_ids": list(current.player_ids),
        "video_url": current.video_url,
    }
    merged.update(changes)
    return validate_tag(
        merged["timestamp"],
        merged["category_id"],
        merged["description"],
        merged["player_ids"],
        merged["video_url"],
        known,
        tag_id=current.id,
        created_at=current.created_at,
    )


def merge_player(current: Player, partial: Mapping[str, Any]) -> Player:
    changes = player_fields(partial)
    return validate_player(
        changes.get("name", current.name),
        changes.get("number", current.number),
        player_id=current.id,
    )


def merge_category(current: Category, partial: Mapping[str, Any], existing_names: Iterable[str]) -> Category:
    if not isinstance(partial, Mapping):
        raise ValidationError("category payload must be an object")
    others = [name for name in existing_names if name != current.name]
    return validate_category(partial.get("name", current.name), others, category_id=current.id)
