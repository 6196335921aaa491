"""Canonical category, player and tag models shared by storage, lookup and export."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, List

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from clipmark.errors import ValidationError

# Largest value an SQLite INTEGER column holds.
MAX_INTEGER = 2**63 - 1


def _clean_id(item: Any) -> str | None:
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return str(item)
    if isinstance(item, str):
        return item.strip().strip('"').strip() or None
    return None


def _decode_text(text: str) -> List[str]:
    text = text.strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            # Not JSON after all; treat it as a delimited list with brackets.
            text = text.strip("[]")
        else:
            if isinstance(decoded, list):
                return normalize_player_ids(decoded)
            text = text.strip("[]")
    elif text.startswith("{") and text.endswith("}"):
        # Postgres text[] literal, e.g. {p1,p2}
        text = text[1:-1]
    ids = (_clean_id(part) for part in text.split(","))
    return [value for value in ids if value]


def normalize_player_ids(value: Any) -> List[str]:
    """Decode any stored or submitted ``playerIds`` encoding to an ordered id list.

    Accepted shapes are a list/tuple of ids, a comma separated string
    (``"p1, p2"``), a JSON array string and a Postgres array literal
    (``"{p1,p2}"``). Blank and non-scalar entries are dropped; order and
    duplicates are preserved.
    """

    if value is None:
        return []
    if isinstance(value, str):
        return _decode_text(value)
    if isinstance(value, (list, tuple)):
        ids = (_clean_id(item) for item in value)
        return [item for item in ids if item]
    raise ValidationError(
        f"playerIds must be a list or a comma-separated string, got {type(value).__name__}"
    )


class Category(BaseModel):
    """Named classification for tags, e.g. ``Goal``."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    """Roster entry."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    number: int = Field(..., ge=0, le=MAX_INTEGER)

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return f"{self.name} (#{self.number})"


class Tag(BaseModel):
    """Timestamped annotation on the source video.

    ``player_ids`` is normalized on construction, so rows read back from any
    historical encoding come out as a plain list.
    """

    id: str = Field(..., min_length=1)
    timestamp: int = Field(..., ge=0, le=MAX_INTEGER)
    category_id: str = Field(..., alias="categoryId")
    description: str = Field(..., min_length=1)
    player_ids: List[str] = Field(default_factory=list, alias="playerIds")
    video_url: str | None = Field(default=None, alias="videoUrl")
    created_at: datetime = Field(
        ...,
        alias="createdAt",
        validation_alias=AliasChoices("createdAt", "created_at", "createAt"),
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("player_ids", mode="before")
    @classmethod
    def _decode_player_ids(cls, value: Any) -> List[str]:
        return normalize_player_ids(value)
