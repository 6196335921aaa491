"""Flatten tags into export rows and serialize them as CSV."""

from __future__ import annotations

import csv
from io import StringIO
from typing import List, Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from clipmark.lookup import (
    build_category_index,
    build_player_index,
    resolve_category_name,
    resolve_player_ids,
)
from clipmark.persistence import Repository

CSV_HEADERS: tuple[str, ...] = (
    "Timestamp (seconds)",
    "Formatted Time",
    "Category",
    "Description",
    "Players",
    "Video URL",
    "Created At",
)


class ExportRow(BaseModel):
    """Display-ready, denormalized view of a single tag."""

    timestamp: int
    formatted_time: str = Field(..., alias="formattedTime")
    category: str
    description: str
    players: str
    video_url: str = Field(default="", alias="videoUrl")
    created_at: str = Field(..., alias="createdAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def format_time(seconds: int) -> str:
    """Render whole seconds as ``M:SS``, e.g. 125 -> ``"2:05"``."""

    minutes, remainder = divmod(int(seconds), 60)
    return f"{minutes}:{remainder:02d}"


def build_export_rows(repository: Repository) -> List[ExportRow]:
    """Join every tag with its category and players, keeping storage order."""

    tags = repository.list_tags()
    category_index = build_category_index(repository.list_categories())
    player_index = build_player_index(repository.list_players())

    return [
        ExportRow(
            timestamp=tag.timestamp,
            formatted_time=format_time(tag.timestamp),
            category=resolve_category_name(tag.category_id, category_index),
            description=tag.description,
            players=", ".join(resolve_player_ids(tag.player_ids, player_index)),
            video_url=tag.video_url or "",
            created_at=tag.created_at.isoformat(),
        )
        for tag in tags
    ]


def rows_to_csv(rows: Sequence[ExportRow]) -> str:
    """Serialize rows with a plain header and every text field quoted.

    The numeric timestamp is left unquoted, embedded quotes are doubled and
    rows are separated by ``\\n`` without a trailing newline.
    """

    buffer = StringIO()
    header_writer = csv.writer(buffer, lineterminator="\n")
    header_writer.writerow(CSV_HEADERS)

    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for row in rows:
        writer.writerow([
            row.timestamp,
            row.formatted_time,
            row.category,
            row.description,
            row.players,
            row.video_url,
            row.created_at,
        ])

    text = buffer.getvalue()
    return text[:-1] if text.endswith("\n") else text


def export_csv(repository: Repository) -> str:
    return rows_to_csv(build_export_rows(repository))


__all__ = [
    "CSV_HEADERS",
    "ExportRow",
    "format_time",
    "build_export_rows",
    "rows_to_csv",
    "export_csv",
]
