"""SQLite-backed durable repository."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional

from clipmark.errors import DuplicateNameError, NotFoundError, StorageUnavailableError
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

logger = logging.getLogger(__name__)


class SqliteRepository(Repository):
    """Durable store with one ``categories``, ``players`` and ``tags`` table.

    Every call opens its own connection and runs in a single transaction.
    Foreign keys are declared but not enforced, so a referenced category can
    still be deleted.
    """

    def __init__(self, db_path: Path | str, *, seed: bool = True):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()
        if seed:
            self.seed_defaults()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._connect()
        except (sqlite3.DatabaseError, OSError) as exc:
            raise StorageUnavailableError(f"Cannot open database {self.db_path}: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.IntegrityError:
            raise
        except sqlite3.DatabaseError as exc:
            raise StorageUnavailableError(f"Database {self.db_path} unavailable: {exc}") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            self._create_schema(conn)
        logger.debug("Schema ready in %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                number INTEGER NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tags (
                id TEXT PRIMARY KEY,
                timestamp INTEGER NOT NULL,
                category_id TEXT NOT NULL REFERENCES categories(id),
                description TEXT NOT NULL,
                player_ids TEXT NOT NULL DEFAULT '[]',
                video_url TEXT,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS ix_tags_timestamp ON tags (timestamp)")

    # Categories

    def list_categories(self) -> List[Category]:
        with self._connection() as conn:
            rows = conn.execute("SELECT id, name FROM categories ORDER BY rowid").fetchall()
        return [self._row_to_category(row) for row in rows]

    def get_category(self, category_id: str) -> Optional[Category]:
        with self._connection() as conn:
            row = conn.execute("SELECT id, name FROM categories WHERE id = ?", (category_id,)).fetchone()
        return self._row_to_category(row) if row is not None else None

    def create_category(self, name: Any) -> Category:
        with self._connection() as conn:
            category = validate_category(name, self._category_names(conn))
            try:
                conn.execute(
                    "INSERT INTO categories (id, name) VALUES (?, ?)",
                    (category.id, category.name),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateNameError(f"Category '{category.name}' already exists") from exc
        return category

    def update_category(self, category_id: str, partial: Mapping[str, Any]) -> Category:
        with self._connection() as conn:
            row = conn.execute("SELECT id, name FROM categories WHERE id = ?", (category_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Category {category_id} not found")
            updated = merge_category(self._row_to_category(row), partial, self._category_names(conn))
            try:
                conn.execute("UPDATE categories SET name = ? WHERE id = ?", (updated.name, category_id))
            except sqlite3.IntegrityError as exc:
                raise DuplicateNameError(f"Category '{updated.name}' already exists") from exc
        return updated

    def delete_category(self, category_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        return cursor.rowcount > 0

    # Players

    def list_players(self) -> List[Player]:
        with self._connection() as conn:
            rows = conn.execute("SELECT id, name, number FROM players ORDER BY rowid").fetchall()
        return [self._row_to_player(row) for row in rows]

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._connection() as conn:
            row = conn.execute("SELECT id, name, number FROM players WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def create_player(self, name: Any, number: Any) -> Player:
        player = validate_player(name, number)
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO players (id, name, number) VALUES (?, ?, ?)",
                (player.id, player.name, player.number),
            )
        return player

    def update_player(self, player_id: str, partial: Mapping[str, Any]) -> Player:
        with self._connection() as conn:
            row = conn.execute("SELECT id, name, number FROM players WHERE id = ?", (player_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Player {player_id} not found")
            updated = merge_player(self._row_to_player(row), partial)
            conn.execute(
                "UPDATE players SET name = ?, number = ? WHERE id = ?",
                (updated.name, updated.number, player_id),
            )
        return updated

    def delete_player(self, player_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
        return cursor.rowcount > 0

    # Tags

    def list_tags(self) -> List[Tag]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM tags ORDER BY timestamp ASC, rowid ASC").fetchall()
        return [self._row_to_tag(row) for row in rows]

    def get_tag(self, tag_id: str) -> Optional[Tag]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
        return self._row_to_tag(row) if row is not None else None

    def create_tag(self, draft: Mapping[str, Any]) -> Tag:
        with self._connection() as conn:
            tag = validate_tag_draft(draft, self._category_ids(conn))
            conn.execute(
                """
                INSERT INTO tags (
                    id, timestamp, category_id, description, player_ids, video_url, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                self._tag_params(tag),
            )
        return tag

    def update_tag(self, tag_id: str, partial: Mapping[str, Any]) -> Tag:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Tag {tag_id} not found")
            updated = merge_tag(self._row_to_tag(row), partial, self._category_ids(conn))
            conn.execute(
                """
                UPDATE tags
                SET timestamp = ?, category_id = ?, description = ?,
                    player_ids = ?, video_url = ?
                WHERE id = ?
                """,
                (
                    updated.timestamp,
                    updated.category_id,
                    updated.description,
                    json.dumps(updated.player_ids),
                    updated.video_url,
                    tag_id,
                ),
            )
        return updated

    def delete_tag(self, tag_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
        return cursor.rowcount > 0

    # Row helpers

    def _category_names(self, conn: sqlite3.Connection) -> List[str]:
        return [row["name"] for row in conn.execute("SELECT name FROM categories")]

    def _category_ids(self, conn: sqlite3.Connection) -> set[str]:
        return {row["id"] for row in conn.execute("SELECT id FROM categories")}

    def _tag_params(self, tag: Tag) -> tuple:
        return (
            tag.id,
            tag.timestamp,
            tag.category_id,
            tag.description,
            json.dumps(tag.player_ids),
            tag.video_url,
            tag.created_at.isoformat(),
        )

    def _row_to_category(self, row: sqlite3.Row) -> Category:
        return Category(id=row["id"], name=row["name"])

    def _row_to_player(self, row: sqlite3.Row) -> Player:
        return Player(id=row["id"], name=row["name"], number=row["number"])

    def _row_to_tag(self, row: sqlite3.Row) -> Tag:
        def _parse_ts(value: str) -> datetime:
            parsed = datetime.fromisoformat(value)
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

        # player_ids may hold a JSON array or a legacy delimited string;
        # the Tag model decodes either.
        return Tag(
            id=row["id"],
            timestamp=row["timestamp"],
            category_id=row["category_id"],
            description=row["description"],
            player_ids=row["player_ids"],
            video_url=row["video_url"],
            created_at=_parse_ts(row["created_at"]),
        )
