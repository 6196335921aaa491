"""Id-to-name indices and reference resolution for tags."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from clipmark.models import Category, Player, normalize_player_ids


def build_category_index(categories: Iterable[Category]) -> Dict[str, str]:
    return {category.id: category.name for category in categories}


def build_player_index(players: Iterable[Player]) -> Dict[str, str]:
    """Map player id to its display label, e.g. ``"Ann (#7)"``."""

    return {player.id: player.label for player in players}


def resolve_player_ids(
    player_ids: Any,
    player_index: Mapping[str, str],
    *,
    keep_unknown: bool = False,
) -> List[str]:
    """Resolve player ids to labels, preserving order.

    ``player_ids`` may use any stored encoding (list or comma separated
    string). Ids missing from the index are dropped, or returned verbatim
    when ``keep_unknown`` is set.
    """

    labels: List[str] = []
    for player_id in normalize_player_ids(player_ids):
        label = player_index.get(player_id)
        if label is not None:
            labels.append(label)
        elif keep_unknown:
            labels.append(player_id)
    return labels


def resolve_category_name(category_id: str, category_index: Mapping[str, str]) -> str:
    """Return the category name, or the raw id when the category is gone."""

    return category_index.get(category_id, category_id)


__all__ = [
    "build_category_index",
    "build_player_index",
    "resolve_player_ids",
    "resolve_category_name",
]
