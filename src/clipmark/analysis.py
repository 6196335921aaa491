"""Simple tag counts per category and per player."""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from clipmark.config.defaults import GOAL_CATEGORY, TURNOVER_CATEGORY
from clipmark.models import Category, Player, Tag
from clipmark.persistence import Repository

_ALL = "all"


class CategoryCount(BaseModel):
    category_id: str = Field(..., alias="categoryId")
    name: str
    count: int

    model_config = ConfigDict(populate_by_name=True)


class PlayerSummary(BaseModel):
    player_id: str = Field(..., alias="playerId")
    label: str
    total_tags: int = Field(..., alias="totalTags")
    goals: int
    turnovers: int
    timestamps: List[int]

    model_config = ConfigDict(populate_by_name=True)


class AnalysisSummary(BaseModel):
    total_tags: int = Field(..., alias="totalTags")
    categories: List[CategoryCount]
    players: List[PlayerSummary]

    model_config = ConfigDict(populate_by_name=True)


def filter_tags_by_category(tags: Sequence[Tag], category_id: Optional[str]) -> List[Tag]:
    """Keep tags in ``category_id``; ``None`` or ``"all"`` keeps everything."""

    if not category_id or category_id == _ALL:
        return list(tags)
    return [tag for tag in tags if tag.category_id == category_id]


def count_tags_by_category(tags: Sequence[Tag], categories: Sequence[Category]) -> List[CategoryCount]:
    counts: dict[str, int] = {}
    for tag in tags:
        counts[tag.category_id] = counts.get(tag.category_id, 0) + 1
    return [
        CategoryCount(category_id=category.id, name=category.name, count=counts.get(category.id, 0))
        for category in categories
    ]


def summarize_players(
    tags: Sequence[Tag],
    categories: Sequence[Category],
    players: Sequence[Player],
) -> List[PlayerSummary]:
    """Per-player involvement, busiest first; players without tags are omitted."""

    goal_ids = {category.id for category in categories if category.name == GOAL_CATEGORY}
    turnover_ids = {category.id for category in categories if category.name == TURNOVER_CATEGORY}

    summaries: List[PlayerSummary] = []
    for player in players:
        involved = [tag for tag in tags if player.id in tag.player_ids]
        if not involved:
            continue
        summaries.append(
            PlayerSummary(
                player_id=player.id,
                label=player.label,
                total_tags=len(involved),
                goals=sum(1 for tag in involved if tag.category_id in goal_ids),
                turnovers=sum(1 for tag in involved if tag.category_id in turnover_ids),
                timestamps=sorted(tag.timestamp for tag in involved),
            )
        )
    summaries.sort(key=lambda item: -item.total_tags)
    return summaries


def build_summary(repository: Repository) -> AnalysisSummary:
    tags = repository.list_tags()
    categories = repository.list_categories()
    players = repository.list_players()
    return AnalysisSummary(
        total_tags=len(tags),
        categories=count_tags_by_category(tags, categories),
        players=summarize_players(tags, categories, players),
    )


__all__ = [
    "AnalysisSummary",
    "CategoryCount",
    "PlayerSummary",
    "build_summary",
    "count_tags_by_category",
    "filter_tags_by_category",
    "summarize_players",
]
