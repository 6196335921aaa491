from datetime import datetime

import pytest

from clipmark.export import (
    CSV_HEADERS,
    ExportRow,
    build_export_rows,
    export_csv,
    format_time,
    rows_to_csv,
)
from clipmark.persistence import MemoryRepository


@pytest.fixture
def repository() -> MemoryRepository:
    return MemoryRepository(seed=False)


def _row(**overrides) -> ExportRow:
    fields = {
        "timestamp": 125,
        "formatted_time": "2:05",
        "category": "Goal",
        "description": "nice",
        "players": "Ann (#7)",
        "video_url": "",
        "created_at": "2024-05-01T12:00:00+00:00",
    }
    fields.update(overrides)
    return ExportRow(**fields)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (5, "0:05"), (59, "0:59"), (60, "1:00"), (125, "2:05"), (3600, "60:00")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_build_export_rows_example_scenario(repository: MemoryRepository):
    goal = repository.create_category("Goal")
    ann = repository.create_player("Ann", 7)
    tag = repository.create_tag(
        {"timestamp": 125, "categoryId": goal.id, "description": "nice", "playerIds": [ann.id]}
    )

    rows = build_export_rows(repository)

    assert len(rows) == 1
    row = rows[0]
    assert row.timestamp == 125
    assert row.formatted_time == "2:05"
    assert row.category == "Goal"
    assert row.description == "nice"
    assert row.players == "Ann (#7)"
    assert row.video_url == ""
    assert row.created_at == tag.created_at.isoformat()
    assert datetime.fromisoformat(row.created_at) == tag.created_at


def test_build_export_rows_follows_tag_order_and_fallbacks(repository: MemoryRepository):
    goal = repository.create_category("Goal")
    turnover = repository.create_category("Turnover")
    ann = repository.create_player("Ann", 7)
    bo = repository.create_player("Bo", 10)
    repository.create_tag({"timestamp": 90, "categoryId": turnover.id, "description": "lost it"})
    repository.create_tag(
        {
            "timestamp": 30,
            "categoryId": goal.id,
            "description": "team goal",
            "playerIds": f"{bo.id},{ann.id}",
            "videoUrl": "https://example.test/a.mp4",
        }
    )
    repository.delete_category(turnover.id)
    repository.delete_player(ann.id)

    rows = build_export_rows(repository)

    assert [row.timestamp for row in rows] == [30, 90]
    assert rows[0].players == "Bo (#10)"
    assert rows[0].video_url == "https://example.test/a.mp4"
    assert rows[1].category == turnover.id
    assert rows[1].players == ""


def test_rows_to_csv_layout():
    text = rows_to_csv([_row(), _row(timestamp=130, formatted_time="2:10", players="")])
    lines = text.split("\n")

    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '125,"2:05","Goal","nice","Ann (#7)","","2024-05-01T12:00:00+00:00"'
    assert lines[2] == '130,"2:10","Goal","nice","","","2024-05-01T12:00:00+00:00"'
    assert len(lines) == 3
    assert not text.endswith("\n")


def test_rows_to_csv_doubles_embedded_quotes():
    plain = rows_to_csv([_row()]).split("\n")[1]
    quoted = rows_to_csv([_row(description='He said "go"')]).split("\n")[1]

    assert '"He said ""go"""' in quoted
    assert quoted.replace('"He said ""go"""', '"nice"') == plain


def test_rows_to_csv_header_only_for_empty_export():
    assert rows_to_csv([]) == ",".join(CSV_HEADERS)


def test_export_csv_composes_pipeline(repository: MemoryRepository):
    goal = repository.create_category("Goal")
    repository.create_tag({"timestamp": 61, "categoryId": goal.id, "description": "far post"})
    lines = export_csv(repository).split("\n")
    assert lines[1].startswith('61,"1:01","Goal","far post",""')


def test_export_row_serializes_with_wire_names():
    dumped = _row().model_dump(by_alias=True)
    assert list(dumped) == [
        "timestamp",
        "formattedTime",
        "category",
        "description",
        "players",
        "videoUrl",
        "createdAt",
    ]
