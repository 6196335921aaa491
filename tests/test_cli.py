import json
from pathlib import Path

import pytest

from clipmark import cli
from clipmark.export import CSV_HEADERS
from clipmark.persistence import SqliteRepository


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "session.sqlite"
    repository = SqliteRepository(path, seed=False)
    goal = repository.create_category("Goal")
    ann = repository.create_player("Ann", 7)
    repository.create_tag({"timestamp": 125, "categoryId": goal.id, "description": "nice", "playerIds": [ann.id]})
    return path


def test_export_prints_csv(db_path: Path, capsys):
    cli.main(["--db", str(db_path), "export"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1].startswith('125,"2:05","Goal","nice","Ann (#7)",""')


def test_export_writes_file(db_path: Path, tmp_path: Path, capsys):
    output = tmp_path / "out.csv"
    cli.main(["--db", str(db_path), "export", "--output", str(output)])
    assert "Exported 1 tags" in capsys.readouterr().out
    assert output.read_text(encoding="utf-8").split("\n")[1].startswith("125,")


def test_export_json(db_path: Path, capsys):
    cli.main(["--db", str(db_path), "export", "--json"])
    rows = json.loads(capsys.readouterr().out)
    assert rows[0]["formattedTime"] == "2:05"
    assert rows[0]["players"] == "Ann (#7)"


def test_summary(db_path: Path, capsys):
    cli.main(["--db", str(db_path), "summary"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["totalTags"] == 1
    assert summary["players"][0]["goals"] == 1


def test_serve_hands_app_to_uvicorn(db_path: Path, monkeypatch):
    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    cli.main(["--db", str(db_path), "serve", "--port", "9001"])
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9001
    assert len(calls["app"].state.repository.list_tags()) == 1
