from pathlib import Path

from clipmark.config import DEFAULT_CATEGORIES, DEFAULT_PLAYERS, load_settings


def test_defaults_without_environment(monkeypatch):
    for name in ("CLIPMARK_STORAGE", "CLIPMARK_DB_PATH", "CLIPMARK_SEED_DEFAULTS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.storage == "sqlite"
    assert settings.db_path == Path("clipmark.sqlite")
    assert settings.seed_defaults is True


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPMARK_STORAGE", "Memory")
    monkeypatch.setenv("CLIPMARK_DB_PATH", str(tmp_path / "tags.sqlite"))
    monkeypatch.setenv("CLIPMARK_SEED_DEFAULTS", "no")
    settings = load_settings()
    assert settings.storage == "memory"
    assert settings.db_path == tmp_path / "tags.sqlite"
    assert settings.seed_defaults is False


def test_invalid_values_fall_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("CLIPMARK_STORAGE", "postgres")
    monkeypatch.setenv("CLIPMARK_SEED_DEFAULTS", "maybe")
    with caplog.at_level("WARNING", logger="clipmark.config.settings"):
        settings = load_settings()
    assert settings.storage == "sqlite"
    assert settings.seed_defaults is True
    assert "CLIPMARK_STORAGE" in caplog.text
    assert "CLIPMARK_SEED_DEFAULTS" in caplog.text


def test_default_seed_data():
    assert DEFAULT_CATEGORIES == ("Offensive Play", "Defensive Play", "Turnover", "Goal", "Penalty")
    assert len(DEFAULT_PLAYERS) == 6
    assert len({player.number for player in DEFAULT_PLAYERS}) == 6
