import json

import pytest

pytest.importorskip("PySide6")

from lyricdeck import config  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))


def test_defaults():
    cfg = config.default_config()
    assert cfg["startup"]["song_number"] == 294
    assert cfg["ui"]["scroll_step_px"] == 56
    assert len(cfg["font"]["sizes_px"]) == 8


def test_merge_keeps_overrides():
    merged = config.merge_defaults(config.default_config(), {"colors": {"text": "#000000"}, "extra": 1})
    assert merged["colors"]["text"] == "#000000"
    assert merged["colors"]["chorus_marker"] == "#EAB308"
    assert merged["extra"] == 1


def test_creates_config_next_to_app(tmp_path):
    base = tmp_path / "app"
    base.mkdir()
    path, cfg = config.load_or_create_config(base)
    assert path == base / config.CONFIG_FILE_NAME
    assert json.loads(path.read_text(encoding="utf-8")) == cfg


def test_reads_existing_config(tmp_path):
    base = tmp_path / "app"
    base.mkdir()
    (base / config.CONFIG_FILE_NAME).write_text(json.dumps({"startup": {"song_number": 12}}), encoding="utf-8")
    _, cfg = config.load_or_create_config(base)
    assert cfg["startup"]["song_number"] == 12
    assert cfg["database"]["source_skid"] == 1


def test_broken_config_falls_back_to_defaults(tmp_path):
    base = tmp_path / "app"
    base.mkdir()
    (base / config.CONFIG_FILE_NAME).write_text("{not json", encoding="utf-8")
    _, cfg = config.load_or_create_config(base)
    assert cfg == config.default_config()


def test_font_sizes():
    assert config.font_sizes({"font": {"sizes_px": ["20", 30]}}) == [20, 30]
    assert config.font_sizes({"font": {"sizes_px": ["big"]}}) == config.LYRICS_FONT_SIZES_PX
    assert config.font_sizes({}) == config.LYRICS_FONT_SIZES_PX


def test_relative_db_path_resolves_from_app_root(monkeypatch, tmp_path):
    monkeypatch.setenv("APPIMAGE", str(tmp_path / "LyricDeck.AppImage"))
    assert config.resolve_db_path("data/songs.sqlite3") == (tmp_path / "data" / "songs.sqlite3").resolve()
