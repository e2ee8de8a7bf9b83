import json
import logging
import os
import sys
from pathlib import Path
from typing import Tuple
from PySide6.QtCore import QStandardPaths

from .paginate import DEFAULT_LYRICS_FONT_SIZE_INDEX, LYRICS_FONT_SIZES_PX

log = logging.getLogger(__name__)

APP_NAME = "LyricDeck"
CONFIG_FILE_NAME = "lyricdeck_config.json"
DB_FILE_NAME = "songs.sqlite3"

def _app_base_dir() -> Path:
    """
    Returns the directory that should be treated as the 'portable root'.

    Priority:
    1) If running as an AppImage, use the directory containing the AppImage.
    2) If frozen (PyInstaller), use the directory containing the executable.
    3) Otherwise (dev mode), use the project root (directory containing lyricdeck.py).
    """
    appimage_path = os.environ.get("APPIMAGE")
    if appimage_path:
        return Path(appimage_path).resolve().parent

    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    return Path(__file__).resolve().parents[1]

def resolve_db_path(config_db_path: str | None = None) -> Path:
    """
    Resolve the songs database path.

    Order:
    1) Config value (relative paths resolve from the portable root).
    2) songs.sqlite3 next to the app.
    3) songs.sqlite3 in the per-user data dir (may not exist yet).
    """
    base = _app_base_dir()

    if config_db_path:
        p = Path(config_db_path).expanduser()
        if not p.is_absolute():
            p = (base / p).resolve()
        return p

    portable = base / DB_FILE_NAME
    if portable.exists():
        return portable

    user_root = Path(QStandardPaths.writableLocation(QStandardPaths.AppDataLocation))
    return user_root / DB_FILE_NAME

def get_user_config_dir() -> Path:
    home = Path.home()
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or str(home / "AppData" / "Roaming")
        return Path(base) / APP_NAME
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return home / ".config" / APP_NAME

def default_config() -> dict:
    return {
        "database": {
            "path": "",          # empty: songs.sqlite3 next to the app, then per-user
            "source_skid": 1
        },
        "startup": {
            "song_number": 294
        },
        "font": {
            "family": "DejaVu Sans",
            "sizes_px": list(LYRICS_FONT_SIZES_PX),
            "default_size_index": DEFAULT_LYRICS_FONT_SIZE_INDEX,
            "line_height": 1.35
        },
        "colors": {
            "background": "#FFFFFF",
            "text": "#374151",
            "header": "#111827",
            "indicator": "#6B7280",
            "muted": "#6B7280",
            "error": "#DC2626",
            "chorus_marker": "#EAB308",
            "verse_end": "#D1D5DB",
            "language_divider": "#E5E7EB",
            "end_of_song": "#EF4444"
        },
        "ui": {
            "padding_x": 32,
            "padding_y": 24,
            "scroll_step_px": 56,
            "fullscreen": True
        }
    }

def merge_defaults(d: dict, u: dict) -> dict:
    out = dict(d)
    for k, v in (u or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_defaults(out[k], v)
        else:
            out[k] = v
    return out

def font_sizes(cfg: dict) -> list[int]:
    sizes = (cfg.get("font", {}) or {}).get("sizes_px") or LYRICS_FONT_SIZES_PX
    try:
        return [int(s) for s in sizes] or list(LYRICS_FONT_SIZES_PX)
    except (TypeError, ValueError):
        return list(LYRICS_FONT_SIZES_PX)

def load_or_create_config(base_dir: Path) -> Tuple[Path, dict]:
    local_path = base_dir / CONFIG_FILE_NAME
    user_path = get_user_config_dir() / CONFIG_FILE_NAME

    for p in (local_path, user_path):
        if p.exists():
            try:
                cfg = json.loads(p.read_text(encoding="utf-8"))
                return p, merge_defaults(default_config(), cfg)
            except (OSError, ValueError) as e:
                log.warning("[config] unreadable %s, using defaults: %s", p, e)
                return p, default_config()

    cfg = default_config()
    try:
        local_path.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
        return local_path, cfg
    except OSError:
        user_path.parent.mkdir(parents=True, exist_ok=True)
        user_path.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
        return user_path, cfg
