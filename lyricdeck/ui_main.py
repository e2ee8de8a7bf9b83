import logging
import sqlite3
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QEvent, QTimer
from PySide6.QtGui import QAction, QWindow
from PySide6.QtWidgets import QApplication, QMainWindow, QTextBrowser

from .chorus_view import EffectiveLyricsView, chorus_only_lines, chorus_only_page_count, get_effective_lyrics_view
from .config import font_sizes, load_or_create_config, resolve_db_path
from .keyboard import (
    SCROLL_STEP,
    KeyboardCallbacks,
    KeyboardMachine,
    KeyDown,
    KeyEventHub,
    KeySnapshot,
    KeyUp,
)
from .paginate import build_display_pages, clamp_font_size_index, decorate_page
from .render import CHORUS_START_ANCHOR, render_message_html, render_page_html
from .song import Song
from .song_number import clamp_page
from .songdb import load_song
from .ui_input import KeyHandle, ctrl_held, qt_key_name
from .verses import current_verse_for_page, total_verses

log = logging.getLogger(__name__)

NO_SONG_MESSAGE = "no song found for this number."


class ViewerScrollSurface:
    """Vertical scroll offset of a QTextBrowser; the scroll bar clamps."""

    def __init__(self, viewer: QTextBrowser):
        self.viewer = viewer

    @property
    def scroll_offset(self) -> int:
        return self.viewer.verticalScrollBar().value()

    @scroll_offset.setter
    def scroll_offset(self, value: int) -> None:
        self.viewer.verticalScrollBar().setValue(int(value))


class LyricDeckWindow(QMainWindow):
    def __init__(self, base_dir: Path):
        super().__init__()
        self.base_dir = base_dir

        self.config_path, self.cfg = load_or_create_config(base_dir)
        db_cfg = self.cfg.get("database", {}) or {}
        self.db_path = resolve_db_path(db_cfg.get("path"))
        self.source_skid = int(db_cfg.get("source_skid", 1))
        self.font_sizes_px = font_sizes(self.cfg)

        self.viewer = QTextBrowser()
        self.viewer.setOpenExternalLinks(False)
        self.viewer.setStyleSheet("QTextBrowser { border: none; }")
        self.viewer.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.viewer.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setCentralWidget(self.viewer)
        self.scroll_surface = ViewerScrollSurface(self.viewer)

        # ---------------- Navigation state ----------------
        # Owned here; the keyboard machine only asks for changes via callbacks.
        self.song: Optional[Song] = None
        self.sequence_nbr: Optional[int] = None
        self.error: Optional[str] = None
        self.pages = build_display_pages([], 1)
        self.current_page = 0
        self.chorus_only_for_verse: Optional[int] = None
        self.chorus_only_page = 0
        font_cfg = self.cfg.get("font", {}) or {}
        self.font_size_index = clamp_font_size_index(
            int(font_cfg.get("default_size_index", 0)), len(self.font_sizes_px)
        )

        ui = self.cfg.get("ui", {}) or {}
        self.keys = KeyEventHub()
        self.machine = KeyboardMachine(
            KeyboardCallbacks(
                on_navigate=self.navigate_to_page,
                on_font_size_delta=self.change_font_size,
                on_load_song=self.load_song_by_number,
                on_chorus_only_change=self.set_chorus_only,
                on_chorus_only_page_navigate=self.set_chorus_only_page,
                on_scroll_to_chorus=self.scroll_to_chorus,
            ),
            scroll_step=int(ui.get("scroll_step_px", SCROLL_STEP)),
        )
        self._unsubscribe_keys = self.keys.subscribe(self._on_key_down, self._on_key_up)
        QApplication.instance().installEventFilter(self)

        self._build_actions()
        self.setWindowTitle("LyricDeck")
        startup = (self.cfg.get("startup", {}) or {}).get("song_number", 294)
        self.load_song_by_number(int(startup))

    # ---------- Keyboard ----------

    def eventFilter(self, obj, event):
        # Key events reach the top-level QWindow once, before any widget sees them.
        if not isinstance(obj, QWindow):
            return super().eventFilter(obj, event)

        if event.type() == QEvent.KeyPress:
            name = qt_key_name(event.key())
            if name is None or (name == "Control" and event.isAutoRepeat()):
                return super().eventFilter(obj, event)
            handle = KeyHandle()
            self.keys.key_down(name, ctrl_held(event.modifiers()), handle)
            return handle.default_prevented

        if event.type() == QEvent.KeyRelease and not event.isAutoRepeat():
            name = qt_key_name(event.key())
            if name is not None:
                self.keys.key_up(name)

        return super().eventFilter(obj, event)

    def closeEvent(self, event):
        QApplication.instance().removeEventFilter(self)
        self._unsubscribe_keys()
        super().closeEvent(event)

    def _on_key_down(self, key: str, ctrl: bool, handle) -> None:
        self.machine.send(KeyDown(key=key, ctrl=ctrl, snapshot=self.key_snapshot(), dom_event=handle))

    def _on_key_up(self, key: str) -> None:
        self.machine.send(KeyUp(key=key))

    def key_snapshot(self) -> KeySnapshot:
        if not self.song:
            return KeySnapshot(scroll_surface=self.scroll_surface)
        is_chorus = self.song.is_chorus
        chorus_pages = 0
        if self.chorus_only_for_verse is not None:
            _, lines = chorus_only_lines(self.chorus_only_for_verse, self.song.stanzas, is_chorus)
            if lines:
                chorus_pages = chorus_only_page_count(lines, self.song.language_count)
        return KeySnapshot(
            total_pages=self.pages.total_pages,
            current_page=self.current_page,
            stanza_index_by_page=self.pages.stanza_index_by_page,
            first_stanza_index_by_page=self.pages.first_stanza_index_by_page,
            chorus_start_line_index_by_page=self.pages.chorus_start_line_index_by_page,
            is_chorus=is_chorus,
            chorus_only_for_verse=self.chorus_only_for_verse if chorus_pages else None,
            chorus_only_total_pages=chorus_pages,
            chorus_only_current_page=clamp_page(self.chorus_only_page, chorus_pages),
            total_verses=total_verses(is_chorus),
            current_verse=self.current_verse(),
            scroll_surface=self.scroll_surface,
        )

    # ---------- Host callbacks ----------

    def navigate_to_page(self, page: int) -> None:
        page = clamp_page(page, self.pages.total_pages)
        if page != self.current_page:
            self.current_page = page
            # a page change always leaves chorus-only view
            self.chorus_only_for_verse = None
            self.chorus_only_page = 0
        self.render()
        self._scroll_to_top()

    def change_font_size(self, delta: int) -> None:
        self.font_size_index = clamp_font_size_index(self.font_size_index + delta, len(self.font_sizes_px))
        self.render()

    def set_chorus_only(self, verse: Optional[int]) -> None:
        self.chorus_only_for_verse = verse
        self.chorus_only_page = 0
        self.render()
        self._scroll_to_top()

    def set_chorus_only_page(self, page: int) -> None:
        self.chorus_only_page = max(0, int(page))
        self.render()
        self._scroll_to_top()

    def scroll_to_chorus(self) -> None:
        def go():
            self.viewer.verticalScrollBar().setValue(0)
            self.viewer.scrollToAnchor(CHORUS_START_ANCHOR)
        QTimer.singleShot(0, go)

    def _scroll_to_top(self) -> None:
        QTimer.singleShot(0, lambda: self.viewer.verticalScrollBar().setValue(0))

    # ---------- Song loading ----------

    def load_song_by_number(self, sequence_nbr: int) -> None:
        self.sequence_nbr = sequence_nbr
        self.setWindowTitle(f"LyricDeck - {sequence_nbr}")
        self.viewer.setHtml(render_message_html(self.cfg, "Loading…"))
        try:
            self.song = load_song(self.db_path, self.source_skid, sequence_nbr)
            self.error = None
        except (sqlite3.Error, ValueError, OSError) as e:
            log.error("[songdb] failed to load song %s from %s: %s", sequence_nbr, self.db_path, e)
            self.song = None
            self.error = f"Failed to load song {sequence_nbr}: {e}"

        if self.song:
            self.pages = build_display_pages(self.song.stanzas, self.song.language_count, self.song.is_chorus)
        else:
            self.pages = build_display_pages([], 1)
        self.current_page = 0
        self.chorus_only_for_verse = None
        self.chorus_only_page = 0
        self.render()
        self._scroll_to_top()

    # ---------- Rendering ----------

    def current_verse(self) -> int:
        if not self.song:
            return 1
        return current_verse_for_page(self.current_page, self.pages.stanza_index_by_page, self.song.is_chorus)

    def effective_view(self) -> EffectiveLyricsView:
        song = self.song
        return get_effective_lyrics_view(
            chorus_only_for_verse=self.chorus_only_for_verse,
            current_page=self.current_page,
            current_verse=self.current_verse(),
            display_pages=self.pages.pages,
            stanza_index_by_page=self.pages.stanza_index_by_page,
            chorus_start_line_index_by_page=self.pages.chorus_start_line_index_by_page,
            stanzas=song.stanzas if song else [],
            is_chorus=song.is_chorus if song else [],
            language_count=song.language_count if song else 1,
            chorus_only_page=self.chorus_only_page,
        )

    def render(self) -> None:
        if self.error:
            self.viewer.setHtml(render_message_html(self.cfg, self.error, error=True))
            return
        if not self.song:
            self.viewer.setHtml(render_message_html(self.cfg, NO_SONG_MESSAGE))
            return

        view = self.effective_view()
        decorations = decorate_page(
            view.lines,
            view.effective_current_page,
            view.effective_total_pages,
            view.effective_stanza_index_by_page,
            view.effective_chorus_start_line_index_by_page,
            self.song.is_chorus,
            self.song.language_count,
            suppress_end_of_song=view.is_chorus_only_view,
        )
        size_px = self.font_sizes_px[clamp_font_size_index(self.font_size_index, len(self.font_sizes_px))]
        self.viewer.setHtml(render_page_html(
            self.cfg,
            self.song.title_line,
            view,
            decorations,
            size_px,
            total_verses(self.song.is_chorus),
            sequence_nbr=self.sequence_nbr,
        ))

    # ---------- UI actions ----------

    def _build_actions(self):
        fullscreen_act = QAction("Toggle Full Screen", self)
        fullscreen_act.setShortcut("F11")
        fullscreen_act.triggered.connect(self.toggle_fullscreen)
        self.addAction(fullscreen_act)

        quit_act = QAction("Quit", self)
        quit_act.setShortcut("Ctrl+Q")
        quit_act.triggered.connect(self.close)
        self.addAction(quit_act)

    def toggle_fullscreen(self) -> None:
        if self.isFullScreen():
            self.showMaximized()
        else:
            self.showFullScreen()

    def show_configured(self) -> None:
        ui = self.cfg.get("ui", {}) or {}
        if ui.get("fullscreen", True):
            self.showFullScreen()
        else:
            self.showMaximized()
