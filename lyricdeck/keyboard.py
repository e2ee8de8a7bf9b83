"""
Global keyboard handling as an explicit transition function.

One state ("listening"). Key events come in with a snapshot of the host's
page data; `transition` returns the next state plus a list of effects, and
`KeyboardMachine` applies those effects to the host callbacks:

- Ctrl+digits fill the song number buffer, releasing Control loads the song
- Arrow/Page keys page through the song (or through a chorus-only view)
- 1-9 jump to a verse, 0 shows the current verse's chorus on its own
- = / + / - step the lyrics font size
- ArrowUp/ArrowDown scroll the lyrics area
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple, Union

from .chorus_view import ChorusPage, ExitToVerse, get_chorus_only_navigation
from .song_number import (
    NEXT_PAGE_KEYS,
    PREV_PAGE_KEYS,
    get_page_navigation,
    handle_key_down,
    handle_key_up,
    is_digit,
)
from .verses import first_page_for_verse, should_enter_chorus_only_on_zero

log = logging.getLogger(__name__)

SCROLL_STEP = 56

NAVIGATE = "navigate"
FONT_SIZE_DELTA = "font_size_delta"
LOAD_SONG = "load_song"
CHORUS_ONLY_CHANGE = "chorus_only_change"
CHORUS_ONLY_PAGE = "chorus_only_page"
SCROLL_TO_CHORUS = "scroll_to_chorus"
SCROLL = "scroll"
PREVENT_DEFAULT = "prevent_default"


class ScrollSurface(Protocol):
    scroll_offset: int


class Cancelable(Protocol):
    def prevent_default(self) -> None: ...


@dataclass(frozen=True)
class KeySnapshot:
    """Host page data as it was when the key went down."""
    total_pages: int = 0
    current_page: int = 0
    stanza_index_by_page: Sequence[int] = ()
    first_stanza_index_by_page: Sequence[int] = ()
    chorus_start_line_index_by_page: Sequence[int] = ()
    is_chorus: Sequence[bool] = ()
    chorus_only_for_verse: Optional[int] = None
    chorus_only_total_pages: int = 0
    chorus_only_current_page: int = 0
    total_verses: int = 1
    current_verse: int = 1
    scroll_surface: Optional[ScrollSurface] = None


@dataclass(frozen=True)
class KeyDown:
    key: str
    ctrl: bool = False
    snapshot: KeySnapshot = field(default_factory=KeySnapshot)
    dom_event: Optional[Cancelable] = None


@dataclass(frozen=True)
class KeyUp:
    key: str


KeyEvent = Union[KeyDown, KeyUp]


@dataclass(frozen=True)
class KeyboardState:
    value: str = "listening"
    digit_buffer: str = ""


@dataclass(frozen=True)
class Effect:
    kind: str
    value: Any = None


@dataclass
class KeyboardCallbacks:
    on_navigate: Callable[[int], None]
    on_font_size_delta: Callable[[int], None]
    on_load_song: Callable[[int], None]
    on_chorus_only_change: Optional[Callable[[Optional[int]], None]] = None
    on_chorus_only_page_navigate: Optional[Callable[[int], None]] = None
    on_scroll_to_chorus: Optional[Callable[[], None]] = None


def transition(state: KeyboardState, event: KeyEvent) -> Tuple[KeyboardState, List[Effect]]:
    if isinstance(event, KeyUp):
        result = handle_key_up(event.key, state.digit_buffer)
        effects = []
        if result.sequence_nbr is not None:
            effects.append(Effect(LOAD_SONG, result.sequence_nbr))
        return replace(state, digit_buffer=result.buffer), effects

    key, snap = event.key, event.snapshot
    result = handle_key_down(key, event.ctrl, state.digit_buffer)
    state = replace(state, digit_buffer=result.buffer)
    effects: List[Effect] = []
    if result.prevent_default:
        effects.append(Effect(PREVENT_DEFAULT))

    if is_digit(key):
        if not event.ctrl:
            effects.extend(_digit_effects(key, snap))
    elif key in NEXT_PAGE_KEYS or key in PREV_PAGE_KEYS:
        effects.extend(_page_effects(key, snap))
    elif key in ("=", "+"):
        effects += [Effect(FONT_SIZE_DELTA, 1), Effect(PREVENT_DEFAULT)]
    elif key == "-":
        effects += [Effect(FONT_SIZE_DELTA, -1), Effect(PREVENT_DEFAULT)]
    elif key in ("ArrowUp", "ArrowDown") and snap.scroll_surface is not None:
        effects.append(Effect(SCROLL, SCROLL_STEP if key == "ArrowDown" else -SCROLL_STEP))
    return state, effects


def _page_effects(key: str, snap: KeySnapshot) -> List[Effect]:
    if snap.chorus_only_for_verse is not None:
        nav = get_chorus_only_navigation(
            key,
            snap.chorus_only_for_verse,
            snap.chorus_only_total_pages,
            snap.chorus_only_current_page,
            snap.total_verses,
            snap.first_stanza_index_by_page,
            snap.is_chorus,
        )
        if isinstance(nav, ExitToVerse):
            if nav.target_page < 0:
                # first/last verse: stay in the chorus, swallow the key
                return [Effect(PREVENT_DEFAULT)]
            return [
                Effect(CHORUS_ONLY_CHANGE, None),
                Effect(NAVIGATE, nav.target_page),
                Effect(PREVENT_DEFAULT),
            ]
        if isinstance(nav, ChorusPage):
            return [Effect(CHORUS_ONLY_PAGE, nav.page), Effect(PREVENT_DEFAULT)]

    page_nav = get_page_navigation(key, snap.total_pages, snap.current_page)
    if page_nav is None:
        return []
    return [Effect(NAVIGATE, page_nav.page), Effect(PREVENT_DEFAULT)]


def _digit_effects(key: str, snap: KeySnapshot) -> List[Effect]:
    in_chorus_only = snap.chorus_only_for_verse is not None

    if key == "0":
        if should_enter_chorus_only_on_zero(
            snap.chorus_only_for_verse,
            snap.current_verse,
            snap.first_stanza_index_by_page,
            snap.is_chorus,
        ):
            return [Effect(CHORUS_ONLY_CHANGE, snap.current_verse), Effect(PREVENT_DEFAULT)]
        if in_chorus_only:
            return [Effect(SCROLL_TO_CHORUS), Effect(PREVENT_DEFAULT)]
        return []

    verse = int(key)
    if verse > snap.total_verses:
        return []
    target = first_page_for_verse(verse, snap.first_stanza_index_by_page, snap.is_chorus)
    if target < 0:
        return []
    effects = [Effect(CHORUS_ONLY_CHANGE, None)] if in_chorus_only else []
    return effects + [Effect(NAVIGATE, target), Effect(PREVENT_DEFAULT)]


class KeyboardMachine:
    def __init__(self, callbacks: KeyboardCallbacks, scroll_step: int = SCROLL_STEP):
        self.callbacks = callbacks
        self.scroll_step = int(scroll_step)
        self.state = KeyboardState()

    @property
    def digit_buffer(self) -> str:
        return self.state.digit_buffer

    def send(self, event: KeyEvent) -> List[Effect]:
        self.state, effects = transition(self.state, event)
        prevent = False
        for eff in effects:
            if eff.kind == PREVENT_DEFAULT:
                prevent = True
            elif eff.kind == SCROLL:
                prevent = self._scroll(event.snapshot.scroll_surface, eff.value) or prevent
            else:
                self._dispatch(eff)
        dom_event = getattr(event, "dom_event", None)
        if prevent and dom_event is not None:
            dom_event.prevent_default()
        return effects

    def _scroll(self, surface: Optional[ScrollSurface], delta: int) -> bool:
        if surface is None:
            return False
        step = self.scroll_step if delta > 0 else -self.scroll_step
        before = surface.scroll_offset
        surface.scroll_offset = before + step
        # at the top/bottom the surface clamps and the key is left alone
        return surface.scroll_offset != before

    def _dispatch(self, eff: Effect) -> None:
        cb = self.callbacks
        if eff.kind == NAVIGATE:
            cb.on_navigate(eff.value)
        elif eff.kind == FONT_SIZE_DELTA:
            cb.on_font_size_delta(eff.value)
        elif eff.kind == LOAD_SONG:
            log.info("[keys] load song %s", eff.value)
            cb.on_load_song(eff.value)
        elif eff.kind == CHORUS_ONLY_CHANGE:
            if cb.on_chorus_only_change:
                cb.on_chorus_only_change(eff.value)
        elif eff.kind == CHORUS_ONLY_PAGE:
            if cb.on_chorus_only_page_navigate:
                cb.on_chorus_only_page_navigate(eff.value)
        elif eff.kind == SCROLL_TO_CHORUS:
            if cb.on_scroll_to_chorus:
                cb.on_scroll_to_chorus()


KeyDownHandler = Callable[[str, bool, Optional[Cancelable]], None]
KeyUpHandler = Callable[[str], None]


class KeyEventHub:
    """Register handlers, receive key events until unsubscribed."""

    def __init__(self):
        self._subscribers: List[Tuple[KeyDownHandler, KeyUpHandler]] = []

    def subscribe(self, on_key_down: KeyDownHandler, on_key_up: KeyUpHandler) -> Callable[[], None]:
        entry = (on_key_down, on_key_up)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def key_down(self, key: str, ctrl: bool, handle: Optional[Cancelable] = None) -> None:
        for on_down, _ in list(self._subscribers):
            on_down(key, ctrl, handle)

    def key_up(self, key: str) -> None:
        for _, on_up in list(self._subscribers):
            on_up(key)
