"""
Chorus-only view: one chorus shown on its own, paginated independently of
the song, on top of the normal page flow.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .paginate import chunk_lines, lines_per_page
from .song_number import get_page_navigation
from .verses import first_page_for_verse, nth_chorus_stanza_index


@dataclass(frozen=True)
class EffectiveLyricsView:
    """What the lyrics area and the verse indicator should show."""
    lines: List[str]
    effective_current_page: int
    effective_total_pages: int
    effective_stanza_index_by_page: List[int]
    effective_chorus_start_line_index_by_page: List[int]
    is_chorus_only_view: bool
    display_verse_for_indicator: int
    is_chorus_for_indicator: bool


@dataclass(frozen=True)
class ExitToVerse:
    # -1: no such verse, the key is consumed and the view stays
    target_page: int


@dataclass(frozen=True)
class ChorusPage:
    page: int


ChorusOnlyNavigation = Union[ExitToVerse, ChorusPage, None]


def chorus_only_lines(
    chorus_only_for_verse: Optional[int],
    stanzas: Sequence[Sequence[str]],
    is_chorus: Sequence[bool],
) -> Tuple[int, List[str]]:
    if chorus_only_for_verse is None:
        return -1, []
    idx = nth_chorus_stanza_index(chorus_only_for_verse, is_chorus)
    if idx < 0 or idx >= len(stanzas):
        return idx, []
    return idx, list(stanzas[idx])


def chorus_only_page_count(lines: Sequence[str], language_count: int) -> int:
    return max(1, len(chunk_lines(lines, lines_per_page(language_count))))


def get_effective_lyrics_view(
    chorus_only_for_verse: Optional[int],
    current_page: int,
    current_verse: int,
    display_pages: Sequence[Sequence[str]],
    stanza_index_by_page: Sequence[int],
    chorus_start_line_index_by_page: Sequence[int],
    stanzas: Sequence[Sequence[str]],
    is_chorus: Sequence[bool],
    language_count: int,
    chorus_only_page: int = 0,
) -> EffectiveLyricsView:
    """
    Resolve the view to render.

    A verse with no chorus (or an empty chorus stanza) silently falls back to
    the normal paginated view.
    """
    chorus_idx, chorus_lines = chorus_only_lines(chorus_only_for_verse, stanzas, is_chorus)

    if chorus_only_for_verse is not None and chorus_lines:
        sub_pages = chunk_lines(chorus_lines, lines_per_page(language_count))
        page = max(0, min(chorus_only_page, len(sub_pages) - 1))
        return EffectiveLyricsView(
            lines=sub_pages[page],
            effective_current_page=page,
            effective_total_pages=len(sub_pages),
            effective_stanza_index_by_page=[chorus_idx],
            effective_chorus_start_line_index_by_page=[-1],
            is_chorus_only_view=True,
            display_verse_for_indicator=chorus_only_for_verse,
            is_chorus_for_indicator=True,
        )

    if 0 <= current_page < len(display_pages):
        lines = list(display_pages[current_page])
    else:
        lines = []
    on_chorus = False
    if 0 <= current_page < len(stanza_index_by_page):
        s = stanza_index_by_page[current_page]
        on_chorus = 0 <= s < len(is_chorus) and bool(is_chorus[s])
    return EffectiveLyricsView(
        lines=lines,
        effective_current_page=current_page,
        effective_total_pages=len(display_pages),
        effective_stanza_index_by_page=list(stanza_index_by_page),
        effective_chorus_start_line_index_by_page=list(chorus_start_line_index_by_page),
        is_chorus_only_view=False,
        display_verse_for_indicator=current_verse,
        is_chorus_for_indicator=on_chorus,
    )


def get_chorus_only_navigation(
    key: str,
    chorus_only_for_verse: Optional[int],
    total_sub_pages: int,
    current_sub_page: int,
    total_verses: int,
    first_stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
) -> ChorusOnlyNavigation:
    """
    Arrow/Page keys while a chorus is shown on its own.

    Returns None when the key should be handled as normal page navigation.
    """
    if chorus_only_for_verse is None or total_sub_pages <= 0:
        return None

    at_last = total_sub_pages <= 1 or current_sub_page >= total_sub_pages - 1
    at_first = total_sub_pages <= 1 or current_sub_page <= 0

    if key == "ArrowRight" and at_last:
        return ExitToVerse(_verse_target(chorus_only_for_verse + 1, total_verses, first_stanza_index_by_page, is_chorus))
    if key == "ArrowLeft" and at_first:
        return ExitToVerse(_verse_target(chorus_only_for_verse - 1, total_verses, first_stanza_index_by_page, is_chorus))

    if total_sub_pages > 1 and key in ("PageDown", "PageUp", "ArrowRight", "ArrowLeft"):
        nav = get_page_navigation(key, total_sub_pages, current_sub_page)
        if nav:
            return ChorusPage(nav.page)
    return None


def _verse_target(
    verse: int,
    total_verses: int,
    first_stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
) -> int:
    if verse < 1 or verse > total_verses:
        return -1
    return first_page_for_verse(verse, first_stanza_index_by_page, is_chorus)
