from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .verses import is_chorus_stanza

# 4 sentences per language per page: 8 rows for two languages, 12 for three.
SENTENCES_PER_LANGUAGE = 4
# Single-language songs have no alternating rows, so they get more lines.
LINES_PER_PAGE_SINGLE_LANGUAGE = 8

# Lyrics font scale in px; '=' / '+' step up, '-' steps down.
LYRICS_FONT_SIZES_PX = [16, 18, 20, 24, 30, 36, 48, 60]
DEFAULT_LYRICS_FONT_SIZE_INDEX = 0


@dataclass
class DisplayPages:
    pages: List[List[str]] = field(default_factory=list)
    stanza_index_by_page: List[int] = field(default_factory=list)
    first_stanza_index_by_page: List[int] = field(default_factory=list)
    chorus_start_line_index_by_page: List[int] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def _push(self, lines: List[str], stanza_idx: int) -> None:
        self.pages.append(lines)
        self.stanza_index_by_page.append(stanza_idx)
        self.first_stanza_index_by_page.append(stanza_idx)
        self.chorus_start_line_index_by_page.append(-1)


@dataclass(frozen=True)
class LineDecoration:
    show_yellow_line: bool = False
    show_verse_end_line: bool = False
    show_language_divider: bool = False
    show_end_of_song: bool = False


def lines_per_page(language_count: int) -> int:
    if language_count <= 1:
        return LINES_PER_PAGE_SINGLE_LANGUAGE
    return SENTENCES_PER_LANGUAGE * language_count


def clamp_font_size_index(index: int, scale_length: int = len(LYRICS_FONT_SIZES_PX)) -> int:
    if scale_length <= 0:
        return 0
    return max(0, min(index, scale_length - 1))


def chunk_lines(lines: Sequence[str], per_page: int) -> List[List[str]]:
    return [list(lines[i:i + per_page]) for i in range(0, len(lines), per_page)]


def build_display_pages(
    stanzas: Sequence[Sequence[str]],
    language_count: int,
    is_chorus: Optional[Sequence[bool]] = None,
) -> DisplayPages:
    """
    Chunk stanzas into display pages.

    A page holds lines of a single stanza, except that a chorus is appended to
    the free tail of the previous page (as many lines as fit) and the rest of
    it continues on following pages. The page index arrays always have the
    same length as `pages`, and there is always at least one page.
    """
    per_page = lines_per_page(language_count)
    flags = is_chorus or []
    out = DisplayPages()

    for s, stanza in enumerate(stanzas):
        free = per_page - len(out.pages[-1]) if out.pages else 0

        if is_chorus_stanza(s, flags) and out.pages and free > 0:
            take = min(len(stanza), free)
            last = out.pages[-1]
            out.chorus_start_line_index_by_page[-1] = len(last)
            last.extend(stanza[:take])
            out.stanza_index_by_page[-1] = s
            for chunk in chunk_lines(stanza[take:], per_page):
                out._push(chunk, s)
            continue

        for chunk in chunk_lines(stanza, per_page):
            out._push(chunk, s)

    if not out.pages:
        out._push([], 0)
    return out


def get_line_decoration(
    current_page: int,
    total_pages: int,
    stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
    language_count: int,
    line_index: int,
    page_line_count: int,
    chorus_start_line_index: int = -1,
    suppress_end_of_song: bool = False,
    next_page_chorus_start_index: int = -1,
) -> LineDecoration:
    """
    Which separator goes after a given line.

    When the next page starts with a merged verse+chorus, the yellow line is
    left to that page's boundary instead of closing the current verse page.
    """
    if 0 <= current_page < len(stanza_index_by_page):
        stanza_idx = stanza_index_by_page[current_page]
    elif stanza_index_by_page:
        # chorus-only sub-pages share the single override entry
        stanza_idx = stanza_index_by_page[-1]
    else:
        stanza_idx = 0
    next_is_chorus = is_chorus_stanza(stanza_idx + 1, is_chorus)
    is_verse = not is_chorus_stanza(stanza_idx, is_chorus)
    is_last_line = line_index == page_line_count - 1
    is_last_page_of_stanza = (
        current_page >= total_pages - 1
        or current_page + 1 >= len(stanza_index_by_page)
        or stanza_index_by_page[current_page + 1] != stanza_idx
    )

    merged_boundary = chorus_start_line_index >= 0 and line_index == chorus_start_line_index - 1
    yellow = merged_boundary or (
        is_verse
        and next_is_chorus
        and is_last_line
        and is_last_page_of_stanza
        and next_page_chorus_start_index < 0
    )
    end_of_song = not suppress_end_of_song and current_page == total_pages - 1 and is_last_line
    verse_end = is_verse and is_last_line and is_last_page_of_stanza and not end_of_song and not yellow
    language_divider = (
        language_count > 0 and (line_index + 1) % language_count == 0 and not is_last_line
    )

    # End of song replaces whatever rule the line would otherwise get.
    if end_of_song:
        return LineDecoration(show_end_of_song=True)
    return LineDecoration(
        show_yellow_line=yellow,
        show_verse_end_line=verse_end,
        show_language_divider=language_divider and not yellow and not verse_end,
    )


def decorate_page(
    lines: Sequence[str],
    current_page: int,
    total_pages: int,
    stanza_index_by_page: Sequence[int],
    chorus_start_line_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
    language_count: int,
    suppress_end_of_song: bool = False,
) -> List[LineDecoration]:
    """Decorations for every line of one page."""
    def start_at(page: int) -> int:
        if 0 <= page < len(chorus_start_line_index_by_page):
            return chorus_start_line_index_by_page[page]
        return -1

    chorus_start = start_at(current_page)
    next_start = start_at(current_page + 1)
    return [
        get_line_decoration(
            current_page,
            total_pages,
            stanza_index_by_page,
            is_chorus,
            language_count,
            i,
            len(lines),
            chorus_start,
            suppress_end_of_song,
            next_start,
        )
        for i in range(len(lines))
    ]
