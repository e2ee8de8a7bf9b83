"""
Lookups between stanza index, verse number and chorus occurrence.

Verse numbers are 1-based and count only non-chorus stanzas. Every function
answers out-of-range input with -1 (or 1 for the "current verse") instead of
raising.
"""

from typing import List, Optional, Sequence


def _flag(is_chorus: Sequence[bool], idx: int) -> bool:
    return 0 <= idx < len(is_chorus) and bool(is_chorus[idx])


def total_verses(is_chorus: Sequence[bool]) -> int:
    n = sum(1 for c in is_chorus if not c)
    return n or 1


def stanza_index_for_verse(verse_num: int, is_chorus: Sequence[bool]) -> int:
    if verse_num < 1:
        return -1
    count = 0
    for s, chorus in enumerate(is_chorus):
        if not chorus:
            count += 1
            if count == verse_num:
                return s
    return -1


def chorus_stanza_index_after_verse(verse_num: int, is_chorus: Sequence[bool]) -> int:
    verse_idx = stanza_index_for_verse(verse_num, is_chorus)
    if verse_idx < 0:
        return -1
    for s in range(verse_idx + 1, len(is_chorus)):
        if is_chorus[s]:
            return s
    return -1


def nth_chorus_stanza_index(n: int, is_chorus: Sequence[bool]) -> int:
    """
    Stanza index of the n-th chorus (1-based).

    Verse 1 shows the 1st chorus, verse 2 the 2nd, and so on; songs with fewer
    choruses than verses keep showing the last one.
    """
    if n < 1:
        return -1
    indices: List[int] = [s for s, chorus in enumerate(is_chorus) if chorus]
    if not indices:
        return -1
    return indices[min(n, len(indices)) - 1]


def current_verse_for_page(
    current_page: int,
    stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
) -> int:
    if not stanza_index_by_page or current_page < 0 or current_page >= len(stanza_index_by_page):
        return 1
    last = stanza_index_by_page[current_page]
    return sum(1 for c in is_chorus[: last + 1] if not c)


def first_page_for_verse(
    verse_num: int,
    first_stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
) -> int:
    """First page that starts with the given verse, or -1."""
    stanza_idx = stanza_index_for_verse(verse_num, is_chorus)
    if stanza_idx < 0:
        return -1
    for page, s in enumerate(first_stanza_index_by_page):
        if s == stanza_idx:
            return page
    return -1


def should_enter_chorus_only_on_zero(
    chorus_only_for_verse: Optional[int],
    current_verse: int,
    first_stanza_index_by_page: Sequence[int],
    is_chorus: Sequence[bool],
) -> bool:
    # Works from a verse page as well as from a (merged) chorus page.
    return (
        chorus_only_for_verse is None
        and current_verse >= 1
        and len(first_stanza_index_by_page) > 0
        and nth_chorus_stanza_index(current_verse, is_chorus) >= 0
    )


def is_chorus_stanza(stanza_idx: int, is_chorus: Sequence[bool]) -> bool:
    return _flag(is_chorus, stanza_idx)
