"""
Ctrl+digit song number entry and plain page stepping.

The digit buffer is owned by the caller; these helpers take the current
buffer and return the next one plus whatever the caller should do.
"""

from dataclasses import dataclass
from typing import Optional

# Longer input would only ever be a typo; also keeps int() output sane.
MAX_BUFFER_DIGITS = 8

NEXT_PAGE_KEYS = ("ArrowRight", "PageDown")
PREV_PAGE_KEYS = ("ArrowLeft", "PageUp")


@dataclass(frozen=True)
class KeyDownResult:
    buffer: str
    prevent_default: bool


@dataclass(frozen=True)
class KeyUpResult:
    buffer: str
    sequence_nbr: Optional[int]


@dataclass(frozen=True)
class PageNavigation:
    page: int
    prevent_default: bool = True


def is_digit(key: str) -> bool:
    """ASCII 0-9 only; no locale digits."""
    return len(key) == 1 and "0" <= key <= "9"


def handle_key_down(key: str, ctrl: bool, buffer: str) -> KeyDownResult:
    if key == "Control":
        return KeyDownResult(buffer="", prevent_default=False)
    if ctrl and is_digit(key):
        if len(buffer) < MAX_BUFFER_DIGITS:
            buffer = buffer + key
        return KeyDownResult(buffer=buffer, prevent_default=True)
    return KeyDownResult(buffer=buffer, prevent_default=False)


def handle_key_up(key: str, buffer: str) -> KeyUpResult:
    if key != "Control":
        return KeyUpResult(buffer=buffer, sequence_nbr=None)
    if not buffer:
        return KeyUpResult(buffer="", sequence_nbr=None)
    try:
        n: Optional[int] = int(buffer, 10)
    except ValueError:
        n = None
    return KeyUpResult(buffer="", sequence_nbr=n)


def clamp_page(page: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(page, total - 1))


def get_page_navigation(key: str, total_pages: int, current_page: int) -> Optional[PageNavigation]:
    """Arrow/Page keys to a clamped target page; None for anything else."""
    if key in NEXT_PAGE_KEYS:
        return PageNavigation(page=clamp_page(current_page + 1, total_pages))
    if key in PREV_PAGE_KEYS:
        return PageNavigation(page=clamp_page(current_page - 1, total_pages))
    return None
