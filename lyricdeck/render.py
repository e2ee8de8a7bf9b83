from typing import List, Optional, Sequence

from .chorus_view import EffectiveLyricsView
from .paginate import LineDecoration

CHORUS_START_ANCHOR = "chorus-start"

def escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
         .replace("<", "&lt;")
         .replace(">", "&gt;")
         .replace('"', "&quot;")
    )

def lyricdeck_css(cfg: dict, size_px: int) -> str:
    font = cfg.get("font", {}) or {}
    colors = cfg.get("colors", {}) or {}
    ui = cfg.get("ui", {}) or {}

    family = font.get("family", "DejaVu Sans")
    line_height = float(font.get("line_height", 1.35))

    bg = colors.get("background") or "#FFFFFF"
    text = colors.get("text") or "#374151"
    header = colors.get("header") or text
    indicator = colors.get("indicator") or text
    muted = colors.get("muted") or text
    error = colors.get("error") or "#DC2626"

    pad_x = int(ui.get("padding_x", 32))
    pad_y = int(ui.get("padding_y", 24))

    return f"""
    body {{ background:{bg}; color:{text}; margin:0; font-family:{family}, DejaVu Sans, Noto Sans, Arial, sans-serif; }}
    .title {{ color:{header}; font-size:24px; font-weight:600; text-align:center; margin:{pad_y}px {pad_x}px 8px {pad_x}px; }}
    .indicator {{ color:{indicator}; font-size:14px; text-align:center; }}
    .line {{ font-size:{size_px}px; line-height:{int(line_height * 100)}%; margin:2px 0; white-space:pre-wrap; }}
    .message {{ color:{muted}; font-size:18px; margin:{pad_y}px {pad_x}px; }}
    .error {{ color:{error}; font-size:18px; margin:{pad_y}px {pad_x}px; }}
    """

def rule_html(color: str, thickness_px: int) -> str:
    # Qt rich text has no borders on block elements; a filled table cell draws the rule.
    return (
        "<table width='100%' cellspacing='0' cellpadding='0' style='margin-top:12px;margin-bottom:12px;'>"
        f"<tr><td bgcolor='{color}' height='{thickness_px}'></td></tr></table>"
    )

def render_line_html(cfg: dict, content: str, decoration: LineDecoration, chorus_start: bool = False) -> str:
    colors = cfg.get("colors", {}) or {}
    parts: List[str] = []
    if chorus_start:
        parts.append(f"<a name='{CHORUS_START_ANCHOR}'></a>")
    parts.append(f"<p class='line'>{escape_html(content)}</p>")

    # At most one of these per line; end of song is drawn on its own.
    if decoration.show_yellow_line:
        parts.append(rule_html(colors.get("chorus_marker", "#EAB308"), 2))
    elif decoration.show_verse_end_line:
        parts.append(rule_html(colors.get("verse_end", "#D1D5DB"), 2))
    elif decoration.show_language_divider:
        parts.append(rule_html(colors.get("language_divider", "#E5E7EB"), 1))
    if decoration.show_end_of_song:
        parts.append(rule_html(colors.get("end_of_song", "#EF4444"), 2))
    return "".join(parts)

def render_indicator_html(
    sequence_nbr: Optional[int],
    current_verse: int,
    total_verses: int,
    is_chorus: bool,
) -> str:
    out: List[str] = ["<div class='indicator'>"]
    if sequence_nbr is not None:
        out.append(f"<b>{sequence_nbr}</b><br/>")
    out.append(f"{current_verse} / {total_verses}")
    if is_chorus:
        out.append("<br/>C")
    out.append("</div>")
    return "".join(out)

def render_page_html(
    cfg: dict,
    title_line: str,
    view: EffectiveLyricsView,
    decorations: Sequence[LineDecoration],
    size_px: int,
    total_verses: int,
    sequence_nbr: Optional[int] = None,
) -> str:
    """
    Render the visible page (or chorus-only sub-page) as one HTML document.
    """
    css = lyricdeck_css(cfg, size_px)
    page = view.effective_current_page
    starts = view.effective_chorus_start_line_index_by_page
    chorus_start = starts[page] if 0 <= page < len(starts) else -1

    out: List[str] = []
    out.append(f"<html><head><style>{css}</style></head><body>")
    if title_line:
        out.append(f"<div class='title'>{escape_html(title_line)}</div>")
    out.append("<table width='100%' cellspacing='0' cellpadding='8'><tr>")
    out.append("<td width='56' valign='top'>")
    out.append(render_indicator_html(
        sequence_nbr,
        view.display_verse_for_indicator,
        total_verses,
        view.is_chorus_for_indicator,
    ))
    out.append("</td><td valign='top'>")
    for i, content in enumerate(view.lines):
        deco = decorations[i] if i < len(decorations) else LineDecoration()
        out.append(render_line_html(cfg, content, deco, chorus_start=(chorus_start >= 0 and i == chorus_start)))
    out.append("</td></tr></table>")
    out.append("</body></html>")
    return "".join(out)

def render_message_html(cfg: dict, message: str, title_line: str = "", error: bool = False) -> str:
    css = lyricdeck_css(cfg, 18)
    klass = "error" if error else "message"
    title = f"<div class='title'>{escape_html(title_line)}</div>" if title_line else ""
    return (
        f"<html><head><style>{css}</style></head><body>"
        f"{title}<p class='{klass}'>{escape_html(message)}</p>"
        "</body></html>"
    )
