from lyricdeck.chorus_view import EffectiveLyricsView
from lyricdeck.paginate import LineDecoration
from lyricdeck.render import (
    CHORUS_START_ANCHOR,
    escape_html,
    render_indicator_html,
    render_line_html,
    render_message_html,
    render_page_html,
)

CFG = {"colors": {"chorus_marker": "#EAB308", "verse_end": "#D1D5DB",
                  "language_divider": "#E5E7EB", "end_of_song": "#EF4444"}}


def view(lines, chorus_start=-1, chorus=False):
    return EffectiveLyricsView(
        lines=lines,
        effective_current_page=0,
        effective_total_pages=1,
        effective_stanza_index_by_page=[0],
        effective_chorus_start_line_index_by_page=[chorus_start],
        is_chorus_only_view=False,
        display_verse_for_indicator=2,
        is_chorus_for_indicator=chorus,
    )


def test_escape_html():
    assert escape_html('<b>"A & B"</b>') == "&lt;b&gt;&quot;A &amp; B&quot;&lt;/b&gt;"


def test_line_gets_one_rule():
    html = render_line_html(CFG, "x", LineDecoration(show_yellow_line=True, show_verse_end_line=True))
    assert "#EAB308" in html
    assert "#D1D5DB" not in html


def test_end_of_song_rule():
    html = render_line_html(CFG, "last", LineDecoration(show_end_of_song=True))
    assert "#EF4444" in html


def test_plain_line_has_no_rule():
    assert "<table" not in render_line_html(CFG, "x", LineDecoration())


def test_indicator():
    html = render_indicator_html(294, 2, 3, True)
    assert "294" in html
    assert "2 / 3" in html
    assert "C" in html
    assert "C" not in render_indicator_html(None, 1, 3, False)


def test_page_marks_chorus_start():
    decos = [LineDecoration(), LineDecoration(show_yellow_line=True), LineDecoration(show_end_of_song=True)]
    html = render_page_html(CFG, "Amazing Grace", view(["a", "b", "c"], chorus_start=2), decos, 24, 3, 294)
    assert html.count(CHORUS_START_ANCHOR) == 1
    assert html.index(CHORUS_START_ANCHOR) < html.index(">c<")
    assert "font-size:24px" in html
    assert "Amazing Grace" in html
    assert "2 / 3" in html


def test_page_escapes_lyrics():
    html = render_page_html(CFG, "", view(["<i>x</i>"]), [LineDecoration()], 16, 1)
    assert "<i>x</i>" not in html


def test_message_page():
    html = render_message_html(CFG, "no song found for this number.")
    assert "no song found for this number." in html
    assert "class='message'" in html
    assert "class='error'" in render_message_html(CFG, "boom", error=True)
