from lyricdeck.verses import (
    chorus_stanza_index_after_verse,
    current_verse_for_page,
    first_page_for_verse,
    nth_chorus_stanza_index,
    should_enter_chorus_only_on_zero,
    stanza_index_for_verse,
    total_verses,
)

V, C = False, True


def test_total_verses():
    assert total_verses([]) == 1
    assert total_verses([V, C, V]) == 2
    assert total_verses([C, C]) == 1


def test_verses_and_choruses_map_to_stanzas():
    layout = [V, C, V, C, V]
    assert [stanza_index_for_verse(n, layout) for n in (1, 2, 3)] == [0, 2, 4]
    assert [nth_chorus_stanza_index(n, layout) for n in (1, 2)] == [1, 3]


def test_stanza_index_for_verse_out_of_range():
    assert stanza_index_for_verse(0, [V, C]) == -1
    assert stanza_index_for_verse(2, [V, C]) == -1


def test_nth_chorus_clamps_to_last():
    assert nth_chorus_stanza_index(3, [V, C, V, C, V]) == 3
    assert nth_chorus_stanza_index(1, [V, V]) == -1
    assert nth_chorus_stanza_index(0, [V, C]) == -1


def test_chorus_after_verse():
    layout = [V, C, V, V, C]
    assert chorus_stanza_index_after_verse(1, layout) == 1
    assert chorus_stanza_index_after_verse(2, layout) == 4
    assert chorus_stanza_index_after_verse(4, layout) == -1
    assert chorus_stanza_index_after_verse(1, [V, V]) == -1


def test_current_verse_for_page():
    layout = [V, C, V]
    assert current_verse_for_page(0, [0, 1, 2], layout) == 1
    assert current_verse_for_page(1, [0, 1, 2], layout) == 1
    assert current_verse_for_page(2, [0, 1, 2], layout) == 2
    assert current_verse_for_page(5, [0, 1, 2], layout) == 1
    assert current_verse_for_page(0, [], []) == 1


def test_first_page_for_verse():
    layout = [V, C, V]
    first = [0, 0, 1, 1, 2, 2]
    assert first_page_for_verse(1, first, layout) == 0
    assert first_page_for_verse(2, first, layout) == 4
    assert first_page_for_verse(3, first, layout) == -1


def test_should_enter_chorus_only_on_zero():
    layout = [V, C, V]
    assert should_enter_chorus_only_on_zero(None, 1, [0, 2], layout)
    assert should_enter_chorus_only_on_zero(None, 2, [0, 2], layout)
    assert not should_enter_chorus_only_on_zero(1, 1, [0, 2], layout)
    assert not should_enter_chorus_only_on_zero(None, 1, [], layout)
    assert not should_enter_chorus_only_on_zero(None, 1, [0, 1], [V, V])
