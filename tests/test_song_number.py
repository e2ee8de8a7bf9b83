from lyricdeck.song_number import (
    MAX_BUFFER_DIGITS,
    clamp_page,
    get_page_navigation,
    handle_key_down,
    handle_key_up,
    is_digit,
)


def test_is_digit_ascii_only():
    assert is_digit("0")
    assert is_digit("9")
    assert not is_digit("a")
    assert not is_digit("12")
    assert not is_digit("")
    assert not is_digit("٣")  # Arabic-Indic three


def test_control_down_clears_buffer():
    result = handle_key_down("Control", False, "29")
    assert result.buffer == ""
    assert not result.prevent_default


def test_ctrl_digit_appends_and_prevents_default():
    result = handle_key_down("4", True, "29")
    assert result.buffer == "294"
    assert result.prevent_default


def test_digit_without_ctrl_leaves_buffer():
    result = handle_key_down("4", False, "29")
    assert result.buffer == "29"
    assert not result.prevent_default


def test_buffer_stops_at_max_digits():
    buffer = ""
    for _ in range(MAX_BUFFER_DIGITS + 3):
        result = handle_key_down("9", True, buffer)
        buffer = result.buffer
        assert result.prevent_default
    assert buffer == "9" * MAX_BUFFER_DIGITS


def test_control_release_commits_buffer():
    result = handle_key_up("Control", "294")
    assert result.sequence_nbr == 294
    assert result.buffer == ""


def test_control_release_tolerates_leading_zeros():
    assert handle_key_up("Control", "007").sequence_nbr == 7


def test_control_release_with_empty_buffer_is_noop():
    result = handle_key_up("Control", "")
    assert result.sequence_nbr is None
    assert result.buffer == ""


def test_other_key_release_keeps_buffer():
    result = handle_key_up("1", "1")
    assert result.sequence_nbr is None
    assert result.buffer == "1"


def test_clamp_page():
    assert clamp_page(-1, 5) == 0
    assert clamp_page(7, 5) == 4
    assert clamp_page(2, 5) == 2
    assert clamp_page(3, 0) == 0


def test_page_navigation_keys():
    assert get_page_navigation("ArrowRight", 5, 1).page == 2
    assert get_page_navigation("PageDown", 5, 4).page == 4
    assert get_page_navigation("ArrowLeft", 5, 2).page == 1
    assert get_page_navigation("PageUp", 5, 0).page == 0
    assert get_page_navigation("a", 5, 0) is None
