import pytest

from promptbits.segment import Segment, Style, count_wide_chars


def test_plain_style_leaves_text_unchanged():
    assert Style().paint("hello") == "hello"


def test_named_foreground():
    assert Style(foreground="red").paint("hi") == "\x1b[31mhi\x1b[0m"


def test_attributes_then_background_then_foreground():
    style = Style(foreground=208, background="blue", bold=True)
    assert style.paint("x") == "\x1b[1;44;38;5;208mx\x1b[0m"


def test_painted_text_contains_value_and_resets():
    painted = Style(foreground=(10, 20, 30), italic=True).paint("value")
    assert painted.startswith("\x1b[")
    assert "value" in painted
    assert painted.endswith("\x1b[0m")


def test_unknown_colour_name_rejected():
    with pytest.raises(ValueError):
        Style(foreground="chartreuse").paint("x")


def test_fixed_colour_out_of_range_rejected():
    with pytest.raises(ValueError):
        Style(background=300).paint("x")


def test_segment_without_style_is_raw_value():
    segment = Segment("version", value="v1.2.3")
    assert segment.ansi_string() == "v1.2.3"
    assert str(segment) == "v1.2.3"


def test_segment_with_style_matches_style_paint():
    style = Style(foreground="green", bold=True)
    segment = Segment("symbol", value="ok", style=style)
    assert segment.ansi_string() == style.paint("ok")
    assert str(segment) == segment.ansi_string()


@pytest.mark.parametrize("value,empty", [("", True), ("   \t\n", True), (" x ", False)])
def test_segment_is_empty(value, empty):
    assert Segment("name", value=value).is_empty() is empty


def test_count_wide_chars_ascii():
    assert count_wide_chars("starship") == 0


def test_count_wide_chars_mixed():
    assert count_wide_chars("a日b本") == 2