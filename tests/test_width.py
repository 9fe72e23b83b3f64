"""Tests for width.py - display width of terminal text."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.width import char_width, display_width, strip_ansi, truncate_to_width


class TestDisplayWidth:
    """Tests for display_width."""

    def test_ascii(self) -> None:
        assert display_width("hello") == 5

    def test_escape_sequences_take_no_columns(self) -> None:
        assert display_width("\x1b[38;5;167mhello\x1b[0m") == 5

    def test_emoji_is_double_width(self) -> None:
        assert display_width("💖") == 2

    def test_box_drawing_is_single_width(self) -> None:
        assert display_width("┌─┐") == 3

    def test_control_characters_take_no_columns(self) -> None:
        assert char_width("\x07") == 0


class TestTruncateToWidth:
    """Tests for truncate_to_width."""

    def test_fits_unchanged(self) -> None:
        assert truncate_to_width("abc", 5) == "abc"

    def test_cuts_plain_text(self) -> None:
        assert truncate_to_width("abcdef", 4) == "abcd"

    def test_does_not_split_wide_character(self) -> None:
        assert truncate_to_width("💖💖", 3) == "💖"

    def test_zero_width(self) -> None:
        assert truncate_to_width("abc", 0) == ""


def test_strip_ansi() -> None:
    assert strip_ansi("\x1b[48;5;235m x \x1b[49m") == " x "
