"""Tests for palette.py - task color cycling."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.palette import format_color_code, next_color, parse_color_code, regenerate_colors


class TestNextColor:
    """Tests for next_color."""

    def test_cycles_through_palette(self) -> None:
        palette = [10, 20, 30]
        cursor = 0
        seen = []
        for _ in range(5):
            color, cursor = next_color(cursor, palette)
            seen.append(color)
        assert seen == [10, 20, 30, 10, 20]
        assert cursor == 2

    def test_cursor_out_of_range_wraps(self) -> None:
        assert next_color(7, [1, 2, 3]) == (2, 2)

    def test_empty_palette_rejected(self) -> None:
        with pytest.raises(ValueError):
            next_color(0, [])


class TestRegenerateColors:
    """Tests for regenerate_colors."""

    def test_starts_from_first_color(self) -> None:
        assert regenerate_colors(4, [1, 2, 3]) == ([1, 2, 3, 1], 1)

    def test_no_tasks(self) -> None:
        assert regenerate_colors(0, [1, 2, 3]) == ([], 0)


class TestColorCodes:
    """Tests for color code parsing."""

    def test_escape_sequence(self) -> None:
        assert parse_color_code("\x1b[38;5;167m") == 167

    def test_bare_number(self) -> None:
        assert parse_color_code("42") == 42

    def test_out_of_range(self) -> None:
        assert parse_color_code("\x1b[38;5;300m") is None

    def test_garbage(self) -> None:
        assert parse_color_code("red") is None

    def test_format_parses_back(self) -> None:
        assert parse_color_code(format_color_code(73)) == 73
