"""Tests for layout.py - word wrap and box rendering."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.config import Configuration
from reminder.layout import (
    compute_box_width,
    fit_affirmation,
    format_affirmation,
    render_box,
    render_prompt,
    wrap,
)
from reminder.models import Task, TaskList
from reminder.width import display_width, strip_ansi


@pytest.fixture
def tasks() -> TaskList:
    return TaskList([Task("Buy groceries", 167), Task("Call the dentist", 71)], cursor=2)


class TestComputeBoxWidth:
    """Tests for compute_box_width."""

    def test_half_of_terminal(self) -> None:
        assert compute_box_width(80, 0.5, 30, 80) == 40

    def test_odd_terminal(self) -> None:
        assert compute_box_width(90, 0.5, 30, 80) == 45

    def test_rounds_half_up(self) -> None:
        assert compute_box_width(45, 0.5, 1, 80) == 23

    def test_minimum_applies(self) -> None:
        assert compute_box_width(40, 0.5, 30, 80) == 30

    def test_never_wider_than_terminal(self) -> None:
        assert compute_box_width(20, 0.5, 30, 80) == 20

    def test_maximum_applies(self) -> None:
        assert compute_box_width(300, 0.5, 30, 80) == 80


class TestWrap:
    """Tests for wrap."""

    def test_wraps_with_hanging_indent(self) -> None:
        assert wrap("alpha beta gamma", 12) == ["▪ alpha beta", "  gamma"]

    def test_title_has_no_bullet(self) -> None:
        assert wrap("REMEMBER", 20, is_title=True) == ["REMEMBER"]

    def test_empty_text(self) -> None:
        assert wrap("", 20) == []
        assert wrap("   ", 20) == []

    def test_long_word_split(self) -> None:
        assert wrap("abcdefghij", 6) == ["▪ abcd", "  efgh", "  ij"]

    def test_styles_do_not_count_toward_width(self) -> None:
        lines = wrap("alpha beta gamma", 12, bullet_style="\x1b[38;5;1m", text_style="\x1b[38;5;2m")
        assert [strip_ansi(line) for line in lines] == ["▪ alpha beta", "  gamma"]

    def test_wide_bullet_indent(self) -> None:
        lines = wrap("one two", 6, bullet="💖")
        assert lines == ["💖 one", "   two"]

    def test_lines_fit_width(self) -> None:
        text = "the quick brown fox jumps over the lazy dog " * 3
        for line in wrap(text, 17):
            assert display_width(line) <= 17


class TestAffirmation:
    """Tests for affirmation formatting."""

    @pytest.mark.parametrize(
        "position,expected",
        [
            ("left", "♥ Hi"),
            ("right", "Hi ♥"),
            ("both", "♥ Hi ♥"),
            ("none", "Hi"),
        ],
    )
    def test_positions(self, position: str, expected: str) -> None:
        assert format_affirmation("Hi", "♥", position) == expected

    def test_fits_unchanged(self) -> None:
        assert fit_affirmation("Hi", "♥", "left", 20) == "♥ Hi"

    def test_truncation_keeps_heart(self) -> None:
        result = fit_affirmation("You are doing great", "💖", "left", 12)
        assert result.startswith("💖 ")
        assert result.endswith("...")
        assert display_width(result) <= 12

    def test_truncation_keeps_both_hearts(self) -> None:
        result = fit_affirmation("You are doing great today", "♥", "both", 15)
        assert result.startswith("♥ ")
        assert result.endswith(" ♥")
        assert display_width(result) <= 15


class TestRenderBox:
    """Tests for render_box."""

    def test_no_tasks(self) -> None:
        assert render_box(TaskList(), Configuration(), 80, "Hi") == ""

    def test_too_narrow(self, tasks: TaskList) -> None:
        # 18 columns minus the default right padding of 4 leaves 14
        assert render_box(tasks, Configuration(), 18) == ""

    @pytest.mark.parametrize("use_color", [True, False])
    def test_lines_aligned(self, tasks: TaskList, use_color: bool) -> None:
        out = render_box(tasks, Configuration(), 80, "You are doing great", use_color)
        widths = {display_width(line) for line in out.split("\n")}
        assert widths == {80}

    def test_long_task_still_aligned(self) -> None:
        tl = TaskList([Task("word " * 40, 167), Task("supercalifragilisticexpialidocious" * 2, 71)])
        out = render_box(tl, Configuration(), 60, "Keep going!", use_color=True)
        widths = {display_width(line) for line in out.split("\n")}
        assert len(widths) == 1

    def test_layout(self, tasks: TaskList) -> None:
        lines = render_box(tasks, Configuration(), 80, "You are doing great", use_color=False).split("\n")
        assert len(lines) == 5
        assert lines[0].strip().startswith("┌")
        assert lines[-1].strip().endswith("┘")
        assert "REMEMBER" in lines[1]
        assert "▪ Buy groceries" in lines[2]
        assert "▪ Call the dentist" in lines[3]
        # affirmation on the middle content line
        assert lines[2].startswith("♥ You are doing great")

    def test_no_color_output_is_plain(self, tasks: TaskList) -> None:
        out = render_box(tasks, Configuration(), 80, "Hi", use_color=False)
        assert "\x1b" not in out

    def test_task_color_on_bullet(self, tasks: TaskList) -> None:
        out = render_box(tasks, Configuration(), 80, "Hi", use_color=True)
        assert "\x1b[38;5;167m▪" in out

    def test_affirmation_hidden(self, tasks: TaskList) -> None:
        config = Configuration()
        config.set("show-affirmation", "false")
        out = render_box(tasks, config, 80, "You are doing great", use_color=False)
        assert "You are doing great" not in out

    def test_custom_glyphs(self, tasks: TaskList) -> None:
        config = Configuration()
        config.apply({"box-top-left": "╔", "box-vertical": "║", "bullet-char": "●"})
        out = render_box(tasks, config, 80, use_color=False)
        assert "╔" in out
        assert "║ ● Buy groceries" in out


class TestRenderPrompt:
    """Tests for render_prompt."""

    def test_padding_lines(self, tasks: TaskList) -> None:
        config = Configuration()
        config.apply({"padding-top": "2", "padding-bottom": "1"})
        out = render_prompt(tasks, config, 80, use_color=False)
        assert out.startswith("\n\n")
        assert out.endswith("\n")

    def test_box_hidden(self, tasks: TaskList) -> None:
        config = Configuration()
        config.set("show-box", "false")
        assert render_prompt(tasks, config, 80) == ""
