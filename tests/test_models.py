"""Tests for models.py - task list and task text cleanup."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.models import MAX_TASK_LENGTH, Task, TaskList, sanitize_task_text


class TestSanitizeTaskText:
    """Tests for sanitize_task_text."""

    def test_whitespace_collapsed_to_spaces(self) -> None:
        assert sanitize_task_text("  Buy\tmilk\n ") == ("Buy milk", False)

    def test_control_characters_removed(self) -> None:
        text, _ = sanitize_task_text("\x1b[31mred\x00")
        assert text == "[31mred"

    def test_long_text_truncated(self) -> None:
        text, truncated = sanitize_task_text("a" * 600)
        assert truncated is True
        assert len(text) == MAX_TASK_LENGTH
        assert text.endswith("...")

    def test_exact_limit_kept(self) -> None:
        text, truncated = sanitize_task_text("b" * MAX_TASK_LENGTH)
        assert truncated is False
        assert len(text) == MAX_TASK_LENGTH


class TestTaskList:
    """Tests for TaskList."""

    def test_find_is_case_insensitive_prefix(self) -> None:
        tl = TaskList([Task("Call mom", 1), Task("Buy milk", 2), Task("buy bread", 3)])
        assert tl.find("BUY") == 1
        assert tl.find("milk") is None

    def test_copy_is_independent(self) -> None:
        tl = TaskList([Task("a", 1)], cursor=1)
        other = tl.copy()
        other.append(Task("b", 2))
        assert len(tl) == 1
        assert len(other) == 2

    def test_texts_and_colors_line_up(self) -> None:
        tl = TaskList([Task("a", 1), Task("b", 2)])
        assert tl.texts == ["a", "b"]
        assert tl.colors == [1, 2]
