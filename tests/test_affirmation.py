"""Tests for affirmation.py - reading the affirmation cache."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.affirmation import FALLBACK_AFFIRMATION, default_affirmation_file, read_affirmation


class TestReadAffirmation:
    """Tests for read_affirmation."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_affirmation(tmp_path / "missing") == FALLBACK_AFFIRMATION

    def test_first_line(self, tmp_path: Path) -> None:
        path = tmp_path / "aff"
        path.write_text("You are doing great\nsecond line\n")
        assert read_affirmation(path) == "You are doing great"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "aff"
        path.write_text("\n")
        assert read_affirmation(path) == FALLBACK_AFFIRMATION

    def test_too_long(self, tmp_path: Path) -> None:
        path = tmp_path / "aff"
        path.write_text("x" * 201)
        assert read_affirmation(path) == FALLBACK_AFFIRMATION

    def test_escape_sequences_dropped(self, tmp_path: Path) -> None:
        path = tmp_path / "aff"
        path.write_text("\x1b[31mBe kind\n")
        assert read_affirmation(path) == "[31mBe kind"


class TestDefaultAffirmationFile:
    """Tests for default_affirmation_file."""

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODO_AFFIRMATION_FILE", "/var/tmp/aff")
        assert default_affirmation_file() == Path("/var/tmp/aff")

    def test_tmpdir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("TODO_AFFIRMATION_FILE", raising=False)
        monkeypatch.setenv("TMPDIR", str(tmp_path))
        assert default_affirmation_file() == tmp_path / "todo_affirmation"
