"""Tests for hints.py and swatches.py."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from reminder.config import Configuration, ConfigError
from reminder.hints import pick_hint
from reminder.swatches import color_reference, preview_presets, swatch


class TestPickHint:
    """Tests for pick_hint."""

    def test_empty_state_sampled(self) -> None:
        config = Configuration()
        assert "No tasks yet" in pick_hint(0, config, now=10, use_color=False)
        assert pick_hint(0, config, now=11, use_color=False) == ""

    def test_few_tasks_no_hint(self) -> None:
        assert pick_hint(3, Configuration(), now=20, use_color=False) == ""

    def test_preset_hint(self) -> None:
        assert "config preset" in pick_hint(6, Configuration(), now=20, use_color=False)

    def test_hide_hint(self) -> None:
        assert "todo hide" in pick_hint(9, Configuration(), now=40, use_color=False)

    def test_disabled(self) -> None:
        config = Configuration()
        config.set("show-hints", "false")
        assert pick_hint(0, config, now=10) == ""

    def test_mentions_how_to_disable(self) -> None:
        assert "show-hints false" in pick_hint(0, Configuration(), now=0, use_color=False)


class TestSwatches:
    """Tests for color swatches."""

    def test_swatch_label(self) -> None:
        assert swatch(5).startswith("005\x1b[48;5;5m")

    def test_reference_lists_current_colors(self) -> None:
        out = color_reference(Configuration())
        assert "Current Colors" in out
        assert "167\x1b[48;5;167m" in out

    def test_preview_one(self) -> None:
        out = preview_presets("loud")
        assert out.startswith("loud")
        assert "subtle" not in out

    def test_preview_all(self) -> None:
        out = preview_presets()
        for name in ("subtle", "balanced", "vibrant", "loud"):
            assert name in out

    def test_preview_unknown(self) -> None:
        with pytest.raises(ConfigError):
            preview_presets("neon")
