"""
Display width of terminal text.

Escape sequences count as zero columns. Every other character is measured
with the wcwidth table, so emoji and other wide glyphs take two columns while
box drawing characters take one.
"""

import re

from wcwidth import wcwidth

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove color/style escape sequences."""
    return ANSI_RE.sub("", text)


def char_width(ch: str) -> int:
    """Columns taken by a single character (control characters take none)."""
    w = wcwidth(ch)
    return w if w > 0 else 0


def display_width(text: str) -> int:
    """Rendered column width of text, ignoring escape sequences."""
    return sum(char_width(ch) for ch in strip_ansi(text))


def truncate_to_width(text: str, width: int) -> str:
    """Longest prefix of plain text that fits in width columns."""
    if width <= 0:
        return ""
    used = 0
    for i, ch in enumerate(text):
        w = char_width(ch)
        if used + w > width:
            return text[:i]
        used += w
    return text
