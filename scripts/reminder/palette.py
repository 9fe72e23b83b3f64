"""
Color cycling for new tasks and 256-color escape helpers.

Task colors are written to the save file as foreground escape sequences
(ESC[38;5;Nm) so files stay readable by older versions of the tool; plain
numbers are accepted as well when reading.
"""

import re
from typing import Sequence

RESET = "\033[0m"
RESET_FG = "\033[39m"
RESET_BG = "\033[49m"

_COLOR_CODE_RE = re.compile(r"^(?:\x1b\[38;5;)?(\d{1,3})m?$")


def ansi_fg(color: int) -> str:
    return f"\033[38;5;{color}m"


def ansi_bg(color: int) -> str:
    return f"\033[48;5;{color}m"


def next_color(cursor: int, palette: Sequence[int]) -> tuple[int, int]:
    """Return (palette[cursor], next cursor), wrapping at the end of the palette."""
    if not palette:
        raise ValueError("palette must not be empty")
    cursor %= len(palette)
    return palette[cursor], (cursor + 1) % len(palette)


def regenerate_colors(count: int, palette: Sequence[int]) -> tuple[list[int], int]:
    """Assign colors to count tasks starting from the first palette entry.

    Returns (colors, cursor for the next task).
    """
    colors = []
    cursor = 0
    for _ in range(count):
        color, cursor = next_color(cursor, palette)
        colors.append(color)
    return colors, cursor


def format_color_code(color: int) -> str:
    """Serialized form of a task color."""
    return ansi_fg(color)


def parse_color_code(code: str) -> int | None:
    """Parse ESC[38;5;Nm or a bare number; None if malformed or out of range."""
    match = _COLOR_CODE_RE.match(code.strip())
    if not match:
        return None
    value = int(match.group(1))
    return value if value <= 255 else None
