"""
Occasional one-line hints shown under the box.

Hints are sampled from the clock so they appear now and then rather than at
every prompt.
"""

import time

from reminder.config import Configuration
from reminder.palette import RESET, ansi_fg

HINT_COLOR = 244
COMMAND_COLOR = 51

EMPTY_STATE_PERIOD = 10
PROGRESSIVE_PERIOD = 20


def _hint(text: str, command: str, use_color: bool) -> str:
    suffix = " (disable: todo config set show-hints false)"
    if not use_color:
        return f"💡 {text} {command}{suffix}"
    gray, cyan = ansi_fg(HINT_COLOR), ansi_fg(COMMAND_COLOR)
    return f"{gray}💡 {text} {cyan}{command}{gray}{suffix}{RESET}"


def pick_hint(
    task_count: int,
    config: Configuration,
    now: float | None = None,
    use_color: bool = True,
) -> str:
    """Hint for this prompt, or "" most of the time."""
    if not config["show-hints"]:
        return ""
    tick = int(time.time() if now is None else now)

    if task_count == 0:
        if tick % EMPTY_STATE_PERIOD != 0:
            return ""
        return _hint("No tasks yet? Try:", 'todo "Something to remember"', use_color)

    if tick % PROGRESSIVE_PERIOD != 0:
        return ""
    if 5 <= task_count < 8:
        return _hint("Lots of tasks? Try a preset:", "todo config preset vibrant", use_color)
    if task_count >= 8:
        return _hint("Many tasks! Hide the display when focused:", "todo hide", use_color)
    return ""
