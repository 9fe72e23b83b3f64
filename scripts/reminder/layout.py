"""
Word wrapping and box layout for the prompt display.

The box sits on the right of the terminal; the affirmation sits on the left,
on the middle content line:

    ♥ You are doing great          ┌────────────────────┐
                                   │ REMEMBER           │
                                   │ ▪ Buy groceries    │
                                   │ ▪ Call the dentist │
                                   └────────────────────┘

All width arithmetic goes through reminder.width so colored text never
throws the borders out of line.
"""

from __future__ import annotations

import math

from reminder.config import Configuration
from reminder.models import TaskList
from reminder.palette import RESET_BG, RESET_FG, ansi_bg, ansi_fg
from reminder.width import display_width, truncate_to_width

# Below this many usable columns nothing is drawn.
MIN_USABLE_WIDTH = 15
MIN_AFFIRMATION_WIDTH = 10
ELLIPSIS = "..."


def _split_long_word(word: str, width: int) -> list[str]:
    """Break a word wider than width into width-sized chunks."""
    if display_width(word) <= width:
        return [word]
    chunks = []
    rest = word
    while rest:
        chunk = truncate_to_width(rest, width) or rest[0]
        chunks.append(chunk)
        rest = rest[len(chunk):]
    return chunks


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap of plain text to width columns."""
    lines: list[str] = []
    current = ""
    current_width = 0
    for word in text.split():
        for piece in _split_long_word(word, width):
            piece_width = display_width(piece)
            if not current:
                current, current_width = piece, piece_width
            elif current_width + piece_width + 1 <= width:
                current += " " + piece
                current_width += piece_width + 1
            else:
                lines.append(current)
                current, current_width = piece, piece_width
    if current:
        lines.append(current)
    return lines


def wrap(
    text: str,
    max_width: int,
    is_title: bool = False,
    bullet: str = "▪",
    bullet_style: str = "",
    text_style: str = "",
) -> list[str]:
    """Lay out one title or task as display lines.

    A title is a single line without a bullet (callers truncate it first).
    A task gets "<bullet> " before its first line; continuation lines are
    indented by the same number of columns. Styles are escape sequences put
    in front of the bullet and the text; leave them empty for plain output.
    """
    if not text.strip():
        return []
    if is_title:
        return [f"{text_style}{text}"]

    indent = display_width(bullet) + 1
    lines = wrap_words(text, max(1, max_width - indent))
    out = []
    for i, line in enumerate(lines):
        if i == 0:
            out.append(f"{bullet_style}{bullet}{text_style} {line}")
        else:
            out.append(f"{text_style}{' ' * indent}{line}")
    return out


def compute_box_width(columns: int, fraction: float, min_width: int, max_width: int) -> int:
    """round(columns * fraction), clamped to [min_width, max_width] and then to columns."""
    width = math.floor(columns * fraction + 0.5)
    width = max(width, min_width)
    width = min(width, max_width)
    return min(width, columns)


def format_affirmation(text: str, heart: str, position: str) -> str:
    """Attach the heart glyph(s) to the affirmation text."""
    if not text:
        if position == "none":
            return ""
        return f"{heart} {heart}" if position == "both" else heart
    if position == "left":
        return f"{heart} {text}"
    if position == "right":
        return f"{text} {heart}"
    if position == "both":
        return f"{heart} {text} {heart}"
    return text


def fit_affirmation(text: str, heart: str, position: str, budget: int) -> str:
    """Format the affirmation so it fits in budget columns.

    Only the text is shortened; the heart(s) are attached afterwards so they
    are never cut off.
    """
    formatted = format_affirmation(text, heart, position)
    if display_width(formatted) <= budget:
        return formatted

    hearts = {"left": 1, "right": 1, "both": 2}.get(position, 0)
    room = budget - len(ELLIPSIS) - hearts * (display_width(heart) + 1)
    if room > 0:
        short = truncate_to_width(text, room).rstrip() + ELLIPSIS
        return format_affirmation(short, heart, position)
    fallback = format_affirmation("", heart, position)
    return fallback if display_width(fallback) <= budget else ""


def _rule(left: str, fill: str, right: str, width: int) -> str:
    """Border line of exactly width columns."""
    inner = width - display_width(left) - display_width(right)
    fill_width = max(1, display_width(fill))
    count = max(0, inner) // fill_width
    remainder = max(0, inner) - count * fill_width
    return left + fill * count + " " * remainder + right


def render_box(
    task_list: TaskList,
    config: Configuration,
    columns: int,
    affirmation: str = "",
    use_color: bool = True,
) -> str:
    """Render the task box with the affirmation beside it.

    Returns "" when there are no tasks or the terminal is too narrow.
    """
    if not task_list.tasks:
        return ""

    pad_left = config["padding-left"]
    pad_right = config["padding-right"]
    effective = columns - pad_left - pad_right
    if effective < MIN_USABLE_WIDTH:
        return ""

    def c(code: str) -> str:
        return code if use_color else ""

    box_width = compute_box_width(
        columns, config["box-width"], config["box-min-width"], config["box-max-width"]
    )
    vertical = config["box-vertical"]
    content_width = max(1, box_width - 2 * display_width(vertical) - 2)
    left_width = max(MIN_AFFIRMATION_WIDTH, effective - box_width)

    border = c(ansi_fg(config["border-color"])) + c(ansi_bg(config["border-bg-color"]))
    border_fg = c(ansi_fg(config["border-color"]))
    content_bg = c(ansi_bg(config["content-bg-color"]))
    text_fg = c(ansi_fg(config["text-color"]))
    title_fg = c(ansi_fg(config["title-color"]))
    affirmation_fg = c(ansi_fg(config["affirmation-color"]))
    reset_bg = c(RESET_BG)
    reset_fg = c(RESET_FG)

    # Title first, then every task
    title = truncate_to_width(config["title"], content_width)
    content = wrap(title, content_width, is_title=True, text_style=title_fg)
    for task in task_list.tasks:
        content.extend(wrap(
            task.text,
            content_width,
            bullet=config["bullet-char"],
            bullet_style=c(ansi_fg(task.color)),
            text_style=text_fg,
        ))

    left_text = ""
    if config["show-affirmation"] and affirmation.strip():
        left_text = fit_affirmation(
            affirmation.strip(), config["heart-char"], config["heart-position"], left_width
        )

    def side_by_side(left: str, right: str) -> str:
        parts = [" " * pad_left]
        if left:
            parts.append(f"{affirmation_fg}{left}{reset_fg}")
            parts.append(" " * max(0, left_width - display_width(left)))
        else:
            parts.append(" " * left_width)
        parts.append(right)
        parts.append(" " * pad_right)
        return "".join(parts)

    top = _rule(config["box-top-left"], config["box-horizontal"], config["box-top-right"], box_width)
    bottom = _rule(
        config["box-bottom-left"], config["box-horizontal"], config["box-bottom-right"], box_width
    )
    side = f"{border}{vertical}{reset_bg}"
    middle = len(content) // 2

    lines = [side_by_side("", f"{border}{top}{reset_bg}{reset_fg}")]
    for i, line in enumerate(content):
        padding = " " * max(0, content_width - display_width(line))
        box_line = f"{side}{content_bg} {line}{border_fg}{padding} {reset_bg}{side}{reset_fg}"
        lines.append(side_by_side(left_text if i == middle else "", box_line))
    lines.append(side_by_side("", f"{border}{bottom}{reset_bg}{reset_fg}"))
    return "\n".join(lines)


def render_prompt(
    task_list: TaskList,
    config: Configuration,
    columns: int,
    affirmation: str = "",
    use_color: bool = True,
) -> str:
    """Full pre-prompt output: the box plus top/bottom padding lines."""
    if not config["show-box"]:
        return ""
    box = render_box(task_list, config, columns, affirmation, use_color)
    if not box:
        return ""
    top = [""] * config["padding-top"]
    bottom = [""] * config["padding-bottom"]
    return "\n".join(top + [box] + bottom)
