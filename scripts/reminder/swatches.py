"""
Color swatches for `todo help --colors` and `todo config preview`.
"""

from reminder.config import PRESET_DESCRIPTIONS, PRESETS, Configuration, ConfigError, coerce, lookup
from reminder.palette import RESET, ansi_bg


def swatch(color: int) -> str:
    """Number followed by a block painted in that color."""
    return f"{color:03d}{ansi_bg(color)}    {RESET}"


def swatch_row(start: int, count: int) -> str:
    return " ".join(swatch(n) for n in range(start, min(start + count, 256)))


def color_reference(config: Configuration, row_len: int = 12) -> str:
    """The 256-color table followed by the colors currently configured."""
    lines = [
        "🎨 Color Reference (256-color terminal palette)",
        "━" * 50,
        "",
        "Usage: todo config set colors 196,46,33   # comma-separated",
        "       todo config set border-color 244    # single number",
        "",
        "System Colors (0-15):",
        swatch_row(0, 8),
        swatch_row(8, 8),
        "",
        "Extended Colors (16-231):",
    ]
    for n in range(16, 232, row_len):
        lines.append(swatch_row(n, min(row_len, 232 - n)))
    lines += [
        "",
        "Grayscale Ramp (232-255):",
        swatch_row(232, 12),
        swatch_row(244, 12),
        "",
        "🎨 Current Colors:",
        "    Tasks:      " + " ".join(swatch(n) for n in config["colors"]),
    ]
    for label, key in (
        ("Border", "border-color"),
        ("Border BG", "border-bg-color"),
        ("Content BG", "content-bg-color"),
        ("Text", "text-color"),
        ("Title", "title-color"),
        ("Heart", "affirmation-color"),
    ):
        lines.append(f"    {label + ':':<11} {swatch(config[key])}")
    return "\n".join(lines)


def preview_presets(name: str = "all") -> str:
    """Task color swatches for one preset or all of them."""
    if name == "all":
        names = list(PRESETS)
    elif name in PRESETS:
        names = [name]
    else:
        raise ConfigError(f"Unknown preset '{name}'. Available presets: {', '.join(PRESETS)}")

    lines = []
    for preset in names:
        overrides = PRESETS[preset]
        palette = coerce(lookup("colors"), overrides["colors"])
        lines.append(f"{preset:<9} {PRESET_DESCRIPTIONS[preset]}")
        lines.append("    " + " ".join(swatch(n) for n in palette))
        border = int(overrides["border-color"])
        lines.append(f"    border {swatch(border)}")
    return "\n".join(lines)
