"""
Affirmation cache.

The cache file holds one line of text and is refreshed by something outside
this tool. Rendering only ever reads it; a missing, empty or unreadable file
falls back to a fixed message.
"""

import os
from pathlib import Path

FALLBACK_AFFIRMATION = "Keep going!"
MAX_AFFIRMATION_LENGTH = 200


def default_affirmation_file() -> Path:
    configured = os.environ.get("TODO_AFFIRMATION_FILE")
    if configured:
        return Path(configured)
    return Path(os.environ.get("TMPDIR") or "/tmp") / "todo_affirmation"


def read_affirmation(path: Path | None = None) -> str:
    """First line of the cache file, or the fallback."""
    path = path if path is not None else default_affirmation_file()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return FALLBACK_AFFIRMATION
    lines = text.strip().splitlines()
    first = "".join(ch for ch in lines[0] if ch.isprintable()).strip() if lines else ""
    if not first or len(first) > MAX_AFFIRMATION_LENGTH:
        return FALLBACK_AFFIRMATION
    return first
