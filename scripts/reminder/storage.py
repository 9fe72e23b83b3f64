"""
Save file persistence for the reminder.

File format (UTF-8, newline separated):
    line 1: task texts joined by NUL
    line 2: task color codes joined by NUL, same order and count as line 1
    line 3: palette position of the next task, counted from 1
    line 4: optional config snapshot, KEY=value pairs joined by NUL

Several shells share one file. Each load checks a cheap modification token
(mtime in ns plus size) and reuses the in-memory copy when it has not
changed. Writes go to a temp file that is renamed over the original, so a
reader never sees a partial file. Concurrent writers are last-writer-wins.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

from reminder.config import Configuration
from reminder.models import Task, TaskList
from reminder.palette import format_color_code, parse_color_code, regenerate_colors

logger = logging.getLogger(__name__)

SEPARATOR = "\x00"
VALID_LINE_COUNTS = (3, 4)

Token = tuple[int, int]


def default_save_file() -> Path:
    return Path(os.environ.get("TODO_SAVE_FILE") or Path.home() / ".todo.save")


class RecordFormatError(ValueError):
    """The save file does not have the expected number of lines."""

    def __init__(self, line_count: int):
        super().__init__(f"expected 3 or 4 lines, got {line_count}")
        self.line_count = line_count


@dataclass
class PersistedRecord:
    """Raw fields of a save file, before colors and config are interpreted."""

    texts: list[str] = field(default_factory=list)
    color_codes: list[str] = field(default_factory=list)
    cursor: str = "0"
    config: dict[str, str] | None = None


def encode_fields(fields: list[str]) -> str:
    """Join fields with the separator; fields may not contain it or a newline."""
    for value in fields:
        if SEPARATOR in value or "\n" in value:
            raise ValueError(f"Field cannot contain NUL or newline: {value!r}")
    return SEPARATOR.join(fields)


def decode_fields(line: str) -> list[str]:
    return line.split(SEPARATOR) if line else []


def decode_cursor(raw: str, palette_size: int) -> int:
    """0-based cursor from the 1-based position on line 3; bad values read as 0."""
    if not raw.isdigit() or int(raw) == 0:
        return 0
    return (int(raw) - 1) % palette_size


def encode_record(task_list: TaskList, config: Configuration) -> str:
    pairs = [f"{k}={v}" for k, v in config.snapshot().items()]
    lines = [
        encode_fields(task_list.texts),
        encode_fields([format_color_code(c) for c in task_list.colors]),
        str(task_list.cursor + 1),
        encode_fields(pairs),
    ]
    return "\n".join(lines) + "\n"


def decode_record(content: str) -> PersistedRecord | None:
    """Split save file content into fields.

    Returns None for a blank file. Raises RecordFormatError when the line
    count is not 3 or 4.
    """
    if not content.strip("\n"):
        return None
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    if len(lines) not in VALID_LINE_COUNTS:
        raise RecordFormatError(len(lines))

    config = None
    if len(lines) == 4:
        config = {}
        for pair in decode_fields(lines[3]):
            key, sep, value = pair.partition("=")
            if sep:
                config[key] = value
    return PersistedRecord(
        texts=decode_fields(lines[0]),
        color_codes=decode_fields(lines[1]),
        cursor=lines[2].strip(),
        config=config,
    )


class TaskStore:
    """Loads and saves the task list and config snapshot for one save file."""

    def __init__(self, path: Path | None = None, base_config: Configuration | None = None):
        self.path = Path(path) if path is not None else default_save_file()
        self.base_config = base_config if base_config is not None else Configuration.from_env()
        self._token: Token | None = None
        self._cached: tuple[TaskList, Configuration] | None = None

    # -------------------- cache --------------------

    def file_token(self) -> Token | None:
        """Modification token of the save file, None if it does not exist."""
        try:
            st = self.path.stat()
        except OSError:
            return None
        return st.st_mtime_ns, st.st_size

    def _remember(self, task_list: TaskList, config: Configuration, token: Token | None) -> None:
        self._cached = (task_list.copy(), config.copy())
        self._token = token

    def invalidate(self) -> None:
        self._cached = None
        self._token = None

    # -------------------- load --------------------

    def load(self) -> tuple[TaskList, Configuration]:
        """Return the current task list and configuration.

        Never raises for I/O or format problems; those fall back to an empty
        list with the base configuration and are reported as warnings.
        """
        token = self.file_token()
        if self._cached is not None and token == self._token:
            task_list, config = self._cached
            return task_list.copy(), config.copy()

        task_list, config = self._read(token)
        return task_list.copy(), config.copy()

    def _read(self, token: Token | None) -> tuple[TaskList, Configuration]:
        config = self.base_config.copy()
        empty = TaskList()

        if token is None:
            self._remember(empty, config, None)
            return empty, config

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read todo file %s: %s", self.path, e)
            self.invalidate()
            return empty, config

        try:
            record = decode_record(content)
        except RecordFormatError as e:
            logger.warning("Invalid todo file format (%s), creating backup and resetting", e)
            self.backup()
            # Remember the reset state against this token so the bad file is
            # not backed up again on every prompt.
            self._remember(empty, config, token)
            return empty, config

        if record is None:
            self._remember(empty, config, token)
            return empty, config

        if record.config is not None:
            config.load_snapshot(record.config)

        palette = config["colors"]
        cursor = decode_cursor(record.cursor, len(palette))
        colors = [parse_color_code(code) for code in record.color_codes]

        if len(colors) != len(record.texts) or None in colors:
            logger.info("Color count does not match task count, regenerating colors")
            new_colors, cursor = regenerate_colors(len(record.texts), palette)
            task_list = TaskList([Task(t, c) for t, c in zip(record.texts, new_colors)], cursor)
            self.save(task_list, config)
            return task_list, config

        task_list = TaskList([Task(t, c) for t, c in zip(record.texts, colors)], cursor)
        self._remember(task_list, config, token)
        return task_list, config

    def backup(self) -> Path | None:
        """Copy the save file to <name>.backup.<unix time>; None on failure."""
        stamp = int(time.time())
        target = self.path.with_name(f"{self.path.name}.backup.{stamp}")
        n = 1
        while target.exists():
            target = self.path.with_name(f"{self.path.name}.backup.{stamp}.{n}")
            n += 1
        try:
            shutil.copy2(self.path, target)
        except OSError as e:
            logger.warning("Could not back up todo file %s: %s", self.path, e)
            return None
        logger.warning("Backup created: %s", target)
        return target

    # -------------------- save --------------------

    def save(self, task_list: TaskList, config: Configuration) -> bool:
        """Atomically write the file. Returns False (and warns) on I/O failure."""
        content = encode_record(task_list, config)
        tmp = self.path.with_name(f"{self.path.name}.tmp.{os.getpid()}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            logger.warning("Could not save todo file %s: %s", self.path, e)
            return False
        self._remember(task_list, config, self.file_token())
        return True
