"""
Data model for the reminder task list.
"""

from __future__ import annotations

from dataclasses import dataclass, field

MAX_TASK_LENGTH = 500
TRUNCATION_MARK = "..."


@dataclass(frozen=True)
class Task:
    """A single reminder line.

    text: display string, control characters already removed.
    color: 256-color palette value used for the bullet.
    """

    text: str
    color: int


@dataclass
class TaskList:
    """Ordered tasks plus the palette cursor for the next new task."""

    tasks: list[Task] = field(default_factory=list)
    cursor: int = 0

    def __len__(self) -> int:
        return len(self.tasks)

    @property
    def texts(self) -> list[str]:
        return [t.text for t in self.tasks]

    @property
    def colors(self) -> list[int]:
        return [t.color for t in self.tasks]

    def copy(self) -> TaskList:
        return TaskList(list(self.tasks), self.cursor)

    def append(self, task: Task) -> None:
        self.tasks.append(task)

    def find(self, pattern: str) -> int | None:
        """Index of the first task whose text starts with pattern, ignoring case."""
        needle = pattern.casefold()
        for i, task in enumerate(self.tasks):
            if task.text.casefold().startswith(needle):
                return i
        return None

    def pop(self, index: int) -> Task:
        return self.tasks.pop(index)


def sanitize_task_text(raw: str) -> tuple[str, bool]:
    """Strip control characters and enforce the length limit.

    Returns (text, truncated).
    """
    text = raw.replace("\t", " ").replace("\r\n", " ").replace("\n", " ")
    text = "".join(ch for ch in text if ord(ch) >= 0x20 and ch != "\x7f").strip()
    if len(text) > MAX_TASK_LENGTH:
        keep = MAX_TASK_LENGTH - len(TRUNCATION_MARK)
        return text[:keep] + TRUNCATION_MARK, True
    return text, False
