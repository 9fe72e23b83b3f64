"""
User-facing operations.

Each operation loads the current state, applies one change, saves before
returning, and reports (success, message). Messages are meant for humans;
callers route failures to stderr.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from reminder.affirmation import read_affirmation
from reminder.config import (
    PRESET_DESCRIPTIONS,
    SETTINGS_BY_ENV,
    SETTINGS_BY_KEY,
    ConfigError,
    apply_preset,
    lookup,
    parse_export,
)
from reminder.hints import pick_hint
from reminder.layout import MIN_USABLE_WIDTH, render_prompt
from reminder.models import Task, TaskList, sanitize_task_text
from reminder.palette import next_color
from reminder.storage import TaskStore

logger = logging.getLogger(__name__)

Result = tuple[bool, str]

TOGGLE_ACTIONS = ("show", "hide", "toggle")
RESET_SCOPES = ("all", "colors")
NARROW_WARNING_PERIOD = 20


def _numbered(task_list: TaskList, indent: str = "  ") -> list[str]:
    return [f"{indent}{i}. {text}" for i, text in enumerate(task_list.texts, start=1)]


def _resolve(action: str, current: bool) -> bool | None:
    if action == "show":
        return True
    if action == "hide":
        return False
    if action == "toggle":
        return not current
    return None


class Reminder:
    """Task and configuration commands bound to one save file."""

    def __init__(self, store: TaskStore, affirmation_file: Path | None = None):
        self.store = store
        self.affirmation_file = affirmation_file

    def _save(self, task_list: TaskList, config, success: str) -> Result:
        if not self.store.save(task_list, config):
            return False, f"Could not save todo file {self.store.path}"
        return True, success

    # -------------------- tasks --------------------

    def add(self, text: str) -> Result:
        """Append a task with the next palette color."""
        clean, truncated = sanitize_task_text(text)
        if not clean:
            return False, 'Task text is empty. Usage: todo "task description"'
        if truncated:
            logger.warning("Task too long (max 500 characters), truncated")

        task_list, config = self.store.load()
        color, task_list.cursor = next_color(task_list.cursor, config["colors"])
        task_list.append(Task(clean, color))

        message = f'✅ Task added: "{clean}"'
        if len(task_list) == 1:
            message += f'\n💡 Your tasks appear above the prompt. Remove with: todo done "{clean[:10]}"'
        return self._save(task_list, config, message)

    def complete(self, pattern: str) -> Result:
        """Remove the first task starting with pattern (case-insensitive)."""
        task_list, config = self.store.load()

        if not pattern.strip():
            lines = ["Usage: todo done <pattern>", 'Example: todo done "Buy groceries"']
            if task_list.tasks:
                lines.append("Current tasks:")
                lines.extend(_numbered(task_list))
            return False, "\n".join(lines)

        index = task_list.find(pattern)
        if index is None:
            lines = [f"❌ No task found matching: {pattern}"]
            if task_list.tasks:
                lines.append("💡 Available tasks:")
                lines.extend(_numbered(task_list, "   "))
                lines.append(f'💡 Try: todo done "{task_list.texts[0][:10]}"')
            else:
                lines.append('💡 No tasks exist. Add one with: todo "task description"')
            return False, "\n".join(lines)

        removed = task_list.pop(index)
        message = f'✅ Task completed: "{removed.text}"'
        if not task_list.tasks:
            message += '\n🎉 All tasks done! Add new ones with: todo "task description"'
        return self._save(task_list, config, message)

    def list_tasks(self) -> Result:
        task_list, _ = self.store.load()
        if not task_list.tasks:
            return True, "No tasks."
        return True, "\n".join(_numbered(task_list, ""))

    # -------------------- visibility --------------------

    def _toggle(self, keys: tuple[str, ...], action: str, label: str) -> Result:
        task_list, config = self.store.load()
        current = all(config[k] for k in keys)
        state = _resolve(action, current)
        if state is None:
            now = ", ".join(f"{k}={config.serialized(k)}" for k in keys)
            return False, f"Usage: [show|hide|toggle] (current state: {now})"
        config.apply({k: "true" if state else "false" for k in keys})
        return self._save(task_list, config, f"{label} {'enabled' if state else 'disabled'}")

    def toggle_affirmation(self, action: str = "toggle") -> Result:
        return self._toggle(("show-affirmation",), action, "Affirmations")

    def toggle_box(self, action: str = "toggle") -> Result:
        return self._toggle(("show-box",), action, "Todo box")

    def toggle_all(self, action: str = "toggle") -> Result:
        return self._toggle(("show-affirmation", "show-box"), action, "Affirmations and todo box")

    def hide(self) -> Result:
        return self.toggle_all("hide")

    def show(self) -> Result:
        return self.toggle_all("show")

    # -------------------- configuration --------------------

    def config_get(self, key: str) -> Result:
        _, config = self.store.load()
        try:
            return True, config.serialized(key)
        except ConfigError as e:
            return False, str(e)

    def config_set(self, key: str, value: str) -> Result:
        task_list, config = self.store.load()
        try:
            setting = lookup(key)
            config.set(setting.key, value)
        except ConfigError as e:
            return False, f"Error: {e}"
        return self._save(
            task_list, config, f"{setting.description} set to: {config.serialized(setting.key)}"
        )

    def config_reset(self, scope: str = "all") -> Result:
        if scope not in RESET_SCOPES:
            return False, f"Unknown reset scope '{scope}'. Use one of: {', '.join(RESET_SCOPES)}"
        task_list, config = self.store.load()
        colors_only = scope == "colors"
        config.reset(colors_only=colors_only)
        message = "Color configuration reset to defaults" if colors_only else "Configuration reset to defaults"
        return self._save(task_list, config, message)

    def config_apply_preset(self, name: str) -> Result:
        task_list, config = self.store.load()
        try:
            apply_preset(config, name)
        except ConfigError as e:
            return False, f"Error: {e}"
        return self._save(task_list, config, f"Applied preset '{name}': {PRESET_DESCRIPTIONS[name]}")

    def config_export(self, path: Path | None = None, colors_only: bool = False) -> Result:
        """Write settings as KEY=value lines; with no path the text is returned."""
        _, config = self.store.load()
        text = config.export_text(colors_only=colors_only)
        if path is None:
            return True, text.rstrip("\n")
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as e:
            return False, f"Error: could not write {path}: {e}"
        return True, f"Configuration exported to {path}"

    def config_import(self, path: Path, colors_only: bool = False) -> Result:
        """Apply settings from an exported file, all or nothing."""
        try:
            text = Path(path).read_text(encoding="utf-8")
            pairs = parse_export(text)
        except OSError as e:
            return False, f"Error: could not read {path}: {e}"
        except ConfigError as e:
            return False, f"Error: {path}: {e}"

        accepted = {}
        for name, value in pairs.items():
            if name not in SETTINGS_BY_ENV and name not in SETTINGS_BY_KEY:
                logger.info("Ignoring unknown setting %s in %s", name, path)
                continue
            if colors_only and lookup(name).group != "colors":
                continue
            accepted[name] = value
        if not accepted:
            return False, f"Error: no recognised settings in {path}"

        task_list, config = self.store.load()
        try:
            config.apply(accepted)
        except ConfigError as e:
            return False, f"Error: {e}"
        return self._save(task_list, config, f"Imported {len(accepted)} setting(s) from {path}")

    # -------------------- display --------------------

    def render(self, columns: int, use_color: bool = True, now: float | None = None) -> str:
        """Text to print before the prompt ("" when there is nothing to show)."""
        task_list, config = self.store.load()
        if not config["show-box"]:
            return ""

        now = time.time() if now is None else now
        effective = columns - config["padding-left"] - config["padding-right"]
        if effective < MIN_USABLE_WIDTH:
            if task_list.tasks and int(now) % NARROW_WARNING_PERIOD == 0:
                logger.warning(
                    "Terminal too narrow for todo display (need %d+ columns)", MIN_USABLE_WIDTH
                )
            return ""

        affirmation = read_affirmation(self.affirmation_file)
        parts = []
        box = render_prompt(task_list, config, columns, affirmation, use_color)
        if box:
            parts.append(box)
        hint = pick_hint(len(task_list), config, now, use_color)
        if hint:
            parts.append(hint)
        return "\n".join(parts)
