"""
Configuration model.

Every setting is described once in SETTINGS: its user-facing key, the
environment variable / save-file key, the default (in serialized form), and
its kind. The JSON schema used for validation is generated from the same
table, so a value is checked the same way whether it comes from the
environment, `todo config set`, an imported file, a preset, or the save file.

Layering (later wins): defaults -> environment -> save file -> runtime set.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A configuration value was rejected; nothing was changed."""


@dataclass(frozen=True)
class Setting:
    key: str
    env: str
    default: str
    kind: str
    description: str
    group: str = "display"
    choices: tuple[str, ...] = ()
    minimum: int = 0


HEART_POSITIONS = ("left", "right", "both", "none")

SETTINGS: tuple[Setting, ...] = (
    Setting("title", "TODO_TITLE", "REMEMBER", "text", "Box title"),
    Setting("heart-char", "TODO_HEART_CHAR", "♥", "glyph", "Affirmation heart character"),
    Setting("heart-position", "TODO_HEART_POSITION", "left", "enum", "Heart position",
            choices=HEART_POSITIONS),
    Setting("bullet-char", "TODO_BULLET_CHAR", "▪", "glyph", "Task bullet character"),
    Setting("box-width", "TODO_BOX_WIDTH_FRACTION", "0.5", "fraction",
            "Box width as a fraction of the terminal"),
    Setting("box-min-width", "TODO_BOX_MIN_WIDTH", "30", "int", "Minimum box width", minimum=1),
    Setting("box-max-width", "TODO_BOX_MAX_WIDTH", "80", "int", "Maximum box width", minimum=1),
    Setting("show-affirmation", "TODO_SHOW_AFFIRMATION", "true", "bool", "Show affirmations"),
    Setting("show-box", "TODO_SHOW_TODO_BOX", "true", "bool", "Show the todo box"),
    Setting("show-hints", "TODO_SHOW_HINTS", "true", "bool", "Show contextual hints"),
    Setting("padding-top", "TODO_PADDING_TOP", "0", "int", "Blank lines above the box"),
    Setting("padding-right", "TODO_PADDING_RIGHT", "4", "int", "Columns right of the box"),
    Setting("padding-bottom", "TODO_PADDING_BOTTOM", "0", "int", "Blank lines below the box"),
    Setting("padding-left", "TODO_PADDING_LEFT", "0", "int", "Columns left of the affirmation"),
    Setting("colors", "TODO_TASK_COLORS", "167,71,136,110,139,73", "palette",
            "Task bullet colors (comma-separated)", group="colors"),
    Setting("border-color", "TODO_BORDER_COLOR", "240", "color", "Border foreground", group="colors"),
    Setting("border-bg-color", "TODO_BORDER_BG_COLOR", "235", "color", "Border background",
            group="colors"),
    Setting("content-bg-color", "TODO_CONTENT_BG_COLOR", "235", "color", "Content background",
            group="colors"),
    Setting("text-color", "TODO_TASK_TEXT_COLOR", "240", "color", "Task text color", group="colors"),
    Setting("title-color", "TODO_TITLE_COLOR", "250", "color", "Title color", group="colors"),
    Setting("affirmation-color", "TODO_AFFIRMATION_COLOR", "109", "color", "Affirmation color",
            group="colors"),
    Setting("box-top-left", "TODO_BOX_TOP_LEFT", "┌", "glyph", "Top left corner"),
    Setting("box-top-right", "TODO_BOX_TOP_RIGHT", "┐", "glyph", "Top right corner"),
    Setting("box-bottom-left", "TODO_BOX_BOTTOM_LEFT", "└", "glyph", "Bottom left corner"),
    Setting("box-bottom-right", "TODO_BOX_BOTTOM_RIGHT", "┘", "glyph", "Bottom right corner"),
    Setting("box-horizontal", "TODO_BOX_HORIZONTAL", "─", "glyph", "Horizontal line"),
    Setting("box-vertical", "TODO_BOX_VERTICAL", "│", "glyph", "Vertical line"),
)

SETTINGS_BY_KEY = {s.key: s for s in SETTINGS}
SETTINGS_BY_ENV = {s.env: s for s in SETTINGS}
COLOR_KEYS = tuple(s.key for s in SETTINGS if s.group == "colors")

# Older variable names still honoured from the environment.
LEGACY_ENV = {
    "TODO_BACKGROUND_COLOR": ("border-bg-color", "content-bg-color"),
    "TODO_TEXT_COLOR": ("text-color",),
}

_NO_CONTROL = "^[^\\x00-\\x1f\\x7f]*$"


def _property_schema(setting: Setting) -> dict:
    if setting.kind == "text":
        return {"type": "string", "minLength": 1, "pattern": _NO_CONTROL}
    if setting.kind == "glyph":
        return {"type": "string", "minLength": 1, "maxLength": 4, "pattern": _NO_CONTROL}
    if setting.kind == "enum":
        return {"type": "string", "enum": list(setting.choices)}
    if setting.kind == "bool":
        return {"type": "boolean"}
    if setting.kind == "int":
        return {"type": "integer", "minimum": setting.minimum}
    if setting.kind == "color":
        return {"type": "integer", "minimum": 0, "maximum": 255}
    if setting.kind == "fraction":
        return {"type": "number", "exclusiveMinimum": 0, "maximum": 1}
    if setting.kind == "palette":
        return {
            "type": "array",
            "minItems": 1,
            "items": {"type": "integer", "minimum": 0, "maximum": 255},
        }
    raise ValueError(f"Unknown setting kind: {setting.kind}")


CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {s.key: _property_schema(s) for s in SETTINGS},
    "required": [s.key for s in SETTINGS],
    "additionalProperties": False,
}

_VALIDATOR = Draft7Validator(CONFIG_SCHEMA)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FRACTION_RE = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")


def lookup(name: str) -> Setting:
    """Find a setting by key ("border-color") or variable name ("TODO_BORDER_COLOR")."""
    setting = SETTINGS_BY_KEY.get(name) or SETTINGS_BY_ENV.get(name)
    if setting is None:
        raise ConfigError(
            f"Unknown setting '{name}'. Available settings: {', '.join(SETTINGS_BY_KEY)}"
        )
    return setting


def coerce(setting: Setting, raw: str) -> Any:
    """Convert a serialized value to its typed form.

    Values that cannot be converted are returned unchanged so that schema
    validation reports them with a proper message.
    """
    raw = raw.strip() if setting.kind not in ("text", "glyph") else raw
    if setting.kind == "bool":
        return {"true": True, "false": False}.get(raw, raw)
    if setting.kind in ("int", "color"):
        return int(raw) if _INT_RE.match(raw) else raw
    if setting.kind == "fraction":
        return float(raw) if _FRACTION_RE.match(raw) else raw
    if setting.kind == "palette":
        parts = [p.strip() for p in raw.split(",")]
        if raw and all(_INT_RE.match(p) for p in parts):
            return [int(p) for p in parts]
        return raw
    return raw


def serialize(setting: Setting, value: Any) -> str:
    """Plain string form used in the save file and in exports."""
    if setting.kind == "bool":
        return "true" if value else "false"
    if setting.kind == "palette":
        return ",".join(str(v) for v in value)
    return str(value)


def check_schema(values: Mapping[str, Any]) -> None:
    """Check each value against its own schema, ignoring cross-setting rules."""
    error = best_match(_VALIDATOR.iter_errors(dict(values)))
    if error is not None:
        key = error.absolute_path[0] if error.absolute_path else "config"
        raise ConfigError(f"Invalid value for '{key}': {error.message}")


def validate_values(values: Mapping[str, Any]) -> None:
    """Validate a complete typed value mapping; raise ConfigError on the first problem."""
    check_schema(values)
    if values["box-min-width"] > values["box-max-width"]:
        raise ConfigError(
            f"box-min-width ({values['box-min-width']}) must not exceed "
            f"box-max-width ({values['box-max-width']})"
        )


DEFAULTS: dict[str, Any] = {s.key: coerce(s, s.default) for s in SETTINGS}


class Configuration:
    """Validated settings passed explicitly to storage and rendering."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        merged = dict(DEFAULTS)
        if values:
            merged.update(values)
        validate_values(merged)
        self._values = merged

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Configuration:
        """Defaults overridden by TODO_* environment variables."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, str] = {}
        for legacy, keys in LEGACY_ENV.items():
            if environ.get(legacy):
                for key in keys:
                    overrides[key] = environ[legacy]
        # Empty variables mean "use the default", like ${VAR:-default}
        for setting in SETTINGS:
            if environ.get(setting.env):
                overrides[setting.key] = environ[setting.env]
        config = cls()
        try:
            config.apply(overrides)
        except ConfigError as e:
            raise ConfigError(f"Environment: {e}") from e
        return config

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self._values == other._values

    def get(self, key: str) -> Any:
        return self._values[lookup(key).key]

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def copy(self) -> Configuration:
        return Configuration(self._values)

    def apply(self, overrides: Mapping[str, str]) -> None:
        """Apply serialized overrides all-or-nothing."""
        candidate = dict(self._values)
        for name, raw in overrides.items():
            setting = lookup(name)
            candidate[setting.key] = coerce(setting, raw)
        validate_values(candidate)
        self._values = candidate

    def set(self, name: str, raw: str) -> Any:
        """Set one setting from its string form; returns the stored value."""
        setting = lookup(name)
        self.apply({setting.key: raw})
        return self._values[setting.key]

    def reset(self, colors_only: bool = False) -> None:
        if colors_only:
            for key in COLOR_KEYS:
                self._values[key] = DEFAULTS[key]
        else:
            self._values = dict(DEFAULTS)

    def serialized(self, key: str) -> str:
        setting = lookup(key)
        return serialize(setting, self._values[setting.key])

    def snapshot(self, keys: Iterable[str] | None = None) -> dict[str, str]:
        """Ordered {VARIABLE_NAME: value} for the save file."""
        wanted = set(keys) if keys is not None else None
        return {
            s.env: serialize(s, self._values[s.key])
            for s in SETTINGS
            if wanted is None or s.key in wanted
        }

    def load_snapshot(self, pairs: Mapping[str, str]) -> list[str]:
        """Apply a persisted snapshot.

        Only known variable names are accepted; other keys are ignored. The
        snapshot is applied as a whole when it is valid. Otherwise invalid
        values are skipped one by one so a single bad entry does not discard
        the rest, and the box width bounds are checked once at the end.
        Returns the names that were skipped.
        """
        known = {name: raw for name, raw in pairs.items() if name in SETTINGS_BY_ENV}
        try:
            self.apply(known)
        except ConfigError:
            return self._load_partial(known)
        return []

    def _load_partial(self, known: Mapping[str, str]) -> list[str]:
        candidate = dict(self._values)
        skipped = []
        for name, raw in known.items():
            setting = SETTINGS_BY_ENV[name]
            trial = dict(candidate)
            trial[setting.key] = coerce(setting, raw)
            try:
                check_schema(trial)
            except ConfigError as e:
                logger.warning("Ignoring saved setting %s: %s", name, e)
                skipped.append(name)
                continue
            candidate = trial

        try:
            validate_values(candidate)
        except ConfigError as e:
            for key in ("box-min-width", "box-max-width"):
                candidate[key] = self._values[key]
                env = SETTINGS_BY_KEY[key].env
                if env in known and env not in skipped:
                    logger.warning("Ignoring saved setting %s: %s", env, e)
                    skipped.append(env)
        self._values = candidate
        return skipped

    def export_text(self, colors_only: bool = False) -> str:
        """Shell-compatible KEY=value lines for `todo config export`."""
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        scope = "color settings" if colors_only else "settings"
        lines = [f"# Todo reminder {scope}, exported {stamp}"]
        keys = COLOR_KEYS if colors_only else None
        for env, value in self.snapshot(keys).items():
            lines.append(f"{env}={shlex.quote(value)}")
        return "\n".join(lines) + "\n"


def parse_export(text: str) -> dict[str, str]:
    """Parse KEY=value lines written by export_text.

    Accepts an optional leading `export`, shell quoting, and # comments.
    Keys are returned as written; callers decide which ones they accept.
    """
    pairs: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise ConfigError(f"Line {lineno}: {e}") from e
        if tokens and tokens[0] == "export":
            tokens = tokens[1:]
        for token in tokens:
            name, sep, value = token.partition("=")
            if not sep or not name:
                raise ConfigError(f"Line {lineno}: expected KEY=value, got '{token}'")
            pairs[name] = value
    return pairs


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

PRESET_DESCRIPTIONS = {
    "subtle": "Minimal decoration, muted colors",
    "balanced": "Professional appearance, moderate colors",
    "vibrant": "Bright colors, full decoration",
    "loud": "Maximum contrast, high visibility",
}

PRESETS: dict[str, dict[str, str]] = {
    "subtle": {
        "colors": "244,245,246,247,248,249",
        "border-color": "238",
        "border-bg-color": "234",
        "content-bg-color": "234",
        "text-color": "244",
        "title-color": "246",
        "affirmation-color": "243",
        "bullet-char": "·",
        "heart-char": "♡",
        "heart-position": "none",
    },
    "balanced": {
        "colors": "167,71,136,110,139,73",
        "border-color": "240",
        "border-bg-color": "235",
        "content-bg-color": "235",
        "text-color": "245",
        "title-color": "250",
        "affirmation-color": "109",
        "bullet-char": "▪",
        "heart-char": "♥",
        "heart-position": "left",
        "box-top-left": "╭",
        "box-top-right": "╮",
        "box-bottom-left": "╰",
        "box-bottom-right": "╯",
    },
    "vibrant": {
        "colors": "196,46,33,226,201,51",
        "border-color": "39",
        "border-bg-color": "235",
        "content-bg-color": "235",
        "text-color": "252",
        "title-color": "255",
        "affirmation-color": "213",
        "bullet-char": "●",
        "heart-char": "💖",
        "heart-position": "left",
    },
    "loud": {
        "colors": "196,226,46,51,201,208",
        "border-color": "226",
        "border-bg-color": "196",
        "content-bg-color": "0",
        "text-color": "255",
        "title-color": "226",
        "affirmation-color": "196",
        "bullet-char": "▶",
        "heart-char": "♥",
        "heart-position": "both",
        "box-top-left": "╔",
        "box-top-right": "╗",
        "box-bottom-left": "╚",
        "box-bottom-right": "╝",
        "box-horizontal": "═",
        "box-vertical": "║",
    },
}


def preset_names() -> list[str]:
    return list(PRESETS)


def apply_preset(config: Configuration, name: str) -> None:
    """Apply a named preset atomically; unknown names raise ConfigError."""
    if name not in PRESETS:
        raise ConfigError(f"Unknown preset '{name}'. Available presets: {', '.join(PRESETS)}")
    config.apply(PRESETS[name])
