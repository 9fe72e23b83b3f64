#!/usr/bin/env python3
"""
Todo Reminder - tasks drawn above your shell prompt.

Usage:
    todo "task description"                 Add a task
    todo done <pattern>                     Complete the first task starting with pattern
    todo list                               List tasks
    todo hide | show                        Hide/show box and affirmation
    todo toggle [affirmation|box|all] [show|hide|toggle]
    todo config set <key> <value>           Change a setting
    todo config get <key>                   Print a setting
    todo config reset [--colors-only]       Reset settings to defaults
    todo config preset <name>               Apply a preset
    todo config export [file] [--colors-only]
    todo config import <file> [--colors-only]
    todo config preview [preset]            Show preset color swatches
    todo render [--columns N] [--no-color]  Output for the shell precmd hook
    todo help [--colors|--config]

Shell hook (zsh):
    precmd() { todo render }
"""

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from reminder.commands import RESET_SCOPES, TOGGLE_ACTIONS, Reminder  # noqa: E402
from reminder.config import SETTINGS, Configuration, ConfigError, preset_names  # noqa: E402
from reminder.storage import TaskStore  # noqa: E402
from reminder.swatches import color_reference, preview_presets  # noqa: E402

COMMANDS = ("add", "done", "list", "hide", "show", "toggle", "config", "render", "help")


def configure_logging() -> None:
    level_name = os.environ.get("TODO_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def report(result: tuple[bool, str]) -> int:
    """Print a command result; failures go to stderr."""
    ok, message = result
    if message:
        print(message, file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


def config_help() -> str:
    lines = ["Settings (todo config set <key> <value>, or export the variable):", ""]
    for s in SETTINGS:
        lines.append(f"  {s.key:<18} {s.env:<26} {s.description} (default: {s.default})")
    lines += ["", f"Presets: {', '.join(preset_names())}"]
    return "\n".join(lines)


# -------------------- command handlers --------------------

def cmd_add(app: Reminder, args: argparse.Namespace) -> int:
    return report(app.add(" ".join(args.text)))


def cmd_done(app: Reminder, args: argparse.Namespace) -> int:
    return report(app.complete(" ".join(args.pattern)))


def cmd_list(app: Reminder, args: argparse.Namespace) -> int:
    return report(app.list_tasks())


def cmd_hide(app: Reminder, args: argparse.Namespace) -> int:
    return report(app.hide())


def cmd_show(app: Reminder, args: argparse.Namespace) -> int:
    return report(app.show())


def cmd_toggle(app: Reminder, args: argparse.Namespace) -> int:
    handlers = {
        "affirmation": app.toggle_affirmation,
        "box": app.toggle_box,
        "all": app.toggle_all,
    }
    return report(handlers[args.target](args.action))


def cmd_config(app: Reminder, args: argparse.Namespace) -> int:
    action = args.config_action
    if action == "set":
        return report(app.config_set(args.key, args.value))
    if action == "get":
        return report(app.config_get(args.key))
    if action == "reset":
        return report(app.config_reset("colors" if args.colors_only else "all"))
    if action == "preset":
        return report(app.config_apply_preset(args.name))
    if action == "export":
        return report(app.config_export(args.file, colors_only=args.colors_only))
    if action == "import":
        return report(app.config_import(args.file, colors_only=args.colors_only))
    if action == "preview":
        try:
            return report((True, preview_presets(args.name)))
        except ConfigError as e:
            return report((False, f"Error: {e}"))
    print("Usage: todo config <set|get|reset|preset|export|import|preview> ...", file=sys.stderr)
    return 1


def cmd_render(app: Reminder, args: argparse.Namespace) -> int:
    columns = args.columns or shutil.get_terminal_size((80, 24)).columns
    use_color = not args.no_color and "NO_COLOR" not in os.environ
    output = app.render(columns, use_color=use_color)
    if output:
        print(output)
    return 0


def cmd_help(app: Reminder, args: argparse.Namespace) -> int:
    if args.colors:
        _, config = app.store.load()
        print(color_reference(config))
    elif args.config:
        print(config_help())
    else:
        print(__doc__.strip())
    return 0


# -------------------- parser --------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Todo Reminder - tasks drawn above your shell prompt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--save-file",
        type=Path,
        help="Task file (default: $TODO_SAVE_FILE or ~/.todo.save)",
    )
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("add", help="Add a task")
    p.add_argument("text", nargs="+")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("done", help="Complete a task by prefix")
    p.add_argument("pattern", nargs="*", default=[])
    p.set_defaults(func=cmd_done)

    sub.add_parser("list", help="List tasks").set_defaults(func=cmd_list)
    sub.add_parser("hide", help="Hide box and affirmation").set_defaults(func=cmd_hide)
    sub.add_parser("show", help="Show box and affirmation").set_defaults(func=cmd_show)

    p = sub.add_parser("toggle", help="Toggle display components")
    p.add_argument("target", nargs="?", default="all", choices=("affirmation", "box", "all"))
    p.add_argument("action", nargs="?", default="toggle", choices=TOGGLE_ACTIONS)
    p.set_defaults(func=cmd_toggle)

    p = sub.add_parser("config", help="Change settings")
    p.set_defaults(func=cmd_config, config_action=None)
    config_sub = p.add_subparsers(dest="config_action")

    c = config_sub.add_parser("set", help="Set a setting")
    c.add_argument("key")
    c.add_argument("value")
    c = config_sub.add_parser("get", help="Print a setting")
    c.add_argument("key")
    c = config_sub.add_parser("reset", help=f"Reset settings ({'/'.join(RESET_SCOPES)})")
    c.add_argument("--colors-only", action="store_true")
    c = config_sub.add_parser("preset", help="Apply a preset")
    c.add_argument("name")
    c = config_sub.add_parser("export", help="Export settings")
    c.add_argument("file", nargs="?", type=Path)
    c.add_argument("--colors-only", action="store_true")
    c = config_sub.add_parser("import", help="Import settings")
    c.add_argument("file", type=Path)
    c.add_argument("--colors-only", action="store_true")
    c = config_sub.add_parser("preview", help="Preview preset colors")
    c.add_argument("name", nargs="?", default="all")

    p = sub.add_parser("render", help="Print the box (for the precmd hook)")
    p.add_argument("--columns", type=int, help="Terminal width (default: detected)")
    p.add_argument("--no-color", action="store_true")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("help", help="Show help")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--colors", action="store_true", help="Color reference")
    group.add_argument("--config", action="store_true", help="Settings reference")
    p.set_defaults(func=cmd_help)

    return parser


def normalize_argv(argv: list[str]) -> list[str]:
    """`todo some task` is shorthand for `todo add some task`.

    Only the global options are skipped; anything else starting with "-"
    is task text ("todo -5 degrees outside").
    """
    i = 0
    while i < len(argv):
        if argv[i] == "--save-file":
            i += 2
        elif argv[i].startswith("--save-file=") or argv[i] in ("-h", "--help"):
            i += 1
        else:
            break
    if i >= len(argv):
        if any(a in ("-h", "--help") for a in argv):
            return argv
        return argv + ["help"]

    head, rest = argv[:i], argv[i:]
    if rest[0] == "--":
        return head + ["add", "--"] + rest[1:]
    if rest[0] in COMMANDS:
        return argv
    if rest[0].startswith("-"):
        return head + ["add", "--"] + rest
    return head + ["add"] + rest


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    argv = normalize_argv(list(sys.argv[1:] if argv is None else argv))
    args = build_parser().parse_args(argv)

    try:
        base_config = Configuration.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = Reminder(TaskStore(args.save_file, base_config))
    return args.func(app, args)


if __name__ == "__main__":
    sys.exit(main())
