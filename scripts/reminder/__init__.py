"""
Reminder - task list drawn above the shell prompt.

Architecture:
- width.py: display width of terminal text
- models.py: Task and TaskList
- palette.py: color cycling and 256-color escape helpers
- config.py: settings table, validation, presets, export/import
- storage.py: save file format, cache, atomic writes
- layout.py: word wrap and box rendering
- affirmation.py: reads the affirmation cache file
- hints.py: occasional hints under the box
- swatches.py: color reference and preset previews
- commands.py: user-facing operations (add, done, toggle, config, render)

The shell hook only needs `todo render`; everything else is a command.
"""

__version__ = "1.0.0"
