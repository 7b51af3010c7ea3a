"""Editing verbs bound to keys; each takes ``(context, match)`` and returns a ``ModeResult``."""

from .core import (
    enter_command_mode,
    enter_insert_mode,
    enter_selection_mode,
    exit_insert_mode,
    exit_to_normal_mode,
    request_quit,
    select_all,
    show_help,
)
from .editing import (
    delete_backward,
    delete_current_row,
    delete_under_cursor,
    insert_newline,
    open_line_below,
    paste,
    redo,
    undo,
)
from .motion import move_cursor
from .selection import copy_shortcut, delete_selection, yank_selection
from .command import normalize_command, run_command, submit_command_line

__all__ = [
    "enter_command_mode",
    "enter_insert_mode",
    "enter_selection_mode",
    "exit_insert_mode",
    "exit_to_normal_mode",
    "request_quit",
    "select_all",
    "show_help",
    "delete_backward",
    "delete_current_row",
    "delete_under_cursor",
    "insert_newline",
    "open_line_below",
    "paste",
    "redo",
    "undo",
    "move_cursor",
    "copy_shortcut",
    "delete_selection",
    "yank_selection",
    "normalize_command",
    "run_command",
    "submit_command_line",
]
