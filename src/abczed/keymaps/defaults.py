"""Built-in keymaps that seed each mode and the global layer."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from abczed.actions import command as command_actions
from abczed.actions import core as core_actions
from abczed.actions import editing as editing_actions
from abczed.actions import motion as motion_actions
from abczed.actions import selection as selection_actions
from abczed.buffer import Motion

from .models import ActionRef, Binding, KeySequence
from .registry import GLOBAL_LAYER, KeymapRegistry

NORMAL = "normal"
INSERT = "insert"
SELECTION = "selection"
COMMAND = "command"

# key names produced by host adapters for non-printing keys
ARROW_MOTIONS: tuple[tuple[str, Motion], ...] = (
    ("LEFT", Motion.LEFT),
    ("RIGHT", Motion.RIGHT),
    ("UP", Motion.UP),
    ("DOWN", Motion.DOWN),
    ("HOME", Motion.LINE_START),
    ("END", Motion.LINE_END),
    ("PAGEUP", Motion.PAGE_UP),
    ("PAGEDOWN", Motion.PAGE_DOWN),
)

LETTER_MOTIONS: tuple[tuple[str, Motion], ...] = (
    ("h", Motion.LEFT),
    ("l", Motion.RIGHT),
    ("k", Motion.UP),
    ("j", Motion.DOWN),
    ("0", Motion.LINE_START),
    ("$", Motion.LINE_END),
)

MOTION_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(
        id=f"motion.{motion.value}",
        handler=motion_actions.move_cursor,
        description=f"Move cursor: {motion.value.replace('_', ' ')}",
        metadata={"motion": motion.value},
    )
    for motion in Motion
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.exit_insert",
        handler=core_actions.exit_insert_mode,
        description="Leave insert mode, stepping back one column",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_selection",
        handler=core_actions.enter_selection_mode,
        description="Start a selection at the cursor",
    ),
    ActionRef(
        id="core.select_all",
        handler=core_actions.select_all,
        description="Select the whole buffer",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.help",
        handler=core_actions.show_help,
        description="Show key help",
    ),
    ActionRef(
        id="core.quit",
        handler=core_actions.request_quit,
        description="Quit immediately",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.delete_under_cursor",
        handler=editing_actions.delete_under_cursor,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.delete_row",
        handler=editing_actions.delete_current_row,
        description="Delete the cursor row",
    ),
    ActionRef(
        id="edit.open_line_below",
        handler=editing_actions.open_line_below,
        description="Open a line below and enter insert mode",
    ),
    ActionRef(id="edit.undo", handler=editing_actions.undo, description="Undo"),
    ActionRef(id="edit.redo", handler=editing_actions.redo, description="Redo"),
    ActionRef(
        id="edit.paste",
        handler=editing_actions.paste,
        description="Paste the clipboard at the cursor",
    ),
    ActionRef(
        id="selection.yank",
        handler=selection_actions.yank_selection,
        description="Copy the selection",
    ),
    ActionRef(
        id="selection.delete",
        handler=selection_actions.delete_selection,
        description="Copy then delete the selection",
    ),
    ActionRef(
        id="selection.copy_shortcut",
        handler=selection_actions.copy_shortcut,
        description="Copy the selection from any mode",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
) + MOTION_ACTIONS


def _bind(
    mode: str, name: str, sequence: KeySequence, action_id: str, description: str = ""
) -> Binding:
    return Binding(
        id=f"{mode}.{name}",
        mode=mode,
        sequence=sequence,
        action_id=action_id,
        description=description,
    )


def _keys(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def _motion_bindings(
    mode: str, table: Iterable[tuple[str, Motion]], prefix: str
) -> tuple[Binding, ...]:
    return tuple(
        _bind(mode, f"{prefix}_{key.lower()}", _keys(key), f"motion.{motion.value}")
        for key, motion in table
    )


GLOBAL_BINDINGS: tuple[Binding, ...] = (
    _bind(GLOBAL_LAYER, "undo", KeySequence.chord("z", "ctrl"), "edit.undo", "Undo"),
    _bind(GLOBAL_LAYER, "redo", KeySequence.chord("y", "ctrl"), "edit.redo", "Redo"),
    _bind(
        GLOBAL_LAYER,
        "copy",
        KeySequence.chord("k", "ctrl"),
        "selection.copy_shortcut",
        "Copy",
    ),
    _bind(GLOBAL_LAYER, "paste", KeySequence.chord("v", "ctrl"), "edit.paste", "Paste"),
    _bind(GLOBAL_LAYER, "help", KeySequence.chord("h", "ctrl"), "core.help", "Help"),
    _bind(GLOBAL_LAYER, "quit", KeySequence.chord("q", "ctrl"), "core.quit", "Quit"),
)

NORMAL_BINDINGS: tuple[Binding, ...] = (
    _bind(NORMAL, "enter_insert", _keys("ENTER"), "core.enter_insert"),
    _bind(NORMAL, "change_change", _keys("c", "c"), "core.enter_insert"),
    _bind(NORMAL, "enter_command", _keys(":"), "core.enter_command"),
    _bind(NORMAL, "enter_selection", _keys("v"), "core.enter_selection"),
    _bind(NORMAL, "select_all", KeySequence.chord("a", "ctrl"), "core.select_all"),
    _bind(NORMAL, "delete_char", _keys("x"), "edit.delete_under_cursor"),
    _bind(NORMAL, "open_line", _keys("o"), "edit.open_line_below"),
    _bind(NORMAL, "delete_row", _keys("d", "d"), "edit.delete_row"),
) + _motion_bindings(NORMAL, LETTER_MOTIONS + ARROW_MOTIONS, "move")

INSERT_BINDINGS: tuple[Binding, ...] = (
    _bind(INSERT, "exit_escape", _keys("ESC"), "core.exit_insert"),
    _bind(INSERT, "exit_ctrl_c", KeySequence.chord("c", "ctrl"), "core.exit_insert"),
    _bind(INSERT, "newline", _keys("ENTER"), "edit.newline"),
    _bind(INSERT, "backspace", _keys("BACKSPACE"), "edit.delete_backward"),
) + _motion_bindings(INSERT, ARROW_MOTIONS, "move")

SELECTION_BINDINGS: tuple[Binding, ...] = (
    _bind(SELECTION, "exit_escape", _keys("ESC"), "core.exit_to_normal"),
    _bind(SELECTION, "yank", _keys("y"), "selection.yank"),
    _bind(SELECTION, "delete", _keys("d"), "selection.delete"),
) + _motion_bindings(SELECTION, LETTER_MOTIONS + ARROW_MOTIONS, "extend")

COMMAND_BINDINGS: tuple[Binding, ...] = (
    _bind(COMMAND, "exit_escape", _keys("ESC"), "core.exit_to_normal"),
    _bind(COMMAND, "submit_enter", _keys("ENTER"), "command.submit_line"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    GLOBAL_BINDINGS
    + NORMAL_BINDINGS
    + INSERT_BINDINGS
    + SELECTION_BINDINGS
    + COMMAND_BINDINGS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed):
            continue
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None or len(binding.sequence.strokes) < 2:
        return binding
    return replace(binding, sequence=binding.sequence.with_timeout(timeout_ms))


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "GLOBAL_BINDINGS",
]
