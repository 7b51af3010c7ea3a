"""Actions dedicated to copying and deleting the selection."""

from __future__ import annotations

from abczed.config import EditorMode
from abczed.modes.base_mode import ModeContext, ModeResult


def yank_selection(context: ModeContext, match) -> ModeResult:
    del match
    copied = context.buffer.copy_selection()
    if copied:
        context.bus.emit("selection.yank", list(context.buffer.clipboard.lines))
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL.value,
        status="selection_yank" if copied else "no_selection",
    )


def delete_selection(context: ModeContext, match) -> ModeResult:
    del match
    deleted = context.buffer.delete_selection()
    if deleted:
        context.bus.emit("selection.delete", list(context.buffer.clipboard.lines))
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL.value,
        status="selection_delete" if deleted else "no_selection",
    )


def copy_shortcut(context: ModeContext, match) -> ModeResult:
    """Copy from any mode; an active selection is released afterwards."""

    del match
    buffer = context.buffer
    if not buffer.selection.is_set:
        buffer.set_status("No selection to copy")
        return ModeResult(consumed=True, status="no_selection")
    buffer.copy_selection()
    buffer.clear_selection()
    return ModeResult(
        consumed=True, switch_to=EditorMode.NORMAL.value, status="selection_yank"
    )


__all__ = ["yank_selection", "delete_selection", "copy_shortcut"]
