"""Buffer-mutating actions bound in Normal and Insert mode."""

from __future__ import annotations

from abczed.config import MODE_BANNERS, EditorMode
from abczed.modes.base_mode import ModeContext, ModeResult


def _done(changed: bool, status: str) -> ModeResult:
    return ModeResult(consumed=True, status=status if changed else "noop")


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.newline(), "newline")


def delete_backward(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.delete_char(), "delete_char")


def delete_under_cursor(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.delete_under_cursor(), "delete_char")


def delete_current_row(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.delete_row(), "delete_row")


def open_line_below(context: ModeContext, match) -> ModeResult:
    """Insert an empty row under the cursor and start typing on it."""

    del match
    buffer = context.buffer
    at = min(buffer.cursor[0] + 1, buffer.line_count)
    if not buffer.insert_line(at, ""):
        return ModeResult(consumed=True, status="noop")
    buffer.set_status(MODE_BANNERS[EditorMode.INSERT])
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT.value, message="open_line"
    )


def undo(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.undo(), "undo")


def redo(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.redo(), "redo")


def paste(context: ModeContext, match) -> ModeResult:
    del match
    return _done(context.buffer.paste(), "paste")


__all__ = [
    "insert_newline",
    "delete_backward",
    "delete_under_cursor",
    "delete_current_row",
    "open_line_below",
    "undo",
    "redo",
    "paste",
]
