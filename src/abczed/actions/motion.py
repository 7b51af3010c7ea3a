"""Cursor motion shared by Normal, Insert, and Selection mode."""

from __future__ import annotations

from abczed.buffer import Motion
from abczed.keymaps import ResolutionMatch
from abczed.modes.base_mode import ModeContext, ModeResult


def move_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Apply the ``Motion`` stored in the action metadata.

    An armed selection follows the cursor, which is how Selection mode
    extends its range.
    """

    motion = Motion(str(match.action.metadata["motion"]))
    cursor = context.buffer.move_cursor(motion, page_rows=context.settings.page_rows)
    if context.buffer.selection.selecting:
        context.bus.emit("selection.update", context.buffer.selection.normalize())
    return ModeResult(consumed=True, status="motion", message=f"{cursor[0]}:{cursor[1]}")


__all__ = ["move_cursor"]
