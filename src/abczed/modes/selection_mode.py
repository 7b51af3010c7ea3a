"""Selection mode: motions extend the armed selection until it is copied or deleted."""

from __future__ import annotations

from typing import Optional

from abczed.config import EditorMode

from .keymap_helpers import KeymapMode


class SelectionMode(KeymapMode):
    name = EditorMode.SELECTION.value

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        buffer = self.context.buffer
        if not buffer.selection.selecting:
            buffer.start_selection()
        self.context.bus.emit("selection.start", buffer.selection.normalize())

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        self.context.buffer.clear_selection()
        self.context.bus.emit("selection.end", None)
