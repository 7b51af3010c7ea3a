"""Insert mode: printable keys are typed into the buffer."""

from __future__ import annotations

from abczed.config import EditorMode

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode, is_printable


class InsertMode(KeymapMode):
    name = EditorMode.INSERT.value

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if not is_printable(key):
            return ModeResult(consumed=False, status="miss", message="unhandled")
        assert key.text is not None
        self.context.buffer.insert_char(key.text)
        return ModeResult(consumed=True, status="insert")
