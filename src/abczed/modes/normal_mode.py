"""Normal mode: motions, mode entry keys, and two-key triggers."""

from __future__ import annotations

from abczed.config import MODE_BANNERS, EditorMode

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = EditorMode.NORMAL.value

    def handle_key(self, key: KeyInput) -> ModeResult:
        if not self._pending:
            self.context.buffer.set_status(MODE_BANNERS[EditorMode.NORMAL])
        return super().handle_key(key)
