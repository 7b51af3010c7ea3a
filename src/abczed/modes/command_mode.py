"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from typing import MutableMapping, Optional, cast

from abczed.config import EditorMode

from .base_mode import KeyInput, ModeContext, ModeResult
from .keymap_helpers import KeymapMode, is_printable

COMMAND_PREFIX = ":"


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    """Shared ``text``/``history`` slots for the command line."""

    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    return state


class CommandMode(KeymapMode):
    name = EditorMode.COMMAND.value

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        command_state(self.context)["text"] = COMMAND_PREFIX
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[str]) -> None:
        super().on_exit(next_mode)
        state = command_state(self.context)
        self.context.bus.emit("command.end", state["text"])
        state["text"] = ""

    @property
    def current_command(self) -> str:
        return str(command_state(self.context)["text"])

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        state = command_state(self.context)
        text = self.current_command

        if key.key == "BACKSPACE":
            if not text:
                return ModeResult(consumed=True, status="editing")
            state["text"] = text[:-1]
            return ModeResult(consumed=True, status="editing")

        if is_printable(key) and key.text != "\t":
            if key.text == COMMAND_PREFIX and text == COMMAND_PREFIX:
                return ModeResult(consumed=True, status="editing")
            state["text"] = text + str(key.text)
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")


__all__ = ["CommandMode", "command_state", "COMMAND_PREFIX"]
