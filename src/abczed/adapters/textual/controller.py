"""Textual adapter that wires an EditorSession's events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from abczed.buffer import BufferMirror
from abczed.config import EditorMode
from abczed.modes import KeyInput, ModeResult
from abczed.runtime import telemetry
from abczed.session import EditorSession


def _noop(*_args, **_kwargs) -> None:
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop


# host key names -> engine key names
_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> tuple[str, Optional[str], tuple[str, ...]]:
    """Map a Textual key name to ``(key, text, modifiers)`` for a ``KeyInput``.

    ``ctrl+z`` becomes ``("z", None, ("ctrl",))``; named keys are upper-cased
    (``escape`` -> ``ESC``); printable keys carry their character as text.
    """

    modifiers: list[str] = []
    name = key
    while "+" in name[:-1]:
        modifier, _, rest = name.partition("+")
        modifiers.append(modifier.lower())
        name = rest
    if "ctrl" in modifiers:
        return (name.lower(), None, tuple(modifiers))
    if name in _NAMED_KEYS:
        text = "\t" if name == "tab" else None
        return (_NAMED_KEYS[name], text, tuple(m for m in modifiers if m != "shift"))
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return (name.upper(), None, tuple(modifiers))


class TextualVimAdapter:
    """Bridges an EditorSession and its bus events to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.logger = telemetry.get_logger("abczed.adapters.textual")
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch an already-normalized key to the session."""

        key_input = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self.logger.debug(
            f"key -> {key!r} mods={key_input.modifiers} mode={self.session.mode.value}"
        )
        result = self.session.handle_key(key_input)
        self.logger.debug(
            f"result <- consumed={result.consumed} status={result.status} "
            f"switch_to={result.switch_to}"
        )
        self._refresh()
        if self.session.should_quit:
            self.hooks.request_exit()
        return result

    def handle_host_key(self, key: str, character: Optional[str] = None) -> ModeResult:
        name, text, modifiers = normalize_textual_key(key, character)
        return self.handle_textual_key(name, text=text, modifiers=modifiers)

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Expire a stale pending trigger and surface the outcome to the UI."""

        results = self.session.process_timeouts()
        for mode_name, outcome in results.items():
            self.logger.debug(f"timeout -> mode={mode_name} status={outcome.status}")
        if results:
            self._refresh()
        return results

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "selection.start",
            "selection.update",
            "selection.yank",
            "selection.delete",
            "selection.end",
            "command.start",
            "command.end",
            "command.submit",
            "command.error",
            "command.write",
            "command.quit",
            "command.edit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.logger.debug(f"event -> {name} payload={payload!r}")
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.session.mirror())
        self.hooks.update_status(self.session.status)
        self.hooks.show_command(
            self.session.command_text
            if self.session.mode is EditorMode.COMMAND
            else ""
        )


__all__ = ["TextualVimAdapter", "TextualUIHooks", "normalize_textual_key"]
