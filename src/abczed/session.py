"""Editing session aggregate: buffer, modes, keymaps, and quit state."""

from __future__ import annotations

import os
import time
from typing import Iterable, Optional, Sequence

from abczed.buffer import Buffer, BufferMirror
from abczed.buffer.state import Bounds, Cursor
from abczed.config import MODE_LABELS, WELCOME_TEXT, EditorMode, EditorSettings
from abczed.keymaps import KeymapRegistry, KeymapResolver
from abczed.keymaps.defaults import load_default_keymaps
from abczed.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
    SelectionMode,
)
from abczed.modes.command_mode import command_state
from abczed.modes.mode_manager import Clock
from abczed.runtime import telemetry


class EditorSession:
    """Everything one editor instance owns, passed explicitly to modes and actions.

    The session exposes read-only views (cursor, lines, mode, selection,
    status) for hosts; all mutation goes through ``handle_key``.
    """

    def __init__(
        self,
        *,
        settings: Optional[EditorSettings] = None,
        buffer: Optional[Buffer] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.settings = settings if settings is not None else EditorSettings.from_env()
        self.buffer = buffer if buffer is not None else Buffer()
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer, bus=self.bus, settings=self.settings
        )
        self.logger = telemetry.get_logger("abczed.session")

        registry = KeymapRegistry(logger_name="abczed.keymaps")
        load_default_keymaps(
            registry, default_sequence_timeout_ms=self.settings.trigger_timeout_ms
        )
        self.manager = ModeManager(
            self.context,
            keymap_registry=registry,
            keymap_resolver=KeymapResolver(registry, logger_name="abczed.keymaps"),
            clock=clock,
        )
        for mode_cls in (NormalMode, InsertMode, SelectionMode, CommandMode):
            self.manager.register_mode(mode_cls)

        self.should_quit = False
        self.bus.subscribe("command.quit", self._on_quit)
        self.buffer.set_status(WELCOME_TEXT)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, settings: Optional[EditorSettings] = None, **kwargs
    ) -> "EditorSession":
        return cls(settings=settings, buffer=Buffer.from_lines(lines), **kwargs)

    # -- input -------------------------------------------------------------------

    def handle_key(
        self,
        key: KeyInput | str,
        *,
        text: Optional[str] = None,
        modifiers: Sequence[str] = (),
    ) -> ModeResult:
        """Dispatch one key; a bare string is treated as a named or printable key."""

        if isinstance(key, str):
            if text is None and len(key) == 1 and not modifiers:
                text = key
            key = KeyInput(key=key, modifiers=tuple(modifiers), text=text)
        return self.manager.handle_key(key)

    def feed(self, keys: Iterable[KeyInput | str]) -> list[ModeResult]:
        return [self.handle_key(key) for key in keys]

    def type_text(self, text: str) -> list[ModeResult]:
        return self.feed(KeyInput(key=char, text=char) for char in text)

    def process_timeouts(self) -> dict[str, ModeResult]:
        return self.manager.process_timeouts()

    # -- files --------------------------------------------------------------------

    def open(self, path: str | os.PathLike[str]) -> bool:
        loaded = self.buffer.open_file(path)
        self.buffer.set_status(WELCOME_TEXT)
        return loaded

    def save(self, path: str | os.PathLike[str] | None = None) -> bool:
        return self.buffer.save(path)

    # -- read-only state ----------------------------------------------------------

    @property
    def mode(self) -> EditorMode:
        return EditorMode(self.manager.active_name)

    @property
    def mode_label(self) -> str:
        return MODE_LABELS[self.mode]

    @property
    def cursor(self) -> Cursor:
        return self.buffer.cursor

    @property
    def lines(self) -> tuple[str, ...]:
        return self.buffer.snapshot()

    @property
    def line_count(self) -> int:
        return self.buffer.line_count

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

    @property
    def selection(self) -> Optional[Bounds]:
        if not self.buffer.selection.selecting:
            return None
        return self.buffer.selection.normalize()

    @property
    def status(self) -> str:
        return self.buffer.status

    @property
    def command_text(self) -> str:
        return str(command_state(self.context).get("text", ""))

    @property
    def filename(self) -> Optional[str]:
        return self.buffer.filename

    def mirror(self) -> BufferMirror:
        return self.buffer.mirror(
            attributes={"mode": self.mode_label, "command": self.command_text}
        )

    def _on_quit(self, payload: object | None) -> None:
        self.logger.info(f"quit requested: {payload}")
        self.should_quit = True


__all__ = ["EditorSession"]
