"""Editor mode names and tunable settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

ENV_PREFIX = "ABCZED_"


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    SELECTION = "selection"


MODE_LABELS = {
    EditorMode.NORMAL: "NORMAL",
    EditorMode.INSERT: "INSERT",
    EditorMode.COMMAND: "COMMAND",
    EditorMode.SELECTION: "SELECT",
}

MODE_BANNERS = {
    EditorMode.NORMAL: "-- NORMAL --",
    EditorMode.INSERT: "-- INSERT --",
    EditorMode.SELECTION: "-- VISUAL --",
}

HELP_TEXT = (
    "HELP: cc=insert | Ctrl+Z=undo | Ctrl+Y=redo | Ctrl+A=select | Ctrl+K=copy"
)
WELCOME_TEXT = (
    "HELP: cc = insert | Ctrl+Z = undo | Ctrl+Y = redo | Ctrl+A = select all"
)


def _positive_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Knobs shared by the mode manager, motions and the command line."""

    trigger_timeout_ms: int = 500
    page_rows: int = 20
    command_history: int = 10

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            trigger_timeout_ms=_positive_int(
                source, "TRIGGER_TIMEOUT_MS", defaults.trigger_timeout_ms
            ),
            page_rows=_positive_int(source, "PAGE_ROWS", defaults.page_rows),
            command_history=_positive_int(
                source, "COMMAND_HISTORY", defaults.command_history
            ),
        )


__all__ = [
    "EditorMode",
    "EditorSettings",
    "MODE_BANNERS",
    "MODE_LABELS",
    "HELP_TEXT",
    "WELCOME_TEXT",
]
