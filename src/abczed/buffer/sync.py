"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .state import Bounds, Cursor


@dataclass(slots=True)
class BufferMirror:
    """Read-only snapshot a host renders from."""

    lines: Sequence[str]
    cursor: Cursor
    selection: Optional[Bounds]
    dirty: bool
    filename: Optional[str]
    status: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)


class BufferValidationError(RuntimeError):
    """Raised when adapters hand the buffer an out-of-bounds cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
