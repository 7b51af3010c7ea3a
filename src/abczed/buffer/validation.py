"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import LineStore
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(lines: LineStore, cursor: Cursor) -> Cursor:
    """Accept ``cursor`` if it addresses a real row or the past-end row."""

    row, col = cursor
    if row < 0 or row > lines.line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > lines.row_length(row):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def clamp_cursor(lines: LineStore, row: int, col: int) -> Cursor:
    max_row = max(0, lines.line_count - 1)
    row = max(0, min(row, max_row))
    col = max(0, min(col, lines.row_length(row)))
    return (row, col)
