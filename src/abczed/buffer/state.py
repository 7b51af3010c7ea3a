"""Cursor, selection, and status state for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .document import LineStore

Cursor = Tuple[int, int]  # (row, column)
Bounds = Tuple[int, int, int, int]  # (start_row, start_col, end_row, end_col)

NO_POSITION: Cursor = (-1, -1)


@dataclass(slots=True)
class SelectionModel:
    """Two raw endpoints plus the armed flag.

    ``start`` is where the selection was anchored and ``end`` follows the
    cursor, so ``end`` may precede ``start`` until the range is normalized.
    Both endpoints equal ``NO_POSITION`` when nothing is selected.
    """

    start: Cursor = NO_POSITION
    end: Cursor = NO_POSITION
    selecting: bool = False

    @property
    def is_set(self) -> bool:
        return self.start != NO_POSITION and self.end != NO_POSITION

    def begin(self, row: int, col: int) -> None:
        self.start = (row, col)
        self.end = (row, col)
        self.selecting = True

    def update(self, row: int, col: int) -> None:
        if self.selecting:
            self.end = (row, col)

    def clear(self) -> None:
        self.start = NO_POSITION
        self.end = NO_POSITION
        self.selecting = False

    def select_all(self, lines: LineStore) -> bool:
        if lines.line_count == 0:
            return False
        last = lines.line_count - 1
        self.start = (0, 0)
        self.end = (last, lines.row_length(last))
        self.selecting = True
        return True

    def normalize(self) -> Optional[Bounds]:
        """Return the range ordered so that start precedes end; never mutates."""

        if not self.is_set:
            return None
        first, second = self.start, self.end
        if second < first:
            first, second = second, first
        return (first[0], first[1], second[0], second[1])

    def normalize_in_place(self) -> Optional[Bounds]:
        bounds = self.normalize()
        if bounds is not None:
            self.start = (bounds[0], bounds[1])
            self.end = (bounds[2], bounds[3])
        return bounds

    def is_empty(self) -> bool:
        bounds = self.normalize()
        return bounds is None or (bounds[0], bounds[1]) == (bounds[2], bounds[3])

    def contains(self, row: int, col: int) -> bool:
        """Half-open membership test used by rendering and deletion."""

        if not self.selecting:
            return False
        bounds = self.normalize()
        if bounds is None:
            return False
        start_row, start_col, end_row, end_col = bounds
        if row < start_row or row > end_row:
            return False
        if row == start_row and col < start_col:
            return False
        if row == end_row and col >= end_col:
            return False
        return True


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info tied to a LineStore."""

    cursor: Cursor = (0, 0)
    selection: SelectionModel = field(default_factory=SelectionModel)
    status_message: str = ""

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def set_status(self, message: str) -> None:
        self.status_message = message


__all__ = ["Bounds", "BufferState", "Cursor", "NO_POSITION", "SelectionModel"]
