"""Toolkit-independent rendering helpers for the Textual host.

Everything here works on a ``BufferMirror`` plus plain integers so it can be
exercised without a running app.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from abczed.buffer import BufferMirror
from abczed.buffer.state import Bounds, Cursor, SelectionModel

EMPTY_ROW_MARKER = "~"
NO_NAME = "[No Name]"

Span = Tuple[str, bool]  # (text, selected)


@dataclass(slots=True)
class Viewport:
    """Visible window over the buffer, measured in rows and columns."""

    rows: int
    cols: int
    rowoff: int = 0
    coloff: int = 0

    def scroll(self, cursor: Cursor) -> None:
        """Shift the offsets just enough to keep ``cursor`` visible."""

        row, col = cursor
        if row < self.rowoff:
            self.rowoff = row
        if row >= self.rowoff + self.rows:
            self.rowoff = row - self.rows + 1
        if col < self.coloff:
            self.coloff = col
        if col >= self.coloff + self.cols:
            self.coloff = col - self.cols + 1
        self.rowoff = max(0, self.rowoff)
        self.coloff = max(0, self.coloff)

    def screen_cursor(self, cursor: Cursor) -> Cursor:
        return (cursor[0] - self.rowoff, cursor[1] - self.coloff)


def selection_model(bounds: Optional[Bounds]) -> Optional[SelectionModel]:
    """Rebuild an armed selection from the normalized bounds in a mirror."""

    if bounds is None:
        return None
    start_row, start_col, end_row, end_col = bounds
    return SelectionModel(
        start=(start_row, start_col), end=(end_row, end_col), selecting=True
    )


def render_row(mirror: BufferMirror, viewport: Viewport, row: int) -> List[Span]:
    """Split the visible part of ``row`` into runs of selected/unselected text."""

    if row >= mirror.line_count:
        return [(EMPTY_ROW_MARKER, False)]
    model = selection_model(mirror.selection)
    text = mirror.lines[row][viewport.coloff : viewport.coloff + viewport.cols]
    spans: List[Span] = []
    for offset, char in enumerate(text):
        flag = model is not None and model.contains(row, viewport.coloff + offset)
        if spans and spans[-1][1] == flag:
            spans[-1] = (spans[-1][0] + char, flag)
        else:
            spans.append((char, flag))
    return spans


def render_rows(mirror: BufferMirror, viewport: Viewport) -> List[List[Span]]:
    return [
        render_row(mirror, viewport, viewport.rowoff + offset)
        for offset in range(viewport.rows)
    ]


def status_bar(mirror: BufferMirror, mode_label: str, viewport: Viewport) -> str:
    """Left: name, line count, modified flag. Right: mode, size, cursor, percentage."""

    name = (mirror.filename or NO_NAME)[:20]
    left = f"{name} - {mirror.line_count} lines {'(modified)' if mirror.dirty else ''}"
    row, col = mirror.cursor
    percent = (row * 100) // mirror.line_count if mirror.line_count else 0
    right = (
        f"{mode_label} | {viewport.cols}x{viewport.rows} | "
        f"{row + 1}:{col + 1} | {percent}%"
    )
    width = viewport.cols
    left = left[:width]
    if width - len(left) < len(right):
        return left
    return left + " " * (width - len(left) - len(right)) + right


def message_line(mirror: BufferMirror, command: str) -> str:
    return command if command else mirror.status


__all__ = [
    "Viewport",
    "message_line",
    "render_row",
    "render_rows",
    "selection_model",
    "status_bar",
]
