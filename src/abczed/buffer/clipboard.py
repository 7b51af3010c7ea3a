"""Clipboard holding the most recent copied line sequence."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .document import LineStore
from .state import Bounds


class Clipboard:
    """Owned copies of copied rows, replaced wholesale on every copy."""

    def __init__(self) -> None:
        self._lines: tuple[str, ...] = ()

    @property
    def lines(self) -> Sequence[str]:
        return self._lines

    def is_empty(self) -> bool:
        return not self._lines

    def replace(self, lines: Iterable[str]) -> None:
        self._lines = tuple(str(line) for line in lines)


def extract_selection(lines: LineStore, bounds: Bounds) -> List[str]:
    """Copy the rows covered by normalized ``bounds``.

    The first and last rows are clipped to the selection; rows in between
    are taken whole. Rows past the end of the store are skipped.
    """

    start_row, start_col, end_row, end_col = bounds
    extracted: List[str] = []
    for row in range(start_row, end_row + 1):
        if row >= lines.line_count:
            break
        text = lines.get_line(row)
        begin = start_col if row == start_row else 0
        finish = end_col if row == end_row else len(text)
        extracted.append(text[begin:finish])
    return extracted


__all__ = ["Clipboard", "extract_selection"]
