"""Line store: the ordered list of text rows every edit ultimately lands in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence


@dataclass(slots=True)
class LineStore:
    """Index-addressed rows of text with a modification counter.

    Rows never contain newline characters; the store itself is what imposes
    line boundaries. Every accessor treats out-of-range coordinates as a
    no-op and reports it through its return value rather than raising, so
    callers higher up can turn a rejected request into a status message.

    ``dirty`` counts successful mutations since the last load or save.
    """

    _lines: List[str] = field(default_factory=list)
    dirty: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineStore":
        return cls(_lines=[str(line) for line in lines], dirty=0)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def modified(self) -> bool:
        return self.dirty > 0

    def snapshot(self) -> Sequence[str]:
        """Return the current rows without exposing internal mutability."""

        return tuple(self._lines)

    def get_line(self, at: int) -> str:
        return self._lines[at]

    def row_length(self, at: int) -> int:
        if 0 <= at < len(self._lines):
            return len(self._lines[at])
        return 0

    def mark_clean(self) -> None:
        self.dirty = 0

    def reset(self, lines: Iterable[str]) -> None:
        self._lines = [str(line) for line in lines]
        self.dirty = 0

    # -- row level -----------------------------------------------------------

    def insert_row(self, at: int, text: str = "") -> bool:
        """Insert ``text`` as a new row so that it ends up at index ``at``."""

        if at < 0 or at > len(self._lines):
            return False
        self._lines.insert(at, text)
        self._touch()
        return True

    def delete_row(self, at: int) -> Optional[str]:
        """Remove row ``at`` and return its content, or ``None`` if out of range."""

        if at < 0 or at >= len(self._lines):
            return None
        removed = self._lines.pop(at)
        self._touch()
        return removed

    def split_row(self, at: int, col: int, *, suffix: Optional[str] = None) -> bool:
        """Cut row ``at`` at ``col``; the tail becomes a new row below it.

        ``suffix`` overrides the content of the new row. Redo uses it to
        restore the exact tail that the first split produced.
        """

        if at < 0 or at >= len(self._lines):
            return False
        line = self._lines[at]
        if col < 0 or col > len(line):
            return False
        self._lines[at] = line[:col]
        self._lines.insert(at + 1, line[col:] if suffix is None else suffix)
        self._touch()
        return True

    def join_rows(self, at: int) -> Optional[int]:
        """Append row ``at + 1`` onto row ``at``; return the join column."""

        if at < 0 or at + 1 >= len(self._lines):
            return None
        column = len(self._lines[at])
        self._lines[at] += self._lines.pop(at + 1)
        self._touch()
        return column

    # -- character level -----------------------------------------------------

    def insert_text(self, row: int, col: int, text: str) -> bool:
        if row < 0 or row >= len(self._lines):
            return False
        line = self._lines[row]
        if col < 0 or col > len(line):
            return False
        self._lines[row] = line[:col] + text + line[col:]
        self._touch()
        return True

    def delete_text(self, row: int, col: int, count: int = 1) -> Optional[str]:
        """Remove up to ``count`` characters starting at ``col``."""

        if row < 0 or row >= len(self._lines) or count <= 0:
            return None
        line = self._lines[row]
        if col < 0 or col >= len(line):
            return None
        removed = line[col : col + count]
        self._lines[row] = line[:col] + line[col + count :]
        self._touch()
        return removed

    # -- spans -----------------------------------------------------------------

    def insert_span(self, row: int, col: int, text: str) -> bool:
        """Insert ``text`` at ``row``/``col``; each line break opens a new row."""

        if row < 0 or row >= len(self._lines):
            return False
        line = self._lines[row]
        if col < 0 or col > len(line):
            return False
        parts = text.split("\n")
        parts[0] = line[:col] + parts[0]
        parts[-1] += line[col:]
        self._lines[row : row + 1] = parts
        self._touch()
        return True

    def delete_span(
        self, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> Optional[str]:
        """Remove the half-open range and return it with rows joined by ``\\n``."""

        if start_row < 0 or end_row < start_row or end_row >= len(self._lines):
            return None
        head = self._lines[start_row]
        tail = self._lines[end_row]
        if not 0 <= start_col <= len(head) or not 0 <= end_col <= len(tail):
            return None
        if start_row == end_row:
            if end_col < start_col:
                return None
            removed = head[start_col:end_col]
        else:
            removed = "\n".join(
                [head[start_col:], *self._lines[start_row + 1 : end_row], tail[:end_col]]
            )
        self._lines[start_row : end_row + 1] = [head[:start_col] + tail[end_col:]]
        self._touch()
        return removed

    def _touch(self) -> None:
        self.dirty += 1


def span_end(row: int, col: int, text: str) -> tuple[int, int]:
    """Position just past ``text`` when it is laid down at ``row``/``col``."""

    breaks = text.count("\n")
    if not breaks:
        return (row, col + len(text))
    return (row + breaks, len(text) - text.rfind("\n") - 1)


__all__ = ["LineStore", "span_end"]
