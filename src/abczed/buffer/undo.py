"""Linear undo/redo history made of reversible edit operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional

from abczed.runtime import telemetry

from .document import LineStore, span_end
from .state import Cursor

LINE_BREAK = "\n"

StackName = Literal["undo", "redo"]


class OperationKind(str, Enum):
    INSERT_CHAR = "insert_char"
    DELETE_CHAR = "delete_char"
    INSERT_LINE = "insert_line"
    DELETE_LINE = "delete_line"
    NEWLINE = "newline"


@dataclass(slots=True)
class Operation:
    """One reversible edit.

    ``row``/``col`` locate the mutation; ``cursor_before``/``cursor_after``
    are the cursor positions around it. ``line`` always holds its own copy of
    row text (the deleted row, the inserted row, or the tail split off by a
    newline) so it stays valid after the buffer row is gone. ``appended_row``
    marks edits that first had to append an empty row because the cursor sat
    one past the last row.

    A ``DELETE_CHAR`` holds the removed text starting at ``row``/``col``.
    Line breaks inside it mark joined rows: a lone ``LINE_BREAK`` is a
    backspace join, a longer span is a deleted selection.
    """

    kind: OperationKind
    row: int
    col: int
    cursor_before: Cursor
    cursor_after: Cursor
    char: str = ""
    line: str = ""
    appended_row: bool = False


class OperationLog:
    """Undo and redo stacks; the top of each stack is the end of its list."""

    def __init__(self) -> None:
        self._undo: List[Operation] = []
        self._redo: List[Operation] = []
        self.logger = telemetry.get_logger("abczed.buffer.undo")

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push(self, stack: StackName, op: Operation) -> None:
        target = self._undo if stack == "undo" else self._redo
        target.append(op)

    def record(self, op: Operation) -> None:
        """Log a fresh edit; any redo history is discarded."""

        self._undo.append(op)
        self._redo.clear()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def peek(self, stack: StackName = "undo") -> Optional[Operation]:
        source = self._undo if stack == "undo" else self._redo
        return source[-1] if source else None

    def undo(self, lines: LineStore) -> Optional[Operation]:
        """Pop the latest edit, revert it on ``lines`` and move it to redo."""

        if not self._undo:
            return None
        op = self._undo.pop()
        apply_inverse(op, lines)
        self.logger.debug(f"undo {op.kind.value} at {op.row}:{op.col}")
        self._redo.append(op)
        return op

    def redo(self, lines: LineStore) -> Optional[Operation]:
        """Pop the latest undone edit, reapply it and move it back to undo."""

        if not self._redo:
            return None
        op = self._redo.pop()
        apply_forward(op, lines)
        self.logger.debug(f"redo {op.kind.value} at {op.row}:{op.col}")
        self._undo.append(op)
        return op


def apply_inverse(op: Operation, lines: LineStore) -> None:
    kind = op.kind
    if kind is OperationKind.INSERT_CHAR:
        lines.delete_text(op.row, op.col, len(op.char))
        if op.appended_row:
            lines.delete_row(op.row)
    elif kind is OperationKind.DELETE_CHAR:
        lines.insert_span(op.row, op.col, op.char)
    elif kind is OperationKind.INSERT_LINE:
        lines.delete_row(op.row)
    elif kind is OperationKind.DELETE_LINE:
        lines.insert_row(op.row, op.line)
    elif kind is OperationKind.NEWLINE:
        if op.appended_row:
            lines.delete_row(op.row)
            return
        # Re-save the merged-away tail; redo splits it back out verbatim.
        if op.row + 1 < lines.line_count:
            op.line = lines.get_line(op.row + 1)
        lines.join_rows(op.row)


def apply_forward(op: Operation, lines: LineStore) -> None:
    kind = op.kind
    if kind is OperationKind.INSERT_CHAR:
        if op.appended_row:
            lines.insert_row(op.row, "")
        lines.insert_text(op.row, op.col, op.char)
    elif kind is OperationKind.DELETE_CHAR:
        lines.delete_span(op.row, op.col, *span_end(op.row, op.col, op.char))
    elif kind is OperationKind.INSERT_LINE:
        lines.insert_row(op.row, op.line)
    elif kind is OperationKind.DELETE_LINE:
        lines.delete_row(op.row)
    elif kind is OperationKind.NEWLINE:
        if op.appended_row:
            lines.insert_row(op.row, "")
        else:
            lines.split_row(op.row, op.col, suffix=op.line)


__all__ = [
    "LINE_BREAK",
    "Operation",
    "OperationKind",
    "OperationLog",
    "apply_forward",
    "apply_inverse",
]
