"""Edit engine façade combining the line store, cursor, selection, clipboard, and undo."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from enum import Enum
from typing import ContextManager, Iterable, Optional

from abczed.runtime import telemetry

from .clipboard import Clipboard, extract_selection
from .document import LineStore
from .fileio import read_lines, write_lines
from .state import BufferState, Cursor, SelectionModel
from .sync import BufferMirror
from .undo import LINE_BREAK, Operation, OperationKind, OperationLog
from .validation import clamp_cursor, ensure_cursor


class Motion(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LINE_START = "line_start"
    LINE_END = "line_end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


class Buffer:
    """Cursor-relative editing over a ``LineStore``.

    Each successful mutation records exactly one ``Operation`` and drops the
    redo history. Undo and
    redo replay operations straight onto the line store, never through these
    entry points.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        lines: Optional[LineStore] = None,
        state: Optional[BufferState] = None,
        clipboard: Optional[Clipboard] = None,
        log: Optional[OperationLog] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.name = name
        self.lines = lines if lines is not None else LineStore()
        self.state = state if state is not None else BufferState()
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.log = log if log is not None else OperationLog()
        self.filename = filename
        self.logger = telemetry.get_logger("abczed.buffer")

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, lines=LineStore.from_lines(lines))

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        rows = text.split("\n") if text else []
        return cls.from_lines(rows, name=name)

    # -- read-only views ------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def selection(self) -> SelectionModel:
        return self.state.selection

    @property
    def line_count(self) -> int:
        return self.lines.line_count

    @property
    def dirty(self) -> bool:
        return self.lines.modified

    @property
    def status(self) -> str:
        return self.state.status_message

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self.lines.snapshot())

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        selection = self.selection.normalize() if self.selection.selecting else None
        return BufferMirror(
            lines=self.snapshot(),
            cursor=self.cursor,
            selection=selection,
            dirty=self.dirty,
            filename=self.filename,
            status=self.status,
            attributes=dict(attributes or {}),
        )

    def set_status(self, message: str) -> None:
        self.state.set_status(message)

    # -- character and line edits ---------------------------------------------

    def insert_char(self, char: str) -> bool:
        if len(char) != 1:
            raise ValueError("insert_char expects exactly one character")
        if char == LINE_BREAK:
            return self.newline()
        before = self.cursor
        row, col = before
        with Transaction(self, "insert_char") as tx:
            appended = False
            if row >= self.lines.line_count:
                row, col = self.lines.line_count, 0
                self.lines.insert_row(row, "")
                appended = True
            col = min(col, self.lines.row_length(row))
            self.lines.insert_text(row, col, char)
            after = (row, col + 1)
            self.state.set_cursor(*after)
            tx.commit(
                Operation(
                    OperationKind.INSERT_CHAR,
                    row,
                    col,
                    before,
                    after,
                    char=char,
                    appended_row=appended,
                )
            )
        return True

    def newline(self) -> bool:
        before = self.cursor
        row, col = before
        with Transaction(self, "newline") as tx:
            if row >= self.lines.line_count:
                row = self.lines.line_count
                self.lines.insert_row(row, "")
                after = (row, 0)
                op = Operation(
                    OperationKind.NEWLINE,
                    row,
                    0,
                    before,
                    after,
                    char=LINE_BREAK,
                    appended_row=True,
                )
            else:
                col = min(col, self.lines.row_length(row))
                suffix = self.lines.get_line(row)[col:]
                self.lines.split_row(row, col)
                after = (row + 1, 0)
                op = Operation(
                    OperationKind.NEWLINE,
                    row,
                    col,
                    before,
                    after,
                    char=LINE_BREAK,
                    line=suffix,
                )
            self.state.set_cursor(*after)
            tx.commit(op)
        return True

    def delete_char(self) -> bool:
        """Backspace: remove the character left of the cursor or join rows."""

        before = self.cursor
        row, col = before
        if row >= self.lines.line_count:
            return False
        col = min(col, self.lines.row_length(row))
        if row == 0 and col == 0:
            return False
        with Transaction(self, "delete_char") as tx:
            if col > 0:
                removed = self.lines.delete_text(row, col - 1, 1) or ""
                after = (row, col - 1)
                op = Operation(
                    OperationKind.DELETE_CHAR, row, col - 1, before, after, char=removed
                )
            else:
                join_col = self.lines.join_rows(row - 1) or 0
                after = (row - 1, join_col)
                op = Operation(
                    OperationKind.DELETE_CHAR,
                    row - 1,
                    join_col,
                    before,
                    after,
                    char=LINE_BREAK,
                )
            self.state.set_cursor(*after)
            tx.commit(op)
        return True

    def delete_under_cursor(self) -> bool:
        before = self.cursor
        row, col = before
        if row >= self.lines.line_count or col >= self.lines.row_length(row):
            return False
        with Transaction(self, "delete_under_cursor") as tx:
            removed = self.lines.delete_text(row, col, 1) or ""
            tx.commit(
                Operation(
                    OperationKind.DELETE_CHAR, row, col, before, before, char=removed
                )
            )
        return True

    def insert_line(self, at: int, text: str = "") -> bool:
        if LINE_BREAK in text:
            raise ValueError("rows cannot contain line breaks")
        before = self.cursor
        with Transaction(self, "insert_line") as tx:
            if not self.lines.insert_row(at, text):
                self.set_status(f"Cannot insert line at position {at + 1}")
                return False
            after = (at, 0)
            self.state.set_cursor(*after)
            tx.commit(
                Operation(OperationKind.INSERT_LINE, at, 0, before, after, line=text)
            )
        self.set_status(f"Line inserted at position {at + 1}")
        return True

    def delete_row(self, at: Optional[int] = None) -> bool:
        before = self.cursor
        target = before[0] if at is None else at
        with Transaction(self, "delete_row") as tx:
            removed = self.lines.delete_row(target)
            if removed is None:
                return False
            after = (min(target, max(0, self.lines.line_count - 1)), 0)
            self.state.set_cursor(*after)
            tx.commit(
                Operation(
                    OperationKind.DELETE_LINE, target, 0, before, after, line=removed
                )
            )
        return True

    # -- cursor ----------------------------------------------------------------

    def place_cursor(self, row: int, col: int) -> Cursor:
        cursor = ensure_cursor(self.lines, (row, col))
        self.state.set_cursor(*cursor)
        self.selection.update(*cursor)
        return cursor

    def move_cursor(self, motion: Motion | str, *, page_rows: int = 20) -> Cursor:
        motion = Motion(motion)
        row, col = self.cursor
        count = self.lines.line_count
        length = self.lines.row_length(row)

        if motion is Motion.LEFT:
            if col > 0:
                col -= 1
            elif row > 0:
                row -= 1
                col = self.lines.row_length(row)
        elif motion is Motion.RIGHT:
            if row < count and col < length:
                col += 1
            elif row < count - 1:
                row, col = row + 1, 0
        elif motion is Motion.UP:
            if row > 0:
                row -= 1
                col = min(col, self.lines.row_length(row))
        elif motion is Motion.DOWN:
            if row < count - 1:
                row += 1
                col = min(col, self.lines.row_length(row))
        elif motion is Motion.LINE_START:
            col = 0
        elif motion is Motion.LINE_END:
            if row < count:
                col = length
        elif motion is Motion.PAGE_UP:
            row, col = clamp_cursor(self.lines, row - page_rows, col)
        elif motion is Motion.PAGE_DOWN:
            row, col = clamp_cursor(self.lines, row + page_rows, col)

        self.state.set_cursor(row, col)
        self.selection.update(row, col)
        return (row, col)

    # -- history ---------------------------------------------------------------

    def undo(self) -> bool:
        with Transaction(self, "undo"):
            op = self.log.undo(self.lines)
            if op is None:
                self.set_status("Nothing to undo")
                return False
            self.state.set_cursor(*op.cursor_before)
        return True

    def redo(self) -> bool:
        with Transaction(self, "redo"):
            op = self.log.redo(self.lines)
            if op is None:
                self.set_status("Nothing to redo")
                return False
            self.state.set_cursor(*op.cursor_after)
        return True

    # -- selection and clipboard -----------------------------------------------

    def start_selection(self) -> None:
        self.selection.begin(*self.cursor)

    def update_selection(self) -> None:
        self.selection.update(*self.cursor)

    def clear_selection(self) -> None:
        self.selection.clear()

    def select_all(self) -> bool:
        if not self.selection.select_all(self.lines):
            return False
        self.set_status("Selected all text")
        return True

    def copy_selection(self) -> bool:
        bounds = self.selection.normalize()
        if bounds is None or self.selection.is_empty():
            self.set_status("No selection to copy")
            return False
        copied = extract_selection(self.lines, bounds)
        self.clipboard.replace(copied)
        self.set_status(f"Copied {len(copied)} lines")
        return True

    def paste(self) -> bool:
        """Replay the clipboard as typed characters and newlines."""

        if self.clipboard.is_empty():
            self.set_status("Nothing to paste")
            return False
        rows = list(self.clipboard.lines)
        with telemetry.span("buffer::paste", component=True):
            for index, text in enumerate(rows):
                for char in text:
                    self.insert_char(char)
                if index < len(rows) - 1:
                    self.newline()
        self.set_status(f"Pasted {len(rows)} lines")
        return True

    def delete_selection(self) -> bool:
        """Copy then remove the selected text, leaving the cursor at its start.

        The removed span is recorded as one ``DELETE_CHAR`` so a single undo
        puts every touched row back.
        """

        if self.selection.is_empty() or self.lines.line_count == 0:
            self.set_status("No selection to delete")
            self.selection.clear()
            return False
        bounds = self.selection.normalize_in_place()
        assert bounds is not None
        start_row, start_col, end_row, end_col = bounds
        if start_row >= self.lines.line_count:
            self.selection.clear()
            return False
        end_row = min(end_row, self.lines.line_count - 1)
        start_col = min(start_col, self.lines.row_length(start_row))
        end_col = min(end_col, self.lines.row_length(end_row))
        if (start_row, start_col) >= (end_row, end_col):
            self.set_status("No selection to delete")
            self.selection.clear()
            return False

        self.copy_selection()
        before = self.cursor
        after = (start_row, start_col)
        with Transaction(self, "delete_selection") as tx:
            removed = self.lines.delete_span(start_row, start_col, end_row, end_col)
            self.state.set_cursor(*after)
            tx.commit(
                Operation(
                    OperationKind.DELETE_CHAR,
                    start_row,
                    start_col,
                    before,
                    after,
                    char=removed or "",
                )
            )
        self.selection.clear()
        return True

    # -- files -------------------------------------------------------------------

    def open_file(self, path: str | os.PathLike[str]) -> bool:
        """Load ``path``; an unreadable file opens as a new empty buffer."""

        self.filename = os.fspath(path)
        loaded = True
        with telemetry.span(
            "buffer::open_file", component=True, metadata={"path": self.filename}
        ):
            try:
                rows = read_lines(self.filename)
            except OSError as exc:
                self.logger.warning(f"open {self.filename} failed: {exc}")
                rows = []
                loaded = False
        self.lines.reset(rows)
        self.log.clear()
        self.selection.clear()
        self.state.set_cursor(0, 0)
        return loaded

    def save(self, path: str | os.PathLike[str] | None = None) -> bool:
        if path is not None:
            self.filename = os.fspath(path)
        if not self.filename:
            self.set_status("Error: No filename")
            return False
        with telemetry.span(
            "buffer::save", component=True, metadata={"path": self.filename}
        ) as handle:
            try:
                written = write_lines(self.filename, self.lines.snapshot())
            except OSError as exc:
                handle.fail(str(exc))
                self.set_status(f"Can't save! I/O error: {exc.strerror or exc}")
                return False
        self.lines.mark_clean()
        self.set_status(f"{written} lines written to {self.filename}")
        return True


class Transaction(AbstractContextManager["Transaction"]):
    """Scope of one engine call: a telemetry span plus history recording."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, op: Operation) -> None:
        self.buffer.log.record(op)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Motion", "Transaction"]
