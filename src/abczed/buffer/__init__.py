"""Line storage, editing engine, and undo/redo data structures."""

from .buffer import Buffer, Motion, Transaction
from .clipboard import Clipboard, extract_selection
from .document import LineStore
from .fileio import read_lines, write_lines
from .state import BufferState, SelectionModel
from .sync import BufferMirror, BufferValidationError
from .undo import Operation, OperationKind, OperationLog
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "LineStore",
    "BufferState",
    "SelectionModel",
    "Clipboard",
    "extract_selection",
    "Operation",
    "OperationKind",
    "OperationLog",
    "Buffer",
    "Motion",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
    "read_lines",
    "write_lines",
]
