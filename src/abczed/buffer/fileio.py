"""Plain-text load/save for the line store."""

from __future__ import annotations

import os
from typing import Iterable, List

ENCODING = "utf-8"
# Undecodable bytes survive a load/save round trip untouched.
ERRORS = "surrogateescape"


def read_lines(path: str | os.PathLike[str]) -> List[str]:
    """Read ``path`` as one row per ``\\n``-terminated record.

    Trailing ``\\r`` characters are stripped so CRLF files load cleanly. A
    final newline does not produce an extra empty row. ``OSError`` propagates
    to the caller.
    """

    with open(path, "r", encoding=ENCODING, errors=ERRORS, newline="") as handle:
        text = handle.read()
    if not text:
        return []
    records = text.split("\n")
    if text.endswith("\n"):
        records.pop()
    return [record.rstrip("\r") for record in records]


def write_lines(path: str | os.PathLike[str], lines: Iterable[str]) -> int:
    """Write every row newline-terminated; return the number of rows."""

    count = 0
    with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as handle:
        for line in lines:
            handle.write(line)
            handle.write("\n")
            count += 1
    return count


__all__ = ["read_lines", "write_lines"]
