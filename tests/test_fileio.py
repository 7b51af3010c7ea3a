from __future__ import annotations

from pathlib import Path

from abczed.buffer import Buffer, read_lines, write_lines


def test_read_lines_strips_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "mixed.txt"
    path.write_bytes(b"one\r\ntwo\nthree")

    assert read_lines(path) == ["one", "two", "three"]


def test_read_lines_trailing_newline_and_empty_file(tmp_path: Path) -> None:
    trailing = tmp_path / "trailing.txt"
    trailing.write_bytes(b"a\n")
    blank_row = tmp_path / "blank.txt"
    blank_row.write_bytes(b"\n")
    empty = tmp_path / "empty.txt"
    empty.write_bytes(b"")

    assert read_lines(trailing) == ["a"]
    assert read_lines(blank_row) == [""]
    assert read_lines(empty) == []


def test_write_lines_terminates_every_row(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"

    assert write_lines(path, ["a", "", "b"]) == 3
    assert path.read_bytes() == b"a\n\nb\n"


def test_open_file_resets_buffer(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("first\nsecond\n")
    buffer = Buffer.from_lines(["scratch"])
    buffer.place_cursor(0, 3)
    buffer.insert_char("x")
    buffer.start_selection()

    assert buffer.open_file(path) is True

    assert buffer.snapshot() == ("first", "second")
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is False
    assert buffer.filename == str(path)
    assert buffer.log.undo_depth == 0
    assert buffer.selection.selecting is False


def test_open_missing_file_starts_empty_buffer(tmp_path: Path) -> None:
    path = tmp_path / "new.txt"
    buffer = Buffer.from_lines(["old"])

    assert buffer.open_file(path) is False

    assert buffer.snapshot() == ()
    assert buffer.filename == str(path)


def test_save_writes_and_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "saved.txt"
    buffer = Buffer.from_lines(["a", "b"])
    buffer.insert_char("z")

    assert buffer.save(path) is True

    assert path.read_text() == "za\nb\n"
    assert buffer.dirty is False
    assert buffer.status == f"2 lines written to {path}"


def test_save_without_filename() -> None:
    buffer = Buffer.from_lines(["a"])

    assert buffer.save() is False
    assert buffer.status == "Error: No filename"


def test_save_failure_reports_io_error(tmp_path: Path) -> None:
    buffer = Buffer.from_lines(["a"])
    buffer.insert_char("b")

    assert buffer.save(tmp_path) is False

    assert buffer.status.startswith("Can't save! I/O error:")
    assert buffer.dirty is True


def test_save_reuses_opened_filename(tmp_path: Path) -> None:
    path = tmp_path / "keep.txt"
    path.write_text("x\n")
    buffer = Buffer()
    buffer.open_file(path)
    buffer.place_cursor(0, 1)
    buffer.insert_char("y")

    assert buffer.save() is True
    assert path.read_text() == "xy\n"
