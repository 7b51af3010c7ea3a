from __future__ import annotations

import pytest

from abczed.buffer import Buffer, BufferValidationError, LineStore, Motion, OperationLog


def make_buffer(*lines: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_lines(lines)
    buffer.place_cursor(*cursor)
    return buffer


def test_left_and_right_wrap_across_rows() -> None:
    buffer = make_buffer("ab", "cd", cursor=(1, 0))

    assert buffer.move_cursor(Motion.LEFT) == (0, 2)
    assert buffer.move_cursor(Motion.RIGHT) == (1, 0)

    buffer.place_cursor(1, 2)
    assert buffer.move_cursor(Motion.RIGHT) == (1, 2)

    buffer.place_cursor(0, 0)
    assert buffer.move_cursor(Motion.LEFT) == (0, 0)


def test_vertical_motion_clamps_column() -> None:
    buffer = make_buffer("long line", "ab", cursor=(0, 8))

    assert buffer.move_cursor(Motion.DOWN) == (1, 2)
    assert buffer.move_cursor(Motion.DOWN) == (1, 2)
    assert buffer.move_cursor(Motion.UP) == (0, 2)
    assert buffer.move_cursor(Motion.UP) == (0, 2)


def test_line_start_and_end() -> None:
    buffer = make_buffer("hello", cursor=(0, 2))

    assert buffer.move_cursor("line_end") == (0, 5)
    assert buffer.move_cursor("line_start") == (0, 0)


def test_page_motions_clamp_to_buffer() -> None:
    buffer = make_buffer("a", "b", "c", "d", "e")

    assert buffer.move_cursor(Motion.PAGE_DOWN, page_rows=2) == (2, 0)
    assert buffer.move_cursor(Motion.PAGE_DOWN, page_rows=10) == (4, 0)
    assert buffer.move_cursor(Motion.PAGE_UP, page_rows=3) == (1, 0)
    assert buffer.move_cursor(Motion.PAGE_UP, page_rows=3) == (0, 0)


def test_motion_extends_armed_selection() -> None:
    buffer = make_buffer("hello")
    buffer.start_selection()

    buffer.move_cursor(Motion.RIGHT)
    buffer.move_cursor(Motion.RIGHT)

    assert buffer.selection.normalize() == (0, 0, 0, 2)


def test_place_cursor_validates_position() -> None:
    buffer = make_buffer("abc")

    assert buffer.place_cursor(0, 3) == (0, 3)
    assert buffer.place_cursor(1, 0) == (1, 0)

    with pytest.raises(BufferValidationError):
        buffer.place_cursor(0, 4)
    with pytest.raises(BufferValidationError):
        buffer.place_cursor(2, 0)
    with pytest.raises(BufferValidationError):
        buffer.place_cursor(-1, 0)


def test_insert_char_requires_single_character() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(ValueError):
        buffer.insert_char("ab")
    with pytest.raises(ValueError):
        buffer.insert_char("")


def test_insert_char_line_break_splits_row() -> None:
    buffer = make_buffer("abc", cursor=(0, 1))

    buffer.insert_char("\n")

    assert buffer.snapshot() == ("a", "bc")
    assert buffer.cursor == (1, 0)


def test_delete_under_cursor() -> None:
    buffer = make_buffer("abc", cursor=(0, 1))

    assert buffer.delete_under_cursor() is True
    assert buffer.snapshot() == ("ac",)
    assert buffer.cursor == (0, 1)

    buffer.place_cursor(0, 2)
    assert buffer.delete_under_cursor() is False

    buffer.undo()
    assert buffer.snapshot() == ("abc",)


def test_insert_line_reports_position() -> None:
    buffer = make_buffer("a", "b")

    assert buffer.insert_line(1, "new") is True
    assert buffer.snapshot() == ("a", "new", "b")
    assert buffer.cursor == (1, 0)
    assert buffer.status == "Line inserted at position 2"

    assert buffer.insert_line(9, "x") is False
    assert buffer.status == "Cannot insert line at position 10"

    with pytest.raises(ValueError):
        buffer.insert_line(0, "a\nb")


def test_dirty_tracks_edits() -> None:
    buffer = make_buffer("abc")
    assert buffer.dirty is False

    buffer.insert_char("x")

    assert buffer.dirty is True


def test_mirror_reports_selection_only_when_armed() -> None:
    buffer = make_buffer("hello")
    assert buffer.mirror().selection is None

    buffer.start_selection()
    buffer.move_cursor(Motion.LINE_END)
    mirror = buffer.mirror(attributes={"mode": "SELECT"})

    assert mirror.selection == (0, 0, 0, 5)
    assert mirror.text == "hello"
    assert mirror.attributes == {"mode": "SELECT"}


def test_from_text_splits_rows() -> None:
    assert Buffer.from_text("a\nb").snapshot() == ("a", "b")
    assert Buffer.from_text("").snapshot() == ()


def test_update_selection_follows_cursor_state() -> None:
    buffer = make_buffer("hello")
    buffer.start_selection()

    buffer.state.set_cursor(0, 3)
    buffer.update_selection()

    assert buffer.selection.normalize() == (0, 0, 0, 3)


def test_injected_empty_collaborators_are_kept() -> None:
    log = OperationLog()
    lines = LineStore()

    buffer = Buffer(lines=lines, log=log)
    buffer.insert_char("x")

    assert buffer.log is log
    assert buffer.lines is lines
    assert log.undo_depth == 1
    assert lines.snapshot() == ("x",)
