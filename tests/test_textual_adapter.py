from __future__ import annotations

from typing import List

import pytest

from abczed.adapters.textual import (
    TextualUIHooks,
    TextualVimAdapter,
    normalize_textual_key,
)
from abczed.adapters.textual.render import (
    Viewport,
    message_line,
    render_row,
    render_rows,
    status_bar,
)
from abczed.buffer import BufferMirror
from abczed.config import EditorSettings
from abczed.session import EditorSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_session(*lines: str, clock: FakeClock | None = None) -> EditorSession:
    return EditorSession.from_lines(
        lines, settings=EditorSettings(), clock=clock or FakeClock()
    )


def make_mirror(
    *lines: str,
    cursor: tuple[int, int] = (0, 0),
    selection: tuple[int, int, int, int] | None = None,
    dirty: bool = False,
    filename: str | None = None,
) -> BufferMirror:
    return BufferMirror(
        lines=lines,
        cursor=cursor,
        selection=selection,
        dirty=dirty,
        filename=filename,
        status="ready",
    )


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("ctrl+z", None, ("z", None, ("ctrl",))),
        ("escape", None, ("ESC", None, ())),
        ("enter", "\r", ("ENTER", None, ())),
        ("tab", "\t", ("TAB", "\t", ())),
        ("shift+left", None, ("LEFT", None, ())),
        ("pagedown", None, ("PAGEDOWN", None, ())),
        ("a", "a", ("a", "a", ())),
        ("colon", ":", (":", ":", ())),
        ("f5", None, ("F5", None, ())),
    ],
)
def test_normalize_textual_key(key: str, character: str | None, expected) -> None:
    assert normalize_textual_key(key, character) == expected


def test_adapter_updates_buffer_and_status() -> None:
    session = make_session("abc")
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=statuses.append,
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_host_key("enter")
    adapter.handle_host_key("x", "x")
    adapter.handle_host_key("escape")

    assert updates[-1] == "xabc"
    assert "-- INSERT --" in statuses
    assert statuses[-1] == "-- NORMAL --"


def test_adapter_relays_command_events() -> None:
    session = make_session("abc")
    command_lines: List[str] = []
    events: List[str] = []
    exits: List[bool] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        show_command=command_lines.append,
        handle_event=lambda name, payload: events.append(name),
        request_exit=lambda: exits.append(True),
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_host_key("colon", ":")
    adapter.handle_host_key("q", "q")
    adapter.handle_host_key("enter")

    assert ":" in command_lines
    assert ":q" in command_lines
    assert command_lines[-1] == ""
    assert events == ["command.start", "command.submit", "command.quit", "command.end"]
    assert exits == [True]


def test_adapter_relays_selection_events() -> None:
    session = make_session("abc")
    events: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append(name),
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_host_key("v", "v")
    adapter.handle_host_key("l", "l")
    adapter.handle_host_key("y", "y")

    assert events == [
        "selection.start",
        "selection.update",
        "selection.yank",
        "selection.end",
    ]


def test_adapter_mirror_carries_mode_label() -> None:
    session = make_session("abc")
    mirrors: List[BufferMirror] = []
    adapter = TextualVimAdapter(session, TextualUIHooks(update_buffer=mirrors.append))

    adapter.handle_host_key("ctrl+a")

    assert mirrors[-1].attributes["mode"] == "SELECT"
    assert mirrors[-1].selection == (0, 0, 0, 3)


def test_adapter_process_timeouts_refreshes_ui() -> None:
    clock = FakeClock()
    session = make_session("abc", clock=clock)
    updates: List[str] = []
    adapter = TextualVimAdapter(
        session, TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text))
    )

    adapter.handle_host_key("c", "c")
    assert adapter.process_timeouts() == {}
    refreshed = len(updates)

    clock.now = 1.0
    results = adapter.process_timeouts()

    assert results["normal"].status == "timeout"
    assert len(updates) == refreshed + 1


def test_viewport_scrolls_to_cursor() -> None:
    viewport = Viewport(rows=5, cols=10)

    viewport.scroll((7, 0))
    assert viewport.rowoff == 3

    viewport.scroll((1, 12))
    assert (viewport.rowoff, viewport.coloff) == (1, 3)
    assert viewport.screen_cursor((1, 12)) == (0, 9)

    viewport.scroll((1, 0))
    assert viewport.coloff == 0


def test_render_rows_mark_selection_and_past_end() -> None:
    mirror = make_mirror("hello", selection=(0, 1, 0, 3))
    viewport = Viewport(rows=3, cols=10)

    assert render_row(mirror, viewport, 0) == [
        ("h", False),
        ("el", True),
        ("lo", False),
    ]
    rows = render_rows(mirror, viewport)
    assert len(rows) == 3
    assert rows[1] == [("~", False)]


def test_render_row_respects_column_offset() -> None:
    mirror = make_mirror("abcdef", selection=(0, 0, 0, 3))
    viewport = Viewport(rows=1, cols=3, coloff=2)

    assert render_row(mirror, viewport, 0) == [("c", True), ("de", False)]


def test_status_bar_layout() -> None:
    mirror = make_mirror("a", "b", cursor=(1, 0), dirty=True, filename="notes.txt")
    viewport = Viewport(rows=10, cols=60)

    bar = status_bar(mirror, "NORMAL", viewport)

    assert len(bar) == 60
    assert bar.startswith("notes.txt - 2 lines (modified)")
    assert bar.endswith("NORMAL | 60x10 | 2:1 | 50%")


def test_status_bar_without_name_or_room() -> None:
    mirror = make_mirror()

    wide = status_bar(mirror, "INSERT", Viewport(rows=5, cols=50))
    narrow = status_bar(mirror, "INSERT", Viewport(rows=5, cols=12))

    assert wide.startswith("[No Name] - 0 lines")
    assert wide.endswith("INSERT | 50x5 | 1:1 | 0%")
    assert narrow == "[No Name] - "


def test_message_line_prefers_command_text() -> None:
    mirror = make_mirror("a")

    assert message_line(mirror, ":wq") == ":wq"
    assert message_line(mirror, "") == "ready"
