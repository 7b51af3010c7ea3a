"""Executable Textual app that hosts the editing session."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

try:
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use abczed.adapters.textual.app"
    ) from exc

from abczed import __version__
from abczed.buffer import BufferMirror
from abczed.config import EditorSettings
from abczed.runtime import telemetry
from abczed.session import EditorSession

from .controller import TextualUIHooks, TextualVimAdapter
from .render import Viewport, message_line, render_rows, status_bar

SELECTED_STYLE = "reverse"
MARKER_STYLE = "blue"


def create_session(
    path: Optional[str] = None, *, settings: Optional[EditorSettings] = None
) -> EditorSession:
    """Build a session, optionally bound to ``path``."""

    session = EditorSession(settings=settings)
    if path:
        session.open(path)
    return session


class AbczedApp(App[None]):
    """Full-screen modal editor: buffer view, status bar, message line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 0;
	}

	#status-line {
		height: 1;
		background: $accent;
		color: $text;
	}

	#message-line {
		height: 1;
	}
	"""

    def __init__(self, session: Optional[EditorSession] = None) -> None:
        super().__init__()
        self.session = session or create_session()
        self.adapter: TextualVimAdapter | None = None
        self.viewport = Viewport(rows=24, cols=80)
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self._mirror: BufferMirror | None = None
        self._command_text = ""

    def compose(self) -> ComposeResult:
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        self._resize_viewport()
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            request_exit=self.exit,
        )
        self.adapter = TextualVimAdapter(self.session, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._resize_viewport()
        self._redraw()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        event.prevent_default()
        event.stop()
        self.adapter.handle_host_key(event.key, event.character)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _resize_viewport(self) -> None:
        width, height = self.size
        self.viewport.rows = max(1, height - 2)
        self.viewport.cols = max(1, width)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._mirror = mirror
        self._redraw()

    def _update_status(self, status: str) -> None:
        del status
        self._redraw_message()

    def _show_command(self, command: str) -> None:
        self._command_text = command
        self._redraw_message()

    def _handle_event(self, name: str, payload: Any | None) -> None:
        del payload
        telemetry.record_event("ui.event", level="debug", data={"event": name})

    def _redraw(self) -> None:
        mirror = self._mirror
        if mirror is None:
            return
        self.viewport.scroll(mirror.cursor)
        screen_row, screen_col = self.viewport.screen_cursor(mirror.cursor)
        body = Text()
        for index, spans in enumerate(render_rows(mirror, self.viewport)):
            if index:
                body.append("\n")
            line = Text()
            past_end = self.viewport.rowoff + index >= mirror.line_count
            for chunk, selected in spans:
                if past_end:
                    line.append(chunk, style=MARKER_STYLE)
                else:
                    line.append(chunk, style=SELECTED_STYLE if selected else "")
            if index == screen_row:
                if screen_col >= len(line):
                    line.pad_right(screen_col - len(line) + 1)
                line.stylize("underline", screen_col, screen_col + 1)
            body.append_text(line)
        if self._buffer_widget:
            self._buffer_widget.update(body)
        if self._status_widget:
            label = mirror.attributes.get("mode", "")
            self._status_widget.update(status_bar(mirror, label, self.viewport))
        self._redraw_message()

    def _redraw_message(self) -> None:
        if self._message_widget is None or self._mirror is None:
            return
        self._message_widget.update(message_line(self._mirror, self._command_text))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="abczed", description="A small modal terminal text editor."
    )
    parser.add_argument("file", nargs="?", help="file to open")
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        help="telelog preset to configure logging with",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = AbczedApp(create_session(args.file))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
