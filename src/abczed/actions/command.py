"""Actions that evaluate Ex-style command lines."""

from __future__ import annotations

from collections import deque
from functools import partial
from typing import Callable, Deque, Dict, Optional, cast

from abczed.config import EditorMode
from abczed.modes.base_mode import ModeContext, ModeResult
from abczed.modes.command_mode import COMMAND_PREFIX, command_state
from abczed.runtime import telemetry

CommandHandler = Callable[[ModeContext, str], ModeResult]

DIRTY_WARNING = "No write since last change (add ! to override)"
UNKNOWN_DISPLAY_LIMIT = 59

_WHITESPACE = " \t"


def normalize_command(raw: str) -> Optional[str]:
    """Return ``raw`` with exactly one leading colon, or ``None`` if it is empty.

    ``"  ::w "``, ``":w"`` and ``"w"`` all normalize to ``":w"``.
    """

    body = raw.lstrip(_WHITESPACE).lstrip(COMMAND_PREFIX)
    body = body.lstrip(_WHITESPACE).rstrip(_WHITESPACE + "\r\n")
    if not body:
        return None
    return COMMAND_PREFIX + body


def command_history(context: ModeContext) -> Deque[str]:
    state = command_state(context)
    history = state.get("history")
    if not isinstance(history, deque):
        history = deque(maxlen=context.settings.command_history)
        state["history"] = history
    return cast(Deque[str], history)


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    raw = str(state.get("text", ""))
    state["text"] = ""
    command = normalize_command(raw)
    if command is None:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL.value, status="command_empty"
        )
    context.bus.emit("command.submit", command)
    return run_command(context, command)


def run_command(context: ModeContext, command: str) -> ModeResult:
    """Dispatch a normalized command; the cursor survives unless a file is opened."""

    buffer = context.buffer
    saved_cursor = buffer.cursor
    name, _, argument = command[1:].partition(" ")
    argument = argument.strip(_WHITESPACE)

    with telemetry.span(
        "command::run", component="command", metadata={"command": name}
    ):
        handler = _COMMAND_HANDLERS.get(name)
        if handler is None:
            result = _unknown_command(context, command)
        else:
            result = handler(context, argument)

    command_history(context).append(command)
    if result.status not in ("command_quit", "command_edit"):
        buffer.state.set_cursor(*saved_cursor)
    return result


def _finish(status: str, message: str) -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL.value,
        status=status,
        message=message,
    )


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    context.buffer.set_status(
        f"Unknown command: {command[:UNKNOWN_DISPLAY_LIMIT]}"
    )
    return _finish("command_error", command)


def _request_quit(context: ModeContext, *, force: bool) -> ModeResult:
    context.bus.emit("command.quit", {"force": force})
    return _finish("command_quit", "quit!" if force else "quit")


def _handle_quit(
    context: ModeContext, argument: str, *, force: bool = False
) -> ModeResult:
    del argument
    if not force and context.buffer.dirty:
        context.buffer.set_status(DIRTY_WARNING)
        return _finish("command_refused", "quit")
    return _request_quit(context, force=force)


def _handle_write(context: ModeContext, argument: str) -> ModeResult:
    saved = context.buffer.save(argument or None)
    context.bus.emit("command.write", {"saved": saved, "path": context.buffer.filename})
    return _finish("command_write" if saved else "command_write_failed", "write")


def _handle_write_quit(context: ModeContext, argument: str) -> ModeResult:
    saved = context.buffer.save(argument or None)
    context.bus.emit("command.write", {"saved": saved, "path": context.buffer.filename})
    if not saved:
        return _finish("command_write_failed", "wq")
    return _request_quit(context, force=False)


def _handle_edit(
    context: ModeContext, argument: str, *, force: bool = False
) -> ModeResult:
    buffer = context.buffer
    if not argument:
        buffer.set_status("Error: No filename")
        return _finish("command_error", "edit")
    if not force and buffer.dirty:
        buffer.set_status(DIRTY_WARNING)
        return _finish("command_refused", "edit")
    buffer.open_file(argument)
    buffer.set_status(f"Opened {argument}")
    context.bus.emit("command.edit", {"force": force, "path": argument})
    return _finish("command_edit", "edit!" if force else "edit")


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "quit": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "quit!": partial(_handle_quit, force=True),
    "w": _handle_write,
    "write": _handle_write,
    "wq": _handle_write_quit,
    "sq": _handle_write_quit,
    "x": _handle_write_quit,
    "e": _handle_edit,
    "edit": _handle_edit,
    "e!": partial(_handle_edit, force=True),
    "edit!": partial(_handle_edit, force=True),
}


__all__ = [
    "command_history",
    "normalize_command",
    "run_command",
    "submit_command_line",
]
