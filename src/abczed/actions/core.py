"""Mode switches and session-wide shortcuts shared across modes."""

from __future__ import annotations

from abczed.config import HELP_TEXT, MODE_BANNERS, EditorMode
from abczed.keymaps import ResolutionMatch
from abczed.modes.base_mode import ModeContext, ModeResult


def _switch(
    context: ModeContext, mode: EditorMode, message: str, *, status: str | None = None
) -> ModeResult:
    if status is None:
        status = MODE_BANNERS.get(mode, "")
    context.buffer.set_status(status)
    return ModeResult(consumed=True, switch_to=mode.value, message=message)


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _switch(context, EditorMode.INSERT, "enter_insert")


def exit_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Leave insert mode with the cursor resting on the last typed character."""

    del match
    buffer = context.buffer
    row, col = buffer.cursor
    if col > 0 and buffer.line_count > 0:
        buffer.state.set_cursor(row, col - 1)
    return _switch(context, EditorMode.NORMAL, "exit_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _switch(context, EditorMode.NORMAL, "exit_to_normal")


def enter_selection_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _switch(context, EditorMode.SELECTION, "enter_selection")


def select_all(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.select_all()
    return ModeResult(
        consumed=True, switch_to=EditorMode.SELECTION.value, message="select_all"
    )


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _switch(context, EditorMode.COMMAND, "enter_command", status=":")


def show_help(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.set_status(HELP_TEXT)
    return ModeResult(consumed=True, status="help")


def request_quit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("command.quit", {"force": True})
    return ModeResult(consumed=True, status="quit", message="quit!")


__all__ = [
    "enter_insert_mode",
    "exit_insert_mode",
    "exit_to_normal_mode",
    "enter_selection_mode",
    "select_all",
    "enter_command_mode",
    "show_help",
    "request_quit",
]
