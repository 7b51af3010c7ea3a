"""Mode manager and the four editor modes."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_helpers import KeymapMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .selection_mode import SelectionMode
from .command_mode import CommandMode
from .mode_manager import ModeManager, PendingTrigger

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "SelectionMode",
    "CommandMode",
    "ModeManager",
    "PendingTrigger",
]
