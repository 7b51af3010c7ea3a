"""Declarative key bindings resolved through per-layer tries.

Default bindings live in ``abczed.keymaps.defaults`` and are loaded by the
session, since they reference the action modules.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke
from .registry import GLOBAL_LAYER, KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "GLOBAL_LAYER",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
