"""Textual host for the editing session.

Only the controller is imported here; ``abczed.adapters.textual.app`` pulls in
Textual itself.
"""

from .controller import TextualUIHooks, TextualVimAdapter, normalize_textual_key

__all__ = ["TextualUIHooks", "TextualVimAdapter", "normalize_textual_key"]
