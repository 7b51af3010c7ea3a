"""Modal terminal text editor built around a reversible line-buffer engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "modes",
    "runtime",
    "session",
]

__version__ = "0.1.0"
