"""Gap-buffer editing engine for a fixed-capacity single-document editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "modes",
    "render",
    "runtime",
    "session",
]

__version__ = "0.8.0"
