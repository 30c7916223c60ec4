"""Editing commands bound to keys."""

from .core import (
    move_down,
    move_left,
    move_right,
    move_up,
    quit_session,
    redraw,
    show_version,
)
from .edit import delete_previous, insert_newline, insert_tab
from .file import save_as, save_document

__all__ = [
    "delete_previous",
    "insert_newline",
    "insert_tab",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "quit_session",
    "redraw",
    "save_as",
    "save_document",
    "show_version",
]
