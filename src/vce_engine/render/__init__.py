"""Viewport rendering and status-line text."""

from .status import format_number, message_line, pad_number, prompt_line, status_line
from .viewport import RenderFrame, ScreenGrid, Viewport

__all__ = [
    "RenderFrame",
    "ScreenGrid",
    "Viewport",
    "format_number",
    "message_line",
    "pad_number",
    "prompt_line",
    "status_line",
]
