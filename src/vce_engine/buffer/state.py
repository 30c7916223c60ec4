"""Mutable editor state that travels with a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class BufferState:
    """Cursor offset plus the caches the renderer writes back.

    ``row`` and ``col`` are the cursor's screen cell from the most recent
    render pass. Vertical movement reads ``col`` and nothing but the
    renderer writes it.
    """

    cursor: int = 0
    row: int = 0
    col: int = 0
    page: int = 0
    epage: int = 0
    dirty: bool = False
    filename: Optional[str] = None

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset

    def record_render(self, row: int, col: int, page: int, epage: int) -> None:
        self.row = row
        self.col = col
        self.page = page
        self.epage = epage
