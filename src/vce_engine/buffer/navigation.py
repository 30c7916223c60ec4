"""Line boundaries and tab-aware column walking over a ``GapStore``.

Column arithmetic here is shared with the renderer: a tab advances to the
next multiple of ``TAB_STOP``, every other byte advances by one.
"""

from __future__ import annotations

from .store import NEWLINE, TAB, GapStore

TAB_STOP = 8


def next_tab_stop(column: int) -> int:
    return column + TAB_STOP - (column % TAB_STOP)


def previous_line_start(store: GapStore, offset: int) -> int:
    """Offset just after the nearest newline before ``offset``, else 0."""

    probe = min(offset, store.length) - 1
    while probe >= 0:
        if store.byte_at(probe) == NEWLINE:
            return probe + 1
        probe -= 1
    return 0


def next_line_start(store: GapStore, offset: int) -> int:
    """Offset just after the next newline at or after ``offset``, else the end."""

    end = store.length
    probe = max(offset, 0)
    while probe < end:
        if store.byte_at(probe) == NEWLINE:
            return probe + 1
        probe += 1
    return end


def advance_to_column(store: GapStore, offset: int, column: int) -> int:
    end = store.length
    current = 0
    while offset < end and current < column:
        value = store.byte_at(offset)
        if value == NEWLINE:
            break
        current = next_tab_stop(current) if value == TAB else current + 1
        offset += 1
    return offset


def line_number(store: GapStore, offset: int) -> int:
    """1-based line containing ``offset``."""

    return store.count(NEWLINE, max(0, min(offset, store.length))) + 1


__all__ = [
    "TAB_STOP",
    "advance_to_column",
    "line_number",
    "next_line_start",
    "next_tab_stop",
    "previous_line_start",
]
