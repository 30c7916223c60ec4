"""Viewport paging and the fixed-size screen grid.

Every pass rebuilds the grid from scratch. The only state carried between
passes is ``page`` and ``epage`` on the buffer state, which decide whether
the window has to move before the walk starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from vce_engine.buffer import Buffer, BufferState, GapStore
from vce_engine.buffer.navigation import (
    next_line_start,
    next_tab_stop,
    previous_line_start,
)
from vce_engine.buffer.store import CARRIAGE_RETURN, NEWLINE, TAB
from vce_engine.config import Geometry
from vce_engine.runtime import telemetry

BLANK = ord(" ")


class ScreenGrid:
    """``rows`` x ``cols`` byte cells, blank unless written."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._cells = [bytearray(b" " * cols) for _ in range(rows)]

    def put(self, row: int, col: int, value: int) -> None:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            self._cells[row][col] = value

    def lines(self) -> List[str]:
        return [bytes(row).decode("latin-1") for row in self._cells]


@dataclass(slots=True)
class RenderFrame:
    grid: ScreenGrid
    cursor: Tuple[int, int]
    page: int
    epage: int
    cursor_visible: bool


def page_for(store: GapStore, state: BufferState, text_rows: int) -> int:
    """First offset to display so that the cursor ends up on screen."""

    page = state.page
    if state.cursor < page:
        page = previous_line_start(store, state.cursor)

    if state.epage <= state.cursor:
        page = next_line_start(store, state.cursor)
        remaining = text_rows - 2 if page == store.length else text_rows
        while remaining > 0:
            page = previous_line_start(store, page - 1)
            remaining -= 1
    return page


def walk(
    store: GapStore, page: int, cursor: int, grid: ScreenGrid
) -> Tuple[Optional[Tuple[int, int]], int]:
    """Fill ``grid`` from ``page``; return the cursor cell and ``epage``."""

    end = store.length
    row = col = 0
    offset = page
    position: Optional[Tuple[int, int]] = None
    while True:
        if offset == cursor:
            position = (row, col)
        if row >= grid.rows or offset >= end:
            break
        value = store.byte_at(offset)
        if value == NEWLINE:
            grid.put(row, col, BLANK)
            col += 1
        elif value == TAB:
            stop = next_tab_stop(col)
            while col < stop:
                grid.put(row, col, BLANK)
                col += 1
        elif value != CARRIAGE_RETURN:
            grid.put(row, col, value)
            col += 1
        if value == NEWLINE or col >= grid.cols:
            row += 1
            col = 0
        offset += 1
    return position, offset


class Viewport:
    """Maps a scrolling window of the buffer onto the text rows."""

    def __init__(self, geometry: Geometry) -> None:
        self.geometry = geometry

    def render(self, buffer: Buffer) -> RenderFrame:
        with telemetry.span(
            "render::pass",
            component="render",
            metadata={"buffer": buffer.name},
        ) as handle:
            frame = self._pass(buffer)
            if not frame.cursor_visible:
                # The walk ended before the cursor; page again from the new epage.
                handle.add_metadata("repaged", True)
                frame = self._pass(buffer)
            if not frame.cursor_visible:
                # Wrapped lines above the cursor filled the screen; start at its line.
                start = previous_line_start(buffer.store, buffer.cursor)
                frame = self._pass(buffer, page=start)
            handle.add_metadata("page", frame.page)
        return frame

    def _pass(self, buffer: Buffer, page: Optional[int] = None) -> RenderFrame:
        store, state = buffer.store, buffer.state
        grid = ScreenGrid(self.geometry.text_rows, self.geometry.cols)
        if page is None:
            page = page_for(store, state, grid.rows)
        position, epage = walk(store, page, state.cursor, grid)
        if position is None:
            state.page, state.epage = page, epage
            return RenderFrame(
                grid=grid,
                cursor=(state.row, state.col),
                page=page,
                epage=epage,
                cursor_visible=False,
            )
        visible = position[0] < grid.rows
        state.record_render(position[0], position[1], page, epage)
        return RenderFrame(
            grid=grid,
            cursor=position,
            page=page,
            epage=epage,
            cursor_visible=visible,
        )


__all__ = ["RenderFrame", "ScreenGrid", "Viewport", "page_for", "walk"]
