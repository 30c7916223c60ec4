"""Cursor movement clamped to document boundaries."""

from __future__ import annotations

from .navigation import advance_to_column, next_line_start, previous_line_start
from .state import BufferState
from .store import GapStore


def move_left(store: GapStore, state: BufferState) -> int:
    if state.cursor > 0:
        state.cursor -= 1
    return state.cursor


def move_right(store: GapStore, state: BufferState) -> int:
    if state.cursor < store.length:
        state.cursor += 1
    return state.cursor


def move_up(store: GapStore, state: BufferState) -> int:
    line_start = previous_line_start(store, state.cursor)
    target = previous_line_start(store, line_start - 1)
    state.cursor = advance_to_column(store, target, state.col)
    return state.cursor


def move_down(store: GapStore, state: BufferState) -> int:
    target = next_line_start(store, state.cursor)
    state.cursor = advance_to_column(store, target, state.col)
    return state.cursor


__all__ = ["move_down", "move_left", "move_right", "move_up"]
