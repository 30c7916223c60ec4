"""Byte insertion and deletion at the cursor."""

from __future__ import annotations

from vce_engine.buffer.store import CARRIAGE_RETURN, DELETE, TAB
from vce_engine.keymaps import ResolutionMatch
from vce_engine.modes.base_mode import ModeContext, ModeResult


def _apply(context: ModeContext, value: int) -> ModeResult:
    changed = context.buffer.insert_byte(value)
    return ModeResult(consumed=True, status="insert" if changed else "saturated")


def delete_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply(context, DELETE)


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply(context, CARRIAGE_RETURN)


def insert_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply(context, TAB)


__all__ = ["delete_previous", "insert_newline", "insert_tab"]
