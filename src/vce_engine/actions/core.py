"""Cursor movement and session-level actions."""

from __future__ import annotations

from vce_engine import __version__
from vce_engine.keymaps import ResolutionMatch
from vce_engine.modes.base_mode import ModeContext, ModeResult
from vce_engine.modes.message_mode import show_message


def _moved(context: ModeContext, before: int) -> ModeResult:
    status = "moved" if context.buffer.cursor != before else "clamped"
    return ModeResult(consumed=True, status=status)


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.cursor
    context.buffer.move_left()
    return _moved(context, before)


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.cursor
    context.buffer.move_right()
    return _moved(context, before)


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.cursor
    context.buffer.move_up()
    return _moved(context, before)


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.cursor
    context.buffer.move_down()
    return _moved(context, before)


def redraw(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, status="redraw")


def show_version(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return show_message(context, f"Version {__version__}")


def quit_session(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("session.quit", {"dirty": context.buffer.state.dirty})
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "quit_session",
    "redraw",
    "show_version",
]
