"""Gap-buffer storage, navigation and cursor state."""

from .buffer import Buffer, Transaction
from .navigation import (
    TAB_STOP,
    advance_to_column,
    line_number,
    next_line_start,
    previous_line_start,
)
from .state import BufferState
from .store import GapStore
from .validation import BufferValidationError, ensure_address, ensure_offset

__all__ = [
    "Buffer",
    "BufferState",
    "BufferValidationError",
    "GapStore",
    "TAB_STOP",
    "Transaction",
    "advance_to_column",
    "ensure_address",
    "ensure_offset",
    "line_number",
    "next_line_start",
    "previous_line_start",
]
