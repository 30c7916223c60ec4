"""Buffer façade tying the gap store to cursor state and persistence."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from vce_engine.runtime import telemetry

from . import cursor as cursor_moves
from .files import PathLike, read_document, write_document
from .navigation import line_number
from .state import BufferState
from .store import GapStore


class Buffer:
    def __init__(
        self,
        capacity: int,
        *,
        name: str = "default",
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.store = GapStore(capacity)
        self.state = state or BufferState()

    @classmethod
    def from_bytes(cls, data: bytes, capacity: int, **kwargs) -> "Buffer":
        buffer = cls(capacity, **kwargs)
        buffer.store.load(data)
        return buffer

    @property
    def length(self) -> int:
        return self.store.length

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def line(self) -> int:
        return line_number(self.store, self.state.cursor)

    def insert_byte(self, value: int) -> bool:
        """Insert ``value`` at the cursor, or delete backwards for BS/DEL."""

        with Transaction(self, "insert") as tx:
            self.store.move_gap_to(self.state.cursor)
            changed = self.store.insert(value)
            self.state.set_cursor(self.store.gap_start)
            if changed:
                self.state.dirty = True
            else:
                tx.saturated()
        return changed

    def insert_text(self, data: bytes) -> int:
        return sum(1 for value in data if self.insert_byte(value))

    def move_left(self) -> int:
        return cursor_moves.move_left(self.store, self.state)

    def move_right(self) -> int:
        return cursor_moves.move_right(self.store, self.state)

    def move_up(self) -> int:
        return cursor_moves.move_up(self.store, self.state)

    def move_down(self) -> int:
        return cursor_moves.move_down(self.store, self.state)

    def load(self, path: PathLike) -> bool:
        """Load ``path``; on failure keep an empty document and return False."""

        self.state.filename = str(path)
        try:
            data = read_document(path, self.store.capacity)
        except OSError as exc:
            telemetry.record_event(
                "buffer.load_failed",
                level="warning",
                data={"path": str(path), "reason": exc.strerror or str(exc)},
            )
            self.store.load(b"")
            return False
        with Transaction(self, "load"):
            self.store.load(data)
            self.state.set_cursor(0)
            self.state.dirty = False
        return True

    def save(self, path: Optional[PathLike] = None, *, crlf: bool = False) -> None:
        """Write the document to ``path`` (default: the buffer's filename).

        ``OSError`` propagates and leaves the dirty flag untouched.
        """

        target = path if path is not None else self.state.filename
        if target is None:
            raise ValueError("no filename")
        saved_cursor = self.state.cursor
        with Transaction(self, "save"):
            self.store.move_gap_to(0)
            try:
                write_document(target, self.store.content(), crlf=crlf)
            finally:
                self.state.set_cursor(saved_cursor)
        self.state.filename = str(target)
        self.state.dirty = False


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def saturated(self) -> None:
        if self._handle is not None:
            self._handle.add_metadata("saturated", True)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
