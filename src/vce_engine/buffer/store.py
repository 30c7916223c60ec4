"""Fixed-capacity gap buffer and logical/physical position translation.

The storage region is a single ``bytearray`` allocated once. Live text sits
in ``[0, gap_start)`` and ``[gap_end, capacity)``; the gap between them
holds no document bytes. Callers work exclusively in logical offsets;
physical addresses never leave this module except through ``to_physical``.
"""

from __future__ import annotations

from vce_engine.config import StorageAllocationError

from .validation import BufferValidationError, ensure_address, ensure_offset

NEWLINE = 0x0A
CARRIAGE_RETURN = 0x0D
TAB = 0x09
BACKSPACE = 0x08
DELETE = 0x7F

DELETE_SIGNALS = frozenset({BACKSPACE, DELETE})


class GapStore:
    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise StorageAllocationError("unable to create buffer")
        try:
            self._region = bytearray(capacity)
        except MemoryError as exc:
            raise StorageAllocationError("unable to create buffer") from exc
        self.capacity = capacity
        self.gap_start = 0
        self.gap_end = capacity

    @classmethod
    def from_bytes(cls, data: bytes, capacity: int) -> "GapStore":
        store = cls(capacity)
        store.load(data)
        return store

    @property
    def gap_length(self) -> int:
        return self.gap_end - self.gap_start

    @property
    def length(self) -> int:
        return self.capacity - self.gap_length

    @property
    def free(self) -> int:
        return self.gap_length

    def load(self, data: bytes) -> int:
        """Replace the content with ``data`` placed before the gap.

        Bytes beyond capacity are discarded. Returns the number kept.
        """

        kept = bytes(data[: self.capacity])
        self._region[: len(kept)] = kept
        self.gap_start = len(kept)
        self.gap_end = self.capacity
        return len(kept)

    def to_physical(self, offset: int) -> int:
        if offset < 0:
            return 0
        if offset < self.gap_start:
            return offset
        return offset + self.gap_length

    def to_logical(self, address: int) -> int:
        if address < self.gap_end:
            return address
        return address - self.gap_length

    def address_byte(self, address: int) -> int:
        ensure_address(address, self.capacity - 1)
        if self.gap_start <= address < self.gap_end:
            raise BufferValidationError("Address inside gap", value=address)
        return self._region[address]

    def byte_at(self, offset: int) -> int:
        if offset < 0 or offset >= self.length:
            raise BufferValidationError("Offset out of range", value=offset)
        return self._region[self.to_physical(offset)]

    def move_gap_to(self, target: int) -> None:
        """Relocate the gap so that logical ``target`` starts it."""

        ensure_offset(target, self.length)
        if target < self.gap_start:
            count = self.gap_start - target
            self._region[self.gap_end - count : self.gap_end] = self._region[
                target : self.gap_start
            ]
            self.gap_start -= count
            self.gap_end -= count
        elif target > self.gap_start:
            count = target - self.gap_start
            self._region[self.gap_start : target] = self._region[
                self.gap_end : self.gap_end + count
            ]
            self.gap_start += count
            self.gap_end += count

    def insert(self, value: int) -> bool:
        """Apply one byte at the gap start.

        Delete signals remove the byte before the gap. Anything else is
        written into the gap, with CR stored as LF. Returns ``False`` when
        nothing changed (delete at start, or no free capacity).
        """

        if value in DELETE_SIGNALS:
            if self.gap_start == 0:
                return False
            self.gap_start -= 1
            return True
        if self.gap_start >= self.gap_end:
            return False
        self._region[self.gap_start] = NEWLINE if value == CARRIAGE_RETURN else value
        self.gap_start += 1
        return True

    def content(self) -> bytes:
        return bytes(self._region[: self.gap_start]) + bytes(
            self._region[self.gap_end :]
        )

    def count(self, value: int, end: int) -> int:
        """Occurrences of ``value`` in logical ``[0, end)``."""

        ensure_offset(end, self.length)
        split = min(end, self.gap_start)
        total = self._region.count(value, 0, split)
        if end > self.gap_start:
            total += self._region.count(value, self.gap_end, self.to_physical(end))
        return total


__all__ = [
    "BACKSPACE",
    "CARRIAGE_RETURN",
    "DELETE",
    "DELETE_SIGNALS",
    "GapStore",
    "NEWLINE",
    "TAB",
]
