"""Range checks shared by the store and its callers."""

from __future__ import annotations


class BufferValidationError(RuntimeError):
    """Raised when an offset or address falls outside the valid range."""

    def __init__(self, message: str, *, value: int | None = None) -> None:
        super().__init__(message)
        self.value = value


def ensure_offset(offset: int, length: int) -> int:
    if offset < 0 or offset > length:
        raise BufferValidationError("Offset out of range", value=offset)
    return offset


def ensure_address(address: int, capacity: int) -> int:
    if address < 0 or address > capacity:
        raise BufferValidationError("Address out of range", value=address)
    return address
