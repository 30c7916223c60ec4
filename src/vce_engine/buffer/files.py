"""Raw byte persistence for the document."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from vce_engine.runtime import telemetry

PathLike = Union[str, Path]


def strip_carriage_returns(data: bytes) -> bytes:
    return data.replace(b"\r", b"")


def read_document(path: PathLike, capacity: int) -> bytes:
    """Return at most ``capacity`` bytes of ``path`` with CR removed.

    ``OSError`` propagates; the caller decides whether that is fatal.
    """

    with open(path, "rb") as handle:
        data = strip_carriage_returns(handle.read())
    if len(data) > capacity:
        telemetry.record_event(
            "file.truncated",
            level="warning",
            data={"path": str(path), "size": len(data), "capacity": capacity},
        )
        data = data[:capacity]
    return data


def write_document(path: PathLike, data: bytes, *, crlf: bool = False) -> int:
    payload = data.replace(b"\n", b"\r\n") if crlf else data
    with open(path, "wb") as handle:
        handle.write(payload)
    return len(payload)


__all__ = ["read_document", "strip_carriage_returns", "write_document"]
