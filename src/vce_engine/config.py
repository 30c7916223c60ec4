"""Session geometry and editor configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from vce_engine.runtime.telemetry import env, env_flag

DEFAULT_CAPACITY = 8 * 1024 * 1024
DEFAULT_ROWS = 24
DEFAULT_COLS = 80
MIN_ROWS = 2
MIN_COLS = 16
# The status line reports free space in a seven-digit field.
MAX_CAPACITY = 9_999_999


class VceStartupError(RuntimeError):
    """Unrecoverable condition detected before the edit loop starts."""


class GeometryError(VceStartupError):
    """Raised when the display is below the minimum usable size."""

    def __init__(self, rows: int, cols: int) -> None:
        super().__init__("terminal too small")
        self.rows = rows
        self.cols = cols


class StorageAllocationError(VceStartupError):
    """Raised when the storage region cannot be allocated."""


@dataclass(frozen=True, slots=True)
class Geometry:
    """Terminal size: one status row on top, ``rows - 1`` text rows below."""

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS

    def __post_init__(self) -> None:
        if self.cols < MIN_COLS or self.rows < MIN_ROWS:
            raise GeometryError(self.rows, self.cols)

    @property
    def text_rows(self) -> int:
        return self.rows - 1


@dataclass(frozen=True, slots=True)
class EditorConfig:
    capacity: int = DEFAULT_CAPACITY
    geometry: Geometry = field(default_factory=Geometry)
    crlf: bool = False
    program: str = "VCE"

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise StorageAllocationError("unable to create buffer")
        if self.capacity > MAX_CAPACITY:
            raise StorageAllocationError(f"capacity above {MAX_CAPACITY} bytes")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Build a config from ``VCE_ENGINE_*`` variables, ignoring junk values."""

        geometry = Geometry(
            rows=_env_int("ROWS", DEFAULT_ROWS),
            cols=_env_int("COLS", DEFAULT_COLS),
        )
        return cls(
            capacity=_env_int("CAPACITY", DEFAULT_CAPACITY),
            geometry=geometry,
            crlf=env_flag("CRLF", False),
        )


def _env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


__all__ = [
    "DEFAULT_CAPACITY",
    "MAX_CAPACITY",
    "EditorConfig",
    "Geometry",
    "GeometryError",
    "StorageAllocationError",
    "VceStartupError",
]
