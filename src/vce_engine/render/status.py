"""Status-line text for the top row of the screen."""

from __future__ import annotations

from typing import Optional

FILENAME_WIDTH = 16
NARROW_FILENAME_WIDTH = 11
LINE_FIELD = 21
COLUMN_FIELD = 35
REST_FIELD_WIDTH = 13
REST_DIGITS = 7


def format_number(value: int) -> str:
    """Decimal text for a non-negative count, capped at 9,999,999."""

    return str(max(0, min(value, 9_999_999)))


def pad_number(value: int, width: int = REST_DIGITS) -> str:
    return format_number(value).rjust(width)


def _pad(text: str, column: int) -> str:
    return text.ljust(column)


def _fit(text: str, cols: int) -> str:
    return text[:cols].ljust(cols)


def status_line(
    *,
    cols: int,
    filename: Optional[str],
    line: int,
    col: int,
    free: int,
    program: str = "VCE",
) -> str:
    text = f"{program}: "
    if filename is not None:
        text += filename[: FILENAME_WIDTH if cols > 21 else NARROW_FILENAME_WIDTH]

    if cols > 34:
        text = _pad(text, LINE_FIELD) + "L: " + format_number(line)
        if cols > 48:
            text = _pad(text, COLUMN_FIELD) + "C: " + format_number(col)
            if cols > 64:
                text = _pad(text, cols - REST_FIELD_WIDTH)
                text += "Rest: " + pad_number(free)

    return _fit(text, cols)


def message_line(message: str, *, cols: int, program: str = "VCE") -> str:
    return _fit(f"{program}: {message}", cols)


def prompt_line(typed: str, *, cols: int, program: str = "VCE") -> str:
    return _fit(f"{program}: {typed}", cols)


__all__ = [
    "format_number",
    "message_line",
    "pad_number",
    "prompt_line",
    "status_line",
]
