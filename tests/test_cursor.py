from __future__ import annotations

from vce_engine.buffer import Buffer


def make_buffer(text: bytes, cursor: int = 0, col: int = 0) -> Buffer:
    buffer = Buffer.from_bytes(text, len(text) + 32)
    buffer.state.cursor = cursor
    buffer.state.col = col
    return buffer


def test_left_and_right_clamp_at_document_bounds() -> None:
    buffer = make_buffer(b"ab")

    assert buffer.move_left() == 0
    buffer.state.cursor = 2
    assert buffer.move_right() == 2
    assert buffer.move_left() == 1


def test_typing_then_moving_up_and_left_returns_home() -> None:
    buffer = Buffer(64)

    buffer.insert_text(b"Hi\n")
    assert buffer.length == 3
    assert buffer.cursor == 3

    buffer.move_up()
    buffer.move_left()
    assert buffer.cursor == 0


def test_move_up_keeps_last_rendered_column() -> None:
    buffer = make_buffer(b"abc\ndef", cursor=6, col=2)

    assert buffer.move_up() == 2


def test_move_up_on_first_line_stays_on_it() -> None:
    buffer = make_buffer(b"abc\ndef", cursor=2, col=1)

    assert buffer.move_up() == 1


def test_vertical_movement_is_column_sticky() -> None:
    buffer = make_buffer(b"abcdef\nxy\nabcdef", cursor=4, col=4)

    assert buffer.move_down() == 9
    assert buffer.move_down() == 14


def test_move_down_on_last_line_goes_to_end() -> None:
    buffer = make_buffer(b"abc", cursor=1, col=1)

    assert buffer.move_down() == 3


def test_move_down_lands_after_tab() -> None:
    buffer = make_buffer(b"abcdefghij\n\tz", cursor=9, col=9)

    assert buffer.move_down() == 13
