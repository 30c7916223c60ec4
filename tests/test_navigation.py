from __future__ import annotations

from vce_engine.buffer import (
    GapStore,
    advance_to_column,
    line_number,
    next_line_start,
    previous_line_start,
)


def make_store(text: bytes, *, gap_at: int | None = None) -> GapStore:
    store = GapStore.from_bytes(text, len(text) + 16)
    if gap_at is not None:
        store.move_gap_to(gap_at)
    return store


def test_previous_line_start() -> None:
    store = make_store(b"ab\ncd\nef", gap_at=4)

    assert previous_line_start(store, 0) == 0
    assert previous_line_start(store, 2) == 0
    assert previous_line_start(store, 3) == 3
    assert previous_line_start(store, 4) == 3
    assert previous_line_start(store, 7) == 6
    assert previous_line_start(store, -1) == 0


def test_previous_line_start_sees_newline_at_offset_zero() -> None:
    store = make_store(b"\nab", gap_at=3)

    assert previous_line_start(store, 2) == 1


def test_next_line_start() -> None:
    store = make_store(b"ab\ncd\nef", gap_at=1)

    assert next_line_start(store, 0) == 3
    assert next_line_start(store, 2) == 3
    assert next_line_start(store, 3) == 6
    assert next_line_start(store, 6) == 8
    assert next_line_start(store, 8) == 8


def test_line_start_round_trip_stays_on_line() -> None:
    store = make_store(b"one\ntwo\n\nfour", gap_at=5)
    for offset in range(1, store.length + 1):
        start = previous_line_start(store, offset)
        end = next_line_start(store, start)
        assert previous_line_start(store, end - 1) == start


def test_advance_expands_tabs_to_multiples_of_eight() -> None:
    store = make_store(b"a\tb")

    assert advance_to_column(store, 0, 9) == 3
    assert advance_to_column(store, 0, 8) == 2
    assert advance_to_column(store, 0, 2) == 2
    assert advance_to_column(store, 0, 1) == 1
    assert advance_to_column(store, 0, 0) == 0


def test_advance_stops_at_newline_and_end() -> None:
    store = make_store(b"ab\ncd", gap_at=1)

    assert advance_to_column(store, 0, 10) == 2
    assert advance_to_column(store, 3, 10) == 5


def test_line_number_counts_newlines_before_offset() -> None:
    store = make_store(b"a\nb\nc", gap_at=2)

    assert line_number(store, 0) == 1
    assert line_number(store, 2) == 2
    assert line_number(store, 4) == 3
    assert line_number(store, 5) == 3
