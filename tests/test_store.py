from __future__ import annotations

import pytest

from vce_engine.buffer import Buffer, BufferValidationError, GapStore
from vce_engine.buffer.store import BACKSPACE, CARRIAGE_RETURN, DELETE, NEWLINE
from vce_engine.config import StorageAllocationError


def make_store(text: bytes = b"hello world", capacity: int = 32) -> GapStore:
    return GapStore.from_bytes(text, capacity)


def test_new_store_is_all_gap() -> None:
    store = GapStore(16)

    assert store.length == 0
    assert store.free == 16
    assert (store.gap_start, store.gap_end) == (0, 16)


def test_load_places_content_before_gap() -> None:
    store = make_store(b"abc", 8)

    assert store.content() == b"abc"
    assert (store.gap_start, store.gap_end) == (3, 8)
    assert store.free == 5


def test_load_truncates_to_capacity() -> None:
    store = GapStore(4)

    kept = store.load(b"abcdefg")

    assert kept == 4
    assert store.content() == b"abcd"
    assert store.free == 0


def test_zero_capacity_is_an_allocation_failure() -> None:
    with pytest.raises(StorageAllocationError):
        GapStore(0)


def test_translator_round_trips_for_every_gap_position() -> None:
    store = make_store()
    for target in range(store.length + 1):
        store.move_gap_to(target)
        for offset in range(store.length + 1):
            assert store.to_logical(store.to_physical(offset)) == offset


def test_to_physical_skips_the_gap() -> None:
    store = make_store(b"abcdef", 16)
    store.move_gap_to(2)

    assert store.to_physical(1) == 1
    assert store.to_physical(2) == 2 + store.gap_length
    assert store.to_physical(-5) == 0


def test_to_logical_subtracts_gap_only_after_it() -> None:
    store = make_store(b"abcdef", 16)
    store.move_gap_to(2)

    assert store.to_logical(1) == 1
    assert store.to_logical(store.gap_end) == 2
    assert store.to_logical(15) == 5


def test_move_gap_preserves_content() -> None:
    store = make_store()
    for target in (5, 0, 11, 3, 3, 8):
        store.move_gap_to(target)
        assert store.content() == b"hello world"
        assert store.gap_start == target


def test_move_gap_rejects_out_of_range_offsets() -> None:
    store = make_store(b"abc", 8)

    with pytest.raises(BufferValidationError) as info:
        store.move_gap_to(4)

    assert info.value.value == 4


def test_byte_at_reads_across_the_gap() -> None:
    store = make_store(b"abcdef", 16)
    store.move_gap_to(3)

    assert bytes(store.byte_at(i) for i in range(store.length)) == b"abcdef"
    with pytest.raises(BufferValidationError):
        store.byte_at(6)


def test_address_byte_refuses_gap_addresses() -> None:
    store = make_store(b"abcdef", 16)
    store.move_gap_to(3)

    assert store.address_byte(0) == ord("a")
    assert store.address_byte(store.gap_end) == ord("d")
    with pytest.raises(BufferValidationError):
        store.address_byte(store.gap_start)


def test_insert_writes_at_gap_and_normalizes_carriage_return() -> None:
    store = make_store(b"ab", 8)

    assert store.insert(CARRIAGE_RETURN) is True
    assert store.content() == b"ab\n"
    assert store.byte_at(2) == NEWLINE


def test_delete_signals_remove_previous_byte() -> None:
    store = make_store(b"abc", 8)

    assert store.insert(BACKSPACE) is True
    assert store.insert(DELETE) is True
    assert store.content() == b"a"


def test_delete_at_region_start_is_a_no_op() -> None:
    store = make_store(b"abc", 8)
    store.move_gap_to(0)

    assert store.insert(DELETE) is False
    assert store.content() == b"abc"


def test_count_spans_both_sides_of_gap() -> None:
    store = make_store(b"a\nb\nc\n", 16)
    store.move_gap_to(3)

    assert store.count(NEWLINE, 6) == 3
    assert store.count(NEWLINE, 2) == 1
    assert store.count(NEWLINE, 4) == 2


def test_insert_then_backspace_restores_document_and_cursor() -> None:
    buffer = Buffer.from_bytes(b"abc", 16)
    buffer.state.cursor = 1

    buffer.insert_byte(ord("X"))
    assert buffer.store.content() == b"aXbc"
    assert buffer.cursor == 2

    buffer.insert_byte(DELETE)
    assert buffer.store.content() == b"abc"
    assert buffer.cursor == 1


def test_full_store_drops_extra_bytes() -> None:
    buffer = Buffer(4)

    assert buffer.insert_text(b"abcd") == 4
    assert buffer.insert_byte(ord("e")) is False
    assert buffer.length == 4
    assert buffer.store.content() == b"abcd"
    assert buffer.cursor == 4


def test_backspace_at_document_start_keeps_buffer_clean() -> None:
    buffer = Buffer.from_bytes(b"ab", 8)

    assert buffer.insert_byte(BACKSPACE) is False
    assert buffer.store.content() == b"ab"
    assert buffer.cursor == 0
    assert buffer.state.dirty is False


def test_insert_marks_buffer_dirty() -> None:
    buffer = Buffer(8)

    buffer.insert_byte(ord("a"))

    assert buffer.state.dirty is True
