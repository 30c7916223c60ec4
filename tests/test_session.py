from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from vce_engine.config import EditorConfig, Geometry
from vce_engine.modes import KeyInput, ModeResult
from vce_engine.session import EditorSession

NAMED = {"ESC", "ENTER", "TAB", "BACKSPACE", "UP", "DOWN", "LEFT", "RIGHT"}


def make_key(name: str) -> KeyInput:
    if name in NAMED:
        return KeyInput(key=name)
    if name.startswith("ctrl+"):
        return KeyInput(key=name[5:], modifiers=("ctrl",))
    return KeyInput(key=name, text=name)


def press(session: EditorSession, *names: str) -> List[ModeResult]:
    return [session.handle_key(make_key(name)) for name in names]


def make_session(
    *, capacity: int = 256, rows: int = 6, cols: int = 40, path: Path | None = None
) -> EditorSession:
    config = EditorConfig(capacity=capacity, geometry=Geometry(rows=rows, cols=cols))
    return EditorSession(config, path=path)


def content(session: EditorSession) -> bytes:
    return session.buffer.store.content()


def test_basic_edit_scenario() -> None:
    session = make_session()

    press(session, "H", "i", "ENTER")
    assert session.buffer.length == 3
    assert session.buffer.cursor == 3
    assert session.status_text()[21:25] == "L: 2"

    press(session, "UP", "LEFT")
    assert session.buffer.cursor == 0
    assert session.status_text()[21:25] == "L: 1"


def test_control_keys_move_the_cursor() -> None:
    session = make_session()
    press(session, "a", "b", "ENTER", "c", "d")

    press(session, "ctrl+e")
    assert session.buffer.cursor == 2
    press(session, "ctrl+s", "ctrl+s")
    assert session.buffer.cursor == 0
    press(session, "ctrl+x")
    assert session.buffer.cursor == 3
    press(session, "ctrl+d")
    assert session.buffer.cursor == 4


def test_tab_and_backspace() -> None:
    session = make_session()

    press(session, "a", "TAB", "b")
    assert content(session) == b"a\tb"
    assert session.frame.cursor == (0, 9)

    press(session, "BACKSPACE", "BACKSPACE")
    assert content(session) == b"a"


def test_backspace_at_start_changes_nothing() -> None:
    session = make_session()

    press(session, "BACKSPACE")

    assert content(session) == b""
    assert session.buffer.state.dirty is False


def test_escape_q_quits() -> None:
    session = make_session()

    first, second = press(session, "ESC", "q")

    assert first.status == "pending"
    assert second.status == "quit"
    assert session.running is False


def test_unknown_key_after_escape_is_discarded() -> None:
    session = make_session()

    press(session, "ESC", "z", "a")

    assert content(session) == b"a"
    assert session.running is True


def test_expired_escape_does_not_swallow_next_key() -> None:
    session = make_session()
    press(session, "ESC")

    session.process_timeouts(force=True)
    press(session, "q")

    assert session.running is True
    assert content(session) == b"q"


def test_full_storage_drops_keys() -> None:
    session = make_session(capacity=4)

    results = press(session, "a", "b", "c", "d", "e")

    assert results[-1].status == "saturated"
    assert content(session) == b"abcd"
    assert session.status_text()[21:25] == "L: 1"


def test_save_unnamed_document_prompts_for_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    session = make_session()
    press(session, "a", "b", "ESC", "s")
    assert session.mode == "prompt"

    press(session, "o", "u", "t", "/", ".", "t", "x", "t")
    assert session.status_text().rstrip() == "VCE: out.txt"
    assert session.screen().cursor == (0, 12)

    press(session, "ENTER")
    assert session.mode == "message"
    assert session.status_text().startswith("VCE: save ok")
    assert (tmp_path / "out.txt").read_bytes() == b"ab"
    assert session.buffer.state.dirty is False
    assert session.buffer.cursor == 2

    press(session, "x")
    assert session.mode == "edit"
    assert content(session) == b"ab"
    assert session.status_text().startswith("VCE: out.txt")


def test_empty_filename_aborts_save() -> None:
    session = make_session()
    press(session, "a", "ESC", "s", "ENTER")

    assert session.mode == "message"
    assert session.status_text().startswith("VCE: no filename")
    assert session.buffer.state.filename is None
    assert session.buffer.state.dirty is True


def test_failed_save_reports_and_stays_dirty(tmp_path: Path) -> None:
    session = make_session(path=tmp_path / "missing_dir" / "f.txt")
    assert session.loaded is False

    press(session, "a", "ESC", "s")

    assert session.status_text().startswith("VCE: failed open")
    assert session.buffer.state.dirty is True


def test_named_document_saves_without_prompt(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    session = make_session(path=path)
    assert session.loaded is True
    assert content(session) == b"one\ntwo\n"

    press(session, "ctrl+x", "2", "ESC", "s")

    assert session.status_text().startswith("VCE: save ok")
    assert path.read_bytes() == b"one\n2two\n"


def test_crlf_config_restores_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "dos.txt"
    path.write_bytes(b"a\r\nb")
    config = EditorConfig(capacity=64, geometry=Geometry(rows=6, cols=40), crlf=True)
    session = EditorSession(config, path=path)

    press(session, "ESC", "s")

    assert path.read_bytes() == b"a\r\nb"


def test_version_message() -> None:
    session = make_session()

    press(session, "ESC", "v")

    assert session.status_text().startswith("VCE: Version 0.8.0")
    press(session, "ENTER")
    assert content(session) == b""


def test_redraw_keeps_state() -> None:
    session = make_session()
    press(session, "a")

    (result,) = press(session, "ctrl+l")

    assert result.status == "redraw"
    assert session.frame.cursor == (0, 1)


def test_screen_reports_terminal_cursor() -> None:
    session = make_session()
    press(session, "a", "b")

    screen = session.screen()

    assert screen.cursor == (1, 2)
    assert screen.lines[0].startswith("ab")
    assert len(screen.lines) == 5
    assert screen.mode == "edit"
