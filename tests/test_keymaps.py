from __future__ import annotations

import pytest

from vce_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
)
from vce_engine.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *keys: str,
    action_id: str = "test.action",
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode="edit",
        sequence=KeySequence.from_strings(*(keys or ("ESC", "q")), timeout_ms=timeout_ms),
        action_id=action_id,
    )


def build_registry(*bindings: Binding) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_keystroke_parse_and_tokens() -> None:
    assert KeyStroke.parse("ctrl+d").token == "ctrl+d"
    assert KeyStroke.parse("CTRL+d") == KeyStroke("d", ("ctrl",))
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke("x", ("shift", "ctrl")).token == "ctrl+shift+x"


def test_empty_sequence_is_rejected() -> None:
    with pytest.raises(ValueError):
        KeySequence(strokes=())


def test_binding_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding("edit.quit"))


def test_conflicting_sequence_is_rejected_unless_replaced() -> None:
    registry = build_registry(make_binding("edit.quit"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding("edit.quit_again"))
    assert [b.id for b in info.value.conflicts] == ["edit.quit"]

    registry.register_binding(make_binding("edit.quit_again"), replace=True)
    assert [b.id for b in registry.iter_bindings("edit")] == ["edit.quit_again"]


def test_unregister_binding_bumps_revision() -> None:
    registry = build_registry(make_binding("edit.quit"))
    before = registry.revision()

    assert registry.unregister_binding("edit.quit") is not None
    assert registry.unregister_binding("edit.quit") is None
    assert registry.revision() == before + 1
    assert registry.stats().binding_count == 0


def test_resolver_match_pending_and_miss() -> None:
    resolver = KeymapResolver(build_registry(make_binding("edit.quit", timeout_ms=250)))

    pending = resolver.resolve("edit", ("ESC",))
    assert pending.status == "pending"
    assert pending.next_expected == ("q",)
    assert pending.timeout_ms == 250

    match = resolver.resolve("edit", ("ESC", "q"))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == "edit.quit"

    miss = resolver.resolve("edit", ("ESC", "z"))
    assert miss.status == "miss"
    assert miss.consumed == 1


def test_resolver_sees_registry_changes() -> None:
    registry = build_registry(make_binding("edit.quit"))
    resolver = KeymapResolver(registry)
    assert resolver.resolve("edit", ("ctrl+d",)).status == "miss"

    registry.register_binding(make_binding("edit.right", "ctrl+d"))

    assert resolver.resolve("edit", ("ctrl+d",)).status == "match"


def test_default_keymaps_cover_every_edit_command() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    expected = {
        ("ctrl+s",): "cursor.left",
        ("ctrl+d",): "cursor.right",
        ("ctrl+e",): "cursor.up",
        ("ctrl+x",): "cursor.down",
        ("ctrl+l",): "session.redraw",
        ("BACKSPACE",): "edit.delete_previous",
        ("ESC", "q"): "session.quit",
        ("ESC", "s"): "file.save",
        ("ESC", "v"): "session.version",
    }
    for tokens, action_id in expected.items():
        result = resolver.resolve("edit", tokens)
        assert result.match is not None
        assert result.match.action.id == action_id


def test_default_keymaps_accept_exclusions_and_timeouts() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(
        registry, exclude_bindings=["edit.esc_v"], sequence_timeout_ms=300
    )
    resolver = KeymapResolver(registry)

    assert resolver.resolve("edit", ("ESC", "v")).status == "miss"
    assert resolver.resolve("edit", ("ESC",)).timeout_ms == 300
