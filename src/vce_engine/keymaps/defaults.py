"""Built-in bindings for the edit mode."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from vce_engine.actions import core as core_actions
from vce_engine.actions import edit as edit_actions
from vce_engine.actions import file as file_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

EDIT_MODE = "edit"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("cursor.left", core_actions.move_left, "Move left one byte"),
    ActionRef("cursor.right", core_actions.move_right, "Move right one byte"),
    ActionRef("cursor.up", core_actions.move_up, "Move to the line above"),
    ActionRef("cursor.down", core_actions.move_down, "Move to the line below"),
    ActionRef("edit.delete_previous", edit_actions.delete_previous, "Delete back"),
    ActionRef("edit.newline", edit_actions.insert_newline, "Insert a newline"),
    ActionRef("edit.tab", edit_actions.insert_tab, "Insert a tab"),
    ActionRef("file.save", file_actions.save_document, "Save the document"),
    ActionRef("session.redraw", core_actions.redraw, "Redraw the screen"),
    ActionRef("session.quit", core_actions.quit_session, "Quit the editor"),
    ActionRef("session.version", core_actions.show_version, "Show the version"),
)

# (binding id, keys, action id)
_EDIT_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("edit.ctrl_s", ("ctrl+s",), "cursor.left"),
    ("edit.ctrl_d", ("ctrl+d",), "cursor.right"),
    ("edit.ctrl_e", ("ctrl+e",), "cursor.up"),
    ("edit.ctrl_x", ("ctrl+x",), "cursor.down"),
    ("edit.arrow_left", ("LEFT",), "cursor.left"),
    ("edit.arrow_right", ("RIGHT",), "cursor.right"),
    ("edit.arrow_up", ("UP",), "cursor.up"),
    ("edit.arrow_down", ("DOWN",), "cursor.down"),
    ("edit.ctrl_l", ("ctrl+l",), "session.redraw"),
    ("edit.backspace", ("BACKSPACE",), "edit.delete_previous"),
    ("edit.enter", ("ENTER",), "edit.newline"),
    ("edit.tab", ("TAB",), "edit.tab"),
    ("edit.esc_q", ("ESC", "q"), "session.quit"),
    ("edit.esc_s", ("ESC", "s"), "file.save"),
    ("edit.esc_v", ("ESC", "v"), "session.version"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=binding_id,
        mode=EDIT_MODE,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )
    for binding_id, keys, action_id in _EDIT_KEYS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace_existing: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    sequence_timeout_ms: int | None = None,
) -> None:
    """Register the built-in actions and edit-mode bindings."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace_existing)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        if sequence_timeout_ms is not None:
            sequence = KeySequence(binding.sequence.strokes, timeout_ms=sequence_timeout_ms)
            binding = replace(binding, sequence=sequence)
        registry.register_binding(binding, replace=replace_existing)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "EDIT_MODE", "load_default_keymaps"]
