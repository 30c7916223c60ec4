"""Helpers for modes that resolve keys through the keymap resolver."""

from __future__ import annotations

from vce_engine.keymaps import KeymapResolver
from vce_engine.keymaps.models import make_token

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def typed_byte(key: KeyInput) -> int | None:
    """The single byte a key types, or ``None`` for non-text keys."""

    if key.text is None or len(key.text) != 1:
        return None
    value = ord(key.text)
    return value if value < 256 else None


__all__ = ["key_to_token", "require_keymap_resolver", "typed_byte"]
