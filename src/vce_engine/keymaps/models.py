"""Key strokes, key sequences and the bindings that map them onto actions.

A stroke is written the way the keymap tables spell it: ``"ctrl+s"``,
``"ESC"`` or ``"q"``. Modifiers are case-folded and sorted so that
``"Shift+Ctrl+x"`` and ``"ctrl+shift+x"`` resolve to the same token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    cleaned = {m.strip().lower() for m in modifiers} - {""}
    return tuple(sorted(cleaned))


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    return "+".join((*normalize_modifiers(modifiers), key))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """``"ctrl+d"`` -> ``KeyStroke("d", ("ctrl",))``; ``"+"`` stays a key."""

        head, sep, key = text.rpartition("+")
        if not sep or not key:
            return cls(text)
        return cls(key, tuple(head.split("+")))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Strokes that must arrive in order, each within ``timeout_ms`` of the last."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key), timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Editor command reachable from a binding; called as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        for attr in ("id", "mode", "action_id"):
            if not getattr(self, attr):
                raise ValueError(f"binding {attr} cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "make_token",
    "normalize_modifiers",
]
