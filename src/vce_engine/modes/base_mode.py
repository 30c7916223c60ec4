"""Types shared by the edit, prompt and message modes."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, DefaultDict, Dict, List, Optional, Tuple

from vce_engine.buffer import Buffer
from vce_engine.config import EditorConfig

Listener = Callable[[object], None]


@dataclass(slots=True)
class KeyInput:
    """One decoded keypress; ``text`` carries the character a key types."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class ModeContext:
    buffer: Buffer
    config: EditorConfig
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Session-level notifications such as ``session.quit``."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._listeners.get(event, ())):
            callback(payload)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    def on_enter(self, previous: Optional[str]) -> None:
        pass

    def on_exit(self, next_mode: Optional[str]) -> None:
        pass

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        return ModeResult(consumed=False, status="timeout")
