"""Routes keys to the active mode and expires half-typed key sequences."""

from __future__ import annotations

import time
from typing import Dict, Optional, Type

from vce_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Holds every registered mode; exactly one of them receives keys.

    A mode that answers with ``timeout_ms`` is waiting for the rest of a
    key sequence. Only the active mode can be waiting, so a single deadline
    is kept and any switch drops it.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._deadline: Optional[float] = None

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    def register_mode(self, mode_cls: Type[Mode], /, **options: object) -> Mode:
        mode = mode_cls(self.context, **options)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        # The first registered mode starts active.
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        if name == self._active:
            return
        previous = self._active
        self._deadline = None
        if previous is not None:
            self._modes[previous].on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous)
        telemetry.record_event(
            "mode.switch", level="debug", data={"from": previous, "mode": name}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}", component="modes", metadata={"key": key.key}
        ):
            result = mode.handle_key(key)
        return self._apply(result)

    def arm_timeout(self, timeout_ms: int) -> None:
        self._deadline = time.monotonic() + timeout_ms / 1000.0

    def cancel_timeout(self) -> None:
        self._deadline = None

    def process_timeouts(self, *, force: bool = False) -> Dict[str, ModeResult]:
        """Flush the pending sequence once its deadline passed (or at once with ``force``)."""

        mode = self.active_mode
        if mode is None or self._deadline is None:
            return {}
        if not force and time.monotonic() < self._deadline:
            return {}
        self._deadline = None
        with telemetry.span(f"mode::{mode.name}::timeout", component="modes"):
            result = mode.handle_timeout()
        return {mode.name: self._apply(result)}

    def _apply(self, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self.arm_timeout(result.timeout_ms)
        else:
            self.cancel_timeout()
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
