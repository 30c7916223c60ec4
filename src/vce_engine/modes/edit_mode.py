"""The editing mode: bound keys run actions, other text keys insert bytes."""

from __future__ import annotations

from typing import List

from vce_engine.keymaps import ResolutionMatch
from vce_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver, typed_byte


class EditMode(Mode):
    name = "edit"

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        partial = len(self._pending) > 1
        self._pending.clear()
        if partial:
            # An unknown key after a prefix such as ESC discards both.
            return ModeResult(consumed=True, status="miss")

        value = typed_byte(key)
        if value is None:
            return ModeResult(consumed=False, status="miss")
        changed = self.context.buffer.insert_byte(value)
        return ModeResult(consumed=True, status="insert" if changed else "saturated")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        tokens = tuple(self._pending)
        self._pending.clear()
        result = self._resolver.resolve(self.name, tokens)
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
