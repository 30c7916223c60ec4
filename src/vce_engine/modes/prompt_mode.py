"""Filename entry used when saving a document that has no name yet."""

from __future__ import annotations

from typing import List

from vce_engine.actions.file import save_as

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

ALLOWED_PUNCTUATION = frozenset("._")


class PromptMode(Mode):
    name = "prompt"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._typed: List[str] = []

    @property
    def typed(self) -> str:
        return "".join(self._typed)

    @property
    def max_length(self) -> int:
        return self.context.config.geometry.cols - 6

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._typed.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._typed.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key in {"ENTER", "RETURN"}:
            return save_as(self.context, self.typed)
        if key.key == "ESC":
            return save_as(self.context, "")
        if key.key == "BACKSPACE":
            if self._typed:
                self._typed.pop()
            return ModeResult(consumed=True, status="editing")

        char = key.text
        if (
            char is None
            or len(char) != 1
            or not (char.isascii() and (char.isalnum() or char in ALLOWED_PUNCTUATION))
            or len(self._typed) >= self.max_length
        ):
            return ModeResult(consumed=True, status="rejected")
        self._typed.append(char)
        return ModeResult(consumed=True, status="editing")
