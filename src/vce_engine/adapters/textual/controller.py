"""Bridges Textual key events to an ``EditorSession`` and back to widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from vce_engine.modes import KeyInput, ModeResult
from vce_engine.session import EditorSession, Screen


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
}


def decode_key(key: str, character: Optional[str] = None) -> Tuple[KeyInput, ...]:
    """Translate a Textual key name into engine key inputs.

    ``alt+x`` arrives when ESC and ``x`` reach the terminal together; it is
    split back into the two strokes. Unknown keys decode to nothing.
    """

    if key in _NAMED_KEYS:
        return (KeyInput(key=_NAMED_KEYS[key]),)
    if key.startswith("alt+"):
        rest = decode_key(key[4:], character)
        return (KeyInput(key="ESC"),) + rest if rest else ()
    if key.startswith("ctrl+"):
        letter = key[5:]
        if len(letter) == 1:
            return (KeyInput(key=letter, modifiers=("ctrl",)),)
        return ()
    if character and len(character) == 1 and character.isprintable():
        return (KeyInput(key=character, text=character),)
    return ()


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update the host."""

    update_screen: Callable[[Screen], None]
    exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> List[ModeResult]:
        results: List[ModeResult] = []
        for key_input in decode_key(key, character):
            acknowledging = self.session.mode == "message"
            self._log_state("key ->", key=key_input.key, mods=key_input.modifiers)
            result = self.session.handle_key(key_input)
            self._log_state("result <-", status=result.status, message=result.message)
            results.append(result)
            # One event dismisses a message; the rest of an alt+X split is dropped.
            if acknowledging or not self.session.running:
                break
        self._after_keys()
        return results

    def process_timeouts(self) -> Dict[str, ModeResult]:
        results = self.session.process_timeouts()
        if results:
            self._after_keys()
        return results

    def _after_keys(self) -> None:
        if not self.session.running:
            self.hooks.exit()
            return
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_screen(self.session.screen())

    def _log_state(self, prefix: str, **fields: object) -> None:
        buffer = self.session.buffer
        snapshot: Dict[str, object] = {
            "mode": self.session.mode,
            "cursor": buffer.cursor,
            "length": buffer.length,
            "page": buffer.state.page,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "decode_key"]
