"""Shows a status message until the next key acknowledges it."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class MessageMode(Mode):
    name = "message"

    def __init__(self, context: ModeContext, *, return_to: str = "edit") -> None:
        super().__init__(context)
        self.return_to = return_to

    @property
    def text(self) -> str:
        return str(self.context.extras.get("message", ""))

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.extras.pop("message", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=True, switch_to=self.return_to, status="acknowledged")


def show_message(context: ModeContext, text: str) -> ModeResult:
    """Put ``text`` on the status line until the user presses a key."""

    context.extras["message"] = text
    return ModeResult(consumed=True, switch_to=MessageMode.name, message=text)
