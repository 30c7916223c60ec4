"""Executable Textual app hosting the editor."""

from __future__ import annotations

import argparse
import shutil
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vce_engine.adapters.textual.app"
    ) from exc

from vce_engine import __version__
from vce_engine.config import EditorConfig, Geometry, VceStartupError
from vce_engine.runtime import telemetry
from vce_engine.session import EditorSession, Screen

from .controller import TextualEditorAdapter, TextualUIHooks


def render_text(screen: Screen) -> Text:
    """Text rows as one ``Text`` with the cursor cell reversed."""

    text = Text("\n".join(screen.lines), no_wrap=True)
    row, col = screen.cursor
    if row >= 1:
        width = len(screen.lines[0]) + 1 if screen.lines else 0
        start = (row - 1) * width + col
        text.stylize("reverse", start, start + 1)
    return text


def render_status(screen: Screen) -> Text:
    status = Text(screen.status, style="reverse", no_wrap=True)
    row, col = screen.cursor
    if row == 0:
        status.stylize("underline", col, col + 1)
    return status


class EditorView(Static, can_focus=True):
    """Focusable text area; swallows keys so app bindings never see them."""

    def on_key(self, event: events.Key) -> None:
        app = self.app
        if isinstance(app, VceApp):
            app.dispatch_key(event)


class VceApp(App[None]):
    CSS = """
	Screen {
		layout: vertical;
	}

	#status-line {
		height: 1;
	}

	#text-view {
		height: 1fr;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._status_widget: Static | None = None
        self._text_widget: EditorView | None = None
        self._logger = telemetry.get_logger("vce_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        self._status_widget = Static("", id="status-line")
        self._text_widget = EditorView("", id="text-view")
        yield self._status_widget
        yield self._text_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_screen=self._update_screen,
            exit=self.exit,
            log=self._logger.debug,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        if self._text_widget:
            self._text_widget.focus()
        self.set_interval(0.1, self._process_timeouts)

    def dispatch_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.prevent_default()
        event.stop()

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _update_screen(self, screen: Screen) -> None:
        if self._status_widget:
            self._status_widget.update(render_status(screen))
        if self._text_widget:
            self._text_widget.update(render_text(screen))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    size = shutil.get_terminal_size()
    defaults = EditorConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="vce", description="Edit one file in a fixed-capacity gap buffer."
    )
    parser.add_argument("file", nargs="?", help="document to open")
    parser.add_argument("--rows", type=int, default=size.lines)
    parser.add_argument("--cols", type=int, default=size.columns)
    parser.add_argument(
        "--capacity",
        type=int,
        default=defaults.capacity,
        help="storage region size in bytes",
    )
    parser.add_argument(
        "--crlf",
        action="store_true",
        default=defaults.crlf,
        help="write CRLF line endings on save",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def build_session(args: argparse.Namespace) -> EditorSession:
    config = EditorConfig(
        capacity=args.capacity,
        geometry=Geometry(rows=args.rows, cols=args.cols),
        crlf=args.crlf,
    )
    return EditorSession(config, path=args.file)


def main(argv: Optional[Sequence[str]] = None) -> None:
    telemetry.configure(preset="quiet")
    try:
        session = build_session(_parse_args(argv))
    except VceStartupError as exc:
        print(f"vce: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    VceApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
