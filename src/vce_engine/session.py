"""The single owner of all editor state for one edit session.

One call to ``handle_key`` performs one mutation (cursor move, edit, save,
...) and then one full render pass, mirroring the blocking
read -> mutate -> render loop of a terminal editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from vce_engine.buffer import Buffer
from vce_engine.buffer.files import PathLike
from vce_engine.config import EditorConfig
from vce_engine.keymaps import KeymapRegistry, KeymapResolver
from vce_engine.keymaps.defaults import load_default_keymaps
from vce_engine.modes import (
    EditMode,
    KeyInput,
    MessageMode,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    PromptMode,
)
from vce_engine.render import RenderFrame, Viewport
from vce_engine.render.status import message_line, prompt_line, status_line
from vce_engine.runtime import telemetry


@dataclass(slots=True)
class Screen:
    """Everything a paint layer needs: status row, text rows, cursor cell.

    ``cursor`` is in terminal coordinates, so text row 0 is screen row 1.
    """

    status: str
    lines: List[str]
    cursor: Tuple[int, int]
    mode: str


class EditorSession:
    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        *,
        path: Optional[PathLike] = None,
        registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = Buffer(self.config.capacity)
        self.viewport = Viewport(self.config.geometry)
        self.running = True
        self.loaded = False
        if path is not None:
            self.loaded = self.buffer.load(path)

        if registry is None:
            registry = KeymapRegistry(logger_name="vce_engine.keymaps")
            load_default_keymaps(registry)
        self.registry = registry
        self.resolver = KeymapResolver(registry, logger_name="vce_engine.keymaps")

        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer,
            config=self.config,
            bus=self.bus,
            extras={"keymap_registry": registry, "keymap_resolver": self.resolver},
        )
        self.manager = ModeManager(self.context)
        self.manager.register_mode(EditMode)
        self.manager.register_mode(PromptMode)
        self.manager.register_mode(MessageMode)
        self.bus.subscribe("session.quit", self._on_quit)

        self.frame: RenderFrame = self.viewport.render(self.buffer)

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else "?"

    def _on_quit(self, payload: object | None) -> None:
        del payload
        self.running = False
        telemetry.record_event(
            "session.quit", data={"dirty": self.buffer.state.dirty}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.manager.handle_key(key)
        self.render()
        return result

    def process_timeouts(self, *, force: bool = False) -> Dict[str, ModeResult]:
        results = self.manager.process_timeouts(force=force)
        if results:
            self.render()
        return results

    def render(self) -> RenderFrame:
        self.frame = self.viewport.render(self.buffer)
        return self.frame

    def status_text(self) -> str:
        cols = self.config.geometry.cols
        program = self.config.program
        active = self.manager.active_mode
        if isinstance(active, MessageMode):
            return message_line(active.text, cols=cols, program=program)
        if isinstance(active, PromptMode):
            return prompt_line(active.typed, cols=cols, program=program)
        return status_line(
            cols=cols,
            filename=self.buffer.state.filename,
            line=self.buffer.line,
            col=self.buffer.state.col,
            free=self.buffer.store.free,
            program=program,
        )

    def screen(self) -> Screen:
        active = self.manager.active_mode
        if isinstance(active, PromptMode):
            cursor = (0, len(self.config.program) + 2 + len(active.typed))
        else:
            row, col = self.frame.cursor
            cursor = (row + 1, col)
        return Screen(
            status=self.status_text(),
            lines=self.frame.grid.lines(),
            cursor=cursor,
            mode=self.mode,
        )


__all__ = ["EditorSession", "Screen"]
