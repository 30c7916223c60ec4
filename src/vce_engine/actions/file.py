"""Saving the document, prompting for a name when it has none."""

from __future__ import annotations

from vce_engine.keymaps import ResolutionMatch
from vce_engine.modes.base_mode import ModeContext, ModeResult
from vce_engine.modes.message_mode import show_message
from vce_engine.runtime import telemetry


def save_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.buffer.state.filename is None:
        return ModeResult(consumed=True, switch_to="prompt", status="prompt_filename")
    return _write(context)


def save_as(context: ModeContext, name: str) -> ModeResult:
    """Finish filename entry: save under ``name`` or report it missing."""

    if not name:
        return show_message(context, "no filename")
    context.buffer.state.filename = name
    return _write(context)


def _write(context: ModeContext) -> ModeResult:
    buffer = context.buffer
    path = buffer.state.filename
    try:
        buffer.save(crlf=context.config.crlf)
    except OSError as exc:
        telemetry.record_event(
            "file.save_failed",
            level="warning",
            data={"path": path, "reason": exc.strerror or str(exc)},
        )
        return show_message(context, "failed open")
    telemetry.record_event("file.saved", data={"path": path, "bytes": buffer.length})
    return show_message(context, "save ok")


__all__ = ["save_as", "save_document"]
