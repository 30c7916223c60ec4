"""Structured logging for the editor, backed by telelog.

Everything in the package goes through four calls: ``configure`` picks the
sink, ``get_logger`` hands out cached loggers, ``record_event`` writes one
``event::<name>`` line and ``span`` profiles a block.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VCE_ENGINE_"
DEFAULT_LOGGER_NAME = "vce_engine"

# min level, console, colour, buffered
_PRESETS: Dict[str, Tuple[str, bool, bool, bool]] = {
    "console": ("DEBUG", True, True, False),
    "file": ("INFO", False, False, True),
    "quiet": ("WARNING", False, False, False),
}

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``VCE_ENGINE_<name>``."""
    return os.getenv(ENV_PREFIX + name, default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _log_file() -> str:
    return env("LOG_FILE") or ""


def _preset_config(name: str) -> Any:
    try:
        level, console, colour, buffered = _PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'.") from None

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(colour)
    log_file = _log_file() or ("vce.log" if name.lower() == "file" else "")
    if log_file:
        config.with_file_output(log_file)
    if buffered:
        config.with_buffering(True)
    config.with_profiling(True)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    if _log_file():
        config.with_file_output(_log_file())
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a new telelog configuration.

    Pass either a ready ``tl.Config`` or one of the preset names
    ``console``, ``file`` or ``quiet``; with neither, settings come from the
    ``VCE_ENGINE_LOG_*`` environment variables. Loggers handed out before
    the call keep their old sink.
    """

    global _config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    _config = config if config is not None else _env_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    if _config is None:
        _config = _env_config()
    key = name or DEFAULT_LOGGER_NAME
    log = _loggers.get(key)
    if log is None:
        log = _loggers[key] = tl.Logger.with_config(key, _config)
    return log


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is logged on failure."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", {"span": self.name, "reason": reason, **self.metadata})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component`` also tracks the block as a telelog component. Each
    ``metadata`` entry is pushed as logger context until the block exits.
    An exception escaping the block is logged with ``span::fail`` and
    re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log, name)
    if component:
        handle.metadata["component"] = component
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
    pushed = [key for key in (metadata or {})]

    with ExitStack() as stack:
        for key in pushed:
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
