"""Input modes and the manager that dispatches keys to them."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .message_mode import MessageMode, show_message
from .mode_manager import ModeManager
from .prompt_mode import PromptMode

__all__ = [
    "EditMode",
    "KeyInput",
    "MessageMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "PromptMode",
    "show_message",
]
