"""Declarative key bindings and their resolution.

Default bindings live in ``vce_engine.keymaps.defaults`` and are loaded by
the session, since they reference the action implementations.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
]
