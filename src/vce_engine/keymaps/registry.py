"""Action table plus the per-mode bindings that point into it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from vce_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding reuses a key sequence that is already bound in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(b.id for b in self.conflicts)
        super().__init__(
            f"'{binding.key_signature}' in mode '{binding.mode}' "
            f"is already bound by {taken}"
        )


class KeymapRegistry:
    """Each (mode, key sequence) pair is bound at most once.

    ``revision`` changes whenever the set of bindings does, which is what
    resolvers use to invalidate their lookup tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._keys: Dict[Tuple[str, str], str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.key_signature},
        ):
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            conflicts = self.detect_conflicts(binding)
            if not replace:
                if conflicts:
                    raise KeymapConflictError(binding, conflicts)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in conflicts:
                self._drop(stale.id)
            self._drop(binding.id)
            self._bindings[binding.id] = binding
            self._keys[(binding.mode, binding.key_signature)] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._drop(binding_id)
        if binding is not None:
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding_id in sorted(self._bindings):
            binding = self._bindings[binding_id]
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        modes = {binding.mode for binding in self._bindings.values()}
        return RegistryStats(len(self._actions), len(self._bindings), tuple(sorted(modes)))

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        taken = self._keys.get((binding.mode, binding.key_signature))
        if taken is None or taken == binding.id:
            return []
        return [self._bindings[taken]]

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            key = (binding.mode, binding.key_signature)
            if self._keys.get(key) == binding_id:
                del self._keys[key]
        return binding


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
