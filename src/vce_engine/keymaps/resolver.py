"""Turns the tokens typed so far into a match, a pending prefix or a miss."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from vce_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    # Shortest sequence timeout of any binding below this node.
    timeout_ms: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


def _build_trie(bindings: Sequence[Binding]) -> TrieNode:
    root = TrieNode()
    for binding in bindings:
        node = root
        timeout = binding.sequence.timeout_ms
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, TrieNode())
            if node.timeout_ms is None or timeout < node.timeout_ms:
                node.timeout_ms = timeout
        node.binding = binding
    return root


class KeymapResolver:
    """Per-mode trie over the registry, rebuilt when its revision moves."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        tokens = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(tokens)},
        ) as handle:
            result = self._walk(self._trie(mode), tokens)
            handle.add_metadata("status", result.status)
            return result

    def _walk(self, node: TrieNode, tokens: tuple[str, ...]) -> ResolutionResult:
        for consumed, token in enumerate(tokens):
            next_node = node.children.get(token)
            if next_node is None:
                return ResolutionResult(status="miss", consumed=consumed)
            node = next_node

        if node.binding is not None:
            action = self._registry.get_action(node.binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(node.binding, action),
                consumed=len(tokens),
            )
        if node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(tokens),
                next_expected=tuple(sorted(node.children)),
                timeout_ms=node.timeout_ms,
            )
        return ResolutionResult(status="miss", consumed=len(tokens))

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is None or cached[0] != revision:
            cached = (revision, _build_trie(list(self._registry.iter_bindings(mode))))
            self._tries[mode] = cached
        return cached[1]


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
