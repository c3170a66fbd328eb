"""Prefix completion over registered commands and history."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from .commands.registry import CommandRegistry
from .history import HistoryStore

# Receives the full partial line; returns full-line candidates.
ArgumentCompleter = Callable[[str], Iterable[str]]


def common_prefix(strings: list[str]) -> str:
    """Return the longest prefix shared by all strings (char-wise)."""
    if not strings:
        return ""

    prefix = strings[0]
    for other in strings[1:]:
        i = 0
        limit = min(len(prefix), len(other))
        while i < limit and prefix[i] == other[i]:
            i += 1
        prefix = prefix[:i]
        if not prefix:
            break
    return prefix


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


class CompletionEngine:
    """Proposes completions for a partially typed line.

    Read-only over the registry and history it is given.
    """

    def __init__(self, registry: CommandRegistry, history: HistoryStore) -> None:
        self.registry = registry
        self.history = history
        self._argument_completers: dict[str, ArgumentCompleter] = {}

    def register_argument_completer(self, command: str, completer: ArgumentCompleter) -> None:
        """Attach argument suggestions to a command (by name or alias)."""
        descriptor = self.registry.resolve(command.lower())
        key = descriptor.name if descriptor is not None else command.lower()
        self._argument_completers[key] = completer

    def _command_name_matches(self, prefix: str) -> list[str]:
        # Aliases count only for the command they currently resolve to.
        alias_targets = {
            target for alias, target in self.registry.aliases().items() if alias.startswith(prefix)
        }
        return [
            name for name in self.registry.names() if name.startswith(prefix) or name in alias_targets
        ]

    def _argument_matches(self, partial: str, first_token: str) -> list[str]:
        descriptor = self.registry.resolve(first_token.lower())
        if descriptor is None:
            return []
        completer = self._argument_completers.get(descriptor.name)
        if completer is None:
            return []
        return [c for c in completer(partial) if c.startswith(partial)]

    def suggestions(self, partial: str) -> list[str]:
        """Return ordered, de-duplicated candidates for partial input."""
        if not partial.strip():
            return []

        parts = partial.strip().split(" ")
        first_token = parts[0]

        if len(parts) == 1:
            return _dedupe(
                [*self._command_name_matches(first_token), *self.history.search(first_token)]
            )

        return _dedupe(
            [*self.history.search(partial), *self._argument_matches(partial, first_token)]
        )

    def complete(self, partial: str) -> Optional[str]:
        """Return the text to fill in, or None when nothing useful extends the input."""
        candidates = self.suggestions(partial)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        prefix = common_prefix(candidates)
        if len(prefix) > len(partial):
            return prefix
        return None
