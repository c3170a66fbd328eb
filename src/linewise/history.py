"""Bounded, deduplicated command history with best-effort persistence."""

from __future__ import annotations

import json
import logging
from typing import Optional

from .constants import HISTORY_STORAGE_KEY, MAX_HISTORY_SIZE
from .errors import StorageError
from .logging import log_event
from .storage import KeyValueStore, MemoryStore


class HistoryStore:
    """Previously submitted raw lines, oldest first.

    Re-submitting a line moves it to the most recent position instead of
    adding a second entry. Once ``max_size`` is exceeded the oldest entries
    are evicted. Every mutation is written back to the key/value store;
    storage failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        max_size: int = MAX_HISTORY_SIZE,
        key: str = HISTORY_STORAGE_KEY,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._store = store if store is not None else MemoryStore()
        self._key = key
        self.max_size = max_size
        self._entries: list[str] = self._load()

    def _report_failure(self, operation: str, error: Exception) -> None:
        log_event(
            "history_storage_error",
            level=logging.WARNING,
            operation=operation,
            key=self._key,
            error_type=type(error).__name__,
            error=str(error),
        )

    def _load(self) -> list[str]:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            data = json.loads(raw)
        except (StorageError, OSError, ValueError) as e:
            self._report_failure("load", e)
            return []

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            self._report_failure("load", StorageError("History payload is not a list of strings"))
            return []

        return data[-self.max_size:]

    def _save(self) -> None:
        try:
            self._store.set(self._key, json.dumps(self._entries, ensure_ascii=False))
        except (StorageError, OSError, TypeError, ValueError) as e:
            self._report_failure("save", e)

    def record(self, line: str) -> None:
        """Add a line as the most recent entry; blank lines are ignored."""
        if not line.strip():
            return

        self._entries = [entry for entry in self._entries if entry != line]
        self._entries.append(line)
        if len(self._entries) > self.max_size:
            self._entries = self._entries[-self.max_size:]
        self._save()

    def all(self) -> list[str]:
        """Return a copy of all entries, oldest first."""
        return list(self._entries)

    def search(self, prefix: str) -> list[str]:
        """Return entries starting with prefix, oldest first."""
        if not prefix:
            return []
        return [entry for entry in self._entries if entry.startswith(prefix)]

    def clear(self) -> None:
        self._entries = []
        self._save()

    def __len__(self) -> int:
        return len(self._entries)
