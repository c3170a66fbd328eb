"""Key/value persistence backends for session state."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

from .errors import StorageError


class KeyValueStore(Protocol):
    """Minimal durable string store.

    Both operations may raise ``StorageError``; callers decide whether a
    failure matters.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value under key, replacing any previous value."""


class MemoryStore:
    """Process-local store, used when persistence is disabled and in tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store all keys in one JSON object file."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in store file: {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read store file: {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Invalid store file structure: {self.path}: expected an object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Stored value for '{key}' is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Failed to save store file: {self.path}: {e}") from e
