"""Configuration loading and validation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .constants import DEFAULT_HISTORY_FILE, DEFAULT_PROMPT, MAX_HISTORY_SIZE
from .error_messages import debug_enabled
from .errors import ConfigError
from .path_utils import map_path

_KNOWN_KEYS = frozenset({"history_file", "history_size", "log_file", "debug", "prompt"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Resolved runtime settings.

    ``history_file`` of None keeps history in memory only; ``log_file`` of
    None disables logging.
    """

    history_file: Optional[str] = None
    history_size: int = MAX_HISTORY_SIZE
    log_file: Optional[str] = None
    debug: bool = False
    prompt: str = DEFAULT_PROMPT


def _map_config_path(value: str, field_name: str) -> str:
    try:
        return map_path(value)
    except ValueError as e:
        raise ConfigError(f"Invalid {field_name}: {e}") from e


def _optional_path(data: dict[str, Any], field_name: str, default: Optional[str]) -> Optional[str]:
    if field_name not in data:
        return _map_config_path(default, field_name) if default else None
    value = data[field_name]
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{field_name} must be a non-empty string or null")
    return _map_config_path(value, field_name)


def validate_config(data: Any) -> AppConfig:
    """Validate a parsed config object and build an AppConfig."""
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    history_size = data.get("history_size", MAX_HISTORY_SIZE)
    if isinstance(history_size, bool) or not isinstance(history_size, int) or history_size < 1:
        raise ConfigError("history_size must be a positive integer")

    debug = data.get("debug", False)
    if not isinstance(debug, bool):
        raise ConfigError("debug must be a boolean")

    prompt = data.get("prompt", DEFAULT_PROMPT)
    if not isinstance(prompt, str):
        raise ConfigError("prompt must be a string")

    return AppConfig(
        history_file=_optional_path(data, "history_file", DEFAULT_HISTORY_FILE),
        history_size=history_size,
        log_file=_optional_path(data, "log_file", None),
        debug=debug or debug_enabled(),
        prompt=prompt,
    )


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load config from a JSON file; no path means defaults."""
    if path is None:
        return validate_config({})

    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {config_path}: {e}") from e

    return validate_config(data)
