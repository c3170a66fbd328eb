"""Path mapping utilities for special prefixes (~, @).

Supported forms:
- ~ or ~/... → User home directory
- @ or @/... → App package directory
- Native absolute paths → Used as-is
- Relative paths without prefix → Error (to avoid ambiguity)
"""

from __future__ import annotations

import unicodedata
from pathlib import Path


def get_app_root() -> Path:
    """Return the installed `linewise` package directory."""
    return Path(__file__).resolve().parent


def has_home_path_prefix(path: str) -> bool:
    """Return True when path uses the supported home prefix forms."""
    return path == "~" or path.startswith("~/") or path.startswith("~\\")


def has_app_path_prefix(path: str) -> bool:
    """Return True when path uses the supported app-root prefix forms."""
    return path == "@" or path.startswith("@/") or path.startswith("@\\")


def _normalize_path_input(path: str) -> str:
    """Normalize input text to NFC and reject NUL characters."""
    if "\x00" in path:
        raise ValueError("Path contains NUL character")
    return unicodedata.normalize("NFC", path)


def _map_under(root: Path, path: str, label: str) -> str:
    suffix = path[2:]
    if not suffix:
        return str(root)
    resolved = (root / suffix).resolve()
    try:
        resolved.relative_to(root)
    except ValueError:
        raise ValueError(f"Path escapes {label} directory: {path}")
    return str(resolved)


def map_path(path: str) -> str:
    """Map path with special prefixes to an absolute path.

    Raises:
        ValueError: If path is relative without special prefix or escapes
            the directory its prefix names

    Examples:
        >>> map_path("~/.linewise/history.json")
        '/home/username/.linewise/history.json'

        >>> map_path("relative/history.json")
        ValueError: Relative paths without prefix are not supported
    """
    path = _normalize_path_input(path)

    if has_home_path_prefix(path):
        return _map_under(Path.home().resolve(), path, "home")

    if has_app_path_prefix(path):
        return _map_under(get_app_root(), path, "app")

    if Path(path).is_absolute():
        return str(Path(path).resolve())

    raise ValueError(
        f"Relative paths without prefix are not supported: {path}\n"
        f"Use '~/' for home directory, '@/' for app directory, "
        f"or provide an absolute path"
    )
