"""Opaque caller identity handle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class Identity:
    """Capability token for an authenticated caller.

    The interpreter only checks whether an identity is present; the wrapped
    token is passed through to handlers untouched.
    """

    token: Any = field(repr=False)
    display_name: Optional[str] = None

    def __str__(self) -> str:
        return self.display_name or "(authenticated)"
