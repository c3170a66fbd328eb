"""Typed output events exchanged between command handlers and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, TypeAlias

from .error_messages import ErrorKind, ErrorMessage


@dataclass(slots=True, frozen=True)
class TextEvent:
    """Plain text output."""

    text: str


@dataclass(slots=True, frozen=True)
class CommandEcho:
    """The raw line the caller submitted, echoed back for the transcript."""

    line: str


@dataclass(slots=True, frozen=True)
class ErrorEvent:
    """A failure shown to the caller, with an optional remediation hint."""

    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN_ERROR
    hint: Optional[str] = None

    @classmethod
    def from_message(cls, error: ErrorMessage) -> "ErrorEvent":
        return cls(message=error.message, kind=error.kind, hint=error.hint)


@dataclass(slots=True, frozen=True)
class TableEvent:
    """Tabular data: one header row and any number of body rows."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @classmethod
    def of(
        cls,
        headers: Iterable[object],
        rows: Iterable[Iterable[object]] = (),
    ) -> "TableEvent":
        """Build a table from any iterables, converting cells to strings."""
        return cls(
            headers=tuple(str(h) for h in headers),
            rows=tuple(tuple(str(cell) for cell in row) for row in rows),
        )


@dataclass(slots=True, frozen=True)
class MarkdownEvent:
    """Rich text in Markdown syntax; how it is rendered is up to the renderer."""

    text: str


OutputEvent: TypeAlias = TextEvent | CommandEcho | ErrorEvent | TableEvent | MarkdownEvent
