"""Per-invocation execution context handed to command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from ..error_messages import ErrorMessage
from ..identity import Identity
from ..output import ErrorEvent, MarkdownEvent, OutputEvent, TableEvent, TextEvent

if TYPE_CHECKING:
    from ..history import HistoryStore
    from .registry import CommandRegistry


Emit = Callable[[OutputEvent], None]


@dataclass(slots=True)
class ExecutionContext:
    """Everything one command invocation may use.

    Created fresh for every dispatch and dropped when the handler returns;
    a continuation that needs any of it must capture it in its closure.
    """

    command: str
    args: tuple[str, ...]
    emit: Emit
    identity: Optional[Identity] = None
    reset: Optional[Callable[[], None]] = None
    end_session: Optional[Callable[[], None]] = None
    registry: Optional["CommandRegistry"] = None
    history: Optional["HistoryStore"] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def text(self, text: str) -> None:
        self.emit(TextEvent(text))

    def markdown(self, text: str) -> None:
        self.emit(MarkdownEvent(text))

    def table(self, headers: Iterable[object], rows: Iterable[Iterable[object]]) -> None:
        self.emit(TableEvent.of(headers, rows))

    def error(self, error: ErrorMessage) -> None:
        self.emit(ErrorEvent.from_message(error))
