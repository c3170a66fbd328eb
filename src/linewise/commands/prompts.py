"""Reusable continuation builders for multi-turn commands.

Each helper emits its question immediately and returns the continuation
that will receive the caller's answer as the next raw line.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..error_messages import ErrorKind, create_error
from ..output import ErrorEvent, TextEvent
from .context import Emit
from .types import Continuation

CANCELLED_MESSAGE = "[Operation Cancelled]"


def is_yes(answer: str) -> bool:
    """Return True for a 'y' answer (case-insensitive, surrounding space ignored)."""
    return answer.strip().lower() == "y"


def confirm(
    emit: Emit,
    question: str,
    on_yes: Callable[[], Any],
    on_no: Optional[Callable[[], Any]] = None,
) -> Continuation:
    """Ask a y/n question; anything other than 'y' cancels.

    ``on_yes``/``on_no`` may return a further continuation (or an awaitable
    of one); that value becomes the next step.
    """
    emit(TextEvent(f"{question} (y/n)"))

    def _answer(line: str) -> Any:
        if is_yes(line):
            return on_yes()
        if on_no is not None:
            return on_no()
        emit(TextEvent(CANCELLED_MESSAGE))
        return None

    return _answer


def ask(
    emit: Emit,
    question: str,
    on_answer: Callable[[str], Any],
    *,
    required: bool = False,
    required_message: str = "A value is required.",
) -> Continuation:
    """Ask for one line; re-ask while the answer is blank if required."""
    emit(TextEvent(question))

    def _answer(line: str) -> Any:
        if required and not line.strip():
            emit(
                ErrorEvent.from_message(
                    create_error(
                        ErrorKind.MISSING_ARGUMENT, required_message, "Enter a value to continue."
                    )
                )
            )
            return _answer
        return on_answer(line.strip())

    return _answer


def collect_lines(on_complete: Callable[[str], Any]) -> Continuation:
    """Accumulate lines until a blank line follows at least one line.

    Leading blank lines are ignored. The collected text (joined with
    newlines) is handed to ``on_complete``, whose return value becomes the
    next step.
    """
    lines: list[str] = []

    def _line(line: str) -> Any:
        if not line.strip():
            if lines:
                return on_complete("\n".join(lines))
            return _line
        lines.append(line)
        return _line

    return _line
