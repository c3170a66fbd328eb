"""Command dispatch and the multi-turn continuation state machine.

The processor is either IDLE or AWAITING_CONTINUATION. While idle, each
non-blank line is recorded in history, tokenized, resolved and dispatched.
A handler may return a continuation; from then on every raw line goes
straight to that continuation, untokenized, until it returns None or
raises. Exceptions escaping a handler or continuation become exactly one
unknown-error event and always leave the processor idle.

Lines are processed one at a time: a line submitted while an earlier one is
still being handled waits for it, so concurrent callers can never slip a
line past a wizard that is about to return its continuation.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .. import error_messages
from ..history import HistoryStore
from ..identity import Identity
from ..logging import command_fields, log_event
from ..output import ErrorEvent
from .context import Emit, ExecutionContext
from .parsing import parse_command
from .registry import CommandRegistry
from .types import Continuation, NextStep, to_step

logger = logging.getLogger(__name__)


class ProcessorMode(str, Enum):
    IDLE = "idle"
    AWAITING_CONTINUATION = "awaiting_continuation"


@dataclass(slots=True)
class PendingContinuation:
    """The continuation waiting for the next line, and which command owns it."""

    command: str
    continuation: Continuation
    step: int = 1


async def _call(fn: Callable[[Any], Any], arg: Any) -> Any:
    result = fn(arg)
    if inspect.isawaitable(result):
        result = await result
    return result


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


class CommandProcessor:
    """Turns raw input lines into handler invocations for one session."""

    def __init__(
        self,
        registry: CommandRegistry,
        history: Optional[HistoryStore] = None,
        *,
        debug: Optional[bool] = None,
    ) -> None:
        self.registry = registry
        self.history = history
        self.debug = debug
        self.pending: Optional[PendingContinuation] = None
        self._lock = asyncio.Lock()

    @property
    def mode(self) -> ProcessorMode:
        if self.pending is None:
            return ProcessorMode.IDLE
        return ProcessorMode.AWAITING_CONTINUATION

    @property
    def awaiting_continuation(self) -> bool:
        return self.pending is not None

    async def submit(
        self,
        line: str,
        *,
        emit: Emit,
        identity: Optional[Identity] = None,
        reset: Optional[Callable[[], None]] = None,
        end_session: Optional[Callable[[], None]] = None,
    ) -> ProcessorMode:
        """Process one raw input line and return the resulting mode."""
        async with self._lock:
            if self.pending is not None:
                await self._resume(self.pending, line, emit)
            else:
                await self._dispatch(
                    line,
                    emit=emit,
                    identity=identity,
                    reset=reset,
                    end_session=end_session,
                )
            return self.mode

    def cancel(self) -> bool:
        """Abandon a pending continuation; return True if one was pending."""
        pending = self.pending
        if pending is None:
            return False
        self.pending = None
        log_event(
            "continuation_cancelled",
            level=logging.INFO,
            **command_fields(pending.command, step=pending.step),
        )
        return True

    def _unknown_error(self, error: Exception) -> ErrorEvent:
        return ErrorEvent.from_message(error_messages.unknown_error(error, debug=self.debug))

    async def _dispatch(
        self,
        line: str,
        *,
        emit: Emit,
        identity: Optional[Identity],
        reset: Optional[Callable[[], None]],
        end_session: Optional[Callable[[], None]],
    ) -> None:
        if not line.strip():
            return

        if self.history is not None:
            self.history.record(line)

        command_name, args = parse_command(line)
        descriptor = self.registry.resolve(command_name)

        if descriptor is None:
            log_event("command_not_found", level=logging.INFO, command=command_name)
            emit(ErrorEvent.from_message(error_messages.command_not_found(command_name)))
            return

        if descriptor.requires_auth and identity is None:
            log_event("auth_required", level=logging.INFO, command=descriptor.name)
            emit(ErrorEvent.from_message(error_messages.authentication_required()))
            return

        context = ExecutionContext(
            command=descriptor.name,
            args=tuple(args),
            emit=emit,
            identity=identity,
            reset=reset,
            end_session=end_session,
            registry=self.registry,
            history=self.history,
        )

        started = time.perf_counter()
        try:
            step = to_step(await _call(descriptor.handler, context))
        except Exception as error:
            log_event(
                "command_error",
                level=logging.ERROR,
                **command_fields(descriptor.name, args),
                error_type=type(error).__name__,
                error=str(error),
            )
            logger.error(
                "Unexpected command error (command=%s): %s",
                descriptor.name,
                error,
                exc_info=True,
            )
            emit(self._unknown_error(error))
            return

        if isinstance(step, NextStep):
            self.pending = PendingContinuation(descriptor.name, step.continuation)

        log_event(
            "command_exec",
            level=logging.INFO,
            **command_fields(descriptor.name, args),
            elapsed_ms=_elapsed_ms(started),
            continuation=self.pending is not None,
        )

    async def _resume(self, pending: PendingContinuation, line: str, emit: Emit) -> None:
        started = time.perf_counter()
        try:
            step = to_step(await _call(pending.continuation, line))
        except Exception as error:
            self.pending = None
            log_event(
                "continuation_error",
                level=logging.ERROR,
                **command_fields(pending.command, step=pending.step),
                error_type=type(error).__name__,
                error=str(error),
            )
            logger.error(
                "Unexpected continuation error (command=%s, step=%d): %s",
                pending.command,
                pending.step,
                error,
                exc_info=True,
            )
            emit(self._unknown_error(error))
            return

        if isinstance(step, NextStep):
            self.pending = PendingContinuation(
                pending.command, step.continuation, pending.step + 1
            )
        else:
            self.pending = None

        log_event(
            "continuation_step",
            level=logging.INFO,
            **command_fields(pending.command, step=pending.step),
            elapsed_ms=_elapsed_ms(started),
            continuation=self.pending is not None,
        )
