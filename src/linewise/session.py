"""Per-caller session state and output routing."""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from prompt_toolkit.shortcuts import clear as clear_screen

from .commands.processor import CommandProcessor, ProcessorMode
from .commands.registry import CommandRegistry
from .constants import CONTINUATION_PROMPT, DEFAULT_PROMPT
from .formatting import format_event
from .history import HistoryStore
from .identity import Identity
from .output import CommandEcho, OutputEvent


class Renderer(Protocol):
    """Output sink for one session."""

    def render(self, event: OutputEvent) -> None:
        """Display one output event."""

    def reset(self) -> None:
        """Clear everything displayed so far."""


class ConsoleRenderer:
    """Print events to the terminal as plain text."""

    def render(self, event: OutputEvent) -> None:
        # The terminal already shows what was typed.
        if isinstance(event, CommandEcho):
            return
        print(format_event(event))

    def reset(self) -> None:
        clear_screen()


class RecordingRenderer:
    """Keep events in memory, for embedding hosts and tests."""

    def __init__(self) -> None:
        self.events: list[OutputEvent] = []

    def render(self, event: OutputEvent) -> None:
        self.events.append(event)

    def reset(self) -> None:
        self.events.clear()


class Session:
    """One caller's sequential stream of input lines.

    Owns the processor (and with it the single active continuation slot),
    the caller identity and whether the session is still running. Sessions
    share a registry but never a history or processor.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        history: HistoryStore,
        renderer: Renderer,
        *,
        identity: Optional[Identity] = None,
        debug: Optional[bool] = None,
        echo_input: bool = False,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self.registry = registry
        self.history = history
        self.renderer = renderer
        self.identity = identity
        self.echo_input = echo_input
        self.base_prompt = prompt
        self.processor = CommandProcessor(registry, history, debug=debug)
        self.active = True
        self.lines_submitted = 0
        self._submit_lock = asyncio.Lock()

    @property
    def mode(self) -> ProcessorMode:
        return self.processor.mode

    @property
    def prompt(self) -> str:
        """Prompt to show for the next line."""
        if self.processor.awaiting_continuation:
            return CONTINUATION_PROMPT
        return self.base_prompt

    def login(self, identity: Identity) -> None:
        self.identity = identity

    def logout(self) -> None:
        self.identity = None

    def end(self) -> None:
        """Mark the session finished; the loop stops before the next line."""
        self.active = False

    def cancel_pending(self) -> bool:
        """Drop an in-progress multi-turn command, if any."""
        return self.processor.cancel()

    async def submit(self, line: str) -> ProcessorMode:
        """Feed one raw line through the processor.

        Concurrent calls are handled in call order; each waits for the
        previous line, including its echo and output, to finish.
        """
        async with self._submit_lock:
            if not self.active:
                raise RuntimeError("Session has ended")

            self.lines_submitted += 1
            if self.echo_input and (self.processor.awaiting_continuation or line.strip()):
                self.renderer.render(CommandEcho(line))

            return await self.processor.submit(
                line,
                emit=self.renderer.render,
                identity=self.identity,
                reset=self.renderer.reset,
                end_session=self.end,
            )
