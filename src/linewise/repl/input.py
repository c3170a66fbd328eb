"""Prompt session, history and completion adapters for the REPL."""

from __future__ import annotations

from typing import Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import (
    CompleteEvent,
    Completer,
    Completion,
    ConditionalCompleter,
)
from prompt_toolkit.document import Document
from prompt_toolkit.filters import Condition
from prompt_toolkit.history import History
from prompt_toolkit.key_binding import KeyBindings

from ..completion import CompletionEngine
from ..history import HistoryStore
from ..session import Session


class StoreHistory(History):
    """Expose a HistoryStore to prompt_toolkit's up/down navigation.

    Only the processor writes to the store, so multi-turn answers never
    reach it; they remain browsable for the current run only.
    """

    def __init__(self, store: HistoryStore) -> None:
        super().__init__()
        self._store = store

    def load_history_strings(self) -> Iterable[str]:
        # prompt_toolkit expects the most recent entry first.
        return list(reversed(self._store.all()))

    def store_string(self, string: str) -> None:
        pass


class EngineCompleter(Completer):
    """Offer CompletionEngine suggestions as whole-line replacements."""

    def __init__(self, engine: CompletionEngine) -> None:
        self.engine = engine

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        for candidate in self.engine.suggestions(text):
            yield Completion(candidate, start_position=-len(text))


def _idle(session: Session) -> Condition:
    return Condition(lambda: not session.processor.awaiting_continuation)


def build_key_bindings(session: Session, engine: CompletionEngine) -> KeyBindings:
    """Tab fills in the unique or common-prefix completion, else opens the menu."""
    key_bindings = KeyBindings()

    @key_bindings.add("tab", filter=_idle(session))
    def _handle_tab(event) -> None:
        buffer = event.current_buffer
        if buffer.complete_state:
            buffer.complete_next()
            return

        completed = engine.complete(buffer.document.text_before_cursor)
        if completed is not None:
            buffer.text = completed
            buffer.cursor_position = len(completed)
        else:
            buffer.start_completion(select_first=False)

    return key_bindings


def create_prompt_session(session: Session, engine: CompletionEngine) -> PromptSession:
    """Create prompt-toolkit session for REPL input."""
    return PromptSession(
        history=StoreHistory(session.history),
        completer=ConditionalCompleter(EngineCompleter(engine), _idle(session)),
        complete_while_typing=False,
        key_bindings=build_key_bindings(session, engine),
    )
