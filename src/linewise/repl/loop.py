"""Main linewise REPL event loop."""

from __future__ import annotations

import logging

from .. import __version__
from ..commands.prompts import CANCELLED_MESSAGE
from ..completion import CompletionEngine
from ..constants import APP_DISPLAY_NAME
from ..logging import log_event
from ..session import Session
from .input import create_prompt_session

logger = logging.getLogger(__name__)


def print_startup_banner(session: Session) -> None:
    """Print REPL startup context and key usage hints."""
    print(f"{APP_DISPLAY_NAME} {__version__}")
    print(f"{session.registry.count()} commands available")
    print("Type 'help' for commands • 'exit' or Ctrl-D to quit")
    print("Tab completes commands • Ctrl-C cancels a multi-step command")


async def repl_loop(session: Session, engine: CompletionEngine) -> None:
    """Read lines until the session ends or input is closed.

    Each line is fully processed, including any handler I/O, before the
    next prompt is shown.
    """
    prompt_session = create_prompt_session(session, engine)
    log_event(
        "session_start",
        level=logging.INFO,
        command_count=session.registry.count(),
        history_size=len(session.history),
        authenticated=session.identity is not None,
    )
    print_startup_banner(session)

    reason = "exit_command"
    while session.active:
        try:
            if not session.processor.awaiting_continuation:
                print()
            line = await prompt_session.prompt_async(session.prompt)
            await session.submit(line)

        except EOFError:
            reason = "eof"
            print("Goodbye!")
            break

        except KeyboardInterrupt:
            # Ctrl+C abandons a multi-step command; it never ends the session.
            if session.cancel_pending():
                print(CANCELLED_MESSAGE)
            continue

        except Exception as error:
            log_event(
                "repl_error",
                level=logging.ERROR,
                error_type=type(error).__name__,
                error=str(error),
            )
            logger.error("Unexpected REPL error: %s", error, exc_info=True)
            print(f"Error: {error}")

    log_event(
        "session_stop",
        level=logging.INFO,
        reason=reason,
        lines_submitted=session.lines_submitted,
    )
