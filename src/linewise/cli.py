"""CLI bootstrap entry point for linewise."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
import time
from typing import Optional, cast

from .commands import CommandRegistry, register_general_commands
from .completion import CompletionEngine
from .config import AppConfig, load_config
from .errors import AppError, UsageError
from .history import HistoryStore
from .logging import build_run_log_path, log_event, setup_logging
from .path_utils import map_path
from .repl import repl_loop
from .session import ConsoleRenderer, Renderer, Session
from .storage import JsonFileStore, KeyValueStore, MemoryStore


def _map_cli_arg(path: Optional[str], arg_name: str) -> Optional[str]:
    """Map CLI path argument with descriptive error messages."""
    if path is None:
        return None
    try:
        return cast(str, map_path(path))
    except ValueError as e:
        raise ValueError(f"Invalid {arg_name} path: {e}")


def build_registry() -> CommandRegistry:
    """Create the registry with the built-in commands installed."""
    registry = CommandRegistry()
    register_general_commands(registry)
    return registry


def build_session(
    config: AppConfig,
    registry: Optional[CommandRegistry] = None,
    renderer: Optional[Renderer] = None,
) -> tuple[Session, CompletionEngine]:
    """Wire registry, history, processor and completion for one session."""
    registry = registry or build_registry()
    store: KeyValueStore = (
        JsonFileStore(config.history_file) if config.history_file else MemoryStore()
    )
    history = HistoryStore(store, max_size=config.history_size)
    session = Session(
        registry,
        history,
        renderer or ConsoleRenderer(),
        debug=config.debug,
        prompt=config.prompt,
    )
    return session, CompletionEngine(registry, history)


def main() -> None:
    """Main entry point for the linewise CLI."""
    parser = argparse.ArgumentParser(
        prog="linewise",
        description="linewise - interactive line-command interpreter",
    )
    parser.add_argument("-c", "--config", help="Path to JSON config file (optional)")
    parser.add_argument("-l", "--log", help="Path to log file (optional)")
    parser.add_argument(
        "--log-dir",
        help="Directory for a new timestamped log file (alternative to --log)",
    )
    parser.add_argument(
        "--history",
        help="Path to history file (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Include underlying error details in unknown-error messages",
    )

    args = parser.parse_args()
    app_started = time.perf_counter()

    try:
        config_path = _map_cli_arg(args.config, "config")
        config = load_config(config_path)

        overrides: dict[str, object] = {}
        if args.log and args.log_dir:
            raise UsageError("Use either --log or --log-dir, not both")
        log_path = _map_cli_arg(args.log, "log")
        log_dir = _map_cli_arg(args.log_dir, "log directory")
        if log_dir:
            log_path = build_run_log_path(log_dir)
        if log_path:
            overrides["log_file"] = log_path
        history_path = _map_cli_arg(args.history, "history")
        if history_path:
            overrides["history_file"] = history_path
        if args.debug:
            overrides["debug"] = True
        if overrides:
            config = dataclasses.replace(config, **overrides)

        setup_logging(config.log_file)
        log_event(
            "app_start",
            level=logging.INFO,
            config_file=config_path,
            history_file=config.history_file,
            log_file=config.log_file,
            debug=config.debug,
        )

        session, engine = build_session(config)
        asyncio.run(repl_loop(session, engine))
        log_event(
            "app_stop",
            level=logging.INFO,
            reason="normal",
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )

    except KeyboardInterrupt:
        log_event(
            "app_stop",
            level=logging.INFO,
            reason="keyboard_interrupt",
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        print("\nInterrupted")
        sys.exit(0)
    except (AppError, ValueError) as e:
        print(f"Error: {e}")
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="startup_error",
            error_type=type(e).__name__,
            error=str(e),
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="fatal_error",
            error_type=type(e).__name__,
            error=str(e),
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        logging.getLogger(__name__).error("Fatal error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
