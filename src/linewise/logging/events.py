"""Event emission and log file setup for linewise."""

from __future__ import annotations

import itertools
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from ..constants import APP_NAME, DATETIME_FORMAT_FILENAME, LOG_FILE_EXTENSION
from .formatter import EventLogFormatter

_ARGS_LIMIT = 120

logger = logging.getLogger(APP_NAME)


def command_fields(
    command: str,
    args: Optional[Sequence[str]] = None,
    *,
    step: Optional[int] = None,
) -> dict[str, Any]:
    """Fields identifying one command invocation or continuation step.

    Arguments are whitespace-normalized and truncated. Lines answered to a
    continuation may hold free-form or secret text, so only the step number
    is ever logged for them.
    """
    fields: dict[str, Any] = {"command": command}
    if args is not None:
        text = " ".join(" ".join(args).split())
        if len(text) > _ARGS_LIMIT:
            text = text[: _ARGS_LIMIT - 3] + "..."
        fields["args"] = text
    if step is not None:
        fields["step"] = step
    return fields


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log one event as a JSON object on the ``linewise`` logger.

    Fields set to None are left out; values JSON cannot encode are logged
    as their ``str()``.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(timespec="milliseconds"),
        "event": event,
    }
    payload.update((key, value) for key, value in fields.items() if value is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def build_run_log_path(logs_dir: str) -> str:
    """Return an unused ``linewise_<timestamp>[_N].log`` path in logs_dir."""
    directory = Path(logs_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stem = f"{APP_NAME}_{datetime.now().strftime(DATETIME_FORMAT_FILENAME)}"

    candidate = directory / f"{stem}{LOG_FILE_EXTENSION}"
    suffixes = itertools.count(1)
    while candidate.exists():
        candidate = directory / f"{stem}_{next(suffixes)}{LOG_FILE_EXTENSION}"
    return str(candidate)


def setup_logging(log_file: Optional[str] = None) -> None:
    """Send the ``linewise`` logger tree to log_file, or silence it."""
    logger.handlers.clear()
    logger.propagate = False

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(EventLogFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
