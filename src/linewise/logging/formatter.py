"""Plain-text rendering of linewise log records."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..time_utils import utc_now_iso
from .schema import EVENT_FIELDS, HEADING_FIELDS


def _split_record(record: logging.LogRecord) -> tuple[str, dict[str, Any]]:
    """Return (event name, fields) for a JSON event or a plain message."""
    message = record.getMessage()
    if message.startswith("{"):
        try:
            payload = json.loads(message)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "event" in payload:
            event = str(payload.pop("event"))
            return event, payload
    return record.name, {"message": message}


def _heading(event: str, fields: dict[str, Any]) -> str:
    command = fields.get("command")
    step = fields.get("step")
    if command is None:
        return event
    if step is None:
        return f"{event} ({command})"
    return f"{event} ({command}, step {step})"


def _field_order(event: str, fields: dict[str, Any]) -> list[str]:
    known = [key for key in EVENT_FIELDS.get(event, ()) if key in fields]
    rest = sorted(key for key in fields if key not in known and key not in HEADING_FIELDS)
    return [key for key in known + rest if fields[key] is not None]


class EventLogFormatter(logging.Formatter):
    """Render a record as one heading line plus indented fields.

    The heading reads ``[ts] LEVEL event (command, step N)``; the command
    and step parts appear only when the event carries them. Records that
    are not JSON events use the logger name as the event and keep their
    text under ``message``.
    """

    def format(self, record: logging.LogRecord) -> str:
        event, fields = _split_record(record)
        ts = fields.pop("ts", None) or utc_now_iso()

        lines = [f"[{ts}] {record.levelname} {_heading(event, fields)}"]
        for key in _field_order(event, fields):
            value = str(fields[key]).replace("\n", "\\n")
            lines.append(f"  {key}: {value}")

        if record.exc_info:
            lines.append("  traceback:")
            lines.extend(
                f"    {line}" for line in self.formatException(record.exc_info).splitlines()
            )
        return "\n".join(lines)
