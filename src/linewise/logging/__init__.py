"""Structured logging primitives for linewise."""

from .events import build_run_log_path, command_fields, log_event, setup_logging
from .formatter import EventLogFormatter
from .sanitization import sanitize_error_message
from .schema import EVENT_FIELDS, HEADING_FIELDS

__all__ = [
    "EVENT_FIELDS",
    "HEADING_FIELDS",
    "EventLogFormatter",
    "build_run_log_path",
    "command_fields",
    "log_event",
    "sanitize_error_message",
    "setup_logging",
]
