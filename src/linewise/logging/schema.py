"""Field layout of linewise log events."""

from __future__ import annotations

# Identify the invocation; rendered in the entry heading, not as fields.
HEADING_FIELDS: tuple[str, ...] = ("command", "step")

# Detail fields per event, in display order. Unlisted fields follow sorted.
EVENT_FIELDS: dict[str, tuple[str, ...]] = {
    "app_start": ("config_file", "history_file", "log_file", "debug"),
    "app_stop": ("reason", "uptime_ms", "error_type", "error"),
    "session_start": ("command_count", "history_size", "authenticated"),
    "session_stop": ("reason", "lines_submitted"),
    "command_exec": ("args", "elapsed_ms", "continuation"),
    "command_error": ("args", "error_type", "error"),
    "command_not_found": (),
    "auth_required": (),
    "continuation_step": ("elapsed_ms", "continuation"),
    "continuation_error": ("error_type", "error"),
    "continuation_cancelled": (),
    "repl_error": ("error_type", "error"),
    "command_collision": ("key", "collision", "previous"),
    "history_storage_error": ("operation", "key", "error_type", "error"),
}
