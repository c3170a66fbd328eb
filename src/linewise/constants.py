"""Application-level constants for linewise.

This module keeps only cross-cutting app/file/path constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "linewise"
APP_DISPLAY_NAME = "linewise line-command interpreter"

# ============================================================================
# Default directories and paths
# ============================================================================

# User data directory (created in home directory)
USER_DATA_DIR = f"~/.{APP_NAME}"

# Key/value file backing the command history
DEFAULT_HISTORY_FILE = f"{USER_DATA_DIR}/history.json"

LOG_FILE_EXTENSION = ".log"
DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

# ============================================================================
# History
# ============================================================================

# Storage key the history list is persisted under
HISTORY_STORAGE_KEY = "cli_command_history"
MAX_HISTORY_SIZE = 100
# How many of the most recent entries the history command shows
HISTORY_DISPLAY_LIMIT = 30

# ============================================================================
# REPL
# ============================================================================

DEFAULT_PROMPT = "> "
CONTINUATION_PROMPT = "... "

# Set to any non-empty value to include underlying messages in unknown errors
DEBUG_ENV_VAR = "LINEWISE_DEBUG"

# Key bindings of the interactive prompt, as (keys, description)
KEY_SHORTCUTS: tuple[tuple[str, str], ...] = (
    ("Tab", "Complete a command name or a previous line"),
    ("Up / Down", "Browse command history"),
    ("Ctrl-C", "Cancel a multi-step command"),
    ("Ctrl-D", "Exit"),
)
