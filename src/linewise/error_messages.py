"""User-facing error taxonomy.

Every failure the interpreter reports is built here as an ``ErrorMessage``
(message, optional remediation hint, kind). Builders never raise, so the
processor can always produce exactly one error event per failure.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import DEBUG_ENV_VAR
from .logging import sanitize_error_message


class ErrorKind(str, Enum):
    """Closed set of error kinds shown to the caller."""

    COMMAND_NOT_FOUND = "command_not_found"
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_ARGUMENT = "missing_argument"
    AUTHENTICATION_REQUIRED = "authentication_required"
    PERMISSION_DENIED = "permission_denied"
    RESOURCE_NOT_FOUND = "resource_not_found"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True, slots=True)
class ErrorMessage:
    """One normalized error: what happened and how to recover."""

    message: str
    kind: ErrorKind
    hint: Optional[str] = None


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.COMMAND_NOT_FOUND: "Command not found.",
    ErrorKind.INVALID_ARGUMENT: "Invalid argument.",
    ErrorKind.MISSING_ARGUMENT: "A required argument is missing.",
    ErrorKind.AUTHENTICATION_REQUIRED: "You must be logged in to do that.",
    ErrorKind.PERMISSION_DENIED: "You do not have permission to do that.",
    ErrorKind.RESOURCE_NOT_FOUND: "The requested resource was not found.",
    ErrorKind.NETWORK_ERROR: "A network error occurred.",
    ErrorKind.SERVER_ERROR: "The server reported an error.",
    ErrorKind.UNKNOWN_ERROR: "An unknown error occurred.",
}

_DEFAULT_HINTS: dict[ErrorKind, str] = {
    ErrorKind.COMMAND_NOT_FOUND: "Type 'help' to list available commands.",
    ErrorKind.INVALID_ARGUMENT: "Type 'help <command>' to check the usage.",
    ErrorKind.MISSING_ARGUMENT: "Type 'help <command>' to check the required arguments.",
    ErrorKind.AUTHENTICATION_REQUIRED: "Log in first, then try again.",
    ErrorKind.NETWORK_ERROR: "Check your connection and try again.",
    ErrorKind.SERVER_ERROR: "Try again later.",
}


def debug_enabled() -> bool:
    """Return True when the debug environment variable is set."""
    return bool(os.getenv(DEBUG_ENV_VAR))


def create_error(
    kind: ErrorKind,
    message: Optional[str] = None,
    hint: Optional[str] = None,
) -> ErrorMessage:
    """Build an error, falling back to the default message/hint for its kind."""
    return ErrorMessage(
        message=message or _DEFAULT_MESSAGES[kind],
        kind=kind,
        hint=hint or _DEFAULT_HINTS.get(kind),
    )


def command_not_found(command: str) -> ErrorMessage:
    return create_error(
        ErrorKind.COMMAND_NOT_FOUND,
        f"Command not found: '{command}'",
        f"Type 'help' to list available commands, or check the spelling of '{command}'.",
    )


def invalid_argument(command: str, hint: Optional[str] = None) -> ErrorMessage:
    return create_error(
        ErrorKind.INVALID_ARGUMENT,
        f"Invalid argument for '{command}'.",
        hint or f"Type 'help {command}' to check the usage.",
    )


def missing_argument(command: str, arg_name: Optional[str] = None) -> ErrorMessage:
    if arg_name:
        message = f"'{command}' requires the argument '{arg_name}'."
    else:
        message = f"'{command}' is missing a required argument."
    return create_error(
        ErrorKind.MISSING_ARGUMENT,
        message,
        f"Type 'help {command}' to check the required arguments.",
    )


def authentication_required() -> ErrorMessage:
    return create_error(ErrorKind.AUTHENTICATION_REQUIRED)


def permission_denied() -> ErrorMessage:
    return create_error(ErrorKind.PERMISSION_DENIED)


def resource_not_found(resource_type: str, resource_id: object) -> ErrorMessage:
    return create_error(
        ErrorKind.RESOURCE_NOT_FOUND,
        f"{resource_type} {resource_id} was not found.",
    )


def feature_unavailable(feature: str) -> ErrorMessage:
    """The host running this session does not provide feature."""
    return create_error(
        ErrorKind.RESOURCE_NOT_FOUND,
        f"{feature} is not available in this session.",
        "Type 'help' to list what this session supports.",
    )


def network_error(details: Optional[str] = None) -> ErrorMessage:
    message = f"A network error occurred: {details}" if details else None
    return create_error(ErrorKind.NETWORK_ERROR, message)


def server_error(details: Optional[str] = None) -> ErrorMessage:
    message = f"The server reported an error: {details}" if details else None
    return create_error(ErrorKind.SERVER_ERROR, message)


def unknown_error(error: BaseException, *, debug: Optional[bool] = None) -> ErrorMessage:
    """Describe an unexpected exception.

    The underlying exception text is only included in debug mode, and then
    with secrets redacted.
    """
    if debug is None:
        debug = debug_enabled()

    details = ""
    if debug:
        try:
            text = str(error)
        except Exception:
            text = type(error).__name__
        if text:
            details = f": {sanitize_error_message(text)}"
    return create_error(ErrorKind.UNKNOWN_ERROR, f"An unknown error occurred{details}")
