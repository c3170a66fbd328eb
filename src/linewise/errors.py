"""Custom exception hierarchy for linewise."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class UsageError(ValueError, AppError):
    """Command-line usage or user-input errors."""


class ConfigError(ValueError, AppError):
    """Configuration file validation errors."""


class StorageError(AppError):
    """Key/value storage load/save failures."""


class RegistrationError(ValueError, AppError):
    """Command name or alias collisions rejected by strict registration."""
