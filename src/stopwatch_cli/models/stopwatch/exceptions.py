"""Custom exceptions for the stopwatch."""


class StopwatchError(Exception):
    """Base exception for all stopwatch errors."""


class ConfigError(StopwatchError):
    """Raised when the display interval cannot be loaded or persisted."""
