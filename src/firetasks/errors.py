"""Custom exception types for Backlog Fire Tasks.

Expected failures are carried as ``Err(<exception>)`` values (see
:mod:`firetasks.result`) rather than raised; the classes below give those
failures a type the caller can dispatch on.
"""


class FireTasksError(Exception):
    """Base exception for all recoverable Backlog Fire Tasks errors."""


class ConfigurationError(FireTasksError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(FireTasksError):
    """Raised when the Backlog API key is unavailable."""


class ApiError(FireTasksError):
    """Raised when a Backlog API request fails or returns an unexpected response."""


class ScopingError(FireTasksError):
    """Raised when configured project keys match no project in the space."""
