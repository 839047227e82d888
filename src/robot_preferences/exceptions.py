"""Exception hierarchy for the preferences registry.

Every error carries a machine-readable ``error_code`` and a structured
``context`` dict so that robot logs stay greppable.

Example:
    >>> from robot_preferences.exceptions import DuplicateKeyError
    >>> raise DuplicateKeyError("DriveStraight/P")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DuplicateKeyError",
    "PreferenceTypeError",
    "PreferencesError",
    "StorageError",
    "UnregisteredValueError",
]


class PreferencesError(Exception):
    """Base class for all preferences errors.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable error description.
        context: Structured debugging information (keys, kinds, paths).
    """

    error_code: str = "PREFERENCES_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class DuplicateKeyError(PreferencesError):
    """Raised when two distinct Values are registered under the same key.

    Example:
        >>> raise DuplicateKeyError("DriveStraight/P")
        DuplicateKeyError: Preference key already registered: DriveStraight/P
    """

    error_code: str = "DUPLICATE_PREFERENCE_KEY"

    def __init__(self, key: str, **extra_context: Any) -> None:
        self.key = key
        message = f"Preference key already registered: {key}"
        super().__init__(message, {"key": key, **extra_context})


class PreferenceTypeError(PreferencesError):
    """Raised when a default or new value does not match the Value's kind.

    Attributes:
        key: Preference key being written.
        expected: Expected value kind (e.g. ``"double"``).
        actual: Python type name of the rejected value.
    """

    error_code: str = "PREFERENCE_TYPE_ERROR"

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        message = f"Preference '{key}' expects {expected}, got {actual}"
        super().__init__(message, {"key": key, "expected": expected, "actual": actual})


class UnregisteredValueError(PreferencesError):
    """Raised when reading or writing a Value that no registry owns yet."""

    error_code: str = "UNREGISTERED_VALUE"

    def __init__(self, key: str) -> None:
        self.key = key
        message = f"Preference '{key}' is not registered with a registry"
        super().__init__(message, {"key": key})


class StorageError(PreferencesError):
    """Raised when a storage backend cannot persist its contents."""

    error_code: str = "STORAGE_ERROR"
