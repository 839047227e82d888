"""Persistent storage contract for preference values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable


class PreferencesStorage(Protocol):
    """Protocol for persistent key/value preference storage.

    Implementations live in this package (memory, JSON file, WPILib). Typed
    getters return ``default`` when the key is absent or stores another type.
    Keys form a flat namespace; ``/`` separators are a display convention only.
    """

    def get_string(self, key: str, default: str) -> str:
        """Get a string value."""
        ...

    def get_int(self, key: str, default: int) -> int:
        """Get an integer value."""
        ...

    def get_double(self, key: str, default: float) -> float:
        """Get a double value. Stored integers are widened."""
        ...

    def get_boolean(self, key: str, default: bool) -> bool:
        """Get a boolean value."""
        ...

    def put_string(self, key: str, value: str) -> None:
        """Persist a string value."""
        ...

    def put_int(self, key: str, value: int) -> None:
        """Persist an integer value."""
        ...

    def put_double(self, key: str, value: float) -> None:
        """Persist a double value."""
        ...

    def put_boolean(self, key: str, value: bool) -> None:
        """Persist a boolean value."""
        ...

    def contains_key(self, key: str) -> bool:
        """Whether the key is present."""
        ...

    def keys(self) -> Iterable[str]:
        """Enumerate every key currently stored."""
        ...

    def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...

    def remove_all(self) -> None:
        """Remove every key."""
        ...
