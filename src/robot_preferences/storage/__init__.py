"""Preference storage backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from robot_preferences.storage.base import PreferencesStorage
from robot_preferences.storage.json_file import JsonFileStorage
from robot_preferences.storage.memory import MemoryStorage
from robot_preferences.storage.wpilib_adapter import WpilibPreferencesStorage

if TYPE_CHECKING:
    from robot_preferences.settings import PreferencesSettings


def create_storage(settings: PreferencesSettings) -> PreferencesStorage:
    """Build the storage backend selected by ``settings.backend``.

    Args:
        settings: Preferences settings.

    Returns:
        A storage instance implementing :class:`PreferencesStorage`.
    """
    if settings.backend == "json":
        return JsonFileStorage(settings.json_path)
    if settings.backend == "wpilib":
        return WpilibPreferencesStorage()
    return MemoryStorage()


__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "PreferencesStorage",
    "WpilibPreferencesStorage",
    "create_storage",
]
