"""Shared fixtures for robot_preferences tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from robot_preferences import (
    WRITE_DEFAULT_KEY,
    MemoryStorage,
    PreferencesRegistry,
    PreferencesSettings,
)


@pytest.fixture()
def settings() -> PreferencesSettings:
    """Default settings, isolated from the developer's environment."""
    with patch.dict("os.environ", {}, clear=True):
        return PreferencesSettings()


@pytest.fixture()
def storage() -> MemoryStorage:
    """Empty storage: the first boot of a fresh robot."""
    return MemoryStorage()


@pytest.fixture()
def reconciling_storage() -> MemoryStorage:
    """Storage from a robot that has already completed a reset boot."""
    return MemoryStorage({WRITE_DEFAULT_KEY: False})


@pytest.fixture()
def registry(storage: MemoryStorage, settings: PreferencesSettings) -> PreferencesRegistry:
    """Registry over empty storage."""
    return PreferencesRegistry(storage, settings)


@pytest.fixture()
def reconciling_registry(
    reconciling_storage: MemoryStorage,
    settings: PreferencesSettings,
) -> PreferencesRegistry:
    """Registry whose init() will take the reconciling path."""
    return PreferencesRegistry(reconciling_storage, settings)
