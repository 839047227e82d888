"""Unit tests for robot_preferences.settings."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from robot_preferences import (
    JsonFileStorage,
    MemoryStorage,
    PreferencesSettings,
    create_storage,
    get_preferences_settings,
)


class TestPreferencesSettings:
    @pytest.mark.unit
    def test_default_values(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = PreferencesSettings()
            assert settings.backend == "memory"
            assert settings.json_path == Path("preferences.json")
            assert settings.reserved_prefix == "."
            assert settings.clear_on_reset is True
            assert settings.prune_stale_keys is True
            assert settings.entry_point_group == "robot_preferences.values"

    @pytest.mark.unit
    def test_from_env_vars(self) -> None:
        env = {
            "PREFERENCES_BACKEND": "JSON",
            "PREFERENCES_JSON_PATH": "/home/lvuser/prefs.json",
            "PREFERENCES_CLEAR_ON_RESET": "false",
            "PREFERENCES_PRUNE_STALE_KEYS": "0",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = PreferencesSettings()
            assert settings.backend == "json"
            assert settings.json_path == Path("/home/lvuser/prefs.json")
            assert settings.clear_on_reset is False
            assert settings.prune_stale_keys is False

    @pytest.mark.unit
    def test_invalid_backend(self) -> None:
        with pytest.raises(Exception):  # noqa: B017
            PreferencesSettings(backend="redis")

    @pytest.mark.unit
    def test_empty_reserved_prefix_rejected(self) -> None:
        with pytest.raises(Exception):  # noqa: B017
            PreferencesSettings(reserved_prefix="")

    @pytest.mark.unit
    def test_cached(self) -> None:
        get_preferences_settings.cache_clear()
        with patch.dict("os.environ", {}, clear=True):
            assert get_preferences_settings() is get_preferences_settings()
        get_preferences_settings.cache_clear()


class TestCreateStorage:
    @pytest.mark.unit
    def test_memory(self) -> None:
        assert isinstance(create_storage(PreferencesSettings(backend="memory")), MemoryStorage)

    @pytest.mark.integration
    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.json"
        storage = create_storage(PreferencesSettings(backend="json", json_path=path))
        assert isinstance(storage, JsonFileStorage)
        assert storage.path == path
