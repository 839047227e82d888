"""Tests for robot_preferences.storage.json_file."""

from __future__ import annotations

import json
import math
from pathlib import Path
from unittest.mock import patch

import pytest

from robot_preferences import StorageError
from robot_preferences.storage.json_file import JsonFileStorage


@pytest.fixture()
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "preferences.json"


class TestJsonFileStorage:
    @pytest.mark.integration
    def test_missing_file_starts_empty(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        assert storage.keys() == []
        assert not prefs_path.exists()

    @pytest.mark.integration
    def test_values_survive_reload(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        storage.put_string("Auto/Mode", "left")
        storage.put_int("Arm/Offset", 12)
        storage.put_double("DriveStraight/P", 0.081)
        storage.put_boolean("WriteDefaultPrefs", False)

        reloaded = JsonFileStorage(prefs_path)

        assert reloaded.get_string("Auto/Mode", "") == "left"
        assert reloaded.get_int("Arm/Offset", 0) == 12
        assert reloaded.get_double("DriveStraight/P", 0.0) == 0.081
        assert reloaded.get_boolean("WriteDefaultPrefs", True) is False

    @pytest.mark.integration
    def test_document_layout(self, prefs_path: Path) -> None:
        JsonFileStorage(prefs_path).put_double("DriveStraight/P", 0.081)
        document = json.loads(prefs_path.read_text(encoding="utf-8"))
        assert document == {
            "version": 1,
            "entries": {"DriveStraight/P": {"type": "double", "value": 0.081}},
        }

    @pytest.mark.integration
    def test_type_mismatch_returns_default(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        storage.put_boolean("flag", True)
        assert storage.get_int("flag", 5) == 5
        assert storage.get_string("flag", "x") == "x"

    @pytest.mark.integration
    def test_double_accepts_integer_entry(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        storage.put_int("speed", 2)
        assert storage.get_double("speed", 0.0) == 2.0

    @pytest.mark.integration
    def test_non_finite_doubles_survive_reload(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        storage.put_double("x/P", 0.2)
        storage.put_double("Elevator/MaxHeight", math.inf)
        storage.put_double("Elevator/MinHeight", -math.inf)
        storage.put_double("Vision/LastRange", math.nan)

        reloaded = JsonFileStorage(prefs_path)

        assert not prefs_path.with_name("preferences.json.corrupt").exists()
        assert reloaded.get_double("x/P", 0.081) == 0.2
        assert reloaded.get_double("Elevator/MaxHeight", 0.0) == math.inf
        assert reloaded.get_double("Elevator/MinHeight", 0.0) == -math.inf
        assert math.isnan(reloaded.get_double("Vision/LastRange", 0.0))
        assert "Infinity" in prefs_path.read_text(encoding="utf-8")

    @pytest.mark.integration
    def test_remove_and_remove_all_persist(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        storage.put_int("a", 1)
        storage.put_int("b", 2)
        storage.remove("a")
        assert JsonFileStorage(prefs_path).keys() == ["b"]
        storage.remove_all()
        assert JsonFileStorage(prefs_path).keys() == []

    @pytest.mark.integration
    def test_invalid_file_moved_aside(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text('{"version": 1, "entries": {"x": {"type": "bogus"}}}')

        storage = JsonFileStorage(prefs_path)

        assert storage.keys() == []
        corrupt = prefs_path.with_name("preferences.json.corrupt")
        assert corrupt.exists()
        assert not prefs_path.exists()

    @pytest.mark.integration
    def test_malformed_json_moved_aside(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("{not json")
        assert JsonFileStorage(prefs_path).keys() == []
        assert prefs_path.with_name("preferences.json.corrupt").exists()

    @pytest.mark.integration
    def test_write_failure_raises_storage_error(self, prefs_path: Path) -> None:
        storage = JsonFileStorage(prefs_path)
        with (
            patch("robot_preferences.storage.json_file.os.replace", side_effect=OSError("ro")),
            pytest.raises(StorageError) as exc_info,
        ):
            storage.put_int("a", 1)
        assert exc_info.value.context == {"path": str(prefs_path)}
