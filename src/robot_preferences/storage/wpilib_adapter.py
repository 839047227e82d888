"""Storage adapter over RobotPy's ``wpilib.Preferences``.

On a roboRIO (or in RobotPy simulation) preferences live in the NetworkTables
``/Preferences`` table and are persisted by ntcore. Keys starting with ``.``
(such as ``.type``) belong to the dashboard and are left alone by the
registry's pruning pass.

Requires the ``robot`` extra (``pip install robot-preferences[robot]``).
"""

from __future__ import annotations

from typing import Any


class WpilibPreferencesStorage:
    """Adapter mapping :class:`PreferencesStorage` onto ``wpilib.Preferences``.

    Args:
        preferences: Object exposing the ``wpilib.Preferences`` static API.
            Defaults to ``wpilib.Preferences`` itself.
    """

    def __init__(self, preferences: Any | None = None) -> None:
        if preferences is None:
            import wpilib

            preferences = wpilib.Preferences
        self._prefs = preferences

    def get_string(self, key: str, default: str) -> str:
        return str(self._prefs.getString(key, default))

    def get_int(self, key: str, default: int) -> int:
        return int(self._prefs.getInt(key, default))

    def get_double(self, key: str, default: float) -> float:
        return float(self._prefs.getDouble(key, default))

    def get_boolean(self, key: str, default: bool) -> bool:
        return bool(self._prefs.getBoolean(key, default))

    def put_string(self, key: str, value: str) -> None:
        self._prefs.setString(key, value)

    def put_int(self, key: str, value: int) -> None:
        self._prefs.setInt(key, value)

    def put_double(self, key: str, value: float) -> None:
        self._prefs.setDouble(key, value)

    def put_boolean(self, key: str, value: bool) -> None:
        self._prefs.setBoolean(key, value)

    def contains_key(self, key: str) -> bool:
        return bool(self._prefs.containsKey(key))

    def keys(self) -> list[str]:
        return list(self._prefs.getKeys())

    def remove(self, key: str) -> None:
        self._prefs.remove(key)

    def remove_all(self) -> None:
        self._prefs.removeAll()
