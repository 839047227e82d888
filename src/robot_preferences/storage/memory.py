"""In-memory preference storage for simulation and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class MemoryStorage:
    """Dict-backed storage. Contents vanish with the process.

    Args:
        initial: Optional mapping of key -> value to pre-seed the store.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get_string(self, key: str, default: str) -> str:
        value = self._data.get(key)
        return value if isinstance(value, str) else default

    def get_int(self, key: str, default: int) -> int:
        value = self._data.get(key)
        return value if _is_int(value) else default

    def get_double(self, key: str, default: float) -> float:
        value = self._data.get(key)
        if isinstance(value, float) or _is_int(value):
            return float(value)
        return default

    def get_boolean(self, key: str, default: bool) -> bool:
        value = self._data.get(key)
        return value if isinstance(value, bool) else default

    def put_string(self, key: str, value: str) -> None:
        self._data[key] = value

    def put_int(self, key: str, value: int) -> None:
        self._data[key] = value

    def put_double(self, key: str, value: float) -> None:
        self._data[key] = float(value)

    def put_boolean(self, key: str, value: bool) -> None:
        self._data[key] = value

    def contains_key(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def remove_all(self) -> None:
        self._data.clear()

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the stored key -> value mapping."""
        return dict(self._data)
