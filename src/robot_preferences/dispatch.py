"""Kind-based dispatch for preference values.

Each preference value is one variant of a closed tagged union, identified by
its :class:`ValueKind`. Every type-specific operation (typed storage I/O,
type checking, default writing, drift detection) is an exhaustive ``match``
over the kind, so adding a variant is a type-checker error until every
operation here handles it.

Drift detection uses exact equality for every kind, doubles included.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

from robot_preferences.exceptions import PreferenceTypeError

if TYPE_CHECKING:
    from robot_preferences.storage.base import PreferencesStorage
    from robot_preferences.values import Value

__all__ = [
    "DriftNotice",
    "ValueKind",
    "check_drift",
    "coerce",
    "format_value",
    "read_value",
    "write_default",
    "write_value",
]


class ValueKind(StrEnum):
    """Closed set of preference value kinds."""

    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"


@dataclass(frozen=True, slots=True)
class DriftNotice:
    """A persisted value that differs from its declared default.

    Attributes:
        key: Preference key.
        value: Current persisted value.
        default: Declared default value.
    """

    key: str
    value: Any
    default: Any

    @property
    def message(self) -> str:
        """Operator-facing log line."""
        return f"NON-DEFAULT PREFERENCE: {self.key} = {format_value(self.value)}"


def format_value(value: Any) -> str:
    """Render a value for log lines (booleans as ``true``/``false``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce(kind: ValueKind, key: str, value: Any) -> Any:
    """Validate ``value`` against ``kind`` and normalize it.

    Integers are accepted for doubles and widened to ``float``. ``bool`` is
    never accepted as a number.

    Raises:
        PreferenceTypeError: If the value does not match the kind.
    """
    match kind:
        case ValueKind.STRING:
            ok = isinstance(value, str)
        case ValueKind.INTEGER:
            ok = isinstance(value, int) and not isinstance(value, bool)
        case ValueKind.DOUBLE:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            if ok:
                value = float(value)
        case ValueKind.BOOLEAN:
            ok = isinstance(value, bool)
        case _:
            assert_never(kind)
    if not ok:
        raise PreferenceTypeError(key, kind.value, type(value).__name__)
    return value


def read_value(kind: ValueKind, storage: PreferencesStorage, key: str, default: Any) -> Any:
    """Read the persisted value for ``key``, falling back to ``default``."""
    match kind:
        case ValueKind.STRING:
            return storage.get_string(key, default)
        case ValueKind.INTEGER:
            return storage.get_int(key, default)
        case ValueKind.DOUBLE:
            return storage.get_double(key, default)
        case ValueKind.BOOLEAN:
            return storage.get_boolean(key, default)
        case _:
            assert_never(kind)


def write_value(kind: ValueKind, storage: PreferencesStorage, key: str, value: Any) -> None:
    """Persist an already-coerced value under ``key``."""
    match kind:
        case ValueKind.STRING:
            storage.put_string(key, value)
        case ValueKind.INTEGER:
            storage.put_int(key, value)
        case ValueKind.DOUBLE:
            storage.put_double(key, value)
        case ValueKind.BOOLEAN:
            storage.put_boolean(key, value)
        case _:
            assert_never(kind)


def write_default(value: Value[Any], storage: PreferencesStorage) -> None:
    """Unconditionally write the declared default of ``value``."""
    write_value(value.kind, storage, value.key, value.default)


def check_drift(value: Value[Any], storage: PreferencesStorage) -> DriftNotice | None:
    """Compare the persisted value with the default. Never writes.

    Returns:
        A :class:`DriftNotice` if the current value differs, else ``None``.
    """
    current = read_value(value.kind, storage, value.key, value.default)
    if current != value.default:
        return DriftNotice(key=value.key, value=current, default=value.default)
    return None
