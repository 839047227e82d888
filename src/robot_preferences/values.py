"""Typed preference values.

A Value is a named, typed, defaulted configuration cell. The Value object holds
only its identity (key, kind, default); the current value always lives in the
owning registry's storage.

Example:
    Declaring tunables at module level and binding them later::

        from robot_preferences import DoubleValue

        DRIVE_STRAIGHT_P = DoubleValue("DriveStraight/P", 0.081)

        registry.scan(sys.modules[__name__])
        kp = DRIVE_STRAIGHT_P.get_value()

    Or binding at construction time::

        DRIVE_STRAIGHT_P = DoubleValue("DriveStraight/P", 0.081, registry=registry)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from robot_preferences import dispatch
from robot_preferences.dispatch import DriftNotice, ValueKind
from robot_preferences.exceptions import UnregisteredValueError
from robot_preferences.logging import get_logger

if TYPE_CHECKING:
    from robot_preferences.registry import PreferencesRegistry
    from robot_preferences.storage.base import PreferencesStorage

__all__ = [
    "BooleanValue",
    "DoubleValue",
    "IntegerValue",
    "PreferenceValue",
    "StringValue",
    "Value",
]

T = TypeVar("T")

logger = get_logger(__name__)


class Value(Generic[T]):
    """Base class for all preference value kinds.

    Args:
        key: Unique preference key, ``/``-separated for dashboard grouping.
        default: Declared default, validated against the subclass kind.
        registry: Optional registry to self-register with immediately.

    Raises:
        ValueError: If ``key`` is empty.
        PreferenceTypeError: If ``default`` does not match the kind.
        DuplicateKeyError: If ``registry`` already holds another Value with
            the same key.
    """

    kind: ClassVar[ValueKind]

    def __init__(
        self,
        key: str,
        default: T,
        *,
        registry: PreferencesRegistry | None = None,
    ) -> None:
        if not key:
            msg = "Preference key must be a non-empty string"
            raise ValueError(msg)
        self._key = key
        self._default: T = dispatch.coerce(self.kind, key, default)
        self._registry: PreferencesRegistry | None = None
        if registry is not None:
            registry.register(self)

    @property
    def key(self) -> str:
        return self._key

    @property
    def default(self) -> T:
        return self._default

    @property
    def registry(self) -> PreferencesRegistry | None:
        return self._registry

    @property
    def is_bound(self) -> bool:
        return self._registry is not None

    def _bind(self, registry: PreferencesRegistry) -> None:
        # Called by the registry; the most recent registry owns the value.
        self._registry = registry

    def _storage(self) -> PreferencesStorage:
        if self._registry is None:
            raise UnregisteredValueError(self._key)
        return self._registry.storage

    def get_value(self) -> T:
        """Return the persisted value, or the default when the key is absent."""
        result: T = dispatch.read_value(self.kind, self._storage(), self._key, self._default)
        return result

    def set_value(self, value: T) -> None:
        """Validate and persist a new value.

        Raises:
            PreferenceTypeError: If ``value`` does not match the kind.
        """
        coerced = dispatch.coerce(self.kind, self._key, value)
        dispatch.write_value(self.kind, self._storage(), self._key, coerced)

    def exists(self) -> bool:
        """Whether storage currently holds this key."""
        return self._storage().contains_key(self._key)

    def write_default_value(self) -> None:
        """Write the declared default to storage."""
        dispatch.write_default(self, self._storage())

    def report_if_not_default(self) -> DriftNotice | None:
        """Log and return a drift notice if the persisted value is not the default."""
        notice = dispatch.check_drift(self, self._storage())
        if notice is not None:
            logger.warning(
                notice.message,
                key=notice.key,
                value=notice.value,
                default=notice.default,
            )
        return notice

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r}, default={self._default!r})"


class StringValue(Value[str]):
    """A string preference."""

    kind: ClassVar[ValueKind] = ValueKind.STRING


class IntegerValue(Value[int]):
    """An integer preference. ``bool`` is rejected."""

    kind: ClassVar[ValueKind] = ValueKind.INTEGER


class DoubleValue(Value[float]):
    """A double preference. Integers are widened to ``float``."""

    kind: ClassVar[ValueKind] = ValueKind.DOUBLE


class BooleanValue(Value[bool]):
    """A boolean preference."""

    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN


PreferenceValue = StringValue | IntegerValue | DoubleValue | BooleanValue
"""Tagged union of every concrete preference value type."""

