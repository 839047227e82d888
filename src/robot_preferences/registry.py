"""Preferences registry and startup reconciliation.

The registry owns the set of declared Values and the storage they persist to.
``init()`` runs once at robot startup and moves the registry from
``uninitialized`` to ``ready`` through exactly one of two passes, selected by
the persisted ``WriteDefaultPrefs`` flag:

- **resetting**: optionally clear storage, write every default, then persist
  ``WriteDefaultPrefs = false`` so the next boot reconciles instead.
- **reconciling**: report values that drifted from their defaults (without
  touching them), seed keys that are missing, and prune stored keys that no
  registered Value owns. Keys with the reserved prefix are never pruned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from robot_preferences import discovery, dispatch
from robot_preferences.dispatch import ValueKind
from robot_preferences.exceptions import DuplicateKeyError, PreferencesError
from robot_preferences.logging import get_logger
from robot_preferences.settings import get_preferences_settings
from robot_preferences.storage import create_storage
from robot_preferences.values import BooleanValue

if TYPE_CHECKING:
    from collections.abc import Iterator

    from robot_preferences.dispatch import DriftNotice
    from robot_preferences.settings import PreferencesSettings
    from robot_preferences.storage.base import PreferencesStorage
    from robot_preferences.values import Value

logger = get_logger(__name__)

WRITE_DEFAULT_KEY = "WriteDefaultPrefs"


class RegistryState(StrEnum):
    """Lifecycle of a registry."""

    UNINITIALIZED = "uninitialized"
    RESETTING = "resetting"
    RECONCILING = "reconciling"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class InitReport:
    """Outcome of :meth:`PreferencesRegistry.init`.

    Attributes:
        mode: ``RESETTING`` or ``RECONCILING``.
        written: Keys whose default was written.
        drift: Notices for values differing from their defaults.
        removed: Stale keys removed from storage.
        error: Storage failure that stopped the pass early, if any. The
            other fields then describe only the work done before it.
    """

    mode: RegistryState
    written: tuple[str, ...] = ()
    drift: tuple[DriftNotice, ...] = ()
    removed: tuple[str, ...] = ()
    error: PreferencesError | None = None


class PreferencesRegistry:
    """Registry of typed preference values backed by persistent storage.

    Args:
        storage: Storage backend. If omitted, one is built from settings on
            first use.
        settings: Optional PreferencesSettings. Defaults to the cached
            environment settings.

    Attributes:
        write_default: The ``WriteDefaultPrefs`` control value, registered
            first on every registry.
    """

    def __init__(
        self,
        storage: PreferencesStorage | None = None,
        settings: PreferencesSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_preferences_settings()
        self._storage = storage
        self._values: dict[str, Value[Any]] = {}
        self._state = RegistryState.UNINITIALIZED
        self._report: InitReport | None = None
        self.write_default = BooleanValue(WRITE_DEFAULT_KEY, True, registry=self)

    @property
    def settings(self) -> PreferencesSettings:
        return self._settings

    @property
    def storage(self) -> PreferencesStorage:
        if self._storage is None:
            self._storage = create_storage(self._settings)
        return self._storage

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def report(self) -> InitReport | None:
        """Report of the completed ``init()``, or None before it has run."""
        return self._report

    @property
    def values(self) -> tuple[Value[Any], ...]:
        """Registered values in registration order."""
        return tuple(self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Value[Any]]:
        return iter(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def get(self, key: str) -> Value[Any] | None:
        return self._values.get(key)

    def contains(self, value: Value[Any]) -> bool:
        """Whether this exact Value object is registered."""
        return self._values.get(value.key) is value

    def register(self, value: Value[Any]) -> Value[Any]:
        """Register a Value and bind it to this registry.

        Registering the same object again is a no-op.

        Args:
            value: The Value to register.

        Returns:
            The registered Value.

        Raises:
            DuplicateKeyError: If a different Value already uses the key.
        """
        existing = self._values.get(value.key)
        if existing is value:
            return value
        if existing is not None:
            raise DuplicateKeyError(value.key, kind=value.kind.value)

        self._values[value.key] = value
        value._bind(self)
        if self._state is RegistryState.READY:
            logger.warning("preference_registered_after_init", key=value.key)
        return value

    def scan(self, target: Any) -> int:
        """Register every Value found on a module, class, instance or iterable."""
        return discovery.scan(self, target)

    def discover(
        self,
        group: str | None = None,
        *,
        exclude_names: frozenset[str] = frozenset(),
    ) -> int:
        """Load entry points of ``group`` and scan each for Values.

        Args:
            group: Entry point group. Defaults to ``settings.entry_point_group``.
            exclude_names: Entry point names to skip.

        Returns:
            Number of Values newly registered.
        """
        group = group or self._settings.entry_point_group
        registered = 0
        for contribution in discovery.discover(group, exclude_names=exclude_names):
            registered += discovery.scan(self, contribution.value)
        return registered

    def init(self) -> InitReport:
        """Reset or reconcile storage against the registered defaults.

        Runs once. Later calls log a warning and return the first report.
        A storage failure during the pass is logged and recorded on the
        report instead of raised, so robot startup continues.

        Returns:
            The :class:`InitReport` describing what was written, reported
            and removed.
        """
        if self._report is not None:
            logger.warning("preferences_already_initialized", mode=self._report.mode.value)
            return self._report

        if dispatch.read_value(ValueKind.BOOLEAN, self.storage, WRITE_DEFAULT_KEY, True):
            self._state = RegistryState.RESETTING
        else:
            self._state = RegistryState.RECONCILING
        mode = self._state

        progress = _Progress()
        try:
            if mode is RegistryState.RESETTING:
                self._reset(progress)
            else:
                self._reconcile(progress)
        except PreferencesError as exc:
            logger.exception(
                "preferences_init_failed",
                mode=mode.value,
                error_code=exc.error_code,
            )
            progress.error = exc

        report = progress.report(mode)
        self._report = report
        self._state = RegistryState.READY
        logger.info(
            "preferences_initialized",
            mode=report.mode.value,
            values=len(self._values),
            written=len(report.written),
            drift=len(report.drift),
            removed=len(report.removed),
            failed=report.error is not None,
        )
        return report

    def _reset(self, progress: _Progress) -> None:
        storage = self.storage
        if self._settings.clear_on_reset:
            storage.remove_all()

        for value in self.values:
            dispatch.write_default(value, storage)
            progress.written.append(value.key)

        dispatch.write_value(ValueKind.BOOLEAN, storage, WRITE_DEFAULT_KEY, False)

    def _reconcile(self, progress: _Progress) -> None:
        storage = self.storage
        touched: set[str] = set()

        for value in self.values:
            touched.add(value.key)
            # Always false on this path; reporting it would flag every boot.
            if value is self.write_default:
                continue
            if storage.contains_key(value.key):
                notice = dispatch.check_drift(value, storage)
                if notice is not None:
                    logger.warning(
                        notice.message,
                        key=notice.key,
                        value=notice.value,
                        default=notice.default,
                    )
                    progress.drift.append(notice)
            else:
                dispatch.write_default(value, storage)
                progress.written.append(value.key)

        if not self._settings.prune_stale_keys:
            return
        prefix = self._settings.reserved_prefix
        for key in list(storage.keys()):
            if key in touched or key.startswith(prefix):
                continue
            logger.warning(f"REMOVING UNUSED KEY: {key}", key=key)
            storage.remove(key)
            progress.removed.append(key)


@dataclass(slots=True)
class _Progress:
    written: list[str] = field(default_factory=list)
    drift: list[DriftNotice] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    error: PreferencesError | None = None

    def report(self, mode: RegistryState) -> InitReport:
        return InitReport(
            mode=mode,
            written=tuple(self.written),
            drift=tuple(self.drift),
            removed=tuple(self.removed),
            error=self.error,
        )


@lru_cache(maxsize=1)
def get_registry() -> PreferencesRegistry:
    """Get the process-wide registry, built from environment settings.

    Robot programs that declare tunables with ``registry=get_registry()``
    share this instance. Clear with ``get_registry.cache_clear()`` for testing.
    """
    return PreferencesRegistry()
