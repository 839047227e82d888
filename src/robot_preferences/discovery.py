"""Discovery of declared preference values.

Two mechanisms feed the registry:

- :func:`scan` walks the attributes of a module, class or instance (the
  "static fields" where tunables are declared) and registers every Value.
- :func:`discover` loads installed entry points of a group using Python's
  standard ``importlib.metadata.entry_points()`` mechanism. Each loaded object
  is then scanned.

Both are fail-soft: an entry point or attribute that cannot be loaded is
logged and skipped, so one broken declaration never prevents startup. Two
Values sharing a key are a programming error and raise :class:`DuplicateKeyError`.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from dataclasses import dataclass
from importlib.metadata import entry_points
from types import ModuleType
from typing import TYPE_CHECKING, Any

from robot_preferences.logging import get_logger
from robot_preferences.values import Value

if TYPE_CHECKING:
    from robot_preferences.registry import PreferencesRegistry

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DiscoveredContribution:
    """A single discovered entry point contribution.

    Attributes:
        name: Entry point name (e.g., ``"drivetrain"``).
        group: Entry point group (e.g., ``"robot_preferences.values"``).
        value: The loaded Python object (module, class, Value or iterable).
    """

    name: str
    group: str
    value: Any


def discover(
    group: str,
    *,
    exclude_names: frozenset[str] = frozenset(),
) -> list[DiscoveredContribution]:
    """Discover and load all entry points for a given group.

    Entry points that fail to load are logged and skipped.

    Args:
        group: The entry point group name.
        exclude_names: Set of entry point names to skip.

    Returns:
        List of successfully loaded contributions.
    """
    contributions: list[DiscoveredContribution] = []
    eps = entry_points(group=group)

    for ep in eps:
        if ep.name in exclude_names:
            logger.debug("entry_point_excluded", group=group, name=ep.name)
            continue
        try:
            loaded = ep.load()
            contributions.append(DiscoveredContribution(name=ep.name, group=group, value=loaded))
            logger.debug("entry_point_loaded", group=group, name=ep.name)
        except Exception:
            logger.exception("entry_point_load_failed", group=group, name=ep.name)

    logger.info("entry_points_discovered", group=group, count=len(contributions))
    return contributions


def _candidates(target: Any) -> Iterable[tuple[str, Any]]:
    if isinstance(target, Value):
        yield target.key, target
        return
    if isinstance(target, ModuleType) or inspect.isclass(target) or hasattr(target, "__dict__"):
        for name in list(vars(target)):
            try:
                yield name, getattr(target, name)
            except Exception:
                logger.exception("preference_attribute_unreadable", attribute=name)
        return
    if isinstance(target, Iterable) and not isinstance(target, (str, bytes)):
        for index, item in enumerate(target):
            yield str(index), item


def scan(registry: PreferencesRegistry, target: Any) -> int:
    """Register every Value reachable from ``target``.

    ``target`` may be a Value, a module, a class (class attributes are
    scanned, not inherited ones), an object instance, or an iterable of
    Values. Values already registered with ``registry`` are skipped.

    Args:
        registry: Registry to register Values with.
        target: Object to scan.

    Returns:
        Number of Values newly registered.

    Raises:
        DuplicateKeyError: If a Value's key collides with a different
            registered Value.
    """
    registered = 0
    for _, candidate in _candidates(target):
        if not isinstance(candidate, Value) or registry.contains(candidate):
            continue
        registry.register(candidate)
        registered += 1
    return registered
