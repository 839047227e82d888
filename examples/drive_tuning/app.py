"""Drive Tuning registry factory.

Usage::

    from examples.drive_tuning.app import boot
    from robot_preferences import WpilibPreferencesStorage

    registry, report = boot(WpilibPreferencesStorage())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from robot_preferences import PreferencesRegistry

from .tunables import DriveManually, DriveStraight

if TYPE_CHECKING:
    from robot_preferences import InitReport, PreferencesSettings, PreferencesStorage


def create_drive_registry(
    storage: PreferencesStorage,
    *,
    settings: PreferencesSettings | None = None,
) -> PreferencesRegistry:
    """Create a registry holding every drivetrain tunable."""
    registry = PreferencesRegistry(storage, settings)
    registry.scan(DriveStraight)
    registry.scan(DriveManually)
    return registry


def boot(
    storage: PreferencesStorage,
    *,
    settings: PreferencesSettings | None = None,
) -> tuple[PreferencesRegistry, InitReport]:
    """Create the registry and run startup reconciliation, as robotInit() would."""
    registry = create_drive_registry(storage, settings=settings)
    return registry, registry.init()
