"""Drive Tuning: example robot tunables backed by robot_preferences.

Declares the drivetrain tunables the way a robot program does (as class
attributes of the commands that read them) and boots a registry over them.

Modules:
    tunables: DriveStraight / DriveManually tunables and gain helpers
    app:      Registry factory (create_drive_registry, boot)
"""

from .app import boot, create_drive_registry
from .tunables import DriveManually, DriveStraight, PIDGains, drive_straight_gains

__all__ = [
    "DriveManually",
    "DriveStraight",
    "PIDGains",
    "boot",
    "create_drive_registry",
    "drive_straight_gains",
]
