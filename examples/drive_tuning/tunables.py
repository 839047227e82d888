"""Drivetrain tunables.

Values are declared unbound at import time and bound to a registry when it
scans these classes.
"""

from __future__ import annotations

from dataclasses import dataclass

from robot_preferences import BooleanValue, DoubleValue


class DriveStraight:
    """Tunables for the drive-straight command (heading hold PID)."""

    DEFAULT_SPEED = DoubleValue("DriveStraight/DefaultSpeed", 1.0)
    KP = DoubleValue("DriveStraight/P", 0.081)
    KI = DoubleValue("DriveStraight/I", 0.00016)
    KD = DoubleValue("DriveStraight/D", 0.0072)


class DriveManually:
    """Tunables for the default teleop drive command."""

    USING_TANK_CONTROL = BooleanValue("DriveManually/UsingTankControl", True)
    SQUARE_CONTROL_INPUTS = BooleanValue("DriveManually/SquareControlInputs", True)


@dataclass(frozen=True, slots=True)
class PIDGains:
    p: float
    i: float
    d: float


def drive_straight_gains() -> PIDGains:
    """Read the current heading-hold gains, as the command does on initialize."""
    return PIDGains(
        p=DriveStraight.KP.get_value(),
        i=DriveStraight.KI.get_value(),
        d=DriveStraight.KD.get_value(),
    )
