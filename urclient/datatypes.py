"""Robot and safety mode enumerations and small formatting helpers."""

from __future__ import annotations

import enum
from collections.abc import Iterable


class RobotMode(enum.IntEnum):
    """Operating mode reported by the robot."""

    UNKNOWN = -128
    NO_CONTROLLER = -1
    DISCONNECTED = 0
    CONFIRM_SAFETY = 1
    BOOTING = 2
    POWER_OFF = 3
    POWER_ON = 4
    IDLE = 5
    BACKDRIVE = 6
    RUNNING = 7
    UPDATING_FIRMWARE = 8


class SafetyMode(enum.IntEnum):
    """Safety mode reported by the robot."""

    NORMAL = 1
    REDUCED = 2
    PROTECTIVE_STOP = 3
    RECOVERY = 4
    SAFEGUARD_STOP = 5
    SYSTEM_EMERGENCY_STOP = 6
    ROBOT_EMERGENCY_STOP = 7
    VIOLATION = 8
    FAULT = 9
    VALIDATE_JOINT_ID = 10
    UNDEFINED_SAFETY_MODE = 11


class SafetyStatus(enum.IntEnum):
    """Safety status reported by the robot (software 3.10 / 5.4 and later)."""

    NORMAL = 1
    REDUCED = 2
    PROTECTIVE_STOP = 3
    RECOVERY = 4
    SAFEGUARD_STOP = 5
    SYSTEM_EMERGENCY_STOP = 6
    ROBOT_EMERGENCY_STOP = 7
    VIOLATION = 8
    FAULT = 9
    VALIDATE_JOINT_ID = 10
    UNDEFINED_SAFETY_MODE = 11
    AUTOMATIC_MODE_SAFEGUARD_STOP = 12
    SYSTEM_THREE_POSITION_ENABLING_STOP = 13


def _name_of(enum_type: type[enum.IntEnum], value: int, what: str, excluded=()) -> str:
    try:
        member = enum_type(value)
    except ValueError:
        member = None
    if member is None or member in excluded:
        raise ValueError(f"Unknown {what}: {int(value)}")
    return member.name


def robot_mode_string(mode: RobotMode | int) -> str:
    """Return the name of a robot mode; UNKNOWN and undefined values raise ValueError."""
    return _name_of(RobotMode, mode, "robot mode", excluded=(RobotMode.UNKNOWN,))


def safety_mode_string(mode: SafetyMode | int) -> str:
    """Return the name of a safety mode; undefined values raise ValueError."""
    return _name_of(SafetyMode, mode, "safety mode")


def safety_status_string(status: SafetyStatus | int) -> str:
    """Return the name of a safety status; undefined values raise ValueError."""
    return _name_of(SafetyStatus, status, "safety status")


def _format_item(item: object) -> str:
    if isinstance(item, float):
        return f"{item:g}"
    return str(item)


def format_array(items: Iterable[object]) -> str:
    """Render a sequence as ``[a, b, c]``."""
    return "[" + ", ".join(_format_item(item) for item in items) + "]"