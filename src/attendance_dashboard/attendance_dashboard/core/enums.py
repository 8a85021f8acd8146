from __future__ import annotations

from enum import Enum


class ScheduleMode(str, Enum):
    """Where the live view gets its class period from."""

    IDLE = "IDLE"
    DETECTED = "DETECTED"
    MANUAL = "MANUAL"


class CadenceZone(str, Enum):
    """Refresh zone inside a class period."""

    IDLE = "IDLE"
    RAMP_UP = "RAMP_UP"
    STEADY = "STEADY"
    CLOSING = "CLOSING"
    MANUAL = "MANUAL"
