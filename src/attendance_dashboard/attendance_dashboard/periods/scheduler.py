"""Class-period detection and adaptive refresh cadence.

The scheduler is a small state machine: either no period is active (IDLE), a
real period is detected from the clock (DETECTED), or the user pinned a period
while nothing was running (MANUAL). Real detection always wins over a pin.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import minutes_of_day, now_local
from ..core.constants import (
    CLOSING_SECONDS,
    IDLE_POLL_SECONDS,
    MANUAL_SECONDS,
    RAMP_UP_SECONDS,
    STEADY_SECONDS,
    ZONE_MINUTES,
)
from ..core.enums import CadenceZone, ScheduleMode
from ..core.exceptions import ValidationError
from .catalog import find_period
from .model import ClassPeriod

logger = logging.getLogger(__name__)

CADENCE_SECONDS = {
    CadenceZone.IDLE: IDLE_POLL_SECONDS,
    CadenceZone.RAMP_UP: RAMP_UP_SECONDS,
    CadenceZone.STEADY: STEADY_SECONDS,
    CadenceZone.CLOSING: CLOSING_SECONDS,
    CadenceZone.MANUAL: MANUAL_SECONDS,
}


def detect_period(now: datetime, periods: Sequence[ClassPeriod]) -> Optional[ClassPeriod]:
    """First period whose inclusive window contains ``now``.

    If configured windows overlap, the earliest period in ``periods`` wins.
    """
    for period in periods:
        if period.contains(now):
            return period
    return None


def cadence_zone(period: ClassPeriod, now: datetime) -> CadenceZone:
    """Refresh zone at ``now``, at minute granularity.

    When a short period puts ``now`` in both the first and the last ten
    minutes, ramp-up wins.
    """
    current = minutes_of_day(now)
    into_class = current - minutes_of_day(period.start_time)
    until_end = minutes_of_day(period.end_time) - current

    if into_class <= ZONE_MINUTES:
        return CadenceZone.RAMP_UP
    if until_end <= ZONE_MINUTES:
        return CadenceZone.CLOSING
    return CadenceZone.STEADY


@dataclass(frozen=True)
class ScheduleDecision:
    mode: ScheduleMode
    period: Optional[ClassPeriod]
    zone: CadenceZone

    @property
    def cadence_seconds(self) -> int:
        return CADENCE_SECONDS[self.zone]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "period": self.period.to_dict() if self.period else None,
            "zone": self.zone.value,
            "cadenceSeconds": self.cadence_seconds,
        }


class PeriodScheduler:
    def __init__(
        self,
        periods: Sequence[ClassPeriod],
        *,
        pinned: Optional[ClassPeriod] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._periods = tuple(periods)
        self._pinned = pinned
        self._clock = clock

    @property
    def periods(self) -> tuple[ClassPeriod, ...]:
        return self._periods

    @property
    def pinned(self) -> Optional[ClassPeriod]:
        return self._pinned

    def pin(self, hour: object, *, now: Optional[datetime] = None) -> ClassPeriod:
        """Manually select a period. Only allowed while no other period is running."""
        period = find_period(self._periods, hour)
        detected = detect_period(now or self._clock(), self._periods)
        if detected is not None and detected.hour != period.hour:
            raise ValidationError(f"{detected.label} is in progress, manual selection is only available between classes")

        self._pinned = period
        logger.info("Manual period selected: %s", period.label)
        return period

    def unpin(self) -> None:
        self._pinned = None

    def evaluate(self, now: Optional[datetime] = None) -> ScheduleDecision:
        now = now or self._clock()
        detected = detect_period(now, self._periods)

        if detected is not None and self._pinned is not None and detected.hour != self._pinned.hour:
            logger.info("%s started, discarding manual selection of %s", detected.label, self._pinned.label)
            self._pinned = None

        if detected is not None:
            return ScheduleDecision(mode=ScheduleMode.DETECTED, period=detected, zone=cadence_zone(detected, now))
        if self._pinned is not None:
            return ScheduleDecision(mode=ScheduleMode.MANUAL, period=self._pinned, zone=CadenceZone.MANUAL)
        return ScheduleDecision(mode=ScheduleMode.IDLE, period=None, zone=CadenceZone.IDLE)
