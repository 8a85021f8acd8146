from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any

from ..common.datetime_utils import hhmm


@dataclass(frozen=True)
class ClassPeriod:
    """Static configuration of one class hour.

    ``start_time`` / ``end_time`` are local ``HH:MM`` strings; both bounds are
    inside the period.
    """

    hour: str
    label: str
    start_time: str
    end_time: str
    group_id: str = ""

    def contains(self, moment: datetime | time) -> bool:
        return self.start_time <= hhmm(moment) <= self.end_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "label": self.label,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "groupId": self.group_id,
        }
