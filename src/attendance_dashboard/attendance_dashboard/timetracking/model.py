from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_api_timestamp


@dataclass(frozen=True)
class TimeTrackingUser:
    """External identity; owned by the time-tracking service."""

    id: str
    email: str
    name: str
    status: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TimeTrackingUser":
        return cls(
            id=str(data.get("id") or ""),
            email=str(data.get("email") or ""),
            name=str(data.get("name") or ""),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class TimeEntry:
    id: str
    user_id: str
    start: Optional[datetime]
    end: Optional[datetime]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TimeEntry":
        interval = data.get("timeInterval") or {}
        return cls(
            id=str(data.get("id") or ""),
            user_id=str(data.get("userId") or ""),
            start=parse_api_timestamp(interval.get("start")),
            end=parse_api_timestamp(interval.get("end")),
        )
