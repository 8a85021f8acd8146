from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def hhmm(moment: datetime | time) -> str:
    return moment.strftime("%H:%M")


def minutes_of_day(value: str | datetime | time) -> int:
    if isinstance(value, str):
        hours, minutes = value.split(":")
        return int(hours) * 60 + int(minutes)
    return value.hour * 60 + value.minute


def day_window(day: date, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """Local midnight of ``day`` and the instant 24h later, both timezone-aware."""
    midnight = datetime.combine(day, time.min)
    midnight = midnight.replace(tzinfo=tz) if tz is not None else midnight.astimezone()
    return midnight, midnight + timedelta(hours=24)


def to_utc_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_api_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by the time-tracking API."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
