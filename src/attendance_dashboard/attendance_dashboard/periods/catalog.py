from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional, Sequence

from ..common.validators import require_hour
from ..core.exceptions import NotFoundError
from .model import ClassPeriod

# Bell schedule; group ids are filled in from configuration.
REFERENCE_PERIODS: tuple[ClassPeriod, ...] = (
    ClassPeriod(hour="1", label="1st Hour", start_time="08:20", end_time="09:20"),
    ClassPeriod(hour="2", label="2nd Hour", start_time="09:30", end_time="11:00"),
    ClassPeriod(hour="3", label="3rd Hour", start_time="12:00", end_time="13:10"),
    ClassPeriod(hour="4", label="4th Hour", start_time="13:15", end_time="14:40"),
)


def build_periods(
    group_ids: Mapping[str, str], periods: Sequence[ClassPeriod] = REFERENCE_PERIODS
) -> tuple[ClassPeriod, ...]:
    return tuple(replace(p, group_id=(group_ids.get(p.hour) or "").strip()) for p in periods)


def find_period(periods: Sequence[ClassPeriod], hour: object) -> ClassPeriod:
    wanted = require_hour(hour)
    match: Optional[ClassPeriod] = next((p for p in periods if p.hour == wanted), None)
    if match is None:
        raise NotFoundError(f"No class period for hour {wanted}")
    return match


def configured_groups(periods: Sequence[ClassPeriod]) -> list[dict[str, str]]:
    """Periods that have an external group assigned, as shown in the UI."""
    return [{"id": p.group_id, "label": p.label, "hour": p.hour} for p in periods if p.group_id]
