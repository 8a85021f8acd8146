from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ConfigurationError, ValidationError
from ..periods.model import ClassPeriod
from ..students.repository import StudentRepository
from ..timetracking.client import TimeTrackingClient
from .model import AttendanceResult
from .reconciler import reconcile

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: who on the roster has / has not logged time today."""

    def __init__(self, students: StudentRepository, client_factory: Callable[[], TimeTrackingClient]):
        self._students = students
        # Built per check so a missing API key fails the check, not app startup
        self._client_factory = client_factory

    def check(self, *, day: date, student_emails: Sequence[Any], group_id: str) -> AttendanceResult:
        group_id = require_non_empty(group_id, "groupId")
        if not all(isinstance(e, str) for e in student_emails):
            raise ValidationError("studentEmails must be a list of strings")

        if not student_emails:
            return AttendanceResult(date=day, total_students=0, present=[], absent=[])

        client = self._client_factory()
        present_set = client.users_with_entries_on_date(group_id, day)
        split = reconcile(student_emails, present_set)

        logger.info(
            "Attendance %s group=%s: %d present, %d absent",
            day.isoformat(), group_id, len(split.present), len(split.absent),
        )
        return AttendanceResult(
            date=day,
            total_students=len(student_emails),
            present=split.present,
            absent=split.absent,
        )

    def check_period(self, period: ClassPeriod, *, day: date) -> AttendanceResult:
        if not period.group_id:
            raise ConfigurationError(f"No time-tracking group configured for {period.label}")

        emails = [s.email for s in self._students.get_all() if s.hour == period.hour]
        return self.check(day=day, student_emails=emails, group_id=period.group_id)
