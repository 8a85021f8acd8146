from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pytest

from src.attendance_dashboard.attendance_dashboard.attendance.service import AttendanceService
from src.attendance_dashboard.attendance_dashboard.core.exceptions import (
    ConfigurationError,
    UpstreamError,
    ValidationError,
)
from src.attendance_dashboard.attendance_dashboard.periods.model import ClassPeriod
from src.attendance_dashboard.attendance_dashboard.students.model import Student

DAY = date(2025, 1, 15)
FIRST_HOUR = ClassPeriod(hour="1", label="1st Hour", start_time="08:20", end_time="09:20", group_id="g1")


@dataclass
class InMemoryStudents:
    students: list[Student]

    def get_all(self):
        return list(self.students)


@dataclass
class FakeTimeTracking:
    present_by_group: dict[str, set[str]]
    calls: list[tuple[str, date]] = field(default_factory=list)
    error: Exception | None = None

    def users_with_entries_on_date(self, group_id: str, day: date) -> set[str]:
        self.calls.append((group_id, day))
        if self.error:
            raise self.error
        return self.present_by_group.get(group_id, set())


def make_service(students, client):
    return AttendanceService(InMemoryStudents(students), lambda: client)


def test_period_check_uses_only_that_hours_students():
    roster = [
        Student(name="A", email="a@x", hour="1"),
        Student(name="B", email="b@x", hour="1"),
        Student(name="C", email="c@x", hour="2"),
    ]
    client = FakeTimeTracking({"g1": {"a@x"}})

    result = make_service(roster, client).check_period(FIRST_HOUR, day=DAY)

    assert list(result.present) == ["a@x"]
    assert list(result.absent) == ["b@x"]
    assert result.total_students == 2
    assert client.calls == [("g1", DAY)]


def test_check_reports_counts_and_date():
    client = FakeTimeTracking({"g1": {"a@x.com"}})
    result = make_service([], client).check(day=DAY, student_emails=["A@x.com", "b@x.com", "c@x.com"], group_id="g1")

    assert result.to_dict() == {
        "date": "2025-01-15",
        "totalStudents": 3,
        "presentCount": 1,
        "absentCount": 2,
        "presentStudents": ["a@x.com"],
        "absentStudents": ["b@x.com", "c@x.com"],
    }


def test_upstream_failure_propagates():
    client = FakeTimeTracking({}, error=UpstreamError("boom"))
    with pytest.raises(UpstreamError):
        make_service([], client).check(day=DAY, student_emails=["a@x.com"], group_id="g1")


def test_blank_group_is_rejected():
    with pytest.raises(ValidationError):
        make_service([], FakeTimeTracking({})).check(day=DAY, student_emails=["a@x.com"], group_id=" ")


def test_non_string_emails_are_rejected():
    with pytest.raises(ValidationError):
        make_service([], FakeTimeTracking({})).check(day=DAY, student_emails=["a@x.com", 7], group_id="g1")


def test_period_without_group_is_a_configuration_error():
    period = ClassPeriod(hour="2", label="2nd Hour", start_time="09:30", end_time="11:00")
    with pytest.raises(ConfigurationError):
        make_service([], FakeTimeTracking({})).check_period(period, day=DAY)


def test_empty_roster_skips_the_upstream_call():
    client = FakeTimeTracking({"g1": {"a@x.com"}})
    result = make_service([], client).check_period(FIRST_HOUR, day=DAY)

    assert result.total_students == 0
    assert client.calls == []
