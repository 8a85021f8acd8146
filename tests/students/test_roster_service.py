from __future__ import annotations

from typing import Optional

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import (
    NotFoundError,
    ValidationError,
    VersionConflictError,
)
from src.attendance_dashboard.attendance_dashboard.students.model import RosterSnapshot, Student
from src.attendance_dashboard.attendance_dashboard.students import service as roster_service
from src.attendance_dashboard.attendance_dashboard.students.service import RosterService


class InMemoryStudents:
    def __init__(self, students=()):
        self._students = list(students)
        self._version = 1
        self.writes = 0

    def get_all(self):
        return list(self._students)

    def snapshot(self) -> RosterSnapshot:
        return RosterSnapshot(students=list(self._students), version=str(self._version))

    def replace_all(self, students, *, expected_version: Optional[str] = None) -> str:
        if expected_version is not None and expected_version != str(self._version):
            raise VersionConflictError("stale")
        self._students = list(students)
        self._version += 1
        self.writes += 1
        return str(self._version)


def test_merge_upsert_same_record_twice_keeps_one():
    repo = InMemoryStudents()
    svc = RosterService(repo)

    svc.merge_upsert([{"email": "ann@x.com", "name": "Ann", "hour": "1"}])
    summary = svc.merge_upsert([{"email": "ANN@x.com ", "name": "Ann", "hour": "1"}])

    assert [s.email for s in repo.get_all()] == ["ann@x.com"]
    assert (summary.added, summary.updated, summary.total) == (0, 1, 1)


def test_merge_upsert_keeps_existing_photo_and_overwrites_name_and_hour():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1", photo="data:image/png;base64,AAA")])
    svc = RosterService(repo)

    svc.merge_upsert([{"email": "Ann@X.com", "name": "Ann Lee", "hour": "3"}])

    (student,) = repo.get_all()
    assert student.photo == "data:image/png;base64,AAA"
    assert student.name == "Ann Lee"
    assert student.hour == "3"
    assert student.email == "ann@x.com"


def test_merge_upsert_retains_students_missing_from_batch():
    repo = InMemoryStudents([Student(name="Zed", email="zed@x.com", hour="2")])
    svc = RosterService(repo)

    summary = svc.merge_upsert([{"email": "ann@x.com", "name": "Ann", "hour": "1"}])

    assert {s.email for s in repo.get_all()} == {"ann@x.com", "zed@x.com"}
    assert (summary.added, summary.kept) == (1, 1)


def test_merge_upsert_new_student_has_no_photo_and_default_hour():
    repo = InMemoryStudents()
    RosterService(repo).merge_upsert([{"email": "ann@x.com", "name": "Ann", "photo": "ignored"}])

    (student,) = repo.get_all()
    assert student.photo is None
    assert student.hour == "1"


def test_roster_is_sorted_by_hour_then_name():
    repo = InMemoryStudents()
    RosterService(repo).merge_upsert([
        {"email": "c@x.com", "name": "carl", "hour": "2"},
        {"email": "b@x.com", "name": "Bea", "hour": "1"},
        {"email": "a@x.com", "name": "Al", "hour": "2"},
        {"email": "d@x.com", "name": "abe", "hour": "1"},
    ])

    assert [(s.hour, s.name) for s in repo.get_all()] == [("1", "abe"), ("1", "Bea"), ("2", "Al"), ("2", "carl")]


def test_merge_upsert_rejects_invalid_hour_without_writing():
    repo = InMemoryStudents()
    with pytest.raises(ValidationError):
        RosterService(repo).merge_upsert([{"email": "a@x.com", "name": "A", "hour": "7"}])
    assert repo.writes == 0


def test_remove_unknown_email_raises_not_found():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1")])
    with pytest.raises(NotFoundError):
        RosterService(repo).remove("bob@x.com")


def test_remove_is_case_insensitive():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1"), Student(name="Bo", email="bo@x.com", hour="1")])
    remaining = RosterService(repo).remove(" ANN@x.com")

    assert remaining == 1
    assert [s.email for s in repo.get_all()] == ["bo@x.com"]


def test_update_hour_moves_student_and_reports_old_hour():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1", photo="p")])
    student, old_hour = RosterService(repo).update_hour("ann@x.com", "4")

    assert old_hour == "1"
    assert student.hour == "4"
    assert repo.get_all()[0].photo == "p"


@pytest.mark.parametrize("hour", ["0", "5", "first", ""])
def test_update_hour_validates_hour(hour):
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1")])
    with pytest.raises(ValidationError):
        RosterService(repo).update_hour("ann@x.com", hour)


def test_update_hour_unknown_student():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1")])
    with pytest.raises(NotFoundError):
        RosterService(repo).update_hour("zed@x.com", "2")


def test_update_photos_counts_matches_and_misses():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1"), Student(name="Bo", email="bo@x.com", hour="2")])
    summary = RosterService(repo).update_photos([
        {"email": "ANN@x.com", "photo": "img-a"},
        {"email": "ghost@x.com", "photo": "img-g"},
    ])

    assert (summary.updated, summary.not_found, summary.total) == (1, 1, 2)
    assert {s.email: s.photo for s in repo.get_all()} == {"ann@x.com": "img-a", "bo@x.com": None}


def test_clear_empties_roster():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1")])
    RosterService(repo).clear()
    assert repo.get_all() == []


def test_write_against_stale_snapshot_is_rejected():
    repo = InMemoryStudents([Student(name="Ann", email="ann@x.com", hour="1")])
    stale = repo.snapshot()
    RosterService(repo).update_hour("ann@x.com", "2")

    with pytest.raises(VersionConflictError):
        repo.replace_all(stale.students, expected_version=stale.version)


def test_stats_groups_by_hour():
    repo = InMemoryStudents([
        Student(name="Ann", email="ann@x.com", hour="1", photo="p"),
        Student(name="Bo", email="bo@x.com", hour="1"),
        Student(name="Cy", email="cy@x.com", hour="3"),
    ])
    stats = RosterService(repo).stats()

    assert stats["totalStudents"] == 3
    assert stats["statsByHour"]["1"]["withPhoto"] == 1
    assert stats["statsByHour"]["1"]["withoutPhoto"] == 1
    assert stats["hours"] == {"1": 2, "2": 0, "3": 1, "4": 0}


def test_update_hour_keeps_roster_sorted():
    repo = InMemoryStudents([
        Student(name="Ann", email="ann@x.com", hour="1"),
        Student(name="Bo", email="bo@x.com", hour="1"),
        Student(name="Al", email="al@x.com", hour="2"),
    ])
    RosterService(repo).update_hour("ann@x.com", "2")

    assert [(s.hour, s.name) for s in repo.get_all()] == [("1", "Bo"), ("2", "Al"), ("2", "Ann")]


def test_collation_follows_environment_locale(monkeypatch):
    calls = []
    monkeypatch.setattr(roster_service.locale, "setlocale", lambda category, value: calls.append((category, value)))

    roster_service.configure_collation()

    assert calls == [(roster_service.locale.LC_COLLATE, "")]


def test_unavailable_locale_keeps_default_collation(monkeypatch, caplog):
    def refuse(category, value):
        raise roster_service.locale.Error("unsupported locale setting")

    monkeypatch.setattr(roster_service.locale, "setlocale", refuse)

    roster_service.configure_collation()

    assert "Locale collation unavailable" in caplog.text
