from __future__ import annotations

import locale
import logging
from typing import Any, Iterable, Mapping, Sequence

from ..common.validators import normalize_email, require_email, require_hour, require_non_empty
from ..core.constants import DEFAULT_HOUR, VALID_HOURS
from ..core.exceptions import NotFoundError, ValidationError
from .model import MergeSummary, PhotoUpdateSummary, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def configure_collation() -> None:
    """Use the environment's collation for roster names; C order if it is unavailable."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("Locale collation unavailable, sorting names by code point: %s", e)


def roster_sort_key(student: Student):
    """Hour ascending, then name ascending (locale collation, case-insensitive)."""
    return (student.hour, locale.strxfrm(student.name.casefold()), student.name)


def sort_roster(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=roster_sort_key)


class RosterService:
    """Use cases over the roster document.

    Every mutation re-reads the freshest snapshot at the start of the call and
    writes back with that snapshot's version token, so a concurrent writer
    surfaces as ``VersionConflictError`` instead of a silently lost update.
    """

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self) -> Sequence[Student]:
        return self._students.get_all()

    def students_for_hour(self, hour: str) -> list[Student]:
        return [s for s in self._students.get_all() if s.hour == hour]

    @staticmethod
    def _parse_record(record: Mapping[str, Any]) -> tuple[str, str, str]:
        if not isinstance(record, Mapping):
            raise ValidationError("Each student must be an object with email, name and hour")
        email = require_email(str(record.get("email") or ""))
        name = require_non_empty(str(record.get("name") or ""), "name")
        raw_hour = str(record.get("hour") or "").strip()
        hour = require_hour(raw_hour) if raw_hour else ""
        return email, name, hour

    def merge_upsert(self, records: Iterable[Mapping[str, Any]]) -> MergeSummary:
        parsed = [self._parse_record(r) for r in records]

        snapshot = self._students.snapshot()
        existing = {s.key: s for s in snapshot.students}

        merged: dict[str, Student] = {}
        added = updated = 0
        for email, name, hour in parsed:
            key = normalize_email(email)
            base = merged.get(key) or existing.get(key)
            if base is None:
                merged[key] = Student(name=name, email=email, hour=hour or DEFAULT_HOUR, photo=None)
                added += 1
                continue

            if key not in merged:
                updated += 1
            merged[key] = Student(name=name, email=base.email, hour=hour or base.hour, photo=base.photo)

        kept = [s for key, s in existing.items() if key not in merged]
        result = sort_roster(list(merged.values()) + kept)
        self._students.replace_all(result, expected_version=snapshot.version)

        logger.info("Roster merge: %d new, %d updated, %d kept, %d total", added, updated, len(kept), len(result))
        return MergeSummary(total=len(result), added=added, updated=updated, kept=len(kept))

    def replace_all(self, records: Iterable[Mapping[str, Any]]) -> Sequence[Student]:
        students: dict[str, Student] = {}
        for record in records:
            email, name, hour = self._parse_record(record)
            photo = record.get("photo") or None
            students[normalize_email(email)] = Student(name=name, email=email, hour=hour or DEFAULT_HOUR, photo=photo)

        snapshot = self._students.snapshot()
        result = sort_roster(students.values())
        self._students.replace_all(result, expected_version=snapshot.version)
        logger.info("Roster replaced with %d students", len(result))
        return result

    def remove(self, email: str) -> int:
        require_non_empty(email, "Email")
        key = normalize_email(email)

        snapshot = self._students.snapshot()
        remaining = [s for s in snapshot.students if s.key != key]
        if len(remaining) == len(snapshot.students):
            raise NotFoundError(f"Student {email} not found")

        self._students.replace_all(remaining, expected_version=snapshot.version)
        logger.info("Removed %s from roster (%d remaining)", key, len(remaining))
        return len(remaining)

    def clear(self) -> None:
        snapshot = self._students.snapshot()
        self._students.replace_all([], expected_version=snapshot.version)
        logger.info("Roster cleared (%d students removed)", len(snapshot.students))

    def update_hour(self, email: str, new_hour: Any) -> tuple[Student, str]:
        require_non_empty(email, "Email")
        hour = require_hour(new_hour, "hour")
        key = normalize_email(email)

        snapshot = self._students.snapshot()
        if not snapshot.students:
            raise NotFoundError("No students found")

        target = next((s for s in snapshot.students if s.key == key), None)
        if target is None:
            raise NotFoundError(f"Student {email} not found")

        moved = Student(name=target.name, email=target.email, hour=hour, photo=target.photo)
        students = sort_roster(moved if s is target else s for s in snapshot.students)
        self._students.replace_all(students, expected_version=snapshot.version)
        return moved, target.hour

    def update_photos(self, updates: Iterable[Mapping[str, Any]]) -> PhotoUpdateSummary:
        photos: dict[str, str] = {}
        for update in updates:
            if not isinstance(update, Mapping):
                raise ValidationError("Each photo update must be an object with email and photo")
            email = require_non_empty(str(update.get("email") or ""), "email")
            photos[normalize_email(email)] = update.get("photo")

        snapshot = self._students.snapshot()
        if not snapshot.students:
            raise NotFoundError("No students found, upload a roster first")

        updated = 0
        students = []
        for s in snapshot.students:
            if s.key in photos:
                updated += 1
                s = Student(name=s.name, email=s.email, hour=s.hour, photo=photos[s.key])
            students.append(s)

        known = {s.key for s in snapshot.students}
        not_found = sum(1 for key in photos if key not in known)

        self._students.replace_all(students, expected_version=snapshot.version)
        return PhotoUpdateSummary(updated=updated, not_found=not_found, total=len(students))

    def stats(self) -> dict[str, Any]:
        students = self._students.get_all()
        by_hour: dict[str, dict[str, Any]] = {}
        for s in students:
            entry = by_hour.setdefault(s.hour, {"total": 0, "withPhoto": 0, "withoutPhoto": 0, "names": []})
            entry["total"] += 1
            if s.photo:
                entry["withPhoto"] += 1
                entry["names"].append(f"{s.name} ✓")
            else:
                entry["withoutPhoto"] += 1
                entry["names"].append(f"{s.name} ✗")

        return {
            "totalStudents": len(students),
            "statsByHour": by_hour,
            "hours": {hour: by_hour.get(hour, {}).get("total", 0) for hour in VALID_HOURS},
        }
