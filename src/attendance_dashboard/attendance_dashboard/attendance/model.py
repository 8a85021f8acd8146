from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Sequence


@dataclass(frozen=True)
class Reconciliation:
    present: Sequence[str] = field(default_factory=list)
    absent: Sequence[str] = field(default_factory=list)


@dataclass(frozen=True)
class AttendanceResult:
    """Read-model of one attendance check. Recomputed on every request."""

    date: date
    total_students: int
    present: Sequence[str]
    absent: Sequence[str]

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def absent_count(self) -> int:
        return len(self.absent)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "totalStudents": self.total_students,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "presentStudents": list(self.present),
            "absentStudents": list(self.absent),
        }
