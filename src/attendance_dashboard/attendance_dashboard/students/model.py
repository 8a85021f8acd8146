from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class Student:
    """Domain entity: one roster entry.

    ``email`` is the unique key (compared case-insensitively). ``photo`` is an
    opaque image reference (usually a data URL) owned by the UI.
    """

    name: str
    email: str
    hour: str
    photo: Optional[str] = None

    @property
    def key(self) -> str:
        return self.email.strip().lower()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "hour": self.hour, "photo": self.photo}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Student":
        return cls(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            hour=str(data.get("hour") or ""),
            photo=data.get("photo") or None,
        )


@dataclass(frozen=True)
class RosterSnapshot:
    """Roster as read at one instant, with the version token it was read at."""

    students: Sequence[Student]
    version: str


@dataclass(frozen=True)
class MergeSummary:
    total: int
    added: int
    updated: int
    kept: int


@dataclass(frozen=True)
class PhotoUpdateSummary:
    updated: int
    not_found: int
    total: int
