from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import requests

from .attendance.service import AttendanceService
from .auth.service import AuthService
from .core.constants import DEFAULT_SESSION_HOURS, STUDENTS_DOCUMENT
from .periods.catalog import build_periods
from .periods.model import ClassPeriod
from .students.document_store import JsonFileDocumentStore
from .students.json_student_repository import JsonStudentRepository
from .students.service import RosterService
from .timetracking.client import TimeTrackingClient, build_time_tracking_client


@dataclass(frozen=True)
class Container:
    document_store: JsonFileDocumentStore
    students_repo: JsonStudentRepository

    periods: tuple[ClassPeriod, ...]
    session_hours: int

    roster_service: RosterService
    attendance_service: AttendanceService
    auth_service: AuthService


def build_container(
    settings: Any,
    *,
    client_factory: Optional[Callable[[], TimeTrackingClient]] = None,
    http_session: Optional[requests.Session] = None,
) -> Container:
    data_dir = Path(getattr(settings, "DATA_DIR", "data"))
    document_store = JsonFileDocumentStore(data_dir)
    students_repo = JsonStudentRepository(
        document_store, document_name=getattr(settings, "STUDENTS_DOCUMENT", STUDENTS_DOCUMENT)
    )

    if client_factory is None:
        def client_factory() -> TimeTrackingClient:
            return build_time_tracking_client(settings, session=http_session)

    roster_service = RosterService(students_repo)
    attendance_service = AttendanceService(students_repo, client_factory)
    auth_service = AuthService(
        password_hash=getattr(settings, "AUTH_PASSWORD_HASH", ""),
        secret_key=getattr(settings, "SECRET_KEY", ""),
    )

    return Container(
        document_store=document_store,
        students_repo=students_repo,
        periods=build_periods(getattr(settings, "GROUP_IDS", {})),
        session_hours=int(getattr(settings, "SESSION_HOURS", DEFAULT_SESSION_HOURS)),
        roster_service=roster_service,
        attendance_service=attendance_service,
        auth_service=auth_service,
    )
