from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import STUDENTS_DOCUMENT
from ..core.exceptions import StorageError
from .model import RosterSnapshot, Student
from .repository import MISSING_VERSION, DocumentStore, StudentRepository

logger = logging.getLogger(__name__)


class JsonStudentRepository(StudentRepository):
    """Roster kept as a single ``Student[]`` JSON document.

    ``snapshot`` feeds writes, so a document it cannot read is a
    ``StorageError``; ``get_all`` is read-only and degrades to an empty roster.
    """

    def __init__(self, store: DocumentStore, *, document_name: str = STUDENTS_DOCUMENT):
        self._store = store
        self._document_name = document_name

    def snapshot(self) -> RosterSnapshot:
        try:
            doc = self._store.get(self._document_name)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read {self._document_name}: {e}") from e

        if doc is None:
            logger.info("No students document found, returning empty roster")
            return RosterSnapshot(students=[], version=MISSING_VERSION)

        if not isinstance(doc.payload, list):
            raise StorageError(f"{self._document_name} is not a JSON array")

        students = [Student.from_dict(item) for item in doc.payload if isinstance(item, dict)]
        return RosterSnapshot(students=students, version=doc.version)

    def get_all(self) -> Sequence[Student]:
        try:
            return self.snapshot().students
        except StorageError as e:
            logger.error("Error reading students document: %s", e)
            return []

    def replace_all(self, students: Sequence[Student], *, expected_version: Optional[str] = None) -> str:
        payload = [s.to_dict() for s in students]
        return self._store.put(self._document_name, payload, if_version=expected_version)
