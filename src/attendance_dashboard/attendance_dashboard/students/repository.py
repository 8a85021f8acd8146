from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import RosterSnapshot, Student

# Version token of a document that does not exist yet
MISSING_VERSION = ""


class StoredDocument(Protocol):
    payload: Any
    version: str


class DocumentStore(Protocol):
    """Narrow get/put interface over named JSON documents.

    ``put`` with ``if_version`` writes only when the stored version still
    matches, so callers can do optimistic read-modify-write.
    """

    def get(self, name: str) -> Optional[StoredDocument]:
        raise NotImplementedError

    def put(self, name: str, payload: Any, *, if_version: Optional[str] = None) -> str:
        raise NotImplementedError


class StudentRepository(Protocol):
    """Repository interface for the roster.

    Note: the service layer depends on this interface, not on a concrete store.
    """

    def get_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def snapshot(self) -> RosterSnapshot:
        raise NotImplementedError

    def replace_all(self, students: Sequence[Student], *, expected_version: Optional[str] = None) -> str:
        raise NotImplementedError
