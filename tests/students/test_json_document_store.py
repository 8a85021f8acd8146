from __future__ import annotations

import json

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import StorageError, VersionConflictError
from src.attendance_dashboard.attendance_dashboard.students.document_store import JsonFileDocumentStore
from src.attendance_dashboard.attendance_dashboard.students.json_student_repository import JsonStudentRepository
from src.attendance_dashboard.attendance_dashboard.students.model import Student
from src.attendance_dashboard.attendance_dashboard.students.service import RosterService


def test_missing_document_reads_as_empty_roster(tmp_path):
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path / "data"))
    assert list(repo.get_all()) == []


def test_corrupt_document_reads_as_empty_roster(tmp_path):
    (tmp_path / "students.json").write_text("{not json", encoding="utf-8")
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path))
    assert list(repo.get_all()) == []


def test_document_schema_is_plain_student_array(tmp_path):
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path))
    repo.replace_all([Student(name="Ann", email="ann@x.com", hour="1")])

    data = json.loads((tmp_path / "students.json").read_text(encoding="utf-8"))
    assert data == [{"name": "Ann", "email": "ann@x.com", "hour": "1", "photo": None}]


def test_put_with_outdated_version_conflicts(tmp_path):
    store = JsonFileDocumentStore(tmp_path)
    first = store.put("doc.json", [1])
    store.put("doc.json", [2], if_version=first)

    with pytest.raises(VersionConflictError):
        store.put("doc.json", [3], if_version=first)
    assert store.get("doc.json").payload == [2]


def test_two_writers_from_same_snapshot_second_one_conflicts(tmp_path):
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path))
    svc = RosterService(repo)
    svc.merge_upsert([{"email": "ann@x.com", "name": "Ann", "hour": "1"}])

    snapshot = repo.snapshot()
    svc.update_hour("ann@x.com", "2")

    with pytest.raises(VersionConflictError):
        repo.replace_all(list(snapshot.students), expected_version=snapshot.version)
    assert repo.get_all()[0].hour == "2"


def test_first_write_expects_document_to_be_absent(tmp_path):
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path))
    empty = repo.snapshot()
    repo.replace_all([Student(name="Ann", email="ann@x.com", hour="1")], expected_version=empty.version)

    with pytest.raises(VersionConflictError):
        repo.replace_all([], expected_version=empty.version)


def test_merge_refuses_to_overwrite_unreadable_document(tmp_path):
    truncated = '[{"name": "Ann", "email": "ann@x.com", "hour": "1", "photo": null}, '
    (tmp_path / "students.json").write_text(truncated, encoding="utf-8")
    svc = RosterService(JsonStudentRepository(JsonFileDocumentStore(tmp_path)))

    with pytest.raises(StorageError):
        svc.merge_upsert([{"email": "bo@x.com", "name": "Bo", "hour": "1"}])
    with pytest.raises(StorageError):
        svc.clear()
    assert (tmp_path / "students.json").read_text(encoding="utf-8") == truncated


def test_non_array_document_is_not_replaced(tmp_path):
    (tmp_path / "students.json").write_text('{"students": []}', encoding="utf-8")
    repo = JsonStudentRepository(JsonFileDocumentStore(tmp_path))

    assert list(repo.get_all()) == []
    with pytest.raises(StorageError):
        RosterService(repo).remove("ann@x.com")
