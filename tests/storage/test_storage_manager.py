from __future__ import annotations

import json

import pytest

from src.college_portal.college_portal.attendance.storage_attendance_repository import StorageAttendanceRepository
from src.college_portal.college_portal.core.exceptions import StorageError
from src.college_portal.college_portal.storage.json_file_store import JsonFileStore
from src.college_portal.college_portal.storage.manager import StorageManager
from src.college_portal.college_portal.storage.memory_store import InMemoryStore

from tests.fakes import make_event


def test_missing_keys_read_as_empty_lists(storage):
    assert storage.get_attendance_records() == []
    assert storage.get_students() == []
    assert storage.get_circulars() == []


def test_non_list_value_is_ignored():
    storage = StorageManager(InMemoryStore({"students": {"oops": True}}))

    assert storage.get_students() == []


def test_memory_store_does_not_share_mutable_values():
    store = InMemoryStore()
    value = [{"id": "1"}]
    store.set("students", value)
    value.append({"id": "2"})

    assert store.get("students") == [{"id": "1"}]


def test_export_then_import_into_another_store(storage):
    storage.save_students([{"id": "1", "studentId": "CS1", "name": "A"}])
    storage.save_attendance_records([make_event("CS1", "2024-03-01", "present").to_dict()])

    backup = json.loads(storage.export_data())
    assert set(backup) == {"students", "attendanceRecords", "circulars", "exportDate"}

    other = StorageManager(InMemoryStore({"circulars": [{"id": "keep"}]}))
    assert other.import_data(json.dumps(backup)) is True

    assert other.get_students() == storage.get_students()
    assert other.get_attendance_records() == storage.get_attendance_records()
    # empty list in the backup leaves existing data alone
    assert other.get_circulars() == [{"id": "keep"}]


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]", '"text"'])
def test_import_rejects_invalid_backup(storage, payload):
    storage.save_students([{"id": "1"}])

    assert storage.import_data(payload) is False
    assert storage.get_students() == [{"id": "1"}]


@pytest.mark.parametrize(
    "backup",
    [
        {"students": 5},
        {"students": "roster"},
        {"students": [{"id": "2"}], "attendanceRecords": [1, 2]},
        {"circulars": {"id": "c1"}},
    ],
)
def test_import_rejects_keys_that_are_not_lists_of_objects(storage, backup):
    storage.save_students([{"id": "1"}])

    assert storage.import_data(json.dumps(backup)) is False
    assert storage.get_students() == [{"id": "1"}]
    assert storage.get_attendance_records() == []


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "portal.json"
    StorageManager(JsonFileStore(path)).save_students([{"id": "1"}])

    assert StorageManager(JsonFileStore(path)).get_students() == [{"id": "1"}]


def test_json_file_store_reads_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "portal.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileStore(path)

    assert store.get("students") is None
    store.set("students", [])
    assert json.loads(path.read_text(encoding="utf-8")) == {"students": []}


def test_json_file_store_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "portal.json")

    with pytest.raises(StorageError):
        store.set("students", [])


def test_attendance_repository_serves_seed_until_saved(storage):
    seed = [make_event("CS1", "2024-03-01", "present")]
    repo = StorageAttendanceRepository(storage, seed=lambda: seed)

    assert repo.list_all() == seed

    repo.save_all([make_event("CS2", "2024-03-02", "late")])
    assert [e.student_id for e in repo.list_all()] == ["CS2"]


def test_attendance_repository_keeps_unknown_status(storage):
    record = make_event("CS1", "2024-03-01", "present").to_dict()
    record["status"] = "excused"
    storage.save_attendance_records([record])

    events = StorageAttendanceRepository(storage).list_all()

    assert events[0].status == "excused"
