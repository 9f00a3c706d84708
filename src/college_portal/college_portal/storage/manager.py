from __future__ import annotations

import json

from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from ..core.constants import ATTENDANCE_KEY, CIRCULARS_KEY, STUDENTS_KEY
from .store import KeyValueStore

logger = get_logger("storage.manager")

_BACKUP_KEYS = ("students", "attendanceRecords", "circulars")


class StorageManager:
    """Typed access to the fixed keys of a KeyValueStore, plus backup/restore.

    Built once by the container around whichever backend is configured;
    repositories receive it by injection.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _get_list(self, key: str) -> list[dict]:
        value = self._store.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning("Expected a list under %r, got %s; ignoring it", key, type(value).__name__)
            return []
        return value

    def get_attendance_records(self) -> list[dict]:
        return self._get_list(ATTENDANCE_KEY)

    def save_attendance_records(self, records: list[dict]) -> None:
        self._store.set(ATTENDANCE_KEY, records)

    def get_students(self) -> list[dict]:
        return self._get_list(STUDENTS_KEY)

    def save_students(self, students: list[dict]) -> None:
        self._store.set(STUDENTS_KEY, students)

    def get_circulars(self) -> list[dict]:
        return self._get_list(CIRCULARS_KEY)

    def save_circulars(self, circulars: list[dict]) -> None:
        self._store.set(CIRCULARS_KEY, circulars)

    def export_data(self) -> str:
        data = {
            "students": self.get_students(),
            "attendanceRecords": self.get_attendance_records(),
            "circulars": self.get_circulars(),
            "exportDate": now_local().isoformat(),
        }
        return json.dumps(data, ensure_ascii=False, indent=2)

    def import_data(self, json_data: str) -> bool:
        """Restore a backup produced by export_data.

        Only keys present in the backup are overwritten. Returns False (and
        leaves the store untouched) when the text is not a JSON object or any
        backed-up key does not hold a list of objects.
        """

        try:
            data = json.loads(json_data)
        except ValueError as e:
            logger.error("Error importing data: %s", e)
            return False
        if not isinstance(data, dict):
            logger.error("Error importing data: backup is not a JSON object")
            return False

        for key in _BACKUP_KEYS:
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
                logger.error("Error importing data: %r must be a list of objects", key)
                return False

        students = data.get("students") or []
        records = data.get("attendanceRecords") or []
        circulars = data.get("circulars") or []
        if students:
            self.save_students(students)
        if records:
            self.save_attendance_records(records)
        if circulars:
            self.save_circulars(circulars)
        logger.info(
            "Imported backup: students=%d attendance=%d circulars=%d",
            len(students),
            len(records),
            len(circulars),
        )
        return True
