from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Optional

from .attendance.service import AttendanceService
from .attendance.stats import StatsEngine
from .attendance.storage_attendance_repository import StorageAttendanceRepository
from .circulars.service import CircularService
from .circulars.storage_circular_repository import StorageCircularRepository
from .common.logging import get_logger
from .core.constants import DEFAULT_ALERT_THRESHOLD
from .data.mock_data import MOCK_STUDENTS, MOCK_SUBJECTS, MOCK_USERS, mock_attendance, mock_circulars
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import ReportService
from .storage.json_file_store import JsonFileStore
from .storage.manager import StorageManager
from .storage.memory_store import InMemoryStore
from .storage.mysql_store import MySQLKeyValueStore
from .storage.store import KeyValueStore
from .students.service import StudentService
from .students.storage_student_repository import StaticSubjectRepository, StorageStudentRepository
from .users.service import AuthService
from .users.static_user_repository import StaticUserRepository

logger = get_logger("container")

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


@dataclass(frozen=True)
class Container:
    storage: StorageManager

    users_repo: StaticUserRepository
    students_repo: StorageStudentRepository
    subjects_repo: StaticSubjectRepository
    attendance_repo: StorageAttendanceRepository
    circulars_repo: StorageCircularRepository

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    circular_service: CircularService
    report_service: ReportService


def build_store(settings: ModuleType) -> KeyValueStore:
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory")).lower()

    if backend == "memory":
        return InMemoryStore()

    if backend == "json":
        return JsonFileStore(getattr(settings, "STORAGE_PATH", "data/portal.json"))

    if backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(conn)))
        return MySQLKeyValueStore(conn)

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_container(settings: ModuleType, *, store: Optional[KeyValueStore] = None) -> Container:
    storage = StorageManager(store if store is not None else build_store(settings))
    seeded = bool(getattr(settings, "AUTO_SEED", False))

    users_repo = StaticUserRepository(MOCK_USERS)
    students_repo = StorageStudentRepository(storage, seed=(lambda: MOCK_STUDENTS) if seeded else None)
    subjects_repo = StaticSubjectRepository(MOCK_SUBJECTS)
    attendance_repo = StorageAttendanceRepository(storage, seed=mock_attendance if seeded else None)
    circulars_repo = StorageCircularRepository(storage, seed=mock_circulars if seeded else None)

    report_service = ReportService(
        attendance_repo,
        students_repo,
        engine=StatsEngine(),
        alert_threshold=int(getattr(settings, "ATTENDANCE_ALERT_THRESHOLD", DEFAULT_ALERT_THRESHOLD)),
    )

    return Container(
        storage=storage,
        users_repo=users_repo,
        students_repo=students_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        circulars_repo=circulars_repo,
        auth_service=AuthService(users_repo),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        circular_service=CircularService(circulars_repo),
        report_service=report_service,
    )
