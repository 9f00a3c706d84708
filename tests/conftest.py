from __future__ import annotations

from datetime import date, datetime

import pytest

from src.college_portal.college_portal.data.mock_data import MOCK_STUDENTS, MOCK_USERS
from src.college_portal.college_portal.storage.manager import StorageManager
from src.college_portal.college_portal.storage.memory_store import InMemoryStore

from tests.fakes import InMemoryAttendance, InMemoryStudents


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 9, 30, 0)


@pytest.fixture
def fixed_today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def faculty():
    return MOCK_USERS[0]


@pytest.fixture
def admin():
    return MOCK_USERS[1]


@pytest.fixture
def student_user():
    return MOCK_USERS[2]


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def students_repo():
    return InMemoryStudents(MOCK_STUDENTS)


@pytest.fixture
def storage():
    return StorageManager(InMemoryStore())
