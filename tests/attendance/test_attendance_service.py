from __future__ import annotations

from datetime import date

import pytest

from src.college_portal.college_portal.attendance.service import AttendanceService
from src.college_portal.college_portal.core.enums import AttendanceStatus
from src.college_portal.college_portal.core.exceptions import ValidationError
from src.college_portal.college_portal.data.mock_data import MOCK_STUDENTS

from tests.fakes import make_event


@pytest.fixture
def svc(attendance_repo, students_repo):
    return AttendanceService(attendance_repo, students_repo)


def test_mark_session_stores_one_event_per_student(svc, attendance_repo, faculty, fixed_now):
    saved = svc.mark_session(
        date="2024-03-15",
        subject="Math",
        period=2,
        marks={"CS2024001": "present", "CS2024002": "late"},
        faculty=faculty,
        now=fixed_now,
    )

    assert len(saved) == 2
    first = attendance_repo.events[0]
    assert first.id == "2024-03-15-CS2024001-Math-2"
    assert first.student_name == "Udhaya"
    assert first.faculty_name == faculty.name
    assert first.timestamp == fixed_now.isoformat()


def test_remarking_a_session_replaces_previous_marks(svc, attendance_repo, faculty, fixed_now):
    attendance_repo.events = [
        make_event("CS2024001", "2024-03-15", "absent", subject="Math", period=2),
        make_event("CS2024001", "2024-03-15", "absent", subject="Math", period=3),
    ]

    svc.mark_session(
        date="2024-03-15",
        subject="Math",
        period=2,
        marks={"CS2024001": "present"},
        faculty=faculty,
        now=fixed_now,
    )

    keys = [e.natural_key for e in attendance_repo.events]
    assert len(keys) == len(set(keys)) == 2
    assert svc.session_marks(date="2024-03-15", subject="Math", period=2) == {"CS2024001": "present"}
    assert svc.session_marks(date="2024-03-15", subject="Math", period=3) == {"CS2024001": "absent"}


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"subject": " "}, "Subject"),
        ({"period": 0}, "Period"),
        ({"date": "15/03/2024"}, "Date"),
        ({"marks": {"CS2024001": "excused"}}, "Status"),
        ({"marks": {}}, "Mark at least one"),
    ],
)
def test_mark_session_rejects_bad_input(svc, attendance_repo, faculty, kwargs, message):
    args = {
        "date": "2024-03-15",
        "subject": "Math",
        "period": 1,
        "marks": {"CS2024001": "present"},
        "faculty": faculty,
    }
    args.update(kwargs)

    with pytest.raises(ValidationError) as exc:
        svc.mark_session(**args)

    assert message in str(exc.value)
    assert attendance_repo.events == []


def test_mark_all_and_session_summary():
    marks = AttendanceService.mark_all(MOCK_STUDENTS[:3], AttendanceStatus.LATE)
    marks["CS2024001"] = "present"

    summary = AttendanceService.session_summary(marks, MOCK_STUDENTS)

    assert (summary.total, summary.marked, summary.present, summary.late, summary.absent) == (4, 3, 1, 2, 0)


def test_today_summary_counts_unmarked_students_as_absent(svc, attendance_repo):
    attendance_repo.events = [
        make_event("CS2024001", "2024-03-15", "present"),
        make_event("CS2024002", "2024-03-15", "late"),
        make_event("CS2024003", "2024-03-14", "present"),
    ]

    summary = svc.today_summary(today=date(2024, 3, 15), total_students=4)

    assert (summary.present, summary.late, summary.absent) == (1, 1, 2)
