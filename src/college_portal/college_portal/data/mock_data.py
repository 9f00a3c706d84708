"""Seed data for demos and first start.

Attendance and circular dates are relative to ``today`` so a fresh portal
always has something to show on the dashboard.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.model import AttendanceEvent
from ..circulars.model import Circular
from ..core.enums import CircularCategory, CircularPriority, Role, TargetAudience
from ..students.model import Student, Subject
from ..users.model import User

MOCK_USERS: tuple[User, ...] = (
    User(
        id="1",
        username="harish",
        email="sharma@college.edu",
        role=Role.FACULTY,
        name="Dr. Harish",
        department="Computer Science",
        employee_id="FAC001",
    ),
    User(
        id="2",
        username="admin",
        email="admin@college.edu",
        role=Role.ADMIN,
        name="Admin User",
        department="Administration",
        employee_id="ADM001",
    ),
    User(
        id="3",
        username="student001",
        email="udhaya@student.college.edu",
        role=Role.STUDENT,
        name="Udhaya",
        student_id="CS2024001",
        semester=3,
        course="B.Tech Computer Science",
    ),
)


def _student(n: int, name: str, email: str) -> Student:
    return Student(
        id=str(n),
        student_id=f"CS202400{n}",
        name=name,
        email=email,
        course="B.Tech Computer Science",
        semester=3,
        department="Computer Science",
        roll_number=f"00{n}",
        phone_number=f"+91 987654321{n - 1}",
        date_of_admission="2022-08-15",
        is_active=True,
    )


MOCK_STUDENTS: tuple[Student, ...] = (
    _student(1, "Udhaya", "udhaya@student.college.edu"),
    _student(2, "Bala", "bala@student.college.edu"),
    _student(3, "Priyan", "priyan@student.college.edu"),
    _student(4, "Harish", "harish@student.college.edu"),
)

MOCK_SUBJECTS: tuple[Subject, ...] = (
    Subject(
        id="1",
        name="Data Structures and Algorithms",
        code="CS301",
        department="Computer Science",
        semester=3,
        credits=4,
        faculty_id="1",
        faculty_name="Dr. Harish",
    ),
    Subject(
        id="2",
        name="Database Management Systems",
        code="CS302",
        department="Computer Science",
        semester=3,
        credits=3,
        faculty_id="1",
        faculty_name="Dr. Harish",
    ),
    Subject(
        id="3",
        name="Computer Networks",
        code="CS303",
        department="Computer Science",
        semester=3,
        credits=3,
        faculty_id="1",
        faculty_name="Dr. Harish",
    ),
)


def mock_attendance(today: Optional[date] = None) -> list[AttendanceEvent]:
    today = today or date.today()
    day = today.strftime("%Y-%m-%d")
    stamp = datetime.combine(today, datetime.min.time()).replace(hour=9).isoformat()
    subject = MOCK_SUBJECTS[0].name
    marks = (("CS2024001", "Udhaya", "present"), ("CS2024002", "Bala", "late"), ("CS2024003", "Priyan", "absent"))
    return [
        AttendanceEvent(
            id=AttendanceEvent.build_id(date=day, student_id=sid, subject=subject, period=1),
            student_id=sid,
            student_name=name,
            date=day,
            status=status,
            subject=subject,
            faculty_id="1",
            faculty_name="Dr. Harish",
            period=1,
            timestamp=stamp,
        )
        for sid, name, status in marks
    ]


def mock_circulars(now: Optional[datetime] = None) -> list[Circular]:
    now = now or datetime.now()
    return [
        Circular(
            id="1",
            title="Mid-Semester Examination Schedule",
            content=(
                "The mid-semester examinations for all courses will be conducted from March 15-25. "
                "Students are advised to check the detailed timetable on the college website."
            ),
            category=CircularCategory.ACADEMIC,
            priority=CircularPriority.HIGH,
            created_by="Dr. Harish",
            created_at=now.isoformat(),
            expires_at=(now + timedelta(days=30)).isoformat(),
            target_audience=TargetAudience.ALL,
            departments=("Computer Science", "Electronics", "Mechanical"),
        ),
        Circular(
            id="2",
            title="Library Renovation Notice",
            content=(
                "The college library will be closed for renovation from March 1-10. "
                "Students can access digital resources through the online portal."
            ),
            category=CircularCategory.ADMINISTRATIVE,
            priority=CircularPriority.MEDIUM,
            created_by="Admin User",
            created_at=(now - timedelta(days=2)).isoformat(),
            target_audience=TargetAudience.ALL,
        ),
        Circular(
            id="3",
            title="Technical Fest - Call for Participation",
            content=(
                'The annual technical fest "TechnoVision" will be held on April 15-17. '
                "Students are encouraged to participate in technical competitions and workshops."
            ),
            category=CircularCategory.EVENTS,
            priority=CircularPriority.MEDIUM,
            created_by="Dr. Harish",
            created_at=(now - timedelta(days=5)).isoformat(),
            target_audience=TargetAudience.STUDENTS,
        ),
    ]
