"""In-memory fakes shared by the service tests."""

from __future__ import annotations

from src.college_portal.college_portal.attendance.model import AttendanceEvent


class InMemoryAttendance:
    def __init__(self, events=None):
        self.events = list(events or [])

    def list_all(self):
        return list(self.events)

    def save_all(self, events):
        self.events = list(events)


class InMemoryStudents:
    def __init__(self, students=None):
        self.students = list(students or [])

    def list_all(self):
        return list(self.students)

    def get_by_id(self, record_id):
        return next((s for s in self.students if s.id == record_id), None)

    def get_by_student_id(self, student_id):
        return next((s for s in self.students if s.student_id == student_id), None)

    def save_all(self, students):
        self.students = list(students)


def make_event(student_id, day, status, *, subject="Math", period=1, name=None):
    return AttendanceEvent(
        id=AttendanceEvent.build_id(date=day, student_id=student_id, subject=subject, period=period),
        student_id=student_id,
        student_name=name or f"Student {student_id}",
        date=day,
        subject=subject,
        period=period,
        status=status,
    )
