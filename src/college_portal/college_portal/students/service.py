from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local, timestamp_id
from ..common.logging import get_logger
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

logger = get_logger("students.service")

_EDITABLE_FIELDS = {
    "name",
    "email",
    "course",
    "semester",
    "department",
    "roll_number",
    "phone_number",
    "date_of_admission",
}


class StudentService:
    """Use case: roster management (faculty/admin)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, search: str = "", course: str = "all", semester: str = "all") -> list[Student]:
        term = (search or "").lower()

        def matches(s: Student) -> bool:
            if not s.is_active:
                return False
            if term and not (term in s.name.lower() or term in s.student_id.lower() or term in s.email.lower()):
                return False
            if course != "all" and s.course != course:
                return False
            if semester != "all" and str(s.semester) != str(semester):
                return False
            return True

        return [s for s in self._students.list_all() if matches(s)]

    def active_students(self) -> list[Student]:
        return [s for s in self._students.list_all() if s.is_active]

    def courses(self) -> list[str]:
        return list(dict.fromkeys(s.course for s in self._students.list_all()))

    def semesters(self) -> list[int]:
        return sorted({s.semester for s in self._students.list_all()})

    def get(self, record_id: str) -> Student:
        student = self._students.get_by_id(record_id)
        if not student:
            raise ValidationError("Student not found")
        return student

    def add_student(
        self,
        *,
        name: str,
        course: str,
        semester: int = 1,
        email: str = "",
        department: str = "",
        roll_number: str = "",
        phone_number: str = "",
        date_of_admission: Optional[str] = None,
        student_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Student:
        name = require_non_empty(name, "Name")
        course = require_non_empty(course, "Course")
        semester = self._parse_semester(semester)
        now = now or now_local()
        existing = self._students.list_all()
        stamp = timestamp_id(now, {s.id for s in existing})

        student_id = (student_id or "").strip() or f"{course[:2].upper()}{stamp}"
        if any(s.student_id == student_id for s in existing):
            raise ValidationError(f"Student ID {student_id} already exists")

        student = Student(
            id=stamp,
            student_id=student_id,
            name=name,
            email=(email or "").strip(),
            course=course,
            semester=semester,
            department=(department or "").strip(),
            roll_number=(roll_number or "").strip(),
            phone_number=(phone_number or "").strip(),
            date_of_admission=date_of_admission or now.strftime("%Y-%m-%d"),
            is_active=True,
        )
        self._students.save_all([*existing, student])
        logger.info("Added student %s (%s)", student.student_id, student.name)
        return student

    def update_student(self, record_id: str, changes: Mapping[str, Any]) -> Student:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        clean = dict(changes)
        if "name" in clean:
            clean["name"] = require_non_empty(clean["name"], "Name")
        if "course" in clean:
            clean["course"] = require_non_empty(clean["course"], "Course")
        if "semester" in clean:
            clean["semester"] = self._parse_semester(clean["semester"])

        current = self.get(record_id)
        updated = current.with_changes(**clean)
        self._students.save_all([updated if s.id == record_id else s for s in self._students.list_all()])
        return updated

    def deactivate_student(self, record_id: str) -> None:
        """Soft delete: the student disappears from lists, attendance history stays."""
        current = self.get(record_id)
        self._students.save_all(
            [s.with_changes(is_active=False) if s.id == current.id else s for s in self._students.list_all()]
        )
        logger.info("Deactivated student %s", current.student_id)

    @staticmethod
    def _parse_semester(value) -> int:
        try:
            semester = int(value)
        except (TypeError, ValueError):
            raise ValidationError("Semester must be a number")
        if not 1 <= semester <= 8:
            raise ValidationError("Semester must be between 1 and 8")
        return semester
