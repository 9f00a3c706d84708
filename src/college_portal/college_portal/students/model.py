from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster.

    ``id`` is the internal record id; ``student_id`` is the college
    registration number that attendance records refer to.
    """

    id: str
    student_id: str
    name: str
    email: str = ""
    course: str = ""
    semester: int = 1
    department: str = ""
    roll_number: str = ""
    phone_number: str = ""
    date_of_admission: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Student":
        return cls(
            id=str(data.get("id", "")),
            student_id=str(data.get("studentId", "")),
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            course=str(data.get("course", "")),
            semester=int(data.get("semester") or 1),
            department=str(data.get("department", "")),
            roll_number=str(data.get("rollNumber", "")),
            phone_number=str(data.get("phoneNumber", "")),
            date_of_admission=str(data.get("dateOfAdmission", "")),
            is_active=bool(data.get("isActive", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "name": self.name,
            "email": self.email,
            "course": self.course,
            "semester": self.semester,
            "department": self.department,
            "rollNumber": self.roll_number,
            "phoneNumber": self.phone_number,
            "dateOfAdmission": self.date_of_admission,
            "isActive": self.is_active,
        }

    def with_changes(self, **changes) -> "Student":
        return replace(self, **changes)


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    code: str
    department: str
    semester: int
    credits: int
    faculty_id: str
    faculty_name: str
