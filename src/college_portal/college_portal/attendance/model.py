from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one attendance mark for a student in one class period.

    Natural key is ``(student_id, date, subject, period)``. Events are never
    mutated; re-marking a session replaces them with new events.

    ``status`` is kept as the raw string so records loaded from storage with
    an unexpected value survive a round trip untouched.
    """

    student_id: str
    date: str
    subject: str
    period: int
    status: str
    timestamp: str = ""
    id: str = ""
    student_name: str = ""
    faculty_id: str = ""
    faculty_name: str = ""
    remarks: Optional[str] = None

    @property
    def natural_key(self) -> tuple[str, str, str, int]:
        return (self.student_id, self.date, self.subject, self.period)

    @staticmethod
    def build_id(*, date: str, student_id: str, subject: str, period: int) -> str:
        return f"{date}-{student_id}-{subject}-{period}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceEvent":
        """Build from the camelCase JSON shape used by the key-value store."""
        try:
            period = int(data.get("period") or 0)
        except (TypeError, ValueError):
            period = 0
        return cls(
            student_id=str(data.get("studentId", "")),
            date=str(data.get("date", "")),
            subject=str(data.get("subject", "")),
            period=period,
            status=str(data.get("status", "")),
            timestamp=str(data.get("timestamp", "")),
            id=str(data.get("id", "")),
            student_name=str(data.get("studentName", "")),
            faculty_id=str(data.get("facultyId", "")),
            faculty_name=str(data.get("facultyName", "")),
            remarks=data.get("remarks"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "date": self.date,
            "status": self.status,
            "subject": self.subject,
            "facultyId": self.faculty_id,
            "facultyName": self.faculty_name,
            "period": self.period,
            "timestamp": self.timestamp,
        }
        if self.remarks:
            out["remarks"] = self.remarks
        return out


@dataclass(frozen=True)
class AttendanceStats:
    """Read-model: per-student aggregate, recomputed on demand."""

    student_id: str
    student_name: str
    total_classes: int
    present_classes: int
    late_classes: int
    absent_classes: int
    percentage: int
    subject: str
    month: str
    year: int


@dataclass(frozen=True)
class MonthlyTrend:
    month: str
    total: int
    present: int
    late: int
    absent: int
    percentage: int


@dataclass(frozen=True)
class SessionSummary:
    """Counters shown while a faculty member marks a session."""

    total: int
    marked: int
    present: int
    late: int
    absent: int


@dataclass(frozen=True)
class DaySummary:
    total_students: int
    present: int
    late: int
    absent: int
