from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, try_parse_iso_date
from ..common.logging import get_logger
from ..common.validators import require_choice, require_non_empty, require_positive_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..users.model import User
from .model import AttendanceEvent, DaySummary, SessionSummary
from .repository import AttendanceRepository

logger = get_logger("attendance.service")


class AttendanceService:
    """Use case: faculty marks attendance for one class session.

    A session is ``(date, subject, period)``. Saving a session replaces every
    earlier event of that session, which is what keeps the natural key
    ``(student_id, date, subject, period)`` unique in storage.
    """

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def load_records(self) -> Sequence[AttendanceEvent]:
        return self._attendance.list_all()

    def session_marks(self, *, date: str, subject: str, period: int) -> dict[str, str]:
        return {
            e.student_id: e.status
            for e in self._attendance.list_all()
            if e.date == date and e.subject == subject and e.period == int(period)
        }

    def mark_session(
        self,
        *,
        date: str,
        subject: str,
        period: int,
        marks: Mapping[str, str],
        faculty: User,
        now: Optional[datetime] = None,
    ) -> list[AttendanceEvent]:
        subject = require_non_empty(subject, "Subject")
        period = require_positive_int(period, "Period")
        if try_parse_iso_date(date) is None:
            raise ValidationError(f"Date is not valid: {date!r}")
        if not marks:
            raise ValidationError("Mark at least one student before saving")
        statuses = {sid: require_choice(status, AttendanceStatus, "Status") for sid, status in marks.items()}

        now = now or now_local()
        names = {s.student_id: s.name for s in self._students.list_all()}

        kept = [
            e
            for e in self._attendance.list_all()
            if not (e.date == date and e.subject == subject and e.period == period)
        ]
        new_events = [
            AttendanceEvent(
                id=AttendanceEvent.build_id(date=date, student_id=sid, subject=subject, period=period),
                student_id=sid,
                student_name=names.get(sid, ""),
                date=date,
                status=status.value,
                subject=subject,
                faculty_id=faculty.id,
                faculty_name=faculty.name,
                period=period,
                timestamp=now.isoformat(),
            )
            for sid, status in statuses.items()
        ]

        self._attendance.save_all([*kept, *new_events])
        logger.info(
            "Saved attendance: date=%s subject=%s period=%s marks=%d by=%s",
            date,
            subject,
            period,
            len(new_events),
            faculty.id,
        )
        return new_events

    @staticmethod
    def mark_all(students: Sequence[Student], status: AttendanceStatus) -> dict[str, str]:
        return {s.student_id: status.value for s in students}

    @staticmethod
    def session_summary(marks: Mapping[str, str], roster: Sequence[Student]) -> SessionSummary:
        values = list(marks.values())
        return SessionSummary(
            total=len(roster),
            marked=len(values),
            present=values.count(AttendanceStatus.PRESENT.value),
            late=values.count(AttendanceStatus.LATE.value),
            absent=values.count(AttendanceStatus.ABSENT.value),
        )

    def today_summary(self, *, today: date, total_students: int) -> DaySummary:
        """Dashboard counters. Anyone not marked present or late counts as absent."""
        day = today.strftime("%Y-%m-%d")
        todays = [e for e in self._attendance.list_all() if e.date == day]
        present = sum(1 for e in todays if e.status == AttendanceStatus.PRESENT.value)
        late = sum(1 for e in todays if e.status == AttendanceStatus.LATE.value)
        return DaySummary(
            total_students=total_students,
            present=present,
            late=late,
            absent=total_students - present - late,
        )
