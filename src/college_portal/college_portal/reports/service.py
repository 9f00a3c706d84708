from __future__ import annotations

import calendar
import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceEvent, AttendanceStats, MonthlyTrend
from ..attendance.repository import AttendanceRepository
from ..attendance.stats import StatsEngine, standing_label, weighted_percentage
from ..common.datetime_utils import try_parse_iso_date
from ..core.constants import ALL_SUBJECTS, DEFAULT_ALERT_THRESHOLD
from ..core.enums import AttendanceStatus
from ..students.model import Student
from ..students.repository import StudentRepository

REPORT_COLUMNS = [
    "Student ID",
    "Student Name",
    "Course",
    "Semester",
    "Total Classes",
    "Present",
    "Late",
    "Absent",
    "Attendance %",
    "Status",
]

STUDENT_REPORT_COLUMNS = ["Date", "Subject", "Period", "Status", "Faculty", "Remarks"]

ROSTER_COLUMNS = [
    "Student ID",
    "Name",
    "Email",
    "Course",
    "Semester",
    "Department",
    "Roll Number",
    "Phone",
    "Date of Admission",
]


@dataclass(frozen=True)
class ReportData:
    month: int
    month_label: str
    year: int
    subject: str
    course: str
    stats: list[AttendanceStats]
    rows: list[dict]
    class_average: int
    alerts: list[AttendanceStats]
    subjects: list[str]


@dataclass(frozen=True)
class StudentOverview:
    overall: Optional[AttendanceStats]
    by_subject: list[AttendanceStats]
    trends: list[MonthlyTrend]
    records: list[AttendanceEvent]


@dataclass(frozen=True)
class CsvFile:
    filename: str
    content: bytes


def _write_csv(fieldnames: list[str], rows: Sequence[dict]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def _month_of(e: AttendanceEvent) -> Optional[int]:
    d = try_parse_iso_date(e.date)
    return d.month if d else None


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ReportService:
    """Reports, dashboard figures and exports built on StatsEngine."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        engine: Optional[StatsEngine] = None,
        alert_threshold: int = DEFAULT_ALERT_THRESHOLD,
    ):
        self._attendance = attendance
        self._students = students
        self._engine = engine or StatsEngine()
        self._threshold = int(alert_threshold)

    @property
    def alert_threshold(self) -> int:
        return self._threshold

    def subjects_in_use(self) -> list[str]:
        return list(dict.fromkeys(e.subject for e in self._attendance.list_all()))

    def build_report(
        self,
        *,
        month: int,
        year: int,
        subject: str = "all",
        course: str = "all",
    ) -> ReportData:
        events = self._attendance.list_all()
        courses = {s.student_id: s.course for s in self._students.list_all()}

        def keep(e: AttendanceEvent) -> bool:
            d = try_parse_iso_date(e.date)
            if d is None or d.month != month or d.year != year:
                return False
            if subject != "all" and e.subject != subject:
                return False
            if course != "all" and courses.get(e.student_id) != course:
                return False
            return True

        filtered = [e for e in events if keep(e)]
        subject_filter = None if subject == "all" else subject

        stats = [
            s
            for s in (
                self._engine.compute_student_stats(sid, filtered, subject_filter, str(month), year)
                for sid in dict.fromkeys(e.student_id for e in filtered)
            )
            if s is not None
        ]

        return ReportData(
            month=month,
            month_label=calendar.month_name[month] if 1 <= month <= 12 else str(month),
            year=year,
            subject=subject_filter or ALL_SUBJECTS,
            course="All Courses" if course == "all" else course,
            stats=stats,
            rows=[self._stats_row(s) for s in stats],
            class_average=self._engine.compute_class_average(filtered),
            alerts=self._engine.get_attendance_threshold_alerts(filtered, self._threshold),
            subjects=list(dict.fromkeys(e.subject for e in events)),
        )

    @staticmethod
    def _stats_row(s: AttendanceStats) -> dict:
        return {
            "student_id": s.student_id,
            "student_name": s.student_name,
            "total": s.total_classes,
            "present": s.present_classes,
            "late": s.late_classes,
            "absent": s.absent_classes,
            "percentage": s.percentage,
            "status": standing_label(s.percentage).value,
        }

    def class_average(self) -> int:
        return self._engine.compute_class_average(self._attendance.list_all())

    def low_attendance_alerts(self) -> list[AttendanceStats]:
        return self._engine.get_attendance_threshold_alerts(self._attendance.list_all(), self._threshold)

    def student_overview(self, student_id: str) -> StudentOverview:
        events = self._attendance.list_all()
        own = [e for e in events if e.student_id == student_id]
        by_subject = [
            s
            for s in (
                self._engine.compute_student_stats(student_id, own, subj)
                for subj in dict.fromkeys(e.subject for e in own)
            )
            if s is not None
        ]
        return StudentOverview(
            overall=self._engine.compute_student_stats(student_id, events),
            by_subject=by_subject,
            trends=self._engine.get_monthly_trends(events, student_id),
            records=sorted(own, key=lambda e: (e.date, e.period), reverse=True),
        )

    def attendance_report_csv(
        self,
        *,
        students: Sequence[Student],
        subject: Optional[str] = None,
        month: Optional[str] = None,
        today: date,
    ) -> CsvFile:
        """One row per roster student; a student with no classes gets 0% (Critical).

        The month filter ignores the year, matching the on-screen export button.
        """

        events = self._attendance.list_all()
        rows = []
        for student in students:
            own = [e for e in events if e.student_id == student.student_id]
            if subject:
                own = [e for e in own if e.subject == subject]
            if month:
                month_no = _as_int(month)
                own = [e for e in own if month_no is not None and _month_of(e) == month_no]

            total = len(own)
            present = sum(1 for e in own if e.status == AttendanceStatus.PRESENT.value)
            late = sum(1 for e in own if e.status == AttendanceStatus.LATE.value)
            absent = sum(1 for e in own if e.status == AttendanceStatus.ABSENT.value)
            percentage = weighted_percentage(present=present, late=late, total=total) if total > 0 else 0

            rows.append(
                {
                    "Student ID": student.student_id,
                    "Student Name": student.name,
                    "Course": student.course,
                    "Semester": student.semester,
                    "Total Classes": total,
                    "Present": present,
                    "Late": late,
                    "Absent": absent,
                    "Attendance %": percentage,
                    "Status": standing_label(percentage).value,
                }
            )

        filename = (
            f"attendance_report_{subject or 'all_subjects'}_{month or 'all_months'}_{today.strftime('%Y-%m-%d')}.csv"
        )
        return CsvFile(filename=filename, content=_write_csv(REPORT_COLUMNS, rows))

    def student_report_csv(self, *, student_id: str, today: date) -> CsvFile:
        rows = [
            {
                "Date": e.date,
                "Subject": e.subject,
                "Period": e.period,
                "Status": e.status,
                "Faculty": e.faculty_name,
                "Remarks": e.remarks or "",
            }
            for e in self._attendance.list_all()
            if e.student_id == student_id
        ]
        filename = f"student_{student_id}_attendance_{today.strftime('%Y-%m-%d')}.csv"
        return CsvFile(filename=filename, content=_write_csv(STUDENT_REPORT_COLUMNS, rows))

    @staticmethod
    def roster_csv(students: Sequence[Student], *, today: date) -> CsvFile:
        rows = [
            {
                "Student ID": s.student_id,
                "Name": s.name,
                "Email": s.email,
                "Course": s.course,
                "Semester": s.semester,
                "Department": s.department,
                "Roll Number": s.roll_number,
                "Phone": s.phone_number,
                "Date of Admission": s.date_of_admission,
            }
            for s in students
        ]
        return CsvFile(filename=f"students_{today.strftime('%Y-%m-%d')}.csv", content=_write_csv(ROSTER_COLUMNS, rows))
