from __future__ import annotations

import csv
import io

import pytest

from src.college_portal.college_portal.data.mock_data import MOCK_STUDENTS
from src.college_portal.college_portal.reports.service import ReportService

from tests.fakes import make_event


def _rows(csv_file):
    return list(csv.DictReader(io.StringIO(csv_file.content.decode("utf-8-sig"))))


@pytest.fixture
def svc(attendance_repo, students_repo):
    attendance_repo.events = [
        make_event("CS2024001", "2024-03-01", "present", subject="DSA", name="Udhaya"),
        make_event("CS2024001", "2024-03-02", "late", subject="DSA", name="Udhaya"),
        make_event("CS2024001", "2024-03-03", "absent", subject="DBMS", name="Udhaya"),
        make_event("CS2024002", "2024-03-01", "present", subject="DSA", name="Bala"),
        make_event("CS2024002", "2024-04-01", "absent", subject="DSA", name="Bala"),
    ]
    return ReportService(attendance_repo, students_repo, alert_threshold=75)


def test_build_report_filters_by_month_and_year(svc):
    report = svc.build_report(month=3, year=2024)

    assert report.month_label == "March"
    assert [(r["student_id"], r["percentage"], r["status"]) for r in report.rows] == [
        ("CS2024001", 50, "Critical"),
        ("CS2024002", 100, "Good"),
    ]
    assert report.class_average == 75
    assert [a.student_id for a in report.alerts] == ["CS2024001"]
    assert report.subjects == ["DSA", "DBMS"]


def test_build_report_subject_and_course_filters(svc):
    report = svc.build_report(month=3, year=2024, subject="DSA")
    assert [(r["student_id"], r["percentage"]) for r in report.rows] == [("CS2024001", 75), ("CS2024002", 100)]
    assert report.subject == "DSA"

    assert svc.build_report(month=3, year=2024, course="MBA").rows == []
    assert svc.build_report(month=3, year=2023).class_average == 0


def test_dashboard_figures_use_all_records(svc):
    assert svc.class_average() == 50
    assert [(a.student_id, a.percentage) for a in svc.low_attendance_alerts()] == [
        ("CS2024001", 50),
        ("CS2024002", 50),
    ]


def test_student_overview(svc):
    overview = svc.student_overview("CS2024002")

    assert overview.overall.total_classes == 2
    assert [s.subject for s in overview.by_subject] == ["DSA"]
    assert [t.month for t in overview.trends] == ["2024-03", "2024-04"]
    assert overview.records[0].date == "2024-04-01"


def test_student_overview_without_records(svc):
    overview = svc.student_overview("CS2024004")

    assert overview.overall is None
    assert overview.by_subject == []
    assert overview.trends == []


def test_attendance_report_csv_gives_zero_for_students_without_classes(svc, fixed_today):
    csv_file = svc.attendance_report_csv(students=MOCK_STUDENTS, month="3", today=fixed_today)

    rows = _rows(csv_file)
    assert csv_file.filename == "attendance_report_all_subjects_3_2024-03-15.csv"
    assert rows[0]["Attendance %"] == "50"
    assert rows[1]["Total Classes"] == "1"
    assert rows[3]["Total Classes"] == "0"
    assert rows[3]["Attendance %"] == "0"
    assert rows[3]["Status"] == "Critical"


def test_student_report_csv(svc, fixed_today):
    csv_file = svc.student_report_csv(student_id="CS2024001", today=fixed_today)

    rows = _rows(csv_file)
    assert csv_file.filename == "student_CS2024001_attendance_2024-03-15.csv"
    assert [r["Status"] for r in rows] == ["present", "late", "absent"]


def test_roster_csv(fixed_today):
    rows = _rows(ReportService.roster_csv(MOCK_STUDENTS, today=fixed_today))

    assert [r["Student ID"] for r in rows] == [s.student_id for s in MOCK_STUDENTS]
    assert rows[0]["Email"] == "udhaya@student.college.edu"
