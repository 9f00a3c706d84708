from __future__ import annotations

from urllib.parse import quote

from src.college_portal.college_portal.common.http import attachment_disposition


def test_plain_name_is_quoted():
    assert attachment_disposition("students_2024-03-15.csv") == (
        "attachment; filename=\"students_2024-03-15.csv\"; filename*=UTF-8''students_2024-03-15.csv"
    )


def test_spaces_survive_in_both_forms():
    header = attachment_disposition("attendance_report_Data Structures_3.csv")

    assert 'filename="attendance_report_Data Structures_3.csv"' in header
    assert "filename*=UTF-8''attendance_report_Data%20Structures_3.csv" in header


def test_non_ascii_name_encodes_as_latin_1():
    name = "attendance_report_தமிழ்_3.csv"

    header = attachment_disposition(name)

    header.encode("latin-1")
    assert header.endswith("filename*=UTF-8''" + quote(name, safe=""))
    assert 'filename="attendance_report_' in header
