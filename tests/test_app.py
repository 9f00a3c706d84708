from __future__ import annotations

import io
import json

import pytest

from src.college_portal.college_portal.data.mock_data import MOCK_STUDENTS
from src.college_portal.college_portal.main import create_app
from src.college_portal.college_portal.storage.memory_store import InMemoryStore

from tests.fakes import make_event


@pytest.fixture
def store():
    return InMemoryStore(
        {
            "students": [s.to_dict() for s in MOCK_STUDENTS],
            "attendanceRecords": [
                make_event("CS2024001", "2024-03-01", "present", name="Udhaya").to_dict(),
                make_event("CS2024001", "2024-03-02", "absent", name="Udhaya").to_dict(),
                make_event("CS2024002", "2024-03-01", "present", name="Bala").to_dict(),
            ],
        }
    )


@pytest.fixture
def app(store):
    return create_app("config.testing", store=store)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, role):
    return client.post("/", data={"username": username, "password": "secret", "role": role})


def test_login_page_renders(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert b"College Attendance Portal" in resp.data


def test_protected_pages_redirect_to_login(client):
    resp = client.get("/dashboard")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")


def test_wrong_role_is_rejected(client):
    resp = login(client, "harish", "student")

    assert resp.status_code == 200
    assert b"Invalid username or role" in resp.data


def test_faculty_dashboard_shows_class_figures(client):
    assert login(client, "harish", "faculty").status_code == 302

    resp = client.get("/dashboard")

    assert resp.status_code == 200
    assert b"Class average: 75%" in resp.data
    assert b"Udhaya" in resp.data


def test_student_is_kept_out_of_staff_pages(client):
    login(client, "student001", "student")

    assert client.get("/students").status_code == 403
    assert client.get("/view/students").headers["Location"].endswith("/dashboard")
    assert client.get("/view/my-attendance").headers["Location"].endswith("/me/attendance")

    resp = client.get("/me/attendance")
    assert resp.status_code == 200
    assert b"50%" in resp.data


def test_mark_attendance_persists_session(client, store):
    login(client, "harish", "faculty")

    resp = client.post(
        "/attendance",
        data={
            "date": "2024-03-15",
            "subject": "Data Structures and Algorithms",
            "period": "1",
            "status_CS2024003": "late",
            "status_CS2024004": "present",
        },
    )

    assert resp.status_code == 302
    saved = [r for r in store.get("attendanceRecords") if r["date"] == "2024-03-15"]
    assert sorted((r["studentId"], r["status"]) for r in saved) == [("CS2024003", "late"), ("CS2024004", "present")]
    assert all(r["facultyName"] == "Dr. Harish" for r in saved)


def test_reports_csv_download(client):
    login(client, "admin", "admin")

    resp = client.get("/reports.csv?month=3")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("Student ID,Student Name,Course")
    assert "Udhaya" in text


def test_reports_csv_filename_keeps_subject_with_spaces(client):
    login(client, "admin", "admin")

    resp = client.get("/reports.csv", query_string={"month": "3", "subject": "Data Structures and Algorithms"})

    header = resp.headers["Content-Disposition"]
    assert 'filename="attendance_report_Data Structures and Algorithms_3_' in header
    assert "filename*=UTF-8''attendance_report_Data%20Structures%20and%20Algorithms_3_" in header


def test_backup_and_restore(client, store):
    login(client, "admin", "admin")

    backup = client.get("/settings/backup.json")
    payload = json.loads(backup.data)
    assert len(payload["attendanceRecords"]) == 3

    payload["attendanceRecords"] = payload["attendanceRecords"][:1]
    resp = client.post(
        "/settings/restore",
        data={"backup": (io.BytesIO(json.dumps(payload).encode("utf-8")), "backup.json")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 302
    assert len(store.get("attendanceRecords")) == 1


def test_restore_rejects_backup_with_non_list_section(client, store):
    login(client, "admin", "admin")
    roster = store.get("students")

    resp = client.post(
        "/settings/restore",
        data={"backup": (io.BytesIO(b'{"students": 5}'), "backup.json")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )

    assert resp.status_code == 200
    assert b"The file is not a valid backup." in resp.data
    assert store.get("students") == roster


def test_logout_clears_session(client):
    login(client, "harish", "faculty")
    client.get("/logout")

    assert client.get("/dashboard").status_code == 302


@pytest.mark.parametrize(
    "path",
    [
        "/students",
        "/students/add",
        "/attendance?date=2024-03-01&subject=Math&period=1",
        "/attendance/sheet?date=2024-03-01&subject=Math&period=1",
        "/reports?month=3&year=2024",
        "/reports/print?month=3&year=2024",
        "/circulars",
        "/circulars/add",
        "/subjects",
        "/settings",
    ],
)
def test_staff_pages_render(client, path):
    login(client, "harish", "faculty")

    assert client.get(path).status_code == 200


def test_attendance_form_shows_existing_marks(client):
    login(client, "harish", "faculty")

    resp = client.get("/attendance?date=2024-03-01&subject=Math&period=1")

    assert b"Marked 2 of 4" in resp.data


def test_student_sees_circulars_for_students(client):
    login(client, "admin", "admin")
    client.post(
        "/circulars/add",
        data={"title": "Lab closed", "content": "No lab today", "target_audience": "faculty"},
    )
    client.post(
        "/circulars/add",
        data={"title": "Sports day", "content": "All welcome", "target_audience": "students"},
    )
    client.get("/logout")

    login(client, "student001", "student")
    resp = client.get("/circulars")

    assert b"Sports day" in resp.data
    assert b"Lab closed" not in resp.data
