from __future__ import annotations

import pytest

from src.college_portal.college_portal.core.exceptions import ValidationError
from src.college_portal.college_portal.students.service import StudentService


@pytest.fixture
def svc(students_repo):
    return StudentService(students_repo)


@pytest.mark.parametrize(
    "search,expected",
    [
        ("bala", ["CS2024002"]),
        ("CS2024003", ["CS2024003"]),
        ("HARISH@student", ["CS2024004"]),
        ("", ["CS2024001", "CS2024002", "CS2024003", "CS2024004"]),
    ],
)
def test_search_matches_name_id_or_email(svc, search, expected):
    assert [s.student_id for s in svc.list_students(search=search)] == expected


def test_course_and_semester_filters(svc):
    assert len(svc.list_students(course="B.Tech Computer Science", semester="3")) == 4
    assert svc.list_students(semester="5") == []
    assert svc.list_students(course="MBA") == []


def test_add_student_generates_id_from_course(svc, students_repo, fixed_now):
    student = svc.add_student(name=" Meera ", course="Electronics", semester="2", now=fixed_now)

    stamp = str(int(fixed_now.timestamp() * 1000))
    assert student.student_id == f"EL{stamp}"
    assert student.name == "Meera"
    assert student.date_of_admission == "2024-03-15"
    assert students_repo.get_by_student_id(student.student_id) == student


def test_add_student_rejects_duplicate_id(svc):
    with pytest.raises(ValidationError):
        svc.add_student(name="Copy", course="CS", student_id="CS2024001")


@pytest.mark.parametrize("semester", ["0", "9", "three"])
def test_add_student_rejects_bad_semester(svc, semester):
    with pytest.raises(ValidationError):
        svc.add_student(name="X", course="CS", semester=semester)


def test_update_student_only_touches_editable_fields(svc):
    updated = svc.update_student("2", {"email": "bala@new.edu", "semester": "4"})

    assert updated.email == "bala@new.edu"
    assert updated.semester == 4
    with pytest.raises(ValidationError):
        svc.update_student("2", {"student_id": "HACK"})


def test_deactivated_student_leaves_lists(svc, students_repo):
    svc.deactivate_student("1")

    assert "CS2024001" not in [s.student_id for s in svc.active_students()]
    assert students_repo.get_by_id("1").is_active is False
    with pytest.raises(ValidationError):
        svc.get("missing")
