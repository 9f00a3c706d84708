from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from src.college_portal.college_portal.circulars.service import CircularService
from src.college_portal.college_portal.circulars.storage_circular_repository import StorageCircularRepository
from src.college_portal.college_portal.core.enums import CircularPriority, TargetAudience
from src.college_portal.college_portal.core.exceptions import AuthorizationError, ValidationError
from src.college_portal.college_portal.data.mock_data import mock_circulars


@pytest.fixture
def repo(storage):
    return StorageCircularRepository(storage)


@pytest.fixture
def svc(repo):
    return CircularService(repo)


def test_create_and_list(svc, faculty, student_user, fixed_now):
    created = svc.create(
        author=faculty,
        title="Holiday",
        content="College closed on Friday",
        priority="high",
        departments=["Computer Science", " "],
        now=fixed_now,
    )

    assert created.created_by == faculty.name
    assert created.priority == CircularPriority.HIGH
    assert created.departments == ("Computer Science",)
    assert [c.id for c in svc.list_visible(student_user)] == [created.id]
    assert svc.list_visible(student_user, search="friday")[0].title == "Holiday"
    assert svc.list_visible(student_user, priority="low") == []


def test_students_cannot_post(svc, student_user):
    with pytest.raises(AuthorizationError):
        svc.create(author=student_user, title="x", content="y")


def test_create_validates_fields(svc, admin):
    with pytest.raises(ValidationError):
        svc.create(author=admin, title="", content="y")
    with pytest.raises(ValidationError):
        svc.create(author=admin, title="x", content="y", category="gossip")


def test_audience_rules_for_students(student_user, faculty):
    base = mock_circulars()[0]

    assert CircularService.is_visible_to(replace(base, target_audience=TargetAudience.STUDENTS), student_user)
    assert not CircularService.is_visible_to(replace(base, target_audience=TargetAudience.FACULTY), student_user)
    assert CircularService.is_visible_to(replace(base, target_audience=TargetAudience.FACULTY), faculty)

    specific = replace(base, target_audience=TargetAudience.SPECIFIC, departments=("B.Tech Computer Science",))
    assert CircularService.is_visible_to(specific, student_user)
    assert not CircularService.is_visible_to(replace(specific, departments=("Mechanical",)), student_user)


def test_update_and_deactivate(svc, repo, faculty, admin, student_user, fixed_now):
    created = svc.create(author=faculty, title="Old", content="Body", now=fixed_now)

    updated = svc.update(author=admin, circular_id=created.id, changes={"title": "New"})
    assert updated.title == "New"
    assert repo.get_by_id(created.id).title == "New"

    svc.deactivate(author=admin, circular_id=created.id)
    assert svc.list_visible(student_user) == []
    with pytest.raises(ValidationError):
        svc.deactivate(author=admin, circular_id="missing")


def test_is_expired(fixed_now):
    circular = replace(mock_circulars(fixed_now)[0], expires_at=(fixed_now - timedelta(days=1)).isoformat())

    assert CircularService.is_expired(circular, fixed_now) is True
    assert CircularService.is_expired(replace(circular, expires_at=None), fixed_now) is False
