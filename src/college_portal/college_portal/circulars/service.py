from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, timestamp_id
from ..common.logging import get_logger
from ..common.validators import require_choice, require_non_empty
from ..core.enums import CircularCategory, CircularPriority, Role, TargetAudience
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import Circular
from .repository import CircularRepository

logger = get_logger("circulars.service")

_STAFF_ROLES = {Role.FACULTY, Role.ADMIN}


class CircularService:
    """Use case: post and read circulars (announcements)."""

    def __init__(self, circulars: CircularRepository):
        self._circulars = circulars

    @staticmethod
    def is_visible_to(circular: Circular, user: User) -> bool:
        """Students only see what targets them; staff see every circular."""
        if user.role != Role.STUDENT:
            return True
        if circular.target_audience in (TargetAudience.ALL, TargetAudience.STUDENTS):
            return True
        return circular.target_audience == TargetAudience.SPECIFIC and (user.course or "") in circular.departments

    def list_visible(
        self,
        user: User,
        *,
        search: str = "",
        category: str = "all",
        priority: str = "all",
    ) -> list[Circular]:
        term = (search or "").lower()
        out = []
        for c in self._circulars.list_all():
            if not c.is_active:
                continue
            if term and term not in c.title.lower() and term not in c.content.lower():
                continue
            if category != "all" and c.category.value != category:
                continue
            if priority != "all" and c.priority.value != priority:
                continue
            if not self.is_visible_to(c, user):
                continue
            out.append(c)
        return out

    @staticmethod
    def is_expired(circular: Circular, now: Optional[datetime] = None) -> bool:
        return circular.expires_before(now or now_local())

    def create(
        self,
        *,
        author: User,
        title: str,
        content: str,
        category: str = CircularCategory.GENERAL.value,
        priority: str = CircularPriority.MEDIUM.value,
        target_audience: str = TargetAudience.ALL.value,
        departments: Sequence[str] = (),
        expires_at: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Circular:
        self._require_staff(author)
        now = now or now_local()
        existing = self._circulars.list_all()
        circular = Circular(
            id=timestamp_id(now, {c.id for c in existing}),
            title=require_non_empty(title, "Title"),
            content=require_non_empty(content, "Content"),
            category=require_choice(category, CircularCategory, "Category"),
            priority=require_choice(priority, CircularPriority, "Priority"),
            created_by=author.name,
            created_at=now.isoformat(),
            target_audience=require_choice(target_audience, TargetAudience, "Target audience"),
            expires_at=expires_at or None,
            departments=tuple(d.strip() for d in departments if d and d.strip()),
        )
        self._circulars.save_all([*existing, circular])
        logger.info("Circular %s posted by %s", circular.id, author.id)
        return circular

    def update(self, *, author: User, circular_id: str, changes: Mapping[str, Any]) -> Circular:
        self._require_staff(author)
        current = self._circulars.get_by_id(circular_id)
        if not current:
            raise ValidationError("Circular not found")

        clean: dict[str, Any] = {}
        if "title" in changes:
            clean["title"] = require_non_empty(changes["title"], "Title")
        if "content" in changes:
            clean["content"] = require_non_empty(changes["content"], "Content")
        if "category" in changes:
            clean["category"] = require_choice(changes["category"], CircularCategory, "Category")
        if "priority" in changes:
            clean["priority"] = require_choice(changes["priority"], CircularPriority, "Priority")
        if "target_audience" in changes:
            clean["target_audience"] = require_choice(changes["target_audience"], TargetAudience, "Target audience")
        if "departments" in changes:
            clean["departments"] = tuple(d.strip() for d in changes["departments"] if d and d.strip())
        if "expires_at" in changes:
            clean["expires_at"] = changes["expires_at"] or None

        updated = current.with_changes(**clean)
        self._circulars.save_all([updated if c.id == circular_id else c for c in self._circulars.list_all()])
        return updated

    def deactivate(self, *, author: User, circular_id: str) -> None:
        self._require_staff(author)
        if not self._circulars.get_by_id(circular_id):
            raise ValidationError("Circular not found")
        self._circulars.save_all(
            [c.with_changes(is_active=False) if c.id == circular_id else c for c in self._circulars.list_all()]
        )
        logger.info("Circular %s withdrawn by %s", circular_id, author.id)

    @staticmethod
    def _require_staff(user: User) -> None:
        if user.role not in _STAFF_ROLES:
            raise AuthorizationError("Only faculty or admin can manage circulars")
