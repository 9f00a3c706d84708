from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from ..core.enums import CircularCategory, CircularPriority, TargetAudience


@dataclass(frozen=True)
class Circular:
    """Domain entity: an announcement posted by faculty/admin."""

    id: str
    title: str
    content: str
    category: CircularCategory
    priority: CircularPriority
    created_by: str
    created_at: str
    target_audience: TargetAudience = TargetAudience.ALL
    expires_at: Optional[str] = None
    is_active: bool = True
    attachments: tuple[str, ...] = field(default_factory=tuple)
    departments: tuple[str, ...] = field(default_factory=tuple)

    def expires_before(self, moment: datetime) -> bool:
        if not self.expires_at:
            return False
        try:
            expires = datetime.fromisoformat(self.expires_at.replace("Z", "+00:00"))
        except ValueError:
            return False
        if expires.tzinfo is not None and moment.tzinfo is None:
            moment = moment.astimezone()
        elif expires.tzinfo is None and moment.tzinfo is not None:
            expires = expires.astimezone()
        return expires < moment

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Circular":
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            category=CircularCategory(data.get("category", CircularCategory.GENERAL.value)),
            priority=CircularPriority(data.get("priority", CircularPriority.MEDIUM.value)),
            created_by=str(data.get("createdBy", "")),
            created_at=str(data.get("createdAt", "")),
            target_audience=TargetAudience(data.get("targetAudience", TargetAudience.ALL.value)),
            expires_at=data.get("expiresAt") or None,
            is_active=bool(data.get("isActive", True)),
            attachments=tuple(data.get("attachments") or ()),
            departments=tuple(data.get("departments") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category.value,
            "priority": self.priority.value,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "isActive": self.is_active,
            "targetAudience": self.target_audience.value,
        }
        if self.expires_at:
            out["expiresAt"] = self.expires_at
        if self.attachments:
            out["attachments"] = list(self.attachments)
        if self.departments:
            out["departments"] = list(self.departments)
        return out

    def with_changes(self, **changes) -> "Circular":
        return replace(self, **changes)
