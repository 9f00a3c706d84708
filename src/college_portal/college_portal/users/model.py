from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a portal account (faculty, admin or student).

    Plain data object; demo accounts come from the seed data.
    """

    id: str
    username: str
    email: str
    role: Role
    name: str
    department: Optional[str] = None
    employee_id: Optional[str] = None
    student_id: Optional[str] = None
    semester: Optional[int] = None
    course: Optional[str] = None
