from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles. Role checks only drive which views are offered."""

    FACULTY = "faculty"
    STUDENT = "student"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class StandingLabel(str, Enum):
    """Three-tier classification used in reports and exports."""

    GOOD = "Good"
    WARNING = "Warning"
    CRITICAL = "Critical"


class ViewName(str, Enum):
    DASHBOARD = "dashboard"
    STUDENTS = "students"
    ATTENDANCE = "attendance"
    REPORTS = "reports"
    CIRCULARS = "circulars"
    SETTINGS = "settings"
    SUBJECTS = "subjects"
    MY_ATTENDANCE = "my-attendance"
    PERFORMANCE = "performance"


class CircularCategory(str, Enum):
    ACADEMIC = "academic"
    ADMINISTRATIVE = "administrative"
    EVENTS = "events"
    URGENT = "urgent"
    GENERAL = "general"


class CircularPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TargetAudience(str, Enum):
    ALL = "all"
    FACULTY = "faculty"
    STUDENTS = "students"
    SPECIFIC = "specific"
