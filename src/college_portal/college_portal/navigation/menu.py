"""Role -> menu mapping.

Which views a role is offered, and which Flask endpoint renders each view.
Offering a view is a UI convenience, not an access check.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role, ViewName


@dataclass(frozen=True)
class MenuItem:
    view: ViewName
    label: str
    endpoint: str


_ITEMS: dict[ViewName, MenuItem] = {
    ViewName.DASHBOARD: MenuItem(ViewName.DASHBOARD, "Dashboard", "dashboard"),
    ViewName.STUDENTS: MenuItem(ViewName.STUDENTS, "Students", "students"),
    ViewName.ATTENDANCE: MenuItem(ViewName.ATTENDANCE, "Mark Attendance", "attendance"),
    ViewName.REPORTS: MenuItem(ViewName.REPORTS, "Reports", "reports"),
    ViewName.CIRCULARS: MenuItem(ViewName.CIRCULARS, "Circulars", "circulars"),
    ViewName.SETTINGS: MenuItem(ViewName.SETTINGS, "Settings", "settings"),
    ViewName.SUBJECTS: MenuItem(ViewName.SUBJECTS, "My Subjects", "subjects"),
    ViewName.MY_ATTENDANCE: MenuItem(ViewName.MY_ATTENDANCE, "My Attendance", "my_attendance"),
    ViewName.PERFORMANCE: MenuItem(ViewName.PERFORMANCE, "Performance", "dashboard"),
}

_STAFF_MENU = (
    ViewName.DASHBOARD,
    ViewName.STUDENTS,
    ViewName.ATTENDANCE,
    ViewName.REPORTS,
    ViewName.CIRCULARS,
    ViewName.SETTINGS,
)

_STUDENT_MENU = (
    ViewName.DASHBOARD,
    ViewName.MY_ATTENDANCE,
    ViewName.PERFORMANCE,
    ViewName.CIRCULARS,
)

MENUS: dict[Role, tuple[ViewName, ...]] = {
    Role.FACULTY: _STAFF_MENU,
    Role.ADMIN: _STAFF_MENU,
    Role.STUDENT: _STUDENT_MENU,
}


def menu_for(role: Role) -> list[MenuItem]:
    return [_ITEMS[v] for v in MENUS[role]]


def resolve_view(role: Role, view: str) -> MenuItem:
    """Menu item for ``view``, falling back to the dashboard for unknown or unoffered views."""
    try:
        name = ViewName(view)
    except ValueError:
        return _ITEMS[ViewName.DASHBOARD]
    if name not in MENUS[role]:
        return _ITEMS[ViewName.DASHBOARD]
    return _ITEMS[name]
