from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import now_local, today_iso
from ..common.logging import get_logger
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = get_logger("attendance.controller")

_STAFF_ROLES = {Role.FACULTY.value, Role.ADMIN.value}


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def staff_required(view):
        """Faculty and admin only: marking attendance changes shared records."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return redirect(url_for("login"))

            if session.get("role") not in _STAFF_ROLES:
                current_user = {"name": session.get("name"), "role": session.get("role")}
                return render_template("403.html", current_user=current_user), 403

            return view(*args, **kwargs)

        return wrapper

    def _current_user():
        return container.auth_service.get_user(session["user_id"])

    def _session_args(source) -> tuple[str, str, int]:
        subjects = container.subjects_repo.list_all()
        day = source.get("date") or today_iso()
        subject = source.get("subject") or (subjects[0].name if subjects else "")
        try:
            period = int(source.get("period") or 1)
        except ValueError:
            period = 1
        return day, subject, period

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            user = _current_user()
        except AuthenticationError as e:
            session.clear()
            flash(str(e), "warning")
            return redirect(url_for("login"))

        if user.role == Role.STUDENT:
            overview = container.report_service.student_overview(user.student_id or "")
            return render_template(
                "dashboard.html",
                user=user,
                overview=overview,
                threshold=container.report_service.alert_threshold,
                active_page="dashboard",
            )

        students = container.student_service.active_students()
        today = container.attendance_service.today_summary(today=date.today(), total_students=len(students))
        return render_template(
            "dashboard.html",
            user=user,
            today=today,
            class_average=container.report_service.class_average(),
            alerts=container.report_service.low_attendance_alerts(),
            threshold=container.report_service.alert_threshold,
            active_page="dashboard",
        )

    @app.route("/attendance", methods=["GET", "POST"], endpoint="attendance")
    @staff_required
    def attendance():
        students = container.student_service.active_students()

        if request.method == "POST":
            day, subject, period = _session_args(request.form)
            bulk = request.form.get("mark_all")
            if bulk:
                try:
                    status = AttendanceStatus(bulk)
                    marks = container.attendance_service.mark_all(students, status)
                except ValueError:
                    marks = {}
            else:
                marks = {
                    s.student_id: request.form.get(f"status_{s.student_id}")
                    for s in students
                    if request.form.get(f"status_{s.student_id}")
                }

            try:
                saved = container.attendance_service.mark_session(
                    date=day,
                    subject=subject,
                    period=period,
                    marks=marks,
                    faculty=_current_user(),
                    now=now_local(),
                )
                flash(f"Attendance saved for {len(saved)} students.", "success")
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Saving attendance failed")
                flash("System error while saving attendance", "danger")

            return redirect(url_for("attendance", date=day, subject=subject, period=period))

        day, subject, period = _session_args(request.args)
        marks = container.attendance_service.session_marks(date=day, subject=subject, period=period)
        return render_template(
            "attendance.html",
            students=students,
            subjects=container.subjects_repo.list_all(),
            statuses=list(AttendanceStatus),
            marks=marks,
            summary=container.attendance_service.session_summary(marks, students),
            date=day,
            subject=subject,
            period=period,
            active_page="attendance",
        )

    @app.route("/attendance/sheet", endpoint="attendance_sheet")
    @staff_required
    def attendance_sheet():
        day, subject, period = _session_args(request.args)
        students = container.student_service.active_students()
        marks = container.attendance_service.session_marks(date=day, subject=subject, period=period)
        return render_template(
            "print/sheet.html",
            students=students,
            marks=marks,
            summary=container.attendance_service.session_summary(marks, students),
            date=day,
            subject=subject,
            period=period,
            faculty=session.get("name"),
        )
