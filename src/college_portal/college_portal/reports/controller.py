from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.http import attachment_disposition
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..container import Container
from .service import CsvFile

_STAFF_ROLES = {Role.FACULTY.value, Role.ADMIN.value}


def register(app: Flask, container: Container) -> None:
    def _render_forbidden() -> tuple[str, int]:
        current_user = {"name": session.get("name"), "role": session.get("role")}
        return render_template("403.html", current_user=current_user), 403

    def role_required(*roles: str):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "user_id" not in session:
                    flash("Please log in to continue.", "warning")
                    return redirect(url_for("login"))
                if session.get("role") not in roles:
                    return _render_forbidden()
                return view(*args, **kwargs)

            return wrapper

        return decorator

    staff_required = role_required(*_STAFF_ROLES)
    student_required = role_required(Role.STUDENT.value)

    def _send_csv(csv_file: CsvFile):
        return app.response_class(
            csv_file.content,
            mimetype="text/csv",
            headers={"Content-Disposition": attachment_disposition(csv_file.filename)},
        )

    def _report_args() -> dict:
        today = date.today()
        try:
            month = int(request.args.get("month") or today.month)
            year = int(request.args.get("year") or today.year)
        except ValueError:
            month, year = today.month, today.year
        return {
            "month": month,
            "year": year,
            "subject": request.args.get("subject", "all"),
            "course": request.args.get("course", "all"),
        }

    @app.route("/reports", endpoint="reports")
    @staff_required
    def reports():
        report = container.report_service.build_report(**_report_args())
        return render_template(
            "reports.html",
            report=report,
            courses=container.student_service.courses(),
            threshold=container.report_service.alert_threshold,
            active_page="reports",
        )

    @app.route("/reports/print", endpoint="reports_print")
    @staff_required
    def reports_print():
        report = container.report_service.build_report(**_report_args())
        return render_template("print/report.html", report=report, generated_on=date.today())

    @app.route("/reports.csv", endpoint="reports_csv")
    @staff_required
    def reports_csv():
        subject = request.args.get("subject", "all")
        month = request.args.get("month", "all")
        course = request.args.get("course", "all")
        students = container.student_service.list_students(course=course)
        return _send_csv(
            container.report_service.attendance_report_csv(
                students=students,
                subject=None if subject == "all" else subject,
                month=None if month == "all" else month,
                today=date.today(),
            )
        )

    @app.route("/me/attendance", endpoint="my_attendance")
    @student_required
    def my_attendance():
        try:
            user = container.auth_service.get_user(session["user_id"])
        except AuthenticationError as e:
            session.clear()
            flash(str(e), "warning")
            return redirect(url_for("login"))

        overview = container.report_service.student_overview(user.student_id or "")
        return render_template(
            "my_attendance.html",
            user=user,
            overview=overview,
            threshold=container.report_service.alert_threshold,
            active_page="my_attendance",
        )

    @app.route("/me/attendance.csv", endpoint="my_attendance_csv")
    @student_required
    def my_attendance_csv():
        user = container.auth_service.get_user(session["user_id"])
        return _send_csv(
            container.report_service.student_report_csv(student_id=user.student_id or "", today=date.today())
        )
