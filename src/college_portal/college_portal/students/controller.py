from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.http import attachment_disposition
from ..common.logging import get_logger
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.service import ReportService

logger = get_logger("students.controller")

_STAFF_ROLES = {Role.FACULTY.value, Role.ADMIN.value}

_FORM_FIELDS = (
    "name",
    "email",
    "course",
    "semester",
    "department",
    "roll_number",
    "phone_number",
    "date_of_admission",
)


def register(app: Flask, container: Container) -> None:
    def staff_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login"))

            if session.get("role") not in _STAFF_ROLES:
                current_user = {"name": session.get("name"), "role": session.get("role")}
                return render_template("403.html", current_user=current_user), 403

            return view(*args, **kwargs)

        return wrapper

    def _form_values() -> dict:
        return {f: request.form.get(f, "").strip() for f in _FORM_FIELDS}

    def _filters() -> dict:
        return {
            "search": request.args.get("search", ""),
            "course": request.args.get("course", "all"),
            "semester": request.args.get("semester", "all"),
        }

    @app.route("/students", endpoint="students")
    @staff_required
    def students():
        filters = _filters()
        return render_template(
            "students.html",
            students=container.student_service.list_students(**filters),
            courses=container.student_service.courses(),
            semesters=container.student_service.semesters(),
            filters=filters,
            active_page="students",
        )

    @app.route("/students.csv", endpoint="students_csv")
    @staff_required
    def students_csv():
        csv_file = ReportService.roster_csv(
            container.student_service.list_students(**_filters()),
            today=date.today(),
        )
        return app.response_class(
            csv_file.content,
            mimetype="text/csv",
            headers={"Content-Disposition": attachment_disposition(csv_file.filename)},
        )

    @app.route("/students/add", methods=["GET", "POST"], endpoint="add_student")
    @staff_required
    def add_student():
        if request.method == "POST":
            values = _form_values()
            try:
                student = container.student_service.add_student(
                    name=values["name"],
                    course=values["course"],
                    semester=values["semester"] or 1,
                    email=values["email"],
                    department=values["department"],
                    roll_number=values["roll_number"],
                    phone_number=values["phone_number"],
                    date_of_admission=values["date_of_admission"] or None,
                    student_id=request.form.get("student_id", ""),
                )
                flash(f"Student {student.name} added.", "success")
                return redirect(url_for("students"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Adding student failed")
                flash("System error while adding student", "danger")

        return render_template("student_form.html", student=None, active_page="students")

    @app.route("/students/<record_id>/edit", methods=["GET", "POST"], endpoint="edit_student")
    @staff_required
    def edit_student(record_id: str):
        try:
            student = container.student_service.get(record_id)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("students"))

        if request.method == "POST":
            values = {k: v for k, v in _form_values().items() if k in request.form}
            try:
                container.student_service.update_student(record_id, values)
                flash("Student updated.", "success")
                return redirect(url_for("students"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating student %s failed", record_id)
                flash("System error while updating student", "danger")

        return render_template("student_form.html", student=student, active_page="students")

    @app.route("/students/<record_id>/delete", methods=["POST"], endpoint="delete_student")
    @staff_required
    def delete_student(record_id: str):
        try:
            container.student_service.deactivate_student(record_id)
            flash("Student removed.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Removing student %s failed", record_id)
            flash("System error while removing student", "danger")

        return redirect(url_for("students"))
