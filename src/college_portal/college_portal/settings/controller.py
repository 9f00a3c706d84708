from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import today_iso
from ..common.http import attachment_disposition
from ..common.logging import get_logger
from ..core.enums import Role
from ..core.exceptions import StorageError
from ..container import Container

logger = get_logger("settings.controller")

_STAFF_ROLES = {Role.FACULTY.value, Role.ADMIN.value}


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

    @app.route("/settings", endpoint="settings")
    @staff_required
    def settings():
        counts = {
            "students": len(container.students_repo.list_all()),
            "attendance": len(container.attendance_service.load_records()),
            "circulars": len(container.circulars_repo.list_all()),
        }
        return render_template(
            "settings.html",
            counts=counts,
            threshold=container.report_service.alert_threshold,
            active_page="settings",
        )

    @app.route("/settings/backup.json", endpoint="backup")
    @staff_required
    def backup():
        payload = container.storage.export_data()
        return app.response_class(
            payload.encode("utf-8"),
            mimetype="application/json",
            headers={"Content-Disposition": attachment_disposition(f"attendance_backup_{today_iso()}.json")},
        )

    @app.route("/settings/restore", methods=["POST"], endpoint="restore")
    @staff_required
    def restore():
        upload = request.files.get("backup")
        if upload is None or not upload.filename:
            flash("Choose a backup file to restore.", "warning")
            return redirect(url_for("settings"))

        try:
            ok = container.storage.import_data(upload.read().decode("utf-8-sig", errors="replace"))
        except StorageError:
            logger.exception("Restoring backup failed")
            flash("Could not write the restored data", "danger")
            return redirect(url_for("settings"))

        if ok:
            flash("Backup restored.", "success")
        else:
            flash("The file is not a valid backup.", "danger")
        return redirect(url_for("settings"))

    @app.route("/subjects", endpoint="subjects")
    @staff_required
    def subjects():
        return render_template(
            "subjects.html",
            subjects=container.subjects_repo.list_all(),
            in_use=container.report_service.subjects_in_use(),
            active_page="subjects",
        )
