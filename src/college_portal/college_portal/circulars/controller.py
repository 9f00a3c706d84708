from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from ..core.enums import CircularCategory, CircularPriority, Role, TargetAudience
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container

logger = get_logger("circulars.controller")

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
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return redirect(url_for("login"))

            if session.get("role") not in _STAFF_ROLES:
                current_user = {"name": session.get("name"), "role": session.get("role")}
                return render_template("403.html", current_user=current_user), 403

            return view(*args, **kwargs)

        return wrapper

    def _form_values() -> dict:
        return {
            "title": request.form.get("title", ""),
            "content": request.form.get("content", ""),
            "category": request.form.get("category", CircularCategory.GENERAL.value),
            "priority": request.form.get("priority", CircularPriority.MEDIUM.value),
            "target_audience": request.form.get("target_audience", TargetAudience.ALL.value),
            "departments": request.form.get("departments", "").split(","),
            "expires_at": request.form.get("expires_at") or None,
        }

    def _render_form(circular):
        return render_template(
            "circular_form.html",
            circular=circular,
            categories=list(CircularCategory),
            priorities=list(CircularPriority),
            audiences=list(TargetAudience),
            active_page="circulars",
        )

    @app.route("/circulars", endpoint="circulars")
    @login_required
    def circulars():
        user = container.auth_service.get_user(session["user_id"])
        filters = {
            "search": request.args.get("search", ""),
            "category": request.args.get("category", "all"),
            "priority": request.args.get("priority", "all"),
        }
        now = now_local()
        items = [
            (c, container.circular_service.is_expired(c, now))
            for c in container.circular_service.list_visible(user, **filters)
        ]
        return render_template(
            "circulars.html",
            items=items,
            filters=filters,
            categories=list(CircularCategory),
            priorities=list(CircularPriority),
            can_manage=session.get("role") in _STAFF_ROLES,
            active_page="circulars",
        )

    @app.route("/circulars/add", methods=["GET", "POST"], endpoint="add_circular")
    @staff_required
    def add_circular():
        if request.method == "POST":
            try:
                container.circular_service.create(
                    author=container.auth_service.get_user(session["user_id"]),
                    **_form_values(),
                )
                flash("Circular posted.", "success")
                return redirect(url_for("circulars"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Posting circular failed")
                flash("System error while posting circular", "danger")

        return _render_form(None)

    @app.route("/circulars/<circular_id>/edit", methods=["GET", "POST"], endpoint="edit_circular")
    @staff_required
    def edit_circular(circular_id: str):
        circular = container.circulars_repo.get_by_id(circular_id)
        if not circular:
            flash("Circular not found", "danger")
            return redirect(url_for("circulars"))

        if request.method == "POST":
            try:
                container.circular_service.update(
                    author=container.auth_service.get_user(session["user_id"]),
                    circular_id=circular_id,
                    changes=_form_values(),
                )
                flash("Circular updated.", "success")
                return redirect(url_for("circulars"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating circular %s failed", circular_id)
                flash("System error while updating circular", "danger")

        return _render_form(circular)

    @app.route("/circulars/<circular_id>/delete", methods=["POST"], endpoint="delete_circular")
    @staff_required
    def delete_circular(circular_id: str):
        try:
            container.circular_service.deactivate(
                author=container.auth_service.get_user(session["user_id"]),
                circular_id=circular_id,
            )
            flash("Circular removed.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Removing circular %s failed", circular_id)
            flash("System error while removing circular", "danger")

        return redirect(url_for("circulars"))
