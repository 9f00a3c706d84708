from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.logging import get_logger
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from ..navigation.menu import resolve_view

logger = get_logger("users.controller")


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            role = request.form.get("role", Role.FACULTY.value)

            try:
                user = container.auth_service.authenticate(username, password, role)

                session.clear()
                session["user_id"] = user.id
                session["name"] = user.name
                session["role"] = user.role.value

                logger.info("User %s logged in as %s", user.username, user.role.value)
                flash(f"Welcome, {user.name}!", "success")
                return redirect(url_for("dashboard"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error during login: {e}", "danger")
                else:
                    flash("System error during login", "danger")

        return render_template("login.html", roles=list(Role))

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/view/<name>", endpoint="view")
    @login_required
    def view(name: str):
        item = resolve_view(Role(session["role"]), name)
        return redirect(url_for(item.endpoint))
