from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, session

from config import get_settings_module

from .common.logging import get_logger, setup_logging
from .container import build_container
from .core.enums import Role
from .navigation.menu import menu_for
from .storage.store import KeyValueStore
from .attendance.controller import register as register_attendance
from .circulars.controller import register as register_circulars
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = get_logger("main")


def create_app(settings_module: Optional[str] = None, *, store: Optional[KeyValueStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "Starting portal: settings=%s storage=%s",
        settings_module,
        getattr(settings, "STORAGE_BACKEND", "memory"),
    )

    container = build_container(settings, store=store)

    @app.context_processor
    def inject_menu():
        role = session.get("role")
        if not role:
            return {"menu": []}
        return {"menu": menu_for(Role(role)), "current_name": session.get("name"), "current_role": role}

    register_users(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_reports(app, container)
    register_circulars(app, container)
    register_settings(app, container)

    return app
