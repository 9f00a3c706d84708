"""Logging setup.

Configure the root logger once at startup, then get namespaced loggers with
``get_logger("attendance.repository")``.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> None:
    fmt = "%(asctime)s | %(levelname)-8s | %(name)-36s | %(message)s"
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    # Keep whatever handler is already installed.
    if not root.handlers:
        root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"college_portal.{name}")
