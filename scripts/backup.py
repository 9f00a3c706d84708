"""Backup portal data.

Writes ``StorageManager.export_data()`` to ``backups/`` as a timestamped JSON
file; ``scripts/restore.py`` reads it back.
"""

from __future__ import annotations

import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.college_portal.college_portal.common.logging import get_logger, setup_logging
from src.college_portal.college_portal.container import build_store
from src.college_portal.college_portal.storage.manager import StorageManager

logger = get_logger("scripts.backup")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    storage = StorageManager(build_store(settings))

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_backup_{ts}.json"
    out_file.write_text(storage.export_data(), encoding="utf-8")
    logger.info("Backup created: %s", out_file)


if __name__ == "__main__":
    main()
