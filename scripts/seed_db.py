"""Write the demo roster, attendance and circulars into the configured store.

Existing data under the same keys is overwritten.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.college_portal.college_portal.common.logging import get_logger, setup_logging
from src.college_portal.college_portal.container import build_store
from src.college_portal.college_portal.data.mock_data import MOCK_STUDENTS, mock_attendance, mock_circulars
from src.college_portal.college_portal.storage.manager import StorageManager

logger = get_logger("scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    storage = StorageManager(build_store(settings))

    storage.save_students([s.to_dict() for s in MOCK_STUDENTS])
    storage.save_attendance_records([e.to_dict() for e in mock_attendance()])
    storage.save_circulars([c.to_dict() for c in mock_circulars()])

    logger.info("Seeded %s store with demo data", getattr(settings, "STORAGE_BACKEND", "memory"))


if __name__ == "__main__":
    main()
