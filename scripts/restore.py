from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.college_portal.college_portal.common.logging import get_logger, setup_logging
from src.college_portal.college_portal.container import build_store
from src.college_portal.college_portal.storage.manager import StorageManager

logger = get_logger("scripts.restore")


def main() -> None:
    parser = argparse.ArgumentParser(description="Restore portal data from a JSON backup.")
    parser.add_argument("backup", type=Path, help="file written by scripts/backup.py")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    storage = StorageManager(build_store(settings))

    if not storage.import_data(args.backup.read_text(encoding="utf-8")):
        raise SystemExit(f"Not a valid backup: {args.backup}")
    logger.info("Restored %s", args.backup)


if __name__ == "__main__":
    main()
