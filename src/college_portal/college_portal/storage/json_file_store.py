from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from ..common.logging import get_logger
from ..core.exceptions import StorageError
from .store import KeyValueStore

logger = get_logger("storage.json_file")


class JsonFileStore(KeyValueStore):
    """All keys in one JSON document on disk.

    The file is re-read on every access, so edits made by another process
    (or by hand) show up on the next request.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self._path)
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        folder = self._path.parent
        try:
            folder.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=4)
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Failed to write store file %s: %s", self._path, e)
            raise StorageError(f"Cannot write {self._path}") from e

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
