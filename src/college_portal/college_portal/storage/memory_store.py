from __future__ import annotations

import json
from typing import Any, Optional

from .store import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Process-local store.

    Values are kept in their serialised form so callers never share mutable
    state with the store, the same as a real backend.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
