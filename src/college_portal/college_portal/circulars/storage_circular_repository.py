from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..common.logging import get_logger
from ..storage.manager import StorageManager
from .model import Circular
from .repository import CircularRepository

logger = get_logger("circulars.repository")


class StorageCircularRepository(CircularRepository):
    def __init__(self, storage: StorageManager, *, seed: Optional[Callable[[], Sequence[Circular]]] = None):
        self._storage = storage
        self._seed = seed

    def list_all(self) -> Sequence[Circular]:
        raw = self._storage.get_circulars()
        if not raw:
            return list(self._seed()) if self._seed else []

        out: list[Circular] = []
        for r in raw:
            try:
                out.append(Circular.from_dict(r))
            except (AttributeError, ValueError) as e:
                logger.warning("Skipping malformed circular %r: %s", r.get("id") if isinstance(r, dict) else r, e)
        return out

    def get_by_id(self, circular_id: str) -> Optional[Circular]:
        return next((c for c in self.list_all() if c.id == circular_id), None)

    def save_all(self, circulars: Sequence[Circular]) -> None:
        self._storage.save_circulars([c.to_dict() for c in circulars])
