from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Circular


class CircularRepository(Protocol):
    def list_all(self) -> Sequence[Circular]:
        raise NotImplementedError

    def get_by_id(self, circular_id: str) -> Optional[Circular]:
        raise NotImplementedError

    def save_all(self, circulars: Sequence[Circular]) -> None:
        raise NotImplementedError
