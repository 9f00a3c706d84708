from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceEvent]:
        """All events in stored order (order matters for first-seen grouping)."""

        raise NotImplementedError

    def save_all(self, events: Sequence[AttendanceEvent]) -> None:
        """Replace the whole collection."""

        raise NotImplementedError
