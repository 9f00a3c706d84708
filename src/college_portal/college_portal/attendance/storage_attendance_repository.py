from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..common.logging import get_logger
from ..core.enums import AttendanceStatus
from ..storage.manager import StorageManager
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = get_logger("attendance.repository")

_KNOWN_STATUSES = {s.value for s in AttendanceStatus}


class StorageAttendanceRepository(AttendanceRepository):
    """Attendance events kept under the ``attendanceRecords`` key.

    Until something has been saved, the seed events (if any) are served.
    """

    def __init__(self, storage: StorageManager, *, seed: Optional[Callable[[], Sequence[AttendanceEvent]]] = None):
        self._storage = storage
        self._seed = seed

    def list_all(self) -> Sequence[AttendanceEvent]:
        raw = self._storage.get_attendance_records()
        if not raw:
            return list(self._seed()) if self._seed else []

        events = [AttendanceEvent.from_dict(r) for r in raw if isinstance(r, dict)]
        unknown = [e for e in events if e.status not in _KNOWN_STATUSES]
        if unknown:
            # Kept as-is: they count toward totals but toward no status bucket.
            logger.warning(
                "%d attendance record(s) carry an unrecognized status, e.g. %r for %s on %s",
                len(unknown),
                unknown[0].status,
                unknown[0].student_id,
                unknown[0].date,
            )
        return events

    def save_all(self, events: Sequence[AttendanceEvent]) -> None:
        self._storage.save_attendance_records([e.to_dict() for e in events])
