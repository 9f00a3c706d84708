from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local, try_parse_iso_date
from ..core.constants import (
    ALL_MONTHS,
    ALL_SUBJECTS,
    DEFAULT_ALERT_THRESHOLD,
    GOOD_STANDING_MIN,
    LATE_WEIGHT,
    WARNING_STANDING_MIN,
)
from ..core.enums import AttendanceStatus, StandingLabel
from .model import AttendanceEvent, AttendanceStats, MonthlyTrend


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (87.5 -> 88)."""
    return int(math.floor(value + 0.5))


def weighted_percentage(*, present: int, late: int, total: int) -> int:
    """A late mark counts as half a present one."""
    effective_present = present + late * LATE_WEIGHT
    return round_half_up((effective_present / total) * 100)


def standing_label(percentage: int) -> StandingLabel:
    if percentage >= GOOD_STANDING_MIN:
        return StandingLabel.GOOD
    if percentage >= WARNING_STANDING_MIN:
        return StandingLabel.WARNING
    return StandingLabel.CRITICAL


_COUNTED_STATUSES = tuple(s.value for s in AttendanceStatus)


def _in_month(event: AttendanceEvent, month: int, year: int) -> bool:
    d = try_parse_iso_date(event.date)
    return d is not None and d.month == month and d.year == year


def _distinct_student_ids(events: Iterable[AttendanceEvent]) -> list[str]:
    return list(dict.fromkeys(e.student_id for e in events))


class StatsEngine:
    """Attendance statistics over an in-memory sequence of events.

    Pure and stateless: every call gets its own events and returns freshly
    built results. Nothing here raises on odd input. Duplicated natural keys
    are counted twice, and statuses outside present/late/absent count toward
    ``total_classes`` without landing in any bucket.
    """

    def compute_student_stats(
        self,
        student_id: str,
        events: Sequence[AttendanceEvent],
        subject: Optional[str] = None,
        month: Optional[int | str] = None,
        year: Optional[int] = None,
    ) -> Optional[AttendanceStats]:
        filtered = [e for e in events if e.student_id == student_id]

        if subject:
            filtered = [e for e in filtered if e.subject == subject]

        if month and year:
            try:
                month_no, year_no = int(month), int(year)
            except (TypeError, ValueError):
                filtered = []
            else:
                filtered = [e for e in filtered if _in_month(e, month_no, year_no)]

        if not filtered:
            return None

        total = len(filtered)
        present = sum(1 for e in filtered if e.status == AttendanceStatus.PRESENT.value)
        late = sum(1 for e in filtered if e.status == AttendanceStatus.LATE.value)
        absent = sum(1 for e in filtered if e.status == AttendanceStatus.ABSENT.value)

        return AttendanceStats(
            student_id=student_id,
            student_name=filtered[0].student_name,
            total_classes=total,
            present_classes=present,
            late_classes=late,
            absent_classes=absent,
            percentage=weighted_percentage(present=present, late=late, total=total),
            subject=subject or ALL_SUBJECTS,
            month=str(month) if month else ALL_MONTHS,
            year=year or now_local().year,
        )

    def compute_class_average(self, events: Sequence[AttendanceEvent], subject: Optional[str] = None) -> int:
        stats = [
            s
            for s in (self.compute_student_stats(sid, events, subject) for sid in _distinct_student_ids(events))
            if s is not None
        ]
        if not stats:
            return 0
        return round_half_up(sum(s.percentage for s in stats) / len(stats))

    def get_attendance_threshold_alerts(
        self,
        events: Sequence[AttendanceEvent],
        threshold: int = DEFAULT_ALERT_THRESHOLD,
    ) -> list[AttendanceStats]:
        alerts: list[AttendanceStats] = []
        for sid in _distinct_student_ids(events):
            stats = self.compute_student_stats(sid, events)
            if stats and stats.percentage < threshold:
                alerts.append(stats)

        # sorted() is stable, ties keep first-seen order.
        return sorted(alerts, key=lambda s: s.percentage)

    def get_monthly_trends(
        self,
        events: Sequence[AttendanceEvent],
        student_id: str,
        *,
        chronological: bool = False,
    ) -> list[MonthlyTrend]:
        """One summary per ``YYYY-MM`` the student has marks in.

        Months come back in the order they are first seen in ``events``
        unless ``chronological`` is set. Events whose date cannot be parsed
        are skipped.
        """

        buckets: dict[str, dict[str, int]] = {}
        for e in events:
            if e.student_id != student_id:
                continue
            d = try_parse_iso_date(e.date)
            if d is None:
                continue

            key = f"{d.year}-{d.month:02d}"
            b = buckets.get(key)
            if b is None:
                b = {"total": 0, "present": 0, "late": 0, "absent": 0}
                buckets[key] = b

            b["total"] += 1
            if e.status in _COUNTED_STATUSES:
                b[e.status] += 1

        keys = sorted(buckets) if chronological else list(buckets)
        return [
            MonthlyTrend(
                month=k,
                total=buckets[k]["total"],
                present=buckets[k]["present"],
                late=buckets[k]["late"],
                absent=buckets[k]["absent"],
                percentage=weighted_percentage(
                    present=buckets[k]["present"],
                    late=buckets[k]["late"],
                    total=buckets[k]["total"],
                ),
            )
            for k in keys
        ]
