from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value) -> Optional[date]:
    """Like parse_iso_date, but returns None for anything unparseable.

    A trailing time part (``2024-03-01T10:00:00``) is ignored.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return parse_iso_date(value.strip()[:10])
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_iso() -> str:
    return now_local().strftime("%Y-%m-%d")


def timestamp_id(moment: datetime, taken=()) -> str:
    """Millisecond timestamp as an id, bumped past any value in ``taken``."""
    value = int(moment.timestamp() * 1000)
    while str(value) in taken:
        value += 1
    return str(value)
