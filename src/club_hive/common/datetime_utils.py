from __future__ import annotations

from datetime import date, datetime
from typing import List, Tuple


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string into a naive local datetime.

    Values with ``Z`` or an explicit offset are converted to server-local time;
    values without one are taken as local already.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now()


def month_windows(today: date, months: int) -> List[Tuple[datetime, datetime]]:
    """Return ``months`` consecutive [start, next_start) month windows ending with ``today``'s month."""
    windows: List[Tuple[datetime, datetime]] = []
    year, month = today.year, today.month
    for back in range(months - 1, -1, -1):
        y, m = year, month - back
        while m <= 0:
            m += 12
            y -= 1
        start = datetime(y, m, 1)
        end = datetime(y + 1, 1, 1) if m == 12 else datetime(y, m + 1, 1)
        windows.append((start, end))
    return windows


def format_event_time(value: datetime) -> str:
    """Short human format used in reminder texts, e.g. ``Mar 1, 6:30 PM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value.strftime('%b')} {value.day}, {hour}:{value.minute:02d} {suffix}"
