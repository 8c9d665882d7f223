"""Timestamp helpers.

All timestamps are stored as naive UTC datetimes so that SQLite and
PostgreSQL compare them the same way.
"""

from datetime import datetime, time, timezone
from typing import Optional

def now_utc() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)

def ensure_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)

def start_of_today() -> datetime:
    """Midnight of the current UTC day, naive."""
    return datetime.combine(now_utc().date(), time.min)
