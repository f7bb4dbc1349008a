"""Timestamp utilities."""

from datetime import datetime, timedelta
from typing import Optional


def now_iso(now: Optional[datetime] = None) -> str:
    """Local timestamp in ISO-8601 form without timezone, e.g. 2025-01-31T14:05:09.123456."""
    return (now or datetime.now()).isoformat()


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an upstream timestamp ("2025-01-31T10:00:00" or "2025-01-31 10:00:00").

    Returns None when the value is missing or unparseable.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace(" ", "T", 1))
    except ValueError:
        return None
    # Compare naive against naive
    return parsed.replace(tzinfo=None)


def is_within_last_days(value, days: int, now: Optional[datetime] = None) -> bool:
    """Check whether a timestamp falls within the last N days."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return False
    cutoff = (now or datetime.now()) - timedelta(days=days)
    return parsed > cutoff
