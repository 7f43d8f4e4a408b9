from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

SECOND = 1
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def from_now(when: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Describe ``when`` relative to ``now``, e.g. "3 years ago" or "in 2 days"."""
    if when is None:
        return "date unknown"
    if now is None:
        now = datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    delta = (now - when).total_seconds()
    phrase = _humanize(abs(delta))
    return f"{phrase} ago" if delta >= 0 else f"in {phrase}"


def _humanize(seconds: float) -> str:
    if seconds < 45:
        return "a few seconds"
    if seconds < 90:
        return "a minute"
    if seconds < 45 * MINUTE:
        return f"{round(seconds / MINUTE)} minutes"
    if seconds < 90 * MINUTE:
        return "an hour"
    if seconds < 22 * HOUR:
        return f"{round(seconds / HOUR)} hours"
    if seconds < 36 * HOUR:
        return "a day"
    days = seconds / DAY
    if days < 26:
        return f"{round(days)} days"
    if days < 46:
        return "a month"
    if days < 320:
        return f"{round(days / 30.4)} months"
    if days < 548:
        return "a year"
    return f"{round(days / 365.25)} years"
