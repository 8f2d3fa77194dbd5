from __future__ import annotations

from datetime import datetime, timezone

# (unit, seconds per unit, exclusive upper bound expressed in that unit)
_BANDS = (
    ("minute", 60, 60),
    ("hour", 60 * 60, 24),
    ("day", 24 * 60 * 60, 7),
    ("week", 7 * 24 * 60 * 60, 4),
    ("month", 30 * 24 * 60 * 60, 12),
)
_YEAR_SECONDS = 365 * 24 * 60 * 60


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''} ago"


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Return a coarse human phrase such as "3 days ago" for ``timestamp``.

    Naive datetimes are treated as UTC. Timestamps in the future read as
    "just now". Month and year counts never drop below one, so 28 days reads
    "1 month ago" rather than "0 months ago".
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - timestamp).total_seconds())
    if seconds < 60:
        return "just now"

    for unit, unit_seconds, limit in _BANDS:
        count = seconds // unit_seconds
        if count < limit:
            return _plural(max(count, 1), unit)

    return _plural(max(seconds // _YEAR_SECONDS, 1), "year")
