import math
from datetime import datetime, timezone, tzinfo

UNKNOWN = "Unknown"
PLACEHOLDER = "—"

# Bucket sizes, largest first. Months and years use fixed day counts.
MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

TIME_AGO_BUCKETS = (
    (YEAR, "y"),
    (MONTH, "mo"),
    (WEEK, "w"),
    (DAY, "d"),
    (HOUR, "h"),
    (MINUTE, "m"),
)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC, which is how the store assigns them.
    Returns None for missing or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def time_ago(value: str | datetime | None, now: datetime | None = None) -> str:
    """
    Describe the age of a timestamp in its largest whole unit, e.g. "3d ago".

    Ages under a minute, and timestamps in the future, are "Just now".
    Missing or unparseable timestamps are "Unknown".
    """
    then = parse_timestamp(value)
    if then is None:
        return UNKNOWN

    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    seconds = math.floor((current - then).total_seconds())

    for size, suffix in TIME_AGO_BUCKETS:
        count = seconds // size
        if count > 0:
            return f"{count}{suffix} ago"
    return "Just now"


def format_date(value: str | datetime | None, tz: tzinfo = timezone.utc) -> str:
    """Format a timestamp as e.g. "Mar 7, 2025, 04:05 PM", or "—" if missing."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return PLACEHOLDER

    local = parsed.astimezone(tz)
    return f"{local:%b} {local.day}, {local.year}, {local:%I:%M %p}"
