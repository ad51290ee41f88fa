"""
Expiry policy.

Pure functions for computing expiry timestamps and testing expiration,
plus the text form used to persist timestamps.
"""

import calendar
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def add_months(from_timestamp: datetime, months: int) -> datetime:
    """
    Add calendar months to a timestamp.

    When the target month is shorter than the source day, the day is
    clamped to the last day of the target month (Jan 31 + 1 month is
    Feb 28, or Feb 29 in a leap year). Time of day and tzinfo are kept.

    Args:
        from_timestamp: Starting point
        months: Number of months to add (may be negative)

    Returns:
        The shifted timestamp

    Raises:
        ValueError: If the result falls outside the supported year range
    """
    month_index = from_timestamp.month - 1 + months
    year = from_timestamp.year + month_index // 12
    month = month_index % 12 + 1
    try:
        day = min(from_timestamp.day, calendar.monthrange(year, month)[1])
        return from_timestamp.replace(year=year, month=month, day=day)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"{months} month(s) from {from_timestamp.isoformat()} is out of range") from exc


def is_expired(timestamp: datetime, now: datetime) -> bool:
    """
    Test whether an expiry timestamp has passed.

    A license expiring exactly at now counts as expired.
    """
    return timestamp <= now


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp in the persisted text form.

    The output is always UTC with microsecond precision, so text order
    matches chronological order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts the persisted form as well as any ISO-8601 string with an
    offset or a trailing Z. Naive values are taken as UTC.

    Raises:
        ValueError: If the text is not a timestamp
    """
    if not isinstance(text, str) or not text:
        raise ValueError(f"Invalid timestamp: {text!r}")
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    value = datetime.fromisoformat(normalized)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
