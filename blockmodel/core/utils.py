"""
Shared utility functions for block model fields.

The canonical date format is a pure format/parse function pair rather
than a shared formatter object. Both take the time zone explicitly and
fall back to the configured field time zone.
"""

import re
from datetime import date, datetime, timedelta, timezone, tzinfo

from dateutil.tz import resolve_imaginary

from blockmodel.core.config import get_field_timezone

# Canonical wire format: YYYY-MM-DD, zero padded, ASCII hyphens
CANONICAL_DATE_RE = re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)

# Values every zone can render: one day of headroom inside the datetime range
MIN_MILLIS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // _ONE_MILLISECOND
MAX_MILLIS = (datetime(9999, 12, 31, tzinfo=timezone.utc) - EPOCH) // _ONE_MILLISECOND - 1


def now_millis() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return datetime_to_millis(datetime.now(timezone.utc))


def millis_to_datetime(millis: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime in the given zone."""
    zone = tz or get_field_timezone()
    return (EPOCH + timedelta(milliseconds=millis)).astimezone(zone)


def datetime_to_millis(value: datetime | date, tz: tzinfo | None = None) -> int:
    """Convert a datetime (or date, taken as midnight) to epoch milliseconds.

    Naive values are interpreted in the given zone, defaulting to the
    configured field time zone. Wall times skipped by a DST jump move
    forward past the gap, so a day starting at 01:00 maps to 01:00.

    Raises:
        ValueError: If the value cannot be placed on the UTC timeline.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz or get_field_timezone())
    try:
        value = resolve_imaginary(value)
    except OverflowError as e:
        raise ValueError(f"{value} is outside the supported date range") from e
    return (value - EPOCH) // _ONE_MILLISECOND


def check_millis_range(millis: int) -> None:
    """Raise ValueError if millis cannot be rendered in every time zone."""
    if not MIN_MILLIS <= millis <= MAX_MILLIS:
        raise ValueError(f"{millis} is outside the supported date range")


def format_date_millis(millis: int, tz: tzinfo | None = None) -> str:
    """Format epoch milliseconds as a canonical YYYY-MM-DD string.

    Args:
        millis: Milliseconds since the Unix epoch.
        tz: Zone the calendar day is taken in.

    Returns:
        The canonical date string.
    """
    day = millis_to_datetime(millis, tz)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_string(text: str, tz: tzinfo | None = None) -> int:
    """Parse a canonical YYYY-MM-DD string into epoch milliseconds.

    The result is the start of that calendar day in the given zone.
    Out-of-range months and days are rejected rather than rolled over.

    Args:
        text: The date string to parse.
        tz: Zone the calendar day is taken in.

    Returns:
        Milliseconds since the Unix epoch.

    Raises:
        ValueError: If the text is not a canonical date string, or the
            day falls outside the supported range.
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected a date string, got {type(text).__name__}")

    match = CANONICAL_DATE_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"'{text}' does not match YYYY-MM-DD")

    try:
        day = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as e:
        raise ValueError(f"'{text}' is not a valid calendar date: {e}") from e

    millis = datetime_to_millis(day, tz)
    check_millis_range(millis)
    return millis
