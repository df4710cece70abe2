"""
Datetime utilities.

Timestamps are stored as naive datetimes in the restaurant's local timezone so
that "today" means the same thing to the kitchen board, the reports and the
database.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from .config import get_active_config
from .validation import ValidationError


def utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def business_tz() -> ZoneInfo:
    return ZoneInfo(get_active_config().business_timezone)


def local_now() -> datetime:
    """Current wall-clock time in the business timezone, without tzinfo."""
    return utcnow().astimezone(business_tz()).replace(tzinfo=None)


def day_bounds(day: date | None = None) -> tuple[datetime, datetime]:
    """Return the [start, end) interval covering one local day (today by default)."""
    day = day or local_now().date()
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def parse_iso_datetime(value: str | None, field: str, *, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO-8601 string coming from a query string.

    Aware values (e.g. JavaScript's toISOString() output) are converted to
    local time. A bare date is widened to the end of that day when
    `end_of_day` is set so that inclusive ranges keep the whole last day.
    """
    if not value:
        raise ValidationError(f"{field} is required")

    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be an ISO date") from exc

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(business_tz()).replace(tzinfo=None)
    elif end_of_day and "T" not in value and " " not in value.strip():
        parsed = datetime.combine(parsed.date(), time.max)
    return parsed


def parse_date_range(start: str | None, end: str | None) -> tuple[datetime, datetime]:
    start_dt = parse_iso_datetime(start, "startDate")
    end_dt = parse_iso_datetime(end, "endDate", end_of_day=True)
    if end_dt < start_dt:
        raise ValidationError("endDate must not be before startDate")
    return start_dt, end_dt


def hour_label(hour: int) -> str:
    """12-hour label used by the report screens ("12am", "1pm", ...)."""
    suffix = "am" if hour < 12 else "pm"
    display = hour % 12 or 12
    return f"{display}{suffix}"
