"""
Day-level date arithmetic.

Every date handled by the calculator is a naive datetime pinned to midday.
Working at 12:00 keeps day differences whole even when a daylight-saving
shift lands between the two dates.
"""

from datetime import date, datetime, time, timedelta
from typing import TypeVar

import structlog

from gestation.domain.models import DateInput

logger = structlog.get_logger(__name__)

MIDDAY = time(12, 0)
SECONDS_PER_DAY = 24 * 60 * 60

ISO_FORMAT = "%Y-%m-%d"
DISPLAY_FORMAT = "%d/%m/%Y"

DateT = TypeVar("DateT", bound=date)


def at_midday(value: date) -> datetime:
    """Pin a calendar date to 12:00."""
    return datetime.combine(value, MIDDAY)


def as_datetime(value: date) -> datetime:
    """Datetimes pass through; plain dates are pinned to midday."""
    if isinstance(value, datetime):
        return value
    return at_midday(value)


def today() -> datetime:
    """Current local date at midday. The only place the wall clock is read."""
    return at_midday(date.today())


def parse_flexible_date(value: DateInput | None) -> datetime | None:
    """
    Parse a user supplied date.

    Accepts ISO ``YYYY-MM-DD`` (what a date picker sends), ``DD/MM/YYYY`` (what
    people type), a ``date`` or a ``datetime``; the time of day is always
    replaced by midday. Returns None for anything else, including impossible
    dates such as 31/02/2026.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return at_midday(value.date())

    if isinstance(value, date):
        return at_midday(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if "-" in text:
        fmt = ISO_FORMAT
    elif text.count("/") == 2:
        fmt = DISPLAY_FORMAT
    else:
        logger.debug("unrecognized_date_format", value=text)
        return None

    try:
        parsed = datetime.strptime(text, fmt)
    except ValueError:
        logger.debug("unparseable_date", value=text, format=fmt)
        return None

    return at_midday(parsed.date())


def add_days(value: DateT, days: int) -> DateT:
    """Calendar-aware addition; month and year rollover included. ``days`` may be negative."""
    return value + timedelta(days=days)


def days_between(later: date, earlier: date) -> int:
    """Whole days from ``earlier`` to ``later``, floored. Negative when ``later`` is earlier."""
    later, earlier = as_datetime(later), as_datetime(earlier)
    return int((later - earlier).total_seconds() // SECONDS_PER_DAY)


def format_date(value: date) -> str:
    """DD/MM/YYYY, the format used throughout the interface."""
    return value.strftime(DISPLAY_FORMAT)
