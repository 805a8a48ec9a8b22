"""
Gestational age conversion.

Reconciles two calendars that do not line up: the obstetric 7-day week and the
nine "commercial" months people use when they say "five months pregnant".
Everything is derived from a single canonical value, the total number of
gestational days, through ``convert``. Callers must not recompute month or
trimester fields on their own; ``convert`` is what keeps ``current_month``,
``completed_months`` and ``trimester`` consistent with each other.

Month and trimester lookups are linear scans with ``<=`` comparisons; the
tables have nine and three rows.
"""

from datetime import date, datetime

import structlog

from gestation.domain.models import DateInput, GestationalResult
from gestation.domain.tables import (
    DAYS_PER_WEEK,
    EXAM_PERIOD_THRESHOLDS,
    FULL_TERM_DAYS,
    LAST_EXAM_PERIOD,
    MAX_DISPLAY_DAYS,
    MONTH_LIMITS,
    MONTH_TABLE,
    TRIMESTERS,
)
from gestation.services.date_arithmetic import (
    DateT,
    add_days,
    at_midday,
    days_between,
    parse_flexible_date,
    today,
)

logger = structlog.get_logger(__name__)


def days_to_weeks_and_days(total_days: int) -> tuple[int, int]:
    """Split a day count into completed weeks and the remaining days (0-6)."""
    return total_days // DAYS_PER_WEEK, total_days % DAYS_PER_WEEK


def weeks_and_days_to_days(weeks: int, days: int = 0) -> int:
    return weeks * DAYS_PER_WEEK + days


def find_current_month(total_days: int) -> int:
    """Month in progress (1-9). Past full term this stays at 9."""
    for month, limit in enumerate(MONTH_LIMITS, start=1):
        if total_days <= limit:
            return month
    return len(MONTH_LIMITS)


def find_trimester(total_days: int) -> int:
    """Trimester in progress (1-3). Past full term this stays at 3."""
    for trimester in TRIMESTERS:
        if total_days <= trimester.days_end:
            return trimester.number
    return TRIMESTERS[-1].number


def completed_months_breakdown(total_days: int) -> tuple[int, int, int]:
    """
    Months already finished plus the weeks and days since the last one ended.

    This is not ``find_current_month``: at 139 days a pregnancy is *in* month 5
    (days 125-155) but has only *completed* 4 months, with 15 days (2 weeks and
    1 day) on top. A month counts as completed only once its last day has
    passed, so 124 days is 3 months, 4 weeks and 3 days.

    Full term is the one exception: 280 days reads as exactly 9 months rather
    than 8 months, 4 weeks and 4 days.

    Returns:
        tuple[int, int, int]: (completed_months, extra_weeks, extra_days)
    """
    if total_days == FULL_TERM_DAYS:
        return len(MONTH_LIMITS), 0, 0

    completed_months = 0
    for month, limit in enumerate(MONTH_LIMITS, start=1):
        if total_days > limit:
            completed_months = month
        else:
            break

    base_days = MONTH_LIMITS[completed_months - 1] if completed_months > 0 else 0
    extra_weeks, extra_days = days_to_weeks_and_days(total_days - base_days)
    return completed_months, extra_weeks, extra_days


def convert(total_days: int) -> GestationalResult:
    """
    Build the full result for a gestational age in days.

    Out-of-range totals are clamped to [0, 300] rather than rejected. Rejecting
    bad user input is the validators' job.
    """
    clamped = min(max(total_days, 0), MAX_DISPLAY_DAYS)
    if clamped != total_days:
        logger.debug("total_days_clamped", requested=total_days, clamped=clamped)

    weeks, days_remainder = days_to_weeks_and_days(clamped)
    current_month = find_current_month(clamped)
    trimester = find_trimester(clamped)
    completed_months, extra_weeks, extra_days = completed_months_breakdown(clamped)
    progress = clamped / FULL_TERM_DAYS * 100

    return GestationalResult(
        total_days=clamped,
        weeks=weeks,
        days_remainder=days_remainder,
        current_month=current_month,
        completed_months=completed_months,
        extra_weeks=extra_weeks,
        extra_days=extra_days,
        trimester=trimester,
        trimester_color=TRIMESTERS[trimester - 1].color_tag,
        month_data=MONTH_TABLE[current_month - 1],
        progress_percent=min(100.0, max(0.0, progress)),
    )


# Due date projections (Naegele's rule: due date = LMP + 280 days)


def due_date_from_lmp(lmp: DateT) -> DateT:
    return add_days(lmp, FULL_TERM_DAYS)


def lmp_from_due_date(due_date: DateT) -> DateT:
    return add_days(due_date, -FULL_TERM_DAYS)


def due_date_from_ultrasound(exam_date: DateT, weeks: int, days: int = 0) -> DateT:
    """
    Project the due date from an ultrasound measurement.

    The gestational age measured on ``exam_date`` is taken as exact. From then
    on all day counting is anchored to the projected due date, the same way an
    LMP or a known due date is.
    """
    return add_days(exam_date, FULL_TERM_DAYS - weeks_and_days_to_days(weeks, days))


def gestational_days_from_due_date(due_date: date, reference_date: date | None = None) -> int:
    """Gestational age in days on ``reference_date`` (today when omitted)."""
    reference = today() if reference_date is None else at_midday(reference_date)
    return FULL_TERM_DAYS - days_between(at_midday(due_date), reference)


def estimated_due_date(total_days: int, reference_date: date | None = None) -> datetime:
    """Due date implied by being ``total_days`` along on ``reference_date``."""
    reference = today() if reference_date is None else at_midday(reference_date)
    return add_days(reference, FULL_TERM_DAYS - total_days)


def require_date(value: DateInput) -> datetime:
    """Parse a date that has already been validated; raises ValueError otherwise."""
    parsed = parse_flexible_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}")
    return parsed


def exam_period_key(weeks: int) -> str:
    """Exam schedule bucket for a gestational week. Contiguous and exhaustive for weeks >= 0."""
    for upper_week, key in EXAM_PERIOD_THRESHOLDS:
        if weeks <= upper_week:
            return key
    return LAST_EXAM_PERIOD
