"""
Human-readable text for gestational results.

Zero-valued parts are omitted ("4 months and 2 days", not "4 months, 0 weeks
and 2 days") and every count agrees in number with its noun.
"""

from gestation.domain.models import GestationalResult, MonthBreakpoint
from gestation.domain.tables import TRIMESTER_DESCRIPTIONS, WEEK_MILESTONES


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "week") == "1 week"``; ``pluralize(2, "week") == "2 weeks"``."""
    if plural is None:
        plural = singular + "s"
    return f"{count} {singular if count == 1 else plural}"


def _join_parts(parts: list[str]) -> str:
    if len(parts) <= 2:
        return " and ".join(parts)
    return ", ".join(parts[:-1]) + " and " + parts[-1]


def format_weeks_and_days(weeks: int, days: int, short: bool = False) -> str:
    """Either "20w+3d" (short) or "20 weeks and 3 days"; days are dropped when zero."""
    if short:
        return f"{weeks}w" if days == 0 else f"{weeks}w+{days}d"

    if days == 0:
        return pluralize(weeks, "week")
    return f"{pluralize(weeks, 'week')} and {pluralize(days, 'day')}"


def format_month_range(month: MonthBreakpoint) -> str:
    """Week range a commercial month covers, e.g. "17w+5d to 22w+1d"."""
    start = format_weeks_and_days(month.start_week, month.start_day, short=True)
    end = format_weeks_and_days(month.end_week, month.end_day, short=True)
    return f"{start} to {end}"


def format_completed_months(months: int, weeks: int, days: int) -> str:
    """
    Completed months with the weeks and days on top.

    Examples:
        (4, 2, 1) -> "4 months, 2 weeks and 1 day"
        (4, 0, 2) -> "4 months and 2 days"
        (0, 3, 5) -> "3 weeks and 5 days"
        (5, 0, 0) -> "5 months"
    """
    parts = []
    if months > 0:
        parts.append(pluralize(months, "month"))
    if weeks > 0:
        parts.append(pluralize(weeks, "week"))
    if days > 0:
        parts.append(pluralize(days, "day"))

    if not parts:
        return "0 days"
    return _join_parts(parts)


def format_completed_months_compact(months: int, weeks: int, days: int) -> str:
    """Compact form, e.g. "4m + 2wk + 1d"."""
    parts = []
    if months > 0:
        parts.append(f"{months}m")
    if weeks > 0:
        parts.append(f"{weeks}wk")
    if days > 0:
        parts.append(f"{days}d")
    return " + ".join(parts) if parts else "0d"


def format_commercial_summary(result: GestationalResult) -> str:
    """Day count expressed in commercial months, e.g. "139 days = 4 months, 2 weeks and 1 day"."""
    months_text = format_completed_months(
        result.completed_months, result.extra_weeks, result.extra_days
    )
    return f"{result.total_days} days = {months_text}"


def ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def format_trimester(trimester: int) -> str:
    return f"{ordinal(trimester)} trimester"


def trimester_description(trimester: int) -> str:
    return TRIMESTER_DESCRIPTIONS.get(trimester, "")


def format_month(month: int) -> str:
    return f"{ordinal(month)} month"


def explain_month_progress(current_month: int, completed_months: int) -> str:
    """Spell out the difference between the month in progress and the months completed."""
    if completed_months == current_month:
        return f"Completed exactly {pluralize(completed_months, 'month')} of pregnancy."
    if current_month == 1:
        return "In the 1st month, 1 month not completed yet."
    return f"In the {format_month(current_month)}, but {current_month} months not completed yet."


def pregnancy_status(weeks: int) -> str:
    if weeks < 4:
        return "Early pregnancy"
    if weeks < 12:
        return "Organ formation period"
    if weeks < 14:
        return "End of the first trimester"
    if weeks < 20:
        return "Start of the second trimester"
    if weeks < 28:
        return "Accelerated growth period"
    if weeks < 37:
        return "Preparing for birth"
    if weeks < 40:
        return "Term pregnancy - the baby may be born at any moment"
    if weeks == 40:
        return "Estimated due date"
    return "Post-term pregnancy - see your doctor"


def week_milestone(weeks: int) -> tuple[str, str]:
    """
    Title and description of the latest milestone reached by ``weeks``.

    Before the first milestone (week 4) the first one is shown.
    """
    milestone_weeks = sorted(WEEK_MILESTONES)
    selected = milestone_weeks[0]
    for week in milestone_weeks:
        if weeks >= week:
            selected = week
    return WEEK_MILESTONES[selected]


def format_progress(percent: float, decimals: int = 0) -> str:
    return f"{percent:.{decimals}f}%"
