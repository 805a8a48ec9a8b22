"""
Input validation for the dating methods.

Validators never raise: they return a ValidationResult whose message is shown
to the user as is. ``today`` is a parameter so checks are reproducible in
tests; it defaults to the current date.
"""

from datetime import date

from gestation.domain.models import DateInput, ValidationResult
from gestation.services.date_arithmetic import at_midday, days_between, parse_flexible_date
from gestation.services.date_arithmetic import today as current_day

MAX_LMP_AGE_DAYS = 300
MAX_DUE_DATE_OVERDUE_DAYS = 20
MAX_DUE_DATE_AHEAD_DAYS = 300
MAX_WEEKS = 45
MAX_DAYS = 6

INVALID_DATE = "Invalid date"


def validate_lmp(lmp: DateInput | None, today: date | None = None) -> ValidationResult:
    """An LMP must be a real date, not in the future and at most 300 days ago."""
    parsed = parse_flexible_date(lmp)
    if parsed is None:
        return ValidationResult.fail(INVALID_DATE)

    reference = current_day() if today is None else at_midday(today)
    elapsed = days_between(reference, parsed)

    if elapsed < 0:
        return ValidationResult.fail("The last menstrual period cannot be in the future")
    if elapsed > MAX_LMP_AGE_DAYS:
        return ValidationResult.fail(
            f"The last menstrual period is too old (more than {MAX_LMP_AGE_DAYS} days)"
        )
    return ValidationResult.ok()


def validate_due_date(due_date: DateInput | None, today: date | None = None) -> ValidationResult:
    """A due date may be up to 20 days overdue and at most 300 days ahead."""
    parsed = parse_flexible_date(due_date)
    if parsed is None:
        return ValidationResult.fail(INVALID_DATE)

    reference = current_day() if today is None else at_midday(today)
    remaining = days_between(parsed, reference)

    if remaining < -MAX_DUE_DATE_OVERDUE_DAYS:
        return ValidationResult.fail(
            f"The due date passed more than {MAX_DUE_DATE_OVERDUE_DAYS} days ago"
        )
    if remaining > MAX_DUE_DATE_AHEAD_DAYS:
        return ValidationResult.fail(
            f"The due date is too far away (more than {MAX_DUE_DATE_AHEAD_DAYS} days)"
        )
    return ValidationResult.ok()


def validate_gestational_age(weeks: int, days: int = 0) -> ValidationResult:
    if weeks < 0 or weeks > MAX_WEEKS:
        return ValidationResult.fail(f"Weeks must be between 0 and {MAX_WEEKS}")
    if days < 0 or days > MAX_DAYS:
        return ValidationResult.fail(f"Days must be between 0 and {MAX_DAYS}")
    return ValidationResult.ok()
