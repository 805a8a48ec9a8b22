"""
Core services for the application.

This package contains the gestational age conversion, input validation,
result formatting and exam schedule logic. Nothing here performs I/O.
"""

from .calculator import GestationalCalculator
from .converter import (
    completed_months_breakdown,
    convert,
    days_to_weeks_and_days,
    due_date_from_lmp,
    due_date_from_ultrasound,
    exam_period_key,
    find_current_month,
    find_trimester,
    gestational_days_from_due_date,
    lmp_from_due_date,
    weeks_and_days_to_days,
)
from .result import GestationError, InputValidationError, Result
from .validation import validate_due_date, validate_gestational_age, validate_lmp

__all__ = [
    "GestationalCalculator",
    "GestationError",
    "InputValidationError",
    "Result",
    "completed_months_breakdown",
    "convert",
    "days_to_weeks_and_days",
    "due_date_from_lmp",
    "due_date_from_ultrasound",
    "exam_period_key",
    "find_current_month",
    "find_trimester",
    "gestational_days_from_due_date",
    "lmp_from_due_date",
    "validate_due_date",
    "validate_gestational_age",
    "validate_lmp",
    "weeks_and_days_to_days",
]
