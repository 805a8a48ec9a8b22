"""
Input adapter: every dating method funnels into ``convert``.

LMP, due date and ultrasound entries are three ways of arriving at the same
canonical due date. Once the due date is known the gestational age in days is
always ``280 - days_until(due_date)``, and that day count is what ``convert``
turns into the result. A raw weeks/days pair skips the due date step.

The calculator keeps no state between calls; the caller owns the current
inputs and re-renders from the returned report.
"""

from datetime import date, datetime

import structlog

from gestation.domain.models import (
    CalculationInput,
    CalculationReport,
    DateInput,
    DatingMethod,
    DueDateInput,
    GestationalAgeInput,
    LMPInput,
    UltrasoundInput,
)
from gestation.services.converter import (
    convert,
    due_date_from_lmp,
    due_date_from_ultrasound,
    estimated_due_date,
    exam_period_key,
    gestational_days_from_due_date,
    lmp_from_due_date,
    require_date,
    weeks_and_days_to_days,
)
from gestation.services.date_arithmetic import at_midday, parse_flexible_date, today
from gestation.services.result import InputValidationError, Result
from gestation.services.validation import (
    INVALID_DATE,
    validate_due_date,
    validate_gestational_age,
    validate_lmp,
)

logger = structlog.get_logger(__name__)

CalculationResult = Result[CalculationReport, InputValidationError]

MISSING_LMP = "Please enter the date of the last menstrual period."
MISSING_DUE_DATE = "Please enter the estimated due date."
MISSING_EXAM_DATE = "Please enter the date of the exam."


def _is_blank(value: DateInput | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class GestationalCalculator:
    """
    Turns user input into a CalculationReport.

    Validation failures come back as ``Result.err`` with the user-facing
    message; they are expected and never raised.
    """

    def __init__(self) -> None:
        self.logger = logger.bind(component="gestational_calculator")

    def calculate(
        self, payload: CalculationInput, reference_date: date | None = None
    ) -> CalculationResult:
        """Dispatch on the input type."""
        if isinstance(payload, GestationalAgeInput):
            return self.from_weeks_and_days(payload.weeks, payload.days, reference_date)
        if isinstance(payload, LMPInput):
            return self.from_lmp(payload.lmp, reference_date)
        if isinstance(payload, DueDateInput):
            return self.from_due_date(payload.due_date, reference_date)
        if isinstance(payload, UltrasoundInput):
            return self.from_ultrasound(
                payload.exam_date, payload.weeks, payload.days, reference_date
            )
        raise TypeError(f"Unsupported calculation input: {type(payload).__name__}")

    def from_weeks_and_days(
        self, weeks: int, days: int = 0, reference_date: date | None = None
    ) -> CalculationResult:
        validation = validate_gestational_age(weeks, days)
        if not validation.valid:
            return self._reject(DatingMethod.DIRECT, validation.message)

        reference = self._reference(reference_date)
        result = convert(weeks_and_days_to_days(weeks, days))
        due_date = estimated_due_date(result.total_days, reference)
        return self._report(DatingMethod.DIRECT, result.total_days, due_date, reference)

    def from_lmp(
        self, lmp: DateInput | None, reference_date: date | None = None
    ) -> CalculationResult:
        if _is_blank(lmp):
            return self._reject(DatingMethod.LMP, MISSING_LMP)

        reference = self._reference(reference_date)
        validation = validate_lmp(lmp, reference)
        if not validation.valid:
            return self._reject(DatingMethod.LMP, validation.message)

        due_date = due_date_from_lmp(require_date(lmp))  # type: ignore[arg-type]
        return self._from_due_date(DatingMethod.LMP, due_date, reference)

    def from_due_date(
        self, due_date: DateInput | None, reference_date: date | None = None
    ) -> CalculationResult:
        if _is_blank(due_date):
            return self._reject(DatingMethod.DUE_DATE, MISSING_DUE_DATE)

        reference = self._reference(reference_date)
        validation = validate_due_date(due_date, reference)
        if not validation.valid:
            return self._reject(DatingMethod.DUE_DATE, validation.message)

        return self._from_due_date(
            DatingMethod.DUE_DATE, require_date(due_date), reference  # type: ignore[arg-type]
        )

    def from_ultrasound(
        self,
        exam_date: DateInput | None,
        weeks: int,
        days: int = 0,
        reference_date: date | None = None,
    ) -> CalculationResult:
        if _is_blank(exam_date):
            return self._reject(DatingMethod.ULTRASOUND, MISSING_EXAM_DATE)

        parsed_exam_date = parse_flexible_date(exam_date)
        if parsed_exam_date is None:
            return self._reject(DatingMethod.ULTRASOUND, INVALID_DATE)

        validation = validate_gestational_age(weeks, days)
        if not validation.valid:
            return self._reject(DatingMethod.ULTRASOUND, validation.message)

        reference = self._reference(reference_date)
        due_date = due_date_from_ultrasound(parsed_exam_date, weeks, days)
        return self._from_due_date(DatingMethod.ULTRASOUND, due_date, reference)

    def _from_due_date(
        self, method: DatingMethod, due_date: datetime, reference: datetime
    ) -> CalculationResult:
        total_days = gestational_days_from_due_date(due_date, reference)
        return self._report(method, total_days, due_date, reference)

    def _report(
        self, method: DatingMethod, total_days: int, due_date: datetime, reference: datetime
    ) -> CalculationResult:
        result = convert(total_days)
        report = CalculationReport(
            method=method,
            result=result,
            reference_date=reference,
            due_date=due_date,
            lmp=lmp_from_due_date(due_date),
            exam_period_key=exam_period_key(result.weeks),
        )
        self.logger.info(
            "calculation_completed",
            method=method.value,
            total_days=result.total_days,
            weeks=result.weeks,
            days=result.days_remainder,
            current_month=result.current_month,
            trimester=result.trimester,
        )
        return Result.ok(report)

    def _reject(self, method: DatingMethod, message: str) -> CalculationResult:
        self.logger.info("calculation_rejected", method=method.value, reason=message)
        return Result.err(InputValidationError(message))

    @staticmethod
    def _reference(reference_date: date | None) -> datetime:
        return today() if reference_date is None else at_midday(reference_date)
