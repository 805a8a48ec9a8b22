"""
Domain models for gestational age conversion.

These models represent the core obstetric concepts and are framework-agnostic.
Computed values are frozen; the exam schedule stays mutable because the admin
editor owns it.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Raw user input for a date: text ("2026-03-01", "01/03/2026") or a typed date
DateInput = str | datetime | date


class DatingMethod(str, Enum):
    """How the gestational age was established."""

    LMP = "lmp"
    DUE_DATE = "due_date"
    ULTRASOUND = "ultrasound"
    DIRECT = "direct"


class MonthBreakpoint(BaseModel):
    """One commercial pregnancy month and the week range it covers."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=1, le=9)
    cumulative_days: int = Field(gt=0, description="Last gestational day of this month")
    start_week: int = Field(ge=0)
    start_day: int = Field(ge=0, le=6)
    end_week: int = Field(ge=0)
    end_day: int = Field(ge=0, le=6)
    trimester: int = Field(ge=1, le=3)


class TrimesterBoundary(BaseModel):
    """Upper bound of a trimester in days and weeks."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1, le=3)
    days_end: int = Field(gt=0)
    week_end: int = Field(gt=0)
    color_tag: str


class GestationalResult(BaseModel):
    """Display-ready conversion of a total day count. Rebuilt on every input change."""

    model_config = ConfigDict(frozen=True)

    total_days: int = Field(ge=0, le=300)
    weeks: int = Field(ge=0)
    days_remainder: int = Field(ge=0, le=6)

    # Month in progress, not months finished
    current_month: int = Field(ge=1, le=9)

    completed_months: int = Field(ge=0, le=9)
    extra_weeks: int = Field(ge=0)
    extra_days: int = Field(ge=0, le=6)

    trimester: int = Field(ge=1, le=3)
    trimester_color: str
    month_data: MonthBreakpoint
    progress_percent: float = Field(ge=0.0, le=100.0)


class ValidationResult(BaseModel):
    """Outcome of a user input check. The message is shown to the user verbatim."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)


class LMPInput(BaseModel):
    """Dating by the first day of the last menstrual period."""

    model_config = ConfigDict(frozen=True)

    lmp: DateInput


class DueDateInput(BaseModel):
    """Dating by an already known due date."""

    model_config = ConfigDict(frozen=True)

    due_date: DateInput


class UltrasoundInput(BaseModel):
    """Dating by the gestational age measured at an ultrasound exam."""

    model_config = ConfigDict(frozen=True)

    exam_date: DateInput
    weeks: int
    days: int = 0


class GestationalAgeInput(BaseModel):
    """Gestational age entered directly as weeks and days."""

    model_config = ConfigDict(frozen=True)

    weeks: int
    days: int = 0


CalculationInput = LMPInput | DueDateInput | UltrasoundInput | GestationalAgeInput


class CalculationReport(BaseModel):
    """Everything the output consumer needs to render one calculation."""

    model_config = ConfigDict(frozen=True)

    method: DatingMethod
    result: GestationalResult
    reference_date: datetime
    due_date: datetime
    lmp: datetime
    exam_period_key: str


class ExamEntry(BaseModel):
    """A recommended exam; highlighted entries are the key ones for the period."""

    name: str = Field(min_length=1)
    highlighted: bool = False


class ExamPeriod(BaseModel):
    """Recommended exams and visits for a range of gestational weeks."""

    title: str
    icon: str = ""
    trimester: int = Field(ge=1, le=3)
    exams: list[ExamEntry] = Field(default_factory=list)
    consultations: str = ""
    observation: str = ""


class ExamScheduleDocument(BaseModel):
    """Export envelope for the whole exam schedule."""

    version: str = "1.0"
    last_updated: date
    author: str = ""
    periods: dict[str, ExamPeriod]


class AdminToken(BaseModel):
    """Signed, time-limited admin session token."""

    model_config = ConfigDict(frozen=True)

    expires_at_ms: int = Field(gt=0)
    signature: str = Field(min_length=1)

    @property
    def payload(self) -> str:
        return f"admin:{self.expires_at_ms}"

    def __str__(self) -> str:
        return f"{self.payload}.{self.signature}"
