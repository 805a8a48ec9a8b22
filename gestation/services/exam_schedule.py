"""
Prenatal exam schedule operations.

The schedule is a mapping from one of the nine fixed period keys ("1-4",
"5-8", ..., "36-40") to an ExamPeriod. Functions here are pure: they take a
snapshot and return a new one. Reading and writing the schedule is the
storage adapter's job.

The admin editor works on plain text, one exam per line, with a leading ``*``
marking a highlighted exam:

    *Transvaginal ultrasound
    Blood type and Rh factor
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

import structlog

from gestation.domain.default_schedule import DEFAULT_AUTHOR, DEFAULT_PERIODS
from gestation.domain.models import ExamEntry, ExamPeriod, ExamScheduleDocument
from gestation.domain.tables import PERIOD_ORDER
from gestation.services.converter import exam_period_key
from gestation.services.result import ScheduleFormatError, UnknownPeriodError

logger = structlog.get_logger(__name__)

ExamPeriods = dict[str, ExamPeriod]

HIGHLIGHT_MARKER = "*"

# Field names used by schedules exported before the English data format
LEGACY_ENVELOPE_KEYS = {
    "versao": "version",
    "ultimaAtualizacao": "last_updated",
    "autor": "author",
    "periodos": "periods",
}
LEGACY_PERIOD_KEYS = {
    "titulo": "title",
    "emoji": "icon",
    "trimestre": "trimester",
    "exames": "exams",
    "consultas": "consultations",
    "observacao": "observation",
}
LEGACY_EXAM_KEYS = {"nome": "name", "destaque": "highlighted"}


def default_periods() -> ExamPeriods:
    """A fresh copy of the built-in schedule."""
    return load_periods(DEFAULT_PERIODS)


def period_for_week(periods: Mapping[str, ExamPeriod], weeks: int) -> ExamPeriod | None:
    return periods.get(exam_period_key(weeks))


def ordered_periods(periods: Mapping[str, ExamPeriod]) -> list[tuple[str, ExamPeriod]]:
    """Periods in gestational order, skipping any the schedule does not define."""
    return [(key, periods[key]) for key in PERIOD_ORDER if key in periods]


def parse_exam_line(line: str) -> ExamEntry | None:
    text = line.strip()
    highlighted = text.startswith(HIGHLIGHT_MARKER)
    if highlighted:
        text = text[len(HIGHLIGHT_MARKER) :].strip()
    if not text:
        return None
    return ExamEntry(name=text, highlighted=highlighted)


def parse_exam_lines(text: str) -> list[ExamEntry]:
    """Editor text to exam entries; blank lines are ignored."""
    entries = (parse_exam_line(line) for line in text.splitlines())
    return [entry for entry in entries if entry is not None]


def format_exam_lines(exams: list[ExamEntry]) -> str:
    """Exam entries to editor text, the inverse of ``parse_exam_lines``."""
    return "\n".join(
        f"{HIGHLIGHT_MARKER}{exam.name}" if exam.highlighted else exam.name for exam in exams
    )


def update_period(
    periods: Mapping[str, ExamPeriod],
    key: str,
    *,
    title: str | None = None,
    icon: str | None = None,
    trimester: int | None = None,
    exams_text: str = "",
    consultations: str = "",
    observation: str = "",
) -> ExamPeriods:
    """
    Apply an admin edit to one period and return the new schedule.

    Title, icon and trimester keep their previous values when left blank; the
    exam list, consultations and observation are replaced as given.
    """
    if key not in PERIOD_ORDER or key not in periods:
        raise UnknownPeriodError(key)

    current = periods[key]
    updated = ExamPeriod(
        title=title or current.title,
        icon=icon or current.icon,
        trimester=trimester or current.trimester,
        exams=parse_exam_lines(exams_text),
        consultations=consultations,
        observation=observation,
    )

    new_periods = {name: period.model_copy(deep=True) for name, period in periods.items()}
    new_periods[key] = updated
    logger.info("exam_period_updated", period=key, exam_count=len(updated.exams))
    return new_periods


def build_document(
    periods: Mapping[str, ExamPeriod], author: str, today: date
) -> ExamScheduleDocument:
    """
    Export envelope for the whole schedule, stamped with ``today``.

    A blank author is replaced by the default schedule author.
    """
    return ExamScheduleDocument(
        last_updated=today,
        author=author.strip() or DEFAULT_AUTHOR,
        periods={key: period for key, period in ordered_periods(periods)},
    )


def load_periods(data: Mapping[str, Any]) -> ExamPeriods:
    """
    Build a schedule from decoded JSON.

    Accepts an export envelope (with a ``periods`` key) or a bare period
    mapping. Exams may be objects or plain strings using the ``*`` marker, and
    the Portuguese field names of older exports are understood.

    Raises:
        ScheduleFormatError: the data is not a mapping of known period keys.
    """
    if not isinstance(data, Mapping):
        raise ScheduleFormatError(f"Exam schedule must be an object, got {type(data).__name__}")

    data = _rename_keys(data, LEGACY_ENVELOPE_KEYS)
    raw_periods = data.get("periods", data)
    if not isinstance(raw_periods, Mapping):
        raise ScheduleFormatError("Exam schedule 'periods' must be an object")

    unknown = sorted(set(raw_periods) - set(PERIOD_ORDER))
    if unknown:
        raise ScheduleFormatError(f"Unknown exam periods: {', '.join(unknown)}")

    periods: ExamPeriods = {}
    for key in PERIOD_ORDER:
        if key in raw_periods:
            periods[key] = _load_period(key, raw_periods[key])
    return periods


def _load_period(key: str, raw: Any) -> ExamPeriod:
    if not isinstance(raw, Mapping):
        raise ScheduleFormatError(f"Exam period {key} must be an object")

    fields = _rename_keys(raw, LEGACY_PERIOD_KEYS)
    exams = []
    for entry in fields.get("exams") or []:
        if isinstance(entry, str):
            parsed = parse_exam_line(entry)
            if parsed is not None:
                exams.append(parsed)
        elif isinstance(entry, Mapping):
            exams.append(ExamEntry.model_validate(_rename_keys(entry, LEGACY_EXAM_KEYS)))
        else:
            raise ScheduleFormatError(f"Invalid exam entry in period {key}: {entry!r}")

    return ExamPeriod.model_validate({**fields, "exams": exams})


def _rename_keys(data: Mapping[str, Any], renames: Mapping[str, str]) -> dict[str, Any]:
    return {renames.get(name, name): value for name, value in data.items()}
