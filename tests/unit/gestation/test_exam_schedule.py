"""
Tests for the prenatal exam schedule in `gestation/services/exam_schedule.py`.

Covers:
- Built-in schedule shape
- Editor text parsing and formatting
- Admin edits producing a new snapshot
- Loading exported documents, bare mappings and older Portuguese exports
"""

from datetime import date

import pytest
from pydantic import ValidationError

from gestation.domain.default_schedule import DEFAULT_AUTHOR
from gestation.domain.models import ExamEntry
from gestation.domain.tables import PERIOD_ORDER
from gestation.services.exam_schedule import (
    build_document,
    default_periods,
    format_exam_lines,
    load_periods,
    ordered_periods,
    parse_exam_lines,
    period_for_week,
    update_period,
)
from gestation.services.result import ScheduleFormatError, UnknownPeriodError


class TestDefaultSchedule:
    def test_all_periods_in_order(self) -> None:
        periods = default_periods()

        assert list(periods) == list(PERIOD_ORDER)
        assert all(period.exams for period in periods.values())

    def test_fresh_copy_each_time(self) -> None:
        first = default_periods()
        first["1-4"].exams.clear()

        assert default_periods()["1-4"].exams

    @pytest.mark.parametrize(
        "weeks, title", [(0, "Weeks 1-4"), (20, "Weeks 18-22"), (38, "Weeks 36-40")]
    )
    def test_period_for_week(self, weeks: int, title: str) -> None:
        period = period_for_week(default_periods(), weeks)

        assert period is not None
        assert period.title == title

    def test_period_for_week_missing(self) -> None:
        assert period_for_week({}, 20) is None

    def test_trimesters_follow_period_order(self) -> None:
        trimesters = [period.trimester for _, period in ordered_periods(default_periods())]
        assert trimesters == sorted(trimesters)


class TestEditorText:
    """One exam per line; a leading * marks a highlighted exam."""

    def test_parse(self) -> None:
        entries = parse_exam_lines("*Ultrasound\n\n  Blood count  \n* TSH\n*\n")

        assert entries == [
            ExamEntry(name="Ultrasound", highlighted=True),
            ExamEntry(name="Blood count"),
            ExamEntry(name="TSH", highlighted=True),
        ]

    def test_format_is_the_inverse(self) -> None:
        entries = [ExamEntry(name="Ultrasound", highlighted=True), ExamEntry(name="TSH")]

        text = format_exam_lines(entries)

        assert text == "*Ultrasound\nTSH"
        assert parse_exam_lines(text) == entries


class TestUpdatePeriod:
    def test_replaces_one_period(self) -> None:
        periods = default_periods()

        updated = update_period(
            periods,
            "18-22",
            title="Anatomy scan weeks",
            exams_text="*Morphology ultrasound\nUrinalysis",
            consultations="Every 4 weeks",
        )

        period = updated["18-22"]
        assert period.title == "Anatomy scan weeks"
        assert [exam.name for exam in period.exams] == ["Morphology ultrasound", "Urinalysis"]
        assert period.exams[0].highlighted
        assert period.consultations == "Every 4 weeks"
        assert period.observation == ""
        assert updated["1-4"] == periods["1-4"]

    def test_original_snapshot_is_untouched(self) -> None:
        periods = default_periods()
        original_title = periods["5-8"].title

        update_period(periods, "5-8", title="Changed")

        assert periods["5-8"].title == original_title

    def test_blank_fields_keep_previous_values(self) -> None:
        periods = default_periods()

        updated = update_period(periods, "9-13", title="", icon="", trimester=None)

        assert updated["9-13"].title == periods["9-13"].title
        assert updated["9-13"].icon == periods["9-13"].icon
        assert updated["9-13"].trimester == 1

    def test_unknown_period(self) -> None:
        with pytest.raises(UnknownPeriodError):
            update_period(default_periods(), "41-44", title="Nope")

        with pytest.raises(KeyError):
            update_period({}, "1-4")


class TestLoadPeriods:
    def test_bare_mapping_with_string_exams(self) -> None:
        periods = load_periods(
            {"5-8": {"title": "Weeks 5-8", "trimester": 1, "exams": ["*Ultrasound", "TSH", ""]}}
        )

        assert list(periods) == ["5-8"]
        assert periods["5-8"].exams == [
            ExamEntry(name="Ultrasound", highlighted=True),
            ExamEntry(name="TSH"),
        ]

    def test_export_envelope(self) -> None:
        document = build_document(default_periods(), "Dr. Lima", date(2026, 6, 1))

        periods = load_periods(document.model_dump(mode="json"))

        assert periods == default_periods()

    def test_legacy_portuguese_export(self) -> None:
        data = {
            "versao": "1.0",
            "ultimaAtualizacao": "2025-01-15",
            "autor": "Equipe",
            "periodos": {
                "1-4": {
                    "titulo": "Semanas 1-4",
                    "emoji": "🌱",
                    "trimestre": 1,
                    "exames": [{"nome": "Beta hCG", "destaque": True}, "Ácido fólico"],
                    "consultas": "Primeira consulta",
                    "observacao": "Período de implantação",
                }
            },
        }

        period = load_periods(data)["1-4"]

        assert period.title == "Semanas 1-4"
        assert period.icon == "🌱"
        assert period.exams == [
            ExamEntry(name="Beta hCG", highlighted=True),
            ExamEntry(name="Ácido fólico"),
        ]
        assert period.consultations == "Primeira consulta"
        assert period.observation == "Período de implantação"

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"periods": ["1-4"]},
            {"1-5": {"title": "Bad key", "trimester": 1}},
            {"1-4": "not an object"},
            {"1-4": {"title": "Weeks 1-4", "trimester": 1, "exams": [42]}},
        ],
    )
    def test_malformed_documents(self, data: object) -> None:
        with pytest.raises(ScheduleFormatError):
            load_periods(data)  # type: ignore[arg-type]

    def test_invalid_field_values(self) -> None:
        with pytest.raises(ValidationError):
            load_periods({"1-4": {"title": "Weeks 1-4", "trimester": 4}})


def test_build_document_orders_periods() -> None:
    periods = default_periods()
    shuffled = {key: periods[key] for key in reversed(PERIOD_ORDER)}

    document = build_document(shuffled, "Prenatal team", date(2026, 6, 1))

    assert list(document.periods) == list(PERIOD_ORDER)
    assert document.version == "1.0"
    assert document.last_updated == date(2026, 6, 1)
    assert document.author == "Prenatal team"


@pytest.mark.parametrize("author", ["", "   "])
def test_build_document_defaults_blank_author(author: str) -> None:
    document = build_document(default_periods(), author, date(2026, 6, 1))
    assert document.author == DEFAULT_AUTHOR
