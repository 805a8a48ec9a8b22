"""
JSON file storage for the prenatal exam schedule.

Load order mirrors how the schedule is published and customized:
1. the admin's saved customizations, if any
2. the published schedule file, if configured
3. the built-in defaults

A saved file that cannot be read is removed so the next load falls back
cleanly instead of failing on every request.
"""

import json
from collections.abc import Mapping
from datetime import date
from pathlib import Path

import structlog
from pydantic import ValidationError

from gestation.config import ScheduleConfig
from gestation.domain.models import ExamPeriod
from gestation.services.exam_schedule import (
    ExamPeriods,
    build_document,
    default_periods,
    load_periods,
)
from gestation.services.result import ScheduleFormatError

logger = structlog.get_logger(__name__)


class JsonExamScheduleStore:
    """Reads and writes the exam schedule as a single JSON document."""

    def __init__(self, saved_path: str | Path, data_path: str | Path | None = None) -> None:
        self.saved_path = Path(saved_path)
        self.data_path = Path(data_path) if data_path else None
        self.logger = logger.bind(component="exam_schedule_store", saved_path=str(self.saved_path))

    @classmethod
    def from_config(cls, config: ScheduleConfig) -> "JsonExamScheduleStore":
        return cls(saved_path=config.saved_path, data_path=config.data_path)

    def has_customizations(self) -> bool:
        return self.saved_path.exists()

    def load(self) -> ExamPeriods:
        """Current schedule: saved customizations, then the published file, then defaults."""
        if self.saved_path.exists():
            try:
                periods = self._read(self.saved_path)
                self.logger.debug("exam_schedule_loaded", source="saved", periods=len(periods))
                return periods
            except (OSError, json.JSONDecodeError, ScheduleFormatError, ValidationError) as e:
                self.logger.warning("saved_exam_schedule_unreadable", error=str(e))
                self.saved_path.unlink(missing_ok=True)

        if self.data_path is not None:
            try:
                periods = self._read(self.data_path)
                self.logger.debug("exam_schedule_loaded", source="data_file", periods=len(periods))
                return periods
            except (OSError, json.JSONDecodeError, ScheduleFormatError, ValidationError) as e:
                self.logger.error(
                    "exam_schedule_data_file_unreadable", path=str(self.data_path), error=str(e)
                )

        self.logger.debug("exam_schedule_loaded", source="defaults")
        return default_periods()

    def save(self, periods: Mapping[str, ExamPeriod]) -> None:
        """Persist the admin's customizations."""
        data = {key: period.model_dump(mode="json") for key, period in periods.items()}
        self.saved_path.parent.mkdir(parents=True, exist_ok=True)
        self.saved_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        self.logger.info("exam_schedule_saved", periods=len(data))

    def reset(self) -> ExamPeriods:
        """Drop saved customizations and return what is loaded without them."""
        self.saved_path.unlink(missing_ok=True)
        self.logger.info("exam_schedule_reset")
        return self.load()

    def export_json(self, periods: Mapping[str, ExamPeriod], author: str, today: date) -> str:
        """The whole schedule as a downloadable JSON document."""
        document = build_document(periods, author, today)
        self.logger.info("exam_schedule_exported", periods=len(document.periods))
        return json.dumps(document.model_dump(mode="json"), ensure_ascii=False, indent=2)

    def import_json(self, text: str) -> ExamPeriods:
        """
        Parse an exported document (or a bare period mapping) and save it.

        Raises:
            ScheduleFormatError: the text is not a valid schedule.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ScheduleFormatError(f"Exam schedule is not valid JSON: {e}") from e

        try:
            periods = load_periods(data)
        except ValidationError as e:
            raise ScheduleFormatError(f"Exam schedule has invalid fields: {e}") from e
        self.save(periods)
        return periods

    def _read(self, path: Path) -> ExamPeriods:
        return load_periods(json.loads(path.read_text(encoding="utf-8")))
