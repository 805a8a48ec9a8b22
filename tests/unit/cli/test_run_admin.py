"""Tests for the exam schedule editor in `run_admin.py`."""

import io
import json
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from rich.console import Console

import run_admin
from adapters.storage.json_store import JsonExamScheduleStore
from gestation.config import get_config
from gestation.domain.default_schedule import DEFAULT_AUTHOR
from gestation.domain.tables import PERIOD_ORDER
from gestation.services.admin_auth import verify_token
from gestation.services.exam_schedule import default_periods, update_period

PASSWORD = "s3cret"


@pytest.fixture
def saved_path(tmp_path: Path) -> Path:
    return tmp_path / "exam_schedule.json"


@pytest.fixture(autouse=True)
def isolated_cli(
    monkeypatch: pytest.MonkeyPatch, saved_path: Path
) -> Iterator[Console]:
    """One admin password, schedule in a temp dir, output captured."""
    monkeypatch.setenv("ADMIN_PASSWORD", PASSWORD)
    monkeypatch.delenv("TOKEN_SECRET", raising=False)
    monkeypatch.delenv("TOKEN_TTL_HOURS", raising=False)
    monkeypatch.delenv("EXAM_SCHEDULE_DATA_PATH", raising=False)
    monkeypatch.delenv("EXAM_SCHEDULE_AUTHOR", raising=False)
    monkeypatch.setenv("EXAM_SCHEDULE_SAVED_PATH", str(saved_path))
    monkeypatch.setattr(run_admin, "configure_logging", lambda config: None)
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    console = Console(file=io.StringIO(), width=160, record=True, color_system=None)
    monkeypatch.setattr(run_admin, "console", console)
    get_config.cache_clear()
    yield console
    get_config.cache_clear()
    structlog.reset_defaults()


def stored(saved_path: Path) -> JsonExamScheduleStore:
    return JsonExamScheduleStore(saved_path)


class TestAuthentication:
    def test_wrong_password(self, isolated_cli: Console) -> None:
        exit_code = run_admin.main(["--password", "nope", "--reset"])

        assert exit_code == 1
        assert "Incorrect password." in isolated_cli.export_text()

    def test_not_configured(
        self, isolated_cli: Console, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ADMIN_PASSWORD", "")
        get_config.cache_clear()

        assert run_admin.main(["--password", PASSWORD, "--list"]) == 1
        assert "Authentication is not configured." in isolated_cli.export_text()

    def test_login_prints_a_usable_token(
        self, isolated_cli: Console, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_admin.main(["--password", PASSWORD, "--login"]) == 0

        token = capsys.readouterr().out.strip()
        assert token.startswith("admin:")
        assert verify_token(token, PASSWORD)
        assert run_admin.main(["--token", token, "--list"]) == 0

    @pytest.mark.parametrize(
        "token", ["garbage", "admin:1.deadbeef", "admin:99999999999999.deadbeef"]
    )
    def test_invalid_token(self, isolated_cli: Console, token: str) -> None:
        assert run_admin.main(["--token", token, "--list"]) == 1
        assert "Session expired or invalid token." in isolated_cli.export_text()

    def test_password_prompt(
        self, isolated_cli: Console, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(run_admin.getpass, "getpass", lambda prompt: PASSWORD)

        assert run_admin.main(["--list"]) == 0


class TestEdit:
    def test_highlighted_exams_are_saved(self, saved_path: Path) -> None:
        exit_code = run_admin.main(
            [
                "--password", PASSWORD,
                "--edit", "18-22",
                "--exam", "*Morphology ultrasound",
                "--exam", "Urinalysis",
                "--consultations", "Every 4 weeks",
            ]
        )

        assert exit_code == 0
        period = stored(saved_path).load()["18-22"]
        assert [(exam.name, exam.highlighted) for exam in period.exams] == [
            ("Morphology ultrasound", True),
            ("Urinalysis", False),
        ]
        assert period.consultations == "Every 4 weeks"
        assert period.title == default_periods()["18-22"].title
        assert period.observation == default_periods()["18-22"].observation

    def test_exams_from_file(self, saved_path: Path, tmp_path: Path) -> None:
        exams_file = tmp_path / "exams.txt"
        exams_file.write_text("*Glucose tolerance test\n\nBlood count\n", encoding="utf-8")

        exit_code = run_admin.main(
            ["--password", PASSWORD, "--edit", "23-27", "--exams-file", str(exams_file)]
        )

        assert exit_code == 0
        exams = stored(saved_path).load()["23-27"].exams
        assert [exam.name for exam in exams] == ["Glucose tolerance test", "Blood count"]

    def test_untouched_fields_keep_their_values(self, saved_path: Path) -> None:
        assert run_admin.main(["--password", PASSWORD, "--edit", "5-8", "--title", "Early scan"]) == 0

        period = stored(saved_path).load()["5-8"]
        assert period.title == "Early scan"
        assert period.exams == default_periods()["5-8"].exams

    def test_period_missing_from_published_schedule(
        self, isolated_cli: Console, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        data_path = tmp_path / "published.json"
        data_path.write_text(
            json.dumps({"periods": {"1-4": {"title": "Weeks 1-4", "trimester": 1}}}),
            encoding="utf-8",
        )
        monkeypatch.setenv("EXAM_SCHEDULE_DATA_PATH", str(data_path))
        get_config.cache_clear()

        exit_code = run_admin.main(["--password", PASSWORD, "--edit", "18-22", "--title", "X"])

        assert exit_code == 1
        assert "Unknown exam period: 18-22" in isolated_cli.export_text()

    def test_fields_require_edit(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_admin.main(["--password", PASSWORD, "--list", "--title", "X"])
        assert exc_info.value.code == 2


class TestTransfer:
    def test_export_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_admin.main(["--password", PASSWORD, "--export"]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["author"] == DEFAULT_AUTHOR
        assert list(document["periods"]) == list(PERIOD_ORDER)

    def test_export_to_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("EXAM_SCHEDULE_AUTHOR", "Prenatal team")
        get_config.cache_clear()
        target = tmp_path / "export.json"

        assert run_admin.main(["--password", PASSWORD, "--export", str(target)]) == 0

        document = json.loads(target.read_text(encoding="utf-8"))
        assert document["author"] == "Prenatal team"

    def test_import_file(self, saved_path: Path, tmp_path: Path) -> None:
        periods = update_period(default_periods(), "28-31", observation="Check iron levels")
        source = tmp_path / "schedule.json"
        source.write_text(
            json.dumps({key: period.model_dump(mode="json") for key, period in periods.items()}),
            encoding="utf-8",
        )

        assert run_admin.main(["--password", PASSWORD, "--import", str(source)]) == 0
        assert stored(saved_path).load()["28-31"].observation == "Check iron levels"

    def test_import_invalid_file(
        self, isolated_cli: Console, saved_path: Path, tmp_path: Path
    ) -> None:
        source = tmp_path / "broken.json"
        source.write_text("{broken", encoding="utf-8")

        assert run_admin.main(["--password", PASSWORD, "--import", str(source)]) == 1
        assert "not valid JSON" in isolated_cli.export_text()
        assert not saved_path.exists()

    def test_import_missing_file(self, isolated_cli: Console, tmp_path: Path) -> None:
        missing = tmp_path / "missing.json"

        assert run_admin.main(["--password", PASSWORD, "--import", str(missing)]) == 1
        assert "Cannot read" in isolated_cli.export_text()


def test_reset_drops_customizations(isolated_cli: Console, saved_path: Path) -> None:
    stored(saved_path).save(update_period(default_periods(), "1-4", title="Custom"))

    assert run_admin.main(["--password", PASSWORD, "--reset"]) == 0

    assert not saved_path.exists()
    assert stored(saved_path).load() == default_periods()
    assert "restored to defaults" in isolated_cli.export_text()


def test_list_shows_every_period(isolated_cli: Console) -> None:
    assert run_admin.main(["--password", PASSWORD, "--list"]) == 0

    output = isolated_cli.export_text()
    assert "Exam schedule" in output
    for key in PERIOD_ORDER:
        assert key in output
