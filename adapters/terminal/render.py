"""
Rich terminal rendering of calculation reports.

Renderers only read the report and the fixed tables; month and trimester
fields always come from ``convert`` and are never recomputed here.
"""

from collections.abc import Mapping

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gestation.domain.models import CalculationReport, ExamPeriod, GestationalResult
from gestation.domain.tables import MONTH_TABLE, TRIMESTERS
from gestation.services.date_arithmetic import format_date
from gestation.services.exam_schedule import format_exam_lines, ordered_periods
from gestation.services.formatting import (
    explain_month_progress,
    format_commercial_summary,
    format_month,
    format_month_range,
    format_progress,
    format_trimester,
    format_weeks_and_days,
    pregnancy_status,
    trimester_description,
    week_milestone,
)

# Trimester color tag -> rich style
TRIMESTER_STYLES = {"pink": "magenta", "purple": "purple", "blue": "blue"}

PROGRESS_BAR_WIDTH = 30


def trimester_style(result: GestationalResult) -> str:
    return TRIMESTER_STYLES.get(result.trimester_color, "white")


def progress_bar(percent: float, width: int = PROGRESS_BAR_WIDTH) -> str:
    filled = round(percent / 100 * width)
    return "█" * filled + "░" * (width - filled)


def render_result(report: CalculationReport) -> Panel:
    """Main result box: weeks, commercial months, trimester, due date and progress."""
    result = report.result
    style = trimester_style(result)

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Gestational age", format_weeks_and_days(result.weeks, result.days_remainder))
    summary.add_row("Commercial months", format_commercial_summary(result))
    summary.add_row(
        "Trimester",
        Text(f"{format_trimester(result.trimester)} · {trimester_description(result.trimester)}", style=style),
    )
    summary.add_row(
        "Month", f"{format_month(result.current_month)} ({format_month_range(result.month_data)})"
    )
    summary.add_row("Due date", format_date(report.due_date))
    summary.add_row("Last menstrual period", format_date(report.lmp))
    summary.add_row(
        "Progress",
        f"{progress_bar(result.progress_percent)} {format_progress(result.progress_percent, 1)}",
    )

    notes = Text(explain_month_progress(result.current_month, result.completed_months), style="dim")
    status = Text(pregnancy_status(result.weeks), style=f"bold {style}")

    return Panel(
        Group(status, summary, notes),
        title=f"🤰 {format_weeks_and_days(result.weeks, result.days_remainder, short=True)}",
        subtitle=f"as of {format_date(report.reference_date)}",
        border_style=style,
    )


def render_timeline(result: GestationalResult) -> Table:
    """Nine commercial months grouped by trimester, with the current month highlighted."""
    table = Table(title="Pregnancy timeline", show_lines=False)
    table.add_column("Trimester", style="bold")
    table.add_column("Month")
    table.add_column("Weeks")
    table.add_column("Days")

    for month in MONTH_TABLE:
        trimester = TRIMESTERS[month.trimester - 1]
        style = TRIMESTER_STYLES.get(trimester.color_tag, "white")
        active = month.month == result.current_month
        table.add_row(
            Text(format_trimester(trimester.number), style=style),
            Text(("▶ " if active else "  ") + format_month(month.month), style="bold" if active else ""),
            format_month_range(month),
            str(month.cumulative_days),
            style="reverse" if active else None,
        )
    return table


def render_exam_period(
    periods: Mapping[str, ExamPeriod], report: CalculationReport
) -> Panel:
    """Recommended exams for the report's period, with the milestone of the week."""
    period = periods.get(report.exam_period_key)
    if period is None:
        return Panel("No exams registered for this period.", title="🩺 Exams", border_style="dim")

    milestone_title, milestone_description = week_milestone(report.result.weeks)
    style = TRIMESTER_STYLES.get(TRIMESTERS[period.trimester - 1].color_tag, "white")

    exams = Text()
    if not period.exams:
        exams.append("No exams registered\n", style="dim")
    for exam in period.exams:
        exams.append("• ")
        exams.append(exam.name + "\n", style="bold" if exam.highlighted else "")

    parts: list[Text] = [
        Text(f"💡 {milestone_title}: {milestone_description}", style="italic"),
        Text("📋 Recommended exams", style="bold"),
        exams,
        Text(f"📅 {period.consultations or 'Prenatal visits as advised by your doctor'}"),
    ]
    if period.observation:
        parts.append(Text(period.observation, style="dim"))

    return Panel(
        Group(*parts),
        title=f"{period.icon or '🩺'} {period.title}",
        border_style=style,
    )


def render_schedule(periods: Mapping[str, ExamPeriod]) -> Table:
    """The whole exam schedule in editor form; highlighted exams keep their ``*``."""
    table = Table(title="Exam schedule", show_lines=True)
    table.add_column("Period", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Trimester")
    table.add_column("Exams")
    table.add_column("Consultations")

    for key, period in ordered_periods(periods):
        style = TRIMESTER_STYLES.get(TRIMESTERS[period.trimester - 1].color_tag, "white")
        table.add_row(
            key,
            Text(f"{period.icon} {period.title}".strip()),
            Text(format_trimester(period.trimester), style=style),
            Text(format_exam_lines(period.exams)),
            Text(period.consultations),
        )
    return table


def print_report(
    console: Console, report: CalculationReport, periods: Mapping[str, ExamPeriod] | None = None
) -> None:
    console.print(render_result(report))
    console.print(render_timeline(report.result))
    if periods is not None:
        console.print(render_exam_period(periods, report))


def print_error(console: Console, message: str) -> None:
    console.print(f"❌ {message}", style="red")
