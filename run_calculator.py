#!/usr/bin/env python3
"""
Gestational age calculator from the command line.

Examples:
    python run_calculator.py --weeks 20 --days 3
    python run_calculator.py --lmp 2026-03-01
    python run_calculator.py --due-date 15/12/2026
    python run_calculator.py --ultrasound 2026-05-10 12 4
"""

import argparse
import sys

from rich.console import Console

from adapters.storage.json_store import JsonExamScheduleStore
from adapters.terminal.render import print_error, print_report
from gestation.config import get_config, print_config_summary
from gestation.domain.models import (
    CalculationInput,
    DueDateInput,
    GestationalAgeInput,
    LMPInput,
    UltrasoundInput,
)
from gestation.observability import configure_logging
from gestation.services import GestationalCalculator
from gestation.services.date_arithmetic import parse_flexible_date

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert gestational age between weeks, commercial months and trimesters."
    )
    method = parser.add_mutually_exclusive_group()
    method.add_argument("--weeks", type=int, help="Gestational weeks (use with --days)")
    method.add_argument("--lmp", metavar="DATE", help="First day of the last menstrual period")
    method.add_argument("--due-date", metavar="DATE", help="Estimated due date")
    method.add_argument(
        "--ultrasound",
        nargs=3,
        metavar=("DATE", "WEEKS", "DAYS"),
        help="Exam date and the gestational age measured at the exam",
    )
    parser.add_argument("--days", type=int, default=None, help="Extra days (0-6)")
    parser.add_argument(
        "--reference-date", metavar="DATE", help="Compute as of this date instead of today"
    )
    parser.add_argument(
        "--no-exams", action="store_true", help="Do not show the recommended exams"
    )
    parser.add_argument("--show-config", action="store_true", help="Print the configuration")
    return parser


def build_input(args: argparse.Namespace) -> CalculationInput:
    config = get_config().calculator

    if args.lmp is not None:
        return LMPInput(lmp=args.lmp)
    if args.due_date is not None:
        return DueDateInput(due_date=args.due_date)
    if args.ultrasound is not None:
        exam_date, weeks, days = args.ultrasound
        return UltrasoundInput(exam_date=exam_date, weeks=int(weeks), days=int(days))

    weeks = config.default_weeks if args.weeks is None else args.weeks
    days = config.default_days if args.days is None else args.days
    return GestationalAgeInput(weeks=weeks, days=days)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.days is not None and (
        args.lmp is not None or args.due_date is not None or args.ultrasound is not None
    ):
        parser.error("--days can only be combined with --weeks")

    config = get_config()
    configure_logging(config.logging)

    if args.show_config:
        print_config_summary()
        return 0

    if args.ultrasound is not None:
        _, weeks, days = args.ultrasound
        if not (weeks.isdigit() and days.isdigit()):
            print_error(console, "Ultrasound weeks and days must be whole numbers")
            return 1

    reference_date = None
    if args.reference_date is not None:
        reference_date = parse_flexible_date(args.reference_date)
        if reference_date is None:
            print_error(console, f"Invalid reference date: {args.reference_date}")
            return 1

    calculator = GestationalCalculator()
    outcome = calculator.calculate(build_input(args), reference_date)
    if outcome.is_err():
        print_error(console, str(outcome.unwrap_err()))
        return 1

    periods = None
    if not args.no_exams:
        periods = JsonExamScheduleStore.from_config(config.schedule).load()

    print_report(console, outcome.unwrap(), periods)
    return 0


if __name__ == "__main__":
    sys.exit(main())
