#!/usr/bin/env python3
"""
Exam schedule editor from the command line.

Every action needs the admin password (prompted when not given) or a token
printed by ``--login``.

Examples:
    python run_admin.py --login
    python run_admin.py --token admin:... --list
    python run_admin.py --edit 18-22 --exam "*Morphology ultrasound" --exam Urinalysis
    python run_admin.py --export schedule.json
    python run_admin.py --import schedule.json
    python run_admin.py --reset
"""

import argparse
import getpass
import sys
from pathlib import Path

from rich.console import Console

from adapters.storage.json_store import JsonExamScheduleStore
from adapters.terminal.render import print_error, render_schedule
from gestation.config import AppConfig, get_config
from gestation.domain.tables import PERIOD_ORDER
from gestation.observability import configure_logging
from gestation.services.admin_auth import issue_token, signing_secret, verify_token
from gestation.services.date_arithmetic import today
from gestation.services.exam_schedule import format_exam_lines, update_period
from gestation.services.result import (
    AuthenticationError,
    Result,
    ScheduleFormatError,
    UnknownPeriodError,
)

console = Console()

EDIT_FIELDS = ("title", "icon", "trimester", "exam", "exams_file", "consultations", "observation")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edit the prenatal exam schedule.")
    credentials = parser.add_mutually_exclusive_group()
    credentials.add_argument("--password", help="Admin password (prompted when omitted)")
    credentials.add_argument("--token", help="Token printed by a previous --login")

    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--login", action="store_true", help="Print a session token")
    action.add_argument("--list", action="store_true", help="Show the current schedule")
    action.add_argument("--edit", metavar="PERIOD", choices=PERIOD_ORDER, help="Edit one period")
    action.add_argument(
        "--export",
        metavar="FILE",
        nargs="?",
        const="-",
        help="Write the schedule as JSON (to stdout without FILE)",
    )
    action.add_argument(
        "--import", dest="import_file", metavar="FILE", type=Path, help="Load a JSON schedule"
    )
    action.add_argument("--reset", action="store_true", help="Drop all customizations")

    fields = parser.add_argument_group("period fields (with --edit)")
    fields.add_argument("--title")
    fields.add_argument("--icon")
    fields.add_argument("--trimester", type=int, choices=(1, 2, 3))
    exams = fields.add_mutually_exclusive_group()
    exams.add_argument(
        "--exam",
        action="append",
        metavar="NAME",
        help="One exam per flag; prefix with * to highlight it",
    )
    exams.add_argument(
        "--exams-file", metavar="FILE", type=Path, help="Exam list, one per line"
    )
    fields.add_argument("--consultations")
    fields.add_argument("--observation")
    return parser


def authenticate(args: argparse.Namespace, config: AppConfig) -> Result[str, AuthenticationError]:
    """A valid token string, from ``--token`` or by logging in with the password."""
    if args.token is not None:
        secret = signing_secret(config.auth)
        if secret is None:
            return Result.err(AuthenticationError("Authentication is not configured."))
        if not verify_token(args.token, secret):
            return Result.err(AuthenticationError("Session expired or invalid token."))
        return Result.ok(args.token)

    password = args.password if args.password is not None else getpass.getpass("Admin password: ")
    outcome = issue_token(password, config.auth)
    if outcome.is_err():
        return Result.err(outcome.unwrap_err())
    return Result.ok(str(outcome.unwrap()))


def edit_period(args: argparse.Namespace, store: JsonExamScheduleStore) -> None:
    periods = store.load()
    current = periods.get(args.edit)
    if current is None:
        raise UnknownPeriodError(args.edit)

    if args.exams_file is not None:
        exams_text = args.exams_file.read_text(encoding="utf-8")
    elif args.exam is not None:
        exams_text = "\n".join(args.exam)
    else:
        exams_text = format_exam_lines(current.exams)

    updated = update_period(
        periods,
        args.edit,
        title=args.title,
        icon=args.icon,
        trimester=args.trimester,
        exams_text=exams_text,
        consultations=current.consultations if args.consultations is None else args.consultations,
        observation=current.observation if args.observation is None else args.observation,
    )
    store.save(updated)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.edit is None and any(getattr(args, field) is not None for field in EDIT_FIELDS):
        parser.error("period fields can only be used with --edit")

    config = get_config()
    configure_logging(config.logging)

    session = authenticate(args, config)
    if session.is_err():
        print_error(console, str(session.unwrap_err()))
        return 1

    if args.login:
        print(session.unwrap())
        return 0

    store = JsonExamScheduleStore.from_config(config.schedule)

    if args.list:
        console.print(render_schedule(store.load()))
        return 0

    if args.edit is not None:
        try:
            edit_period(args, store)
        except UnknownPeriodError:
            print_error(console, f"Unknown exam period: {args.edit}")
            return 1
        except OSError as e:
            print_error(console, f"Cannot read {args.exams_file}: {e.strerror}")
            return 1
        console.print(f"✅ Period {args.edit} saved", style="green")
        return 0

    if args.export is not None:
        text = store.export_json(store.load(), config.schedule.author, today().date())
        if args.export == "-":
            print(text)
        else:
            Path(args.export).write_text(text + "\n", encoding="utf-8")
            console.print(f"✅ Schedule exported to {args.export}", style="green")
        return 0

    if args.import_file is not None:
        try:
            periods = store.import_json(args.import_file.read_text(encoding="utf-8"))
        except OSError as e:
            print_error(console, f"Cannot read {args.import_file}: {e.strerror}")
            return 1
        except ScheduleFormatError as e:
            print_error(console, str(e))
            return 1
        console.print(f"✅ Imported {len(periods)} periods", style="green")
        return 0

    store.reset()
    console.print("✅ Schedule restored to defaults", style="green")
    return 0


if __name__ == "__main__":
    sys.exit(main())
