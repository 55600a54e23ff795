import argparse
import json
import logging
import sys
from datetime import datetime

from reminders.config import settings
from reminders.sentry import add_breadcrumb, capture_exception, init_sentry
from reminders.sentry import flush as sentry_flush
from reminders.services.clock import Clock, FixedClock, resolve_timezone
from reminders.services.recurrence import format_recurrence

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_clock(now: str | None, timezone: str | None) -> Clock:
    """Clock for this invocation: pinned when --now is given, live otherwise."""
    if now is None:
        return Clock(timezone)
    moment = datetime.fromisoformat(now)
    if moment.tzinfo is None and timezone:
        moment = moment.replace(tzinfo=resolve_timezone(timezone))
    return FixedClock(moment)


def parse_command(args: argparse.Namespace, clock: Clock) -> int:
    from reminders.services.parser import get_parser

    parser = get_parser()
    add_breadcrumb("parse", data={"text": args.text})
    reminder, breakdown = parser.parse_with_breakdown(args.text, clock)

    output = reminder.to_dict()
    if args.explain:
        output["breakdown"] = breakdown.to_dict()
        output["recurrenceLabel"] = format_recurrence(reminder)
    print(json.dumps(output, indent=2))
    return 0


def bulk_command(args: argparse.Namespace, clock: Clock) -> int:
    from reminders.services.parser import get_parser

    add_breadcrumb("bulk", data={"text": args.text})
    reminders = get_parser().parse_bulk(args.text, clock)
    print(json.dumps([reminder.to_dict() for reminder in reminders], indent=2))
    return 0


def check_command(args: argparse.Namespace, clock: Clock) -> int:
    print("Quick Reminders Configuration Check\n")

    checks = [
        ("Timezone", clock.timezone_name),
        ("Today", clock.today().isoformat()),
        ("Log level", settings.log_level),
        ("Preview minimum length", str(settings.min_preview_length)),
        ("Bulk separator", repr(settings.bulk_separator)),
        ("Sentry DSN", "OK" if settings.has_sentry else "NOT CONFIGURED"),
    ]
    for name, value in checks:
        print(f"  {name}: {value}")
    return 0


COMMANDS = {
    "parse": parse_command,
    "bulk": bulk_command,
    "check": check_command,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quick Reminders natural-language parser")
    parser.add_argument("--now", help="Pin the current moment (ISO 8601), e.g. 2024-01-16T09:00")
    parser.add_argument("--timezone", help="IANA timezone, overrides USER_TIMEZONE")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    parse_parser = subparsers.add_parser("parse", help="Parse one reminder phrase")
    parse_parser.add_argument("text", help="Reminder phrase, e.g. 'Call mom tomorrow 5pm'")
    parse_parser.add_argument(
        "--explain", action="store_true", help="Include the confidence breakdown"
    )

    bulk_parser = subparsers.add_parser("bulk", help="Parse a comma-separated list of reminders")
    bulk_parser.add_argument("text", help="Reminder phrases separated by commas")

    subparsers.add_parser("check", help="Check configuration")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging()

    init_sentry(
        dsn=settings.sentry_dsn if settings.has_sentry else None,
        environment=settings.sentry_environment,
    )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        try:
            clock = build_clock(args.now, args.timezone)
        except ValueError as e:
            parser.error(f"invalid --now value: {e}")
        return command(args, clock)
    except Exception as e:
        logger.exception(f"Command {args.command} failed: {e}")
        capture_exception(e)
        return 1
    finally:
        # Flush any pending Sentry events before exit
        sentry_flush(timeout=2.0)


if __name__ == "__main__":
    sys.exit(main())
