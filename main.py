"""Command-line entry point: renders one or more months as HTML."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from calendar_logic import next_month, prev_month
from errors import CalendarError
from settings import apply_settings, load_settings
from simple_calendar import SimpleCalendar

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simple-calendar",
        description="Render a month-view calendar as an HTML table.",
    )
    parser.add_argument("date", nargs="?", help="any date in the month to render (default: now)")
    today = parser.add_mutually_exclusive_group()
    today.add_argument("--today", metavar="DATE", help="day to highlight (default: the current date)")
    today.add_argument("--no-today", action="store_true", help="do not highlight any day")
    parser.add_argument("--start-of-week", metavar="DAY",
                        help="0-6 with 0 as Sunday, or a weekday name")
    parser.add_argument("--week-day-names", metavar="NAMES",
                        help="seven comma separated header labels, Sunday first")
    parser.add_argument("--class", dest="classes", action="append", default=[],
                        metavar="KEY=VALUE", help="override a CSS class name (repeatable)")
    parser.add_argument("--event", dest="events", action="append", default=[], nargs="+",
                        metavar="ARG", help="MARKUP START [END] (repeatable)")
    parser.add_argument("--before", type=int, default=0, metavar="N",
                        help="also render N months before the date")
    parser.add_argument("--after", type=int, default=0, metavar="N",
                        help="also render N months after the date")
    parser.add_argument("--settings", metavar="PATH", help="settings file to load first")
    parser.add_argument("-o", "--output", metavar="PATH", help="write to PATH instead of stdout")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _months(year: int, month: int, before: int, after: int) -> list[tuple[int, int]]:
    """Return the (year, month) pairs to render, oldest first."""
    start = (year, month)
    for _ in range(before):
        start = prev_month(*start)
    months = [start]
    for _ in range(before + after):
        months.append(next_month(*months[-1]))
    return months


def _configure(cal: SimpleCalendar, args: argparse.Namespace,
               parser: argparse.ArgumentParser) -> None:
    if args.settings:
        apply_settings(cal, load_settings(args.settings))

    if args.no_today:
        cal.set_today(False)
    elif args.today:
        cal.set_today(args.today)

    classes = {}
    for item in args.classes:
        key, sep, value = item.partition("=")
        if not sep:
            parser.error(f"--class expects KEY=VALUE, got {item!r}")
        classes[key] = value
    cal.set_calendar_classes(classes)

    if args.week_day_names is not None:
        cal.set_week_day_names([n.strip() for n in args.week_day_names.split(",")])

    if args.start_of_week is not None:
        cal.set_start_of_week(args.start_of_week)

    for event in args.events:
        if len(event) not in (2, 3):
            parser.error("--event expects MARKUP START [END]")
        cal.add_daily_html(*event)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.before < 0 or args.after < 0:
        parser.error("--before and --after must not be negative")

    try:
        cal = SimpleCalendar(args.date)
        _configure(cal, args, parser)
        pages = []
        for year, month in _months(cal.now.year, cal.now.month, args.before, args.after):
            cal.set_date(date(year, month, 1))
            pages.append(cal.render())
    except CalendarError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    out = "".join(pages)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(out)
        logger.info("Wrote %d month(s) to %s", len(pages), args.output)
    else:
        sys.stdout.write(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
