"""Pure calendar calculations; no markup, no configuration state."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta
from typing import Sequence, TypeVar

T = TypeVar("T")

DAYS_PER_WEEK = 7


def rotate(data: Sequence[T], steps: int) -> list[T]:
    """Return a copy of *data* rotated left by *steps* positions.

    Negative steps rotate right. The input is never modified. An empty
    sequence raises ZeroDivisionError; callers always pass 7 labels.
    """
    count = len(data)
    if steps < 0:
        steps = count + steps
    steps %= count
    return list(data[steps:]) + list(data[:steps])


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given Gregorian month."""
    return calendar.monthrange(year, month)[1]


def leading_blanks(year: int, month: int, offset: int) -> int:
    """Empty cells needed before day 1 when weeks start on *offset* (0=Sunday)."""
    iso_weekday = datetime(year, month, 1).isoweekday()
    return (iso_weekday - offset) % DAYS_PER_WEEK


def trailing_blanks(leading: int, days: int) -> int:
    """Empty cells needed after the last day to complete its row."""
    return -(leading + days) % DAYS_PER_WEEK


def default_weekday_names(now: datetime | None = None) -> list[str]:
    """Abbreviated locale weekday names, Sunday first.

    The names are read off the seven days starting at the Sunday on or
    before *now* (the real current time when omitted), so they follow
    the process locale rather than the rendered month.
    """
    if now is None:
        now = datetime.now()
    anchor = now - timedelta(days=now.isoweekday())
    return [(anchor + timedelta(days=n)).strftime("%a") for n in range(DAYS_PER_WEEK)]


def month_cells(year: int, month: int, offset: int = 0) -> list[list[int | None]]:
    """Return the body rows of the month as day numbers, padding as None.

    Every row has exactly 7 cells; the number of rows varies between 4
    and 6 depending on the month and the week start.
    """
    leading = leading_blanks(year, month, offset)
    days = days_in_month(year, month)
    cells: list[int | None] = [None] * leading
    cells.extend(range(1, days + 1))
    cells.extend([None] * trailing_blanks(leading, days))
    return [cells[i:i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
