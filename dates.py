"""Turn the loose date inputs the calendar accepts into real dates.

Three shapes are understood:

* ``datetime`` / ``date`` instances, used as they are
* ``int`` Unix timestamps, resolved in the local timezone
* ``str`` date text: relative phrases such as ``"today"``,
  ``"next monday"`` or ``"+2 weeks"`` are resolved with
  :mod:`dateutil.relativedelta`, anything else goes to
  :mod:`dateutil.parser`

``None`` (and anything else) normalizes to ``None`` so callers can
substitute their own default.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterator, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from errors import ParseError

DateInput = Union[datetime, date, int, str, None]

_MIDNIGHT = relativedelta(hour=0, minute=0, second=0, microsecond=0)

_KEYWORDS = {
    "now": relativedelta(),
    "today": _MIDNIGHT,
    "midnight": _MIDNIGHT,
    "tomorrow": relativedelta(days=+1, hour=0, minute=0, second=0, microsecond=0),
    "yesterday": relativedelta(days=-1, hour=0, minute=0, second=0, microsecond=0),
}

_WEEKDAYS = {"mon": MO, "tue": TU, "wed": WE, "thu": TH, "fri": FR, "sat": SA, "sun": SU}

_UNITS = {
    "second": "seconds", "sec": "seconds", "minute": "minutes", "min": "minutes",
    "hour": "hours", "day": "days", "week": "weeks", "month": "months", "year": "years",
}

_WEEKDAY_RE = re.compile(r"(next|last|this)\s+(mon|tue|wed|thu|fri|sat|sun)[a-z]*")
_TERM = r"([+-]?\d+)\s*(second|sec|minute|min|hour|day|week|month|year)s?"
_TERM_RE = re.compile(_TERM)
_OFFSET_RE = re.compile(rf"(?:{_TERM}\s*)+(ago)?")


def parse_date(value: DateInput) -> datetime | date | None:
    """Normalize *value* to a ``datetime``/``date``, or ``None``.

    Raises ParseError for text the parser rejects and for timestamps
    outside the platform's range.
    """
    if isinstance(value, (datetime, date)):
        return value

    # bool is an int subclass, but False/True are flags, not timestamps
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise ParseError(f"invalid timestamp {value!r}") from exc

    if isinstance(value, str):
        relative = parse_relative(value, datetime.now())
        if relative is not None:
            return relative
        try:
            return date_parser.parse(value)
        except (date_parser.ParserError, OverflowError, ValueError) as exc:
            raise ParseError(f"unable to parse date {value!r}") from exc

    return None


def parse_relative(text: str, now: datetime) -> datetime | None:
    """Resolve relative date text against *now*, or return None.

    Understands ``now``, ``today``, ``midnight``, ``tomorrow``,
    ``yesterday``, ``next|last|this <weekday>`` and offsets such as
    ``+1 day``, ``-2 weeks 3 days`` or ``3 months ago``.
    """
    text = " ".join(text.lower().split())

    delta = _KEYWORDS.get(text)
    if delta is not None:
        return now + delta

    match = _WEEKDAY_RE.fullmatch(text)
    if match:
        which, day = match.groups()
        weekday = _WEEKDAYS[day]
        if which == "next":
            return now + _MIDNIGHT + relativedelta(days=+1, weekday=weekday(+1))
        if which == "last":
            return now + _MIDNIGHT + relativedelta(days=-1, weekday=weekday(-1))
        return now + _MIDNIGHT + relativedelta(weekday=weekday(+1))

    match = _OFFSET_RE.fullmatch(text)
    if match:
        sign = -1 if text.endswith("ago") else 1
        delta = relativedelta()
        for amount, unit in _TERM_RE.findall(text):
            delta += relativedelta(**{_UNITS[unit]: sign * int(amount)})
        return now + delta

    return None


def to_calendar_date(value: datetime | date) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from *start* to *end*, both inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def weekday_offset(text: str) -> int:
    """Resolve weekday text such as ``"Monday"`` or ``"thu"`` to 0=Sunday..6.

    Any other date text resolves to the weekday it falls on.
    """
    parsed = parse_date(text)
    return parsed.isoweekday() % 7
