"""Per-day markup registered against date ranges."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from dates import DateInput, iter_days, parse_date, to_calendar_date
from errors import InvalidInput, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventEntry:
    """One piece of markup; the same entry is stored under every day it spans."""

    sequence_id: int
    markup: str


class EventIndex:
    """Sparse day -> [EventEntry, ...] mapping, insertion ordered.

    Sequence ids come from a counter owned by the index. ``clear()``
    empties the mapping but keeps counting, so ids stay unique for the
    lifetime of the instance.
    """

    def __init__(self) -> None:
        self._days: dict[date, list[EventEntry]] = {}
        self._next_id = 0

    def add_range(self, markup: str, start: DateInput, end: DateInput = None) -> EventEntry:
        """Register *markup* on every day from *start* to *end* inclusive.

        *end* defaults to *start*, as does any falsy end such as ``0`` or
        ``""``. Only the calendar day of each bound matters; times of day
        are ignored.
        """
        try:
            start_value = parse_date(start)
        except ParseError as exc:
            raise InvalidInput("invalid start time") from exc
        if start_value is None:
            raise InvalidInput("invalid start time")

        end_value = start_value
        if end:
            try:
                end_value = parse_date(end)
            except ParseError as exc:
                raise InvalidInput("invalid end time") from exc
        if end_value is None:
            raise InvalidInput("invalid end time")

        first = to_calendar_date(start_value)
        last = to_calendar_date(end_value)
        if last < first:
            raise InvalidInput("end must come after start")

        entry = EventEntry(self._next_id, markup)
        self._next_id += 1

        span = 0
        for day in iter_days(first, last):
            self._days.setdefault(day, []).append(entry)
            span += 1

        logger.debug("Registered entry %d on %s..%s (%d days)",
                     entry.sequence_id, first, last, span)
        return entry

    def for_day(self, day: date) -> list[EventEntry]:
        """Entries for *day*, oldest registration first."""
        return list(self._days.get(day, ()))

    def clear(self) -> None:
        self._days = {}
        logger.debug("Cleared event index")

    def __contains__(self, day: object) -> bool:
        return day in self._days

    def __len__(self) -> int:
        """Number of days carrying at least one entry."""
        return len(self._days)
