"""Month-view calendar rendered as an HTML table."""

from __future__ import annotations

import logging
import re
import warnings
from datetime import date, datetime
from typing import Mapping, Sequence

from calendar_logic import default_weekday_names, month_cells, rotate
from dates import DateInput, parse_date, to_calendar_date, weekday_offset
from errors import ConfigError, ParseError
from events import EventIndex

logger = logging.getLogger(__name__)

DEFAULT_CLASSES = {
    "calendar": "SimpleCalendar",
    "leading_day": "SCprefix",
    "trailing_day": "SCsuffix",
    "today": "today",
    "event": "event",
    "events": "events",
}


class SimpleCalendar:
    """Holds the calendar configuration and renders one month from it.

    ``calendar_date`` picks the month to show (default: now). ``today``
    is the day to highlight: ``None`` means the current date and
    ``False`` turns highlighting off.
    """

    def __init__(self, calendar_date: DateInput = None,
                 today: DateInput | bool = None) -> None:
        self.week_day_names: list[str] | None = None
        self.classes: dict[str, str] = dict(DEFAULT_CLASSES)
        self.offset = 0
        self.events = EventIndex()
        self.now: datetime | date = datetime.now()
        self.today: datetime | date | None = None

        self.set_date(calendar_date)
        self.set_today(today)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_date(self, value: DateInput = None) -> None:
        """Set the month to render; ``None`` means the current month."""
        self.now = parse_date(value) or datetime.now()

    def set_today(self, value: DateInput | bool = None) -> None:
        """Set the highlighted day. ``None`` is today, ``False`` disables it."""
        if value is False:
            self.today = None
        elif value is None:
            self.today = datetime.now()
        else:
            self.today = parse_date(value)

    def set_calendar_classes(self, classes: Mapping[str, str]) -> None:
        """Override some of the CSS class names.

        Keys: calendar, leading_day, trailing_day, today, event, events.
        """
        for key, value in classes.items():
            if key not in self.classes:
                raise ConfigError(f"class '{key}' not supported")
            self.classes[key] = value

    def set_week_day_names(self, names: Sequence[str] | None = None) -> None:
        """Set the header labels, Sunday first. ``None`` restores the defaults."""
        if isinstance(names, str):
            raise ConfigError("week day names must be a sequence of 7 strings, not a string")
        if names is not None and len(names) != 7:
            raise ConfigError("week array must have exactly 7 values")
        self.week_day_names = list(names) if names is not None else None

    def set_start_of_week(self, offset: int | str) -> None:
        """Set the first column of the week.

        Accepts 0-6 (0 is Sunday) as an int or numeric text, one of the
        configured week day names, or weekday text such as ``"Monday"``.
        """
        if self.week_day_names is not None and isinstance(offset, str) \
                and offset in self.week_day_names:
            self.offset = self.week_day_names.index(offset)
        elif isinstance(offset, int) and not isinstance(offset, bool):
            self.offset = offset % 7
        elif isinstance(offset, str) and re.fullmatch(r"\s*[+-]?\d+\s*", offset):
            self.offset = int(offset) % 7
        else:
            if not isinstance(offset, str):
                raise ConfigError(f"invalid offset {offset!r}")
            try:
                self.offset = weekday_offset(offset)
            except ParseError as exc:
                raise ConfigError(f"invalid offset {offset!r}") from exc
        logger.debug("Week starts at offset %d", self.offset)

    def add_daily_html(self, html: str, start_date: DateInput,
                       end_date: DateInput = None) -> None:
        """Show *html* on every day from *start_date* to *end_date* inclusive."""
        self.events.add_range(html, start_date, end_date)

    def clear_daily_html(self) -> None:
        self.events.clear()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def weekdays(self) -> list[str]:
        """Header labels before rotation."""
        if self.week_day_names is not None:
            return list(self.week_day_names)
        return default_weekday_names()

    def render(self) -> str:
        """Return the calendar as an HTML table."""
        year, month = self.now.year, self.now.month
        today = to_calendar_date(self.today) if self.today is not None else None
        classes = self.classes

        days_of_week = rotate(self.weekdays(), self.offset)
        rows = month_cells(year, month, self.offset)
        logger.debug("Rendering %04d-%02d (offset %d, %d rows)",
                     year, month, self.offset, len(rows))

        out = [f'<table cellpadding="0" cellspacing="0" class="{classes["calendar"]}"><thead><tr>']
        out.extend(f"<th>{name}</th>" for name in days_of_week)
        out.append("</tr></thead>\n<tbody>\n")

        # padding before day 1 is leading, anything after it trailing
        padding = classes["leading_day"]
        for n, row in enumerate(rows):
            if n:
                out.append("\n")
            out.append("<tr>")
            for i in row:
                if i is None:
                    out.append(f'<td class="{padding}">&nbsp;</td>')
                    continue
                padding = classes["trailing_day"]
                out.append(self._day_cell(date(year, month, i), today))
            out.append("</tr>")

        # a month ending on a full week gets a blank line before </tbody>
        if rows[-1][-1] is not None:
            out.append("\n")
        out.append("\n</tbody></table>\n")
        return "".join(out)

    def _day_cell(self, day: date, today: date | None) -> str:
        classes = self.classes
        if day == today:
            out = [f'<td class="{classes["today"]}">']
        else:
            out = ["<td>"]
        out.append(f'<time datetime="{day.isoformat()}">{day.day}</time>')

        entries = self.events.for_day(day)
        if entries:
            out.append(f'<div class="{classes["events"]}">')
            for entry in entries:
                out.append(f'<div class="{classes["event"]}">{entry.markup}</div>')
            out.append("</div>")

        out.append("</td>")
        return "".join(out)

    def show(self, echo: bool = True) -> str:
        """Deprecated: use :meth:`render` and print the result yourself."""
        warnings.warn("show() is deprecated, use render()", DeprecationWarning, stacklevel=2)
        out = self.render()
        if echo:
            print(out, end="")
        return out

    def __str__(self) -> str:
        return self.render()
