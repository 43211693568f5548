"""Exceptions raised by the calendar when it is configured with bad input."""


class CalendarError(Exception):
    """Base class for every error raised by this package."""


class ParseError(CalendarError, ValueError):
    """Date text (or a timestamp) could not be turned into a date."""


class InvalidInput(CalendarError, ValueError):
    """A value was understood but is not acceptable here."""


class ConfigError(InvalidInput):
    """The calendar was asked to use an unsupported setting."""
