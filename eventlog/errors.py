"""
Exceptions raised by EventLog.

Every storage failure derives from EventsError so the CLI can report it
and exit with a non-zero status in one place.
"""

import click


class EventsError(Exception):
    """Base class for event storage errors."""

    pass


class PathUnresolved(EventsError):
    """The user's home directory could not be determined."""

    pass


class DirectoryMissing(EventsError):
    """The storage directory does not exist."""

    pass


class FileMissing(EventsError):
    """The record file does not exist."""

    pass


class ParseError(EventsError):
    """The record file could not be decoded into events."""

    pass


class WriteError(EventsError):
    """The record file could not be written."""

    pass


class OptionParseError(click.UsageError):
    """Invalid combination of command options."""

    pass
