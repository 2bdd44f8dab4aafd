"""
Event model for EventLog.

An event is a calendar date, an optional category and a description.
Events order by date only, which is what the store sorts on before
writing the record file.
"""

import re
from datetime import date
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

CSV_FIELDS = ["date", "category", "description"]

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

# Largest unit first; at most this many non-zero units are spelled out.
MAX_UNITS = 3


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises:
        ValueError: For any other form, including the compact and week
            forms date.fromisoformat accepts on newer Pythons.
    """
    if not ISO_DATE_RE.fullmatch(value):
        raise ValueError(f"Invalid isoformat string: {value!r}")
    return date.fromisoformat(value)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def humanize_days(start: date, end: date, max_units: int = MAX_UNITS) -> str:
    """
    Spell out the distance between two dates in years, months, weeks and days.

    The order of the arguments does not matter; the result is always the
    absolute distance, e.g. "1 year, 2 months, 3 days".
    """
    if start > end:
        start, end = end, start
    delta = relativedelta(end, start)
    units = [
        (delta.years, "year"),
        (delta.months, "month"),
        (delta.days // 7, "week"),
        (delta.days % 7, "day"),
    ]
    parts: List[str] = [_plural(n, unit) for n, unit in units if n]
    return ", ".join(parts[:max_units])


class Event:
    """A single dated entry in the event log."""

    __slots__ = ("date", "category", "description")

    def __init__(self, date: date, category: Optional[str], description: str):
        self.date = date
        # No category and an empty category mean the same thing.
        self.category = category or ""
        self.description = description

    @property
    def has_category(self) -> bool:
        return bool(self.category)

    def relative_time(self, today: Optional[date] = None) -> str:
        """
        Describe when the event happens relative to today.

        Returns "today" for a same-day event, "<duration> ago" for past
        events and "in <duration>" for future ones.
        """
        today = today or date.today()
        difference = (today - self.date).days
        if difference == 0:
            return "today"
        duration = humanize_days(self.date, today)
        if difference < 0:
            return f"in {duration}"
        return f"{duration} ago"

    def to_row(self) -> Dict[str, str]:
        return {
            "date": self.date.isoformat(),
            "category": self.category,
            "description": self.description,
        }

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> "Event":
        """
        Build an event from a CSV row.

        Raises:
            ValueError: If the date is not an ISO 8601 calendar date or the
                description is empty.
        """
        description = row["description"]
        if not description:
            raise ValueError("empty description")
        return cls(parse_iso_date(row["date"]), row["category"], description)

    def __str__(self):
        category = f" ({self.category})" if self.category else ""
        return f"{self.date.isoformat()}: {self.description}{category}"

    def __repr__(self):
        return (
            f"Event(date={self.date!r}, category={self.category!r}, "
            f"description={self.description!r})"
        )

    def __lt__(self, other: "Event") -> bool:
        return self.date < other.date

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return (self.date, self.category, self.description) == (
            other.date,
            other.category,
            other.description,
        )

    def __hash__(self):
        return hash((self.date, self.category, self.description))
