"""Typed wrappers around decoded iCalendar values.

The extractor only ever looks at a handful of fields of a DTSTART/DTEND
value or an RRULE. These classes pin those fields down so the rest of the
code never touches ``icalendar`` objects directly.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from icalendar import vDDDTypes, vRecur


@dataclass(frozen=True)
class CalendarValue:
    """Wall-clock date/time read from a DTSTART or DTEND property."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    is_date_only: bool = False

    @classmethod
    def from_property(cls, prop: Any) -> Optional["CalendarValue"]:
        """Build a value from an ``icalendar`` date-time property.

        Args:
            prop: Property as returned by ``component.get("dtstart")``.

        Returns:
            CalendarValue, or None if the property is missing or does not
            hold a date or date-time.
        """
        if isinstance(prop, list):
            prop = prop[0] if prop else None
        # Unparseable values come back as broken properties, not vDDDTypes
        if not isinstance(prop, vDDDTypes):
            return None
        value = prop.dt
        # datetime is a subclass of date, check it first
        if isinstance(value, datetime):
            return cls(
                year=value.year,
                month=value.month,
                day=value.day,
                hour=value.hour,
                minute=value.minute,
                second=value.second,
            )
        if isinstance(value, date):
            return cls(year=value.year, month=value.month, day=value.day, is_date_only=True)
        return None

    @property
    def hour_of_day(self) -> float:
        return self.hour + self.minute / 60

    def weekday(self) -> int:
        """Return the day of week, Monday is 0.

        Raises:
            ValueError: If the stored fields are not a real calendar date.
        """
        return date(self.year, self.month, self.day).weekday()

    def compare(self, other: "CalendarValue") -> int:
        """Compare two values chronologically.

        Returns:
            -1, 0 or 1 as this value is before, equal to or after ``other``.
        """
        mine = (self.year, self.month, self.day, self.hour, self.minute, self.second)
        theirs = (other.year, other.month, other.day, other.hour, other.minute, other.second)
        return (mine > theirs) - (mine < theirs)


@dataclass(frozen=True)
class RecurrenceRule:
    """The parts of an RRULE the extractor understands."""

    frequency: Optional[str]
    by_day: tuple[str, ...] = ()

    @classmethod
    def from_property(cls, prop: Any) -> Optional["RecurrenceRule"]:
        """Build a rule from an ``icalendar`` ``vRecur``.

        Args:
            prop: Property as returned by ``component.get("rrule")``; when an
                event carries several RRULEs only the first is used.

        Returns:
            RecurrenceRule, or None if the event has no rule.
        """
        if isinstance(prop, list):
            prop = prop[0] if prop else None
        # A rule icalendar could not parse is treated as no rule at all
        if not isinstance(prop, vRecur):
            return None

        freq = prop.get("FREQ")
        if isinstance(freq, (list, tuple)):
            freq = freq[0] if freq else None

        by_day = prop.get("BYDAY") or []
        if isinstance(by_day, str):
            by_day = [by_day]

        return cls(
            frequency=str(freq).upper() if freq else None,
            by_day=tuple(str(day) for day in by_day),
        )

    @property
    def is_weekly(self) -> bool:
        return self.frequency == "WEEKLY"
