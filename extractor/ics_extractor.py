"""Class extraction from iCalendar exports."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from icalendar import Calendar

from .fields import (
    UNKNOWN_COURSE,
    extract_professor,
    parse_location,
    parse_summary,
)
from .models import Occurrence, Weekday
from .values import CalendarValue, RecurrenceRule

logger = logging.getLogger(__name__)


class CalendarParseError(ValueError):
    """Raised when a document is not an iCalendar file at all."""


@dataclass(frozen=True)
class Progress:
    """Coarse progress report for UI feedback."""

    stage: str
    percent: float
    message: str


ProgressSink = Callable[[Progress], None]


@dataclass
class ExtractionResult:
    """Classes found in one calendar document."""

    owner: str
    occurrences: list[Occurrence] = field(default_factory=list)
    events_found: int = 0
    events_skipped: int = 0

    @property
    def message(self) -> str:
        return (
            f"Found {len(self.occurrences)} classes, "
            f"skipped {self.events_skipped} invalid events."
        )


class ICSExtractor:
    """Extractor turning VEVENTs of an .ics export into class occurrences.

    A malformed event never fails the whole document: it is logged,
    counted as skipped and left out of the result.
    """

    DAY_CODES = {
        "SU": Weekday.SUNDAY,
        "MO": Weekday.MONDAY,
        "TU": Weekday.TUESDAY,
        "WE": Weekday.WEDNESDAY,
        "TH": Weekday.THURSDAY,
        "FR": Weekday.FRIDAY,
        "SA": Weekday.SATURDAY,
    }
    MIN_YEAR = 1900
    MAX_YEAR = 2100

    def extract(
        self,
        content: Union[str, bytes],
        owner: str,
        color: str,
        on_progress: Optional[ProgressSink] = None,
    ) -> ExtractionResult:
        """Extract all class occurrences from a calendar document.

        Args:
            content: Raw iCalendar text.
            owner: Display name of the person the calendar belongs to.
            color: Display color (hex RGB) attached to every occurrence.
            on_progress: Optional callable receiving Progress reports.

        Returns:
            ExtractionResult with the occurrences and skip counts.

        Raises:
            CalendarParseError: If the content cannot be parsed as a calendar.
        """
        self._report(on_progress, "parsing", 30, "Parsing calendar data...")
        try:
            calendar = Calendar.from_ical(content)
        except (ValueError, IndexError, KeyError) as e:
            raise CalendarParseError(f"Failed to parse calendar for {owner}: {e}") from e
        if calendar.name != "VCALENDAR":
            raise CalendarParseError(
                f"Failed to parse calendar for {owner}: expected VCALENDAR, got {calendar.name}"
            )

        self._report(on_progress, "extracting", 50, "Extracting course information...")
        events = calendar.walk("VEVENT")
        result = ExtractionResult(owner=owner, events_found=len(events))

        for index, event in enumerate(events):
            percent = 50 + index / max(len(events), 1) * 40
            self._report(
                on_progress,
                "extracting",
                percent,
                f"Processing event {index + 1}/{len(events)}...",
            )
            try:
                occurrences = self._parse_event(event, owner, color)
            except (ValueError, TypeError, AttributeError, KeyError) as e:
                logger.warning("Skipping event %d for %s: %s", index + 1, owner, e)
                result.events_skipped += 1
                continue

            if occurrences:
                result.occurrences.extend(occurrences)
            else:
                result.events_skipped += 1

        logger.debug("%s: %s", owner, result.message)
        self._report(on_progress, "complete", 100, f"Processing complete! {result.message}")
        return result

    def _parse_event(self, event: Any, owner: str, color: str) -> list[Occurrence]:
        """Turn one VEVENT into an occurrence per weekday it meets on.

        Args:
            event: ``icalendar`` Event component.
            owner: Person the event belongs to.
            color: Display color of that person.

        Returns:
            Occurrences of the event, possibly empty.

        Raises:
            ValueError: If the event dates are unusable.
        """
        summary = self._first_text(event, "summary") or UNKNOWN_COURSE
        location = self._first_text(event, "location")
        description = self._first_text(event, "description")

        dtstart = CalendarValue.from_property(event.get("dtstart"))
        dtend = CalendarValue.from_property(event.get("dtend"))

        if dtstart is None or dtend is None:
            raise ValueError(f"missing start or end in {summary!r}")
        if not self._is_valid_date(dtstart) or not self._is_valid_date(dtend):
            raise ValueError(f"date out of range in {summary!r}")
        if not self._has_time(dtstart) or not self._has_time(dtend):
            raise ValueError(f"all-day event {summary!r}")
        if dtstart.compare(dtend) >= 0:
            raise ValueError(f"event {summary!r} ends before it starts")

        rule = RecurrenceRule.from_property(event.get("rrule"))
        course = parse_summary(summary)
        place = parse_location(location)
        professor = extract_professor(description)

        start_hour = dtstart.hour_of_day
        end_hour = dtend.hour_of_day
        if start_hour == end_hour or not 0 <= start_hour <= 24 or not 0 <= end_hour <= 24:
            return []

        return [
            Occurrence(
                owner=owner,
                course_code=course.code,
                course_name=course.name,
                building=place.building,
                room=place.room,
                weekday=weekday,
                start_hour=start_hour,
                end_hour=end_hour,
                kind=course.kind,
                color=color,
                professor=professor,
                full_location=place.full_location,
            )
            for weekday in self._event_weekdays(dtstart, rule)
        ]

    def _first_text(self, event: Any, name: str) -> str:
        """Read a text property, using the first one if it is repeated."""
        value = event.get(name)
        if isinstance(value, list):
            value = value[0] if value else None
        return str(value or "")

    def _is_valid_date(self, value: CalendarValue) -> bool:
        return (
            self.MIN_YEAR <= value.year <= self.MAX_YEAR
            and 1 <= value.month <= 12
            and 1 <= value.day <= 31
        )

    def _has_time(self, value: CalendarValue) -> bool:
        if value.is_date_only:
            return False
        return 0 <= value.hour <= 23 and 0 <= value.minute <= 59

    def _event_weekdays(
        self,
        dtstart: CalendarValue,
        rule: Optional[RecurrenceRule]
    ) -> list[Weekday]:
        """Resolve the weekdays an event meets on.

        Weekly rules with a BYDAY list give one weekday per listed day;
        anything else falls back to the weekday of the first meeting.

        Args:
            dtstart: Start of the first meeting.
            rule: Recurrence rule of the event, if any.

        Returns:
            Weekdays in the order they appear in the rule.
        """
        days: list[Weekday] = []
        if rule is not None and rule.is_weekly:
            for code in rule.by_day:
                day = self.day_from_code(code)
                if day is not None and day not in days:
                    days.append(day)

        if not days:
            days.append(Weekday(dtstart.weekday()))
        return days

    @classmethod
    def day_from_code(cls, code: str) -> Optional[Weekday]:
        """Map a BYDAY code such as "MO" or "1MO" to a weekday."""
        return cls.DAY_CODES.get(re.sub(r"^\d+", "", code).upper())

    def _report(
        self,
        on_progress: Optional[ProgressSink],
        stage: str,
        percent: float,
        message: str
    ) -> None:
        if on_progress is not None:
            on_progress(Progress(stage=stage, percent=percent, message=message))


def extract(
    content: Union[str, bytes],
    owner: str,
    color: str,
    on_progress: Optional[ProgressSink] = None,
) -> list[Occurrence]:
    """Extract class occurrences from one calendar document.

    Shortcut for ``ICSExtractor().extract(...).occurrences``.
    """
    return ICSExtractor().extract(content, owner, color, on_progress).occurrences
