"""iCalendar exporter for overlap segments."""

import hashlib
from datetime import date, datetime, time, timedelta

from icalendar import Calendar, Event, vRecur

from extractor.models import OverlapSegment
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that writes overlap segments as recurring weekly events.

    Times are written as floating local times; the segments carry no
    timezone.
    """

    PRODID = "-//whenwefree//Schedule Overlaps//EN"
    UID_DOMAIN = "whenwefree.local"

    def __init__(self, calendar_name: str = "Schedule Overlaps") -> None:
        """Initialize the iCalendar transformer.

        Args:
            calendar_name: Value written to X-WR-CALNAME.
        """
        super().__init__()
        self._calendar_name = calendar_name

    def _generate_uid(self, segment: OverlapSegment, start_date: date) -> str:
        """Generate a stable identifier for an overlap segment.

        Args:
            segment: The overlap segment.
            start_date: Start date of the export period.

        Returns:
            Unique identifier string.
        """
        unique_string = f"{self.segment_key(segment)}-{start_date}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@" + self.UID_DOMAIN

    def _at_hour(self, day: date, hour: float) -> datetime:
        # 24.0 is midnight at the end of the day
        minutes = round(hour * 60)
        return datetime.combine(day, time(0, 0)) + timedelta(minutes=minutes)

    def transform(
        self,
        segments: list[OverlapSegment],
        start_date: date,
        end_date: date
    ) -> Calendar:
        """Transform overlap segments into iCalendar format.

        Args:
            segments: Overlap segments of a single week.
            start_date: First day of the export period.
            end_date: Last day of the export period.

        Returns:
            iCalendar Calendar object.
        """
        calendar = Calendar()
        calendar.add("prodid", self.PRODID)
        calendar.add("version", "2.0")
        calendar.add("calscale", "GREGORIAN")
        calendar.add("method", "PUBLISH")
        calendar.add("x-wr-calname", self._calendar_name)

        stamp = datetime.now().replace(microsecond=0)

        for segment in self.ordered(segments):
            ical_event = Event()

            first_date = self.first_occurrence(segment.weekday, start_date)
            start_datetime = self._at_hour(first_date, segment.start_hour)
            end_datetime = self._at_hour(first_date, segment.end_hour)

            ical_event.add("uid", self._generate_uid(segment, start_date))
            ical_event.add("dtstart", start_datetime)
            ical_event.add("dtend", end_datetime)
            ical_event.add("dtstamp", stamp)
            ical_event.add("summary", f"Overlap: {', '.join(segment.owners)}")
            ical_event.add("description", self.describe(segment))

            until_datetime = datetime.combine(end_date, end_datetime.time())
            ical_event.add("rrule", vRecur({"FREQ": "WEEKLY", "UNTIL": until_datetime}))

            calendar.add_component(ical_event)

        return self._set_result(calendar)

    def _to_bytes(self, result: Calendar) -> bytes:
        return result.to_ical()
