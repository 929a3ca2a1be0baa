"""Extractor module for reading class schedules out of iCalendar exports."""

from .fields import looks_like_calendar
from .ics_extractor import (
    CalendarParseError,
    ExtractionResult,
    ICSExtractor,
    Progress,
    extract,
)
from .models import (
    BusySpan,
    ClassKind,
    Occurrence,
    OverlapSegment,
    PersonSummary,
    WeekSummary,
    Weekday,
    WORKWEEK,
)
from .uploads import DEFAULT_PALETTE, CalendarUpload

__all__ = [
    "BusySpan",
    "CalendarParseError",
    "CalendarUpload",
    "ClassKind",
    "DEFAULT_PALETTE",
    "ExtractionResult",
    "ICSExtractor",
    "Occurrence",
    "OverlapSegment",
    "PersonSummary",
    "Progress",
    "WORKWEEK",
    "WeekSummary",
    "Weekday",
    "extract",
    "looks_like_calendar",
]
