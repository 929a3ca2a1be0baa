"""Data models for extracted classes, busy spans and overlaps."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional


class Weekday(IntEnum):
    """Day of week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


WORKWEEK = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)


class ClassKind(str, Enum):
    """Type of class meeting, guessed from the event summary."""

    LECTURE = "Lecture"
    LAB = "Lab"
    RECITATION = "Recitation"
    SEMINAR = "Seminar"


def format_hour(hour: float) -> str:
    """Format a fractional hour of day as 12-hour clock text.

    Args:
        hour: Hour of day, e.g. 13.5.

    Returns:
        Display string such as "1:30 PM".
    """
    total_minutes = round(hour * 60)
    whole_hour, minute = divmod(total_minutes, 60)
    period = "PM" if whole_hour >= 12 else "AM"
    display_hour = whole_hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


@dataclass(frozen=True)
class Occurrence:
    """One class meeting of one person on one weekday."""

    owner: str
    course_code: str
    course_name: str
    building: str
    room: str
    weekday: Weekday
    start_hour: float
    end_hour: float
    kind: ClassKind
    color: str = field(default="")
    professor: Optional[str] = field(default=None)
    full_location: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < 24:
            raise ValueError(f"Start hour must be in [0, 24), got {self.start_hour}")
        if not 0 < self.end_hour <= 24:
            raise ValueError(f"End hour must be in (0, 24], got {self.end_hour}")
        if self.start_hour >= self.end_hour:
            raise ValueError("Start hour must be before end hour")

    @property
    def start_time(self) -> str:
        return format_hour(self.start_hour)

    @property
    def end_time(self) -> str:
        return format_hour(self.end_hour)

    @property
    def duration_minutes(self) -> int:
        return round((self.end_hour - self.start_hour) * 60)


@dataclass(frozen=True)
class BusySpan:
    """Merged block of back-to-back classes for one person on one weekday."""

    owner: str
    weekday: Weekday
    start_hour: float
    end_hour: float
    color: str
    occurrences: tuple[Occurrence, ...]

    @property
    def start_time(self) -> str:
        return format_hour(self.start_hour)

    @property
    def end_time(self) -> str:
        return format_hour(self.end_hour)

    @property
    def duration_hours(self) -> float:
        return self.end_hour - self.start_hour

    @property
    def signature(self) -> tuple[str, float, float]:
        """Identity used when comparing participant sets."""
        return (self.owner, self.start_hour, self.end_hour)


@dataclass
class OverlapSegment:
    """Time range on one weekday when two or more people are busy."""

    weekday: Weekday
    start_hour: float
    end_hour: float
    participants: tuple[BusySpan, ...]

    @property
    def owners(self) -> list[str]:
        seen: list[str] = []
        for span in self.participants:
            if span.owner not in seen:
                seen.append(span.owner)
        return seen

    @property
    def occurrences(self) -> list[Occurrence]:
        return [occ for span in self.participants for occ in span.occurrences]

    @property
    def duration_minutes(self) -> int:
        return round((self.end_hour - self.start_hour) * 60)

    def by_owner(self) -> dict[str, list[Occurrence]]:
        """Group participating classes per person.

        Returns:
            Mapping of owner to their classes sorted by time, with owners
            in alphabetical order.
        """
        grouped: dict[str, list[Occurrence]] = {}
        for occ in self.occurrences:
            grouped.setdefault(occ.owner, []).append(occ)
        return {
            owner: sorted(grouped[owner], key=lambda o: (o.start_hour, o.end_hour))
            for owner in sorted(grouped)
        }


@dataclass(frozen=True)
class Busiest:
    owner: Optional[str]
    hours: float


@dataclass(frozen=True)
class WeekSummary:
    """Dashboard counters for the whole week."""

    people_count: int
    class_count: int
    total_busy_hours: float
    overlap_block_count: int
    busiest: Busiest


@dataclass(frozen=True)
class PersonSummary:
    """Quick view of one person's week."""

    owner: str
    class_count: int
    busy_hours: float
    overlap_count: int
