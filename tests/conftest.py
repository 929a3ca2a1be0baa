"""Shared fixtures and calendar builders for whenwefree tests.

Usage:
    def test_something(make_calendar):
        content = make_calendar(vevent(summary="CS 101", start="20250106T090000",
                                       end="20250106T100000"))
"""

from typing import Optional

import pytest

from extractor.models import BusySpan, Weekday


# 2025-01-06 is a Monday; the week below is used throughout the tests.
MONDAY = "20250106"
TUESDAY = "20250107"
WEDNESDAY = "20250108"
SATURDAY = "20250111"


def vevent(
    summary: Optional[str] = "CS 101 Intro to Programming",
    start: Optional[str] = f"{MONDAY}T090000",
    end: Optional[str] = f"{MONDAY}T101500",
    location: Optional[str] = "101 Main Hall",
    description: Optional[str] = None,
    rrule: Optional[str] = None,
    all_day: bool = False,
) -> str:
    """Build the text of one VEVENT; pass None to leave a property out."""
    lines = ["BEGIN:VEVENT", f"UID:{abs(hash((summary, start, end, rrule)))}@test"]
    if summary is not None:
        lines.append(f"SUMMARY:{summary}")
    value = ";VALUE=DATE" if all_day else ""
    if start is not None:
        lines.append(f"DTSTART{value}:{start}")
    if end is not None:
        lines.append(f"DTEND{value}:{end}")
    if location is not None:
        lines.append(f"LOCATION:{location}")
    if description is not None:
        lines.append(f"DESCRIPTION:{description}")
    if rrule is not None:
        lines.append(f"RRULE:{rrule}")
    lines.append("END:VEVENT")
    return "\r\n".join(lines)


def calendar(*events: str) -> str:
    """Wrap VEVENT texts into a VCALENDAR document."""
    return "\r\n".join(
        ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//test//whenwefree//EN", *events, "END:VCALENDAR"]
    ) + "\r\n"


def span(owner: str, start: float, end: float, weekday: Weekday = Weekday.MONDAY) -> BusySpan:
    """Build a busy span with no source occurrences."""
    return BusySpan(owner, weekday, start, end, "#000000", ())


@pytest.fixture
def make_calendar():
    return calendar


@pytest.fixture
def alice_calendar() -> str:
    return calendar(
        vevent(summary="CS 101 Intro to Programming", start=f"{MONDAY}T090000", end=f"{MONDAY}T101500")
    )


@pytest.fixture
def bob_calendar() -> str:
    return calendar(
        vevent(summary="MATH 201 Linear Algebra", start=f"{MONDAY}T093000", end=f"{MONDAY}T100000")
    )
