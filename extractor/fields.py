"""Heuristics for reading course details out of free-text event fields.

Calendar exports from student information systems put everything into
SUMMARY, LOCATION and DESCRIPTION with no fixed layout, so these parsers
are best-effort pattern matches with fixed fallbacks.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup

from .models import ClassKind


UNKNOWN_COURSE = "Unknown Course"
UNKNOWN_CODE = "UNKNOWN"
TBD = "TBD"
TO_BE_ARRANGED = "TO BE ARRANGED"

COURSE_CODE_PATTERN = re.compile(r"([A-Z]{2,8})\s*(\d{3,4}[A-Z]?)", re.IGNORECASE)
ROOM_FIRST_PATTERN = re.compile(r"^(\d+[A-Z]?)\s+(.+)$", re.IGNORECASE)
BUILDING_FIRST_PATTERN = re.compile(r"^(.+?)\s+(\d+[A-Z]?)$", re.IGNORECASE)

PROFESSOR_PATTERNS = (
    re.compile(r"(?:instructor|professor|prof|teacher):\s*([^,\n]+)", re.IGNORECASE),
    re.compile(r"(?:taught by|with)\s+([^,\n]+)", re.IGNORECASE),
)
CAPITALISED_NAME_PATTERN = re.compile(r"([A-Z][a-z]+\s+[A-Z][a-z]+)(?:\s*,\s*(?:Ph\.?D\.?|Dr\.?))?")
PROFESSOR_STOP_WORDS = ("class", "course", "section")

BUILDING_WORDS = ("Hall", "Building", "Center")


@dataclass(frozen=True)
class CourseInfo:
    code: str
    name: str
    kind: ClassKind


@dataclass(frozen=True)
class LocationInfo:
    building: str
    room: str
    full_location: str


def parse_summary(summary: str) -> CourseInfo:
    """Split an event summary into course code, name and class type.

    Args:
        summary: Event summary, e.g. "CS101 Intro to Programming Lab".

    Returns:
        CourseInfo with the code uppercased ("CS 101"), or "UNKNOWN" when no
        code is found.
    """
    code = UNKNOWN_CODE
    name = summary

    match = COURSE_CODE_PATTERN.search(summary)
    if match:
        code = f"{match.group(1).upper()} {match.group(2)}"
        name = summary.replace(match.group(0), "", 1).strip()

    if len(name) < 3:
        name = summary

    lowered = summary.lower()
    if "lab" in lowered:
        kind = ClassKind.LAB
    elif "recitation" in lowered or "rec" in lowered:
        kind = ClassKind.RECITATION
    elif "seminar" in lowered:
        kind = ClassKind.SEMINAR
    else:
        kind = ClassKind.LECTURE

    return CourseInfo(code=code, name=name, kind=kind)


def parse_location(location: str) -> LocationInfo:
    """Split an event location into building and room.

    Args:
        location: Event location, e.g. "101 Main Hall" or "Main Hall 101".

    Returns:
        LocationInfo; unknown parts are "TBD".
    """
    if not location or not location.strip() or TO_BE_ARRANGED in location.upper():
        return LocationInfo(building=TBD, room=TBD, full_location=TO_BE_ARRANGED)

    if "WEB BASED" in location.upper():
        return LocationInfo(building="Online", room="Web", full_location=location)

    match = ROOM_FIRST_PATTERN.match(location)
    if match:
        return LocationInfo(
            building=match.group(2).strip(),
            room=match.group(1).strip(),
            full_location=location,
        )

    match = BUILDING_FIRST_PATTERN.match(location)
    if match:
        return LocationInfo(
            building=match.group(1).strip(),
            room=match.group(2).strip(),
            full_location=location,
        )

    if any(word in location for word in BUILDING_WORDS):
        return LocationInfo(building=location.strip(), room=TBD, full_location=location)

    # Same shape as a named building; there is no room number to pull out
    return LocationInfo(building=location.strip(), room=TBD, full_location=location)


def description_text(description: str) -> str:
    """Strip markup some exporters put into DESCRIPTION."""
    if "<" not in description:
        return description
    return BeautifulSoup(description, "html.parser").get_text(separator="\n")


def extract_professor(description: str) -> Optional[str]:
    """Find an instructor name in an event description.

    Patterns are tried in order: a labelled name ("Instructor: ..."), a
    "taught by"/"with" phrase, then the second run of two capitalised
    words. A single capitalised pair gives no name.

    Args:
        description: Event description text.

    Returns:
        Instructor name, or None if nothing plausible was found.
    """
    text = description_text(description)

    candidates = []
    for pattern in PROFESSOR_PATTERNS:
        match = pattern.search(text)
        candidates.append(match.group(1) if match else None)
    names = [match.group(0) for match in CAPITALISED_NAME_PATTERN.finditer(text)]
    candidates.append(names[1] if len(names) > 1 else None)

    for candidate in candidates:
        if not candidate:
            continue
        name = candidate.strip()
        lowered = name.lower()
        if len(name) > 3 and not any(word in lowered for word in PROFESSOR_STOP_WORDS):
            return name
    return None


def looks_like_calendar(content: Union[str, bytes]) -> bool:
    """Cheap check that content resembles an iCalendar file.

    This does not guarantee the extractor will find any classes.
    """
    if not content:
        return False
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return "BEGIN:VCALENDAR" in content and "BEGIN:VEVENT" in content
