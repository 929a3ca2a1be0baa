"""Tests for the summary, location and description heuristics."""

from extractor.fields import (
    extract_professor,
    looks_like_calendar,
    parse_location,
    parse_summary,
)
from extractor.models import ClassKind


class TestParseSummary:
    """Course code, name and type from SUMMARY."""

    def test_code_with_space(self):
        info = parse_summary("CS 101 Intro to Programming")
        assert info.code == "CS 101"
        assert info.name == "Intro to Programming"
        assert info.kind == ClassKind.LECTURE

    def test_code_is_uppercased(self):
        info = parse_summary("math2010 Calculus II")
        assert info.code == "MATH 2010"
        assert info.name == "Calculus II"

    def test_trailing_letter_kept(self):
        assert parse_summary("PHYS 101L Physics").code == "PHYS 101L"

    def test_no_code(self):
        info = parse_summary("Study group")
        assert info.code == "UNKNOWN"
        assert info.name == "Study group"

    def test_short_remainder_falls_back_to_summary(self):
        info = parse_summary("CS 101 A")
        assert info.name == "CS 101 A"

    def test_lab(self):
        assert parse_summary("CHEM 110 General Chemistry Lab").kind == ClassKind.LAB

    def test_recitation(self):
        assert parse_summary("MATH 201 Recitation").kind == ClassKind.RECITATION

    def test_rec_abbreviation(self):
        assert parse_summary("MATH 201 Rec 3").kind == ClassKind.RECITATION

    def test_seminar(self):
        assert parse_summary("HIST 300 Seminar in History").kind == ClassKind.SEMINAR

    def test_lab_wins_over_recitation(self):
        assert parse_summary("BIO 100 Lab Recitation").kind == ClassKind.LAB


class TestParseLocation:
    """Building and room from LOCATION."""

    def test_room_first(self):
        info = parse_location("101 Main Hall")
        assert info.building == "Main Hall"
        assert info.room == "101"
        assert info.full_location == "101 Main Hall"

    def test_building_first(self):
        info = parse_location("Science Center 204B")
        assert info.building == "Science Center"
        assert info.room == "204B"

    def test_empty(self):
        info = parse_location("")
        assert (info.building, info.room, info.full_location) == ("TBD", "TBD", "TO BE ARRANGED")

    def test_to_be_arranged(self):
        info = parse_location("to be arranged")
        assert info.building == "TBD"
        assert info.full_location == "TO BE ARRANGED"

    def test_web_based(self):
        info = parse_location("WEB BASED COURSE")
        assert (info.building, info.room) == ("Online", "Web")

    def test_named_hall_without_room(self):
        info = parse_location("Memorial Hall")
        assert info.building == "Memorial Hall"
        assert info.room == "TBD"

    def test_unrecognised(self):
        info = parse_location("Library basement")
        assert info.building == "Library basement"
        assert info.room == "TBD"


class TestExtractProfessor:
    """Instructor name from DESCRIPTION."""

    def test_labelled(self):
        assert extract_professor("Instructor: Jane Smith, Section 2") == "Jane Smith"

    def test_taught_by(self):
        assert extract_professor("This course is taught by Alan Turing") == "Alan Turing"

    def test_single_capitalised_name(self):
        assert extract_professor("office hours: see Grace Hopper") is None

    def test_second_capitalised_name(self):
        assert extract_professor("Grace Hopper and Alan Turing") == "Alan Turing"

    def test_rejects_short(self):
        assert extract_professor("Prof: Li") is None

    def test_rejects_course_words(self):
        assert extract_professor("with the whole class") is None

    def test_empty(self):
        assert extract_professor("") is None

    def test_html_description(self):
        assert extract_professor("<p>Instructor: <b>Ada Lovelace</b></p>") == "Ada Lovelace"


class TestLooksLikeCalendar:
    """Structural pre-check."""

    def test_valid(self, alice_calendar):
        assert looks_like_calendar(alice_calendar)

    def test_bytes(self, alice_calendar):
        assert looks_like_calendar(alice_calendar.encode())

    def test_no_events(self):
        assert not looks_like_calendar("BEGIN:VCALENDAR\r\nEND:VCALENDAR")

    def test_empty(self):
        assert not looks_like_calendar("")
