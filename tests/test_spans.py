"""Tests for merging occurrences into busy spans."""

import pytest

from extractor.models import ClassKind, Occurrence, Weekday
from overlap import build_spans, spans_by_weekday


def occurrence(owner, start, end, weekday=Weekday.MONDAY, code="CS 101"):
    return Occurrence(
        owner=owner,
        course_code=code,
        course_name="Course",
        building="Main Hall",
        room="101",
        weekday=weekday,
        start_hour=start,
        end_hour=end,
        kind=ClassKind.LECTURE,
        color="#0F52BA",
    )


class TestMerging:
    """Gap threshold behaviour."""

    def test_six_minute_gap_merges(self):
        spans = build_spans([occurrence("A", 9.0, 10.0), occurrence("A", 10.1, 11.0)])

        [merged] = spans[("A", Weekday.MONDAY)]
        assert (merged.start_hour, merged.end_hour) == (9.0, 11.0)
        assert len(merged.occurrences) == 2

    def test_twelve_minute_gap_splits(self):
        spans = build_spans([occurrence("A", 9.0, 10.0), occurrence("A", 10.2, 11.0)])

        result = spans[("A", Weekday.MONDAY)]
        assert [(s.start_hour, s.end_hour) for s in result] == [(9.0, 10.0), (10.2, 11.0)]

    def test_exact_ten_minute_gap_merges(self):
        spans = build_spans([occurrence("A", 9.0, 10.0), occurrence("A", 10 + 10 / 60, 11.0)])
        assert len(spans[("A", Weekday.MONDAY)]) == 1

    def test_contained_occurrence_keeps_outer_end(self):
        spans = build_spans([occurrence("A", 9.0, 12.0), occurrence("A", 10.0, 11.0)])

        [merged] = spans[("A", Weekday.MONDAY)]
        assert merged.end_hour == 12.0

    def test_unsorted_input(self):
        spans = build_spans([
            occurrence("A", 14.0, 15.0),
            occurrence("A", 9.0, 10.0),
            occurrence("A", 10.0, 11.0),
        ])

        result = spans[("A", Weekday.MONDAY)]
        assert [(s.start_hour, s.end_hour) for s in result] == [(9.0, 11.0), (14.0, 15.0)]
        assert [o.start_hour for o in result[0].occurrences] == [9.0, 10.0]

    def test_people_are_not_merged(self):
        spans = build_spans([occurrence("A", 9.0, 10.0), occurrence("B", 10.0, 11.0)])
        assert len(spans[("A", Weekday.MONDAY)]) == 1
        assert len(spans[("B", Weekday.MONDAY)]) == 1

    def test_days_are_not_merged(self):
        spans = build_spans([
            occurrence("A", 9.0, 10.0, Weekday.MONDAY),
            occurrence("A", 10.0, 11.0, Weekday.TUESDAY),
        ])
        assert set(spans) == {("A", Weekday.MONDAY), ("A", Weekday.TUESDAY)}

    def test_weekend_dropped(self):
        spans = build_spans([occurrence("A", 9.0, 10.0, Weekday.SUNDAY)])
        assert spans == {}

    def test_spans_disjoint_and_sorted(self):
        occs = [
            occurrence("A", start, start + 0.75)
            for start in (8.0, 8.5, 10.0, 13.0, 13.9, 16.0)
        ]
        result = build_spans(occs)[("A", Weekday.MONDAY)]

        for before, after in zip(result, result[1:]):
            assert before.end_hour < after.start_hour

    def test_span_display_times(self):
        [merged] = build_spans([occurrence("A", 13.5, 14.25)])[("A", Weekday.MONDAY)]
        assert merged.start_time == "1:30 PM"
        assert merged.end_time == "2:15 PM"
        assert merged.duration_hours == pytest.approx(0.75)


class TestSpansByWeekday:
    """Regrouping for the calendar grid."""

    def test_every_workday_present(self):
        by_day = spans_by_weekday({})
        assert list(by_day) == [
            Weekday.MONDAY,
            Weekday.TUESDAY,
            Weekday.WEDNESDAY,
            Weekday.THURSDAY,
            Weekday.FRIDAY,
        ]

    def test_sorted_across_people(self):
        spans = build_spans([
            occurrence("A", 11.0, 12.0),
            occurrence("B", 9.0, 10.0),
            occurrence("C", 9.0, 9.5),
        ])
        by_day = spans_by_weekday(spans)

        assert [(s.owner, s.start_hour) for s in by_day[Weekday.MONDAY]] == [
            ("C", 9.0),
            ("B", 9.0),
            ("A", 11.0),
        ]


class TestOccurrenceValidation:
    """Occurrence invariants."""

    def test_start_must_precede_end(self):
        with pytest.raises(ValueError):
            occurrence("A", 10.0, 9.0)

    def test_hours_in_day(self):
        with pytest.raises(ValueError):
            occurrence("A", 23.0, 25.0)
