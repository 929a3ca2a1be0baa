"""Summary numbers for the week view."""

from collections.abc import Iterable

from extractor.models import (
    WORKWEEK,
    Busiest,
    BusySpan,
    Occurrence,
    OverlapSegment,
    PersonSummary,
    WeekSummary,
    Weekday,
)

from .sweep import count_overlap_blocks


def busy_hours_by_owner(spans_by_weekday: dict[Weekday, list[BusySpan]]) -> dict[str, float]:
    hours: dict[str, float] = {}
    for spans in spans_by_weekday.values():
        for span in spans:
            hours[span.owner] = hours.get(span.owner, 0.0) + span.duration_hours
    return hours


def summarize_week(
    occurrences: list[Occurrence],
    spans_by_weekday: dict[Weekday, list[BusySpan]],
    overlaps: dict[Weekday, list[OverlapSegment]],
) -> WeekSummary:
    """Compute the dashboard counters.

    Args:
        occurrences: Every extracted occurrence.
        spans_by_weekday: Output of the span builder, grouped per weekday.
        overlaps: Output of the overlap sweep.

    Returns:
        WeekSummary. The busiest person is the one with the most span
        hours; on a tie the first one seen wins.
    """
    hours = busy_hours_by_owner(spans_by_weekday)

    busiest = Busiest(owner=None, hours=0.0)
    for owner, owner_hours in hours.items():
        if owner_hours > busiest.hours:
            busiest = Busiest(owner=owner, hours=owner_hours)

    return WeekSummary(
        people_count=len({occ.owner for occ in occurrences}),
        class_count=len(occurrences),
        total_busy_hours=sum(hours.values()),
        overlap_block_count=count_overlap_blocks(overlaps),
        busiest=busiest,
    )


def count_span_intersections(owner: str, spans_by_weekday: dict[Weekday, list[BusySpan]]) -> int:
    """Count the person's spans that intersect someone else's span.

    Unlike ``count_overlap_blocks`` this is per person: a span sharing time
    with three other people still counts once.
    """
    count = 0
    for spans in spans_by_weekday.values():
        others = [span for span in spans if span.owner != owner]
        for span in spans:
            if span.owner != owner:
                continue
            if any(span.start_hour < o.end_hour and o.start_hour < span.end_hour for o in others):
                count += 1
    return count


def summarize_person(
    owner: str,
    occurrences: Iterable[Occurrence],
    spans_by_weekday: dict[Weekday, list[BusySpan]],
) -> PersonSummary:
    """Build the quick view for one person."""
    classes = [occ for occ in occurrences if occ.owner == owner and occ.weekday in WORKWEEK]
    return PersonSummary(
        owner=owner,
        class_count=len(classes),
        busy_hours=busy_hours_by_owner(spans_by_weekday).get(owner, 0.0),
        overlap_count=count_span_intersections(owner, spans_by_weekday),
    )
