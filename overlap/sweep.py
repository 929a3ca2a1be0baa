"""Sweep-line detection of times when several people are busy at once."""

from extractor.models import BusySpan, OverlapSegment, Weekday


TOUCH_TOLERANCE = 1e-6

_END = 0
_START = 1


def _participant_key(participants: tuple[BusySpan, ...]) -> frozenset[tuple[str, float, float]]:
    return frozenset(span.signature for span in participants)


def _sweep_day(weekday: Weekday, spans: list[BusySpan]) -> list[OverlapSegment]:
    # Ends sort before starts at the same instant so spans that only touch
    # never count as overlapping.
    points: list[tuple[float, int, BusySpan]] = []
    for span in spans:
        points.append((span.start_hour, _START, span))
        points.append((span.end_hour, _END, span))
    points.sort(key=lambda point: (point[0], point[1]))

    segments: list[OverlapSegment] = []
    active: dict[BusySpan, int] = {}
    last_time = None

    for time, marker, span in points:
        if last_time is not None and time > last_time and len(active) >= 2:
            segments.append(OverlapSegment(weekday, last_time, time, tuple(active)))

        if marker == _START:
            active[span] = active.get(span, 0) + 1
        else:
            remaining = active.get(span, 1) - 1
            if remaining <= 0:
                active.pop(span, None)
            else:
                active[span] = remaining
        last_time = time

    return merge_touching(segments)


def merge_touching(segments: list[OverlapSegment]) -> list[OverlapSegment]:
    """Join consecutive segments that touch and share the same participants.

    Args:
        segments: Segments of one weekday, sorted by start.

    Returns:
        New list of segments; the input is left unchanged.
    """
    if not segments:
        return []

    merged: list[OverlapSegment] = []
    first = segments[0]
    current = OverlapSegment(first.weekday, first.start_hour, first.end_hour, first.participants)

    for segment in segments[1:]:
        touches = (
            segment.start_hour <= current.end_hour
            or abs(segment.start_hour - current.end_hour) < TOUCH_TOLERANCE
        )
        if touches and _participant_key(segment.participants) == _participant_key(current.participants):
            current.end_hour = max(current.end_hour, segment.end_hour)
            continue
        merged.append(current)
        current = OverlapSegment(
            segment.weekday, segment.start_hour, segment.end_hour, segment.participants
        )

    merged.append(current)
    return merged


def compute_overlaps(
    spans_by_weekday: dict[Weekday, list[BusySpan]]
) -> dict[Weekday, list[OverlapSegment]]:
    """Find every stretch of time when two or more spans are active.

    Spans are treated as half-open intervals, so a class ending at 10:00
    does not overlap one starting at 10:00.

    Args:
        spans_by_weekday: Busy spans of all people grouped per weekday.

    Returns:
        Mapping of weekday to disjoint overlap segments sorted by start.
    """
    return {
        weekday: _sweep_day(weekday, spans)
        for weekday, spans in spans_by_weekday.items()
    }


def count_overlap_blocks(overlaps: dict[Weekday, list[OverlapSegment]]) -> int:
    """Number of merged overlap segments over the whole week."""
    return sum(len(segments) for segments in overlaps.values())
