"""Merging of class occurrences into per-person busy spans."""

from collections.abc import Iterable

from extractor.models import WORKWEEK, BusySpan, Occurrence, Weekday


MERGE_THRESHOLD_HOURS = 10 / 60


def _sort_key(item) -> tuple[float, float]:
    return (item.start_hour, item.end_hour)


def _merge(owner: str, weekday: Weekday, occurrences: list[Occurrence]) -> list[BusySpan]:
    ordered = sorted(occurrences, key=_sort_key)
    spans: list[BusySpan] = []

    current = [ordered[0]]
    start = ordered[0].start_hour
    end = ordered[0].end_hour
    color = ordered[0].color

    for occ in ordered[1:]:
        if occ.start_hour - end <= MERGE_THRESHOLD_HOURS:
            end = max(end, occ.end_hour)
            current.append(occ)
            continue
        spans.append(BusySpan(owner, weekday, start, end, color, tuple(current)))
        current = [occ]
        start = occ.start_hour
        end = occ.end_hour

    spans.append(BusySpan(owner, weekday, start, end, color, tuple(current)))
    return spans


def build_spans(
    occurrences: Iterable[Occurrence]
) -> dict[tuple[str, Weekday], list[BusySpan]]:
    """Merge each person's classes on each weekday into busy spans.

    Classes closer than ten minutes apart end up in one span. Weekend
    occurrences are dropped.

    Args:
        occurrences: Occurrences of any number of people, in any order.

    Returns:
        Mapping of (owner, weekday) to that person's spans on that day,
        sorted by start. Keys appear in first-seen order.
    """
    groups: dict[tuple[str, Weekday], list[Occurrence]] = {}
    for occ in occurrences:
        if occ.weekday not in WORKWEEK:
            continue
        groups.setdefault((occ.owner, occ.weekday), []).append(occ)

    return {
        (owner, weekday): _merge(owner, weekday, group)
        for (owner, weekday), group in groups.items()
    }


def spans_by_weekday(
    spans: dict[tuple[str, Weekday], list[BusySpan]]
) -> dict[Weekday, list[BusySpan]]:
    """Regroup spans per weekday for calendar rendering.

    Returns:
        Mapping with an entry for every workweek day, each list sorted by
        (start, end).
    """
    by_day: dict[Weekday, list[BusySpan]] = {day: [] for day in WORKWEEK}
    for (_, weekday), owner_spans in spans.items():
        by_day[weekday].extend(owner_spans)
    for day_spans in by_day.values():
        day_spans.sort(key=_sort_key)
    return by_day
