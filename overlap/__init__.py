"""Overlap module for finding when several people are busy at once."""

from .analytics import count_span_intersections, summarize_person, summarize_week
from .pipeline import WeekSchedule, build_week
from .spans import MERGE_THRESHOLD_HOURS, build_spans, spans_by_weekday
from .sweep import compute_overlaps, count_overlap_blocks, merge_touching

__all__ = [
    "MERGE_THRESHOLD_HOURS",
    "WeekSchedule",
    "build_spans",
    "build_week",
    "compute_overlaps",
    "count_overlap_blocks",
    "count_span_intersections",
    "merge_touching",
    "spans_by_weekday",
    "summarize_person",
    "summarize_week",
]
