"""End-to-end recompute of the week view from uploaded calendars."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from extractor import CalendarParseError, CalendarUpload, ExtractionResult, ICSExtractor
from extractor.models import (
    BusySpan,
    Occurrence,
    OverlapSegment,
    PersonSummary,
    WeekSummary,
    Weekday,
)

from .analytics import summarize_person, summarize_week
from .spans import build_spans, spans_by_weekday
from .sweep import compute_overlaps

logger = logging.getLogger(__name__)


@dataclass
class WeekSchedule:
    """Everything the week view shows, computed from one set of uploads."""

    occurrences: list[Occurrence]
    spans_by_weekday: dict[Weekday, list[BusySpan]]
    overlaps: dict[Weekday, list[OverlapSegment]]
    summary: WeekSummary
    results: dict[str, ExtractionResult] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)

    @property
    def owners(self) -> list[str]:
        seen: list[str] = []
        for occ in self.occurrences:
            if occ.owner not in seen:
                seen.append(occ.owner)
        return seen

    def person_summary(self, owner: str) -> PersonSummary:
        return summarize_person(owner, self.occurrences, self.spans_by_weekday)


def _extract_upload(upload: CalendarUpload) -> Optional[ExtractionResult]:
    try:
        return ICSExtractor().extract(upload.raw_content, upload.display_name, upload.color)
    except CalendarParseError as e:
        logger.error("Skipping upload %s: %s", upload.id, e)
        return None


def build_week(uploads: list[CalendarUpload], max_workers: Optional[int] = None) -> WeekSchedule:
    """Extract every upload and compute spans, overlaps and the summary.

    Uploads are extracted in parallel. An upload that is not a calendar
    at all is logged and listed in ``failed``; the rest still go through.

    Args:
        uploads: Calendars to combine.
        max_workers: Thread pool size; None lets the executor decide.

    Returns:
        WeekSchedule for the given uploads.
    """
    results: dict[str, ExtractionResult] = {}
    failed: list[str] = []

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        for upload, result in zip(uploads, pool.map(_extract_upload, uploads)):
            if result is None:
                failed.append(upload.id)
            else:
                results[upload.id] = result

    occurrences = [occ for result in results.values() for occ in result.occurrences]
    by_day = spans_by_weekday(build_spans(occurrences))
    overlaps = compute_overlaps(by_day)

    return WeekSchedule(
        occurrences=occurrences,
        spans_by_weekday=by_day,
        overlaps=overlaps,
        summary=summarize_week(occurrences, by_day, overlaps),
        results=results,
        failed=failed,
    )
