"""Abstract base class for overlap exporters."""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Any, Optional

from extractor.models import OverlapSegment, Weekday


class BaseTransformer(ABC):
    """Shared plumbing for writing overlap segments out in some format.

    Subclasses build their document in ``transform()`` and store it with
    ``_set_result()``; ``save()`` then writes whatever ``_to_bytes()``
    makes of it.
    """

    def __init__(self) -> None:
        self._result: Optional[Any] = None

    @abstractmethod
    def transform(
        self,
        segments: list[OverlapSegment],
        start_date: date,
        end_date: date
    ) -> Any:
        """Transform overlap segments into the target format.

        Args:
            segments: Overlap segments of a single week.
            start_date: First day the weekly overlaps repeat from.
            end_date: Last day they repeat until.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def _to_bytes(self, result: Any) -> bytes:
        """Serialize the document built by ``transform()``."""
        pass

    def _set_result(self, result: Any) -> Any:
        self._result = result
        return result

    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._result is None:
            raise RuntimeError("No data to save. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._to_bytes(self._result))

    @staticmethod
    def ordered(segments: list[OverlapSegment]) -> list[OverlapSegment]:
        """Sort segments by weekday, then by start."""
        return sorted(segments, key=lambda s: (int(s.weekday), s.start_hour, s.end_hour))

    @staticmethod
    def first_occurrence(weekday: Weekday, start_date: date) -> date:
        """Find the first date on or after start_date falling on weekday."""
        days_ahead = int(weekday) - start_date.weekday()
        if days_ahead < 0:
            days_ahead += 7
        return start_date + timedelta(days=days_ahead)

    @staticmethod
    def segment_key(segment: OverlapSegment) -> str:
        """Text identifying a segment by day, time and people."""
        return (
            f"{segment.weekday.name}-{segment.start_hour:.4f}-{segment.end_hour:.4f}-"
            f"{','.join(sorted(segment.owners))}"
        )

    @staticmethod
    def describe(segment: OverlapSegment) -> str:
        """List each person's classes in a segment, one per line."""
        lines = []
        for owner, classes in segment.by_owner().items():
            lines.append(f"{owner}:")
            for occ in classes:
                lines.append(
                    f"  {occ.course_code} {occ.course_name} "
                    f"({occ.start_time} - {occ.end_time}, {occ.building} {occ.room})"
                )
        return "\n".join(lines)
