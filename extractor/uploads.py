"""Uploaded calendar records handed to the extractor by the caller."""

import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .fields import looks_like_calendar


DEFAULT_PALETTE = (
    "#0F52BA",
    "#10B981",
    "#F59E0B",
    "#EC4899",
    "#06B6D4",
    "#8B5CF6",
    "#22C55E",
    "#F97316",
)


@dataclass
class CalendarUpload:
    """One person's calendar file as kept by the caller's storage."""

    display_name: str
    color: str
    raw_content: str
    size_bytes: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    last_validated: Optional[bool] = None

    @classmethod
    def from_file(
        cls,
        path: Path,
        index: int = 0,
        display_name: Optional[str] = None
    ) -> "CalendarUpload":
        """Load an .ics file as an upload.

        Args:
            path: Path to the calendar file.
            index: Position of the file among all uploads; picks the
                palette color and the "Person N" fallback name.
            display_name: Name to show instead of the file stem.

        Returns:
            CalendarUpload with the file content.
        """
        data = path.read_bytes()
        stem = re.sub(r"\.ics$", "", path.name, flags=re.IGNORECASE)
        return cls(
            display_name=display_name or stem or f"Person {index + 1}",
            color=DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)],
            raw_content=data.decode("utf-8", errors="replace"),
            size_bytes=len(data),
        )

    def validate(self) -> bool:
        """Run the structural check and remember its outcome."""
        self.last_validated = looks_like_calendar(self.raw_content)
        return self.last_validated
