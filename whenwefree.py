#!/usr/bin/env python3
"""Find when people's weekly class schedules overlap.

Reads one iCalendar export per person, merges each person's classes into
busy blocks and reports the times when two or more people are busy at
once. The overlaps can be exported back to an .ics file.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from extractor import CalendarUpload, looks_like_calendar
from extractor.models import WORKWEEK, format_hour
from overlap import WeekSchedule, build_week
from transformer import ICalTransformer


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def get_default_end_date(today: date) -> date:
    """Calculate default end date of the semester containing ``today``.

    Returns June 30 if the month is January-June,
    January 31 of next year if it is July-December.
    """
    if today.month < 7:
        return date(today.year, 6, 30)
    else:
        return date(today.year + 1, 1, 31)


def load_uploads(paths: list[Path], names: list[str]) -> list[CalendarUpload]:
    """Read the calendar files given on the command line.

    Args:
        paths: Calendar files, one per person.
        names: Display names matched to files by position; files past the
            end of the list use their file name.

    Returns:
        List of uploads in the order given.
    """
    uploads = []
    for index, path in enumerate(paths):
        name = names[index] if index < len(names) else None
        uploads.append(CalendarUpload.from_file(path, index=index, display_name=name))
    return uploads


def validate_uploads(uploads: list[CalendarUpload]) -> bool:
    """Print the structural check result per file.

    Returns:
        True if every file looks like a calendar.
    """
    ok_count = 0
    for upload in uploads:
        ok = upload.validate()
        ok_count += ok
        status = "OK" if ok else "INVALID"
        print(f"{status:8} {upload.display_name} ({upload.size_bytes} bytes)")
    print(f"{ok_count}/{len(uploads)} files look like calendars.")
    return ok_count == len(uploads)


def format_range(start_hour: float, end_hour: float) -> str:
    return f"{format_hour(start_hour)} - {format_hour(end_hour)}"


def print_week(week: WeekSchedule) -> None:
    """Print overlaps, per-person view and summary."""
    print("\nOverlaps")
    print("-" * 30)
    for day in WORKWEEK:
        for segment in week.overlaps.get(day, []):
            print(
                f"{day.label:10} {format_range(segment.start_hour, segment.end_hour):20} "
                f"{', '.join(segment.owners)}"
            )
    if not week.summary.overlap_block_count:
        print("No overlapping classes.")

    print("\nPeople")
    print("-" * 30)
    for owner in week.owners:
        person = week.person_summary(owner)
        print(
            f"{owner}: {person.class_count} classes, "
            f"{person.busy_hours:.1f} hrs, {person.overlap_count} overlaps"
        )

    summary = week.summary
    busiest = summary.busiest.owner or "-"
    print("\nSummary")
    print("-" * 30)
    print(f"Total classes:       {summary.class_count}")
    print(f"People:              {summary.people_count}")
    print(f"Total busy hours:    {summary.total_busy_hours:.1f} hrs")
    print(f"Overlap time blocks: {summary.overlap_block_count}")
    print(f"Busiest:             {busiest} ({summary.busiest.hours:.1f} hrs)")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Find overlapping classes in several people's weekly schedules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 whenwefree.py alice.ics bob.ics
  python3 whenwefree.py a.ics b.ics --name Alice --name Bob
  python3 whenwefree.py a.ics b.ics --export overlaps.ics --start-date 2026-02-23
        """
    )

    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="iCalendar files, one per person"
    )

    parser.add_argument(
        "-n", "--name",
        action="append",
        default=[],
        help="Display name for the file at the same position (repeatable)"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Only check that the files look like calendars"
    )

    parser.add_argument(
        "-e", "--export",
        default=None,
        help="Write the overlaps to this .ics file"
    )

    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=None,
        help="First day of the exported overlaps (format: YYYY-MM-DD). Default: today"
    )

    parser.add_argument(
        "--end-date",
        type=parse_date,
        default=None,
        help="Last day of the exported overlaps (format: YYYY-MM-DD). "
             "Default: June 30 (spring semester) or January 31 (fall semester)"
    )

    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Number of files to read in parallel"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show skipped events and other details"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        uploads = load_uploads(args.files, args.name)

        if args.validate:
            sys.exit(0 if validate_uploads(uploads) else 1)

        for upload in uploads:
            if not looks_like_calendar(upload.raw_content):
                print(
                    f"Warning: {upload.display_name} does not look like a calendar file.",
                    file=sys.stderr
                )

        week = build_week(uploads, max_workers=args.workers)

        for upload in uploads:
            result = week.results.get(upload.id)
            if result is None:
                print(f"{upload.display_name}: could not be parsed, skipped.", file=sys.stderr)
            else:
                print(f"{upload.display_name}: {result.message}")

        print_week(week)

        if args.export:
            output_path = args.export
            if not output_path.lower().endswith(".ics"):
                output_path = f"{output_path}.ics"

            start_date = args.start_date or date.today()
            end_date = args.end_date or get_default_end_date(start_date)
            if start_date >= end_date:
                print("Error: Start date must be before end date.", file=sys.stderr)
                sys.exit(1)

            segments = [seg for day in WORKWEEK for seg in week.overlaps.get(day, [])]
            transformer = ICalTransformer()
            transformer.transform(segments, start_date, end_date)
            transformer.save(output_path)

            print(f"\nOverlaps saved to: {output_path}")
            print(f"Period: {start_date} to {end_date}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
