#!/usr/bin/env python3
"""
CSV input for waypoint files.

The expected format is one waypoint per line with three semicolon-separated
fields, ``timestamp;latitude;longitude``, optionally preceded by a header
line.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence
import csv
import logging
import os

from .errors import WaypointLoadError
from .geometry import Waypoint

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ";"
FIELD_COUNT = 3


@dataclass(frozen=True)
class CsvSummary:
    """Quick summary of CSV parsing."""

    rows_total: int
    rows_parsed: int
    rows_skipped: int
    has_header: bool


def _parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _parse_float(value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def _is_number(value: str) -> bool:
    try:
        float(value.strip())
    except ValueError:
        return False
    return True


def parse_waypoint_fields(fields: Sequence[str]) -> Optional[Waypoint]:
    """
    Build a waypoint from the fields of one CSV row.

    Non-numeric coordinates become 0.0 and a non-integer timestamp becomes 0.

    Args:
        fields: Raw field values of the row

    Returns:
        Waypoint, or None if the row does not have exactly three fields
    """
    if len(fields) != FIELD_COUNT:
        return None
    timestamp, latitude, longitude = fields
    return Waypoint(
        timestamp=_parse_int(timestamp),
        latitude=_parse_float(latitude),
        longitude=_parse_float(longitude),
    )


def parse_waypoint_line(line: str) -> Optional[Waypoint]:
    """Parse a single ``timestamp;latitude;longitude`` line."""
    return parse_waypoint_fields(line.rstrip("\r\n").split(FIELD_DELIMITER))


def _looks_like_header(fields: Sequence[str]) -> bool:
    return (
        len(fields) == FIELD_COUNT
        and not _is_number(fields[1])
        and not _is_number(fields[2])
    )


def iter_waypoints(lines: Iterable[str], source: str = "<input>") -> Iterator[Waypoint]:
    """
    Yield waypoints from semicolon-delimited lines.

    Blank lines are ignored. Quote characters are plain text, so every line
    is one row. Rows with a field count other than three are skipped with a
    warning. The first row is dropped when both coordinate
    fields are non-numeric, which identifies it as a header.

    Args:
        lines: Text lines of the CSV document
        source: Name used in log messages

    Yields:
        Waypoint for every well-formed row, in input order
    """
    reader = csv.reader(lines, delimiter=FIELD_DELIMITER, quoting=csv.QUOTE_NONE)
    first_row = True
    for fields in reader:
        if not fields or all(not field.strip() for field in fields):
            continue

        if first_row:
            first_row = False
            if _looks_like_header(fields):
                logger.debug(f"Skipping header of {source}: {fields}")
                continue

        waypoint = parse_waypoint_fields(fields)
        if waypoint is None:
            logger.warning(
                f"Skipping malformed line {reader.line_num} of {source}: "
                f"expected {FIELD_COUNT} fields, found {len(fields)}"
            )
            continue
        yield waypoint


def read_waypoints(filename: str) -> List[Waypoint]:
    """
    Load all waypoints of a CSV file into memory.

    Args:
        filename: Path to a ``.csv`` waypoint file

    Returns:
        Waypoints in file order

    Raises:
        WaypointLoadError: If the path is not a .csv file, does not exist,
            is empty, cannot be read, or contains no valid waypoints
    """
    if not filename.lower().endswith(".csv"):
        raise WaypointLoadError(f"Waypoint file must have a .csv extension: {filename}")

    try:
        if os.path.getsize(filename) == 0:
            raise WaypointLoadError(f"Waypoint file is empty: {filename}")
        logger.debug(f"Reading waypoint file: {filename}")
        with open(filename, "r", encoding="utf-8", newline="") as f:
            lines = f.readlines()
    except FileNotFoundError as e:
        raise WaypointLoadError(f"Waypoint file not found: {filename}") from e
    except PermissionError as e:
        raise WaypointLoadError(
            f"Cannot read waypoint file (permission denied): {filename}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise WaypointLoadError(f"Cannot read waypoint file {filename}: {e}") from e

    rows_total = sum(1 for line in lines if line.strip())
    waypoints = list(iter_waypoints(lines, source=filename))
    first_line = next((line for line in lines if line.strip()), "")
    has_header = _looks_like_header(
        next(
            csv.reader([first_line], delimiter=FIELD_DELIMITER, quoting=csv.QUOTE_NONE),
            [],
        )
    )
    if has_header:
        rows_total -= 1

    summary = CsvSummary(
        rows_total=rows_total,
        rows_parsed=len(waypoints),
        rows_skipped=rows_total - len(waypoints),
        has_header=has_header,
    )
    if summary.rows_skipped > 0:
        logger.warning(
            f"Skipped {summary.rows_skipped} of {summary.rows_total} rows in {filename}"
        )

    if not waypoints:
        raise WaypointLoadError(f"No valid waypoints found in {filename}")

    logger.info(f"Loaded {summary.rows_parsed} waypoints from {filename}")
    return waypoints
