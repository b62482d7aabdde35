"""Date helpers for the MM-DD-YYYY range parameters."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from coindash.constants import DATE_FORMAT
from coindash.errors import ParseError

logger = structlog.get_logger()


def parse_date(date_str: str) -> datetime:
    """Parse an MM-DD-YYYY string as UTC midnight.

    Raises:
        ParseError: if the string does not match the format.
    """
    try:
        parsed = datetime.strptime(date_str, DATE_FORMAT)
    except (TypeError, ValueError) as e:
        raise ParseError(f"invalid date {date_str!r}: expected MM-DD-YYYY") from e
    return parsed.replace(tzinfo=timezone.utc)


def to_unix_timestamp(date_str: str) -> str:
    """Convert an MM-DD-YYYY string to epoch seconds for a query string.

    Malformed dates are logged and yield an empty string.
    """
    try:
        return str(int(parse_date(date_str).timestamp()))
    except ParseError as e:
        logger.warning("date.parse_failed", date=date_str, error=str(e))
        return ""


def resolve_range(start_date: str, end_date: str) -> tuple[str, str]:
    """Convert both ends of a date range, raising ParseError if either fails."""
    start = to_unix_timestamp(start_date)
    end = to_unix_timestamp(end_date)
    if not start or not end:
        raise ParseError(f"invalid date range {start_date!r} to {end_date!r}")
    return start, end


def date_label(timestamp: int) -> str:
    """Short UTC date label for a chart axis."""
    return datetime.fromtimestamp(timestamp, timezone.utc).strftime(DATE_FORMAT)
