"""Strict date and date+time parsing for segment records."""

import re
from datetime import date, datetime, time
from typing import Optional

from dateutil.parser import isoparser

from trip_builder.errors import DateTimeParseError

_ISO = isoparser()

_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_TIME_RE = re.compile(r'^\d{2}:\d{2}$')


def _parse_iso_date(raw: str) -> date:
    if not _DATE_RE.match(raw):
        raise ValueError(f"expected YYYY-MM-DD, got {raw!r}")
    return _ISO.parse_isodate(raw)


def _parse_clock(raw: str) -> time:
    if not _TIME_RE.match(raw):
        raise ValueError(f"expected HH:MM, got {raw!r}")
    # strptime rejects 24:00, which the ISO parser would fold into 00:00
    return datetime.strptime(raw, "%H:%M").time()


def parse_date(raw: Optional[str]) -> date:
    """Parse a bare YYYY-MM-DD token.

    Raises DateTimeParseError when the token is missing or is not a real
    calendar date (e.g. 2023-02-30).
    """
    if raw is None:
        raise DateTimeParseError("Invalid date format for nil")
    try:
        return _parse_iso_date(raw)
    except ValueError as e:
        raise DateTimeParseError(f"Invalid date format: {raw} - {e}") from e


def parse_datetime(date_raw: Optional[str], time_raw: Optional[str]) -> datetime:
    """Combine a YYYY-MM-DD token and an HH:MM token into a naive datetime."""
    if date_raw is None or time_raw is None:
        raise DateTimeParseError(f"Datetime cannot be nil: {date_raw} {time_raw}")
    raw = f"{date_raw} {time_raw}"
    try:
        return datetime.combine(_parse_iso_date(date_raw), _parse_clock(time_raw))
    except ValueError as e:
        raise DateTimeParseError(f"Invalid datetime format: {raw} - {e}") from e


def at_midnight(d: date) -> datetime:
    """Promote a calendar date to a datetime at local midnight."""
    return datetime.combine(d, time.min)
