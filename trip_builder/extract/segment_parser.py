"""Parse `SEGMENT:` record lines into Transport / Stay segments.

Expected shapes:

    SEGMENT: Flight SVQ 2023-03-02 06:40 -> BCN 09:10
    SEGMENT: Train SVQ 2023-02-15 09:30 -> MAD 11:00
    SEGMENT: Hotel BCN 2023-01-05 -> 2023-01-10
"""

from datetime import timedelta
from typing import Iterable, List, Optional

from trip_builder.config import ARROW, SEGMENT_MARKER
from trip_builder.errors import InvalidFormat, InvalidSegmentType
from trip_builder.models import Segment, SegmentKind, Stay, Transport
from trip_builder.normalize.date_parser import parse_date, parse_datetime

_KINDS = {k.value: k for k in SegmentKind}

# Token position of the "->" separator for each shape
_TRANSPORT_ARROW = 4
_STAY_ARROW = 3

# Full record lengths, kind token included
_TRANSPORT_TOKENS = 7
_STAY_TOKENS = 5


def _token(parts: List[str], i: int) -> Optional[str]:
    return parts[i] if i < len(parts) else None


def _check_shape(parts: List[str], arrow: int, size: int, line: str):
    if len(parts) > size:
        raise InvalidFormat(f"Invalid segment format: {line}")
    tok = _token(parts, arrow)
    if tok is not None and tok != ARROW:
        raise InvalidFormat(f"Invalid segment format: {line}")


def _parse_transport(kind: SegmentKind, parts: List[str], line: str) -> Transport:
    # Flight SVQ 2023-03-02 06:40 -> BCN 09:10
    _check_shape(parts, _TRANSPORT_ARROW, _TRANSPORT_TOKENS, line)
    date_str = _token(parts, 2)

    departure_time = parse_datetime(date_str, _token(parts, 3))
    arrival_time = parse_datetime(date_str, _token(parts, 6))

    # Overnight: arrival clock earlier than departure clock means next day
    if arrival_time < departure_time:
        arrival_time += timedelta(days=1)

    return Transport(
        kind=kind,
        departure_location=_token(parts, 1),
        arrival_location=_token(parts, 5),
        departure_time=departure_time,
        arrival_time=arrival_time,
    )


def _parse_stay(parts: List[str], line: str) -> Stay:
    # Hotel BCN 2023-01-05 -> 2023-01-10
    _check_shape(parts, _STAY_ARROW, _STAY_TOKENS, line)
    check_in = parse_date(_token(parts, 2))
    check_out = parse_date(_token(parts, 4))
    return Stay(
        location=_token(parts, 1),
        check_in_date=check_in,
        check_out_date=check_out,
    )


def parse_segment(line: str) -> Segment:
    """Parse one record line.

    Checks run in a fixed order: record marker, segment kind, date/time
    tokens, then the field validation done by the segment constructors.
    """
    if not line.startswith(SEGMENT_MARKER):
        raise InvalidFormat(f"Invalid segment format: {line}")

    parts = line[len(SEGMENT_MARKER):].split()
    type_token = parts[0] if parts else ""
    kind = _KINDS.get(type_token)
    if kind is None:
        raise InvalidSegmentType(f"Invalid segment type: {type_token}")

    if kind == SegmentKind.HOTEL:
        return _parse_stay(parts, line)
    return _parse_transport(kind, parts, line)


def sort_by_date(segments: Iterable[Segment]) -> List[Segment]:
    """Order segments by start instant; equal starts keep input order."""
    return sorted(segments, key=lambda s: s.start_time)
