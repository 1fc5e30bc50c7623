"""Data models for the trip builder: segments and trips."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple, Union

from trip_builder.errors import InvalidSegment, InvalidSegmentType
from trip_builder.normalize.date_parser import at_midnight
from trip_builder.normalize.iata import validate_iata_code


class SegmentKind(str, Enum):
    FLIGHT = "Flight"
    TRAIN = "Train"
    HOTEL = "Hotel"


TRANSPORT_KINDS = (SegmentKind.FLIGHT, SegmentKind.TRAIN)


def _fmt_datetime(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M")


def _fmt_time(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def _fmt_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class Transport:
    """A Flight or Train leg between two locations."""
    kind: SegmentKind
    departure_location: str
    arrival_location: str
    departure_time: datetime
    arrival_time: datetime

    def __post_init__(self):
        try:
            kind = SegmentKind(self.kind)
        except ValueError:
            raise InvalidSegmentType(f"Invalid segment type: {self.kind}") from None
        if kind not in TRANSPORT_KINDS:
            raise InvalidSegmentType(f"Invalid segment type: {kind.value}")
        object.__setattr__(self, "kind", kind)
        validate_iata_code(self.departure_location, "departure_location")
        validate_iata_code(self.arrival_location, "arrival_location")
        if self.departure_location is None or self.arrival_location is None:
            raise InvalidSegment("Transport segments must have departure and arrival locations")
        if self.departure_time is None or self.arrival_time is None:
            raise InvalidSegment("Transport segments must have departure and arrival times")
        if self.arrival_time < self.departure_time:
            raise InvalidSegment("Arrival time must not be before departure time")

    is_transport = True
    is_stay = False

    @property
    def origin(self) -> Optional[str]:
        return self.departure_location

    @property
    def destination(self) -> str:
        return self.arrival_location

    @property
    def start_time(self) -> datetime:
        return self.departure_time

    @property
    def end_time(self) -> datetime:
        return self.arrival_time

    @property
    def departure_date(self) -> Optional[date]:
        return self.departure_time.date()

    @property
    def arrival_date(self) -> Optional[date]:
        return self.arrival_time.date()

    def __str__(self) -> str:
        # Arrival is printed as a bare time even when it rolled over to the next day
        return (
            f"{self.kind.value} from {self.departure_location} to {self.arrival_location} "
            f"at {_fmt_datetime(self.departure_time)} to {_fmt_time(self.arrival_time)}"
        )


@dataclass(frozen=True)
class Stay:
    """A Hotel stay at a single location."""
    location: str
    check_in_date: date
    check_out_date: date
    kind: SegmentKind = field(default=SegmentKind.HOTEL, init=False)

    def __post_init__(self):
        validate_iata_code(self.location, "location")
        if self.location is None:
            raise InvalidSegment("Hotel segments must have a location")
        if self.check_in_date is None or self.check_out_date is None:
            raise InvalidSegment("Hotel segments must have check-in and check-out dates")
        if self.check_in_date >= self.check_out_date:
            raise InvalidSegment("Check-in date must be before check-out date")

    is_transport = False
    is_stay = True

    @property
    def origin(self) -> Optional[str]:
        return None

    @property
    def destination(self) -> str:
        return self.location

    @property
    def start_time(self) -> datetime:
        return at_midnight(self.check_in_date)

    @property
    def end_time(self) -> datetime:
        return at_midnight(self.check_out_date)

    @property
    def departure_date(self) -> Optional[date]:
        return None

    @property
    def arrival_date(self) -> Optional[date]:
        return None

    def __str__(self) -> str:
        return (
            f"Hotel at {self.location} on {_fmt_date(self.check_in_date)} "
            f"to {_fmt_date(self.check_out_date)}"
        )


Segment = Union[Transport, Stay]


@dataclass(frozen=True)
class Trip:
    """A chain of segments that leaves home_location and (ideally) returns."""
    segments: Tuple[Segment, ...]
    home_location: str

    @property
    def destination(self) -> Optional[str]:
        """Last distinct arrival location that is not home."""
        seen = []
        for seg in self.segments:
            if seg.destination not in seen:
                seen.append(seg.destination)
        away = [loc for loc in seen if loc != self.home_location]
        return away[-1] if away else None

    @property
    def earliest_date(self) -> Optional[datetime]:
        if not self.segments:
            return None
        return min(seg.start_time for seg in self.segments)

    def __str__(self) -> str:
        if not self.segments:
            return ""
        lines = [f"TRIP to {self.destination or ''}"]
        lines.extend(str(seg) for seg in self.segments)
        return "\n".join(lines)
