"""Error taxonomy for segment parsing and trip linking."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_FORMAT = "invalid_format"
    INVALID_SEGMENT_TYPE = "invalid_segment_type"
    INVALID_IATA_CODE = "invalid_iata_code"
    INVALID_SEGMENT = "invalid_segment"
    DATETIME_PARSE = "datetime_parse"
    NO_INITIAL_SEGMENT = "no_initial_segment"


class ItineraryError(Exception):
    """Base class for everything that aborts processing of an itinerary."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(ItineraryError):
    """A record line could not be turned into a segment."""


class InvalidFormat(ParseError):
    kind = ErrorKind.INVALID_FORMAT


class InvalidSegmentType(ParseError):
    kind = ErrorKind.INVALID_SEGMENT_TYPE


class InvalidIataCode(ParseError):
    kind = ErrorKind.INVALID_IATA_CODE

    def __init__(self, message: str, field: str = "", value: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidSegment(ParseError):
    kind = ErrorKind.INVALID_SEGMENT


class DateTimeParseError(ParseError):
    kind = ErrorKind.DATETIME_PARSE


class NoInitialSegment(ItineraryError):
    kind = ErrorKind.NO_INITIAL_SEGMENT

    def __init__(self, home_location: str):
        super().__init__(
            f"There are no segments that start from the base IATA {home_location}"
        )
        self.home_location = home_location
