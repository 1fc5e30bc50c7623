"""Orchestrates the full pipeline: read → parse → link → format."""

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Union

from trip_builder.assemble.linker import group_segments
from trip_builder.config import HOME_LOCATION
from trip_builder.extract.line_reader import filter_segment_lines, read_segment_lines
from trip_builder.extract.segment_parser import parse_segment
from trip_builder.models import Trip
from trip_builder.normalize.iata import validate_home_location
from trip_builder.output import format_trips


class ItineraryProcessor:
    """Turns itinerary text into trips for one home location.

    Any ItineraryError raised while parsing or linking aborts the whole
    input; callers get either every trip or an exception.
    """

    def __init__(self, home_location: Optional[str] = None, verbose: bool = False):
        self.home_location = validate_home_location(
            HOME_LOCATION if home_location is None else home_location
        )
        self.verbose = verbose

    def log(self, msg: str):
        if self.verbose:
            print(msg, file=sys.stderr)

    def process_lines(self, lines: Iterable[str]) -> List[Trip]:
        segment_lines = filter_segment_lines(lines)
        self.log(f"  Segment lines: {len(segment_lines)}")
        return self._build(segment_lines)

    def process_file(self, path: Union[str, Path]) -> List[Trip]:
        self.log(f"Reading itinerary: {path}")
        segment_lines = read_segment_lines(path)
        self.log(f"  Segment lines: {len(segment_lines)}")
        return self._build(segment_lines)

    def _build(self, segment_lines: List[str]) -> List[Trip]:
        segments = [parse_segment(line) for line in segment_lines]
        self.log(f"  Parsed {len(segments)} segments")

        trips = group_segments(segments, self.home_location)
        self.log(f"  Assembled {len(trips)} trips from {self.home_location}")
        return trips

    def format_trips(self, trips: List[Trip]) -> str:
        return format_trips(trips)
