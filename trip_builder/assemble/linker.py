"""Greedy trip assembly: segments → chains starting at home → Trips."""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set

from trip_builder.config import LINK_WINDOW_HOURS
from trip_builder.errors import NoInitialSegment
from trip_builder.extract.segment_parser import sort_by_date
from trip_builder.models import Segment, Trip
from trip_builder.normalize.date_parser import at_midnight

LINK_WINDOW = timedelta(hours=LINK_WINDOW_HOURS)


# ---------------------------------------------------------------------------
# Step 1: Index the segment pool
# ---------------------------------------------------------------------------

def _index_by_origin(pool: List[Segment]) -> Dict[str, List[int]]:
    """Origin location → indexes of transports departing there, in start order."""
    index: Dict[str, List[int]] = defaultdict(list)
    for i, seg in enumerate(pool):
        if seg.is_transport:
            index[seg.origin].append(i)
    return index


def _index_stays_by_location(pool: List[Segment]) -> Dict[str, List[int]]:
    """Location → indexes of stays there, in start order."""
    index: Dict[str, List[int]] = defaultdict(list)
    for i, seg in enumerate(pool):
        if seg.is_stay:
            index[seg.destination].append(i)
    return index


# ---------------------------------------------------------------------------
# Step 2: Find the next link in a chain
# ---------------------------------------------------------------------------

def _first_in_window(
    pool: List[Segment],
    candidates: List[int],
    claimed: Set[int],
    window_start: datetime,
) -> Optional[int]:
    """Earliest unclaimed candidate starting within [window_start, window_start + 24h].

    Candidate lists are in ascending start order, so the first hit is the
    earliest and ties fall back to discovery order.
    """
    window_end = window_start + LINK_WINDOW
    for i in candidates:
        start = pool[i].start_time
        if start > window_end:
            break
        if i in claimed or start < window_start:
            continue
        return i
    return None


def _next_link(
    pool: List[Segment],
    by_origin: Dict[str, List[int]],
    stays_at: Dict[str, List[int]],
    claimed: Set[int],
    location: str,
    current_time: datetime,
) -> Optional[int]:
    # Transports leaving this location take priority over stays here
    found = _first_in_window(pool, by_origin.get(location, []), claimed, current_time)
    if found is not None:
        return found
    # Stays are matched on calendar days, so the window opens at midnight
    return _first_in_window(pool, stays_at.get(location, []), claimed, at_midnight(current_time.date()))


def _build_chain(
    pool: List[Segment],
    start: int,
    home_location: str,
    by_origin: Dict[str, List[int]],
    stays_at: Dict[str, List[int]],
    claimed: Set[int],
) -> List[Segment]:
    claimed.add(start)
    chain = [pool[start]]
    current_location = pool[start].destination
    current_time = pool[start].end_time

    while current_location != home_location:
        nxt = _next_link(pool, by_origin, stays_at, claimed, current_location, current_time)
        if nxt is None:
            break  # dead end; the trip never made it home
        claimed.add(nxt)
        chain.append(pool[nxt])
        current_location = pool[nxt].destination
        current_time = pool[nxt].end_time

    return chain


# ---------------------------------------------------------------------------
# Step 3: Group everything
# ---------------------------------------------------------------------------

def group_segments(segments: Iterable[Segment], home_location: str) -> List[Trip]:
    """Link segments into trips that start at home_location.

    Each segment departing home seeds a chain, processed in start order.
    A chain is extended with the earliest unclaimed segment that starts at
    the current location within 24 hours of the previous segment's end,
    until it reaches home or runs out of candidates.

    Raises:
        NoInitialSegment: nothing departs from home_location.
    """
    pool = sort_by_date(segments)
    if not pool:
        return []

    initial = [i for i, seg in enumerate(pool) if seg.origin == home_location]
    if not initial:
        raise NoInitialSegment(home_location)

    by_origin = _index_by_origin(pool)
    stays_at = _index_stays_by_location(pool)
    claimed: Set[int] = set()

    trips: List[Trip] = []
    for start in initial:
        if start in claimed:
            continue
        chain = _build_chain(pool, start, home_location, by_origin, stays_at, claimed)
        trips.append(Trip(segments=tuple(chain), home_location=home_location))

    return sorted(trips, key=lambda t: t.earliest_date)
