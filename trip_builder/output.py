"""Output formatters: human-readable trips, CSV, and JSON."""

import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from trip_builder.config import TRIP_SEPARATOR
from trip_builder.models import Segment, Trip


def _date_str(d) -> str:
    if d is None:
        return ""
    if isinstance(d, datetime):
        return d.strftime("%Y-%m-%d %H:%M")
    if isinstance(d, date):
        return d.isoformat()
    return str(d)


# ---------------------------------------------------------------------------
# Human-readable trips
# ---------------------------------------------------------------------------

def format_trip(trip: Trip) -> Optional[str]:
    """`TRIP to <destination>` followed by one line per segment; None if empty."""
    if not trip.segments:
        return None
    return str(trip)


def format_trips(trips: List[Trip], separator: str = TRIP_SEPARATOR) -> str:
    blocks = [format_trip(t) for t in trips]
    return separator.join(b for b in blocks if b is not None)


# ---------------------------------------------------------------------------
# CSV output
# ---------------------------------------------------------------------------

def _segment_start(seg: Segment):
    return seg.departure_time if seg.is_transport else seg.check_in_date


def _segment_end(seg: Segment):
    return seg.arrival_time if seg.is_transport else seg.check_out_date


def trips_to_csv(trips: List[Trip], path: Path):
    """Write one row per segment, tagged with its trip number."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([
            "trip", "trip_destination", "kind", "origin", "location", "start", "end",
        ])
        for n, trip in enumerate(trips, start=1):
            for seg in trip.segments:
                writer.writerow([
                    n, trip.destination or "", seg.kind.value,
                    seg.origin or "", seg.destination,
                    _date_str(_segment_start(seg)), _date_str(_segment_end(seg)),
                ])


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

def _segment_to_dict(seg: Segment) -> dict:
    if seg.is_transport:
        return {
            "kind": seg.kind.value,
            "departure_location": seg.departure_location,
            "arrival_location": seg.arrival_location,
            "departure_time": seg.departure_time.isoformat(),
            "arrival_time": seg.arrival_time.isoformat(),
        }
    return {
        "kind": seg.kind.value,
        "location": seg.location,
        "check_in_date": seg.check_in_date.isoformat(),
        "check_out_date": seg.check_out_date.isoformat(),
    }


def _trip_to_dict(t: Trip) -> dict:
    return {
        "destination": t.destination,
        "home_location": t.home_location,
        "earliest_date": t.earliest_date.isoformat() if t.earliest_date else None,
        "returns_home": bool(t.segments) and t.segments[-1].destination == t.home_location,
        "segments": [_segment_to_dict(s) for s in t.segments],
    }


def trips_to_dict(trips: List[Trip]) -> dict:
    return {
        "trips": [_trip_to_dict(t) for t in trips],
        "summary": {
            "total_trips": len(trips),
            "total_segments": sum(len(t.segments) for t in trips),
            "destinations": sorted(set(t.destination for t in trips if t.destination)),
        },
    }


def to_json(trips: List[Trip], path: Path):
    """Write all trips as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(trips_to_dict(trips), indent=2, ensure_ascii=False), encoding="utf-8")
