"""Tests for linking segments into trips."""

from datetime import datetime, timedelta

import pytest

from trip_builder.assemble.linker import group_segments
from trip_builder.errors import ErrorKind, NoInitialSegment
from trip_builder.extract.segment_parser import parse_segment
from trip_builder.models import SegmentKind, Transport


def _segs(*lines):
    return [parse_segment(f"SEGMENT: {line}") for line in lines]


def _transport(dep, arr, start, end):
    return Transport(
        kind=SegmentKind.FLIGHT,
        departure_location=dep,
        arrival_location=arr,
        departure_time=start,
        arrival_time=end,
    )


class TestGroupSegments:
    """End-to-end linking behavior."""

    def test_round_trip_with_hotel(self):
        """Flight out, hotel, flight back: one trip to BCN with all three."""
        out, hotel, back = _segs(
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Hotel BCN 2023-01-05 -> 2023-01-10",
            "Flight BCN 2023-01-10 10:30 -> SVQ 11:50",
        )

        trips = group_segments([back, hotel, out], "SVQ")

        assert len(trips) == 1
        assert trips[0].segments == (out, hotel, back)
        assert trips[0].destination == "BCN"

    def test_no_initial_segment(self):
        """Nothing leaving home is an error naming home."""
        segs = _segs("Flight BCN 2023-01-10 10:30 -> MAD 11:50")

        with pytest.raises(NoInitialSegment, match="SVQ") as exc:
            group_segments(segs, "SVQ")

        assert exc.value.home_location == "SVQ"
        assert exc.value.kind == ErrorKind.NO_INITIAL_SEGMENT

    def test_hotel_at_home_is_not_initial(self):
        """Stays have no origin, so a home hotel alone does not seed a trip."""
        segs = _segs("Hotel SVQ 2023-01-05 -> 2023-01-10")

        with pytest.raises(NoInitialSegment):
            group_segments(segs, "SVQ")

    def test_empty_input(self):
        assert group_segments([], "SVQ") == []

    def test_gap_over_a_day_stops_chain(self):
        """A connection more than 24h later is not linked."""
        first, second = _segs(
            "Flight SVQ 2023-03-02 06:40 -> BCN 09:10",
            "Flight BCN 2023-03-04 15:00 -> NYC 22:45",
        )

        trips = group_segments([first, second], "SVQ")

        assert len(trips) == 1
        assert trips[0].segments == (first,)
        assert trips[0].destination == "BCN"

    def test_connection_continues_past_destination(self):
        """Same-day connection is added and the trip ends away from home."""
        first, second = _segs(
            "Flight SVQ 2023-03-02 06:40 -> BCN 09:10",
            "Flight BCN 2023-03-02 15:00 -> NYC 22:45",
        )

        trips = group_segments([first, second], "SVQ")

        assert trips[0].segments == (first, second)
        assert trips[0].destination == "NYC"

    def test_multiple_trips_ordered_by_date(self):
        """Trips come back sorted by their earliest segment."""
        segs = _segs(
            "Flight SVQ 2023-03-02 06:40 -> BCN 09:10",
            "Hotel BCN 2023-01-05 -> 2023-01-10",
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Flight BCN 2023-01-10 10:30 -> SVQ 11:50",
            "Train SVQ 2023-02-15 09:30 -> MAD 11:00",
            "Train MAD 2023-02-17 17:00 -> SVQ 19:30",
            "Hotel MAD 2023-02-15 -> 2023-02-17",
            "Flight BCN 2023-03-02 15:00 -> NYC 22:45",
        )

        trips = group_segments(segs, "SVQ")

        assert [t.destination for t in trips] == ["BCN", "MAD", "NYC"]
        assert [len(t.segments) for t in trips] == [3, 3, 2]

    def test_different_home(self):
        """The same pool grouped from BCN yields different trips."""
        segs = _segs(
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Flight BCN 2023-01-10 10:30 -> SVQ 11:50",
            "Flight BCN 2023-03-02 15:00 -> NYC 22:45",
        )

        trips = group_segments(segs, "BCN")

        assert [t.destination for t in trips] == ["SVQ", "NYC"]

    def test_each_segment_used_once(self):
        """A connection claimed by one trip is not reused by another."""
        segs = _segs(
            "Flight SVQ 2023-01-05 08:00 -> BCN 09:00",
            "Flight SVQ 2023-01-05 10:00 -> BCN 11:00",
            "Flight BCN 2023-01-05 18:00 -> SVQ 19:00",
        )

        trips = group_segments(segs, "SVQ")

        assert len(trips) == 2
        assert len(trips[0].segments) == 2
        assert trips[1].segments == (segs[1],)
        used = [s for t in trips for s in t.segments]
        assert len(used) == len(set(map(id, used)))

    def test_deterministic(self):
        segs = _segs(
            "Flight SVQ 2023-01-05 08:00 -> BCN 09:00",
            "Train SVQ 2023-01-05 08:00 -> MAD 12:00",
            "Flight BCN 2023-01-05 18:00 -> SVQ 19:00",
            "Train MAD 2023-01-06 09:00 -> SVQ 13:00",
        )

        first = group_segments(segs, "SVQ")
        again = group_segments(segs, "SVQ")

        assert first == again


class TestLinkWindow:
    """The 24-hour connection rule."""

    ARRIVE = datetime(2023, 5, 1, 10, 0)

    def _pair(self, gap):
        out = _transport("SVQ", "BCN", self.ARRIVE - timedelta(hours=2), self.ARRIVE)
        nxt = _transport("BCN", "SVQ", self.ARRIVE + gap, self.ARRIVE + gap + timedelta(hours=2))
        return out, nxt

    def test_exactly_24h_links(self):
        out, nxt = self._pair(timedelta(hours=24))

        trips = group_segments([out, nxt], "SVQ")

        assert trips[0].segments == (out, nxt)

    def test_one_second_past_24h_does_not_link(self):
        out, nxt = self._pair(timedelta(hours=24, seconds=1))

        trips = group_segments([out, nxt], "SVQ")

        assert trips[0].segments == (out,)

    def test_immediate_departure_links(self):
        """Departing at the very minute of arrival is inside the window."""
        out, nxt = self._pair(timedelta(0))

        assert group_segments([out, nxt], "SVQ")[0].segments == (out, nxt)

    def test_departure_before_arrival_does_not_link(self):
        out, nxt = self._pair(timedelta(minutes=-1))

        assert group_segments([out, nxt], "SVQ")[0].segments == (out,)

    def test_hotel_checked_in_on_arrival_day(self):
        """Hotels are matched by calendar day, even after a late arrival."""
        out, hotel = _segs(
            "Flight SVQ 2023-01-05 23:00 -> BCN 23:55",
            "Hotel BCN 2023-01-05 -> 2023-01-07",
        )

        assert group_segments([out, hotel], "SVQ")[0].segments == (out, hotel)

    def test_hotel_next_day_links(self):
        out, hotel = _segs(
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Hotel BCN 2023-01-06 -> 2023-01-07",
        )

        assert group_segments([out, hotel], "SVQ")[0].segments == (out, hotel)

    def test_hotel_two_days_later_does_not_link(self):
        out, hotel = _segs(
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Hotel BCN 2023-01-07 -> 2023-01-09",
        )

        assert group_segments([out, hotel], "SVQ")[0].segments == (out,)


class TestCandidatePriority:
    """Tie-breaking between candidates."""

    def test_earlier_hotel_wins_and_claimed_hotel_is_skipped(self):
        """Each chain takes the earliest free stay; a stay already used goes to nobody else."""
        first, second, hotel_a, hotel_b = _segs(
            "Flight SVQ 2023-01-05 08:00 -> BCN 09:00",
            "Flight SVQ 2023-01-05 10:00 -> BCN 11:00",
            "Hotel BCN 2023-01-05 -> 2023-01-07",
            "Hotel BCN 2023-01-06 -> 2023-01-08",
        )

        trips = group_segments([hotel_b, hotel_a, second, first], "SVQ")

        assert trips[0].segments == (first, hotel_a)
        assert trips[1].segments == (second, hotel_b)

    def test_transport_beats_earlier_hotel(self):
        """An onward transport wins even when a stay starts earlier."""
        out, hotel, onward = _segs(
            "Flight SVQ 2023-01-05 20:40 -> BCN 22:10",
            "Hotel BCN 2023-01-06 -> 2023-01-08",
            "Train BCN 2023-01-06 08:00 -> MAD 11:00",
        )

        trips = group_segments([out, hotel, onward], "SVQ")

        assert trips[0].segments == (out, onward)

    def test_earliest_transport_wins(self):
        out, later, earlier = _segs(
            "Flight SVQ 2023-01-05 08:00 -> BCN 09:00",
            "Flight BCN 2023-01-05 18:00 -> MAD 19:00",
            "Train BCN 2023-01-05 12:00 -> VLC 15:00",
        )

        trips = group_segments([out, later, earlier], "SVQ")

        assert trips[0].segments[1] is earlier

    def test_same_start_keeps_input_order(self):
        out, first, second = _segs(
            "Flight SVQ 2023-01-05 08:00 -> BCN 09:00",
            "Flight BCN 2023-01-05 12:00 -> MAD 13:00",
            "Train BCN 2023-01-05 12:00 -> VLC 15:00",
        )

        trips = group_segments([out, first, second], "SVQ")

        assert trips[0].segments[1] is first
