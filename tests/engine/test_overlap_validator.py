import pytest
from datetime import date
from crewledger.core.exceptions import InvalidDateRangeError
from crewledger.engine.overlap import find_overlap, has_overlap, ranges_overlap
from crewledger.models.booking import Booking, BookingStatus


def make_booking(booking_id, arrival, departure, status=BookingStatus.UPCOMING):
    return Booking(
        id=booking_id,
        season_id="season-1",
        arrival_date=arrival,
        departure_date=departure,
        guest_count=2,
        status=status,
        created_by="captain-1",
    )


@pytest.fixture
def season_bookings():
    return [
        make_booking("a", date(2026, 6, 1), date(2026, 6, 8)),
        make_booking("b", date(2026, 6, 15), date(2026, 6, 22)),
        make_booking("c", date(2026, 7, 1), date(2026, 7, 8), status=BookingStatus.CANCELLED),
    ]


def test_shared_boundary_day_overlaps():
    assert ranges_overlap(date(2026, 6, 1), date(2026, 6, 8), date(2026, 6, 8), date(2026, 6, 15))


def test_adjacent_ranges_do_not_overlap():
    assert not ranges_overlap(date(2026, 6, 1), date(2026, 6, 8), date(2026, 6, 9), date(2026, 6, 15))


def test_overlap_is_symmetric():
    ranges = [
        (date(2026, 6, 1), date(2026, 6, 8)),
        (date(2026, 6, 5), date(2026, 6, 6)),
        (date(2026, 6, 8), date(2026, 6, 10)),
        (date(2026, 6, 20), date(2026, 6, 25)),
    ]
    for a in ranges:
        for b in ranges:
            assert ranges_overlap(*a, *b) == ranges_overlap(*b, *a)


def test_find_overlap_returns_conflicting_booking(season_bookings):
    conflict = find_overlap(season_bookings, date(2026, 6, 20), date(2026, 6, 27))
    assert conflict.id == "b"


def test_free_range_has_no_overlap(season_bookings):
    assert find_overlap(season_bookings, date(2026, 6, 9), date(2026, 6, 14)) is None


def test_cancelled_bookings_are_ignored(season_bookings):
    assert not has_overlap(season_bookings, date(2026, 7, 2), date(2026, 7, 6))


def test_booking_never_overlaps_itself(season_bookings):
    assert not has_overlap(season_bookings, date(2026, 6, 1), date(2026, 6, 8), exclude_booking_id="a")
    assert has_overlap(season_bookings, date(2026, 6, 1), date(2026, 6, 8))


def test_reversed_candidate_range_is_rejected(season_bookings):
    with pytest.raises(InvalidDateRangeError):
        find_overlap(season_bookings, date(2026, 6, 10), date(2026, 6, 9))


def test_empty_season_has_no_overlap():
    assert find_overlap([], date(2026, 6, 1), date(2026, 6, 8)) is None
