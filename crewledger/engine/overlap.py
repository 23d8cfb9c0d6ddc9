"""Date-overlap checks between bookings of one season."""

from typing import Iterable, Optional

from crewledger.engine.status import DateLike, as_date
from crewledger.core.exceptions import InvalidDateRangeError
from crewledger.models.booking import Booking, BookingStatus


def ranges_overlap(start_a: DateLike, end_a: DateLike, start_b: DateLike, end_b: DateLike) -> bool:
    """Closed-interval test; sharing a boundary day counts as overlap."""
    return as_date(start_a) <= as_date(end_b) and as_date(start_b) <= as_date(end_a)


def find_overlap(
    season_bookings: Iterable[Booking],
    candidate_start: DateLike,
    candidate_end: DateLike,
    exclude_booking_id: Optional[str] = None,
) -> Optional[Booking]:
    """
    First non-cancelled booking whose dates collide with the candidate range.

    `exclude_booking_id` skips the booking being edited so it never collides
    with itself.
    """
    start, end = as_date(candidate_start), as_date(candidate_end)
    if end < start:
        raise InvalidDateRangeError(start, end)

    for booking in season_bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if ranges_overlap(start, end, booking.arrival_date, booking.departure_date):
            return booking
    return None


def has_overlap(
    season_bookings: Iterable[Booking],
    candidate_start: DateLike,
    candidate_end: DateLike,
    exclude_booking_id: Optional[str] = None,
) -> bool:
    return find_overlap(season_bookings, candidate_start, candidate_end, exclude_booking_id) is not None
