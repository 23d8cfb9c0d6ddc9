"""Season-wide booking and money statistics."""

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from crewledger.core.config import settings
from crewledger.models.booking import Booking, BookingStatus
from crewledger.models.expense import Expense


class TopBooking(BaseModel):
    booking_id: str
    label: str
    value: float
    arrival_date: str
    departure_date: str


class TopMerchant(BaseModel):
    name: str
    total: float
    count: int


class SeasonBookingStats(BaseModel):
    total_bookings: int = 0
    upcoming_bookings: int = 0
    active_bookings: int = 0
    completed_bookings: int = 0
    total_guests: int = 0

    total_apa: float = 0.0
    total_expenses: float = 0.0
    total_tips: float = 0.0
    average_tip: float = 0.0

    best_tip_booking: Optional[TopBooking] = None
    lowest_spend_booking: Optional[TopBooking] = None
    top_merchants: List[TopMerchant] = []
    expenses_by_category: Dict[str, float] = {}


_DONE = (BookingStatus.COMPLETED, BookingStatus.ARCHIVED)


def expenses_by_booking(expenses: Iterable[Expense]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for expense in expenses:
        totals[expense.booking_id] = totals.get(expense.booking_id, 0.0) + expense.amount
    return totals


def expenses_by_category(expenses: Iterable[Expense]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for expense in expenses:
        category = expense.category.value
        totals[category] = totals.get(category, 0.0) + expense.amount
    return totals


def top_merchants(expenses: Iterable[Expense], limit: Optional[int] = None) -> List[TopMerchant]:
    if limit is None:
        limit = settings.TOP_MERCHANTS_LIMIT

    merchants: Dict[str, TopMerchant] = {}
    for expense in expenses:
        name = expense.merchant or "Unknown"
        current = merchants.get(name) or TopMerchant(name=name, total=0.0, count=0)
        merchants[name] = TopMerchant(
            name=name,
            total=current.total + expense.amount,
            count=current.count + 1,
        )

    ranked = sorted(merchants.values(), key=lambda m: m.total, reverse=True)
    return ranked[:limit]


def _top_booking(booking: Booking, label: str, value: float) -> TopBooking:
    return TopBooking(
        booking_id=booking.id,
        label=label,
        value=value,
        arrival_date=booking.arrival_date.isoformat(),
        departure_date=booking.departure_date.isoformat(),
    )


def best_tip_booking(bookings: Iterable[Booking]) -> Optional[TopBooking]:
    best = None
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED or not booking.tip or booking.tip <= 0:
            continue
        if best is None or booking.tip > best.tip:
            best = booking
    if best is None:
        return None
    return _top_booking(best, "Best tip", best.tip)


def lowest_spend_booking(
    bookings: Iterable[Booking],
    spend_by_booking: Dict[str, float],
) -> Optional[TopBooking]:
    lowest, lowest_spend = None, None
    for booking in bookings:
        if booking.status not in _DONE:
            continue
        spend = spend_by_booking.get(booking.id, 0.0)
        if spend <= 0:
            continue
        if lowest is None or spend < lowest_spend:
            lowest, lowest_spend = booking, spend
    if lowest is None:
        return None
    return _top_booking(lowest, "Lowest spend", lowest_spend)


def booking_stats(bookings: Iterable[Booking], expenses: Iterable[Expense]) -> SeasonBookingStats:
    """
    Aggregate a season snapshot. Cancelled bookings are left out of every
    count and total; expenses are taken as given.
    """
    expenses = list(expenses)
    live = [b for b in bookings if b.status != BookingStatus.CANCELLED]

    tipped = [b.tip for b in live if b.tip and b.tip > 0]
    total_tips = sum((b.tip or 0.0 for b in live), 0.0)

    return SeasonBookingStats(
        total_bookings=len(live),
        upcoming_bookings=sum(1 for b in live if b.status == BookingStatus.UPCOMING),
        active_bookings=sum(1 for b in live if b.status == BookingStatus.ACTIVE),
        completed_bookings=sum(1 for b in live if b.status in _DONE),
        total_guests=sum(b.guest_count for b in live),
        total_apa=sum((b.apa_total for b in live), 0.0),
        total_expenses=sum((e.amount for e in expenses), 0.0),
        total_tips=total_tips,
        average_tip=total_tips / len(tipped) if tipped else 0.0,
        best_tip_booking=best_tip_booking(live),
        lowest_spend_booking=lowest_spend_booking(live, expenses_by_booking(expenses)),
        top_merchants=top_merchants(expenses),
        expenses_by_category=expenses_by_category(expenses),
    )
