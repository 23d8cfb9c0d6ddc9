"""
Booking status engine.

Status rules:
1. A scheduled booking's status follows the calendar:
   today < arrival -> upcoming, arrival <= today <= departure -> active,
   today > departure -> completed
2. cancelled / completed / archived are frozen and never re-derived
3. Transitions are explicit edges; anything else is a policy error:
   - upcoming -> cancelled (before arrival only)
   - upcoming / active -> edited (status recomputed after the edit)
   - active / completed -> completed + reconciliation (once)
   - completed -> archived (one-way; archived is fully locked)
   - upcoming -> deleted

All functions are pure: they take the booking and `now` and return a new
Booking (or raise). Persisting the result is the caller's job.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from crewledger.core.exceptions import (
    BookingAlreadyReconciledError,
    BookingLockedError,
    BookingNotCancellableError,
    BookingNotDeletableError,
    BookingNotEditableError,
    InputError,
    InvalidAmountError,
    InvalidDateRangeError,
    InvalidStatusTransitionError,
)
from crewledger.models.booking import (
    Archived,
    Booking,
    BookingLifecycle,
    BookingStatus,
    Cancelled,
    Completed,
    Reconciliation,
    Scheduled,
)

DateLike = Union[date, datetime]

STATUS_PERMISSIONS: Dict[BookingStatus, Dict[str, bool]] = {
    BookingStatus.UPCOMING: {
        "can_edit": True,
        "can_delete": True,
        "can_edit_apa": True,
        "can_edit_expenses": True,
        "can_edit_tip": True,
    },
    BookingStatus.ACTIVE: {
        "can_edit": True,
        "can_delete": False,
        "can_edit_apa": True,
        "can_edit_expenses": True,
        "can_edit_tip": True,
    },
    BookingStatus.COMPLETED: {
        "can_edit": False,
        "can_delete": False,
        "can_edit_apa": False,
        "can_edit_expenses": False,
        "can_edit_tip": True,  # Tip usually arrives after checkout
    },
    BookingStatus.ARCHIVED: {
        "can_edit": False,
        "can_delete": False,
        "can_edit_apa": False,
        "can_edit_expenses": False,
        "can_edit_tip": False,
    },
    BookingStatus.CANCELLED: {
        "can_edit": False,
        "can_delete": False,
        "can_edit_apa": False,
        "can_edit_expenses": False,
        "can_edit_tip": False,
    },
}

EDITABLE_FIELDS = frozenset({
    "arrival_date",
    "departure_date",
    "departure_marina",
    "arrival_marina",
    "guest_count",
    "notes",
})

COMPLETABLE_STATUSES = frozenset({BookingStatus.ACTIVE, BookingStatus.COMPLETED})


def as_date(value: DateLike) -> date:
    """Truncate to date precision."""
    if isinstance(value, datetime):
        return value.date()
    return value


def derive_status(arrival: DateLike, departure: DateLike, now: DateLike) -> BookingStatus:
    """Calendar status of a booking at `now`."""
    arrival, departure, today = as_date(arrival), as_date(departure), as_date(now)
    if departure < arrival:
        raise InvalidDateRangeError(arrival, departure)

    if today < arrival:
        return BookingStatus.UPCOMING
    if today <= departure:
        return BookingStatus.ACTIVE
    return BookingStatus.COMPLETED


def lifecycle_of(booking: Booking) -> BookingLifecycle:
    if booking.status == BookingStatus.CANCELLED:
        return Cancelled()
    if booking.status == BookingStatus.ARCHIVED:
        return Archived(reconciliation=booking.reconciliation)
    if booking.reconciliation is not None:
        return Completed(reconciliation=booking.reconciliation)
    return Scheduled(arrival=booking.arrival_date, departure=booking.departure_date)


def effective_status(booking: Booking, now: DateLike) -> BookingStatus:
    lifecycle = lifecycle_of(booking)
    if isinstance(lifecycle, Cancelled):
        return BookingStatus.CANCELLED
    if isinstance(lifecycle, Archived):
        return BookingStatus.ARCHIVED
    if isinstance(lifecycle, Completed) or booking.status == BookingStatus.COMPLETED:
        return BookingStatus.COMPLETED
    return derive_status(lifecycle.arrival, lifecycle.departure, now)


def refresh_status(booking: Booking, now: DateLike) -> Booking:
    """Re-derive status for display; terminal bookings come back unchanged."""
    status = effective_status(booking, now)
    if status == booking.status:
        return booking
    return booking.model_copy(update={"status": status})


def permissions(status: BookingStatus) -> Dict[str, bool]:
    return dict(STATUS_PERMISSIONS[status])


def can_edit(status: BookingStatus) -> bool:
    return STATUS_PERMISSIONS[status]["can_edit"]


def can_delete(status: BookingStatus) -> bool:
    return STATUS_PERMISSIONS[status]["can_delete"]


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _reject_if_archived(booking: Booking, status: BookingStatus) -> None:
    if status == BookingStatus.ARCHIVED:
        raise BookingLockedError(
            "Archived bookings cannot be changed",
            booking_id=booking.id,
            status=status.value,
        )


def _require(booking: Booking, status: BookingStatus, permission: str, action: str) -> None:
    _reject_if_archived(booking, status)
    if not STATUS_PERMISSIONS[status][permission]:
        raise BookingNotEditableError(
            f"Cannot {action} a {status.value} booking",
            booking_id=booking.id,
            status=status.value,
        )


def ensure_editable(booking: Booking, now: DateLike) -> BookingStatus:
    status = effective_status(booking, now)
    _require(booking, status, "can_edit", "edit")
    return status


def ensure_apa_editable(booking: Booking, now: DateLike) -> BookingStatus:
    status = effective_status(booking, now)
    _require(booking, status, "can_edit_apa", "change APA on")
    return status


def ensure_deletable(booking: Booking, now: DateLike) -> None:
    status = effective_status(booking, now)
    if not STATUS_PERMISSIONS[status]["can_delete"]:
        raise BookingNotDeletableError(
            "Only upcoming bookings can be deleted",
            booking_id=booking.id,
            status=status.value,
        )


def apply_edit(booking: Booking, changes: Dict[str, Any], now: DateLike) -> Booking:
    """Apply date/guest/notes changes and recompute status."""
    ensure_editable(booking, now)

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise InputError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    arrival = as_date(changes.get("arrival_date") or booking.arrival_date)
    departure = as_date(changes.get("departure_date") or booking.departure_date)
    status = derive_status(arrival, departure, now)

    update = dict(changes)
    update.update(arrival_date=arrival, departure_date=departure, status=status)
    return booking.model_copy(update=update)


def set_tip(booking: Booking, tip: Optional[float], now: DateLike) -> Booking:
    status = effective_status(booking, now)
    _require(booking, status, "can_edit_tip", "change the tip of")
    if tip is not None and tip < 0:
        raise InvalidAmountError(f"Tip cannot be negative: {tip}")
    return booking.model_copy(update={"tip": tip, "status": status})


def cancel(booking: Booking, now: DateLike) -> Booking:
    status = effective_status(booking, now)
    _reject_if_archived(booking, status)
    if status != BookingStatus.UPCOMING:
        raise BookingNotCancellableError(
            f"Only upcoming bookings can be cancelled (booking is {status.value})",
            booking_id=booking.id,
            status=status.value,
        )
    return booking.model_copy(update={"status": BookingStatus.CANCELLED})


def complete(booking: Booking, reconciliation: Reconciliation, now: DateLike) -> Booking:
    """Attach the reconciliation and freeze the booking as completed."""
    lifecycle = lifecycle_of(booking)
    if isinstance(lifecycle, Archived):
        _reject_if_archived(booking, BookingStatus.ARCHIVED)
    if isinstance(lifecycle, Completed):
        raise BookingAlreadyReconciledError(
            "Booking has already been reconciled",
            booking_id=booking.id,
            status=booking.status.value,
        )

    status = effective_status(booking, now)
    if status not in COMPLETABLE_STATUSES:
        raise InvalidStatusTransitionError(
            f"Cannot complete a {status.value} booking",
            booking_id=booking.id,
            status=status.value,
        )
    return booking.model_copy(update={
        "status": BookingStatus.COMPLETED,
        "reconciliation": reconciliation,
    })


def archive(booking: Booking, now: DateLike) -> Booking:
    """Completed -> archived; only a reconciled booking can be archived."""
    status = effective_status(booking, now)
    _reject_if_archived(booking, status)
    if not isinstance(lifecycle_of(booking), Completed):
        raise InvalidStatusTransitionError(
            f"Only reconciled bookings can be archived (booking is {status.value})",
            booking_id=booking.id,
            status=status.value,
        )
    return booking.model_copy(update={"status": BookingStatus.ARCHIVED})
