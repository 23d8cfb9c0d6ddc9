"""
Typed exceptions for the crew ledger.

Three families, matched by type rather than by message:

    CrewLedgerError
    |
    +-- InputError      malformed input; rejected before anything is written
    +-- PolicyError     operation forbidden by the booking's current state
    +-- NotFoundError   referenced record does not exist

Every class carries a machine-readable ``code`` used in API responses.
Storage failures (PyMongo errors) are not wrapped here.
"""

from typing import Optional


class CrewLedgerError(Exception):
    """Base exception for all crew ledger errors."""

    code: str = "CREW_LEDGER_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class InputError(CrewLedgerError):
    code = "INPUT_ERROR"


class InvalidDateRangeError(InputError):
    """Departure is before arrival."""

    code = "INVALID_DATE_RANGE"

    def __init__(self, arrival, departure):
        self.arrival = arrival
        self.departure = departure
        super().__init__(
            f"Departure {departure} is before arrival {arrival}"
        )


class InvalidScorePointsError(InputError):
    code = "INVALID_SCORE_POINTS"

    def __init__(self, points):
        self.points = points
        super().__init__(
            f"Score points must be one of -3, -2, -1, 1, 2, 3 (got {points!r})"
        )


class MissingIdentifierError(InputError):
    code = "MISSING_IDENTIFIER"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required identifier: {field}")


class InvalidAmountError(InputError):
    code = "INVALID_AMOUNT"


class InvalidTipSplitError(InputError):
    code = "INVALID_TIP_SPLIT"


# ---------------------------------------------------------------------------
# Policy errors
# ---------------------------------------------------------------------------


class PolicyError(CrewLedgerError):
    code = "POLICY_ERROR"

    def __init__(self, message: str, booking_id: Optional[str] = None, status: Optional[str] = None):
        self.booking_id = booking_id
        self.status = status
        super().__init__(message)


class BookingNotEditableError(PolicyError):
    code = "BOOKING_NOT_EDITABLE"


class BookingNotDeletableError(PolicyError):
    code = "BOOKING_NOT_DELETABLE"


class BookingNotCancellableError(PolicyError):
    code = "BOOKING_NOT_CANCELLABLE"


class BookingAlreadyReconciledError(PolicyError):
    code = "BOOKING_ALREADY_RECONCILED"


class BookingLockedError(PolicyError):
    """Archived bookings accept no edits and no transitions."""

    code = "BOOKING_LOCKED"


class InvalidStatusTransitionError(PolicyError):
    code = "INVALID_STATUS_TRANSITION"


class BookingOverlapError(PolicyError):
    code = "BOOKING_OVERLAP"

    def __init__(self, message: str, overlapping_booking_id: Optional[str] = None):
        self.overlapping_booking_id = overlapping_booking_id
        super().__init__(message)


class CaptainRequiredError(PolicyError):
    code = "CAPTAIN_REQUIRED"


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class NotFoundError(CrewLedgerError):
    code = "NOT_FOUND"


class BookingNotFoundError(NotFoundError):
    code = "BOOKING_NOT_FOUND"

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking {booking_id} not found")


class ApaEntryNotFoundError(NotFoundError):
    code = "APA_ENTRY_NOT_FOUND"

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"APA entry {entry_id} not found")


class SeasonNotFoundError(NotFoundError):
    code = "SEASON_NOT_FOUND"

    def __init__(self, season_id: str):
        self.season_id = season_id
        super().__init__(f"Season {season_id} not found")
