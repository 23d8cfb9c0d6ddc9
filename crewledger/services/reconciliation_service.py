from datetime import datetime, timezone
from typing import Optional, Tuple

from crewledger.core.exceptions import BookingAlreadyReconciledError, BookingNotFoundError
from crewledger.core.logging_config import get_logger
from crewledger.db.session import get_database
from crewledger.engine import reconciliation, status as status_engine
from crewledger.engine.reconciliation import ReconciliationResult
from crewledger.models.booking import Booking
from crewledger.repositories.apa_repo import ApaRepository
from crewledger.repositories.booking_repo import BookingRepository
from crewledger.repositories.expense_repo import ExpenseRepository

logger = get_logger("services.reconciliation")


async def _calculate(db, booking_id: str, actual_cash: float) -> Tuple[Booking, ReconciliationResult]:
    booking = await BookingRepository(db).get(booking_id)
    if not booking:
        raise BookingNotFoundError(booking_id)

    # Always summed from the entries, never from booking.apa_total
    apa_entries = await ApaRepository(db).list_by_booking(booking_id)
    expenses = await ExpenseRepository(db).list_by_booking(booking_id)
    result = reconciliation.calculate_from_entries(apa_entries, expenses, actual_cash)
    return booking, result


class ReconciliationService:
    @staticmethod
    async def preview(booking_id: str, actual_cash: float) -> ReconciliationResult:
        """Calculate without saving."""
        db = await get_database()
        _, result = await _calculate(db, booking_id, actual_cash)
        return result

    @staticmethod
    async def is_reconciled(booking_id: str) -> bool:
        db = await get_database()
        booking = await BookingRepository(db).get(booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        return booking.is_reconciled

    @staticmethod
    async def save(
        booking_id: str,
        actual_cash: float,
        reconciled_by: str,
        now: Optional[datetime] = None,
    ) -> Tuple[Booking, ReconciliationResult]:
        """
        Reconcile and complete the booking.

        This operation:
        1. Sums the booking's APA entries and expenses afresh
        2. Calculates expected cash, difference and balance
        3. Checks the completion transition is allowed
        4. Completes the booking and attaches the record in a single write

        Raises:
            BookingAlreadyReconciledError: a reconciliation already exists,
                including one written concurrently by another crew member
            InvalidStatusTransitionError: booking is upcoming or cancelled
        """
        db = await get_database()
        now = now or datetime.now(timezone.utc)

        booking, result = await _calculate(db, booking_id, actual_cash)
        record = reconciliation.build_record(result, reconciled_by, now)
        status_engine.complete(booking, record, now)

        saved = await BookingRepository(db).attach_reconciliation(booking_id, record)
        if saved is None:
            logger.warning("Reconciliation already recorded", extra={"booking_id": booking_id})
            raise BookingAlreadyReconciledError(
                "Booking has already been reconciled",
                booking_id=booking_id,
            )

        logger.info(
            "Booking reconciled",
            extra={
                "booking_id": booking_id,
                "expected_cash": result.expected_cash,
                "difference": result.difference,
                "is_balanced": result.is_balanced,
            },
        )
        return saved, result
