from datetime import datetime, timezone
from typing import List, Optional

from crewledger.core.config import settings
from crewledger.core.exceptions import (
    BookingNotCancellableError,
    BookingNotDeletableError,
    BookingNotEditableError,
    BookingNotFoundError,
    BookingOverlapError,
    InvalidStatusTransitionError,
)
from crewledger.core.logging_config import get_logger
from crewledger.db.session import get_database
from crewledger.engine import overlap, status as status_engine
from crewledger.models.booking import Booking, BookingStatus
from crewledger.repositories.booking_repo import BookingRepository
from crewledger.schemas.booking import BookingCreate, BookingUpdate

logger = get_logger("services.booking")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _load(repo: BookingRepository, booking_id: str) -> Booking:
    booking = await repo.get(booking_id)
    if not booking:
        raise BookingNotFoundError(booking_id)
    return booking


async def _reject_overlap(
    repo: BookingRepository,
    season_id: str,
    arrival,
    departure,
    exclude_booking_id: Optional[str] = None,
) -> None:
    season_bookings = await repo.list_by_season(season_id)
    conflict = overlap.find_overlap(season_bookings, arrival, departure, exclude_booking_id)
    if conflict is not None:
        logger.warning(
            "Booking dates overlap an existing booking",
            extra={"season_id": season_id, "overlapping_booking_id": conflict.id},
        )
        raise BookingOverlapError(
            f"Dates overlap booking {conflict.id} "
            f"({conflict.arrival_date.isoformat()} - {conflict.departure_date.isoformat()})",
            overlapping_booking_id=conflict.id,
        )


class BookingService:
    @staticmethod
    async def create(booking_in: BookingCreate, created_by: str, now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        repo = BookingRepository(db)
        now = now or _utcnow()

        # Rejects a reversed range before anything is read or written
        status = status_engine.derive_status(booking_in.arrival_date, booking_in.departure_date, now)
        await _reject_overlap(repo, booking_in.season_id, booking_in.arrival_date, booking_in.departure_date)

        booking = Booking(
            season_id=booking_in.season_id,
            arrival_date=booking_in.arrival_date,
            departure_date=booking_in.departure_date,
            departure_marina=booking_in.departure_marina or settings.DEFAULT_MARINA,
            arrival_marina=booking_in.arrival_marina or settings.DEFAULT_MARINA,
            guest_count=booking_in.guest_count,
            notes=booking_in.notes or "",
            status=status,
            apa_total=0.0,
            created_by=created_by,
        )
        created = await repo.create(booking)
        logger.info("Booking created", extra={"booking_id": created.id, "status": status.value})
        return created

    @staticmethod
    async def get(booking_id: str, now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        booking = await _load(BookingRepository(db), booking_id)
        return status_engine.refresh_status(booking, now or _utcnow())

    @staticmethod
    async def list_by_season(season_id: str, now: Optional[datetime] = None) -> List[Booking]:
        """Season bookings by arrival, with calendar statuses brought up to date."""
        db = await get_database()
        now = now or _utcnow()
        bookings = await BookingRepository(db).list_by_season(season_id)
        return [status_engine.refresh_status(booking, now) for booking in bookings]

    @staticmethod
    async def check_overlap(
        season_id: str,
        arrival,
        departure,
        exclude_booking_id: Optional[str] = None,
    ) -> Optional[Booking]:
        db = await get_database()
        season_bookings = await BookingRepository(db).list_by_season(season_id)
        return overlap.find_overlap(season_bookings, arrival, departure, exclude_booking_id)

    @staticmethod
    async def update(booking_id: str, booking_in: BookingUpdate, now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        repo = BookingRepository(db)
        now = now or _utcnow()

        booking = await _load(repo, booking_id)
        changes = booking_in.model_dump(exclude_unset=True, exclude_none=True)
        edited = status_engine.apply_edit(booking, changes, now)

        dates_changed = (
            edited.arrival_date != booking.arrival_date
            or edited.departure_date != booking.departure_date
        )
        if dates_changed:
            await _reject_overlap(repo, booking.season_id, edited.arrival_date, edited.departure_date, booking_id)

        fields = dict(changes)
        fields.update(
            arrival_date=edited.arrival_date,
            departure_date=edited.departure_date,
            status=edited.status,
        )
        updated = await repo.update_fields(
            booking_id,
            fields,
            expected_statuses=[BookingStatus.UPCOMING, BookingStatus.ACTIVE],
        )
        if updated is None:
            raise BookingNotEditableError("Booking changed state while being edited", booking_id=booking_id)
        return updated

    @staticmethod
    async def set_tip(booking_id: str, tip: Optional[float], now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        repo = BookingRepository(db)
        now = now or _utcnow()

        booking = await _load(repo, booking_id)
        tipped = status_engine.set_tip(booking, tip, now)
        updated = await repo.update_fields(
            booking_id,
            {"tip": tipped.tip},
            expected_statuses=[BookingStatus.UPCOMING, BookingStatus.ACTIVE, BookingStatus.COMPLETED],
        )
        if updated is None:
            raise BookingNotEditableError("Booking changed state while being edited", booking_id=booking_id)
        return updated

    @staticmethod
    async def cancel(booking_id: str, now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        repo = BookingRepository(db)

        booking = await _load(repo, booking_id)
        cancelled = status_engine.cancel(booking, now or _utcnow())

        updated = await repo.update_fields(
            booking_id,
            {"status": cancelled.status},
            expected_statuses=[BookingStatus.UPCOMING],
        )
        if updated is None:
            raise BookingNotCancellableError("Booking is no longer upcoming", booking_id=booking_id)
        logger.info("Booking cancelled", extra={"booking_id": booking_id})
        return updated

    @staticmethod
    async def archive(booking_id: str, now: Optional[datetime] = None) -> Booking:
        db = await get_database()
        repo = BookingRepository(db)

        booking = await _load(repo, booking_id)
        archived = status_engine.archive(booking, now or _utcnow())

        updated = await repo.update_fields(
            booking_id,
            {"status": archived.status},
            expected_statuses=[BookingStatus.COMPLETED],
            require_reconciled=True,
        )
        if updated is None:
            raise InvalidStatusTransitionError("Booking is no longer completed", booking_id=booking_id)
        logger.info("Booking archived", extra={"booking_id": booking_id})
        return updated

    @staticmethod
    async def delete(booking_id: str, now: Optional[datetime] = None) -> None:
        """Hard delete; only upcoming bookings may go."""
        db = await get_database()
        repo = BookingRepository(db)

        booking = await _load(repo, booking_id)
        try:
            status_engine.ensure_deletable(booking, now or _utcnow())
        except BookingNotDeletableError:
            logger.warning(
                "Refused to delete booking",
                extra={"booking_id": booking_id, "status": booking.status.value},
            )
            raise

        if not await repo.delete_if_upcoming(booking_id):
            raise BookingNotDeletableError("Only upcoming bookings can be deleted", booking_id=booking_id)
        logger.info("Booking deleted", extra={"booking_id": booking_id})
