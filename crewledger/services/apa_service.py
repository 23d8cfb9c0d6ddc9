import math
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from crewledger.core.exceptions import ApaEntryNotFoundError, BookingNotFoundError, InvalidAmountError
from crewledger.core.logging_config import get_logger
from crewledger.db.session import get_database
from crewledger.engine import reconciliation, status as status_engine
from crewledger.models.apa import ApaEntry
from crewledger.repositories.apa_repo import ApaRepository
from crewledger.repositories.booking_repo import BookingRepository
from crewledger.schemas.apa import ApaEntryCreate

logger = get_logger("services.apa")


class ApaService:
    @staticmethod
    async def list_entries(booking_id: str) -> Tuple[List[ApaEntry], float]:
        """Entries (newest first) and their sum."""
        db = await get_database()
        entries = await ApaRepository(db).list_by_booking(booking_id)
        return entries, reconciliation.sum_apa(entries)

    @staticmethod
    async def recompute_total(booking_id: str) -> float:
        """
        Re-sum the booking's entries and store the result on the booking.

        The stored `apa_total` is only a display copy; anything that needs
        the real figure sums the entries again.
        """
        db = await get_database()
        entries = await ApaRepository(db).list_by_booking(booking_id)
        total = reconciliation.sum_apa(entries)
        await BookingRepository(db).set_apa_total(booking_id, total)
        return total

    @staticmethod
    async def add_entry(
        booking_id: str,
        entry_in: ApaEntryCreate,
        created_by: str,
        now: Optional[datetime] = None,
    ) -> Tuple[ApaEntry, float]:
        if not math.isfinite(entry_in.amount):
            raise InvalidAmountError(f"APA amount must be a finite number (got {entry_in.amount!r})")

        db = await get_database()
        booking = await BookingRepository(db).get(booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        status_engine.ensure_apa_editable(booking, now or datetime.now(timezone.utc))

        entry = ApaEntry(
            booking_id=booking_id,
            amount=entry_in.amount,
            note=entry_in.note,
            created_by=created_by,
        )
        created = await ApaRepository(db).create(entry)
        total = await ApaService.recompute_total(booking_id)

        logger.info(
            "APA entry added",
            extra={"booking_id": booking_id, "amount": entry_in.amount, "apa_total": total},
        )
        return created, total

    @staticmethod
    async def delete_entry(entry_id: str, now: Optional[datetime] = None) -> float:
        """Remove an entry and return the booking's new APA total."""
        db = await get_database()
        apa_repo = ApaRepository(db)

        entry = await apa_repo.get(entry_id)
        if not entry:
            raise ApaEntryNotFoundError(entry_id)

        booking = await BookingRepository(db).get(entry.booking_id)
        if not booking:
            raise BookingNotFoundError(entry.booking_id)
        status_engine.ensure_apa_editable(booking, now or datetime.now(timezone.utc))

        if not await apa_repo.delete(entry_id):
            raise ApaEntryNotFoundError(entry_id)
        total = await ApaService.recompute_total(entry.booking_id)

        logger.info(
            "APA entry deleted",
            extra={"booking_id": entry.booking_id, "entry_id": entry_id, "apa_total": total},
        )
        return total
