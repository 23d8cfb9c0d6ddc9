"""
BookingRepository - bookings collection access.

Status-changing writes carry the statuses they expect in their filter, so a
write racing another crew member's transition matches nothing instead of
overwriting it. This is a guard, not a compare-and-swap on the whole record.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from crewledger.models.base import to_bson
from crewledger.models.booking import Booking, BookingStatus, Reconciliation


class BookingRepository:
    """Repository for bookings."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.bookings

    async def create(self, booking: Booking) -> Booking:
        result = await self.collection.insert_one(booking.to_document())
        return booking.model_copy(update={"id": str(result.inserted_id)})

    async def get(self, booking_id: str) -> Optional[Booking]:
        if not ObjectId.is_valid(booking_id):
            return None
        doc = await self.collection.find_one({"_id": ObjectId(booking_id)})
        if doc:
            return Booking.from_document(doc)
        return None

    async def list_by_season(self, season_id: str) -> List[Booking]:
        docs = await self.collection.find(
            {"season_id": season_id}
        ).sort("arrival_date", 1).to_list(None)
        return [Booking.from_document(doc) for doc in docs]

    async def update_fields(
        self,
        booking_id: str,
        fields: dict,
        expected_statuses: Optional[Iterable[BookingStatus]] = None,
        require_reconciled: bool = False,
    ) -> Optional[Booking]:
        """
        $set the given fields. Returns the updated booking, or None when the
        booking is missing, no longer in one of `expected_statuses`, or (with
        `require_reconciled`) carries no reconciliation.
        """
        query = {"_id": ObjectId(booking_id)}
        if expected_statuses is not None:
            query["status"] = {"$in": [status.value for status in expected_statuses]}
        if require_reconciled:
            query["reconciliation"] = {"$ne": None}

        updates = to_bson(dict(fields))
        updates["updated_at"] = datetime.now(timezone.utc)

        doc = await self.collection.find_one_and_update(
            query,
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        if doc:
            return Booking.from_document(doc)
        return None

    async def attach_reconciliation(
        self,
        booking_id: str,
        reconciliation: Reconciliation,
    ) -> Optional[Booking]:
        """
        Complete the booking and attach its reconciliation in one write.

        Matches only while no reconciliation is stored, so a second attempt
        returns None instead of overwriting the first.
        """
        doc = await self.collection.find_one_and_update(
            {
                "_id": ObjectId(booking_id),
                "reconciliation": None,
                "status": {"$nin": [BookingStatus.CANCELLED.value, BookingStatus.ARCHIVED.value]},
            },
            {
                "$set": {
                    "status": BookingStatus.COMPLETED.value,
                    "reconciliation": to_bson(reconciliation),
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            return_document=ReturnDocument.AFTER
        )
        if doc:
            return Booking.from_document(doc)
        return None

    async def set_apa_total(self, booking_id: str, apa_total: float) -> None:
        await self.collection.update_one(
            {"_id": ObjectId(booking_id)},
            {"$set": {"apa_total": apa_total, "updated_at": datetime.now(timezone.utc)}}
        )

    async def delete_if_upcoming(self, booking_id: str) -> bool:
        """Hard delete; only ever matches an upcoming booking."""
        result = await self.collection.delete_one({
            "_id": ObjectId(booking_id),
            "status": BookingStatus.UPCOMING.value
        })
        return result.deleted_count > 0
