from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from crewledger.models.apa import ApaEntry


class ApaRepository:
    """APA entry database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.apa_entries

    async def create(self, entry: ApaEntry) -> ApaEntry:
        result = await self.collection.insert_one(entry.to_document())
        return entry.model_copy(update={"id": str(result.inserted_id)})

    async def get(self, entry_id: str) -> Optional[ApaEntry]:
        if not ObjectId.is_valid(entry_id):
            return None
        doc = await self.collection.find_one({"_id": ObjectId(entry_id)})
        if doc:
            return ApaEntry.from_document(doc)
        return None

    async def list_by_booking(self, booking_id: str) -> List[ApaEntry]:
        """Newest first."""
        docs = await self.collection.find(
            {"booking_id": booking_id}
        ).sort("created_at", -1).to_list(None)
        return [ApaEntry.from_document(doc) for doc in docs]

    async def delete(self, entry_id: str) -> bool:
        result = await self.collection.delete_one({"_id": ObjectId(entry_id)})
        return result.deleted_count > 0
