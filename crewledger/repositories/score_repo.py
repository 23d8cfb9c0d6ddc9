from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from crewledger.models.score import ScoreEntry


class ScoreRepository:
    """
    Score entries are append-only: this repository deliberately has no
    update or delete.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.score_entries

    async def create(self, entry: ScoreEntry) -> ScoreEntry:
        result = await self.collection.insert_one(entry.to_document())
        return entry.model_copy(update={"id": str(result.inserted_id)})

    async def list_by_booking(self, booking_id: str) -> List[ScoreEntry]:
        docs = await self.collection.find(
            {"booking_id": booking_id}
        ).sort("created_at", -1).to_list(None)
        return [ScoreEntry.from_document(doc) for doc in docs]

    async def list_by_bookings(self, booking_ids: List[str]) -> List[ScoreEntry]:
        if not booking_ids:
            return []
        docs = await self.collection.find(
            {"booking_id": {"$in": list(booking_ids)}}
        ).sort("created_at", -1).to_list(None)
        return [ScoreEntry.from_document(doc) for doc in docs]
