from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from crewledger.models.crew import CrewMember
from crewledger.models.season import Season


class CrewRepository:
    """Crew member lookups."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.crew_members

    async def get(self, member_id: str) -> Optional[CrewMember]:
        if not ObjectId.is_valid(member_id):
            return None
        doc = await self.collection.find_one({"_id": ObjectId(member_id)})
        if doc:
            return CrewMember.from_document(doc)
        return None

    async def list_by_season(self, season_id: str) -> List[CrewMember]:
        docs = await self.collection.find(
            {"season_id": season_id}
        ).sort("created_at", 1).to_list(None)
        return [CrewMember.from_document(doc) for doc in docs]


class SeasonRepository:
    """Season lookups."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.seasons

    async def get(self, season_id: str) -> Optional[Season]:
        if not ObjectId.is_valid(season_id):
            return None
        doc = await self.collection.find_one({"_id": ObjectId(season_id)})
        if doc:
            return Season.from_document(doc)
        return None
