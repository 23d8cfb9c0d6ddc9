from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from crewledger.models.expense import Expense


class ExpenseRepository:
    """Read-only access to expenses (written by the expense capture feature)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.expenses

    async def list_by_booking(self, booking_id: str) -> List[Expense]:
        docs = await self.collection.find(
            {"booking_id": booking_id}
        ).sort("created_at", -1).to_list(None)
        return [Expense.from_document(doc) for doc in docs]

    async def list_by_season(self, season_id: str) -> List[Expense]:
        docs = await self.collection.find(
            {"season_id": season_id}
        ).sort("created_at", -1).to_list(None)
        return [Expense.from_document(doc) for doc in docs]
