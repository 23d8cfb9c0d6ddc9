from enum import Enum
from typing import Optional

from crewledger.models.base import MongoModel


class ExpenseCategory(str, Enum):
    FOOD = "food"
    FUEL = "fuel"
    MOORING = "mooring"
    OTHER = "other"


class Expense(MongoModel):
    """Read-only here; expenses are written by the expense capture feature."""
    booking_id: str
    season_id: Optional[str] = None
    amount: float
    category: ExpenseCategory = ExpenseCategory.OTHER
    merchant: str = ""
    note: Optional[str] = None
