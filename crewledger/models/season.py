from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import field_validator

from crewledger.models.base import MongoModel


class TipSplitType(str, Enum):
    EQUAL = "equal"
    CUSTOM = "custom"


class Season(MongoModel):
    boat_name: str
    name: str
    start_date: date
    end_date: date
    currency: str = "EUR"
    tip_split_type: TipSplitType = TipSplitType.EQUAL
    tip_split_config: Optional[Dict[str, float]] = None  # user_id -> percentage
    created_by: str

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value
