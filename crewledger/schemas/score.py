from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class ScoreEntryCreate(BaseModel):
    """Points are checked by the scoring engine, not here."""
    to_user_id: Optional[str] = None
    points: int
    reason: Optional[str] = Field(None, max_length=200)


class ScoreEntryResponse(BaseModel):
    id: str
    booking_id: str
    to_user_id: str
    points: int
    reason: Optional[str] = None
    from_user_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
