from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class ApaEntryCreate(BaseModel):
    amount: float
    note: Optional[str] = Field(None, max_length=500)


class ApaEntryResponse(BaseModel):
    id: str
    booking_id: str
    amount: float
    note: Optional[str] = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApaSummaryResponse(BaseModel):
    """All entries of a booking plus their freshly summed total."""
    booking_id: str
    apa_total: float
    entries: List[ApaEntryResponse]
