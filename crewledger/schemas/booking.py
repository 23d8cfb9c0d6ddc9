from datetime import date, datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from crewledger.models.booking import BookingStatus, Reconciliation


class BookingCreate(BaseModel):
    """Booking creation schema."""
    season_id: str
    arrival_date: date
    departure_date: date
    guest_count: int = Field(..., ge=0)
    departure_marina: Optional[str] = None
    arrival_marina: Optional[str] = None
    notes: Optional[str] = None


class BookingUpdate(BaseModel):
    """Booking update schema. Only the fields sent are changed."""
    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    guest_count: Optional[int] = Field(None, ge=0)
    departure_marina: Optional[str] = None
    arrival_marina: Optional[str] = None
    notes: Optional[str] = None


class TipUpdate(BaseModel):
    tip: Optional[float] = Field(None, ge=0)


class BookingResponse(BaseModel):
    """Booking response schema."""
    id: str
    season_id: str
    arrival_date: date
    departure_date: date
    departure_marina: str
    arrival_marina: str
    guest_count: int
    notes: str
    status: BookingStatus
    apa_total: float
    tip: Optional[float] = None
    reconciliation: Optional[Reconciliation] = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OverlapCheckRequest(BaseModel):
    season_id: str
    arrival_date: date
    departure_date: date
    exclude_booking_id: Optional[str] = None


class OverlapCheckResponse(BaseModel):
    has_overlap: bool
    overlapping_booking_id: Optional[str] = None


class TipSplitResponse(BaseModel):
    booking_id: str
    tip: float
    shares: Dict[str, float]  # crew member id -> amount
