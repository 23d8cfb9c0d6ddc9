"""
Booking model - one charter within a season.

Design principles:
- Status is either derived from the dates or frozen by an explicit
  terminal action (cancel / complete / archive)
- A reconciliation is attached exactly once, at completion
- Never deleted once status leaves `upcoming`
- Dates are date-only
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, ConfigDict, field_validator

from crewledger.core.config import settings
from crewledger.models.base import MongoModel


class BookingStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    CANCELLED = "cancelled"


class Reconciliation(BaseModel):
    """
    End-of-booking cash check.

    Invariants:
    - expected_cash = apa_total - expense_total
    - difference = actual_cash - expected_cash
    - is_balanced iff |difference| < tolerance
    """
    expected_cash: float
    actual_cash: float
    difference: float
    is_balanced: bool
    reconciled_by: str
    reconciled_at: datetime


class Booking(MongoModel):
    season_id: str
    arrival_date: date
    departure_date: date
    departure_marina: str = settings.DEFAULT_MARINA
    arrival_marina: str = settings.DEFAULT_MARINA
    guest_count: int = Field(..., ge=0)
    notes: str = ""  # Crew-private notes

    status: BookingStatus = BookingStatus.UPCOMING
    apa_total: float = 0.0
    tip: Optional[float] = None
    reconciliation: Optional[Reconciliation] = None

    created_by: str

    @field_validator("arrival_date", "departure_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        # Stored as midnight datetimes; see MongoModel.to_document
        if isinstance(value, datetime):
            return value.date()
        return value

    @property
    def is_reconciled(self) -> bool:
        return self.reconciliation is not None


# ---------------------------------------------------------------------------
# Lifecycle view
#
# The flat `status` field is what storage sees. Transitions work on this
# union instead, so a cancelled booking has no dates to re-derive from and
# a completed one always has its reconciliation.
# ---------------------------------------------------------------------------


class Scheduled(BaseModel):
    """Status follows the calendar."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["scheduled"] = "scheduled"
    arrival: date
    departure: date


class Cancelled(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cancelled"] = "cancelled"


class Completed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["completed"] = "completed"
    reconciliation: Reconciliation


class Archived(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["archived"] = "archived"
    reconciliation: Reconciliation


BookingLifecycle = Annotated[
    Union[Scheduled, Cancelled, Completed, Archived],
    Field(discriminator="kind"),
]
