from typing import Optional

from crewledger.models.base import MongoModel


class ApaEntry(MongoModel):
    """
    One cash advance (or refund, when negative) received from the guests.

    Immutable once created; the only mutation is deletion. A booking's APA
    total is always the sum of its entries.
    """
    booking_id: str
    amount: float
    note: Optional[str] = None
    created_by: str
