"""
Reconciliation schemas.

Saving a reconciliation completes the booking and locks its cash figures;
it can happen only once per booking.
"""

from datetime import datetime

from pydantic import BaseModel


class ReconciliationRequest(BaseModel):
    """Cash physically counted at checkout."""
    actual_cash: float


class ReconciliationResponse(BaseModel):
    booking_id: str
    apa_total: float
    expense_total: float
    expected_cash: float
    actual_cash: float
    difference: float
    is_balanced: bool


class SavedReconciliationResponse(ReconciliationResponse):
    status: str
    reconciled_by: str
    reconciled_at: datetime
