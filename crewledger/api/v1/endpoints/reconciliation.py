from fastapi import APIRouter, Depends, Query
from crewledger.core.auth import get_current_member
from crewledger.models.crew import CrewMember
from crewledger.schemas.reconciliation import (
    ReconciliationRequest,
    ReconciliationResponse,
    SavedReconciliationResponse,
)
from crewledger.services.reconciliation_service import ReconciliationService

router = APIRouter()


@router.get("/bookings/{booking_id}/reconciliation/preview", response_model=ReconciliationResponse)
async def preview_reconciliation(
    booking_id: str,
    actual_cash: float = Query(...),
    current_member: CrewMember = Depends(get_current_member)
):
    """Expected vs. counted cash, without completing the booking"""
    result = await ReconciliationService.preview(booking_id, actual_cash)
    return ReconciliationResponse(booking_id=booking_id, **result.model_dump())


@router.post("/bookings/{booking_id}/reconciliation", response_model=SavedReconciliationResponse)
async def save_reconciliation(
    booking_id: str,
    payload: ReconciliationRequest,
    current_member: CrewMember = Depends(get_current_member)
):
    """Reconcile and complete the booking (once only)"""
    booking, result = await ReconciliationService.save(
        booking_id,
        payload.actual_cash,
        reconciled_by=current_member.id,
    )
    return SavedReconciliationResponse(
        booking_id=booking_id,
        status=booking.status.value,
        reconciled_by=booking.reconciliation.reconciled_by,
        reconciled_at=booking.reconciliation.reconciled_at,
        **result.model_dump(),
    )
