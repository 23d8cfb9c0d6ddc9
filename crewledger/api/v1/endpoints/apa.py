from fastapi import APIRouter, Depends, status
from crewledger.core.auth import get_current_member
from crewledger.models.crew import CrewMember
from crewledger.schemas.apa import ApaEntryCreate, ApaEntryResponse, ApaSummaryResponse
from crewledger.services.apa_service import ApaService

router = APIRouter()


@router.get("/bookings/{booking_id}/apa", response_model=ApaSummaryResponse)
async def list_apa_entries(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    """APA entries for a booking with their total"""
    entries, total = await ApaService.list_entries(booking_id)
    return ApaSummaryResponse(
        booking_id=booking_id,
        apa_total=total,
        entries=[ApaEntryResponse(**entry.model_dump()) for entry in entries],
    )


@router.post(
    "/bookings/{booking_id}/apa",
    response_model=ApaEntryResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_apa_entry(
    booking_id: str,
    entry_in: ApaEntryCreate,
    current_member: CrewMember = Depends(get_current_member)
):
    entry, _ = await ApaService.add_entry(booking_id, entry_in, created_by=current_member.id)
    return ApaEntryResponse(**entry.model_dump())


@router.delete("/apa/{entry_id}")
async def delete_apa_entry(
    entry_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    total = await ApaService.delete_entry(entry_id)
    return {"entry_id": entry_id, "apa_total": total}
