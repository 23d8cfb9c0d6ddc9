from typing import List
from fastapi import APIRouter, Depends, Response, status
from crewledger.core.auth import get_current_member
from crewledger.models.booking import Booking
from crewledger.models.crew import CrewMember
from crewledger.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    OverlapCheckRequest,
    OverlapCheckResponse,
    TipSplitResponse,
    TipUpdate,
)
from crewledger.services.booking_service import BookingService
from crewledger.services.stats_service import StatsService

router = APIRouter()


def _to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(**booking.model_dump())


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    current_member: CrewMember = Depends(get_current_member)
):
    """Create a booking; rejected if its dates overlap another booking"""
    booking = await BookingService.create(booking_in, created_by=current_member.id)
    return _to_response(booking)


@router.post("/overlap", response_model=OverlapCheckResponse)
async def check_overlap(
    payload: OverlapCheckRequest,
    current_member: CrewMember = Depends(get_current_member)
):
    """Check a date range against the season's bookings"""
    conflict = await BookingService.check_overlap(
        payload.season_id,
        payload.arrival_date,
        payload.departure_date,
        payload.exclude_booking_id,
    )
    return OverlapCheckResponse(
        has_overlap=conflict is not None,
        overlapping_booking_id=conflict.id if conflict else None,
    )


@router.get("/season/{season_id}", response_model=List[BookingResponse])
async def list_season_bookings(
    season_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    bookings = await BookingService.list_by_season(season_id)
    return [_to_response(booking) for booking in bookings]


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    return _to_response(await BookingService.get(booking_id))


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    booking_in: BookingUpdate,
    current_member: CrewMember = Depends(get_current_member)
):
    """Edit dates, guests, marinas or notes (upcoming and active bookings only)"""
    return _to_response(await BookingService.update(booking_id, booking_in))


@router.put("/{booking_id}/tip", response_model=BookingResponse)
async def update_tip(
    booking_id: str,
    payload: TipUpdate,
    current_member: CrewMember = Depends(get_current_member)
):
    return _to_response(await BookingService.set_tip(booking_id, payload.tip))


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    return _to_response(await BookingService.cancel(booking_id))


@router.post("/{booking_id}/archive", response_model=BookingResponse)
async def archive_booking(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    return _to_response(await BookingService.archive(booking_id))


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    """Delete an upcoming booking"""
    await BookingService.delete(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{booking_id}/tip-split", response_model=TipSplitResponse)
async def get_tip_split(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    tip, shares = await StatsService.tip_split(booking_id)
    return TipSplitResponse(booking_id=booking_id, tip=tip, shares=shares)
