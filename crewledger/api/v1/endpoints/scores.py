from typing import List
from fastapi import APIRouter, Depends, status
from crewledger.core.auth import get_current_member, require_captain
from crewledger.models.crew import CrewMember
from crewledger.models.score import BookingScoreSummary, SeasonScoreStats
from crewledger.schemas.score import ScoreEntryCreate, ScoreEntryResponse
from crewledger.services.score_service import ScoreService

router = APIRouter()


@router.get("/bookings/{booking_id}/scores", response_model=List[ScoreEntryResponse])
async def list_score_entries(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    entries = await ScoreService.list_entries(booking_id)
    return [ScoreEntryResponse(**entry.model_dump()) for entry in entries]


@router.post(
    "/bookings/{booking_id}/scores",
    response_model=ScoreEntryResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_score_entry(
    booking_id: str,
    entry_in: ScoreEntryCreate,
    captain: CrewMember = Depends(require_captain)
):
    """Award points to a crew member (captain only)"""
    entry = await ScoreService.add_entry(booking_id, entry_in, awarded_by=captain)
    return ScoreEntryResponse(**entry.model_dump())


@router.get("/bookings/{booking_id}/scores/leaderboard", response_model=List[BookingScoreSummary])
async def get_leaderboard(
    booking_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    return await ScoreService.leaderboard(booking_id)


@router.get("/seasons/{season_id}/scores/stats", response_model=SeasonScoreStats)
async def get_season_score_stats(
    season_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    """Season standings with trophy and horns holders"""
    return await ScoreService.season_stats(season_id)
