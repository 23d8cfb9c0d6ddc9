from fastapi import APIRouter, Depends
from crewledger.core.auth import get_current_member
from crewledger.engine.season_stats import SeasonBookingStats
from crewledger.models.crew import CrewMember
from crewledger.services.stats_service import StatsService

router = APIRouter()


@router.get("/{season_id}/stats", response_model=SeasonBookingStats)
async def get_season_stats(
    season_id: str,
    current_member: CrewMember = Depends(get_current_member)
):
    """Booking counts, money totals and top merchants for a season"""
    return await StatsService.season(season_id)
