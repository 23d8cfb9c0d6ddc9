from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from crewledger.core.exceptions import BookingNotFoundError, SeasonNotFoundError
from crewledger.db.session import get_database
from crewledger.engine import season_stats, status as status_engine, tips
from crewledger.engine.season_stats import SeasonBookingStats
from crewledger.repositories.booking_repo import BookingRepository
from crewledger.repositories.crew_repo import CrewRepository, SeasonRepository
from crewledger.repositories.expense_repo import ExpenseRepository


class StatsService:
    @staticmethod
    async def season(season_id: str, now: Optional[datetime] = None) -> SeasonBookingStats:
        db = await get_database()
        now = now or datetime.now(timezone.utc)

        bookings = await BookingRepository(db).list_by_season(season_id)
        bookings = [status_engine.refresh_status(b, now) for b in bookings]
        expenses = await ExpenseRepository(db).list_by_season(season_id)
        return season_stats.booking_stats(bookings, expenses)

    @staticmethod
    async def tip_split(booking_id: str) -> Tuple[float, Dict[str, float]]:
        """The booking's tip and each crew member's share of it."""
        db = await get_database()

        booking = await BookingRepository(db).get(booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        season = await SeasonRepository(db).get(booking.season_id)
        if not season:
            raise SeasonNotFoundError(booking.season_id)

        crew = await CrewRepository(db).list_by_season(booking.season_id)
        tip = booking.tip or 0.0
        return tip, tips.tip_shares(season, [member.id for member in crew], tip)
