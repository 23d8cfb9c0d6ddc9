from typing import List

from crewledger.core.exceptions import BookingNotFoundError, CaptainRequiredError, InputError
from crewledger.core.logging_config import get_logger
from crewledger.db.session import get_database
from crewledger.engine import scoring
from crewledger.models.booking import Booking, BookingStatus
from crewledger.models.crew import CrewMember
from crewledger.models.score import BookingScoreSummary, ScoreEntry, SeasonScoreStats
from crewledger.repositories.booking_repo import BookingRepository
from crewledger.repositories.crew_repo import CrewRepository
from crewledger.repositories.score_repo import ScoreRepository
from crewledger.schemas.score import ScoreEntryCreate

logger = get_logger("services.score")


async def _load_booking(db, booking_id: str) -> Booking:
    booking = await BookingRepository(db).get(booking_id)
    if not booking:
        raise BookingNotFoundError(booking_id)
    return booking


class ScoreService:
    @staticmethod
    async def add_entry(booking_id: str, entry_in: ScoreEntryCreate, awarded_by: CrewMember) -> ScoreEntry:
        """
        Append a score entry. There is no edit or delete; a wrong entry is
        corrected by adding one with the opposite sign.
        """
        if not awarded_by.is_captain:
            logger.warning("Non-captain tried to award points", extra={"member_id": awarded_by.id})
            raise CaptainRequiredError("Only the captain can award points", booking_id=booking_id)

        scoring.validate_score_entry(entry_in.to_user_id, entry_in.points)

        db = await get_database()
        booking = await _load_booking(db, booking_id)

        crew = await CrewRepository(db).list_by_season(booking.season_id)
        if entry_in.to_user_id not in {member.id for member in crew}:
            raise InputError(f"{entry_in.to_user_id} is not a crew member of this season")

        entry = ScoreEntry(
            booking_id=booking_id,
            to_user_id=entry_in.to_user_id,
            points=entry_in.points,
            reason=entry_in.reason or None,
            from_user_id=awarded_by.id,
        )
        created = await ScoreRepository(db).create(entry)
        logger.info(
            "Score entry added",
            extra={"booking_id": booking_id, "to_user_id": entry.to_user_id, "points": entry.points},
        )
        return created

    @staticmethod
    async def list_entries(booking_id: str) -> List[ScoreEntry]:
        db = await get_database()
        return await ScoreRepository(db).list_by_booking(booking_id)

    @staticmethod
    async def leaderboard(booking_id: str) -> List[BookingScoreSummary]:
        db = await get_database()
        booking = await _load_booking(db, booking_id)

        entries = await ScoreRepository(db).list_by_booking(booking_id)
        crew = await CrewRepository(db).list_by_season(booking.season_id)
        return scoring.leaderboard(entries, crew)

    @staticmethod
    async def season_stats(season_id: str) -> SeasonScoreStats:
        """Standings over every non-cancelled booking of the season."""
        db = await get_database()

        bookings = await BookingRepository(db).list_by_season(season_id)
        booking_ids = [b.id for b in bookings if b.status != BookingStatus.CANCELLED]
        crew = await CrewRepository(db).list_by_season(season_id)
        if not booking_ids or not crew:
            return SeasonScoreStats()

        entries = await ScoreRepository(db).list_by_bookings(booking_ids)
        return scoring.season_stats_from_entries(entries, crew)
