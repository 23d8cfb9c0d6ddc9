"""
Crew score card.

The captain awards fixed point values to crew members during a booking.
Entries are append-only: a mistake is corrected by a compensating entry of
the opposite sign, never by editing or deleting history.
"""

from typing import List, Optional

from pydantic import BaseModel

from crewledger.models.base import MongoModel

SCORE_POINTS = (-3, -2, -1, 1, 2, 3)


class ScoreEntry(MongoModel):
    booking_id: str
    to_user_id: str    # Crew member receiving points
    points: int        # One of SCORE_POINTS
    reason: Optional[str] = None
    from_user_id: str  # Always a captain


class BookingScoreSummary(BaseModel):
    """Per-user totals for one booking (derived, not persisted)."""
    user_id: str
    user_name: str = ""
    user_color: str = ""
    total_points: int = 0
    entry_count: int = 0


class CrewSeasonTotal(BaseModel):
    user_id: str
    user_name: str = ""
    user_color: str = ""
    total_points: int = 0
    booking_wins: int = 0    # Times had highest score
    booking_losses: int = 0  # Times had lowest score


class SeasonScoreStats(BaseModel):
    """Season-wide standings (derived, not persisted)."""
    crew_totals: List[CrewSeasonTotal] = []
    trophy_holder: Optional[str] = None  # Most wins
    horns_holder: Optional[str] = None   # Most losses
