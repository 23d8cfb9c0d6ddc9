"""
Scoring engine - crew score card aggregation.

Per booking:
1. Sum each crew member's received points and count their entries
2. Every crew member appears, including those with no entries
3. Sort by total descending (stable, so ties keep crew order)

Per season:
1. Per booking, total points per user
2. Highest total wins the booking, lowest total loses it
   (ties go to the lowest user id; a lone scorer wins but does not lose)
3. Accumulate wins, losses and running totals per user
4. Trophy = strictly most wins, horns = strictly most losses

History is never mutated; aggregates are recomputed from the full entry
set on each read.
"""

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from crewledger.core.exceptions import InvalidScorePointsError, MissingIdentifierError
from crewledger.models.crew import CrewMember
from crewledger.models.score import (
    SCORE_POINTS,
    BookingScoreSummary,
    CrewSeasonTotal,
    ScoreEntry,
    SeasonScoreStats,
)


def validate_score_entry(to_user_id: Optional[str], points) -> None:
    """Reject a missing target or a point value outside SCORE_POINTS."""
    if not to_user_id:
        raise MissingIdentifierError("to_user_id")
    # bool is an int subclass; True must not pass as 1
    if isinstance(points, bool) or not isinstance(points, int) or points not in SCORE_POINTS:
        raise InvalidScorePointsError(points)


def booking_totals(entries: Iterable[ScoreEntry]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for entry in entries:
        totals[entry.to_user_id] = totals.get(entry.to_user_id, 0) + entry.points
    return totals


def leaderboard(
    entries: Iterable[ScoreEntry],
    crew_members: Iterable[CrewMember],
) -> List[BookingScoreSummary]:
    scores: Dict[str, Tuple[int, int]] = {}
    for entry in entries:
        total, count = scores.get(entry.to_user_id, (0, 0))
        scores[entry.to_user_id] = (total + entry.points, count + 1)

    board = []
    for member in crew_members:
        total, count = scores.get(member.id, (0, 0))
        board.append(BookingScoreSummary(
            user_id=member.id,
            user_name=member.name,
            user_color=member.color,
            total_points=total,
            entry_count=count,
        ))

    board.sort(key=lambda summary: summary.total_points, reverse=True)
    return board


def winner_and_loser(totals: Mapping[str, int]) -> Tuple[Optional[str], Optional[str]]:
    """Highest and lowest scorer of one booking; lowest user id wins ties."""
    winner = loser = None
    max_points = min_points = None

    for user_id in sorted(totals):
        points = totals[user_id]
        if max_points is None or points > max_points:
            max_points, winner = points, user_id
        if min_points is None or points < min_points:
            min_points, loser = points, user_id

    return winner, loser


def group_by_booking(entries: Iterable[ScoreEntry]) -> Dict[str, List[ScoreEntry]]:
    grouped: Dict[str, List[ScoreEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.booking_id, []).append(entry)
    return grouped


def _title_holder(crew_totals: List[CrewSeasonTotal], field: str) -> Optional[str]:
    best, holder = 0, None
    for crew in crew_totals:
        count = getattr(crew, field)
        if count > best:
            best, holder = count, crew.user_id
    return holder


def season_stats(
    entries_by_booking: Mapping[str, Iterable[ScoreEntry]],
    crew_members: Iterable[CrewMember],
) -> SeasonScoreStats:
    crew_members = list(crew_members)
    if not entries_by_booking or not crew_members:
        return SeasonScoreStats()

    wins: Counter = Counter()
    losses: Counter = Counter()
    totals: Counter = Counter()

    for entries in entries_by_booking.values():
        per_user = booking_totals(entries)
        if not per_user:
            continue

        totals.update(per_user)

        winner, loser = winner_and_loser(per_user)
        wins[winner] += 1
        if loser != winner:
            losses[loser] += 1

    crew_totals = [
        CrewSeasonTotal(
            user_id=member.id,
            user_name=member.name,
            user_color=member.color,
            total_points=totals.get(member.id, 0),
            booking_wins=wins.get(member.id, 0),
            booking_losses=losses.get(member.id, 0),
        )
        for member in crew_members
    ]
    crew_totals.sort(key=lambda crew: crew.total_points, reverse=True)

    return SeasonScoreStats(
        crew_totals=crew_totals,
        trophy_holder=_title_holder(crew_totals, "booking_wins"),
        horns_holder=_title_holder(crew_totals, "booking_losses"),
    )


def season_stats_from_entries(
    entries: Iterable[ScoreEntry],
    crew_members: Iterable[CrewMember],
) -> SeasonScoreStats:
    return season_stats(group_by_booking(entries), crew_members)
