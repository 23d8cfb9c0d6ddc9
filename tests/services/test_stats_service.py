import pytest
from datetime import date, datetime, timezone
from unittest.mock import patch
from bson import ObjectId
from crewledger.core.exceptions import BookingNotFoundError, SeasonNotFoundError
from crewledger.services.stats_service import StatsService

PATCH_DB = "crewledger.services.stats_service.get_database"
NOW = datetime(2026, 7, 15, tzinfo=timezone.utc)


def season_doc(**overrides):
    doc = {
        "_id": ObjectId(),
        "boat_name": "Bura",
        "name": "Summer 2026",
        "start_date": datetime(2026, 5, 1, tzinfo=timezone.utc),
        "end_date": datetime(2026, 10, 31, tzinfo=timezone.utc),
        "currency": "EUR",
        "tip_split_type": "equal",
        "tip_split_config": None,
        "created_by": "captain-1",
        "created_at": NOW,
        "updated_at": NOW,
    }
    doc.update(overrides)
    return doc


@pytest.mark.asyncio
async def test_season_stats_use_current_statuses(mock_db, cursor_of, booking_doc):
    mock_db.bookings.find.return_value = cursor_of([
        booking_doc(date(2026, 7, 1), date(2026, 7, 8), tip=300.0),   # stored upcoming, now completed
        booking_doc(date(2026, 7, 12), date(2026, 7, 19)),
        booking_doc(date(2026, 8, 1), date(2026, 8, 8), status="cancelled", tip=1000.0),
    ])

    with patch(PATCH_DB, return_value=mock_db):
        stats = await StatsService.season("season-1", now=NOW)

    assert stats.total_bookings == 2
    assert stats.completed_bookings == 1
    assert stats.active_bookings == 1
    assert stats.total_tips == 300
    assert stats.best_tip_booking.value == 300


@pytest.mark.asyncio
async def test_tip_split_custom(mock_db, cursor_of, booking_doc, crew_doc):
    crew = [crew_doc("Ana", roles=["captain"]), crew_doc("Bruno")]
    ana, bruno = (str(doc["_id"]) for doc in crew)
    season = season_doc(tip_split_type="custom", tip_split_config={ana: 60, bruno: 40})
    booking = booking_doc(date(2026, 7, 1), date(2026, 7, 8), season_id=str(season["_id"]), tip=500.0)
    mock_db.bookings.find_one.return_value = booking
    mock_db.seasons.find_one.return_value = season
    mock_db.crew_members.find.return_value = cursor_of(crew)

    with patch(PATCH_DB, return_value=mock_db):
        tip, shares = await StatsService.tip_split(str(booking["_id"]))

    assert tip == 500.0
    assert shares[ana] == pytest.approx(300)
    assert shares[bruno] == pytest.approx(200)


@pytest.mark.asyncio
async def test_tip_split_without_season(mock_db, booking_doc):
    mock_db.bookings.find_one.return_value = booking_doc(
        date(2026, 7, 1), date(2026, 7, 8), season_id=str(ObjectId())
    )

    with patch(PATCH_DB, return_value=mock_db):
        with pytest.raises(SeasonNotFoundError):
            await StatsService.tip_split(str(ObjectId()))


@pytest.mark.asyncio
async def test_tip_split_missing_booking(mock_db):
    with patch(PATCH_DB, return_value=mock_db):
        with pytest.raises(BookingNotFoundError):
            await StatsService.tip_split(str(ObjectId()))


@pytest.mark.asyncio
async def test_tip_split_without_crew_keeps_booking_tip(mock_db, booking_doc):
    season = season_doc()
    booking = booking_doc(date(2026, 7, 1), date(2026, 7, 8), season_id=str(season["_id"]), tip=500.0)
    mock_db.bookings.find_one.return_value = booking
    mock_db.seasons.find_one.return_value = season

    with patch(PATCH_DB, return_value=mock_db):
        tip, shares = await StatsService.tip_split(str(booking["_id"]))

    assert tip == 500.0
    assert shares == {}
