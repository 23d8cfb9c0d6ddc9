from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from crewledger.models.score import CrewSeasonTotal, ScoreEntry, SeasonScoreStats

BOOKING_ID = "507f1f77bcf86cd799439012"
SERVICE = "crewledger.services.score_service.ScoreService"


def test_captain_awards_points(client, as_captain):
    entry = ScoreEntry(
        id="507f1f77bcf86cd799439050",
        booking_id=BOOKING_ID,
        to_user_id="507f1f77bcf86cd799439022",
        points=2,
        reason="Spotless deck",
        from_user_id=as_captain.id,
        created_at=datetime(2026, 7, 15, tzinfo=timezone.utc),
    )

    with patch(f"{SERVICE}.add_entry", new_callable=AsyncMock) as mock_add:
        mock_add.return_value = entry

        response = client.post(
            f"/api/v1/bookings/{BOOKING_ID}/scores",
            json={"to_user_id": "507f1f77bcf86cd799439022", "points": 2, "reason": "Spotless deck"},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["points"] == 2
    assert data["from_user_id"] == as_captain.id
    assert mock_add.call_args.kwargs["awarded_by"] == as_captain


def test_crew_cannot_award_points(client, as_crew):
    with patch(f"{SERVICE}.add_entry", new_callable=AsyncMock) as mock_add:
        response = client.post(
            f"/api/v1/bookings/{BOOKING_ID}/scores",
            json={"to_user_id": "507f1f77bcf86cd799439022", "points": 2},
        )

    assert response.status_code == 403
    mock_add.assert_not_called()


def test_season_score_stats(client, as_crew):
    stats = SeasonScoreStats(
        crew_totals=[
            CrewSeasonTotal(user_id="user2", user_name="Bruno", total_points=4, booking_wins=2),
            CrewSeasonTotal(user_id="user3", user_name="Cvita", total_points=-3, booking_losses=2),
        ],
        trophy_holder="user2",
        horns_holder="user3",
    )

    with patch(f"{SERVICE}.season_stats", new_callable=AsyncMock) as mock_stats:
        mock_stats.return_value = stats

        response = client.get("/api/v1/seasons/507f1f77bcf86cd799439001/scores/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["trophy_holder"] == "user2"
    assert data["horns_holder"] == "user3"
    assert [t["user_id"] for t in data["crew_totals"]] == ["user2", "user3"]
