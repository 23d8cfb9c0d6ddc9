from datetime import date, datetime, time, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

COLLECTIONS = ("bookings", "apa_entries", "expenses", "score_entries", "crew_members", "seasons")


def make_cursor(docs):
    """Stand-in for a Motor cursor: find(...).sort(...).to_list(None)."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


def _mock_collection():
    collection = MagicMock()
    collection.find = MagicMock(return_value=make_cursor([]))
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


@pytest.fixture
def mock_db():
    """In-memory double of the Motor database used by the services."""
    db = MagicMock()
    for name in COLLECTIONS:
        setattr(db, name, _mock_collection())
    return db


@pytest.fixture
def cursor_of():
    return make_cursor


def _midnight(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


@pytest.fixture
def booking_doc():
    """Factory for raw booking documents as MongoDB returns them."""
    def _make(arrival: date, departure: date, **overrides):
        doc = {
            "_id": ObjectId(),
            "season_id": "season-1",
            "arrival_date": _midnight(arrival),
            "departure_date": _midnight(departure),
            "departure_marina": "Kaštela",
            "arrival_marina": "Kaštela",
            "guest_count": 6,
            "notes": "",
            "status": "upcoming",
            "apa_total": 0.0,
            "tip": None,
            "reconciliation": None,
            "created_by": "captain-1",
            "created_at": datetime(2026, 1, 10, tzinfo=timezone.utc),
            "updated_at": datetime(2026, 1, 10, tzinfo=timezone.utc),
        }
        doc.update(overrides)
        return doc
    return _make


@pytest.fixture
def crew_doc():
    def _make(name: str, roles=None, **overrides):
        doc = {
            "_id": ObjectId(),
            "season_id": "season-1",
            "name": name,
            "email": f"{name.lower()}@example.com",
            "color": "#3366ff",
            "roles": roles or ["crew"],
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        }
        doc.update(overrides)
        return doc
    return _make
