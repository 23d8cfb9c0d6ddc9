import pytest
from fastapi.testclient import TestClient
from crewledger.core.auth import get_current_member
from crewledger.main import app
from crewledger.models.crew import CrewMember, UserRole


def make_member(roles):
    return CrewMember(
        id="507f1f77bcf86cd799439011",
        season_id="507f1f77bcf86cd799439001",
        name="Ana",
        email="ana@example.com",
        roles=roles,
    )


@pytest.fixture
def client():
    """Client without lifespan; services are patched per test."""
    return TestClient(app)


@pytest.fixture
def as_captain():
    member = make_member([UserRole.CAPTAIN])
    app.dependency_overrides[get_current_member] = lambda: member
    yield member
    app.dependency_overrides.clear()


@pytest.fixture
def as_crew():
    member = make_member([UserRole.CREW])
    app.dependency_overrides[get_current_member] = lambda: member
    yield member
    app.dependency_overrides.clear()
