"""Shared fixtures: in-memory SQLite database, API client and auth helpers."""

import datetime
import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-bytes!")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ["GEMINI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.db.session import get_db
from app.main import app
from app.models.user import User
from app.models.workout import Workout
from app.stats import StatsAggregator

# Sunday, so trailing-week offsets map onto known weekday ordinals
FIXED_NOW = datetime.datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(session) -> User:
    user = User(email="athlete@example.com", hashed_password="not-a-hash", name="Test Athlete")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def add_workout(session, user):
    """Insert a workout for ``user`` ``days_ago`` days before :data:`FIXED_NOW`."""

    def _add(days_ago: float = 0, category: str = "run", duration: float = 30.0, distance: float = 0.0,
             calories: float = 0.0, owner: User | None = None, **fields) -> Workout:
        entry = Workout(user_id=(owner or user).id, category=category,
                        occurred_at=FIXED_NOW - datetime.timedelta(days=days_ago), duration_minutes=duration,
                        distance_km=distance, calories_burned=calories, **fields)
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    return _add


@pytest.fixture
def client(session):
    def _get_db_override():
        yield session

    app.dependency_overrides[get_db] = _get_db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user through the API and return its bearer headers."""

    def _register(email: str = "runner@example.com", password: str = "secret123", name: str = "Runner",
                  **profile) -> dict[str, str]:
        response = client.post("/api/auth/register",
                               json={"name": name, "email": email, "password": password, **profile})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register) -> dict[str, str]:
    return register()


@pytest.fixture
def stats(session):
    """Factory for a :class:`StatsAggregator` whose clock is pinned to :data:`FIXED_NOW`."""

    def _make(**kwargs) -> StatsAggregator:
        return StatsAggregator(session, clock=lambda: FIXED_NOW, **kwargs)

    return _make
