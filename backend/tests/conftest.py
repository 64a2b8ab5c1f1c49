"""
Shared pytest configuration for backend tests.

The engine and settings are built when backend.huddle is imported, so the
environment is pointed at a throwaway SQLite file and public directory
before anything from the app is imported.
"""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="huddle-test-")
os.environ["HUDDLE_DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["HUDDLE_PUBLIC_DIR"] = os.path.join(_TMP_DIR, "public")
os.environ["HUDDLE_DEFAULT_USER_ID"] = "1"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from backend.huddle.db import Base, SessionLocal, engine  # noqa: E402
from backend.huddle.main import app  # noqa: E402
from backend.huddle.models import Event, League, LeagueEvent, Participation  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def count_rows(db):
    """Counts rows of a model matching the given column filters."""

    def _count(model, **filters):
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        return db.scalar(stmt)

    return _count


@pytest.fixture
def make_event(db):
    """Inserts an event directly and returns its id."""

    def _make(**fields):
        fields.setdefault("name", "Pickup game")
        fields.setdefault("sport", "soccer")
        fields.setdefault("accessibility", "")
        fields.setdefault("image_url", "")
        event = Event(**fields)
        db.add(event)
        db.commit()
        return event.id

    return _make


@pytest.fixture
def make_league(db):
    """Inserts a league, optionally linked to existing events, and returns its id."""

    def _make(event_ids=(), **fields):
        fields.setdefault("name", "Spring league")
        fields.setdefault("sport", "soccer")
        fields.setdefault("image_url", "")
        league = League(**fields)
        db.add(league)
        db.flush()
        for event_id in event_ids:
            db.add(LeagueEvent(league_id=league.id, event_id=event_id))
        db.commit()
        return league.id

    return _make


@pytest.fixture
def make_participation(db):
    def _make(**fields):
        participation = Participation(**fields)
        db.add(participation)
        db.commit()
        return participation.id

    return _make
