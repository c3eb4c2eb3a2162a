import os
import sys

import pytest

# Make the backend package importable without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend")))

# Tests run without a participant store unless they build one
os.environ["PARTICIPANTS_DATABASE_URL"] = ""
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from badge_api.core.db import Base
from badge_api.core.fonts import DEFAULT_FONT, get_badge_font
from badge_api.main import app
from badge_api.models.participant import Participant
from badge_api.services.participants import get_participant_resolver


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with the participant table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[Participant.__table__])
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


class FakeResolver:
    def __init__(self, records=None):
        self.records = records or {}
        self.calls = []

    def resolve(self, participant_id):
        self.calls.append(participant_id)
        return self.records.get(participant_id)


@pytest.fixture
def client():
    """TestClient with the default font and no participant store."""
    app.dependency_overrides[get_badge_font] = lambda: DEFAULT_FONT
    app.dependency_overrides[get_participant_resolver] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_resolver():
    """Factory: TestClient whose participant lookups go to a FakeResolver."""
    def _make(records):
        resolver = FakeResolver(records)
        app.dependency_overrides[get_badge_font] = lambda: DEFAULT_FONT
        app.dependency_overrides[get_participant_resolver] = lambda: resolver
        return TestClient(app), resolver

    yield _make
    app.dependency_overrides.clear()
