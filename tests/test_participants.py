"""
Tests for badge_api.services.participants and the participant seeding script.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from badge_api.core import db
from badge_api.core.config import settings
from badge_api.models.participant import Participant
from badge_api.scripts.load_participants import load_participants
from badge_api.services.participants import (
    ParticipantRecord,
    SqlParticipantStore,
    get_participant_resolver,
)


class TestSqlParticipantStore:

    def test_resolve_found(self, session_factory):
        with session_factory() as session:
            session.add(Participant(id="abc-123", name="Maria Garcia", category="Speaker"))
            session.commit()

        store = SqlParticipantStore(session_factory)
        assert store.resolve("abc-123") == ParticipantRecord(
            id="abc-123", name="Maria Garcia", category="Speaker"
        )

    def test_resolve_missing(self, session_factory):
        assert SqlParticipantStore(session_factory).resolve("nobody") is None

    def test_resolve_empty_id(self, session_factory):
        assert SqlParticipantStore(session_factory).resolve("") is None

    def test_database_error_is_a_miss(self):
        # Table never created: the query fails inside SQLAlchemy
        engine = create_engine("sqlite://", poolclass=StaticPool)
        store = SqlParticipantStore(sessionmaker(bind=engine))
        assert store.resolve("abc-123") is None

    def test_resolve_against_existing_bare_table(self):
        # Table created outside the app with only id, name and category
        engine = create_engine("sqlite://", poolclass=StaticPool)
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE participants (id VARCHAR PRIMARY KEY, name VARCHAR, category VARCHAR)"
            ))
            conn.execute(text(
                "INSERT INTO participants (id, name, category) VALUES ('abc-123', 'Maria Garcia', 'Speaker')"
            ))
        store = SqlParticipantStore(sessionmaker(bind=engine))
        assert store.resolve("abc-123") == ParticipantRecord(
            id="abc-123", name="Maria Garcia", category="Speaker"
        )

    def test_category_column_follows_setting(self):
        assert Participant.__table__.c.category.name == settings.PARTICIPANT_CATEGORY_FIELD
        assert set(Participant.__table__.c.keys()) == {"id", "name", "category"}


class TestGetParticipantResolver:

    def test_disabled_without_database(self, monkeypatch):
        monkeypatch.setattr(db, "SessionLocal", None)
        assert get_participant_resolver() is None

    def test_sql_store_when_configured(self, monkeypatch, session_factory):
        monkeypatch.setattr(db, "SessionLocal", session_factory)
        resolver = get_participant_resolver()
        assert isinstance(resolver, SqlParticipantStore)
        assert resolver.session_factory is session_factory


class TestLoadParticipants:

    def test_import_csv(self, tmp_path, session_factory):
        csv_path = tmp_path / "participants.csv"
        csv_path.write_text(
            "id,name,category\n"
            "p-1,Maria Garcia Lopez,Speaker\n"
            ",Alexander Smith,\n"
            "p-2,,Staff\n",
            encoding="utf-8",
        )
        with session_factory() as session:
            added = load_participants(csv_path, session)
            assert added == 2
            maria = session.get(Participant, "p-1")
            assert maria.name == "Maria Garcia Lopez"
            assert maria.category == "Speaker"
            alex = session.query(Participant).filter(Participant.name == "Alexander Smith").one()
            assert len(alex.id) == 12
            assert alex.category is None
            assert session.get(Participant, "p-2") is None

    def test_existing_ids_are_skipped(self, tmp_path, session_factory):
        csv_path = tmp_path / "participants.csv"
        csv_path.write_text("id,name\np-1,Maria\n", encoding="utf-8")
        with session_factory() as session:
            assert load_participants(csv_path, session) == 1
            assert load_participants(csv_path, session) == 0

    def test_repeated_id_in_one_file_keeps_first_row(self, tmp_path, session_factory):
        csv_path = tmp_path / "participants.csv"
        csv_path.write_text(
            "id,name\n"
            "p-1,Maria\n"
            "p-1,Maria Again\n"
            "p-2,Bob\n",
            encoding="utf-8",
        )
        with session_factory() as session:
            assert load_participants(csv_path, session) == 2
            assert session.get(Participant, "p-1").name == "Maria"
            assert session.query(Participant).count() == 2


def test_db_healthcheck(sqlite_engine):
    assert db.db_healthcheck(sqlite_engine) == (True, None)
    assert db.db_healthcheck() == (False, "disabled")
