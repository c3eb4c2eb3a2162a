"""Participant lookup used to turn a QR identifier into a badge name and category."""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ..core import db
from ..models.participant import Participant

logger = logging.getLogger("badge_api.participants")


@dataclass(frozen=True)
class ParticipantRecord:
    id: str
    name: Optional[str] = None
    category: Optional[str] = None


class ParticipantResolver(Protocol):
    def resolve(self, participant_id: str) -> Optional[ParticipantRecord]:
        ...


class SqlParticipantStore:
    """Resolve participants by primary key from the configured SQL table."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def resolve(self, participant_id: str) -> Optional[ParticipantRecord]:
        if not participant_id:
            return None
        try:
            with self.session_factory() as session:
                row = session.execute(
                    select(Participant.id, Participant.name, Participant.category)
                    .where(Participant.id == participant_id)
                ).first()
                if row is None:
                    return None
                pid, name, category = row
                return ParticipantRecord(id=pid, name=name, category=category)
        except SQLAlchemyError as e:
            logger.error("Participant lookup failed for %s: %s", participant_id, e)
            return None


def get_participant_resolver() -> Optional[ParticipantResolver]:
    """FastAPI dependency: the SQL store when configured, otherwise no lookup."""
    if db.SessionLocal is None:
        return None
    return SqlParticipantStore(db.SessionLocal)
