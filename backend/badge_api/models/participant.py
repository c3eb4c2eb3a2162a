from sqlalchemy import Column, String
from ..core.config import settings
from ..core.db import Base


class Participant(Base):
    __tablename__ = settings.PARTICIPANTS_TABLE
    __table_args__ = {"schema": settings.PARTICIPANTS_SCHEMA} if settings.PARTICIPANTS_SCHEMA else {}

    # --- Identifier encoded in the badge QR ---
    id = Column(settings.PARTICIPANT_ID_FIELD, String(64), primary_key=True)

    # --- Badge details ---
    name = Column(settings.PARTICIPANT_NAME_FIELD, String(200), nullable=True)
    category = Column(settings.PARTICIPANT_CATEGORY_FIELD, String(100), nullable=True)

    def __repr__(self):
        return f"<Participant(id='{self.id}', name='{self.name}', category='{self.category}')>"
