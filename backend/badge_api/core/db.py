import logging
import os

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger("badge_api.db")

PARTICIPANTS_DATABASE_URL = settings.PARTICIPANTS_DATABASE_URL

Base = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        # Local dev fallback (auto-create folder)
        db_dir = os.path.dirname(url.replace("sqlite:///", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
    )


# ✅ Engine only exists when a participant store is configured
if PARTICIPANTS_DATABASE_URL:
    engine = make_engine(PARTICIPANTS_DATABASE_URL)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info("Participant store enabled: %s", engine.url.render_as_string(hide_password=True))
else:
    engine = None
    SessionLocal = None


def db_healthcheck(bind=None):
    bind = bind if bind is not None else engine
    if bind is None:
        return False, "disabled"
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, None
    except Exception as e:
        return False, str(e)
