import logging

from badge_api.core import db
from badge_api.core.logging_setup import setup_logging
from badge_api.models.participant import Participant

logger = logging.getLogger("badge_api.scripts.reset_db")


def main():
    setup_logging()
    if db.engine is None:
        raise SystemExit("PARTICIPANTS_DATABASE_URL is not set")

    logger.info("Dropping and recreating the participant table...")
    Participant.__table__.drop(bind=db.engine, checkfirst=True)
    Participant.__table__.create(bind=db.engine)
    logger.info("Participant table refreshed: %s", Participant.__table__.fullname)


if __name__ == "__main__":
    main()
