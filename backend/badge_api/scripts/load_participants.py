"""
Import badge participants from a CSV file into the participant store.

The CSV needs a ``name`` column; ``id`` and ``category`` are optional. Rows
without an id get a generated short id, rows whose id already exists are kept
as they are.

Usage:
  PARTICIPANTS_DATABASE_URL=sqlite:///./data/participants.db \
    python -m badge_api.scripts.load_participants participants.csv
"""
import argparse
import csv
import logging
from pathlib import Path

import shortuuid

from badge_api.core import db
from badge_api.core.logging_setup import setup_logging
from badge_api.models.participant import Participant

logger = logging.getLogger("badge_api.scripts.load_participants")


def load_participants(csv_path, session) -> int:
    """Insert new participants from ``csv_path``; return how many were added."""
    added = 0
    seen = set()
    with open(csv_path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            name = (row.get("name") or "").strip()
            if not name:
                logger.warning("Skipping row without name: %s", row)
                continue
            pid = (row.get("id") or "").strip() or shortuuid.uuid()[:12]
            if pid in seen or session.get(Participant, pid) is not None:
                logger.debug("Participant %s already exists, skipping", pid)
                continue
            category = (row.get("category") or "").strip() or None
            session.add(Participant(id=pid, name=name, category=category))
            seen.add(pid)
            added += 1
    session.commit()
    return added


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("csv_path", type=Path)
    args = parser.parse_args(argv)

    setup_logging()
    if db.engine is None:
        parser.error("PARTICIPANTS_DATABASE_URL is not set")

    db.Base.metadata.create_all(bind=db.engine, tables=[Participant.__table__])
    with db.SessionLocal() as session:
        added = load_participants(args.csv_path, session)
    logger.info("Seeded %d participants from %s", added, args.csv_path)


if __name__ == "__main__":
    main()
