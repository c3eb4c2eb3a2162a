import logging

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the ``badge_api`` logger once; later calls only return it."""
    log = logging.getLogger("badge_api")
    if getattr(log, "_configured", False):
        return log

    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    log.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)

    setattr(log, "_configured", True)
    log.debug("Logging initialized. level=%s", level_name)
    return log
