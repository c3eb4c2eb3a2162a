import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

# -------------------------------------------------------
# ⚙️ Core Imports
# -------------------------------------------------------
from .core.config import settings
from .core.logging_setup import setup_logging
from .core import db
from .core.fonts import get_badge_font
from .models.participant import Participant

# -------------------------------------------------------
# 🧩 Routers
# -------------------------------------------------------
from .routers import badge

__version__ = "1.0.0"

logger = logging.getLogger("badge_api.main")

# -------------------------------------------------------
# 🚀 FastAPI Initialization
# -------------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    description="Printable 50 x 80 mm participant badges rendered as PNG",
)

# -------------------------------------------------------
# 🌐 CORS Middleware
# -------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------------
# 🏁 Startup Events
# -------------------------------------------------------
@app.on_event("startup")
def on_startup():
    """Configure logging, pick the badge font and prepare the participant table."""
    setup_logging()
    font = get_badge_font()
    logger.info("Badge font family: %s", font.family)

    if db.engine is None:
        logger.info("Participant store not configured. Set PARTICIPANTS_DATABASE_URL to enable lookup.")
        return
    try:
        db.Base.metadata.create_all(bind=db.engine, tables=[Participant.__table__])
        logger.info("Participant table ready: %s", Participant.__table__.fullname)
    except Exception as e:
        logger.warning("Participant table init skipped: %s", e)

# -------------------------------------------------------
# ❤️ Health Checks
# -------------------------------------------------------
@app.get("/health", tags=["Health"])
def health():
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": __version__,
    }

@app.get("/health/db", tags=["Health"])
def health_db():
    ok, error = db.db_healthcheck()
    if error == "disabled":
        return {"database": "disabled", "error": None}
    return {"database": "ok" if ok else "error", "error": error}

# -------------------------------------------------------
# 🧭 Root
# -------------------------------------------------------
@app.get("/", include_in_schema=False)
def root():
    """Redirect root URL to the API docs."""
    return RedirectResponse(url="/docs", status_code=307)

# -------------------------------------------------------
# 🔗 Router Registration
# -------------------------------------------------------
app.include_router(badge.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("badge_api.main:app", host="0.0.0.0", port=settings.PORT)
