import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 🧠 App Info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Badge PNG API")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    PORT: int = int(os.getenv("PORT", 3000))

    # 🗄️ Participant store (empty URL disables lookup)
    PARTICIPANTS_DATABASE_URL: str = os.getenv("PARTICIPANTS_DATABASE_URL", "")
    PARTICIPANTS_TABLE: str = os.getenv("PARTICIPANTS_TABLE", "participants")
    PARTICIPANTS_SCHEMA: str = os.getenv("PARTICIPANTS_SCHEMA", "")
    PARTICIPANT_ID_FIELD: str = os.getenv("PARTICIPANT_ID_FIELD", "id")
    PARTICIPANT_NAME_FIELD: str = os.getenv("PARTICIPANT_NAME_FIELD", "name")
    PARTICIPANT_CATEGORY_FIELD: str = os.getenv("PARTICIPANT_CATEGORY_FIELD", "category")

    # 🔤 Fonts
    FONT_DIR: str = os.getenv("FONT_DIR", "")

    # 🪪 Badge defaults (portrait physical size)
    BADGE_MM_WIDTH: float = float(os.getenv("BADGE_MM_WIDTH", 50))
    BADGE_MM_HEIGHT: float = float(os.getenv("BADGE_MM_HEIGHT", 80))
    DEFAULT_DPI: int = int(os.getenv("DEFAULT_DPI", 300))
    DEFAULT_MAX_CHARS: int = int(os.getenv("DEFAULT_MAX_CHARS", 15))

    # 🕓 Logs
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
