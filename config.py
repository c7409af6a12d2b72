import os
from dotenv import load_dotenv

# .env is optional; real env vars win
load_dotenv()


def _csv(val):
    return [item.strip() for item in (val or "").split(",") if item.strip()]


class Config:
    # --------------------------
    # Database (SQLAlchemy)
    # --------------------------
    # Local SQLite file for dev; set a postgresql:// URL in production
    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./academy.db")

    # --------------------------
    # Academy
    # --------------------------
    APP_TITLE = os.environ.get("APP_TITLE", "Academy Billing")
    # "today" for due-date checks is taken in this zone
    ACADEMY_TIMEZONE = os.environ.get("ACADEMY_TIMEZONE", "Asia/Seoul")

    # --------------------------
    # HTTP
    # --------------------------
    CORS_ORIGINS = _csv(os.environ.get("CORS_ORIGINS", "http://localhost:3000"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
