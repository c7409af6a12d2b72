from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from config import Config

ACADEMY_TZ = ZoneInfo(Config.ACADEMY_TIMEZONE)


def academy_now() -> datetime:
    """Current time in the academy's timezone."""
    return datetime.now(ACADEMY_TZ)


def academy_today() -> date:
    """Calendar date at the academy; injected into routes as the billing "today"."""
    return academy_now().date()
