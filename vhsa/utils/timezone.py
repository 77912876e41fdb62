from datetime import datetime, date, timezone
from typing import Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from vhsa.core.config import settings


def get_zoneinfo() -> Optional[ZoneInfo]:
    tz_name = getattr(settings, "DEFAULT_TIMEZONE", None)
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def now_local() -> datetime:
    tz = get_zoneinfo()
    return datetime.now(tz or timezone.utc)


def today_local() -> date:
    return now_local().date()


def isoformat_now() -> str:
    return now_local().isoformat()
