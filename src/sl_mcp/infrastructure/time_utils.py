from __future__ import annotations

import logging
from datetime import datetime, time
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

STOCKHOLM_TZ: ZoneInfo = ZoneInfo("Europe/Stockholm")

# Cache TTL values (in seconds)
SHORT_CACHE_TTL = 600  # Morning rush, timetables shift quickly
LONG_CACHE_TTL = 1800

RUSH_WINDOW_START = time(5, 0, 0)
RUSH_WINDOW_END = time(10, 0, 0)


def now_stockholm() -> datetime:
    """Return the current moment as a timezone-aware datetime in Europe/Stockholm."""
    return datetime.now(tz=STOCKHOLM_TZ)


def parse_sl_datetime(s: str) -> datetime:
    """Parse an ExpectedDateTime / TimeTabledDateTime string from the SL API.

    Handles formats:
    - "2026-02-24T14:30:00"         (naive, assumed Stockholm)
    - "2026-02-24T14:30:00+01:00"   (offset-aware)

    Always returns a timezone-aware datetime in Europe/Stockholm.
    Raises ValueError on empty or unparseable input.
    """
    if not s or not s.strip():
        raise ValueError("Empty datetime string")

    s = s.strip()
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise ValueError(f"Cannot parse datetime string: {s!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=STOCKHOLM_TZ)
    return dt.astimezone(STOCKHOLM_TZ)


def minutes_until(expected: datetime, now: datetime | None = None) -> int:
    """Return the minutes component of the duration from now until expected.

    This is NOT the total number of minutes: the duration is split into
    hours/minutes/seconds and only the minutes field is returned, truncated
    toward zero and carrying the duration's sign. A departure 1 h 5 min away
    yields 5, one 4 min 59 s away yields 4, one 65 min in the past yields -5.
    """
    if now is None:
        now = now_stockholm()
    total_seconds = int((expected - now).total_seconds())
    sign = -1 if total_seconds < 0 else 1
    return sign * ((abs(total_seconds) // 60) % 60)


def current_cache_ttl(now: datetime | None = None) -> int:
    """Return the response cache TTL (seconds) for the current Stockholm time of day.

    SHORT_CACHE_TTL inside [05:00:00, 10:00:00), LONG_CACHE_TTL otherwise.
    """
    if now is None:
        now = now_stockholm()
    time_of_day = now.astimezone(STOCKHOLM_TZ).time()
    if RUSH_WINDOW_START <= time_of_day < RUSH_WINDOW_END:
        logger.debug("Using short cache time (%d s)", SHORT_CACHE_TTL)
        return SHORT_CACHE_TTL
    logger.debug("Using long cache time (%d s)", LONG_CACHE_TTL)
    return LONG_CACHE_TTL
