"""Datetime helpers.

DATE CONVENTION:
Story dates use Eastern Time (America/New_York). This represents
"game day" as fans understand it - a 10pm ET game on Jan 22 is a
"Jan 22 game", regardless of UTC date.

All datetime fields in stories are UTC (ISO 8601).
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

# Eastern timezone for game date interpretation
EASTERN = ZoneInfo("America/New_York")


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


def today_eastern() -> date:
    """Return the current date in Eastern timezone."""
    return datetime.now(EASTERN).date()


def eastern_evening_utc(game_day: date, hour: int = 19) -> datetime:
    """UTC instant of ``hour``:00 Eastern on ``game_day``."""
    return datetime.combine(game_day, time(hour=hour), tzinfo=EASTERN).astimezone(
        timezone.utc
    )


def parse_iso_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp (``Z`` suffix allowed) into UTC.

    Returns None for empty or unparseable input. Naive values are
    treated as UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_eastern_clock(moment: datetime) -> str:
    """Format a datetime as a 12-hour Eastern clock time, e.g. ``07:00 PM``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(EASTERN).strftime("%I:%M %p")
