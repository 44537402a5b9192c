from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

"""Daily emergency time window.

Requests sent up to and including the cutoff (11:00 local time by default)
are daily emergencies; later ones need a justification.
"""

__all__ = [
    "DEFAULT_CUTOFF",
    "is_daily_emergency",
    "requires_justification",
    "local_time_of_day",
]

DEFAULT_CUTOFF = (11, 0)


def _parse_hh_mm(local_time: str) -> tuple[int, int] | None:
    parts = str(local_time).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def is_daily_emergency(local_time: str, cutoff: tuple[int, int] = DEFAULT_CUTOFF) -> bool:
    """True iff `local_time` (HH:mm) is at or before the cutoff.

    With the default cutoff: hour < 11, or exactly 11:00. Unparseable
    input is never an emergency.
    """
    parsed = _parse_hh_mm(local_time)
    if parsed is None:
        return False
    hour, minute = parsed
    cutoff_hour, cutoff_minute = cutoff
    return hour < cutoff_hour or (hour == cutoff_hour and 0 <= minute <= cutoff_minute)


def requires_justification(local_time: str, cutoff: tuple[int, int] = DEFAULT_CUTOFF) -> bool:
    return not is_daily_emergency(local_time, cutoff)


def local_time_of_day(timezone: str, now: datetime | None = None) -> str:
    """Current HH:mm in the given IANA timezone."""
    moment = now or datetime.now(ZoneInfo(timezone))
    return moment.astimezone(ZoneInfo(timezone)).strftime("%H:%M")
