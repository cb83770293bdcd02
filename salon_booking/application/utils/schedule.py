from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo


def build_time_slots(first: str = "09:00", last: str = "17:30", interval_minutes: int = 30) -> list[str]:
    """Build the bookable start times from `first` to `last` inclusive, as HH:MM strings."""
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")
    current = datetime.strptime(first, "%H:%M")
    end = datetime.strptime(last, "%H:%M")
    if end < current:
        raise ValueError(f"last slot {last} is before first slot {first}")

    slots: list[str] = []
    while current <= end:
        slots.append(current.strftime("%H:%M"))
        current += timedelta(minutes=interval_minutes)
    return slots


def is_bookable_date(day: date, today: date, closed_weekdays: frozenset[int] | set[int] = frozenset({6})) -> bool:
    """A day is bookable when it is after today and the salon is open (Sunday closed by default)."""
    if day <= today:
        return False
    return day.weekday() not in closed_weekdays


def today_in(timezone: str) -> date:
    return datetime.now(_safe_timezone(timezone)).date()


def _safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")
