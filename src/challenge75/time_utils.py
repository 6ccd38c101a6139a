from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo


DEFAULT_TZ = "Europe/Stockholm"


def now_local(tz_name: str = DEFAULT_TZ) -> datetime:
    return datetime.now(tz=ZoneInfo(tz_name))


def today_local(tz_name: str = DEFAULT_TZ) -> date:
    return now_local(tz_name).date()


@dataclass(frozen=True)
class WeekRange:
    start: date
    end: date


def week_range_for(day: date) -> WeekRange:
    """Monday..Sunday (both inclusive) containing ``day``."""
    start = day - timedelta(days=day.weekday())
    end = start + timedelta(days=6)
    return WeekRange(start=start, end=end)


def parse_iso_date(value: str | date | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def days_between(earlier: date, later: date) -> int:
    return (later - earlier).days
