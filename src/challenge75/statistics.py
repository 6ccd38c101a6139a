from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from challenge75.models import DailyLog
from challenge75.rules import targets_for


@dataclass(frozen=True)
class HabitRates:
    diet: int
    outdoor: int
    indoor: int
    water: int
    reading: int
    photo: int


@dataclass(frozen=True)
class CheckinPoint:
    log_date: date
    sleep: int
    energy: int
    body: int


def _percent(count: int, total: int) -> int:
    return round(count * 100 / total)


def habit_rates(logs: list[DailyLog], level: str) -> HabitRates:
    """Share of logged days (0-100) on which each habit was met."""
    if not logs:
        return HabitRates(diet=0, outdoor=0, indoor=0, water=0, reading=0, photo=0)
    targets = targets_for(level)
    total = len(logs)
    return HabitRates(
        diet=_percent(sum(1 for log in logs if log.diet_completed), total),
        outdoor=_percent(sum(1 for log in logs if log.workout_outdoor_completed), total),
        indoor=_percent(sum(1 for log in logs if log.workout_indoor_completed), total),
        water=_percent(sum(1 for log in logs if log.water_intake >= targets.water_liters), total),
        reading=_percent(sum(1 for log in logs if log.reading_completed), total),
        photo=_percent(sum(1 for log in logs if log.photo_uploaded), total),
    )


def checkin_trends(logs: list[DailyLog], days: int = 7) -> list[CheckinPoint]:
    recent = sorted(logs, key=lambda log: log.log_date, reverse=True)[:days]
    return [
        CheckinPoint(
            log_date=log.log_date,
            sleep=log.sleep_score or 0,
            energy=log.energy_score or 0,
            body=log.body_score or 0,
        )
        for log in reversed(recent)
    ]
