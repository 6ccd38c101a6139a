from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Profile:
    user_id: int
    start_date: date | None
    current_day: int
    difficulty_level: str
    recovery_status: str | None
    total_xp: int
    selected_diet_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DailyLog:
    id: int
    user_id: int
    log_date: date
    sleep_score: int | None
    body_score: int | None
    energy_score: int | None
    stress_score: int | None
    motivation_score: int | None
    diet_completed: bool
    workout_outdoor_completed: bool
    workout_indoor_completed: bool
    reading_completed: bool
    photo_uploaded: bool
    progress_photo_url: str | None
    water_intake: float
    is_completed: bool
    bonus_completed: bool
    is_hard_workout: bool
    plan_workout_1: str | None
    plan_workout_1_time: str | None
    plan_workout_2: str | None
    plan_workout_2_time: str | None
    plan_diet: str | None
    created_at: datetime
    updated_at: datetime
