from __future__ import annotations

import sqlite3
from datetime import date, datetime

from challenge75.models import DailyLog, Profile
from challenge75.rules import DEFAULT_LEVEL, DEFAULT_WATER_LITERS
from challenge75.time_utils import parse_iso_date


def _opt_int(value: object) -> int | None:
    return int(value) if value is not None else None


def _row_to_profile(row: sqlite3.Row) -> Profile:
    return Profile(
        user_id=row["user_id"],
        start_date=parse_iso_date(row["start_date"]),
        current_day=int(row["current_day"] or 0),
        difficulty_level=row["difficulty_level"] or DEFAULT_LEVEL,
        recovery_status=row["recovery_status"],
        total_xp=max(0, int(row["total_xp"] or 0)),
        selected_diet_id=row["selected_diet_id"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _row_to_log(row: sqlite3.Row) -> DailyLog:
    return DailyLog(
        id=row["id"],
        user_id=row["user_id"],
        log_date=date.fromisoformat(row["log_date"]),
        sleep_score=_opt_int(row["sleep_score"]),
        body_score=_opt_int(row["body_score"]),
        energy_score=_opt_int(row["energy_score"]),
        stress_score=_opt_int(row["stress_score"]),
        motivation_score=_opt_int(row["motivation_score"]),
        diet_completed=bool(row["diet_completed"]),
        workout_outdoor_completed=bool(row["workout_outdoor_completed"]),
        workout_indoor_completed=bool(row["workout_indoor_completed"]),
        reading_completed=bool(row["reading_completed"]),
        photo_uploaded=bool(row["photo_uploaded"]),
        progress_photo_url=row["progress_photo_url"],
        water_intake=float(row["water_intake"] if row["water_intake"] is not None else DEFAULT_WATER_LITERS),
        is_completed=bool(row["is_completed"]),
        bonus_completed=bool(row["bonus_completed"]),
        is_hard_workout=bool(row["is_hard_workout"]),
        plan_workout_1=row["plan_workout_1"],
        plan_workout_1_time=row["plan_workout_1_time"],
        plan_workout_2=row["plan_workout_2"],
        plan_workout_2_time=row["plan_workout_2_time"],
        plan_diet=row["plan_diet"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )
