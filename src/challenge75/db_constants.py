from __future__ import annotations

from typing import Any

PROFILE_FIELDS = frozenset(
    {
        "start_date",
        "current_day",
        "difficulty_level",
        "recovery_status",
        "total_xp",
        "selected_diet_id",
    }
)

SCORE_FIELDS = ("sleep_score", "body_score", "energy_score", "stress_score", "motivation_score")

PLANNING_FIELDS = (
    "plan_workout_1",
    "plan_workout_1_time",
    "plan_workout_2",
    "plan_workout_2_time",
    "plan_diet",
)

BOOL_LOG_FIELDS = frozenset(
    {
        "diet_completed",
        "workout_outdoor_completed",
        "workout_indoor_completed",
        "reading_completed",
        "photo_uploaded",
        "is_completed",
        "bonus_completed",
        "is_hard_workout",
    }
)

LOG_FIELDS = frozenset(
    set(SCORE_FIELDS)
    | set(PLANNING_FIELDS)
    | set(BOOL_LOG_FIELDS)
    | {"progress_photo_url", "water_intake"}
)

APP_CONFIG_DEFAULTS: dict[str, Any] = {
    "xp.daily_base": 100,
    "xp.bonus_workout": 20,
    "xp.level_bonus.easy": 0,
    "xp.level_bonus.medium": 25,
    "xp.level_bonus.hard": 50,
}
