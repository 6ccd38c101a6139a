from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from challenge75.db import DailyLog, Database, Profile
from challenge75.db_constants import PLANNING_FIELDS
from challenge75.errors import BonusAlreadyRegisteredError, DayAlreadyCompletedError, ResetNotConfirmedError
from challenge75.gamification import Rank, bonus_workout_xp, daily_xp, rank_for
from challenge75.grace import GracePeriodResult, check_grace_period
from challenge75.progress import Streak, compute_streak, day_number, days_remaining
from challenge75.recovery import MorningScores, RecoveryResult, calculate_recovery_status, scores_to_db
from challenge75.rules import (
    DailyTargets,
    missing_requirements,
    normalize_level,
    targets_for,
    validate_rule,
    weekly_hard_remaining,
)
from challenge75.time_utils import week_range_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckinOutcome:
    log: DailyLog
    recovery: RecoveryResult
    challenge_started: bool


@dataclass(frozen=True)
class CompletionOutcome:
    log_date: date
    xp_awarded: int
    total_xp: int


@dataclass(frozen=True)
class StatusView:
    today: date
    current_day: int
    days_remaining: int
    difficulty_level: str
    targets: DailyTargets
    log: DailyLog | None
    missing: list[str]
    streak: Streak
    total_xp: int
    rank: Rank
    weekly_hard_count: int
    weekly_hard_remaining: int
    recovery_status: str | None
    grace: GracePeriodResult


def _level_of(profile: Profile | None) -> str:
    return normalize_level(profile.difficulty_level if profile else None)


def submit_morning_checkin(db: Database, user_id: int, scores: MorningScores, day: date) -> CheckinOutcome:
    """Store the day's scores and recovery status; the first check-in starts the challenge."""
    recovery = calculate_recovery_status(scores)
    log = db.upsert_log(user_id, day, scores_to_db(scores))

    profile = db.ensure_profile(user_id)
    updates: dict[str, Any] = {"recovery_status": recovery.status}
    started = profile.start_date is None
    if started:
        updates["start_date"] = day
        updates["current_day"] = 1
    db.upsert_profile(user_id, updates)
    if started:
        logger.info("User %s started the challenge on %s", user_id, day.isoformat())
    return CheckinOutcome(log=log, recovery=recovery, challenge_started=started)


def toggle_rule(db: Database, user_id: int, rule: str, value: bool, day: date) -> DailyLog:
    validate_rule(rule)
    return db.upsert_log(user_id, day, {rule: bool(value)})


def update_water(db: Database, user_id: int, liters: float, day: date) -> DailyLog:
    """Set the day's water total (absolute, not a delta)."""
    amount = float(liters)
    if not math.isfinite(amount):
        raise ValueError(f"Water intake must be a finite number, got {liters!r}")
    if amount < 0:
        raise ValueError("Water intake cannot be negative")
    return db.upsert_log(user_id, day, {"water_intake": round(amount, 2)})


def update_planning(db: Database, user_id: int, planning: dict[str, str | None], day: date) -> DailyLog:
    unknown = set(planning) - set(PLANNING_FIELDS)
    if unknown:
        raise ValueError(f"Unknown planning fields: {', '.join(sorted(unknown))}")
    return db.upsert_log(user_id, day, dict(planning))


def set_progress_photo(db: Database, user_id: int, photo_url: str, day: date) -> DailyLog:
    return db.upsert_log(user_id, day, {"progress_photo_url": photo_url, "photo_uploaded": True})


def mark_hard_workout(db: Database, user_id: int, value: bool, day: date) -> DailyLog:
    return db.upsert_log(user_id, day, {"is_hard_workout": bool(value)})


def set_difficulty(db: Database, user_id: int, level: str) -> Profile:
    return db.upsert_profile(user_id, {"difficulty_level": normalize_level(level)})


def weekly_hard_count(db: Database, user_id: int, day: date) -> int:
    week = week_range_for(day)
    return db.count_hard_workouts(user_id, week.start, week.end)


def complete_day(db: Database, user_id: int, day: date) -> CompletionOutcome:
    """Mark ``day`` completed and award the tier's daily XP.

    Two writes (log flag, profile XP) guarded by the ``is_completed`` flag.
    """
    existing = db.get_log(user_id, day)
    if existing is not None and existing.is_completed:
        raise DayAlreadyCompletedError(day.isoformat())

    profile = db.ensure_profile(user_id)
    level = _level_of(profile)
    award = daily_xp(level, weekly_hard_count(db, user_id, day), tuning=db.get_xp_tuning())

    applied, total_xp = db.set_flag_and_award_xp(user_id, day, "is_completed", award)
    if not applied:
        raise DayAlreadyCompletedError(day.isoformat())

    if profile.start_date is not None:
        db.upsert_profile(user_id, {"current_day": day_number(profile.start_date, day)})
    logger.info("User %s completed %s (+%s XP, total %s)", user_id, day.isoformat(), award, total_xp)
    return CompletionOutcome(log_date=day, xp_awarded=award, total_xp=total_xp)


def log_bonus_workout(db: Database, user_id: int, day: date) -> int:
    """Award the once-per-day bonus workout XP and return the new total."""
    existing = db.get_log(user_id, day)
    if existing is not None and existing.bonus_completed:
        raise BonusAlreadyRegisteredError(day.isoformat())

    award = bonus_workout_xp(db.get_xp_tuning())
    applied, total_xp = db.set_flag_and_award_xp(user_id, day, "bonus_completed", award)
    if not applied:
        raise BonusAlreadyRegisteredError(day.isoformat())
    logger.info("User %s bonus workout on %s (+%s XP)", user_id, day.isoformat(), award)
    return total_xp


def reset_progress(db: Database, user_id: int, confirm: bool = False) -> int:
    if confirm is not True:
        raise ResetNotConfirmedError("Reset requires explicit confirmation")
    deleted = db.reset_challenge(user_id)
    logger.warning("User %s reset the challenge (%s logs deleted)", user_id, deleted)
    return deleted


def compute_status(db: Database, user_id: int, today: date) -> StatusView:
    profile = db.get_profile(user_id)
    level = _level_of(profile)
    targets = targets_for(level)
    log = db.get_log(user_id, today)
    hard_count = weekly_hard_count(db, user_id, today)
    total_xp = profile.total_xp if profile else 0
    start_date = profile.start_date if profile else None
    return StatusView(
        today=today,
        current_day=day_number(start_date, today),
        days_remaining=days_remaining(start_date, today),
        difficulty_level=level,
        targets=targets,
        log=log,
        missing=missing_requirements(log, targets),
        streak=compute_streak(db.list_logs(user_id), today),
        total_xp=total_xp,
        rank=rank_for(total_xp),
        weekly_hard_count=hard_count,
        weekly_hard_remaining=weekly_hard_remaining(targets, hard_count),
        recovery_status=profile.recovery_status if profile else None,
        grace=check_grace_period(db, user_id, today),
    )
