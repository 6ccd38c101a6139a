from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from challenge75.models import DailyLog, Profile
from challenge75.progress import day_number
from challenge75.time_utils import days_between

logger = logging.getLogger(__name__)

MSG_NOT_STARTED = "No challenge started yet"
MSG_MUST_LOG_YESTERDAY = "Du måste fylla i gårdagens logg först"
MSG_STREAK_BROKEN = "Du har missat {days} dagar. Utmaningen måste börja om från dag 1."
MSG_CHECK_FAILED = "Error checking streak"


class GraceStore(Protocol):
    def get_profile(self, user_id: int) -> Profile | None: ...
    def latest_log(self, user_id: int) -> DailyLog | None: ...


@dataclass(frozen=True)
class GracePeriodResult:
    can_log_today: bool
    must_log_yesterday: bool
    streak_broken: bool
    days_missed: int
    current_day: int
    last_log_date: date | None = None
    message: str | None = None


def evaluate_grace_period(start_date: date | None, last_log_date: date | None, today: date) -> GracePeriodResult:
    if start_date is None:
        return GracePeriodResult(
            can_log_today=True,
            must_log_yesterday=False,
            streak_broken=False,
            days_missed=0,
            current_day=0,
            message=MSG_NOT_STARTED,
        )

    current_day = day_number(start_date, today)
    if current_day <= 1:
        return GracePeriodResult(
            can_log_today=True,
            must_log_yesterday=False,
            streak_broken=False,
            days_missed=0,
            current_day=current_day,
            last_log_date=last_log_date,
        )

    # Unlogged calendar days strictly before today. Without any log the start
    # date itself counts as missed.
    if last_log_date is not None:
        days_missed = max(0, days_between(last_log_date, today) - 1)
    else:
        days_missed = max(0, days_between(start_date, today))

    if days_missed == 0:
        return GracePeriodResult(
            can_log_today=True,
            must_log_yesterday=False,
            streak_broken=False,
            days_missed=0,
            current_day=current_day,
            last_log_date=last_log_date,
        )
    if days_missed == 1:
        return GracePeriodResult(
            can_log_today=False,
            must_log_yesterday=True,
            streak_broken=False,
            days_missed=1,
            current_day=current_day,
            last_log_date=last_log_date,
            message=MSG_MUST_LOG_YESTERDAY,
        )
    return GracePeriodResult(
        can_log_today=False,
        must_log_yesterday=False,
        streak_broken=True,
        days_missed=days_missed,
        current_day=current_day,
        last_log_date=last_log_date,
        message=MSG_STREAK_BROKEN.format(days=days_missed),
    )


def check_grace_period(db: GraceStore, user_id: int, today: date) -> GracePeriodResult:
    """Classify today's logging state from the store, failing open on read errors."""
    try:
        profile = db.get_profile(user_id)
        start_date = profile.start_date if profile else None
        if start_date is None:
            return evaluate_grace_period(None, None, today)
        latest = db.latest_log(user_id)
    except (sqlite3.Error, ValueError):
        logger.exception("Grace period check failed for user %s", user_id)
        return GracePeriodResult(
            can_log_today=True,
            must_log_yesterday=False,
            streak_broken=False,
            days_missed=0,
            current_day=0,
            message=MSG_CHECK_FAILED,
        )
    return evaluate_grace_period(start_date, latest.log_date if latest else None, today)
