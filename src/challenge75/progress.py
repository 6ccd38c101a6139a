from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from challenge75.models import DailyLog
from challenge75.time_utils import days_between

CHALLENGE_DAYS = 75


@dataclass(frozen=True)
class Streak:
    current: int
    best: int


def day_number(start_date: date | None, today: date) -> int:
    """Challenge day for ``today``; the start date itself is day 1, 0 when not started."""
    if start_date is None:
        return 0
    elapsed = days_between(start_date, today)
    if elapsed < 0:
        return 0
    return elapsed + 1


def days_remaining(start_date: date | None, today: date) -> int:
    if start_date is None:
        return CHALLENGE_DAYS
    return max(0, CHALLENGE_DAYS - day_number(start_date, today))


def is_challenge_finished(start_date: date | None, today: date) -> bool:
    return day_number(start_date, today) > CHALLENGE_DAYS


def compute_streak(logs: Iterable[DailyLog], today: date) -> Streak:
    ordered = sorted(logs, key=lambda log: log.log_date, reverse=True)
    if not ordered:
        return Streak(current=0, best=0)

    yesterday = today - timedelta(days=1)
    best = 0
    run = 0
    run_head: date | None = None
    prev: date | None = None
    current: int | None = None

    def close_run() -> None:
        nonlocal best, current
        if run == 0:
            return
        best = max(best, run)
        if current is None:
            current = run if run_head in (today, yesterday) else 0

    for log in ordered:
        if not log.is_completed:
            close_run()
            run, run_head, prev = 0, None, None
            continue

        if prev is not None and (prev - log.log_date).days == 1:
            run += 1
        else:
            close_run()
            run, run_head = 1, log.log_date
        prev = log.log_date

    close_run()
    return Streak(current=current or 0, best=best)
