from __future__ import annotations

import sqlite3
from datetime import date, timedelta

from challenge75.db import Database
from challenge75.grace import MSG_CHECK_FAILED, check_grace_period, evaluate_grace_period

TODAY = date(2026, 3, 20)
START = date(2026, 3, 10)


def test_not_started() -> None:
    result = evaluate_grace_period(None, None, TODAY)
    assert result.can_log_today is True
    assert result.streak_broken is False
    assert result.current_day == 0


def test_day_one_always_open() -> None:
    result = evaluate_grace_period(TODAY, None, TODAY)
    assert result.can_log_today is True
    assert result.streak_broken is False
    assert result.current_day == 1


def test_no_days_missed_when_yesterday_logged() -> None:
    result = evaluate_grace_period(START, TODAY - timedelta(days=1), TODAY)
    assert result.days_missed == 0
    assert result.can_log_today is True
    assert result.must_log_yesterday is False
    assert result.streak_broken is False
    assert result.current_day == 11


def test_no_days_missed_when_today_logged() -> None:
    result = evaluate_grace_period(START, TODAY, TODAY)
    assert result.days_missed == 0
    assert result.can_log_today is True


def test_one_day_missed_opens_grace_window() -> None:
    result = evaluate_grace_period(START, TODAY - timedelta(days=2), TODAY)
    assert result.days_missed == 1
    assert result.must_log_yesterday is True
    assert result.can_log_today is False
    assert result.streak_broken is False
    assert result.message


def test_two_days_missed_breaks_streak() -> None:
    result = evaluate_grace_period(START, TODAY - timedelta(days=3), TODAY)
    assert result.days_missed == 2
    assert result.streak_broken is True
    assert result.must_log_yesterday is False
    assert result.last_log_date == TODAY - timedelta(days=3)
    assert "2" in (result.message or "")


def test_no_log_counts_from_start_date() -> None:
    day_two = evaluate_grace_period(TODAY - timedelta(days=1), None, TODAY)
    assert day_two.days_missed == 1
    assert day_two.must_log_yesterday is True

    later = evaluate_grace_period(START, None, TODAY)
    assert later.streak_broken is True
    assert later.days_missed == 10


def test_check_reads_store(tmp_path) -> None:
    db = Database(tmp_path / "app.db")
    db.upsert_profile(1, {"start_date": START})
    db.upsert_log(1, TODAY - timedelta(days=2), {"diet_completed": True})
    result = check_grace_period(db, 1, TODAY)
    assert result.must_log_yesterday is True
    assert result.current_day == 11


def test_check_without_profile(tmp_path) -> None:
    db = Database(tmp_path / "app.db")
    result = check_grace_period(db, 42, TODAY)
    assert result.can_log_today is True
    assert result.current_day == 0


def test_check_fails_open(tmp_path, monkeypatch) -> None:
    db = Database(tmp_path / "app.db")

    def _boom(user_id: int) -> None:
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(db, "get_profile", _boom)
    result = check_grace_period(db, 1, TODAY)
    assert result.can_log_today is True
    assert result.streak_broken is False
    assert result.message == MSG_CHECK_FAILED


def test_check_fails_open_on_corrupt_start_date(tmp_path) -> None:
    db = Database(tmp_path / "app.db")
    db.ensure_profile(1)
    with sqlite3.connect(db.path) as conn:
        conn.execute("UPDATE profiles SET start_date = ? WHERE user_id = ?", ("not-a-date", 1))

    result = check_grace_period(db, 1, TODAY)
    assert result.can_log_today is True
    assert result.message == MSG_CHECK_FAILED


def test_check_does_not_mutate(tmp_path) -> None:
    db = Database(tmp_path / "app.db")
    db.upsert_profile(1, {"start_date": START})
    before = db.get_profile(1)
    check_grace_period(db, 1, TODAY)
    assert db.get_profile(1) == before
    assert db.list_logs(1) == []
