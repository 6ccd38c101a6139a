from __future__ import annotations

import sqlite3
from datetime import date, datetime
from typing import Any, Protocol

from challenge75.db_constants import BOOL_LOG_FIELDS, LOG_FIELDS
from challenge75.db_converters import _row_to_log
from challenge75.models import DailyLog


class DbProtocol(Protocol):
    def _connect(self) -> sqlite3.Connection: ...


def _log_value(key: str, value: Any) -> Any:
    if key in BOOL_LOG_FIELDS:
        return 1 if value else 0
    if key == "water_intake":
        return float(value)
    return value


class LogMixin:
    def get_log(self: DbProtocol, user_id: int, log_date: date) -> DailyLog | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM daily_logs WHERE user_id = ? AND log_date = ?",
                (user_id, log_date.isoformat()),
            ).fetchone()
        return _row_to_log(row) if row else None

    def upsert_log(self: DbProtocol, user_id: int, log_date: date, fields: dict[str, Any]) -> DailyLog:
        """Insert-or-update keyed by (user_id, log_date), touching only ``fields``."""
        unknown = set(fields) - LOG_FIELDS
        if unknown:
            raise ValueError(f"Unknown daily log fields: {', '.join(sorted(unknown))}")

        now = datetime.now().isoformat(timespec="seconds")
        day_key = log_date.isoformat()
        columns = list(fields)
        values = [_log_value(key, fields[key]) for key in columns]
        insert_cols = ", ".join(["user_id", "log_date", *columns, "created_at", "updated_at"])
        placeholders = ", ".join("?" for _ in range(len(columns) + 4))
        updates = ", ".join([*(f"{col}=excluded.{col}" for col in columns), "updated_at=excluded.updated_at"])

        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO daily_logs({insert_cols})
                VALUES ({placeholders})
                ON CONFLICT(user_id, log_date) DO UPDATE SET {updates}
                """,
                (user_id, day_key, *values, now, now),
            )
            row = conn.execute(
                "SELECT * FROM daily_logs WHERE user_id = ? AND log_date = ?",
                (user_id, day_key),
            ).fetchone()
        assert row is not None
        return _row_to_log(row)

    def list_logs(
        self: DbProtocol,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DailyLog]:
        """Logs newest first; ``start`` and ``end`` are inclusive calendar dates."""
        conditions = ["user_id = ?"]
        params: list[Any] = [user_id]
        if start is not None:
            conditions.append("log_date >= ?")
            params.append(start.isoformat())
        if end is not None:
            conditions.append("log_date <= ?")
            params.append(end.isoformat())

        query = f"SELECT * FROM daily_logs WHERE {' AND '.join(conditions)} ORDER BY log_date DESC"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_log(r) for r in rows]

    def latest_log(self: DbProtocol, user_id: int) -> DailyLog | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM daily_logs WHERE user_id = ? ORDER BY log_date DESC LIMIT 1",
                (user_id,),
            ).fetchone()
        return _row_to_log(row) if row else None

    def count_hard_workouts(self: DbProtocol, user_id: int, start: date, end: date) -> int:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS total FROM daily_logs
                WHERE user_id = ? AND is_hard_workout = 1 AND log_date >= ? AND log_date <= ?
                """,
                (user_id, start.isoformat(), end.isoformat()),
            ).fetchone()
        return int(row["total"]) if row else 0

    def delete_all_logs(self: DbProtocol, user_id: int) -> int:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM daily_logs WHERE user_id = ?", (user_id,))
        return cur.rowcount

    def set_flag_and_award_xp(
        self: DbProtocol,
        user_id: int,
        log_date: date,
        flag: str,
        xp: int,
    ) -> tuple[bool, int]:
        """Check-then-set ``flag`` on the day's log and add ``xp`` to the profile.

        Both writes share one transaction. Returns ``(applied, total_xp)``; when the
        flag was already set nothing is written and ``applied`` is False.
        """
        if flag not in {"is_completed", "bonus_completed"}:
            raise ValueError(f"{flag} is not an award flag")

        now = datetime.now().isoformat(timespec="seconds")
        day_key = log_date.isoformat()
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO profiles(user_id, created_at, updated_at) VALUES (?, ?, ?)",
                (user_id, now, now),
            )
            conn.execute(
                "INSERT OR IGNORE INTO daily_logs(user_id, log_date, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (user_id, day_key, now, now),
            )
            log_row = conn.execute(
                f"SELECT {flag} FROM daily_logs WHERE user_id = ? AND log_date = ?",
                (user_id, day_key),
            ).fetchone()
            if log_row is not None and log_row[flag]:
                xp_row = conn.execute("SELECT total_xp FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
                return False, int(xp_row["total_xp"])

            conn.execute(
                f"UPDATE daily_logs SET {flag} = 1, updated_at = ? WHERE user_id = ? AND log_date = ?",
                (now, user_id, day_key),
            )
            conn.execute(
                "UPDATE profiles SET total_xp = total_xp + ?, updated_at = ? WHERE user_id = ?",
                (max(0, xp), now, user_id),
            )
            xp_row = conn.execute("SELECT total_xp FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        assert xp_row is not None
        return True, int(xp_row["total_xp"])

    def reset_challenge(self: DbProtocol, user_id: int) -> int:
        """Delete every log and clear challenge fields on the profile, all or nothing."""
        now = datetime.now().isoformat(timespec="seconds")
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM daily_logs WHERE user_id = ?", (user_id,))
            conn.execute(
                """
                UPDATE profiles
                SET start_date = NULL, current_day = 0, recovery_status = NULL, total_xp = 0, updated_at = ?
                WHERE user_id = ?
                """,
                (now, user_id),
            )
        return cur.rowcount
