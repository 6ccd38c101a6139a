from __future__ import annotations

import sqlite3
from datetime import date, datetime
from typing import Any, Protocol

from challenge75.db_constants import PROFILE_FIELDS
from challenge75.db_converters import _row_to_profile
from challenge75.models import Profile


class DbProtocol(Protocol):
    def _connect(self) -> sqlite3.Connection: ...


def _profile_value(key: str, value: Any) -> Any:
    if key == "start_date" and isinstance(value, date):
        return value.isoformat()
    if key in {"current_day", "total_xp"} and value is not None:
        return max(0, int(value))
    return value


class ProfileMixin:
    def get_profile(self: DbProtocol, user_id: int) -> Profile | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        return _row_to_profile(row) if row else None

    def ensure_profile(self: DbProtocol, user_id: int) -> Profile:
        now = datetime.now().isoformat(timespec="seconds")
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO profiles(user_id, created_at, updated_at) VALUES (?, ?, ?)",
                (user_id, now, now),
            )
            row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        assert row is not None
        return _row_to_profile(row)

    def upsert_profile(self: DbProtocol, user_id: int, fields: dict[str, Any]) -> Profile:
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        now = datetime.now().isoformat(timespec="seconds")
        columns = list(fields)
        values = [_profile_value(key, fields[key]) for key in columns]
        insert_cols = ", ".join(["user_id", *columns, "created_at", "updated_at"])
        placeholders = ", ".join("?" for _ in range(len(columns) + 3))
        updates = ", ".join([*(f"{col}=excluded.{col}" for col in columns), "updated_at=excluded.updated_at"])

        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO profiles({insert_cols})
                VALUES ({placeholders})
                ON CONFLICT(user_id) DO UPDATE SET {updates}
                """,
                (user_id, *values, now, now),
            )
            row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        assert row is not None
        return _row_to_profile(row)
