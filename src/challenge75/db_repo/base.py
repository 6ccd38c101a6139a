from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path


class BaseDatabase:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL
                )
                """
            )
            current = {row["version"] for row in conn.execute("SELECT version FROM schema_migrations")}

            migrations: dict[int, str] = {
                1: """
                    CREATE TABLE profiles (
                        user_id INTEGER PRIMARY KEY,
                        start_date TEXT,
                        current_day INTEGER NOT NULL DEFAULT 0,
                        difficulty_level TEXT NOT NULL DEFAULT 'hard'
                            CHECK(difficulty_level IN ('easy', 'medium', 'hard')),
                        recovery_status TEXT CHECK(recovery_status IN ('GREEN', 'YELLOW', 'RED')),
                        total_xp INTEGER NOT NULL DEFAULT 0 CHECK(total_xp >= 0),
                        selected_diet_id TEXT,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    );

                    CREATE TABLE daily_logs (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        user_id INTEGER NOT NULL,
                        log_date TEXT NOT NULL,
                        sleep_score INTEGER CHECK(sleep_score BETWEEN 1 AND 10),
                        body_score INTEGER CHECK(body_score BETWEEN 1 AND 10),
                        energy_score INTEGER CHECK(energy_score BETWEEN 1 AND 10),
                        stress_score INTEGER CHECK(stress_score BETWEEN 1 AND 10),
                        motivation_score INTEGER CHECK(motivation_score BETWEEN 1 AND 10),
                        diet_completed INTEGER NOT NULL DEFAULT 0,
                        workout_outdoor_completed INTEGER NOT NULL DEFAULT 0,
                        workout_indoor_completed INTEGER NOT NULL DEFAULT 0,
                        reading_completed INTEGER NOT NULL DEFAULT 0,
                        photo_uploaded INTEGER NOT NULL DEFAULT 0,
                        progress_photo_url TEXT,
                        water_intake REAL NOT NULL DEFAULT 0 CHECK(water_intake >= 0),
                        is_completed INTEGER NOT NULL DEFAULT 0,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL,
                        UNIQUE(user_id, log_date)
                    );

                    CREATE INDEX idx_daily_logs_user_date ON daily_logs(user_id, log_date);
                """,
                2: """
                    ALTER TABLE daily_logs ADD COLUMN plan_workout_1 TEXT;
                    ALTER TABLE daily_logs ADD COLUMN plan_workout_1_time TEXT;
                    ALTER TABLE daily_logs ADD COLUMN plan_workout_2 TEXT;
                    ALTER TABLE daily_logs ADD COLUMN plan_workout_2_time TEXT;
                    ALTER TABLE daily_logs ADD COLUMN plan_diet TEXT;
                """,
                3: """
                    ALTER TABLE daily_logs ADD COLUMN bonus_completed INTEGER NOT NULL DEFAULT 0;
                    ALTER TABLE daily_logs ADD COLUMN is_hard_workout INTEGER NOT NULL DEFAULT 0;
                """,
                4: """
                    CREATE TABLE app_config (
                        key TEXT PRIMARY KEY,
                        value_json TEXT NOT NULL,
                        updated_at TEXT NOT NULL,
                        updated_by TEXT NOT NULL
                    );
                """,
            }

            now = datetime.now().isoformat(timespec="seconds")
            for version in sorted(migrations):
                if version in current:
                    continue
                conn.executescript(migrations[version])
                conn.execute(
                    "INSERT INTO schema_migrations(version, applied_at) VALUES (?, ?)",
                    (version, now),
                )
