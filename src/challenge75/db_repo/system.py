from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import Any, Protocol

from challenge75.db_constants import APP_CONFIG_DEFAULTS


class DbProtocol(Protocol):
    def _connect(self) -> sqlite3.Connection: ...
    def get_app_config(self) -> dict[str, Any]: ...


class SystemMixin:
    def get_app_config(self: DbProtocol) -> dict[str, Any]:
        config = dict(APP_CONFIG_DEFAULTS)
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value_json FROM app_config").fetchall()
        for row in rows:
            key = str(row["key"])
            if key not in APP_CONFIG_DEFAULTS:
                continue
            try:
                config[key] = json.loads(str(row["value_json"]))
            except json.JSONDecodeError:
                continue
        return config

    def set_app_config(self: DbProtocol, updates: dict[str, Any], actor: str = "system") -> dict[str, Any]:
        if not updates:
            return self.get_app_config()
        now = datetime.now().isoformat()
        with self._connect() as conn:
            for key, value in updates.items():
                if key not in APP_CONFIG_DEFAULTS:
                    continue
                conn.execute(
                    """
                    INSERT INTO app_config(key, value_json, updated_at, updated_by)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value_json=excluded.value_json,
                        updated_at=excluded.updated_at,
                        updated_by=excluded.updated_by
                    """,
                    (key, json.dumps(value), now, actor),
                )
        return self.get_app_config()

    def get_xp_tuning(self: DbProtocol) -> dict[str, int]:
        config = self.get_app_config()

        def _i(key: str) -> int:
            default = int(APP_CONFIG_DEFAULTS[key])
            try:
                return max(0, int(config.get(key, default)))
            except (TypeError, ValueError):
                return default

        return {
            "daily_base": _i("xp.daily_base"),
            "bonus_workout": _i("xp.bonus_workout"),
            "level_bonus_easy": _i("xp.level_bonus.easy"),
            "level_bonus_medium": _i("xp.level_bonus.medium"),
            "level_bonus_hard": _i("xp.level_bonus.hard"),
        }
