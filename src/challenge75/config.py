from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from challenge75.time_utils import DEFAULT_TZ


@dataclass(frozen=True)
class Settings:
    database_path: Path
    tz: str
    api_token: str | None
    api_host: str
    api_port: int
    log_level: str


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        raw = line.strip()
        if not raw or raw.startswith("#") or "=" not in raw:
            continue
        key, value = raw.split("=", maxsplit=1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def load_settings(env_file: Path = Path(".env")) -> Settings:
    _load_env_file(env_file)

    api_port_raw = os.getenv("API_PORT", "8080")
    try:
        api_port = int(api_port_raw)
    except ValueError:
        api_port = 8080

    return Settings(
        database_path=Path(os.getenv("DATABASE_PATH", "./data/challenge.db")),
        tz=os.getenv("TZ", DEFAULT_TZ),
        api_token=os.getenv("API_TOKEN") or None,
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=api_port,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
