from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from challenge75 import service
from challenge75.config import load_settings
from challenge75.db import Database
from challenge75.errors import ChallengeError, UnknownDifficultyError, UnknownRuleError
from challenge75.gamification import rank_progress
from challenge75.grace import check_grace_period
from challenge75.logging_setup import setup_logging
from challenge75.recovery import MorningScores
from challenge75.rules import (
    DEFAULT_LEVEL,
    LEVEL_DESCRIPTIONS,
    LEVEL_EMOJIS,
    WATER_STEP_LITERS,
    level_display_name,
    normalize_level,
    targets_for,
)
from challenge75.statistics import checkin_trends, habit_rates
from challenge75.time_utils import today_local


def _require_auth(request: Request, token: str | None) -> None:
    if not token:
        return
    if request.headers.get("x-api-token") == token:
        return
    raise HTTPException(status_code=401, detail="Unauthorized")


class DayRequest(BaseModel):
    day: date | None = None


class CheckinRequest(DayRequest):
    sleep: int = Field(ge=0, le=2)
    body: int = Field(ge=0, le=2)
    energy: int = Field(ge=0, le=2)
    stress: int = Field(ge=0, le=2)
    motivation: int = Field(ge=0, le=2)


class RuleRequest(DayRequest):
    rule: str
    value: bool


class WaterRequest(DayRequest):
    liters: float = Field(ge=0)


class PlanningRequest(DayRequest):
    plan_workout_1: str | None = None
    plan_workout_1_time: str | None = None
    plan_workout_2: str | None = None
    plan_workout_2_time: str | None = None
    plan_diet: str | None = None


class HardWorkoutRequest(DayRequest):
    value: bool = True


class PhotoRequest(DayRequest):
    photo_url: str


class DifficultyRequest(BaseModel):
    level: str


class ResetRequest(BaseModel):
    confirm: bool = False


def build_api_app(db: Database, api_token: str | None, tz: str) -> FastAPI:
    app = FastAPI(title="Challenge 75 API", version="1.0.0")

    def _day(payload: DayRequest | None = None) -> date:
        if payload is not None and payload.day is not None:
            return payload.day
        return today_local(tz)

    @app.exception_handler(ChallengeError)
    async def _challenge_error(request: Request, exc: ChallengeError) -> Any:
        return JSONResponse(status_code=409, content={"error": type(exc).__name__, "detail": str(exc)})

    @app.exception_handler(UnknownRuleError)
    @app.exception_handler(UnknownDifficultyError)
    async def _bad_input(request: Request, exc: ValueError) -> Any:
        return JSONResponse(status_code=422, content={"error": type(exc).__name__, "detail": str(exc)})

    @app.get("/api/targets/{level}")
    async def api_targets(level: str) -> dict[str, Any]:
        level = normalize_level(level)
        targets = targets_for(level)
        return {
            **asdict(targets),
            "display_name": level_display_name(level),
            "emoji": LEVEL_EMOJIS[level],
            "description": LEVEL_DESCRIPTIONS[level],
            "water_display": targets.water_display,
            "reading_display": targets.reading_display,
            "water_step_liters": WATER_STEP_LITERS,
        }

    @app.get("/api/ranks/{total_xp}")
    async def api_rank(total_xp: int) -> dict[str, Any]:
        return asdict(rank_progress(total_xp))

    @app.get("/api/users/{user_id}/status")
    async def api_status(user_id: int, request: Request) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.compute_status(db, user_id, _day()))

    @app.get("/api/users/{user_id}/grace")
    async def api_grace(user_id: int, request: Request) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(check_grace_period(db, user_id, _day()))

    @app.get("/api/users/{user_id}/statistics")
    async def api_statistics(user_id: int, request: Request) -> dict[str, Any]:
        _require_auth(request, api_token)
        profile = db.get_profile(user_id)
        level = profile.difficulty_level if profile else DEFAULT_LEVEL
        logs = db.list_logs(user_id)
        return {
            "habit_rates": asdict(habit_rates(logs, level)),
            "trends": [asdict(point) for point in checkin_trends(logs)],
        }

    @app.post("/api/users/{user_id}/checkin")
    async def api_checkin(user_id: int, request: Request, payload: CheckinRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        scores = MorningScores(
            sleep=payload.sleep,
            body=payload.body,
            energy=payload.energy,
            stress=payload.stress,
            motivation=payload.motivation,
        )
        return asdict(service.submit_morning_checkin(db, user_id, scores, _day(payload)))

    @app.post("/api/users/{user_id}/rules")
    async def api_toggle_rule(user_id: int, request: Request, payload: RuleRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.toggle_rule(db, user_id, payload.rule, payload.value, _day(payload)))

    @app.post("/api/users/{user_id}/water")
    async def api_water(user_id: int, request: Request, payload: WaterRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.update_water(db, user_id, payload.liters, _day(payload)))

    @app.post("/api/users/{user_id}/planning")
    async def api_planning(user_id: int, request: Request, payload: PlanningRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        planning = payload.model_dump(exclude={"day"}, exclude_unset=True)
        return asdict(service.update_planning(db, user_id, planning, _day(payload)))

    @app.post("/api/users/{user_id}/hard-workout")
    async def api_hard_workout(user_id: int, request: Request, payload: HardWorkoutRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.mark_hard_workout(db, user_id, payload.value, _day(payload)))

    @app.post("/api/users/{user_id}/photo")
    async def api_photo(user_id: int, request: Request, payload: PhotoRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.set_progress_photo(db, user_id, payload.photo_url, _day(payload)))

    @app.post("/api/users/{user_id}/difficulty")
    async def api_difficulty(user_id: int, request: Request, payload: DifficultyRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.set_difficulty(db, user_id, payload.level))

    @app.post("/api/users/{user_id}/complete")
    async def api_complete(user_id: int, request: Request, payload: DayRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        return asdict(service.complete_day(db, user_id, _day(payload)))

    @app.post("/api/users/{user_id}/bonus")
    async def api_bonus(user_id: int, request: Request, payload: DayRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        total_xp = service.log_bonus_workout(db, user_id, _day(payload))
        return {"ok": True, "total_xp": total_xp}

    @app.post("/api/users/{user_id}/reset")
    async def api_reset(user_id: int, request: Request, payload: ResetRequest) -> dict[str, Any]:
        _require_auth(request, api_token)
        deleted = service.reset_progress(db, user_id, confirm=payload.confirm)
        return {"ok": True, "deleted_logs": deleted}

    return app


def run_api() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    db = Database(settings.database_path)
    app = build_api_app(db, settings.api_token, settings.tz)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
