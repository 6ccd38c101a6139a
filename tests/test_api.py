from __future__ import annotations

from datetime import date, timedelta

from fastapi.testclient import TestClient

from challenge75.api_app import build_api_app
from challenge75.db import Database

TODAY = date(2026, 3, 18)


def _client(tmp_path, token: str | None = None) -> tuple[TestClient, Database]:
    db = Database(tmp_path / "app.db")
    app = build_api_app(db, token, "Europe/Stockholm")
    return TestClient(app), db


def test_targets_endpoint(tmp_path) -> None:
    client, _ = _client(tmp_path)
    res = client.get("/api/targets/hard")
    assert res.status_code == 200
    body = res.json()
    assert body["workouts"] == 2
    assert body["require_outdoor"] is True
    assert body["display_name"] == "PANNBEN"
    assert body["water_display"] == "4 liter"


def test_targets_level_is_case_insensitive(tmp_path) -> None:
    client, _ = _client(tmp_path)
    res = client.get("/api/targets/HARD")
    assert res.status_code == 200
    body = res.json()
    assert body["level"] == "hard"
    assert body["emoji"] == client.get("/api/targets/hard").json()["emoji"]


def test_unknown_targets_level(tmp_path) -> None:
    client, _ = _client(tmp_path)
    res = client.get("/api/targets/legendary")
    assert res.status_code == 422
    assert res.json()["error"] == "UnknownDifficultyError"


def test_rank_endpoint(tmp_path) -> None:
    client, _ = _client(tmp_path)
    body = client.get("/api/ranks/1600").json()
    assert body["current"]["name"] == "Korpral"
    assert body["next"]["name"] == "Sergeant"


def test_checkin_then_toggle_and_complete(tmp_path) -> None:
    client, db = _client(tmp_path)
    res = client.post(
        "/api/users/7/checkin",
        json={"sleep": 2, "body": 1, "energy": 2, "stress": 1, "motivation": 2, "day": TODAY.isoformat()},
    )
    assert res.status_code == 200
    assert res.json()["challenge_started"] is True

    res = client.post("/api/users/7/rules", json={"rule": "diet_completed", "value": True, "day": TODAY.isoformat()})
    assert res.status_code == 200
    assert res.json()["diet_completed"] is True

    res = client.post("/api/users/7/water", json={"liters": 3.5, "day": TODAY.isoformat()})
    assert res.json()["water_intake"] == 3.5

    res = client.post("/api/users/7/complete", json={"day": TODAY.isoformat()})
    assert res.status_code == 200
    assert res.json()["total_xp"] == 150

    res = client.post("/api/users/7/complete", json={"day": TODAY.isoformat()})
    assert res.status_code == 409
    assert res.json()["error"] == "DayAlreadyCompletedError"

    profile = db.get_profile(7)
    assert profile is not None and profile.total_xp == 150


def test_unknown_rule_is_rejected(tmp_path) -> None:
    client, _ = _client(tmp_path)
    res = client.post("/api/users/1/rules", json={"rule": "sleep_score", "value": True})
    assert res.status_code == 422


def test_bonus_twice(tmp_path) -> None:
    client, _ = _client(tmp_path)
    first = client.post("/api/users/1/bonus", json={"day": TODAY.isoformat()})
    assert first.json() == {"ok": True, "total_xp": 20}
    second = client.post("/api/users/1/bonus", json={"day": TODAY.isoformat()})
    assert second.status_code == 409
    assert second.json()["error"] == "BonusAlreadyRegisteredError"


def test_reset_needs_confirm(tmp_path) -> None:
    client, db = _client(tmp_path)
    db.upsert_log(1, TODAY, {"diet_completed": True})
    assert client.post("/api/users/1/reset", json={}).status_code == 409
    res = client.post("/api/users/1/reset", json={"confirm": True})
    assert res.json() == {"ok": True, "deleted_logs": 1}


def test_planning_only_sets_given_fields(tmp_path) -> None:
    client, db = _client(tmp_path)
    db.upsert_log(1, TODAY, {"plan_diet": "Fisk"})
    res = client.post("/api/users/1/planning", json={"plan_workout_2": "Gym", "day": TODAY.isoformat()})
    body = res.json()
    assert body["plan_workout_2"] == "Gym"
    assert body["plan_diet"] == "Fisk"


def test_grace_endpoint(tmp_path) -> None:
    client, db = _client(tmp_path)
    db.upsert_profile(1, {"start_date": date.today() - timedelta(days=10)})
    db.upsert_log(1, date.today() - timedelta(days=5), {"is_completed": True})
    body = client.get("/api/users/1/grace").json()
    assert body["streak_broken"] is True


def test_status_and_statistics(tmp_path) -> None:
    client, db = _client(tmp_path)
    db.upsert_log(1, TODAY, {"diet_completed": True, "sleep_score": 9})
    status = client.get("/api/users/1/status")
    assert status.status_code == 200
    assert status.json()["difficulty_level"] == "hard"

    stats = client.get("/api/users/1/statistics").json()
    assert stats["habit_rates"]["diet"] == 100
    assert stats["trends"][0]["sleep"] == 9


def test_token_auth(tmp_path) -> None:
    client, _ = _client(tmp_path, token="secret")
    assert client.get("/api/users/1/status").status_code == 401
    assert client.get("/api/users/1/status", headers={"x-api-token": "secret"}).status_code == 200


def test_photo_marks_rule_done(tmp_path) -> None:
    client, db = _client(tmp_path)
    res = client.post("/api/users/3/photo", json={"photo_url": "https://img.example/p.jpg", "day": TODAY.isoformat()})
    assert res.status_code == 200
    body = res.json()
    assert body["photo_uploaded"] is True
    assert body["progress_photo_url"] == "https://img.example/p.jpg"
    log = db.get_log(3, TODAY)
    assert log is not None and log.photo_uploaded
