from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import create_app, status_for
from errors import ALREADY_CLAIMED, INVALID_SLOT, NO_ACTIVE_GAME, UNKNOWN_CHALLENGE, CareerError, SaveCorruptedError

NEW_GAME = {"slot_id": 1, "first_name": "Jamie", "last_name": "Pinsetter", "bowling_style": "stroker"}


@pytest.fixture
def client(registry) -> TestClient:
    return TestClient(create_app(registry))


def test_status_mapping():
    assert status_for(CareerError(ALREADY_CLAIMED, "")) == 409
    assert status_for(CareerError(UNKNOWN_CHALLENGE, "")) == 404
    assert status_for(CareerError(INVALID_SLOT, "")) == 400
    assert status_for(SaveCorruptedError()) == 500


def test_slots_start_empty(client):
    res = client.get("/api/game/slots")
    assert res.status_code == 200
    assert [s["is_empty"] for s in res.json()["slots"]] == [True, True, True]


def test_career_calls_need_an_active_game(client):
    res = client.get("/api/career/profile")
    assert res.status_code == 409
    assert res.json()["code"] == NO_ACTIVE_GAME


def test_new_game_then_play_and_save(client):
    res = client.post("/api/game/new", json=NEW_GAME)
    assert res.status_code == 200
    assert res.json()["active_slot_id"] == 1
    assert res.json()["profile"]["bowling_style"] == "stroker"

    res = client.post("/api/career/play-game", json={})
    assert res.status_code == 200
    assert 0 <= res.json()["result"]["score"] <= 300
    assert res.json()["profile"]["total_games_played"] == 1

    res = client.post("/api/game/save")
    assert res.status_code == 200
    assert res.json()["slot_id"] == 1 and not res.json()["is_empty"]


def test_week_advance_and_queries(client):
    client.post("/api/game/new", json=NEW_GAME)
    res = client.post("/api/career/advance-week")
    assert res.status_code == 200
    assert res.json()["report"]["week"] == 2

    assert client.get("/api/career/challenges").json()["week"] == 2
    assert client.get("/api/career/rankings").json()["player_rankings"][0]["region"] == "local"
    assert "stats" in client.get("/api/career/effective-stats").json()
    assert client.get("/api/career/effects").json()["effects"] == []
    assert "pending_event" in client.get("/api/career/event").json()


def test_errors_use_the_structured_payload(client):
    client.post("/api/game/new", json=NEW_GAME)
    res = client.post("/api/career/challenges/claim", json={"challenge_id": "missing"})
    assert res.status_code == 404
    assert res.json() == {
        "code": UNKNOWN_CHALLENGE,
        "message": "no challenge with that id this week",
        "details": {"challenge_id": "missing"},
    }

    res = client.post("/api/career/event/dismiss")
    assert res.status_code in (200, 409)

    res = client.post("/api/career/go-pro")
    assert res.status_code == 409


def test_invalid_and_empty_slots(client):
    assert client.post("/api/game/load", json={"slot_id": 9}).status_code == 400
    res = client.post("/api/game/load", json={"slot_id": 2})
    assert res.status_code == 400
    assert res.json()["code"] == INVALID_SLOT


def test_corrupted_slot_maps_to_server_error(client, registry):
    client.post("/api/game/new", json=NEW_GAME)
    client.post("/api/game/exit", json={"save": False})
    store = registry._store
    store.write_slot(1, "{\"save_format_version\": 99}", save_format_version=99, saved_at="t")

    assert client.get("/api/game/slots").json()["slots"][0]["corrupted"] is True
    res = client.post("/api/game/load", json={"slot_id": 1})
    assert res.status_code == 500
    assert res.json()["code"] == "CORRUPTED_STATE"


def test_delete_active_slot_exits(client):
    client.post("/api/game/new", json=NEW_GAME)
    res = client.post("/api/game/delete", json={"slot_id": 1})
    assert res.status_code == 200
    assert res.json()["active_slot_id"] is None
    assert client.get("/api/game/active").json() == {"active_slot_id": None, "profile": None}


def test_admin_token_guards_posts(client, monkeypatch):
    monkeypatch.setenv("STRIKE_FORCE_ADMIN_TOKEN", "secret")
    assert client.post("/api/game/new", json=NEW_GAME).status_code == 401
    ok = client.post("/api/game/new", json=NEW_GAME, headers={"X-Admin-Token": "secret"})
    assert ok.status_code == 200
    assert client.get("/api/game/slots").status_code == 200


def test_training_and_jobs_endpoints(client):
    client.post("/api/game/new", json=NEW_GAME)
    options = client.get("/api/career/training").json()["options"]
    assert {o["option"]["stat"] for o in options} == {"accuracy", "consistency", "throwPower"}

    res = client.post("/api/career/train", json={"stat": "accuracy"})
    assert res.status_code == 200
    assert res.json()["session"]["gain"] >= 1
    assert res.json()["profile"]["energy"] == 85
    assert client.post("/api/career/train", json={"stat": "charisma"}).status_code == 404

    assert client.get("/api/career/jobs").json()["current_job"] is None
    res = client.post("/api/career/jobs/take", json={"job_id": "dog-sitting"})
    assert res.status_code == 200
    assert res.json()["job"]["weeks_remaining"] == 4
    assert client.post("/api/career/jobs/take", json={"job_id": "retail"}).status_code == 409

    report = client.post("/api/career/advance-week").json()["report"]
    assert report["job"]["pay"] == 330
    assert client.post("/api/career/jobs/quit").status_code == 200
    assert client.post("/api/career/jobs/quit").status_code == 409
