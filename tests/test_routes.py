"""HTTP API tests against the test story graph."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from storyline import storage
from storyline.app import create_app


@pytest.fixture
def client():
    return TestClient(create_app(storage.data_dir(), presets_dir=storage.presets_dir()))


@pytest.fixture
def save_id(client):
    resp = client.post("/api/games", json={"userId": 7, "saveName": "Web Run"})
    assert resp.status_code == 201
    return resp.json()["id"]


# ── Health + settings ────────────────────────────────────


def test_health_check(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_settings_roundtrip(client):
    assert client.get("/api/settings").json()["start_node_id"] == 1
    updated = client.patch("/api/settings", json={"startingHealth": 50}).json()
    assert updated["starting_health"] == 50
    save = client.post("/api/games", json={"userId": 1}).json()
    assert save["health"] == 50


# ── Games ────────────────────────────────────────────────


def test_start_game(client):
    resp = client.post("/api/games", json={"userId": 3, "saveName": "Camel"})
    body = resp.json()
    assert resp.status_code == 201
    assert body["currentStoryNodeId"] == 1
    assert body["visitedNodeIds"] == []
    assert body["lastChoiceId"] is None
    assert body["health"] == 100


def test_start_game_accepts_snake_case(client):
    resp = client.post("/api/games", json={"user_id": 3, "save_name": "Snake"})
    assert resp.status_code == 201
    assert resp.json()["saveName"] == "Snake"


def test_load_game(client, save_id):
    assert client.get(f"/api/games/{save_id}").json()["saveName"] == "Web Run"
    assert client.get("/api/games/999").status_code == 404


def test_list_user_games(client, save_id):
    client.post("/api/games", json={"userId": 8})
    games = client.get("/api/users/7/games").json()
    assert [g["id"] for g in games] == [save_id]
    assert client.get("/api/users/42/games").json() == []


def test_update_game(client, save_id):
    resp = client.patch(f"/api/games/{save_id}", json={"saveName": "Renamed", "currentStoryNodeId": 2})
    assert resp.status_code == 200
    assert resp.json()["saveName"] == "Renamed"
    assert resp.json()["currentStoryNodeId"] == 2
    assert client.patch(f"/api/games/{save_id}", json={"currentStoryNodeId": 404}).status_code == 404


def test_delete_game(client, save_id):
    assert client.delete(f"/api/games/{save_id}").json() == {"ok": True}
    assert client.get(f"/api/games/{save_id}").status_code == 404
    assert client.delete(f"/api/games/{save_id}").status_code == 404


def test_game_state(client, save_id):
    state = client.get(f"/api/games/{save_id}/state").json()
    assert state["saveId"] == save_id
    assert state["playerCharacter"]["name"] == "Ryan"
    assert state["currentStoryNode"]["title"] == "Start"
    assert [c["id"] for c in state["availableChoices"]] == [102, 101]


# ── Story ────────────────────────────────────────────────


def test_current_node(client, save_id):
    node = client.get(f"/api/games/{save_id}/node").json()
    assert node["id"] == 1
    assert node["backgroundUrl"] == "/bg/start.png"
    assert node["dialogues"][0]["characterName"] == "Guide"
    assert [c["id"] for c in node["choices"]] == [102, 101]


def test_choice_then_back(client, save_id):
    node = client.post(f"/api/games/{save_id}/choices/101").json()
    assert node["id"] == 2
    assert client.post(f"/api/games/{save_id}/back").json()["id"] == 1
    assert client.post(f"/api/games/{save_id}/back").status_code == 404


def test_invalid_choice(client, save_id):
    resp = client.post(f"/api/games/{save_id}/choices/501")
    assert resp.status_code == 400
    assert client.post(f"/api/games/{save_id}/choices/12345").status_code == 404


def test_choice_health_effect(client, save_id):
    client.post(f"/api/games/{save_id}/choices/102")
    assert client.get(f"/api/games/{save_id}").json()["health"] == 85


def test_available_choices(client, save_id):
    choices = client.get(f"/api/games/{save_id}/choices").json()
    assert choices[0]["nextStoryNodeId"] == 4
    assert choices[0]["healthEffect"] == -15


def test_dialogue_flow(client, save_id):
    assert client.get(f"/api/games/{save_id}/dialogue/complete").json() == {"complete": False}
    assert client.post(f"/api/games/{save_id}/dialogue/next").json()["id"] == 10
    assert client.post(f"/api/games/{save_id}/dialogue/next").json()["id"] == 11
    assert client.post(f"/api/games/{save_id}/dialogue/next").status_code == 404
    assert client.get(f"/api/games/{save_id}/dialogue/complete").json() == {"complete": True}


def test_dialogue_skip(client, save_id):
    assert client.post(f"/api/games/{save_id}/dialogue/skip").json()["id"] == 11
    client.post(f"/api/games/{save_id}/navigate/6")
    assert client.post(f"/api/games/{save_id}/dialogue/skip").status_code == 404


def test_navigate_and_forward(client, save_id):
    assert client.post(f"/api/games/{save_id}/navigate/404").status_code == 404
    assert client.post(f"/api/games/{save_id}/forward").json()["id"] == 4
    assert client.post(f"/api/games/{save_id}/navigate/6").json()["id"] == 6
    assert client.post(f"/api/games/{save_id}/forward").status_code == 404


def test_visited(client, save_id):
    client.post(f"/api/games/{save_id}/choices/101")
    assert client.get(f"/api/games/{save_id}/visited").json() == [1]
    assert client.get(f"/api/games/{save_id}/visited/1").json() is True
    assert client.get(f"/api/games/{save_id}/visited/2").json() is False


def test_story_routes_missing_save(client):
    assert client.get("/api/games/999/node").status_code == 404
    assert client.post("/api/games/999/choices/101").status_code == 404
    assert client.post("/api/games/999/dialogue/next").status_code == 404


# ── Players + health ─────────────────────────────────────


def test_player_state_and_health(client, save_id):
    player_id = client.get(f"/api/games/{save_id}").json()["playerCharacterId"]
    assert client.post(f"/api/games/{save_id}/health", json={"delta": -60}).json() == {"health": 40}
    assert client.post(f"/api/players/{player_id}/health", json={"delta": -1000}).json() == {"health": 0}
    player = client.get(f"/api/players/{player_id}").json()
    assert player["health"] == 0
    assert player["currentStoryNodeId"] == 1
    assert client.get("/api/players/999").status_code == 404


def test_store_failure_is_500(client, save_id):
    before = client.get(f"/api/games/{save_id}").json()
    with patch("storyline.storage.put_save", side_effect=RuntimeError("disk full")):
        resp = client.post(f"/api/games/{save_id}/choices/101")
    assert resp.status_code == 500
    assert client.get(f"/api/games/{save_id}").json() == before


def test_player_health_get_set_alive(client, save_id):
    player_id = client.get(f"/api/games/{save_id}").json()["playerCharacterId"]
    assert client.get(f"/api/players/{player_id}/health").json() == {"health": 100, "alive": True}
    assert client.put(f"/api/players/{player_id}/health", json={"health": -5}).json() == {"health": 0}
    assert client.get(f"/api/players/{player_id}/alive").json() == {"alive": False}
    assert client.get(f"/api/games/{save_id}").json()["health"] == 0
    assert client.get("/api/players/999/alive").status_code == 404
