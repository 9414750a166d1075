# /// script
# requires-python = ">=3.12"
# dependencies = ["flask>=3.0", "pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the JSON API.

Validates:
  1. Games can be created, listed, fetched and deleted
  2. Operator actions return the re-derived state
  3. Errors use the structured envelope with the right status codes
  4. Malformed payloads are reported as INVALID_PAYLOAD
  5. The result catalog is served
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from app import app


def roster(prefix):
    players = [{"id": f"{prefix}{i}", "name": f"{prefix.upper()}{i}", "number": i} for i in range(1, 10)]
    players.append({"id": f"{prefix}p", "name": f"{prefix.upper()} Starter", "position": "pitcher"})
    players.append({"id": f"{prefix}rp", "name": f"{prefix.upper()} Reliever", "position": "pitcher"})
    return players


def create_payload(**overrides):
    payload = {
        "homeTeamName": "Hawks",
        "awayTeamName": "Owls",
        "homePlayers": roster("h"),
        "awayPlayers": roster("a"),
        "homeBattingOrder": [f"h{i}" for i in range(1, 10)],
        "awayBattingOrder": [f"a{i}" for i in range(1, 10)],
        "homeStartingPitcher": "hp",
        "awayStartingPitcher": "ap",
        "venue": "Riverside",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def client(tmp_path):
    app.config["TESTING"] = True
    app.config["SCOREBOOK_DATA_DIR"] = str(tmp_path / "games")
    with app.test_client() as c:
        yield c
    app.config["SCOREBOOK_DATA_DIR"] = None


@pytest.fixture
def game_id(client):
    resp = client.post("/api/games", json=create_payload())
    assert resp.status_code == 201
    return resp.get_json()["data"]["id"]


def post(client, game_id, action, body=None):
    return client.post(f"/api/games/{game_id}/{action}", json=body or {})


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

class TestGames:
    def test_create_game(self, client):
        resp = client.post("/api/games", json=create_payload(innings=7))
        body = resp.get_json()
        assert resp.status_code == 201
        assert body["status"] == "ok"
        assert body["action"] == "create_game"
        game = body["data"]
        assert game["innings"] == 7
        assert game["status"] == "preparing"
        assert game["myTeamName"] == "Hawks"
        assert game["homeTeam"]["battingOrder"][0] == "h1"

    def test_list_games(self, client, game_id):
        data = client.get("/api/games").get_json()["data"]
        assert [g["id"] for g in data] == [game_id]
        assert data[0]["awayTeam"] == "Owls"

    def test_get_game(self, client, game_id):
        resp = client.get(f"/api/games/{game_id}")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["venue"] == "Riverside"

    def test_get_missing_game(self, client):
        resp = client.get("/api/games/missing")
        body = resp.get_json()
        assert resp.status_code == 404
        assert body["status"] == "error"
        assert body["error_code"] == "GAME_NOT_FOUND"

    def test_delete_game(self, client, game_id):
        assert client.delete(f"/api/games/{game_id}").status_code == 200
        assert client.get(f"/api/games/{game_id}").status_code == 404
        assert client.delete(f"/api/games/{game_id}").status_code == 404

    def test_create_with_bad_roster(self, client):
        resp = client.post("/api/games", json=create_payload(homeBattingOrder=["ghost"]))
        body = resp.get_json()
        assert resp.status_code == 400
        assert body["error_code"] == "INVALID_ROSTER"
        assert body["details"]

    def test_create_with_missing_fields(self, client):
        resp = client.post("/api/games", json={"homeTeamName": "Hawks"})
        body = resp.get_json()
        assert resp.status_code == 400
        assert body["error_code"] == "INVALID_PAYLOAD"
        assert any("awayTeamName" in d for d in body["details"])

    def test_create_without_json_body(self, client):
        resp = client.post("/api/games", data="not json")
        assert resp.get_json()["error_code"] == "INVALID_PAYLOAD"


# ---------------------------------------------------------------------------
# Operator actions
# ---------------------------------------------------------------------------

class TestActions:
    def test_plate_appearance(self, client, game_id):
        resp = post(client, game_id, "plate-appearances", {"resultCode": "H1-L"})
        body = resp.get_json()
        assert resp.status_code == 201
        data = body["data"]
        assert data["event"]["type"] == "plate_appearance"
        assert data["event"]["batterId"] == "a1"
        assert data["state"]["runners"]["first"] == "a1"
        assert data["currentBatter"] == {"playerId": "a2", "playerName": "A2", "orderNumber": 2}
        assert data["battingTeam"] == "Owls"
        assert data["fieldingTeam"] == "Hawks"
        assert data["myTeamBatting"] is False
        assert data["currentPitcher"]["playerId"] == "hp"
        assert data["status"] == "in_progress"

    def test_explicit_movements(self, client, game_id):
        post(client, game_id, "plate-appearances", {"resultCode": "H1-L"})
        resp = post(client, game_id, "plate-appearances", {
            "resultCode": "H1-C",
            "runnerMovements": [{"runnerId": "a1", "fromBase": "first", "toBase": "third"}],
        })
        runners = resp.get_json()["data"]["state"]["runners"]
        assert runners == {"first": "a2", "second": None, "third": "a1"}

    def test_unknown_result_code(self, client, game_id):
        resp = post(client, game_id, "plate-appearances", {"resultCode": "XX"})
        assert resp.status_code == 400
        assert resp.get_json()["error_code"] == "UNKNOWN_RESULT_CODE"

    def test_plate_appearance_missing_game(self, client):
        resp = post(client, "missing", "plate-appearances", {"resultCode": "K"})
        assert resp.status_code == 404

    def test_runner_event(self, client, game_id):
        post(client, game_id, "plate-appearances", {"resultCode": "H1-L"})
        resp = post(client, game_id, "runner-events",
                    {"fromBase": "first", "eventKind": "stolen_base", "toBase": "second"})
        assert resp.status_code == 201
        assert resp.get_json()["data"]["state"]["runners"]["second"] == "a1"

    def test_runner_event_empty_base(self, client, game_id):
        resp = post(client, game_id, "runner-events",
                    {"fromBase": "third", "eventKind": "balk", "toBase": "score"})
        assert resp.get_json()["error_code"] == "EMPTY_BASE"

    def test_runner_event_bad_kind(self, client, game_id):
        resp = post(client, game_id, "runner-events",
                    {"fromBase": "first", "eventKind": "teleport", "toBase": "second"})
        assert resp.status_code == 400
        assert resp.get_json()["error_code"] == "INVALID_PAYLOAD"

    def test_runner_event_to_home_rejected(self, client, game_id):
        post(client, game_id, "plate-appearances", {"resultCode": "H3-L"})
        resp = post(client, game_id, "runner-events",
                    {"fromBase": "third", "eventKind": "wild_pitch", "toBase": "home"})
        body = resp.get_json()
        assert resp.status_code == 400
        assert body["error_code"] == "INVALID_PAYLOAD"
        assert any("toBase" in d for d in body["details"])
        state = client.get(f"/api/games/{game_id}/state").get_json()["data"]["state"]
        assert state["runners"]["third"] == "a1"

    def test_movement_to_home_rejected(self, client, game_id):
        post(client, game_id, "plate-appearances", {"resultCode": "H3-L"})
        resp = post(client, game_id, "plate-appearances", {
            "resultCode": "GO-6",
            "runnerMovements": [{"runnerId": "a1", "fromBase": "third", "toBase": "home"}],
        })
        assert resp.status_code == 400
        assert resp.get_json()["error_code"] == "INVALID_PAYLOAD"

    def test_pitcher_change(self, client, game_id):
        resp = post(client, game_id, "pitcher-changes", {"inPitcherId": "hrp"})
        assert resp.status_code == 201
        assert resp.get_json()["data"]["currentPitcher"]["playerName"] == "H Reliever"

    def test_pitcher_change_not_on_roster(self, client, game_id):
        resp = post(client, game_id, "pitcher-changes", {"inPitcherId": "arp"})
        assert resp.get_json()["error_code"] == "INVALID_ROSTER"

    def test_three_outs_flip_half(self, client, game_id):
        for _ in range(3):
            resp = post(client, game_id, "plate-appearances", {"resultCode": "K"})
        state = resp.get_json()["data"]["state"]
        assert state["halfInning"] == "bottom"
        assert state["outs"] == 0

    def test_undo(self, client, game_id):
        post(client, game_id, "plate-appearances", {"resultCode": "H1-L"})
        resp = post(client, game_id, "undo")
        data = resp.get_json()["data"]
        assert data["removed"]["result"]["code"] == "H1-L"
        assert data["state"]["runners"]["first"] is None

    def test_undo_empty_log(self, client, game_id):
        resp = post(client, game_id, "undo")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["removed"] is None

    def test_finish_blocks_further_plays(self, client, game_id):
        assert post(client, game_id, "finish").get_json()["data"]["status"] == "finished"
        resp = post(client, game_id, "plate-appearances", {"resultCode": "K"})
        assert resp.get_json()["error_code"] == "GAME_FINISHED"

    def test_opponent_score(self, client, game_id):
        resp = post(client, game_id, "opponent-score", {"inningIndex": 1, "runs": 2})
        data = resp.get_json()["data"]
        assert data["opponentScoreByInning"] == [0, 2]
        assert data["opponentTotal"] == 2

    def test_opponent_score_negative(self, client, game_id):
        resp = post(client, game_id, "opponent-score", {"inningIndex": 0, "runs": -1})
        assert resp.get_json()["error_code"] == "INVALID_PAYLOAD"


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

class TestViews:
    def test_state(self, client, game_id):
        data = client.get(f"/api/games/{game_id}/state").get_json()["data"]
        assert data["situation"].startswith("Top 1")
        assert data["lineScore"]["innings"] == 9
        assert data["scoreboard"] == {"myTeam": 0, "opponent": 0}

    def test_stats(self, client, game_id):
        for _ in range(3):
            post(client, game_id, "plate-appearances", {"resultCode": "K"})
        post(client, game_id, "plate-appearances", {"resultCode": "HR-L"})
        data = client.get(f"/api/games/{game_id}/stats").get_json()["data"]
        assert data["teamName"] == "Hawks"
        assert data["batting"][0]["homeRuns"] == 1
        assert data["batting"][0]["rbiCount"] == 1
        assert data["pitching"][0]["strikeouts"] == 3
        assert data["pitching"][0]["inningsPitchedDisplay"] == "1.0"

    def test_scoresheet(self, client, game_id):
        data = client.get(f"/api/games/{game_id}/scoresheet").get_json()["data"]
        assert "SCORE SHEET" in data["text"]

    def test_state_missing_game(self, client):
        assert client.get("/api/games/missing/state").status_code == 404

    def test_results_catalog(self, client):
        body = client.get("/api/results").get_json()
        assert body["action"] == "list_results"
        codes = [o["code"] for g in body["data"] for o in g["options"]]
        assert "HR-L" in codes and "KK" in codes
