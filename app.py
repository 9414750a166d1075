# /// script
# requires-python = ">=3.12"
# dependencies = ["flask>=3.0", "pydantic>=2.0"]
# ///
"""JSON API for the scorebook.

Every route returns the envelope built by :mod:`responses`. Operator
actions load the game from the store, record through a
:class:`~scorebook.ScorebookSession` and return the re-derived state.

Usage:
    uv run app.py
"""

from __future__ import annotations

import logging
import os

from flask import Flask, jsonify, request
from pydantic import ValidationError

from catalog import catalog_to_dict
from config import configure_logging
from data.store import GameStore
from models import Game, Side
from projector import (
    batting_order_number,
    current_batter_id,
    current_pitcher_id,
    defense_team,
    my_batting_half,
    offense_team,
    player_name,
)
from responses import error_response, player_ref, success_response
from scorebook import GameNotFoundError, ScorebookError, ScorebookSession, create_game
from scoresheet import generate_line_score, render_score_sheet
from validation import (
    CreateGameInput,
    OpponentScoreInput,
    PitcherChangeInput,
    PlateAppearanceInput,
    RunnerEventInput,
    parse,
    validation_details,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = Flask(__name__)

# Set to a directory path to override config.get_data_dir() (tests do this).
app.config.setdefault("SCOREBOOK_DATA_DIR", None)


def _store() -> GameStore:
    return GameStore(app.config.get("SCOREBOOK_DATA_DIR"))


def _session(game_id: str) -> ScorebookSession:
    return ScorebookSession.open(_store(), game_id)


def _ok(action: str, data, status: int = 200):
    return jsonify(success_response(action, data)), status


def _fail(action: str, exc: Exception):
    if isinstance(exc, ValidationError):
        logger.warning("%s rejected: invalid payload", action)
        body = error_response(action, "INVALID_PAYLOAD", "Invalid request payload",
                              validation_details(exc))
        return jsonify(body), 400
    status = 404 if isinstance(exc, GameNotFoundError) else 400
    logger.warning("%s rejected: %s", action, exc)
    body = error_response(action, exc.error_code, str(exc), exc.details)
    return jsonify(body), status


def _game_summary(game: Game) -> dict:
    return {
        "id": game.id,
        "date": game.date,
        "venue": game.venue,
        "homeTeam": game.home_team.name,
        "awayTeam": game.away_team.name,
        "status": game.status.value,
        "myTeamName": game.my_team_name,
        "createdAt": game.created_at,
        "updatedAt": game.updated_at,
    }


def _state_payload(session: ScorebookSession) -> dict:
    """Derived state plus who is up and who is pitching."""
    game = session.game
    state = session.state
    batter_id = current_batter_id(state, game)
    pitcher_id = current_pitcher_id(state)
    scoreboard = session.scoreboard()
    batter = None
    if batter_id:
        batter = {
            **player_ref(batter_id, player_name(game, batter_id)),
            "orderNumber": batting_order_number(game, state, batter_id),
        }
    return {
        "gameId": game.id,
        "status": game.status.value,
        "state": state.to_dict(),
        "situation": state.situation_display(),
        "battingTeam": offense_team(game, state).name,
        "fieldingTeam": defense_team(game, state).name,
        "myTeamBatting": state.half_inning == my_batting_half(game),
        "currentBatter": batter,
        "currentPitcher": player_ref(pitcher_id, player_name(game, pitcher_id)),
        "lineScore": generate_line_score(game, state),
        "scoreboard": {"myTeam": scoreboard["my_team"], "opponent": scoreboard["opponent"]},
    }


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------


@app.route("/api/games", methods=["GET"])
def api_list_games():
    games = _store().list_games()
    return _ok("list_games", [_game_summary(g) for g in games])


@app.route("/api/games", methods=["POST"])
def api_create_game():
    action = "create_game"
    try:
        body = parse(CreateGameInput, request.get_json(silent=True))
        game = create_game(
            home_team_name=body.home_team_name,
            away_team_name=body.away_team_name,
            home_players=body.home_players,
            away_players=body.away_players,
            home_batting_order=body.home_batting_order,
            away_batting_order=body.away_batting_order,
            home_starting_pitcher=body.home_starting_pitcher,
            away_starting_pitcher=body.away_starting_pitcher,
            innings=body.innings,
            game_date=body.date,
            venue=body.venue,
            my_team_name=body.my_team_name,
            my_team_side=body.my_team_side,
        )
    except (ValidationError, ScorebookError) as exc:
        return _fail(action, exc)
    game = _store().save_game(game)
    return _ok(action, game.to_wire(), 201)


@app.route("/api/games/<game_id>", methods=["GET"])
def api_get_game(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("get_game", exc)
    return _ok("get_game", session.game.to_wire())


@app.route("/api/games/<game_id>", methods=["DELETE"])
def api_delete_game(game_id: str):
    if not _store().delete_game(game_id):
        return _fail("delete_game", GameNotFoundError(f"No game with id {game_id!r}"))
    logger.info("Deleted game %s", game_id)
    return _ok("delete_game", {"id": game_id})


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@app.route("/api/games/<game_id>/state")
def api_game_state(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("get_state", exc)
    return _ok("get_state", _state_payload(session))


@app.route("/api/games/<game_id>/stats")
def api_game_stats(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("get_stats", exc)
    return _ok("get_stats", {
        "teamName": session.game.my_team_name,
        "batting": [line.to_dict() for line in session.batting_stats()],
        "pitching": [line.to_dict() for line in session.pitching_stats()],
    })


@app.route("/api/games/<game_id>/scoresheet")
def api_game_scoresheet(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("get_scoresheet", exc)
    return _ok("get_scoresheet", {"text": render_score_sheet(session.game)})


@app.route("/api/results")
def api_results():
    return _ok("list_results", catalog_to_dict())


# ---------------------------------------------------------------------------
# Operator actions
# ---------------------------------------------------------------------------


@app.route("/api/games/<game_id>/plate-appearances", methods=["POST"])
def api_record_plate_appearance(game_id: str):
    action = "record_plate_appearance"
    try:
        body = parse(PlateAppearanceInput, request.get_json(silent=True))
        session = _session(game_id)
        event = session.record_plate_appearance(
            body.result_code, body.runner_movements, body.rbi_list,
        )
    except (ValidationError, ScorebookError) as exc:
        return _fail(action, exc)
    return _ok(action, {"event": event.to_wire(), **_state_payload(session)}, 201)


@app.route("/api/games/<game_id>/runner-events", methods=["POST"])
def api_record_runner_event(game_id: str):
    action = "record_runner_event"
    try:
        body = parse(RunnerEventInput, request.get_json(silent=True))
        session = _session(game_id)
        event = session.record_runner_event(body.from_base, body.event_kind, body.to_base)
    except (ValidationError, ScorebookError) as exc:
        return _fail(action, exc)
    return _ok(action, {"event": event.to_wire(), **_state_payload(session)}, 201)


@app.route("/api/games/<game_id>/pitcher-changes", methods=["POST"])
def api_change_pitcher(game_id: str):
    action = "change_pitcher"
    try:
        body = parse(PitcherChangeInput, request.get_json(silent=True))
        session = _session(game_id)
        event = session.change_pitcher(body.in_pitcher_id, body.team_id)
    except (ValidationError, ScorebookError) as exc:
        return _fail(action, exc)
    return _ok(action, {"event": event.to_wire(), **_state_payload(session)}, 201)


@app.route("/api/games/<game_id>/undo", methods=["POST"])
def api_undo(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("undo", exc)
    removed = session.undo()
    return _ok("undo", {
        "removed": removed.to_wire() if removed is not None else None,
        **_state_payload(session),
    })


@app.route("/api/games/<game_id>/finish", methods=["POST"])
def api_finish(game_id: str):
    try:
        session = _session(game_id)
    except ScorebookError as exc:
        return _fail("finish_game", exc)
    session.finish()
    return _ok("finish_game", _state_payload(session))


@app.route("/api/games/<game_id>/opponent-score", methods=["POST"])
def api_opponent_score(game_id: str):
    action = "set_opponent_score"
    try:
        body = parse(OpponentScoreInput, request.get_json(silent=True))
        session = _session(game_id)
        scores = session.set_opponent_score(body.inning_index, body.runs)
    except (ValidationError, ScorebookError) as exc:
        return _fail(action, exc)
    return _ok(action, {
        "opponentScoreByInning": scores,
        "opponentTotal": sum(scores),
        "myTeamSide": Side(session.game.my_team_side).value,
    })


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    configure_logging()
    port = int(os.environ.get("PORT", 5050))
    app.run(debug=True, host="0.0.0.0", port=port)
