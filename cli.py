# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Command-line access to stored games.

Usage:
    uv run cli.py list
    uv run cli.py show <game-id>
    uv run cli.py sheet <game-id>
    uv run cli.py replay path/to/game.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from config import configure_logging
from data.store import GameStore
from models import Game, Side
from projector import apply_event, initial_state
from scoresheet import describe_event, render_score_sheet


def _cmd_list(store: GameStore, args: argparse.Namespace) -> int:
    games = store.list_games()
    if not games:
        print(f"No games in {store.root_dir}")
        return 0
    for game in games:
        print(
            f"{game.id}  {game.date}  {game.away_team.name} at {game.home_team.name}"
            f"  [{game.status.value}]  {len(game.events)} events"
        )
    return 0


def _load(store: GameStore, game_id: str) -> Game | None:
    game = store.load_game(game_id)
    if game is None:
        print(f"Error: no game with id {game_id!r} in {store.root_dir}", file=sys.stderr)
    return game


def _cmd_show(store: GameStore, args: argparse.Namespace) -> int:
    game = _load(store, args.game_id)
    if game is None:
        return 1
    state = initial_state(game)
    for event in game.events:
        state = apply_event(state, event, game)
    print(f"{game.away_team.name} at {game.home_team.name} ({game.date}, {game.status.value})")
    print(state.situation_display())
    print(f"Opponent (entered): {sum(game.opponent_score_by_inning)}")
    return 0


def _cmd_sheet(store: GameStore, args: argparse.Namespace) -> int:
    game = _load(store, args.game_id)
    if game is None:
        return 1
    print(render_score_sheet(game))
    return 0


def _cmd_replay(store: GameStore, args: argparse.Namespace) -> int:
    """Fold a game file event by event, printing the situation after each."""
    path = Path(args.path)
    try:
        with open(path) as f:
            game = Game.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return 1

    state = initial_state(game)
    for n, event in enumerate(game.events, start=1):
        state = apply_event(state, event, game)
        print(f"{n:>4}. {describe_event(game, event)}")
        print(f"      {state.situation_display()}")
    print(
        f"Final: {game.away_team.name} {state.score[Side.AWAY]}, "
        f"{game.home_team.name} {state.score[Side.HOME]}"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect scorebook games.")
    parser.add_argument(
        "--data-dir", default=None,
        help="Game store directory (default: SCOREBOOK_DATA_DIR or data/games).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List stored games.").set_defaults(func=_cmd_list)

    show = sub.add_parser("show", help="Print the current situation of a game.")
    show.add_argument("game_id")
    show.set_defaults(func=_cmd_show)

    sheet = sub.add_parser("sheet", help="Print the score sheet of a game.")
    sheet.add_argument("game_id")
    sheet.set_defaults(func=_cmd_sheet)

    replay = sub.add_parser("replay", help="Replay a game JSON file event by event.")
    replay.add_argument("path")
    replay.set_defaults(func=_cmd_replay)

    args = parser.parse_args(argv)
    configure_logging()
    return args.func(GameStore(args.data_dir), args)


if __name__ == "__main__":
    sys.exit(main())
