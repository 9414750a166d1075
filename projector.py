# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Derive the current game state from the event log.

The log is the only source of truth. :func:`project` starts from the
opening state and folds every event through :func:`apply_event`, a pure
function that never mutates its input state. Nothing is cached: every read
replays the full log, so undo is just dropping the last event.
"""

from __future__ import annotations

import logging
from typing import Optional, assert_never

import catalog
from models import (
    Base,
    Destination,
    Game,
    GameEvent,
    GameState,
    HalfInning,
    InningChangeEvent,
    PitcherChangeEvent,
    PlateAppearanceEvent,
    ResultCategory,
    RunnerEvent,
    Side,
    Team,
)

logger = logging.getLogger(__name__)

MAX_OUTS = 3
UNKNOWN_PLAYER = "Unknown"

_REACHES_FIRST = frozenset({
    ResultCategory.WALK,
    ResultCategory.HIT_BY_PITCH,
    ResultCategory.ERROR,
    ResultCategory.FIELDERS_CHOICE,
    ResultCategory.INTERFERENCE,
})

_HIT_BASES = {1: Base.FIRST, 2: Base.SECOND, 3: Base.THIRD}


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def initial_state(game: Game) -> GameState:
    state = GameState()
    state.current_pitcher = {
        Side.HOME: game.home_team.starting_pitcher,
        Side.AWAY: game.away_team.starting_pitcher,
    }
    return state


def project(game: Game) -> GameState:
    """Replay the whole event log into a fresh GameState."""
    state = initial_state(game)
    for event in game.events:
        state = apply_event(state, event, game)
    return state


def apply_event(state: GameState, event: GameEvent, game: Game) -> GameState:
    """Return the state after *event*; *state* itself is left untouched."""
    if isinstance(event, PlateAppearanceEvent):
        return _apply_plate_appearance(state, event, game)
    if isinstance(event, RunnerEvent):
        return _apply_runner_event(state, event)
    if isinstance(event, InningChangeEvent):
        return _apply_inning_change(state, event)
    if isinstance(event, PitcherChangeEvent):
        return _apply_pitcher_change(state, event, game)
    assert_never(event)


# ---------------------------------------------------------------------------
# Per-event transitions
# ---------------------------------------------------------------------------

class _Tally:
    """Runs and outs accrued while applying one event."""

    def __init__(self, outs: int):
        self.outs = outs
        self.scorers: list[str] = []

    @property
    def runs(self) -> int:
        return len(self.scorers)

    def add_out(self) -> None:
        self.outs += 1

    def add_run(self, runner_id: str) -> None:
        # A run that crosses after the third out of the same play does not count.
        if self.outs < MAX_OUTS:
            self.scorers.append(runner_id)


def credited_plays(event: PlateAppearanceEvent | RunnerEvent) -> tuple[list[str], int]:
    """Runner ids credited with a run and outs added by *event*.

    Walks the event exactly as the fold does, starting from the outs stamped
    on the event: runner movements in list order, then the batter. Runs
    after the third out are dropped and the outs added stop at three.
    """
    start = min(event.outs, MAX_OUTS)
    tally = _Tally(start)
    if isinstance(event, RunnerEvent):
        _tally_destination(tally, event.runner_id, event.to_base)
    else:
        for movement in event.runner_movements:
            _tally_destination(tally, movement.runner_id, movement.to_base)
        _tally_batter(tally, event, catalog.lookup(event.result.code))
    return tally.scorers, min(tally.outs, MAX_OUTS) - start


def _tally_destination(tally: _Tally, runner_id: str, to_base: Destination) -> None:
    if to_base == Destination.SCORE:
        tally.add_run(runner_id)
    elif to_base == Destination.OUT:
        tally.add_out()


def _tally_batter(tally: _Tally, event: PlateAppearanceEvent,
                  option: Optional[catalog.ResultOption]) -> None:
    if option is None:
        return
    if option.is_out:
        tally.add_out()
    elif option.hit_bases >= 4:
        tally.add_run(event.batter_id)


def _move_runner(state: GameState, runner_id: str, from_base: Base,
                 to_base: Destination, tally: _Tally) -> None:
    if from_base != Base.HOME:
        _clear_base(state, from_base)
    _tally_destination(tally, runner_id, to_base)
    if to_base == Destination.HOME:
        logger.debug("Runner %s sent to home without scoring; runner removed", runner_id)
    elif to_base not in (Destination.SCORE, Destination.OUT):
        _occupy(state, Base(to_base.value), runner_id)


def _apply_plate_appearance(state: GameState, event: PlateAppearanceEvent,
                            game: Game) -> GameState:
    new = state.copy()
    tally = _Tally(state.outs)
    side = state.batting_side

    for movement in event.runner_movements:
        _move_runner(new, movement.runner_id, movement.from_base, movement.to_base, tally)

    option = catalog.lookup(event.result.code)
    _tally_batter(tally, event, option)
    if option is None:
        logger.debug("Unknown result code %r in event %s; batter not placed", event.result.code, event.id)
    elif option.is_out:
        pass  # counted by _tally_batter
    elif option.hit_bases in _HIT_BASES:
        _occupy(new, _HIT_BASES[option.hit_bases], event.batter_id)
    elif option.category in _REACHES_FIRST:
        _occupy(new, Base.FIRST, event.batter_id)

    _credit_runs(new, side, tally.runs)
    new.outs = min(tally.outs, MAX_OUTS)

    order_length = len(game.team(side).batting_order)
    if order_length:
        new.current_batter_index[side] = (state.current_batter_index[side] + 1) % order_length
    return new


def _apply_runner_event(state: GameState, event: RunnerEvent) -> GameState:
    new = state.copy()
    tally = _Tally(state.outs)
    _move_runner(new, event.runner_id, event.from_base, event.to_base, tally)
    _credit_runs(new, state.batting_side, tally.runs)
    new.outs = min(tally.outs, MAX_OUTS)
    return new


def _apply_inning_change(state: GameState, event: InningChangeEvent) -> GameState:
    new = state.copy()
    new.inning = event.new_inning
    new.half_inning = event.new_half_inning
    new.outs = 0
    new.runners.first = new.runners.second = new.runners.third = None
    return new


def _apply_pitcher_change(state: GameState, event: PitcherChangeEvent,
                          game: Game) -> GameState:
    new = state.copy()
    new.current_pitcher[_pitcher_change_side(state, event, game)] = event.in_pitcher_id
    return new


def _pitcher_change_side(state: GameState, event: PitcherChangeEvent, game: Game) -> Side:
    """The side whose pitcher changes: the event's team, else the defense."""
    if event.team_id == game.home_team.id:
        return Side.HOME
    if event.team_id == game.away_team.id:
        return Side.AWAY
    logger.debug("Pitcher change %s names unknown team %r; using fielding side", event.id, event.team_id)
    return state.fielding_side


# ---------------------------------------------------------------------------
# Base and score helpers
# ---------------------------------------------------------------------------

def _clear_base(state: GameState, base: Base) -> None:
    if base == Base.FIRST:
        state.runners.first = None
    elif base == Base.SECOND:
        state.runners.second = None
    elif base == Base.THIRD:
        state.runners.third = None


def _occupy(state: GameState, base: Base, runner_id: str) -> None:
    # A runner stands on one base at a time.
    for other in (Base.FIRST, Base.SECOND, Base.THIRD):
        if state.runners.get(other) == runner_id:
            _clear_base(state, other)
    if base == Base.FIRST:
        state.runners.first = runner_id
    elif base == Base.SECOND:
        state.runners.second = runner_id
    elif base == Base.THIRD:
        state.runners.third = runner_id


def _credit_runs(state: GameState, side: Side, runs: int) -> None:
    state.score[side] += runs
    scores = state.inning_scores[side]
    while len(scores) < state.inning:
        scores.append(0)
    scores[state.inning - 1] += runs


# ---------------------------------------------------------------------------
# Lookups used by the scorer
# ---------------------------------------------------------------------------

def offense_team(game: Game, state: GameState) -> Team:
    return game.team(state.batting_side)


def defense_team(game: Game, state: GameState) -> Team:
    return game.team(state.fielding_side)


def current_batter_id(state: GameState, game: Game) -> Optional[str]:
    order = offense_team(game, state).batting_order
    if not order:
        return None
    return order[state.current_batter_index[state.batting_side] % len(order)]


def current_pitcher_id(state: GameState) -> str:
    return state.current_pitcher[state.fielding_side]


def player_name(game: Game, player_id: str) -> str:
    for p in game.all_players():
        if p.id == player_id:
            return p.name
    return UNKNOWN_PLAYER


def batting_order_number(game: Game, state: GameState, player_id: str) -> int:
    """1-based lineup slot of *player_id* on the batting team, 0 if absent."""
    order = offense_team(game, state).batting_order
    return order.index(player_id) + 1 if player_id in order else 0


def my_team(game: Game) -> Team:
    return game.team(game.my_team_side)


def opponent_team(game: Game) -> Team:
    return game.team(Side.AWAY if game.my_team_side == Side.HOME else Side.HOME)


def my_batting_half(game: Game) -> HalfInning:
    return HalfInning.BOTTOM if game.my_team_side == Side.HOME else HalfInning.TOP


def my_fielding_half(game: Game) -> HalfInning:
    return HalfInning.TOP if game.my_team_side == Side.HOME else HalfInning.BOTTOM
