# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Scorekeeping session: the operator workflow around the event log.

A :class:`ScorebookSession` wraps one game and a :class:`~data.store.GameStore`.
Each operator action builds an event from the state as it stands, appends
it, persists the game, and then checks whether the half-inning is over.
State and stats are never stored; they are re-derived from the log on
every read.

The core modules (projector, stats, resolver) never raise on bad data.
This layer does: it is where operator input is checked before it becomes
part of the log.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import catalog
from advancement import needs_resolution, resolve_advancement
from config import get_default_innings
from data.store import GameStore
from events import (
    count_plate_appearances_in_half,
    create_inning_change_event,
    create_pitcher_change_event,
    create_plate_appearance_event,
    create_runner_event,
    generate_id,
    next_half,
    should_transition,
    utc_now,
)
from models import (
    RBI,
    Base,
    Destination,
    Game,
    GameEvent,
    GameState,
    GameStatus,
    Player,
    RunnerEventKind,
    RunnerMovement,
    Side,
    Team,
)
from projector import current_batter_id, current_pitcher_id, my_team, project
from stats import BattingLine, PitchingLine, batting_stats, pitching_stats

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ScorebookError(Exception):
    """Raised when an operator action cannot be recorded."""

    error_code = "SCOREBOOK_ERROR"

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)


class GameNotFoundError(ScorebookError):
    error_code = "GAME_NOT_FOUND"


class RosterError(ScorebookError):
    error_code = "INVALID_ROSTER"


class UnknownResultCodeError(ScorebookError):
    error_code = "UNKNOWN_RESULT_CODE"


class EmptyBaseError(ScorebookError):
    error_code = "EMPTY_BASE"


class GameFinishedError(ScorebookError):
    error_code = "GAME_FINISHED"


class InvalidMovementError(ScorebookError):
    """A runner was sent to home plate instead of scoring or being put out."""

    error_code = "INVALID_MOVEMENT"


def _check_destination(to_base: Destination | str) -> Destination:
    destination = Destination(to_base)
    if destination == Destination.HOME:
        raise InvalidMovementError("A runner cannot end a play on home; use 'score' or 'out'")
    return destination


# ---------------------------------------------------------------------------
# Game creation
# ---------------------------------------------------------------------------

def _build_team(name: str, players: list[Player], batting_order: list[str],
                starting_pitcher: str) -> Team:
    return Team(
        id=generate_id(),
        name=name,
        players=list(players),
        batting_order=list(batting_order),
        starting_pitcher=starting_pitcher,
    )


def create_game(
    home_team_name: str,
    away_team_name: str,
    home_players: list[Player],
    away_players: list[Player],
    home_batting_order: list[str],
    away_batting_order: list[str],
    home_starting_pitcher: str,
    away_starting_pitcher: str,
    innings: int | None = None,
    game_date: str | None = None,
    venue: str = "",
    my_team_name: str | None = None,
    my_team_side: Side | str | None = None,
) -> Game:
    """Build a new game in the ``preparing`` state.

    Raises:
        RosterError: a batting order or starting pitcher names a player
            who is not on that team's roster, or a batting order is empty.
    """
    home = _build_team(home_team_name, home_players, home_batting_order, home_starting_pitcher)
    away = _build_team(away_team_name, away_players, away_batting_order, away_starting_pitcher)

    problems = []
    for team in (home, away):
        if not team.batting_order:
            problems.append(f"{team.name}: batting order is empty")
        problems.extend(f"{team.name}: {pid} is not on the roster" for pid in team.roster_errors())
    if problems:
        raise RosterError("Invalid roster", details=problems)

    now = utc_now()
    game = Game(
        id=generate_id(),
        date=game_date or date.today().isoformat(),
        venue=venue,
        home_team=home,
        away_team=away,
        innings=innings or get_default_innings(),
        status=GameStatus.PREPARING,
        events=[],
        my_team_name=my_team_name or home_team_name,
        my_team_side=Side(my_team_side) if my_team_side else Side.HOME,
        opponent_score_by_inning=[],
        created_at=now,
        updated_at=now,
    )
    logger.info("Created game %s: %s at %s", game.id, away_team_name, home_team_name)
    return game


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class ScorebookSession:
    """One scorer recording one game."""

    def __init__(self, game: Game, store: GameStore | None = None):
        self.game = game
        self.store = store

    @classmethod
    def open(cls, store: GameStore, game_id: str) -> ScorebookSession:
        game = store.load_game(game_id)
        if game is None:
            raise GameNotFoundError(f"No game with id {game_id!r}")
        return cls(game, store)

    # -- derived views -----------------------------------------------------

    @property
    def state(self) -> GameState:
        return project(self.game)

    def batting_stats(self) -> list[BattingLine]:
        team = my_team(self.game)
        return batting_stats(self.game.events, team.players, team.batting_order)

    def pitching_stats(self) -> list[PitchingLine]:
        return pitching_stats(self.game)

    def scoreboard(self) -> dict[str, int]:
        """My runs from the log, the opponent's from the manual entries."""
        state = self.state
        return {
            "my_team": state.score[self.game.my_team_side],
            "opponent": sum(self.game.opponent_score_by_inning),
        }

    # -- operator actions --------------------------------------------------

    def record_plate_appearance(
        self,
        result_code: str,
        runner_movements: list[RunnerMovement] | None = None,
        rbi_list: list[RBI] | None = None,
    ) -> GameEvent:
        """Record the current batter's result.

        When runners are on and the scorer supplied no movements, the
        advancement resolver fills them in from the pre-play bases. A home
        run recorded without an RBI list also credits the batter's own run.
        A half-inning left at three outs by an undo is closed out first.
        """
        self._require_open()
        option = catalog.lookup(result_code)
        if option is None:
            raise UnknownResultCodeError(f"Unknown result code {result_code!r}")
        for movement in runner_movements or []:
            _check_destination(movement.to_base)
        self._settle_half_inning()

        state = self.state
        batter_id = current_batter_id(state, self.game)
        if batter_id is None:
            raise RosterError("Batting team has no batting order")

        movements = list(runner_movements or [])
        rbis = list(rbi_list or [])
        if not movements and not rbis and needs_resolution(state.runners, option):
            advancement = resolve_advancement(state.runners, option)
            movements, rbis = advancement.movements, advancement.rbis
        if option.hit_bases >= 4 and rbi_list is None:
            rbis.append(RBI(runner_id=batter_id, earned=True))

        order = count_plate_appearances_in_half(self.game, state.inning, state.half_inning) + 1
        event = create_plate_appearance_event(
            state,
            batter_id=batter_id,
            pitcher_id=current_pitcher_id(state),
            result_code=option.code,
            result_label=option.label,
            result_category=option.category,
            runner_movements=movements,
            rbi_list=rbis,
            order_in_inning=order,
        )
        self._append(event)
        self._check_inning_change()
        return event

    def record_runner_event(self, from_base: Base | str, event_kind: RunnerEventKind | str,
                            to_base: Destination | str) -> GameEvent:
        """Record a steal, pickoff, wild pitch etc. for the runner on *from_base*."""
        self._require_open()
        to_base = _check_destination(to_base)
        self._settle_half_inning()
        state = self.state
        runner_id = state.runners.get(Base(from_base))
        if runner_id is None:
            raise EmptyBaseError(f"No runner on {Base(from_base).value}")
        event = create_runner_event(state, runner_id, event_kind, from_base, to_base)
        self._append(event)
        self._check_inning_change()
        return event

    def change_pitcher(self, in_pitcher_id: str, team_id: str | None = None) -> GameEvent:
        """Bring in a new pitcher, for the fielding team unless *team_id* says otherwise."""
        self._require_open()
        state = self.state
        if team_id is None:
            side = state.fielding_side
        elif team_id == self.game.home_team.id:
            side = Side.HOME
        elif team_id == self.game.away_team.id:
            side = Side.AWAY
        else:
            raise RosterError(f"Unknown team id {team_id!r}")
        team = self.game.team(side)
        if team.player(in_pitcher_id) is None:
            raise RosterError(f"{in_pitcher_id} is not on the {team.name} roster")

        event = create_pitcher_change_event(
            state, team.id, state.current_pitcher[side], in_pitcher_id,
        )
        self._append(event)
        return event

    def undo(self) -> Optional[GameEvent]:
        """Drop the last event.  Does nothing on an empty log.

        Undoing reopens a finished game, since the play that ended it is
        no longer in the log.
        """
        if not self.game.events:
            return None
        removed = self.game.events[-1]
        remaining = self.game.events[:-1]
        status = GameStatus.IN_PROGRESS if remaining else GameStatus.PREPARING
        self._update(events=remaining, status=status)
        logger.info("Undid %s event %s", removed.type, removed.id)
        return removed

    def finish(self) -> Game:
        self._update(status=GameStatus.FINISHED)
        logger.info("Game %s finished", self.game.id)
        return self.game

    def set_opponent_score(self, inning_index: int, runs: int) -> list[int]:
        """Set the opponent's manually entered runs for a 0-based inning."""
        if inning_index < 0 or runs < 0:
            raise ScorebookError("Inning index and runs must be non-negative")
        scores = list(self.game.opponent_score_by_inning)
        while len(scores) <= inning_index:
            scores.append(0)
        scores[inning_index] = runs
        self._update(opponent_score_by_inning=scores)
        return scores

    # -- internals ---------------------------------------------------------

    def _require_open(self) -> None:
        if self.game.status == GameStatus.FINISHED:
            raise GameFinishedError(f"Game {self.game.id} is finished")

    def _settle_half_inning(self) -> None:
        """Apply a pending inning change before recording a play.

        Undoing an automatic inning change leaves the state at three outs.
        """
        self._check_inning_change()
        self._require_open()

    def _append(self, event: GameEvent) -> None:
        self._update(events=[*self.game.events, event], status=GameStatus.IN_PROGRESS)

    def _update(self, **changes) -> None:
        game = self.game.model_copy(update={**changes, "updated_at": utc_now()})
        if self.store is not None:
            game = self.store.save_game(game)
        self.game = game

    def _check_inning_change(self) -> None:
        state = self.state
        if not should_transition(state):
            return
        following = next_half(state, self.game)
        if following is None:
            self._update(status=GameStatus.FINISHED)
            logger.info("Game %s complete after %d innings", self.game.id, state.inning)
            return
        inning, half = following
        self._append(create_inning_change_event(state, inning, half))
        logger.info("Game %s: now %s of inning %d", self.game.id, half.value, inning)
