# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the scorebook.

The pydantic models here are the persisted wire shape of a game: field
names serialize in camelCase and every event carries a ``type`` tag, so a
game dumped with ``model_dump(mode="json", by_alias=True)`` is exactly the
JSON stored on disk and served over the API.

``GameState`` is different: it is derived from the event log on every
read and is never persisted, so it is a plain dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Position(str, Enum):
    PITCHER = "pitcher"
    CATCHER = "catcher"
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    SHORTSTOP = "shortstop"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    DH = "dh"


POSITION_ABBREVIATIONS: dict[Position, str] = {
    Position.PITCHER: "P",
    Position.CATCHER: "C",
    Position.FIRST: "1B",
    Position.SECOND: "2B",
    Position.THIRD: "3B",
    Position.SHORTSTOP: "SS",
    Position.LEFT: "LF",
    Position.CENTER: "CF",
    Position.RIGHT: "RF",
    Position.DH: "DH",
}


class HalfInning(str, Enum):
    TOP = "top"  # away bats
    BOTTOM = "bottom"  # home bats


class Side(str, Enum):
    HOME = "home"
    AWAY = "away"


class GameStatus(str, Enum):
    PREPARING = "preparing"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Base(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    HOME = "home"


class Destination(str, Enum):
    """Where a runner ends up: a base, retired, or across the plate."""
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    HOME = "home"
    OUT = "out"
    SCORE = "score"


class ResultCategory(str, Enum):
    HIT = "hit"
    OUT = "out"
    ERROR = "error"
    FIELDERS_CHOICE = "fielders_choice"
    WALK = "walk"
    HIT_BY_PITCH = "hit_by_pitch"
    SACRIFICE_BUNT = "sacrifice_bunt"
    SACRIFICE_FLY = "sacrifice_fly"
    INTERFERENCE = "interference"


class MovementReason(str, Enum):
    BATTED_BALL = "batted_ball"
    FORCE = "force"
    TAG = "tag"
    ERROR = "error"


class RunnerEventKind(str, Enum):
    STOLEN_BASE = "stolen_base"
    CAUGHT_STEALING = "caught_stealing"
    PICKOFF = "pickoff"
    WILD_PITCH = "wild_pitch"
    PASSED_BALL = "passed_ball"
    BALK = "balk"
    ADVANCE = "advance"


RUNNER_EVENT_LABELS: dict[RunnerEventKind, str] = {
    RunnerEventKind.STOLEN_BASE: "Stolen base",
    RunnerEventKind.CAUGHT_STEALING: "Caught stealing",
    RunnerEventKind.PICKOFF: "Picked off",
    RunnerEventKind.WILD_PITCH: "Wild pitch",
    RunnerEventKind.PASSED_BALL: "Passed ball",
    RunnerEventKind.BALK: "Balk",
    RunnerEventKind.ADVANCE: "Advance",
}


# ---------------------------------------------------------------------------
# Wire model base
# ---------------------------------------------------------------------------

class WireModel(BaseModel):
    """Base for persisted models: camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Roster models
# ---------------------------------------------------------------------------

class Player(WireModel):
    id: str
    name: str
    number: int = 0
    position: Position = Position.DH


class Team(WireModel):
    id: str
    name: str
    players: list[Player] = Field(default_factory=list)
    batting_order: list[str] = Field(default_factory=list, description="Player ids in batting order")
    starting_pitcher: str

    def player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def roster_errors(self) -> list[str]:
        """Return ids in the batting order or rotation that are not on the roster."""
        roster_ids = {p.id for p in self.players}
        missing = [pid for pid in self.batting_order if pid not in roster_ids]
        if self.starting_pitcher not in roster_ids:
            missing.append(self.starting_pitcher)
        return missing


# ---------------------------------------------------------------------------
# Event models
# ---------------------------------------------------------------------------

class PlateAppearanceResult(WireModel):
    category: ResultCategory
    code: str
    label: str = ""


class RunnerMovement(WireModel):
    runner_id: str
    from_base: Base
    to_base: Destination
    reason: MovementReason = MovementReason.BATTED_BALL


class RBI(WireModel):
    runner_id: str
    earned: bool = True


class BaseEvent(WireModel):
    id: str
    timestamp: str
    inning: int = Field(ge=1)
    half_inning: HalfInning
    outs: int = Field(ge=0, le=3, description="Outs when the event happened")


class PlateAppearanceEvent(BaseEvent):
    type: Literal["plate_appearance"] = "plate_appearance"
    batter_id: str
    pitcher_id: str
    order_in_inning: int = 1
    result: PlateAppearanceResult
    rbi_list: list[RBI] = Field(default_factory=list)
    runner_movements: list[RunnerMovement] = Field(default_factory=list)


class RunnerEvent(BaseEvent):
    type: Literal["runner_event"] = "runner_event"
    runner_id: str
    event_kind: RunnerEventKind
    from_base: Base
    to_base: Destination


class InningChangeEvent(BaseEvent):
    type: Literal["inning_change"] = "inning_change"
    new_inning: int = Field(ge=1)
    new_half_inning: HalfInning


class PitcherChangeEvent(BaseEvent):
    type: Literal["pitcher_change"] = "pitcher_change"
    team_id: str
    out_pitcher_id: str
    in_pitcher_id: str


GameEvent = Annotated[
    Union[PlateAppearanceEvent, RunnerEvent, InningChangeEvent, PitcherChangeEvent],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

class Game(WireModel):
    """A scheduled game and its append-only event log."""
    id: str
    date: str
    venue: str = ""
    home_team: Team
    away_team: Team
    innings: int = Field(default=9, ge=1)
    status: GameStatus = GameStatus.PREPARING
    events: list[GameEvent] = Field(default_factory=list)
    my_team_name: str = ""
    my_team_side: Side = Side.HOME
    opponent_score_by_inning: list[int] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_legacy_fields(cls, data):
        # Games saved before "my team" tracking existed carry neither field.
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not (data.get("myTeamName") or data.get("my_team_name")):
            home = data.get("homeTeam") or data.get("home_team") or {}
            name = home.get("name", "") if isinstance(home, dict) else getattr(home, "name", "")
            data["myTeamName"] = name
            data["myTeamSide"] = Side.HOME.value
            data.pop("my_team_side", None)
        if data.get("opponentScoreByInning") is None and data.get("opponent_score_by_inning") is None:
            data["opponentScoreByInning"] = []
        return data

    def team(self, side: Side | str) -> Team:
        return self.home_team if side == Side.HOME else self.away_team

    def all_players(self) -> list[Player]:
        return [*self.home_team.players, *self.away_team.players]


# ---------------------------------------------------------------------------
# Derived state
# ---------------------------------------------------------------------------

@dataclass
class RunnerState:
    first: Optional[str] = None
    second: Optional[str] = None
    third: Optional[str] = None

    def get(self, base: Base | str) -> Optional[str]:
        if base == Base.FIRST:
            return self.first
        if base == Base.SECOND:
            return self.second
        if base == Base.THIRD:
            return self.third
        return None

    def is_empty(self) -> bool:
        return self.first is None and self.second is None and self.third is None

    def occupied(self) -> list[tuple[Base, str]]:
        """(base, runner_id) pairs, third base first."""
        return [
            (base, runner)
            for base, runner in ((Base.THIRD, self.third), (Base.SECOND, self.second), (Base.FIRST, self.first))
            if runner is not None
        ]


def _per_side(value):
    return lambda: {Side.HOME: value(), Side.AWAY: value()}


@dataclass
class GameState:
    """Game situation derived from the event log."""
    inning: int = 1
    half_inning: HalfInning = HalfInning.TOP
    outs: int = 0
    runners: RunnerState = field(default_factory=RunnerState)
    score: dict[Side, int] = field(default_factory=_per_side(int))
    inning_scores: dict[Side, list[int]] = field(default_factory=_per_side(list))
    current_batter_index: dict[Side, int] = field(default_factory=_per_side(int))
    current_pitcher: dict[Side, str] = field(default_factory=_per_side(str))

    @property
    def batting_side(self) -> Side:
        return Side.AWAY if self.half_inning == HalfInning.TOP else Side.HOME

    @property
    def fielding_side(self) -> Side:
        return Side.HOME if self.half_inning == HalfInning.TOP else Side.AWAY

    def copy(self) -> GameState:
        return GameState(
            inning=self.inning,
            half_inning=self.half_inning,
            outs=self.outs,
            runners=RunnerState(self.runners.first, self.runners.second, self.runners.third),
            score=dict(self.score),
            inning_scores={side: list(runs) for side, runs in self.inning_scores.items()},
            current_batter_index=dict(self.current_batter_index),
            current_pitcher=dict(self.current_pitcher),
        )

    def situation_display(self) -> str:
        half_str = "Top" if self.half_inning == HalfInning.TOP else "Bot"
        on_bases = [
            label for label, runner in
            (("1st", self.runners.first), ("2nd", self.runners.second), ("3rd", self.runners.third))
            if runner
        ]
        runners_str = "runners on " + ", ".join(on_bases) if on_bases else "bases empty"
        return (
            f"{half_str} {self.inning}, {self.outs} out, {runners_str}, "
            f"Away {self.score[Side.AWAY]} - Home {self.score[Side.HOME]}"
        )

    def to_dict(self) -> dict:
        """Serialize in the same camelCase shape as the wire models."""
        return {
            "inning": self.inning,
            "halfInning": self.half_inning.value,
            "outs": self.outs,
            "runners": {
                "first": self.runners.first,
                "second": self.runners.second,
                "third": self.runners.third,
            },
            "score": {side.value: runs for side, runs in self.score.items()},
            "inningScores": {side.value: list(runs) for side, runs in self.inning_scores.items()},
            "currentBatterIndex": {side.value: idx for side, idx in self.current_batter_index.items()},
            "currentPitcher": {side.value: pid for side, pid in self.current_pitcher.items()},
        }
