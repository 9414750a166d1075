# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Input validation for API payloads.

Pydantic input models for each write action. Payloads use the same
camelCase names as the stored game, and enum fields reject values outside
the wire vocabulary, so a bad request fails here before it reaches the
event log.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator

from models import (
    RBI,
    Base,
    Destination,
    Player,
    RunnerEventKind,
    RunnerMovement,
    Side,
    WireModel,
)


def is_valid_player_id(player_id: str) -> bool:
    return isinstance(player_id, str) and len(player_id.strip()) > 0


def validation_details(exc: ValidationError) -> list[str]:
    """Flatten a pydantic error into ``"loc: msg"`` strings."""
    return [
        f"{'.'.join(str(part) for part in e.get('loc', ())) or '?'}: {e.get('msg', '?')}"
        for e in exc.errors()
    ]


class CreateGameInput(WireModel):
    home_team_name: str = Field(min_length=1)
    away_team_name: str = Field(min_length=1)
    home_players: list[Player]
    away_players: list[Player]
    home_batting_order: list[str]
    away_batting_order: list[str]
    home_starting_pitcher: str = Field(min_length=1)
    away_starting_pitcher: str = Field(min_length=1)
    innings: Optional[int] = Field(default=None, ge=1)
    date: Optional[str] = None
    venue: str = ""
    my_team_name: Optional[str] = None
    my_team_side: Optional[Side] = None


class PlateAppearanceInput(WireModel):
    result_code: str = Field(min_length=1)
    runner_movements: Optional[list[RunnerMovement]] = None
    rbi_list: Optional[list[RBI]] = None

    @field_validator("runner_movements")
    @classmethod
    def validate_runner_movements(cls, v: Optional[list[RunnerMovement]]):
        for movement in v or []:
            _reject_home(movement.to_base)
        return v


def _reject_home(to_base: Destination) -> Destination:
    if to_base == Destination.HOME:
        raise ValueError("runners end on a base, 'out' or 'score', not 'home'")
    return to_base


class RunnerEventInput(WireModel):
    from_base: Base
    event_kind: RunnerEventKind
    to_base: Destination

    @field_validator("from_base")
    @classmethod
    def validate_from_base(cls, v: Base) -> Base:
        if v == Base.HOME:
            raise ValueError("runner events start from first, second or third")
        return v

    @field_validator("to_base")
    @classmethod
    def validate_to_base(cls, v: Destination) -> Destination:
        return _reject_home(v)


class PitcherChangeInput(WireModel):
    in_pitcher_id: str
    team_id: Optional[str] = None

    @field_validator("in_pitcher_id")
    @classmethod
    def validate_in_pitcher_id(cls, v: str) -> str:
        if not is_valid_player_id(v):
            raise ValueError("in_pitcher_id must be a non-empty string")
        return v


class OpponentScoreInput(WireModel):
    inning_index: int = Field(ge=0)
    runs: int = Field(ge=0)


def parse(model: type[WireModel], payload: Any) -> Any:
    """Validate *payload* against *model*; raises ``ValidationError``."""
    return model.model_validate(payload if payload is not None else {})
