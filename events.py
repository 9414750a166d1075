# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Event construction and the half-inning transition rule.

Every factory stamps a fresh id, the current UTC time, and the inning,
half and outs of the state it is given. Callers must pass the state as it
stands when the event is created, not a state that already includes it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from models import (
    RBI,
    Base,
    Destination,
    Game,
    GameState,
    HalfInning,
    InningChangeEvent,
    PitcherChangeEvent,
    PlateAppearanceEvent,
    PlateAppearanceResult,
    ResultCategory,
    RunnerEvent,
    RunnerEventKind,
    RunnerMovement,
)


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _stamp(state: GameState) -> dict:
    return {
        "id": generate_id(),
        "timestamp": utc_now(),
        "inning": state.inning,
        "half_inning": state.half_inning,
        "outs": state.outs,
    }


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_plate_appearance_event(
    state: GameState,
    batter_id: str,
    pitcher_id: str,
    result_code: str,
    result_label: str,
    result_category: ResultCategory | str,
    runner_movements: list[RunnerMovement] | None = None,
    rbi_list: list[RBI] | None = None,
    order_in_inning: int = 1,
) -> PlateAppearanceEvent:
    return PlateAppearanceEvent(
        **_stamp(state),
        batter_id=batter_id,
        pitcher_id=pitcher_id,
        order_in_inning=order_in_inning,
        result=PlateAppearanceResult(
            category=ResultCategory(result_category),
            code=result_code,
            label=result_label,
        ),
        rbi_list=list(rbi_list or []),
        runner_movements=list(runner_movements or []),
    )


def create_runner_event(
    state: GameState,
    runner_id: str,
    event_kind: RunnerEventKind | str,
    from_base: Base | str,
    to_base: Destination | str,
) -> RunnerEvent:
    return RunnerEvent(
        **_stamp(state),
        runner_id=runner_id,
        event_kind=RunnerEventKind(event_kind),
        from_base=Base(from_base),
        to_base=Destination(to_base),
    )


def create_inning_change_event(
    state: GameState,
    new_inning: int,
    new_half_inning: HalfInning | str,
) -> InningChangeEvent:
    return InningChangeEvent(
        **_stamp(state),
        new_inning=new_inning,
        new_half_inning=HalfInning(new_half_inning),
    )


def create_pitcher_change_event(
    state: GameState,
    team_id: str,
    out_pitcher_id: str,
    in_pitcher_id: str,
) -> PitcherChangeEvent:
    return PitcherChangeEvent(
        **_stamp(state),
        team_id=team_id,
        out_pitcher_id=out_pitcher_id,
        in_pitcher_id=in_pitcher_id,
    )


# ---------------------------------------------------------------------------
# Half-inning transitions
# ---------------------------------------------------------------------------

def should_transition(state: GameState) -> bool:
    return state.outs >= 3


def next_half(state: GameState, game: Game) -> Optional[tuple[int, HalfInning]]:
    """The half-inning after the current one, or ``None`` once the game is complete."""
    if state.half_inning == HalfInning.TOP:
        return state.inning, HalfInning.BOTTOM
    if state.inning >= game.innings:
        return None
    return state.inning + 1, HalfInning.TOP


def count_plate_appearances_in_half(game: Game, inning: int, half_inning: HalfInning) -> int:
    return sum(
        1 for e in game.events
        if isinstance(e, PlateAppearanceEvent)
        and e.inning == inning and e.half_inning == half_inning
    )
