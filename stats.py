# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Batting and pitching lines aggregated from the event log.

Lines are recomputed from scratch on every call by scanning the whole
log; there is no running tally to keep in sync with undo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import catalog
from catalog import ResultOption
from models import (
    Game,
    GameEvent,
    HalfInning,
    PitcherChangeEvent,
    PlateAppearanceEvent,
    Player,
    ResultCategory,
    RunnerEvent,
    RunnerEventKind,
)
from projector import MAX_OUTS, UNKNOWN_PLAYER, credited_plays, my_fielding_half, my_team


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

@dataclass
class BattingLine:
    player_id: str
    player_name: str
    plate_appearances: int = 0
    at_bats: int = 0
    hits: int = 0
    doubles: int = 0
    triples: int = 0
    home_runs: int = 0
    rbi: int = 0
    runs: int = 0
    walks: int = 0
    hit_by_pitch: int = 0
    strikeouts: int = 0
    sacrifice_bunts: int = 0
    sacrifice_flies: int = 0
    stolen_bases: int = 0

    @property
    def singles(self) -> int:
        return self.hits - self.doubles - self.triples - self.home_runs

    @property
    def total_bases(self) -> int:
        return self.singles + 2 * self.doubles + 3 * self.triples + 4 * self.home_runs

    @property
    def batting_average(self) -> float:
        return self.hits / self.at_bats if self.at_bats > 0 else 0.0

    @property
    def on_base_percentage(self) -> float:
        denominator = self.at_bats + self.walks + self.hit_by_pitch + self.sacrifice_flies
        if denominator == 0:
            return 0.0
        return (self.hits + self.walks + self.hit_by_pitch) / denominator

    @property
    def slugging_percentage(self) -> float:
        return self.total_bases / self.at_bats if self.at_bats > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "plateAppearances": self.plate_appearances,
            "atBats": self.at_bats,
            "hits": self.hits,
            "doubles": self.doubles,
            "triples": self.triples,
            "homeRuns": self.home_runs,
            "rbiCount": self.rbi,
            "runs": self.runs,
            "walks": self.walks,
            "hitByPitch": self.hit_by_pitch,
            "strikeouts": self.strikeouts,
            "sacrificeBunts": self.sacrifice_bunts,
            "sacrificeFlies": self.sacrifice_flies,
            "stolenBases": self.stolen_bases,
            "battingAverage": round(self.batting_average, 3),
            "onBasePercentage": round(self.on_base_percentage, 3),
            "sluggingPercentage": round(self.slugging_percentage, 3),
        }


@dataclass
class PitchingLine:
    player_id: str
    player_name: str
    outs_recorded: int = 0
    hits: int = 0
    walks: int = 0  # includes hit batsmen
    strikeouts: int = 0
    runs: int = 0

    @property
    def earned_runs(self) -> int:
        # No earned/unearned distinction is tracked.
        return self.runs

    @property
    def innings_pitched(self) -> float:
        """Whole innings plus remainder outs in the tenths digit (5 outs -> 1.2)."""
        full = self.outs_recorded // 3
        partial = self.outs_recorded % 3
        return full + partial / 10.0

    @property
    def innings_pitched_display(self) -> str:
        return f"{self.outs_recorded // 3}.{self.outs_recorded % 3}"

    def to_dict(self) -> dict:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "inningsPitched": self.innings_pitched,
            "inningsPitchedDisplay": self.innings_pitched_display,
            "outsRecorded": self.outs_recorded,
            "earnedRuns": self.earned_runs,
            "runs": self.runs,
            "hits": self.hits,
            "walks": self.walks,
            "strikeouts": self.strikeouts,
        }


# ---------------------------------------------------------------------------
# Result classification
# ---------------------------------------------------------------------------

def _is_hit(pa: PlateAppearanceEvent, option: Optional[ResultOption]) -> bool:
    if option is not None:
        return option.category == ResultCategory.HIT
    return pa.result.category == ResultCategory.HIT


def _hit_bases(option: Optional[ResultOption]) -> int:
    return option.hit_bases if option is not None else 0


def _is_strikeout(pa: PlateAppearanceEvent) -> bool:
    return pa.result.code in catalog.STRIKEOUT_CODES


def _scored_in(pa: PlateAppearanceEvent, player_id: str) -> bool:
    """Whether *player_id* crossed the plate during this plate appearance.

    A run the projector credits, or an RBI entry naming the player on a
    play that did not end the half-inning.
    """
    scorers, outs = credited_plays(pa)
    if player_id in scorers:
        return True
    if min(pa.outs, MAX_OUTS) + outs >= MAX_OUTS:
        return False
    return any(r.runner_id == player_id for r in pa.rbi_list)


# ---------------------------------------------------------------------------
# Batting
# ---------------------------------------------------------------------------

def batting_stats(events: list[GameEvent], players: list[Player],
                  batting_order: list[str]) -> list[BattingLine]:
    """One batting line per batting-order slot."""
    names = {p.id: p.name for p in players}
    return [
        _batting_line(events, player_id, names.get(player_id, UNKNOWN_PLAYER))
        for player_id in batting_order
    ]


def _batting_line(events: list[GameEvent], player_id: str, name: str) -> BattingLine:
    line = BattingLine(player_id=player_id, player_name=name)

    for event in events:
        if isinstance(event, RunnerEvent):
            if event.runner_id != player_id:
                continue
            if event.event_kind == RunnerEventKind.STOLEN_BASE:
                line.stolen_bases += 1
            if player_id in credited_plays(event)[0]:
                line.runs += 1
            continue

        if not isinstance(event, PlateAppearanceEvent):
            continue
        if _scored_in(event, player_id):
            line.runs += 1
        if event.batter_id != player_id:
            continue

        option = catalog.lookup(event.result.code)
        category = event.result.category
        line.plate_appearances += 1
        if option is not None and option.is_at_bat:
            line.at_bats += 1
        if _is_hit(event, option):
            line.hits += 1
            bases = _hit_bases(option)
            if bases == 2:
                line.doubles += 1
            elif bases == 3:
                line.triples += 1
            elif bases == 4:
                line.home_runs += 1
        if category == ResultCategory.WALK:
            line.walks += 1
        elif category == ResultCategory.HIT_BY_PITCH:
            line.hit_by_pitch += 1
        elif category == ResultCategory.SACRIFICE_BUNT:
            line.sacrifice_bunts += 1
        elif category == ResultCategory.SACRIFICE_FLY:
            line.sacrifice_flies += 1
        if _is_strikeout(event):
            line.strikeouts += 1
        line.rbi += sum(1 for r in event.rbi_list if r.earned)

    return line


# ---------------------------------------------------------------------------
# Pitching
# ---------------------------------------------------------------------------

def pitching_stats(game: Game) -> list[PitchingLine]:
    """Lines for every pitcher my team used, starter first."""
    team = my_team(game)
    roster_ids = {p.id for p in team.players}
    defensive_half: HalfInning = my_fielding_half(game)

    order = [team.starting_pitcher]
    for event in game.events:
        if (isinstance(event, PitcherChangeEvent) and event.in_pitcher_id in roster_ids
                and event.in_pitcher_id not in order):
            order.append(event.in_pitcher_id)

    names = {p.id: p.name for p in team.players}
    lines = {
        pid: PitchingLine(player_id=pid, player_name=names.get(pid, UNKNOWN_PLAYER))
        for pid in order
    }

    on_mound = team.starting_pitcher
    for event in game.events:
        if isinstance(event, PitcherChangeEvent):
            if event.in_pitcher_id in roster_ids:
                on_mound = event.in_pitcher_id
            continue
        if event.half_inning != defensive_half:
            continue

        if isinstance(event, PlateAppearanceEvent):
            line = lines.get(event.pitcher_id)
            if line is None:
                continue
            option = catalog.lookup(event.result.code)
            if _is_hit(event, option):
                line.hits += 1
            if event.result.category in (ResultCategory.WALK, ResultCategory.HIT_BY_PITCH):
                line.walks += 1
            if _is_strikeout(event):
                line.strikeouts += 1
        elif isinstance(event, RunnerEvent):
            line = lines.get(on_mound)
            if line is None:
                continue
        else:
            continue
        scorers, outs = credited_plays(event)
        line.outs_recorded += outs
        line.runs += len(scorers)

    return [lines[pid] for pid in order]
