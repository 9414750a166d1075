# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Automatic runner advancement for a plate-appearance result.

Given the base occupancy *before* the play and the catalog entry for the
result, works out which runners move where and which of them are credited
to the batter as RBIs. The batter's own placement is not part of this; the
projector handles it when the event is applied.

Runners are always evaluated third base first so RBIs come out in scoring
order, and always against the pre-play snapshot so no runner is advanced
twice in one pass.

Outs, errors, fielder's choices and sacrifices depend on what the defense
did, so they resolve to no movement here; the scorer enters those
movements by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog import ResultOption
from models import RBI, Base, Destination, MovementReason, ResultCategory, RunnerMovement, RunnerState

# Categories that award the batter first base without putting the ball in play.
AWARDED_FIRST = frozenset({
    ResultCategory.WALK,
    ResultCategory.HIT_BY_PITCH,
    ResultCategory.INTERFERENCE,
})

@dataclass
class Advancement:
    movements: list[RunnerMovement] = field(default_factory=list)
    rbis: list[RBI] = field(default_factory=list)

    def _move(self, runner_id: str, from_base: Base, to_base: Destination,
              reason: MovementReason) -> None:
        self.movements.append(RunnerMovement(
            runner_id=runner_id, from_base=from_base, to_base=to_base, reason=reason,
        ))
        if to_base == Destination.SCORE:
            self.rbis.append(RBI(runner_id=runner_id, earned=True))


RESOLVED_CATEGORIES = AWARDED_FIRST | {
    ResultCategory.HIT,
    ResultCategory.OUT,
    ResultCategory.ERROR,
    ResultCategory.FIELDERS_CHOICE,
}


def needs_resolution(runners: RunnerState, option: ResultOption) -> bool:
    """True when someone is on base and the result goes through the resolver."""
    return not runners.is_empty() and option.category in RESOLVED_CATEGORIES


def resolve_advancement(runners: RunnerState, option: ResultOption) -> Advancement:
    """Compute runner movements and RBIs for *option* from the pre-play *runners*."""
    result = Advancement()
    if runners.is_empty():
        return result

    if option.category in AWARDED_FIRST:
        _force_advance(runners, result)
    elif option.category == ResultCategory.HIT and option.hit_bases >= 4:
        _home_run(runners, result)
    elif option.category == ResultCategory.HIT and option.hit_bases > 0:
        _hit_advance(runners, option.hit_bases, result)
    # Outs, errors, fielder's choices and sacrifices: nothing automatic.
    return result


def _force_advance(runners: RunnerState, result: Advancement) -> None:
    """Move only the runners forced by the batter taking first."""
    if runners.first is None:
        return
    if runners.second is not None:
        if runners.third is not None:
            result._move(runners.third, Base.THIRD, Destination.SCORE, MovementReason.FORCE)
        result._move(runners.second, Base.SECOND, Destination.THIRD, MovementReason.FORCE)
    result._move(runners.first, Base.FIRST, Destination.SECOND, MovementReason.FORCE)


def _home_run(runners: RunnerState, result: Advancement) -> None:
    for base, runner_id in runners.occupied():
        result._move(runner_id, base, Destination.SCORE, MovementReason.BATTED_BALL)


def _hit_advance(runners: RunnerState, hit_bases: int, result: Advancement) -> None:
    if runners.third is not None:
        result._move(runners.third, Base.THIRD, Destination.SCORE, MovementReason.BATTED_BALL)
    if runners.second is not None:
        to_base = Destination.SCORE if hit_bases >= 2 else Destination.THIRD
        result._move(runners.second, Base.SECOND, to_base, MovementReason.BATTED_BALL)
    if runners.first is not None:
        if hit_bases >= 3:
            to_base = Destination.SCORE
        elif hit_bases == 2:
            to_base = Destination.THIRD
        else:
            to_base = Destination.SECOND
        result._move(runners.first, Base.FIRST, to_base, MovementReason.BATTED_BALL)
