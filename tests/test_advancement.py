# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for automatic runner advancement.

Validates:
  1. Walks and hit batsmen only move forced runners
  2. Hits advance runners by the number of bases
  3. Home runs clear the bases with an RBI per runner
  4. Outs, errors and fielder's choices resolve to nothing
  5. Movements come out third base first
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from advancement import needs_resolution, resolve_advancement
from catalog import lookup
from models import Base, Destination, MovementReason, RunnerState


def moves(advancement):
    return [(m.runner_id, m.from_base, m.to_base) for m in advancement.movements]


def rbi_ids(advancement):
    return [r.runner_id for r in advancement.rbis]


class TestNeedsResolution:
    def test_empty_bases_never_resolve(self):
        assert not needs_resolution(RunnerState(), lookup("H1-L"))

    def test_hit_with_runner(self):
        assert needs_resolution(RunnerState(first="r1"), lookup("H2-L"))

    def test_sacrifice_is_operator_entered(self):
        assert not needs_resolution(RunnerState(third="r3"), lookup("SF"))


class TestForceAdvance:
    def test_walk_bases_loaded_scores_runner_from_third(self):
        runners = RunnerState(first="r1", second="r2", third="r3")
        result = resolve_advancement(runners, lookup("BB"))
        assert moves(result) == [
            ("r3", Base.THIRD, Destination.SCORE),
            ("r2", Base.SECOND, Destination.THIRD),
            ("r1", Base.FIRST, Destination.SECOND),
        ]
        assert rbi_ids(result) == ["r3"]
        assert all(m.reason == MovementReason.FORCE for m in result.movements)

    def test_walk_with_runner_on_second_only_moves_nobody(self):
        result = resolve_advancement(RunnerState(second="r2"), lookup("BB"))
        assert result.movements == []
        assert result.rbis == []

    def test_hbp_first_and_third_moves_only_first(self):
        runners = RunnerState(first="r1", third="r3")
        result = resolve_advancement(runners, lookup("HBP"))
        assert moves(result) == [("r1", Base.FIRST, Destination.SECOND)]

    def test_interference_forces_like_a_walk(self):
        result = resolve_advancement(RunnerState(first="r1", second="r2"), lookup("INT"))
        assert moves(result) == [
            ("r2", Base.SECOND, Destination.THIRD),
            ("r1", Base.FIRST, Destination.SECOND),
        ]


class TestHits:
    def test_single_bases_loaded(self):
        runners = RunnerState(first="r1", second="r2", third="r3")
        result = resolve_advancement(runners, lookup("H1-C"))
        assert moves(result) == [
            ("r3", Base.THIRD, Destination.SCORE),
            ("r2", Base.SECOND, Destination.THIRD),
            ("r1", Base.FIRST, Destination.SECOND),
        ]
        assert rbi_ids(result) == ["r3"]
        assert all(m.reason == MovementReason.BATTED_BALL for m in result.movements)

    def test_double_scores_second_and_moves_first_to_third(self):
        result = resolve_advancement(RunnerState(first="r1", second="r2"), lookup("H2-L"))
        assert moves(result) == [
            ("r2", Base.SECOND, Destination.SCORE),
            ("r1", Base.FIRST, Destination.THIRD),
        ]
        assert rbi_ids(result) == ["r2"]

    def test_triple_clears_the_bases(self):
        result = resolve_advancement(RunnerState(first="r1", second="r2", third="r3"), lookup("H3-R"))
        assert all(m.to_base == Destination.SCORE for m in result.movements)
        assert rbi_ids(result) == ["r3", "r2", "r1"]

    def test_home_run_runner_on_second(self):
        result = resolve_advancement(RunnerState(second="r2"), lookup("HR-C"))
        assert moves(result) == [("r2", Base.SECOND, Destination.SCORE)]
        assert [r.earned for r in result.rbis] == [True]

    def test_grand_slam_order(self):
        result = resolve_advancement(RunnerState(first="r1", second="r2", third="r3"), lookup("HR-L"))
        assert rbi_ids(result) == ["r3", "r2", "r1"]


class TestOperatorResolved:
    def test_out_error_and_fielders_choice_move_nobody(self):
        runners = RunnerState(first="r1", third="r3")
        for code in ("GO-6", "E-5", "FC", "K"):
            result = resolve_advancement(runners, lookup(code))
            assert result.movements == []
            assert result.rbis == []

    def test_snapshot_is_not_modified(self):
        runners = RunnerState(first="r1", second="r2")
        resolve_advancement(runners, lookup("H1-L"))
        assert runners == RunnerState(first="r1", second="r2")
