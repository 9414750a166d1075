# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Plain-text score sheet for a game.

Reads a game, its derived state and my team's stats; writes nothing back.
"""

from __future__ import annotations

from models import (
    POSITION_ABBREVIATIONS,
    RUNNER_EVENT_LABELS,
    Destination,
    Game,
    GameState,
    HalfInning,
    InningChangeEvent,
    PitcherChangeEvent,
    PlateAppearanceEvent,
    ResultCategory,
    RunnerEvent,
    Side,
)
from projector import my_team, player_name, project
from stats import BattingLine, PitchingLine, batting_stats, pitching_stats


def format_average(value: float) -> str:
    """Baseball-style rate: .333, 1.000, or --- when there is nothing to show."""
    if value == 0:
        return "---"
    text = f"{value:.3f}"
    return text[1:] if text.startswith("0") else text


def _team_hits(game: Game, half: HalfInning) -> int:
    return sum(
        1 for e in game.events
        if isinstance(e, PlateAppearanceEvent) and e.half_inning == half
        and e.result.category == ResultCategory.HIT
    )


def _innings_started(state: GameState, half: HalfInning) -> int:
    if half == HalfInning.TOP or state.half_inning == HalfInning.BOTTOM:
        return state.inning
    return state.inning - 1


def generate_line_score(game: Game, state: GameState) -> dict:
    """Line score for both teams, padded to the scheduled innings.

    Innings a team has not batted in yet are ``None``.
    """
    max_inn = max(game.innings, len(state.inning_scores[Side.HOME]), len(state.inning_scores[Side.AWAY]))

    def team_line(side: Side, half: HalfInning) -> dict:
        runs = state.inning_scores[side]
        started = _innings_started(state, half)
        return {
            "team_name": game.team(side).name,
            "inning_runs": [
                runs[i] if i < len(runs) else (0 if i < started else None)
                for i in range(max_inn)
            ],
            "total_runs": state.score[side],
            "total_hits": _team_hits(game, half),
        }

    return {
        "innings": max_inn,
        "away": team_line(Side.AWAY, HalfInning.TOP),
        "home": team_line(Side.HOME, HalfInning.BOTTOM),
    }


def describe_event(game: Game, event) -> str:
    """One play-by-play line for *event*."""
    if isinstance(event, PlateAppearanceEvent):
        text = f"{player_name(game, event.batter_id)}: {event.result.label or event.result.code}"
        scored = [player_name(game, m.runner_id) for m in event.runner_movements if m.to_base == Destination.SCORE]
        if scored:
            text += f" ({', '.join(scored)} scored)"
        return text
    if isinstance(event, RunnerEvent):
        return (
            f"{player_name(game, event.runner_id)}: {RUNNER_EVENT_LABELS[event.event_kind]} "
            f"{event.from_base.value} -> {event.to_base.value}"
        )
    if isinstance(event, InningChangeEvent):
        half = "Top" if event.new_half_inning == HalfInning.TOP else "Bottom"
        return f"--- {half} of inning {event.new_inning} ---"
    if isinstance(event, PitcherChangeEvent):
        return (
            f"Pitching change: {player_name(game, event.in_pitcher_id)} "
            f"replaces {player_name(game, event.out_pitcher_id)}"
        )
    return event.type


def render_score_sheet(game: Game) -> str:
    """Render the full score sheet as text."""
    state = project(game)
    team = my_team(game)
    batting: list[BattingLine] = batting_stats(game.events, team.players, team.batting_order)
    pitching: list[PitchingLine] = pitching_stats(game)
    box = generate_line_score(game, state)
    lines = []

    lines.append("=" * 72)
    lines.append("SCORE SHEET")
    lines.append(f"Date: {game.date}  Venue: {game.venue or '-'}  Status: {game.status.value}")
    lines.append(
        f"{game.away_team.name} {state.score[Side.AWAY]} - "
        f"{state.score[Side.HOME]} {game.home_team.name}"
    )
    lines.append("=" * 72)

    header = f"{'Team':<20}"
    for i in range(1, box["innings"] + 1):
        header += f" {i:>3}"
    header += "  |   R   H"
    lines.append(header)
    lines.append("-" * len(header))
    for side in ("away", "home"):
        row_data = box[side]
        row = f"{row_data['team_name'][:20]:<20}"
        for r in row_data["inning_runs"]:
            row += f" {('-' if r is None else r):>3}"
        row += f"  | {row_data['total_runs']:>3} {row_data['total_hits']:>3}"
        lines.append(row)

    if game.opponent_score_by_inning:
        lines.append("")
        lines.append(
            "Opponent (entered): "
            + " ".join(str(r) for r in game.opponent_score_by_inning)
            + f"  = {sum(game.opponent_score_by_inning)}"
        )

    lines.append(f"\n{team.name} Batting:")
    lines.append(
        f"  {'#':>3} {'Name':<20} {'Pos':<4} {'Results':<24} {'AB':>3} {'H':>3} {'R':>3} "
        f"{'RBI':>4} {'BB':>3} {'K':>3} {'AVG':>5}"
    )
    for b in batting:
        player = team.player(b.player_id)
        number = player.number if player else 0
        pos = POSITION_ABBREVIATIONS.get(player.position, "?") if player else "?"
        results = " ".join(
            e.result.code for e in game.events
            if isinstance(e, PlateAppearanceEvent) and e.batter_id == b.player_id
        )
        lines.append(
            f"  {number:>3} {b.player_name[:20]:<20} {pos:<4} {results[:24]:<24} {b.at_bats:>3} "
            f"{b.hits:>3} {b.runs:>3} {b.rbi:>4} {b.walks:>3} {b.strikeouts:>3} "
            f"{format_average(b.batting_average):>5}"
        )

    lines.append(f"\n{team.name} Pitching:")
    lines.append(f"  {'Name':<20} {'IP':>5} {'H':>3} {'R':>3} {'ER':>3} {'BB':>3} {'K':>3}")
    for p in pitching:
        lines.append(
            f"  {p.player_name[:20]:<20} {p.innings_pitched_display:>5} {p.hits:>3} {p.runs:>3} "
            f"{p.earned_runs:>3} {p.walks:>3} {p.strikeouts:>3}"
        )

    if game.events:
        lines.append("\nPlay-by-play:")
        for event in game.events:
            lines.append(f"  {describe_event(game, event)}")

    return "\n".join(lines)
