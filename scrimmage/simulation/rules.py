"""Turn raw yardage into a finished play result.

Run and pass plays, before and after the defensive modifier, all go
through ``settle_play`` so the score, first-down, safety and clock flags
are always derived the same way from the yards and the situation.
"""

from typing import Optional

from scrimmage.core.enums import PlayOutcome, PlayType
from scrimmage.core.models import field
from scrimmage.core.models.game import GameState
from scrimmage.core.models.play import TOUCHDOWN_WITH_TRY_POINTS, PlayResult
from scrimmage.core.models.player import Player

# Stop reasons that come from the play itself rather than from a score or turnover
PLAY_STOP_REASONS = frozenset({"incomplete", "out_of_bounds", "hail_mary"})


def settle_play(
    play_type: PlayType,
    yards: int,
    time_elapsed: int,
    state: GameState,
    *,
    outcome: PlayOutcome,
    turnover_outcome: Optional[PlayOutcome] = None,
    stop_reason: Optional[str] = None,
    touchdown_points: int = TOUCHDOWN_WITH_TRY_POINTS,
    primary_player: Optional[Player] = None,
    target: Optional[Player] = None,
    defender: Optional[Player] = None,
) -> PlayResult:
    """
    Build a scrimmage play result from yards and situation.

    Args:
        play_type: RUSH or PASS
        yards: Raw yards; capped at the distance to the goal line
        time_elapsed: Seconds the play took
        state: Situation before the snap
        outcome: Outcome when the ball is not turned over
        turnover_outcome: Set when the defense takes the ball
        stop_reason: Play-level reason the clock stops ("incomplete",
            "out_of_bounds", "hail_mary"), or None if it keeps running
        touchdown_points: Points for an offensive touchdown

    Returns:
        A result whose flags satisfy every PlayResult invariant
    """
    yards = min(yards, state.distance_to_goal)
    extras = {
        "primary_player": primary_player,
        "target": target,
        "defender": defender,
        "involved_players": tuple(p for p in (primary_player, target, defender) if p is not None),
        "is_sack": outcome == PlayOutcome.SACK,
    }
    if stop_reason is not None:
        extras["clock_stop_reason"] = stop_reason

    if turnover_outcome is not None:
        result = PlayResult.turnover(play_type, yards, time_elapsed, outcome=turnover_outcome, **extras)
    elif outcome == PlayOutcome.INCOMPLETE:
        result = PlayResult.pass_play(0, time_elapsed, complete=False, **extras)
    elif yards >= state.distance_to_goal:
        result = PlayResult.touchdown(play_type, yards, time_elapsed, points=touchdown_points, **extras)
    elif state.field_position + yards <= field.OWN_GOAL_LINE:
        result = PlayResult.safety(play_type, yards, time_elapsed, **extras)
    else:
        result = PlayResult(
            play_type,
            yards_gained=yards,
            time_elapsed=time_elapsed,
            is_first_down=yards >= state.yards_to_go,
            stop_clock=stop_reason is not None,
            outcome=outcome,
            **extras,
        )
    return result.replace(description=describe_play(result))


def play_stop_reason(result: PlayResult) -> Optional[str]:
    """The play-level clock stop reason recorded on a result, if any."""
    if result.clock_stop_reason in PLAY_STOP_REASONS:
        return result.clock_stop_reason
    return None


def _name(player: Optional[Player], fallback: str) -> str:
    return player.display_name if player is not None else fallback


def _yards(yards: int) -> str:
    if yards == 0:
        return "no gain"
    if yards < 0:
        return f"a loss of {-yards}"
    return f"{yards} yard{'s' if yards != 1 else ''}"


def describe_play(result: PlayResult) -> str:
    """Play-by-play line for a scrimmage result."""
    ball = _name(result.primary_player, "Ball carrier")
    target = _name(result.target, "receiver")
    defender = _name(result.defender, "the defense")

    if result.outcome == PlayOutcome.INTERCEPTION:
        return f"{ball} pass intended for {target} INTERCEPTED by {defender}"
    if result.outcome == PlayOutcome.FUMBLE_LOST:
        if result.is_sack:
            return f"{ball} sacked by {defender} for {_yards(result.yards_gained)}, FUMBLES, recovered by the defense"
        return f"{ball} FUMBLES after {_yards(result.yards_gained)}, recovered by {defender}"
    if result.is_incomplete:
        return f"{ball} pass incomplete intended for {target}"
    if result.is_sack:
        text = f"{ball} sacked by {defender} for {_yards(result.yards_gained)}"
    elif result.play_type == PlayType.PASS:
        text = f"{ball} pass to {target} for {_yards(result.yards_gained)}"
    else:
        text = f"{ball} runs for {_yards(result.yards_gained)}"

    if result.is_safety:
        return f"{text}, SAFETY"
    if result.is_score:
        return f"{text}, TOUCHDOWN"
    if result.is_first_down:
        return f"{text}, first down"
    return text
