"""
Defensive scheme modifier.

The resolver decides what the offense's play does on its own; the
defensive call then nudges that result according to a fixed
scheme-versus-category matrix, one handler per scheme.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from scrimmage.core.enums import DefensivePlay, PlayOutcome, PlayType
from scrimmage.core.models.game import GameState
from scrimmage.core.models.play import TOUCHDOWN_WITH_TRY_POINTS, PlayCall, PlayResult
from scrimmage.simulation.rules import play_stop_reason, settle_play

logger = logging.getLogger(__name__)

YARD_FLOOR = -15  # Worst result any scheme can produce


@dataclass(frozen=True)
class Adjustment:
    """What a scheme did to a play before the flags are recomputed."""

    yards: int
    sack: bool = False
    turnover_outcome: Optional[PlayOutcome] = None


Handler = Callable[[PlayResult, PlayCall, random.Random], Adjustment]


def reduce_by(yards: int, fraction: float) -> int:
    """Take ``fraction`` off a gain; losses are left alone."""
    if yards <= 0:
        return yards
    return yards - int(round(yards * fraction))


class DefensiveModifier:
    """
    Applies a defensive scheme to an already-resolved play.

    Special-teams plays and plays that are already turnovers come back
    unchanged. Incomplete passes only change through a blitz sack or a
    coverage interception; no scheme hands them yardage.
    """

    # Blitz
    BLITZ_SACK_CHANCE = 0.30
    BLITZ_SACK_YARDS = (-10, -3)
    BLITZ_STRIP_CHANCE = 0.15  # Sack that also forces a turnover
    BLITZ_VACATED_YARDS = (2, 7)
    BLITZ_STUFF_CHANCE = 0.40
    BLITZ_STUFF_YARDS = (1, 3)
    BLITZ_GAP_YARDS = (1, 4)

    # Defend pass
    DEFEND_PASS_REDUCE_CHANCE = 0.60
    DEFEND_PASS_REDUCTION = 0.30
    DEFEND_PASS_INTERCEPTION_CHANCE = 0.08
    LIGHT_BOX_YARDS = (1, 4)

    # Defend run
    DEFEND_RUN_REDUCE_CHANCE = 0.70
    DEFEND_RUN_REDUCTION = 0.40
    SOFT_COVERAGE_YARDS = (1, 3)

    # Prevent
    PREVENT_BIG_PLAY = 15
    PREVENT_CAP_CHANCE = 0.75
    PREVENT_CAPPED_YARDS = (8, 15)
    PREVENT_UNDERNEATH = 8
    PREVENT_UNDERNEATH_YARDS = (1, 3)

    # Stack the box
    STACK_REDUCE_CHANCE = 0.75
    STACK_REDUCTION = 0.50
    STACK_FLOOR = -5
    STACK_DEEP_YARDS = (3, 10)
    STACK_SHORT_YARDS = (1, 4)

    def __init__(self, touchdown_points: int = TOUCHDOWN_WITH_TRY_POINTS):
        self.touchdown_points = touchdown_points
        self._handlers: dict[DefensivePlay, Handler] = {
            DefensivePlay.BALANCED: self._balanced,
            DefensivePlay.BLITZ: self._blitz,
            DefensivePlay.DEFEND_PASS: self._defend_pass,
            DefensivePlay.DEFEND_RUN: self._defend_run,
            DefensivePlay.PREVENT: self._prevent,
            DefensivePlay.STACK_THE_BOX: self._stack_the_box,
        }

    def apply(
        self,
        base_result: PlayResult,
        offense_call: PlayCall,
        scheme: DefensivePlay,
        state: GameState,
        rng: random.Random,
    ) -> PlayResult:
        """
        Modify a resolved play for the defensive call.

        Args:
            base_result: Result from the play resolver
            offense_call: The offensive call that produced it
            scheme: The defensive call
            state: Situation before the snap
            rng: Random source

        Returns:
            The modified result, with score, first-down, safety and clock
            flags recomputed against ``state``
        """
        if offense_call.is_special_teams or base_result.is_special_teams:
            return base_result
        if base_result.is_turnover:
            return base_result

        adjustment = self._handlers[scheme](base_result, offense_call, rng)
        yards = max(YARD_FLOOR, adjustment.yards)
        logger.debug(
            "%s vs %s: %d -> %d%s",
            scheme.display, offense_call.display, base_result.yards_gained, yards,
            " (sack)" if adjustment.sack else "",
        )

        if adjustment.sack:
            outcome = PlayOutcome.SACK
            stop_reason = None
        elif base_result.is_incomplete:
            outcome = PlayOutcome.INCOMPLETE
            stop_reason = play_stop_reason(base_result)
        else:
            outcome = PlayOutcome.COMPLETE if base_result.play_type == PlayType.PASS else PlayOutcome.RUSH
            stop_reason = play_stop_reason(base_result)

        return settle_play(
            base_result.play_type,
            yards,
            base_result.time_elapsed,
            state,
            outcome=outcome,
            turnover_outcome=adjustment.turnover_outcome,
            stop_reason=stop_reason,
            touchdown_points=self.touchdown_points,
            primary_player=base_result.primary_player,
            target=base_result.target,
            defender=base_result.defender,
        )

    # =========================================================================
    # Scheme handlers
    # =========================================================================

    def _balanced(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        if result.is_incomplete:
            return Adjustment(0)
        return Adjustment(result.yards_gained + rng.randint(-1, 1))

    def _blitz(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        if call.is_pass:
            if rng.random() < self.BLITZ_SACK_CHANCE:
                yards = rng.randint(*self.BLITZ_SACK_YARDS)
                strip = rng.random() < self.BLITZ_STRIP_CHANCE
                return Adjustment(yards, sack=True,
                                  turnover_outcome=PlayOutcome.FUMBLE_LOST if strip else None)
            if result.is_incomplete:
                return Adjustment(0)
            return Adjustment(result.yards_gained + rng.randint(*self.BLITZ_VACATED_YARDS))
        if rng.random() < self.BLITZ_STUFF_CHANCE:
            return Adjustment(result.yards_gained - rng.randint(*self.BLITZ_STUFF_YARDS))
        return Adjustment(result.yards_gained + rng.randint(*self.BLITZ_GAP_YARDS))

    def _defend_pass(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        if not call.is_pass:
            return Adjustment(result.yards_gained + rng.randint(*self.LIGHT_BOX_YARDS))
        yards = result.yards_gained
        if not result.is_incomplete and rng.random() < self.DEFEND_PASS_REDUCE_CHANCE:
            yards = reduce_by(yards, self.DEFEND_PASS_REDUCTION)
        if rng.random() < self.DEFEND_PASS_INTERCEPTION_CHANCE:
            return Adjustment(0, turnover_outcome=PlayOutcome.INTERCEPTION)
        return Adjustment(yards)

    def _defend_run(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        if call.is_pass:
            if result.is_incomplete:
                return Adjustment(0)
            return Adjustment(result.yards_gained + rng.randint(*self.SOFT_COVERAGE_YARDS))
        if rng.random() < self.DEFEND_RUN_REDUCE_CHANCE:
            return Adjustment(reduce_by(result.yards_gained, self.DEFEND_RUN_REDUCTION))
        return Adjustment(result.yards_gained)

    def _prevent(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        yards = result.yards_gained
        if result.is_incomplete:
            return Adjustment(0)
        if yards > self.PREVENT_BIG_PLAY:
            if rng.random() < self.PREVENT_CAP_CHANCE:
                yards = rng.randint(*self.PREVENT_CAPPED_YARDS)
        elif 0 < yards <= self.PREVENT_UNDERNEATH:
            yards += rng.randint(*self.PREVENT_UNDERNEATH_YARDS)
        return Adjustment(yards)

    def _stack_the_box(self, result: PlayResult, call: PlayCall, rng: random.Random) -> Adjustment:
        if call.is_pass:
            if result.is_incomplete:
                return Adjustment(0)
            bonus = self.STACK_DEEP_YARDS if call.subtype.is_vertical else self.STACK_SHORT_YARDS
            return Adjustment(result.yards_gained + rng.randint(*bonus))
        yards = result.yards_gained
        if rng.random() < self.STACK_REDUCE_CHANCE:
            yards = max(self.STACK_FLOOR, reduce_by(yards, self.STACK_REDUCTION))
        return Adjustment(yards)
