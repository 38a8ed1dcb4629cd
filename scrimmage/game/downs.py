"""Down, distance and possession transitions."""

import logging

from scrimmage.core.models import field
from scrimmage.core.models.game import FIRST_DOWN_DISTANCE, GameState
from scrimmage.core.models.play import PlayResult

logger = logging.getLogger(__name__)

MAX_DOWNS = 4


def is_in_red_zone(state: GameState) -> bool:
    """Check if the offense is inside the opponent's 20."""
    return state.field_position >= field.RED_ZONE_START


def is_goal_to_go(state: GameState) -> bool:
    """Check if the line to gain is the goal line."""
    return state.distance_to_goal <= state.yards_to_go


def effective_yards_to_go(state: GameState) -> int:
    """Yards actually needed: the line to gain or the goal line, whichever is closer."""
    return min(state.yards_to_go, state.distance_to_goal)


def field_position_description(state: GameState) -> str:
    """Ball spot as "Own 25", "50" or "Opp 30"."""
    return field.describe(state.field_position)


class DownStateMachine:
    """
    Pure reducer from (state, result) to the next down and possession.

    Only touches score, down, distance, spot and possession. It never
    ends the game; that is the clock's job.
    """

    @classmethod
    def advance(cls, state: GameState, result: PlayResult) -> GameState:
        """
        Apply a play to down, distance, spot and possession.

        Args:
            state: Situation before the snap
            result: The final (post-defense) play result

        Returns:
            The next state; identical to ``state`` if the game is over
        """
        if not state.in_progress:
            return state

        if result.is_turnover:
            spot = field.clamp(state.field_position + result.yards_gained)
            new_state = cls._change_possession(state, field.flip(spot))
            logger.info("Turnover (%s): %s ball at %s", result.display,
                        new_state.possession.name.title(), field.describe(new_state.field_position))
        elif result.is_score:
            scoring_side = state.defense if result.is_safety else state.possession
            scored = state.with_points(scoring_side, result.points_scored)
            new_state = cls._change_possession(scored, field.KICKOFF_RETURN_SPOT)
            logger.info("%s score %d (%s): Away %d - Home %d", scoring_side.name.title(),
                        result.points_scored, result.display, new_state.away_score, new_state.home_score)
        else:
            new_state = cls._advance_downs(state, result.yards_gained)

        return cls._check(new_state)

    @staticmethod
    def _change_possession(state: GameState, field_position: int) -> GameState:
        return state.replace(
            possession=state.possession.other,
            field_position=field_position,
            down=1,
            yards_to_go=FIRST_DOWN_DISTANCE,
        )

    @classmethod
    def _advance_downs(cls, state: GameState, yards: int) -> GameState:
        spot = field.clamp(state.field_position + yards)
        if yards >= state.yards_to_go:
            return state.replace(down=1, yards_to_go=FIRST_DOWN_DISTANCE, field_position=spot)

        next_down = state.down + 1
        if next_down > MAX_DOWNS:
            new_state = cls._change_possession(state, field.flip(spot))
            logger.info("Turnover on downs: %s ball at %s",
                        new_state.possession.name.title(), field.describe(new_state.field_position))
            return new_state
        return state.replace(down=next_down, yards_to_go=state.yards_to_go - yards, field_position=spot)

    @staticmethod
    def _check(state: GameState) -> GameState:
        assert 1 <= state.down <= MAX_DOWNS, f"down escaped the machine: {state.down}"
        assert field.OWN_GOAL_LINE <= state.field_position <= field.OPPONENT_GOAL_LINE, (
            f"field position escaped the machine: {state.field_position}"
        )
        assert state.yards_to_go >= 1, f"yards to go escaped the machine: {state.yards_to_go}"
        return state
