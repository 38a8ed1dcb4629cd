"""Game clock and period transitions."""

import logging

from scrimmage.core.models.game import (
    OVERTIME_SECONDS,
    QUARTER_SECONDS,
    REGULATION_QUARTERS,
    GameState,
)
from scrimmage.core.models.play import PlayResult

logger = logging.getLogger(__name__)

BETWEEN_PLAY_SECONDS = 25  # Runoff before the next snap while the clock runs


def format_clock(seconds: int) -> str:
    """Seconds as MM:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class ClockStateMachine:
    """
    Pure reducer for the game clock plus period bookkeeping.

    ``tick`` only ever moves the clock toward zero; crossing into the next
    period or ending the game are separate, explicit steps.
    """

    def __init__(
        self,
        between_play_seconds: int = BETWEEN_PLAY_SECONDS,
        quarter_seconds: int = QUARTER_SECONDS,
        overtime_seconds: int = OVERTIME_SECONDS,
    ):
        self.between_play_seconds = between_play_seconds
        self.quarter_seconds = quarter_seconds
        self.overtime_seconds = overtime_seconds

    def elapsed(self, result: PlayResult) -> int:
        """Seconds a play takes off the clock, including the runoff to the next snap."""
        if result.stop_clock:
            return result.time_elapsed
        return result.time_elapsed + self.between_play_seconds

    def tick(self, state: GameState, result: PlayResult) -> GameState:
        """Run the clock for one play; never below zero."""
        if not state.in_progress:
            return state
        clock = max(0, state.game_clock - self.elapsed(result))
        new_state = state.replace(game_clock=clock)
        assert 0 <= new_state.game_clock <= state.game_clock, "clock ran backwards"
        return new_state

    @staticmethod
    def quarter_ended(state: GameState) -> bool:
        """Check if the current period has run out."""
        return state.game_clock <= 0

    def period_length(self, quarter: int) -> int:
        """Clock for a period: regulation quarter or overtime."""
        return self.quarter_seconds if quarter <= REGULATION_QUARTERS else self.overtime_seconds

    def start_next_quarter(self, state: GameState) -> GameState:
        """Move to the next period with a full clock."""
        quarter = state.quarter + 1
        new_state = state.replace(quarter=quarter, game_clock=self.period_length(quarter))
        logger.info("Start of %s (Away %d - Home %d)", new_state.quarter_display,
                    new_state.away_score, new_state.home_score)
        return new_state

    @staticmethod
    def should_end(state: GameState) -> bool:
        """
        Check if the game is decided.

        True once a period has expired with the score unequal. A tie at
        the end of regulation or of an overtime period plays on.
        """
        return state.game_clock <= 0 and not state.is_tied

    @staticmethod
    def end_game(state: GameState) -> GameState:
        """Mark the game finished."""
        logger.info("Final: Away %d - Home %d", state.away_score, state.home_score)
        return state.replace(in_progress=False)

    def quarter_progress(self, state: GameState) -> float:
        """Fraction of the current period already played (0.0-1.0)."""
        length = self.period_length(state.quarter)
        return min(1.0, max(0.0, (length - state.game_clock) / length))
