"""Game state machines."""

from scrimmage.game.clock import ClockStateMachine, format_clock
from scrimmage.game.downs import (
    DownStateMachine,
    effective_yards_to_go,
    field_position_description,
    is_goal_to_go,
    is_in_red_zone,
)

__all__ = [
    "ClockStateMachine",
    "DownStateMachine",
    "effective_yards_to_go",
    "field_position_description",
    "format_clock",
    "is_goal_to_go",
    "is_in_red_zone",
]
