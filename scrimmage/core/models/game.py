"""Game state model."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from scrimmage.core.models import field

QUARTER_SECONDS = 900  # 15:00
OVERTIME_SECONDS = 600  # 10:00
REGULATION_QUARTERS = 4
TIMEOUTS_PER_HALF = 3
FIRST_DOWN_DISTANCE = 10


class Side(Enum):
    """Which team, home or away."""

    HOME = "home"
    AWAY = "away"

    @property
    def other(self) -> "Side":
        """The opposing side."""
        return Side.AWAY if self is Side.HOME else Side.HOME


def ordinal(number: int) -> str:
    """Ordinal for a down or quarter number (1st, 2nd, 3rd, 4th...)."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


@dataclass(frozen=True)
class GameState:
    """
    Authoritative situation between plays.

    Immutable: every transition builds a new instance through ``replace``.
    ``field_position`` is relative to the team in possession (0 = own goal
    line, 100 = opponent goal line) and ``game_clock`` is seconds left in
    the current quarter.
    """

    home_score: int = 0
    away_score: int = 0
    quarter: int = 1
    game_clock: int = QUARTER_SECONDS
    down: int = 1
    yards_to_go: int = FIRST_DOWN_DISTANCE
    field_position: int = field.KICKOFF_RETURN_SPOT
    possession: Side = Side.AWAY
    home_timeouts: int = TIMEOUTS_PER_HALF
    away_timeouts: int = TIMEOUTS_PER_HALF
    in_progress: bool = True

    def __post_init__(self) -> None:
        """Fail fast on a state no caller should ever observe."""
        assert self.home_score >= 0 and self.away_score >= 0, f"negative score: {self!r}"
        assert self.quarter >= 1, f"invalid quarter {self.quarter}"
        assert self.game_clock >= 0, f"negative clock {self.game_clock}"
        assert 1 <= self.down <= 4, f"invalid down {self.down}"
        assert self.yards_to_go >= 1, f"invalid yards to go {self.yards_to_go}"
        assert (
            field.OWN_GOAL_LINE <= self.field_position <= field.OPPONENT_GOAL_LINE
        ), f"field position out of range: {self.field_position}"
        assert 0 <= self.home_timeouts <= TIMEOUTS_PER_HALF, f"invalid home timeouts {self.home_timeouts}"
        assert 0 <= self.away_timeouts <= TIMEOUTS_PER_HALF, f"invalid away timeouts {self.away_timeouts}"

    @classmethod
    def kickoff(cls, receiving: Side = Side.AWAY) -> "GameState":
        """
        Opening state of a game.

        Score 0-0, 1st quarter with 15:00 on the clock, the receiving team
        on 1st & 10 at its own 25, three timeouts each.
        """
        return cls(possession=receiving)

    def replace(self, **changes: Any) -> "GameState":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    # -------------------------------------------------------------------------
    # Situation
    # -------------------------------------------------------------------------

    @property
    def defense(self) -> Side:
        """Side currently on defense."""
        return self.possession.other

    @property
    def distance_to_goal(self) -> int:
        """Yards to the opponent's goal line."""
        return field.distance_to_goal(self.field_position)

    @property
    def is_goal_to_go(self) -> bool:
        """Check if the line to gain is the goal line."""
        return self.distance_to_goal <= self.yards_to_go

    @property
    def down_and_distance(self) -> str:
        """Display string like '1st & 10' or '3rd & Goal'."""
        distance = "Goal" if self.is_goal_to_go else str(self.yards_to_go)
        return f"{ordinal(self.down)} & {distance}"

    # -------------------------------------------------------------------------
    # Score and clock
    # -------------------------------------------------------------------------

    def score_for(self, side: Side) -> int:
        """Points for one side."""
        return self.home_score if side is Side.HOME else self.away_score

    def with_points(self, side: Side, points: int) -> "GameState":
        """Copy with ``points`` added to one side's score."""
        if side is Side.HOME:
            return self.replace(home_score=self.home_score + points)
        return self.replace(away_score=self.away_score + points)

    @property
    def possession_score(self) -> int:
        """Points for the team with the ball."""
        return self.score_for(self.possession)

    @property
    def defense_score(self) -> int:
        """Points for the team on defense."""
        return self.score_for(self.defense)

    @property
    def is_tied(self) -> bool:
        """Check if the score is level."""
        return self.home_score == self.away_score

    @property
    def is_game_over(self) -> bool:
        """Check if the game has been ended."""
        return not self.in_progress

    @property
    def is_overtime(self) -> bool:
        """Check if play has moved past regulation."""
        return self.quarter > REGULATION_QUARTERS

    @property
    def quarter_display(self) -> str:
        """Quarter label such as 'Q3' or 'OT2'."""
        if self.is_overtime:
            period = self.quarter - REGULATION_QUARTERS
            return "OT" if period == 1 else f"OT{period}"
        return f"Q{self.quarter}"

    @property
    def clock_display(self) -> str:
        """Clock as MM:SS."""
        minutes, seconds = divmod(self.game_clock, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def display(self) -> str:
        """One-line scoreboard and situation summary."""
        ball = self.possession.name.title()
        return (
            f"{self.quarter_display} {self.clock_display} | "
            f"Away {self.away_score} - Home {self.home_score} | "
            f"{ball} ball, {self.down_and_distance} at {field.describe(self.field_position)}"
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "home_score": self.home_score,
            "away_score": self.away_score,
            "quarter": self.quarter,
            "game_clock": self.game_clock,
            "down": self.down,
            "yards_to_go": self.yards_to_go,
            "field_position": self.field_position,
            "possession": self.possession.value,
            "home_timeouts": self.home_timeouts,
            "away_timeouts": self.away_timeouts,
            "in_progress": self.in_progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Create from dictionary."""
        return cls(
            home_score=data.get("home_score", 0),
            away_score=data.get("away_score", 0),
            quarter=data.get("quarter", 1),
            game_clock=data.get("game_clock", QUARTER_SECONDS),
            down=data.get("down", 1),
            yards_to_go=data.get("yards_to_go", FIRST_DOWN_DISTANCE),
            field_position=data.get("field_position", field.KICKOFF_RETURN_SPOT),
            possession=Side(data.get("possession", Side.AWAY.value)),
            home_timeouts=data.get("home_timeouts", TIMEOUTS_PER_HALF),
            away_timeouts=data.get("away_timeouts", TIMEOUTS_PER_HALF),
            in_progress=data.get("in_progress", True),
        )

    def __str__(self) -> str:
        return self.display
