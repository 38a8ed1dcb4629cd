"""Event types emitted while plays are simulated."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from scrimmage.core.models.game import Side

if TYPE_CHECKING:
    from scrimmage.core.models.game import GameState
    from scrimmage.core.models.play import PlayCall, PlayResult


@dataclass
class GameEvent:
    """Base class for all game events."""

    timestamp: datetime = field(default_factory=datetime.now)
    game_id: Optional[UUID] = None

    # Game context at time of event (after the play)
    quarter: int = 1
    time_remaining: str = "15:00"
    home_score: int = 0
    away_score: int = 0

    @classmethod
    def context(cls, state: "GameState", game_id: Optional[UUID] = None) -> dict:
        """Common keyword arguments describing ``state``."""
        return {
            "game_id": game_id,
            "quarter": state.quarter,
            "time_remaining": state.clock_display,
            "home_score": state.home_score,
            "away_score": state.away_score,
        }


@dataclass
class PlayCompletedEvent(GameEvent):
    """Fired when a play is completed."""

    call: Optional["PlayCall"] = None
    result: Optional["PlayResult"] = None

    # Situation before the snap
    down: int = 1
    yards_to_go: int = 10
    field_position: str = ""  # e.g. "Own 25"
    line_of_scrimmage: int = 25  # 0-100 yard line
    offense: Side = Side.AWAY


@dataclass
class ScoringEvent(GameEvent):
    """Fired when points are scored."""

    side: Side = Side.AWAY
    points: int = 0
    scoring_type: str = ""  # "TD", "FG", "Safety"
    scorer_id: Optional[UUID] = None
    description: str = ""


@dataclass
class TurnoverEvent(GameEvent):
    """Fired when the defense takes the ball (routine punts excluded)."""

    losing_side: Side = Side.AWAY
    gaining_side: Side = Side.HOME
    turnover_type: str = ""  # "INT", "FUMBLE", "DOWNS", "MISSED_FG", "BLOCKED_FG", "BLOCKED_PUNT"
    player_who_lost_id: Optional[UUID] = None
    player_who_gained_id: Optional[UUID] = None


@dataclass
class QuarterEndEvent(GameEvent):
    """Fired at end of a quarter or overtime period."""

    quarter_ended: int = 1


@dataclass
class GameEndEvent(GameEvent):
    """Fired when game ends."""

    winner: Optional[Side] = None
    final_home_score: int = 0
    final_away_score: int = 0
    is_overtime: bool = False
