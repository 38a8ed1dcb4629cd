"""Play call and result models."""

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from scrimmage.core.enums import (
    PassPlay,
    PlayCategory,
    PlayOutcome,
    PlayType,
    RunPlay,
    SpecialTeamsPlay,
)

if TYPE_CHECKING:
    from scrimmage.core.models.player import Player

PlaySubtype = Union[RunPlay, PassPlay, SpecialTeamsPlay]

SUBTYPES_BY_CATEGORY: dict[PlayCategory, type] = {
    PlayCategory.RUN: RunPlay,
    PlayCategory.PASS: PassPlay,
    PlayCategory.SPECIAL_TEAMS: SpecialTeamsPlay,
}

TOUCHDOWN_POINTS = 6
TOUCHDOWN_WITH_TRY_POINTS = 7  # Touchdown plus the automatic extra point
FIELD_GOAL_POINTS = 3
SAFETY_POINTS = 2
EXTRA_POINT_POINTS = 1
VALID_POINTS = frozenset({0, EXTRA_POINT_POINTS, SAFETY_POINTS, FIELD_GOAL_POINTS,
                          TOUCHDOWN_POINTS, TOUCHDOWN_WITH_TRY_POINTS})


@dataclass(frozen=True)
class PlayParticipants:
    """
    Players already chosen for a play.

    Any field left as ``None`` is filled from the rosters when the play
    is resolved. Line ratings are unit averages on the 0-100 scale.
    """

    quarterback: Optional["Player"] = None
    skill_player: Optional["Player"] = None  # Ball carrier or target
    defender: Optional["Player"] = None
    kicker: Optional["Player"] = None
    punter: Optional["Player"] = None
    offensive_line_rating: Optional[float] = None
    defensive_line_rating: Optional[float] = None


@dataclass(frozen=True)
class PlayCoaching:
    """Coordinator ratings in effect for a play (``None`` = league average)."""

    offensive_coordinator: Optional[int] = None
    defensive_coordinator: Optional[int] = None
    special_teams_coordinator: Optional[int] = None


@dataclass(frozen=True)
class PlayCall:
    """
    An offensive play selection (before execution).

    The category and subtype must agree: a RUN call carries a ``RunPlay``,
    a PASS call a ``PassPlay`` and a SPECIAL_TEAMS call a ``SpecialTeamsPlay``.
    """

    category: PlayCategory
    subtype: PlaySubtype
    participants: Optional[PlayParticipants] = None
    coaching: Optional[PlayCoaching] = None

    def __post_init__(self) -> None:
        expected = SUBTYPES_BY_CATEGORY[self.category]
        if not isinstance(self.subtype, expected):
            raise ValueError(
                f"{self.category.name} call needs a {expected.__name__}, got {self.subtype!r}"
            )

    @classmethod
    def run(cls, run_play: RunPlay, **extras: Any) -> "PlayCall":
        """Create a run play call."""
        return cls(PlayCategory.RUN, run_play, **extras)

    @classmethod
    def pass_play(cls, pass_play: PassPlay, **extras: Any) -> "PlayCall":
        """Create a pass play call."""
        return cls(PlayCategory.PASS, pass_play, **extras)

    @classmethod
    def field_goal(cls, **extras: Any) -> "PlayCall":
        """Create a field goal attempt."""
        return cls(PlayCategory.SPECIAL_TEAMS, SpecialTeamsPlay.FIELD_GOAL, **extras)

    @classmethod
    def punt(cls, **extras: Any) -> "PlayCall":
        """Create a punt."""
        return cls(PlayCategory.SPECIAL_TEAMS, SpecialTeamsPlay.PUNT, **extras)

    @property
    def is_run(self) -> bool:
        """Check if this is a run play."""
        return self.category == PlayCategory.RUN

    @property
    def is_pass(self) -> bool:
        """Check if this is a pass play."""
        return self.category == PlayCategory.PASS

    @property
    def is_special_teams(self) -> bool:
        """Check if this is a kicking play."""
        return self.category == PlayCategory.SPECIAL_TEAMS

    @property
    def display(self) -> str:
        """Human-readable play call description."""
        name = self.subtype.name.replace("_", " ").title()
        if self.is_run:
            return f"Run {name}"
        elif self.is_pass:
            return f"Pass {name}"
        return name

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (participants are not kept)."""
        return {
            "category": self.category.name,
            "subtype": self.subtype.name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayCall":
        """Create from dictionary."""
        category = PlayCategory[data["category"]]
        subtype = SUBTYPES_BY_CATEGORY[category][data["subtype"]]
        return cls(category, subtype)


@dataclass(frozen=True)
class PlayResult:
    """
    Complete outcome of a resolved play.

    Flags drive the down and clock state machines; attribution fields are
    informational only. ``__post_init__`` asserts the flag invariants, so a
    malformed result fails where it is built instead of corrupting state.
    """

    play_type: PlayType
    yards_gained: int = 0
    time_elapsed: int = 0  # Seconds the snap-to-whistle took

    is_turnover: bool = False
    is_score: bool = False
    is_first_down: bool = False
    is_safety: bool = False  # Scored by the defense
    is_sack: bool = False  # Kept when the sack also loses the ball
    stop_clock: bool = False
    clock_stop_reason: Optional[str] = None  # "incomplete", "out_of_bounds", "score", ...
    points_scored: int = 0

    outcome: Optional[PlayOutcome] = None
    description: str = ""

    # Attribution
    primary_player: Optional["Player"] = None  # Passer, rusher or kicker
    target: Optional["Player"] = None  # Receiver
    defender: Optional["Player"] = None  # Tackler, sacker or interceptor
    involved_players: tuple["Player", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        assert self.time_elapsed >= 0, f"negative elapsed time {self.time_elapsed}"
        assert self.points_scored in VALID_POINTS, f"invalid points {self.points_scored}"
        assert self.is_score == (self.points_scored > 0), (
            f"score flag {self.is_score} disagrees with points {self.points_scored}"
        )
        assert not self.is_score or self.stop_clock, "scoring play must stop the clock"
        assert not self.is_turnover or self.stop_clock, "turnover must stop the clock"
        assert not (self.is_score and self.is_turnover), "play cannot be both score and turnover"
        assert not (self.is_first_down and (self.is_score or self.is_turnover)), (
            "first down flag on a score or turnover"
        )
        assert not self.is_safety or (self.is_score and self.points_scored == SAFETY_POINTS), (
            "safety must score two points"
        )
        assert not self.is_sack or self.play_type == PlayType.PASS, "only a pass play can be a sack"

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def rush(cls, yards: int, time_elapsed: int, **kwargs: Any) -> "PlayResult":
        """Create a rushing result."""
        kwargs.setdefault("outcome", PlayOutcome.RUSH)
        return cls(PlayType.RUSH, yards_gained=yards, time_elapsed=time_elapsed, **kwargs)

    @classmethod
    def pass_play(cls, yards: int, time_elapsed: int, complete: bool = True, **kwargs: Any) -> "PlayResult":
        """Create a passing result. Incompletions always stop the clock."""
        if not complete:
            yards = 0
            kwargs["stop_clock"] = True
            kwargs.setdefault("clock_stop_reason", "incomplete")
        kwargs.setdefault("outcome", PlayOutcome.COMPLETE if complete else PlayOutcome.INCOMPLETE)
        return cls(PlayType.PASS, yards_gained=yards, time_elapsed=time_elapsed, **kwargs)

    @classmethod
    def turnover(
        cls,
        play_type: PlayType,
        yards: int,
        time_elapsed: int,
        outcome: Optional[PlayOutcome] = None,
        **kwargs: Any,
    ) -> "PlayResult":
        """Create a result where the defense takes the ball."""
        kwargs.setdefault("clock_stop_reason", "turnover")
        return cls(
            play_type,
            yards_gained=yards,
            time_elapsed=time_elapsed,
            is_turnover=True,
            stop_clock=True,
            outcome=outcome,
            **kwargs,
        )

    @classmethod
    def touchdown(
        cls,
        play_type: PlayType,
        yards: int,
        time_elapsed: int,
        points: int = TOUCHDOWN_WITH_TRY_POINTS,
        **kwargs: Any,
    ) -> "PlayResult":
        """Create an offensive touchdown (points include the try by default)."""
        kwargs.setdefault("clock_stop_reason", "score")
        return cls(
            play_type,
            yards_gained=yards,
            time_elapsed=time_elapsed,
            is_score=True,
            stop_clock=True,
            points_scored=points,
            outcome=PlayOutcome.TOUCHDOWN,
            **kwargs,
        )

    @classmethod
    def field_goal(cls, made: bool, time_elapsed: int, **kwargs: Any) -> "PlayResult":
        """
        Create a field goal result.

        A miss hands the ball to the defense at the spot, so it is flagged
        as a turnover.
        """
        if made:
            kwargs.setdefault("clock_stop_reason", "score")
            return cls(
                PlayType.FIELD_GOAL,
                time_elapsed=time_elapsed,
                is_score=True,
                stop_clock=True,
                points_scored=FIELD_GOAL_POINTS,
                outcome=PlayOutcome.FIELD_GOAL_GOOD,
                **kwargs,
            )
        kwargs.setdefault("outcome", PlayOutcome.FIELD_GOAL_MISSED)
        kwargs.setdefault("clock_stop_reason", "turnover")
        return cls(
            PlayType.FIELD_GOAL,
            time_elapsed=time_elapsed,
            is_turnover=True,
            stop_clock=True,
            **kwargs,
        )

    @classmethod
    def extra_point(cls, made: bool, time_elapsed: int = 5, **kwargs: Any) -> "PlayResult":
        """Create an extra point result."""
        kwargs.setdefault("clock_stop_reason", "kick")
        return cls(
            PlayType.EXTRA_POINT,
            time_elapsed=time_elapsed,
            is_score=made,
            stop_clock=True,
            points_scored=EXTRA_POINT_POINTS if made else 0,
            outcome=PlayOutcome.EXTRA_POINT_GOOD if made else None,
            **kwargs,
        )

    @classmethod
    def safety(cls, play_type: PlayType, yards: int, time_elapsed: int, **kwargs: Any) -> "PlayResult":
        """Create a safety (two points for the defense)."""
        kwargs.setdefault("clock_stop_reason", "safety")
        return cls(
            play_type,
            yards_gained=yards,
            time_elapsed=time_elapsed,
            is_score=True,
            is_safety=True,
            stop_clock=True,
            points_scored=SAFETY_POINTS,
            outcome=PlayOutcome.SAFETY,
            **kwargs,
        )

    @classmethod
    def kneel(cls, time_elapsed: int = 2, **kwargs: Any) -> "PlayResult":
        """Quarterback kneel: lose a yard, let the clock run."""
        kwargs.setdefault("description", "QB kneels")
        return cls(PlayType.KNEEL, yards_gained=-1, time_elapsed=time_elapsed,
                   outcome=PlayOutcome.KNEEL, **kwargs)

    @classmethod
    def spike(cls, time_elapsed: int = 1, **kwargs: Any) -> "PlayResult":
        """Spike to stop the clock."""
        kwargs.setdefault("description", "QB spikes the ball")
        return cls(PlayType.SPIKE, time_elapsed=time_elapsed, stop_clock=True,
                   clock_stop_reason="spike", outcome=PlayOutcome.SPIKE, **kwargs)

    def replace(self, **changes: Any) -> "PlayResult":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    @property
    def is_incomplete(self) -> bool:
        """Check if this was an incomplete pass."""
        return self.outcome == PlayOutcome.INCOMPLETE

    @property
    def is_special_teams(self) -> bool:
        """Check if this was a kicking play."""
        return self.play_type in {
            PlayType.PUNT,
            PlayType.FIELD_GOAL,
            PlayType.EXTRA_POINT,
            PlayType.KICKOFF,
        }

    @property
    def display(self) -> str:
        """Human-readable play result."""
        if self.description:
            return self.description
        if self.outcome == PlayOutcome.INCOMPLETE:
            return "Pass incomplete"
        if self.is_safety:
            return "Safety"
        if self.is_score:
            return f"{self.play_type.name.replace('_', ' ').title()}, {self.points_scored} points"
        if self.is_turnover:
            label = self.outcome.name.replace("_", " ").title() if self.outcome else "Turnover"
            return label
        if self.yards_gained > 0:
            return f"Gain of {self.yards_gained}"
        elif self.yards_gained < 0:
            return f"Loss of {-self.yards_gained}"
        return "No gain"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "play_type": self.play_type.name,
            "yards_gained": self.yards_gained,
            "time_elapsed": self.time_elapsed,
            "is_turnover": self.is_turnover,
            "is_score": self.is_score,
            "is_first_down": self.is_first_down,
            "is_safety": self.is_safety,
            "is_sack": self.is_sack,
            "stop_clock": self.stop_clock,
            "clock_stop_reason": self.clock_stop_reason,
            "points_scored": self.points_scored,
            "outcome": self.outcome.name if self.outcome else None,
            "description": self.description,
            "primary_player": str(self.primary_player.id) if self.primary_player else None,
            "target": str(self.target.id) if self.target else None,
            "defender": str(self.defender.id) if self.defender else None,
        }
