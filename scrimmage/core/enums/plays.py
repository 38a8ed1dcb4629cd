"""Play selection, defensive scheme and play outcome definitions."""

from enum import Enum, auto


class PlayCategory(Enum):
    """Top-level offensive play category."""

    RUN = auto()
    PASS = auto()
    SPECIAL_TEAMS = auto()


class RunPlay(Enum):
    """Designed running plays."""

    POWER = auto()  # Downhill, extra blockers at the point of attack
    INSIDE = auto()  # Interior zone/gap run
    OUTSIDE = auto()  # Perimeter run, outflank the defense
    JET_SWEEP = auto()  # Receiver in motion takes a quick handoff
    READ_OPTION = auto()  # QB reads an end man, gives or keeps
    QB_RUN = auto()  # Designed quarterback carry

    @property
    def is_perimeter(self) -> bool:
        """Check if the run attacks the edge of the formation."""
        return self in {RunPlay.OUTSIDE, RunPlay.JET_SWEEP}


class PassPlay(Enum):
    """Passing concepts, from desperation heave to screens."""

    HAIL_MARY = auto()
    DEEP = auto()  # 20+ air yards
    MEDIUM = auto()  # 10-20 air yards
    SHORT = auto()  # Inside 10 yards
    WR_SCREEN = auto()
    RB_SCREEN = auto()

    @property
    def is_screen(self) -> bool:
        """Check if this is a screen pass."""
        return self in {PassPlay.WR_SCREEN, PassPlay.RB_SCREEN}

    @property
    def is_vertical(self) -> bool:
        """Check if this pass attacks deep coverage."""
        return self in {PassPlay.HAIL_MARY, PassPlay.DEEP}


class SpecialTeamsPlay(Enum):
    """Kicking plays available from scrimmage."""

    FIELD_GOAL = auto()
    PUNT = auto()


class DefensivePlay(Enum):
    """Defensive calls that counter the offensive selection."""

    BALANCED = auto()
    BLITZ = auto()
    DEFEND_PASS = auto()
    DEFEND_RUN = auto()
    PREVENT = auto()
    STACK_THE_BOX = auto()

    @property
    def display(self) -> str:
        """Human-readable scheme name."""
        return self.name.replace("_", " ").title()


class PlayType(Enum):
    """Kind of play recorded on a result."""

    RUSH = auto()
    PASS = auto()
    PUNT = auto()
    FIELD_GOAL = auto()
    EXTRA_POINT = auto()
    KICKOFF = auto()
    KNEEL = auto()
    SPIKE = auto()


class PlayOutcome(Enum):
    """Descriptive outcome of a play."""

    # Passing outcomes
    COMPLETE = auto()
    INCOMPLETE = auto()
    INTERCEPTION = auto()
    SACK = auto()

    # Rushing outcomes
    RUSH = auto()
    FUMBLE_LOST = auto()

    # Scoring outcomes
    TOUCHDOWN = auto()
    FIELD_GOAL_GOOD = auto()
    FIELD_GOAL_MISSED = auto()
    FIELD_GOAL_BLOCKED = auto()
    SAFETY = auto()
    EXTRA_POINT_GOOD = auto()

    # Special teams
    PUNT_RESULT = auto()
    PUNT_BLOCKED = auto()
    TOUCHBACK = auto()

    # Clock management
    KNEEL = auto()
    SPIKE = auto()

    @property
    def is_turnover(self) -> bool:
        """Check if this outcome gives the ball to the defense by a takeaway."""
        return self in {
            PlayOutcome.INTERCEPTION,
            PlayOutcome.FUMBLE_LOST,
            PlayOutcome.PUNT_BLOCKED,
        }

    @property
    def points(self) -> int:
        """Base points for this outcome (0 if non-scoring)."""
        scoring_map = {
            PlayOutcome.TOUCHDOWN: 6,
            PlayOutcome.FIELD_GOAL_GOOD: 3,
            PlayOutcome.SAFETY: 2,
            PlayOutcome.EXTRA_POINT_GOOD: 1,
        }
        return scoring_map.get(self, 0)
