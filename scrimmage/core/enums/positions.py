"""Position definitions for football players."""

from enum import Enum, auto
from typing import Optional


class PositionGroup(Enum):
    """High-level position groupings."""

    OFFENSE = auto()
    DEFENSE = auto()
    SPECIAL_TEAMS = auto()


class Position(Enum):
    """Individual player positions."""

    # Offense - Skill positions
    QB = "QB"  # Quarterback
    RB = "RB"  # Running Back
    FB = "FB"  # Fullback
    WR = "WR"  # Wide Receiver
    TE = "TE"  # Tight End

    # Offense - Line
    C = "C"  # Center
    G = "G"  # Guard
    T = "T"  # Tackle
    OL = "OL"  # Generic lineman

    # Defense - Line
    DE = "DE"  # Defensive End
    DT = "DT"  # Defensive Tackle
    NT = "NT"  # Nose Tackle
    DL = "DL"  # Generic lineman

    # Defense - Linebackers
    LB = "LB"
    MLB = "MLB"  # Middle Linebacker
    OLB = "OLB"  # Outside Linebacker
    ILB = "ILB"  # Inside Linebacker

    # Defense - Secondary
    CB = "CB"  # Cornerback
    S = "S"  # Safety
    FS = "FS"  # Free Safety
    SS = "SS"  # Strong Safety

    # Special Teams
    K = "K"  # Kicker
    P = "P"  # Punter

    @property
    def group(self) -> PositionGroup:
        """Get the position group for this position."""
        if self in SPECIALISTS:
            return PositionGroup.SPECIAL_TEAMS
        if self in OFFENSIVE_LINE or self in {
            Position.QB,
            Position.RB,
            Position.FB,
            Position.WR,
            Position.TE,
        }:
            return PositionGroup.OFFENSE
        return PositionGroup.DEFENSE

    @classmethod
    def parse(cls, value: str) -> Optional["Position"]:
        """Look up a position by its abbreviation, ignoring case."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


OFFENSIVE_LINE = frozenset({Position.C, Position.G, Position.T, Position.OL})
DEFENSIVE_LINE = frozenset({Position.DE, Position.DT, Position.NT, Position.DL})
LINEBACKERS = frozenset({Position.LB, Position.MLB, Position.OLB, Position.ILB})
SAFETIES = frozenset({Position.S, Position.FS, Position.SS})
SPECIALISTS = frozenset({Position.K, Position.P})
