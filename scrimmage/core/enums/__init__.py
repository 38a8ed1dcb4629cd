"""Game enumerations."""

from scrimmage.core.enums.plays import (
    DefensivePlay,
    PassPlay,
    PlayCategory,
    PlayOutcome,
    PlayType,
    RunPlay,
    SpecialTeamsPlay,
)
from scrimmage.core.enums.positions import (
    DEFENSIVE_LINE,
    LINEBACKERS,
    OFFENSIVE_LINE,
    SAFETIES,
    Position,
    PositionGroup,
)

__all__ = [
    "DEFENSIVE_LINE",
    "DefensivePlay",
    "LINEBACKERS",
    "OFFENSIVE_LINE",
    "PassPlay",
    "PlayCategory",
    "PlayOutcome",
    "PlayType",
    "Position",
    "PositionGroup",
    "RunPlay",
    "SAFETIES",
    "SpecialTeamsPlay",
]
