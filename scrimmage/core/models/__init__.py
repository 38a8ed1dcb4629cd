"""Core game models."""

from scrimmage.core.models.breakdown import SimulationBreakdown
from scrimmage.core.models.field import FieldZone
from scrimmage.core.models.game import GameState, Side
from scrimmage.core.models.play import PlayCall, PlayCoaching, PlayParticipants, PlayResult
from scrimmage.core.models.player import Player, Roster

__all__ = [
    "FieldZone",
    "GameState",
    "PlayCall",
    "PlayCoaching",
    "PlayParticipants",
    "PlayResult",
    "Player",
    "Roster",
    "Side",
    "SimulationBreakdown",
]
