"""Simulation events."""

from scrimmage.events.bus import EventBus
from scrimmage.events.types import (
    GameEndEvent,
    GameEvent,
    PlayCompletedEvent,
    QuarterEndEvent,
    ScoringEvent,
    TurnoverEvent,
)

__all__ = [
    "EventBus",
    "GameEndEvent",
    "GameEvent",
    "PlayCompletedEvent",
    "QuarterEndEvent",
    "ScoringEvent",
    "TurnoverEvent",
]
