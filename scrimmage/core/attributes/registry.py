"""Position-aware rating lookup.

Rosters carry three generic rating slots per player. Which capability a
slot holds depends on the player's position, so every lookup goes through
the ``(position, capability) -> slot`` table below.
"""

from typing import Optional, Protocol, Sequence

from scrimmage.core.enums import Position

DEFAULT_RATING = 50
MIN_RATING = 0
MAX_RATING = 100

_QB = ("Accuracy", "Pass Strength", "Evasion")
_BACK = ("Rush Power", "Rush Speed", "Evasion")
_RECEIVER = ("Catching", "Route Running", "Speed")
_TIGHT_END = ("Catching", "Run Blocking", "Pass Blocking")
_OFFENSIVE_LINE = ("Run Blocking", "Pass Blocking", "Strength")
_DEFENSIVE_LINE = ("Pass Rush", "Run Defense", "Tackling")
_LINEBACKER = ("Tackling", "Coverage", "Run Defense")
_CORNER = ("Coverage", "Speed", "Tackling")
_SAFETY = ("Coverage", "Tackling", "Speed")
_KICKER = ("Leg Strength", "Accuracy", "Consistency")
_PUNTER = ("Punt Power", "Punt Accuracy", "Consistency")

POSITION_SLOT_NAMES: dict[Position, tuple[str, str, str]] = {
    Position.QB: _QB,
    Position.RB: _BACK,
    Position.FB: _BACK,
    Position.WR: _RECEIVER,
    Position.TE: _TIGHT_END,
    Position.C: _OFFENSIVE_LINE,
    Position.G: _OFFENSIVE_LINE,
    Position.T: _OFFENSIVE_LINE,
    Position.OL: _OFFENSIVE_LINE,
    Position.DE: _DEFENSIVE_LINE,
    Position.DT: _DEFENSIVE_LINE,
    Position.NT: _DEFENSIVE_LINE,
    Position.DL: _DEFENSIVE_LINE,
    Position.LB: _LINEBACKER,
    Position.MLB: _LINEBACKER,
    Position.OLB: _LINEBACKER,
    Position.ILB: _LINEBACKER,
    Position.CB: _CORNER,
    Position.S: _SAFETY,
    Position.FS: _SAFETY,
    Position.SS: _SAFETY,
    Position.K: _KICKER,
    Position.P: _PUNTER,
}

# Flattened (position, capability) -> slot index
SLOT_INDEX: dict[tuple[Position, str], int] = {
    (position, name): index
    for position, names in POSITION_SLOT_NAMES.items()
    for index, name in enumerate(names)
}


class Rated(Protocol):
    """Anything that exposes a position and three rating slots."""

    position: Position
    ratings: Sequence[Optional[int]]


def clamp_rating(value: float) -> int:
    """Clamp a raw value onto the 0-100 rating scale."""
    return int(max(MIN_RATING, min(MAX_RATING, round(value))))


class AttributeResolver:
    """
    Resolves named capabilities to ratings.

    Unknown positions, unknown capabilities and empty slots all resolve to
    the league-average rating instead of raising, so incomplete roster data
    never stops a simulation.
    """

    @staticmethod
    def slot_for(position: Optional[Position], attribute_name: str) -> Optional[int]:
        """Get the slot index holding ``attribute_name`` for ``position``."""
        if position is None:
            return None
        return SLOT_INDEX.get((position, attribute_name))

    @classmethod
    def rating(cls, position: Optional[Position], attribute_name: str, ratings: Sequence[Optional[int]] = ()) -> int:
        """
        Look up a rating by position and capability name.

        Args:
            position: The participant's position
            attribute_name: Capability name, e.g. "Accuracy" or "Run Blocking"
            ratings: The participant's three rating slots

        Returns:
            Rating in [0, 100], 50 when the combination is unknown
        """
        slot = cls.slot_for(position, attribute_name)
        if slot is None or slot >= len(ratings):
            return DEFAULT_RATING
        value = ratings[slot]
        if value is None:
            return DEFAULT_RATING
        return clamp_rating(value)

    @classmethod
    def for_player(cls, player: Optional[Rated], attribute_name: str) -> int:
        """Look up a capability on a player, tolerating a missing player."""
        if player is None:
            return DEFAULT_RATING
        return cls.rating(player.position, attribute_name, player.ratings)

    @classmethod
    def average(cls, players: Sequence[Rated], attribute_name: str) -> float:
        """Average a capability across a unit, 50 for an empty unit."""
        if not players:
            return float(DEFAULT_RATING)
        total = sum(cls.for_player(p, attribute_name) for p in players)
        return total / len(players)
