"""Player and roster models consumed by the play resolver."""

from dataclasses import dataclass, field
from typing import Iterable, Optional
from uuid import UUID, uuid4

from scrimmage.core.attributes import DEFAULT_RATING, POSITION_SLOT_NAMES, AttributeResolver
from scrimmage.core.enums import Position


# Players per position in a generic lineup (see Roster.uniform)
STANDARD_LINEUP = {
    Position.QB: 2,
    Position.RB: 2,
    Position.FB: 1,
    Position.WR: 4,
    Position.TE: 2,
    Position.C: 1,
    Position.G: 2,
    Position.T: 2,
    Position.DE: 2,
    Position.DT: 2,
    Position.MLB: 1,
    Position.OLB: 2,
    Position.CB: 3,
    Position.FS: 1,
    Position.SS: 1,
    Position.K: 1,
    Position.P: 1,
}


@dataclass
class Player:
    """
    A rostered player as seen by the simulation.

    Ratings live in three generic slots whose meaning depends on the
    position (see ``POSITION_SLOT_NAMES``). Player generation happens
    elsewhere; this model only exposes lookups.
    """

    id: UUID = field(default_factory=uuid4)
    first_name: str = ""
    last_name: str = ""
    position: Position = Position.QB
    ratings: list[Optional[int]] = field(default_factory=lambda: [DEFAULT_RATING] * 3)
    jersey_number: int = 0

    @classmethod
    def with_ratings(
        cls,
        position: Position,
        name: str = "",
        **named: int,
    ) -> "Player":
        """
        Create a player from capability names.

        Keyword names use underscores for spaces (``run_blocking=70``).
        Capabilities the position does not carry are ignored.
        """
        slots: list[Optional[int]] = [DEFAULT_RATING] * 3
        for key, value in named.items():
            slot = AttributeResolver.slot_for(position, key.replace("_", " ").title())
            if slot is not None:
                slots[slot] = value
        first, _, last = name.partition(" ")
        return cls(first_name=first, last_name=last, position=position, ratings=slots)

    @property
    def full_name(self) -> str:
        """Full name of the player."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        """Short display name, e.g. 'T. Brady'."""
        if self.first_name and self.last_name:
            return f"{self.first_name[0]}. {self.last_name}"
        return self.full_name or self.position.value

    @property
    def overall(self) -> int:
        """Simple overall: mean of the slots the position defines."""
        known = [r for r in self.ratings[:3] if r is not None]
        if not known:
            return DEFAULT_RATING
        return round(sum(known) / len(known))

    def rating(self, attribute_name: str) -> int:
        """Get a named capability rating for this player."""
        return AttributeResolver.for_player(self, attribute_name)

    def capabilities(self) -> dict[str, int]:
        """Map of capability name to rating for this player's position."""
        names = POSITION_SLOT_NAMES.get(self.position, ())
        return {name: self.rating(name) for name in names}

    def __str__(self) -> str:
        return f"{self.position.value} {self.display_name}"


@dataclass
class Roster:
    """
    The players and coaching ratings one side brings to a play.

    Coordinator ratings are on the same 0-100 scale as player ratings;
    ``None`` means unknown and is treated as league average.
    """

    name: str = ""
    players: dict[UUID, Player] = field(default_factory=dict)
    offensive_coordinator: Optional[int] = None
    defensive_coordinator: Optional[int] = None
    special_teams_coordinator: Optional[int] = None

    @classmethod
    def from_players(cls, players: Iterable[Player], name: str = "", **coaching: Optional[int]) -> "Roster":
        """Build a roster from a list of players."""
        roster = cls(name=name, **coaching)
        for player in players:
            roster.add_player(player)
        return roster

    @classmethod
    def uniform(cls, name: str = "", rating: int = DEFAULT_RATING, **coaching: Optional[int]) -> "Roster":
        """
        A full lineup where every slot of every player is ``rating``.

        Useful for calibration runs and tests that need even matchups.
        """
        players = []
        for position, count in STANDARD_LINEUP.items():
            for number in range(1, count + 1):
                players.append(Player(
                    first_name=position.value,
                    last_name=str(number),
                    position=position,
                    ratings=[rating] * 3,
                ))
        return cls.from_players(players, name=name, **coaching)

    def add_player(self, player: Player) -> None:
        """Add a player to the roster."""
        self.players[player.id] = player

    def remove_player(self, player_id: UUID) -> Optional[Player]:
        """Remove a player from the roster."""
        return self.players.pop(player_id, None)

    def get_player(self, player_id: UUID) -> Optional[Player]:
        """Get a player by ID."""
        return self.players.get(player_id)

    def get_players_in(self, positions: Iterable[Position]) -> list[Player]:
        """Get all players at any of the given positions."""
        wanted = set(positions)
        return [p for p in self.players.values() if p.position in wanted]

    def ranked(self, positions: Iterable[Position], attribute_name: Optional[str] = None) -> list[Player]:
        """
        Players at the given positions, best first.

        Ranks by ``attribute_name`` when given, otherwise by overall.
        """
        players = self.get_players_in(positions)
        if attribute_name is None:
            return sorted(players, key=lambda p: p.overall, reverse=True)
        return sorted(players, key=lambda p: p.rating(attribute_name), reverse=True)

    def unit_rating(self, positions: Iterable[Position], attribute_name: str) -> float:
        """Average of a capability across a position unit (50 if nobody plays it)."""
        return AttributeResolver.average(self.get_players_in(positions), attribute_name)

    def __len__(self) -> int:
        return len(self.players)
