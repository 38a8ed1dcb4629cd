"""Base interface for play resolution."""

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from scrimmage.core.models.breakdown import SimulationBreakdown
    from scrimmage.core.models.game import GameState
    from scrimmage.core.models.play import PlayCall, PlayResult
    from scrimmage.core.models.player import Roster


class PlayResolver(ABC):
    """
    Protocol for play resolution strategies.

    A resolver turns an offensive call into a PlayResult before the
    defensive scheme is applied. Implementations must only draw randomness
    from the generator they are handed, so a play is reproducible from a
    seed and independent games never share state.
    """

    @abstractmethod
    def resolve(
        self,
        call: "PlayCall",
        offense: "Roster",
        defense: "Roster",
        state: "GameState",
        rng: random.Random,
        breakdown: Optional["SimulationBreakdown"] = None,
    ) -> "PlayResult":
        """
        Simulate a single play and return the result.

        Args:
            call: The play called by the offense
            offense: Roster with the ball
            defense: Roster on defense
            state: Situation before the snap (read-only)
            rng: Random source for every draw on this play
            breakdown: Optional trace to append calculation steps to

        Returns:
            PlayResult with yards, time, flags and attribution
        """
        ...
