"""Matchup advantage between an offensive and a defensive unit.

Every play archetype reduces its matchup to a single number with the same
formula; only the weights, scale and clamp bound differ:

    mean     = weighted mean of the offensive ratings
    matchup  = 50 + (mean - defense)          # 50 = even matchup
    modifier = (matchup + coaching - 50) / scale, clamped to +/- bound

A positive modifier favors the offense. With league-average ratings (50)
and league-average coordinators the modifier is exactly zero.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from scrimmage.core.attributes import DEFAULT_RATING

logger = logging.getLogger(__name__)

MAX_COACHING_BONUS = 4.0
COACHING_DIVISOR = 25.0


@dataclass(frozen=True)
class AdvantageProfile:
    """
    Tuning for one play archetype.

    ``weights`` maps an input role ("carrier", "line", "passer",
    "receiver") to its weight in the offensive mean.
    """

    name: str
    weights: dict[str, float] = field(default_factory=dict)
    scale: float = 2.5
    bound: float = 20.0

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"{self.name}: scale must be positive")
        if self.bound <= 0:
            raise ValueError(f"{self.name}: bound must be positive")
        if any(w <= 0 for w in self.weights.values()):
            raise ValueError(f"{self.name}: weights must be positive")

    def inputs(self, **ratings: float) -> list[tuple[float, float]]:
        """Pair each named rating with this profile's weight for it."""
        unknown = set(ratings) - set(self.weights)
        if unknown:
            raise ValueError(f"{self.name}: no weight for {sorted(unknown)}")
        return [(rating, self.weights[role]) for role, rating in ratings.items()]


# =============================================================================
# Archetypes
# =============================================================================

INSIDE_RUN = AdvantageProfile("inside_run", {"carrier": 1.0, "line": 1.0}, scale=2.5, bound=20)
POWER_RUN = AdvantageProfile("power_run", {"carrier": 1.0, "line": 1.3}, scale=2.5, bound=20)
PERIMETER_RUN = AdvantageProfile("perimeter_run", {"carrier": 1.3, "line": 1.0}, scale=2.5, bound=20)
QUARTERBACK_RUN = AdvantageProfile("quarterback_run", {"carrier": 1.2, "line": 1.0}, scale=2.5, bound=20)
GOAL_LINE_RUN = AdvantageProfile("goal_line_run", {"carrier": 1.0, "line": 1.3}, scale=3.0, bound=15)

SHORT_PASS = AdvantageProfile("short_pass", {"passer": 1.0, "receiver": 1.0}, scale=2.0, bound=25)
DOWNFIELD_PASS = AdvantageProfile("downfield_pass", {"passer": 1.3, "receiver": 1.0}, scale=2.0, bound=25)
SCREEN_PASS = AdvantageProfile("screen_pass", {"passer": 1.0, "receiver": 1.3}, scale=2.0, bound=25)


def coaching_bonus(coordinator_rating: Optional[float]) -> float:
    """
    Bonus a coordinator adds to a matchup, in [0, 4].

    An unknown coordinator counts as league average.
    """
    rating = DEFAULT_RATING if coordinator_rating is None else coordinator_rating
    return max(0.0, min(MAX_COACHING_BONUS, rating / COACHING_DIVISOR))


def coaching_edge(offense_rating: Optional[float], defense_rating: Optional[float]) -> float:
    """Offensive coordinator bonus net of the defensive coordinator's."""
    return coaching_bonus(offense_rating) - coaching_bonus(defense_rating)


def weighted_mean(inputs: Sequence[tuple[float, float]]) -> float:
    """Weighted mean of (rating, weight) pairs, 50 when there are none."""
    total_weight = sum(weight for _, weight in inputs)
    if total_weight <= 0:
        return float(DEFAULT_RATING)
    return sum(rating * weight for rating, weight in inputs) / total_weight


class AdvantageModel:
    """Pure functions turning ratings into a bounded advantage modifier."""

    @staticmethod
    def advantage(
        offense_inputs: Sequence[tuple[float, float]],
        defense_rating: float,
        coaching: float,
        profile: AdvantageProfile,
    ) -> float:
        """
        Compute the advantage modifier for one matchup.

        Args:
            offense_inputs: (rating, weight) pairs for the offensive unit
            defense_rating: The single defensive rating it is measured against
            coaching: Coaching edge added to the matchup (see ``coaching_edge``)
            profile: Archetype supplying scale and clamp bound

        Returns:
            Modifier in [-profile.bound, +profile.bound]; positive favors offense
        """
        offense = weighted_mean(offense_inputs)
        matchup = DEFAULT_RATING + (offense - defense_rating)
        raw = (matchup + coaching - DEFAULT_RATING) / profile.scale
        modifier = max(-profile.bound, min(profile.bound, raw))
        logger.debug(
            "%s advantage: offense=%.1f defense=%.1f coaching=%.2f -> %.2f",
            profile.name, offense, defense_rating, coaching, modifier,
        )
        return modifier

    @classmethod
    def for_ratings(
        cls,
        profile: AdvantageProfile,
        defense_rating: float,
        offensive_coordinator: Optional[float] = None,
        defensive_coordinator: Optional[float] = None,
        **ratings: float,
    ) -> float:
        """Convenience wrapper taking ratings by role name."""
        return cls.advantage(
            profile.inputs(**ratings),
            defense_rating,
            coaching_edge(offensive_coordinator, defensive_coordinator),
            profile,
        )
