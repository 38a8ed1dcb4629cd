"""Play simulation."""

from scrimmage.simulation.defense import DefensiveModifier
from scrimmage.simulation.engine import PlayReport, SimulationEngine
from scrimmage.simulation.resolvers import PlayResolver, StatisticalPlayResolver

__all__ = [
    "DefensiveModifier",
    "PlayReport",
    "PlayResolver",
    "SimulationEngine",
    "StatisticalPlayResolver",
]
