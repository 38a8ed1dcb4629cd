"""Play resolvers."""

from scrimmage.simulation.resolvers.base import PlayResolver
from scrimmage.simulation.resolvers.statistical import StatisticalPlayResolver

__all__ = ["PlayResolver", "StatisticalPlayResolver"]
