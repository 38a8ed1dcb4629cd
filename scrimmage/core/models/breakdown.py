"""Step-by-step record of how a play outcome was computed."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class SimulationBreakdown:
    """
    Ordered trace of the calculations behind one play.

    Resolvers append sections and calculation lines as they go. Every line
    is also sent to the module logger at DEBUG level, so a breakdown is
    useful both attached to a single play and in aggregate logs.
    """

    lines: list[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        """Record a free-form line."""
        self.lines.append(message)
        logger.debug(message)

    def section(self, name: str) -> None:
        """Start a new titled section."""
        if self.lines:
            self.lines.append("")
        self.add(f"--- {name} ---")

    def calculation(self, description: str, inputs: dict[str, Any], result: Any) -> None:
        """Record a calculation with its inputs and result."""
        args = ", ".join(f"{key}: {_fmt(value)}" for key, value in inputs.items())
        self.add(f"{description} ({args}) -> {_fmt(result)}")

    @property
    def has_lines(self) -> bool:
        """Check if anything has been recorded."""
        return bool(self.lines)

    def format(self) -> str:
        """All lines as one block of text."""
        return "\n".join(self.lines)

    def __str__(self) -> str:
        return self.format()


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)
