"""
Calibration runner.

Runs one call many times from a fixed situation and summarizes the
outcomes, so table changes can be checked against target numbers. Each
batch gets its own seeded generator and its own engine, which makes
batches independent units of work that can run in parallel.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from scrimmage.config import SimulationConfig, get_config, make_rng
from scrimmage.core.enums import DefensivePlay
from scrimmage.core.models.game import GameState
from scrimmage.core.models.play import PlayCall, PlayResult
from scrimmage.core.models.player import Roster

logger = logging.getLogger(__name__)

PERCENTILES = (10, 25, 50, 75, 90)
DEFAULT_BATCH_SIZE = 2_000


@dataclass(frozen=True)
class CalibrationRequest:
    """One batch of identical snaps."""

    offense_call: PlayCall
    defense_call: DefensivePlay
    offense: Roster
    defense: Roster
    state: GameState
    plays: int
    seed: int
    config: SimulationConfig


@dataclass
class CalibrationSummary:
    """Aggregate numbers for a batch of resolved plays."""

    label: str
    plays: int = 0

    mean_yards: float = 0.0
    median_yards: float = 0.0
    std_yards: float = 0.0
    percentiles: dict[int, float] = field(default_factory=dict)

    # Rates in [0, 1]
    score_rate: float = 0.0
    turnover_rate: float = 0.0
    first_down_rate: float = 0.0
    stop_clock_rate: float = 0.0
    incompletion_rate: float = 0.0
    sack_rate: float = 0.0
    loss_rate: float = 0.0
    explosive_rate: float = 0.0  # 20+ yards

    mean_seconds: float = 0.0

    @classmethod
    def from_results(cls, label: str, results: Sequence[PlayResult]) -> "CalibrationSummary":
        """Summarize a list of results."""
        summary = cls(label=label, plays=len(results))
        if not results:
            return summary

        yards = np.array([r.yards_gained for r in results])
        seconds = np.array([r.time_elapsed for r in results])

        def rate(flags) -> float:
            return float(np.mean(np.fromiter(flags, dtype=bool, count=len(results))))

        summary.mean_yards = float(np.mean(yards))
        summary.median_yards = float(np.median(yards))
        summary.std_yards = float(np.std(yards))
        summary.percentiles = {
            p: float(v) for p, v in zip(PERCENTILES, np.percentile(yards, PERCENTILES))
        }
        summary.score_rate = rate(r.is_score for r in results)
        summary.turnover_rate = rate(r.is_turnover for r in results)
        summary.first_down_rate = rate(r.is_first_down for r in results)
        summary.stop_clock_rate = rate(r.stop_clock for r in results)
        summary.incompletion_rate = rate(r.is_incomplete for r in results)
        summary.sack_rate = rate(r.is_sack for r in results)
        summary.loss_rate = float(np.mean(yards < 0))
        summary.explosive_rate = float(np.mean(yards >= 20))
        summary.mean_seconds = float(np.mean(seconds))
        return summary

    def as_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for display."""
        rows = [
            ("Plays", f"{self.plays:,}"),
            ("Mean yards", f"{self.mean_yards:.2f}"),
            ("Median yards", f"{self.median_yards:.1f}"),
            ("Std dev", f"{self.std_yards:.2f}"),
        ]
        rows.extend((f"P{p}", f"{v:.1f}") for p, v in self.percentiles.items())
        rows.extend([
            ("Score rate", f"{self.score_rate:.1%}"),
            ("Turnover rate", f"{self.turnover_rate:.1%}"),
            ("First down rate", f"{self.first_down_rate:.1%}"),
            ("Clock stopped", f"{self.stop_clock_rate:.1%}"),
            ("Incomplete", f"{self.incompletion_rate:.1%}"),
            ("Sacks", f"{self.sack_rate:.1%}"),
            ("Loss of yards", f"{self.loss_rate:.1%}"),
            ("20+ yards", f"{self.explosive_rate:.1%}"),
            ("Seconds per play", f"{self.mean_seconds:.1f}"),
        ])
        return rows


def simulate_batch(request: CalibrationRequest) -> list[PlayResult]:
    """
    Resolve the same snap ``request.plays`` times.

    Module-level so it can be shipped to worker processes.
    """
    # Imported here so worker processes only pay for it when used
    from scrimmage.simulation.engine import SimulationEngine

    engine = SimulationEngine(config=request.config)
    rng = make_rng(request.seed)
    return [
        engine.resolve_play(
            request.offense_call,
            request.defense_call,
            request.offense,
            request.defense,
            request.state,
            rng,
        )
        for _ in range(request.plays)
    ]


def run_calibration(
    offense_call: PlayCall,
    defense_call: DefensivePlay = DefensivePlay.BALANCED,
    offense: Optional[Roster] = None,
    defense: Optional[Roster] = None,
    state: Optional[GameState] = None,
    plays: int = 10_000,
    seed: Optional[int] = None,
    workers: int = 1,
    batch_size: int = DEFAULT_BATCH_SIZE,
    config: Optional[SimulationConfig] = None,
) -> CalibrationSummary:
    """
    Run a call many times and summarize it.

    Args:
        offense_call: The offensive call to repeat
        defense_call: The defensive scheme it runs against
        offense: Offensive roster (league average if None)
        defense: Defensive roster (league average if None)
        state: Situation for every snap (opening kickoff state if None)
        plays: Total snaps
        seed: Base seed; batch ``i`` uses ``seed + i``
        workers: Processes to spread batches over (1 = in-process)
        batch_size: Snaps per batch
        config: Settings for the engines (global configuration if None)

    Returns:
        Summary over all snaps
    """
    if plays < 1:
        raise ValueError("plays must be at least 1")
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    config = config or get_config()
    if seed is None:
        seed = config.seed if config.seed is not None else make_rng().randrange(2**31)
    if offense is None:
        offense = Roster.uniform("Offense")
    if defense is None:
        defense = Roster.uniform("Defense")
    if state is None:
        state = GameState.kickoff()

    requests = []
    remaining = plays
    while remaining > 0:
        size = min(batch_size, remaining)
        requests.append(CalibrationRequest(
            offense_call, defense_call, offense, defense, state, size, seed + len(requests), config,
        ))
        remaining -= size

    logger.info("Calibrating %s vs %s: %d plays in %d batches (workers=%d)",
                offense_call.display, defense_call.display, plays, len(requests), workers)

    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            batches = list(pool.map(simulate_batch, requests))
    else:
        batches = [simulate_batch(r) for r in requests]

    results = [result for batch in batches for result in batch]
    return CalibrationSummary.from_results(f"{offense_call.display} vs {defense_call.display}", results)
