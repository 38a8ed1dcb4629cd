"""Canonical outcome tables and play constants.

These are the tuned values the statistical resolver runs on. Thresholds
are cumulative rolls out of 100; ranges are inclusive yards. Every number
here can be overridden from a tuning file (see ``scrimmage.simulation.tuning``)
without touching code.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from scrimmage.core.enums import PassPlay, RunPlay
from scrimmage.simulation.distribution import Bucket, BucketKind, OutcomeTable

LOSS = BucketKind.LOSS
NO_GAIN = BucketKind.NO_GAIN
INCOMPLETE = BucketKind.INCOMPLETE
SHORT = BucketKind.SHORT
MEDIUM = BucketKind.MEDIUM
LONG = BucketKind.LONG
BREAKAWAY = BucketKind.BREAKAWAY
SCORE = BucketKind.SCORE


# =============================================================================
# Run tables
# =============================================================================

INSIDE_RUN_TABLE = OutcomeTable.of("inside_run", [
    Bucket(LOSS, 12, -4, -1, shift=0.5, threshold_floor=4, threshold_ceiling=25,
           widen=-0.25, span_floor=2, span_ceiling=7),
    Bucket(NO_GAIN, 20, 0, 0, shift=1.0, threshold_floor=8, threshold_ceiling=35),
    Bucket(SHORT, 70, 1, 4, shift=1.0, threshold_floor=55, threshold_ceiling=85,
           widen=0.25, span_floor=3, span_ceiling=7),
    Bucket(MEDIUM, 90, 5, 9, shift=0.75, threshold_floor=80, threshold_ceiling=96,
           widen=0.33, span_floor=4, span_ceiling=9),
    Bucket(LONG, 98, 10, 17, shift=0.5, threshold_floor=92, threshold_ceiling=99,
           widen=0.5, span_floor=6, span_ceiling=14),
    Bucket(BREAKAWAY, 100, 18, 42, widen=1.0, span_floor=15, span_ceiling=45),
])

POWER_RUN_TABLE = OutcomeTable.of("power_run", [
    Bucket(LOSS, 8, -3, -1, shift=0.4, threshold_floor=3, threshold_ceiling=20,
           widen=-0.2, span_floor=2, span_ceiling=5),
    Bucket(NO_GAIN, 18, 0, 1, shift=0.8, threshold_floor=8, threshold_ceiling=32),
    Bucket(SHORT, 75, 2, 4, shift=0.8, threshold_floor=60, threshold_ceiling=88,
           widen=0.2, span_floor=2, span_ceiling=5),
    Bucket(MEDIUM, 92, 5, 8, shift=0.5, threshold_floor=84, threshold_ceiling=97,
           widen=0.25, span_floor=3, span_ceiling=7),
    Bucket(LONG, 100, 9, 14, widen=0.4, span_floor=4, span_ceiling=10),
])

OUTSIDE_RUN_TABLE = OutcomeTable.of("outside_run", [
    Bucket(LOSS, 18, -4, -2, shift=0.6, threshold_floor=8, threshold_ceiling=30,
           widen=-0.2, span_floor=2, span_ceiling=5),
    Bucket(NO_GAIN, 28, 0, 1, shift=0.9, threshold_floor=15, threshold_ceiling=42),
    Bucket(SHORT, 55, 2, 5, shift=1.0, threshold_floor=40, threshold_ceiling=70,
           widen=0.2, span_floor=3, span_ceiling=6),
    Bucket(MEDIUM, 78, 6, 11, shift=0.8, threshold_floor=65, threshold_ceiling=90,
           widen=0.3, span_floor=4, span_ceiling=9),
    Bucket(LONG, 92, 12, 19, shift=0.5, threshold_floor=84, threshold_ceiling=97,
           widen=0.4, span_floor=6, span_ceiling=12),
    Bucket(BREAKAWAY, 100, 20, 44, widen=1.0, span_floor=15, span_ceiling=40),
])

JET_SWEEP_TABLE = OutcomeTable.of("jet_sweep", [
    Bucket(LOSS, 12, -6, -3, shift=0.5, threshold_floor=5, threshold_ceiling=25,
           widen=-0.2, span_floor=3, span_ceiling=6),
    Bucket(NO_GAIN, 22, 0, 2, shift=0.8, threshold_floor=12, threshold_ceiling=36),
    Bucket(SHORT, 50, 3, 8, shift=1.0, threshold_floor=35, threshold_ceiling=65,
           widen=0.2, span_floor=4, span_ceiling=8),
    Bucket(MEDIUM, 75, 9, 16, shift=0.8, threshold_floor=62, threshold_ceiling=88,
           widen=0.3, span_floor=6, span_ceiling=11),
    Bucket(LONG, 88, 17, 26, shift=0.5, threshold_floor=80, threshold_ceiling=95,
           widen=0.4, span_floor=8, span_ceiling=13),
    Bucket(BREAKAWAY, 100, 27, 46, widen=1.0, span_floor=12, span_ceiling=30),
])

READ_OPTION_TABLE = OutcomeTable.of("read_option", [
    Bucket(LOSS, 10, -3, -1, shift=0.5, threshold_floor=4, threshold_ceiling=22,
           widen=-0.2, span_floor=2, span_ceiling=5),
    Bucket(NO_GAIN, 20, 0, 2, shift=0.8, threshold_floor=10, threshold_ceiling=34),
    Bucket(SHORT, 60, 3, 6, shift=1.0, threshold_floor=45, threshold_ceiling=75,
           widen=0.2, span_floor=3, span_ceiling=6),
    Bucket(MEDIUM, 82, 7, 12, shift=0.7, threshold_floor=70, threshold_ceiling=92,
           widen=0.3, span_floor=5, span_ceiling=9),
    Bucket(LONG, 96, 13, 20, shift=0.4, threshold_floor=90, threshold_ceiling=99,
           widen=0.4, span_floor=6, span_ceiling=11),
    Bucket(BREAKAWAY, 100, 21, 40, widen=1.0, span_floor=12, span_ceiling=30),
])

QB_RUN_TABLE = OutcomeTable.of("qb_run", [
    Bucket(LOSS, 8, -5, -2, shift=0.4, threshold_floor=3, threshold_ceiling=20,
           widen=-0.2, span_floor=3, span_ceiling=6),
    Bucket(NO_GAIN, 18, 0, 2, shift=0.8, threshold_floor=8, threshold_ceiling=32),
    Bucket(SHORT, 55, 3, 7, shift=1.0, threshold_floor=40, threshold_ceiling=70,
           widen=0.2, span_floor=4, span_ceiling=7),
    Bucket(MEDIUM, 78, 8, 13, shift=0.7, threshold_floor=66, threshold_ceiling=90,
           widen=0.3, span_floor=5, span_ceiling=9),
    Bucket(LONG, 92, 14, 21, shift=0.4, threshold_floor=85, threshold_ceiling=97,
           widen=0.4, span_floor=6, span_ceiling=11),
    Bucket(BREAKAWAY, 100, 22, 39, widen=1.0, span_floor=12, span_ceiling=28),
])

# Inside the 5: fewer buckets, lower ceiling, used for every run subtype
GOAL_LINE_TABLE = OutcomeTable.of("goal_line_run", [
    Bucket(LOSS, 15, -3, -1, shift=1.0, threshold_floor=2, threshold_ceiling=25,
           widen=-0.2, span_floor=2, span_ceiling=6),
    Bucket(NO_GAIN, 50, 0, 1, shift=1.5, threshold_floor=15, threshold_ceiling=60),
    Bucket(SHORT, 85, 2, 4, shift=0.5, threshold_floor=70, threshold_ceiling=95,
           widen=0.2, span_floor=2, span_ceiling=5),
    Bucket(LONG, 100, 5, 8, widen=0.33, span_floor=3, span_ceiling=8),
])


# =============================================================================
# Pass tables
# =============================================================================

SHORT_PASS_TABLE = OutcomeTable.of("short_pass", [
    Bucket(INCOMPLETE, 25, 0, 0, shift=0.6, threshold_floor=12, threshold_ceiling=40),
    Bucket(SHORT, 65, 2, 5, shift=0.8, threshold_floor=50, threshold_ceiling=80,
           widen=0.2, span_floor=3, span_ceiling=7),
    Bucket(MEDIUM, 88, 6, 10, shift=0.5, threshold_floor=78, threshold_ceiling=95,
           widen=0.3, span_floor=4, span_ceiling=9),
    Bucket(LONG, 100, 11, 22, widen=0.6, span_floor=8, span_ceiling=20),
])

MEDIUM_PASS_TABLE = OutcomeTable.of("medium_pass", [
    Bucket(INCOMPLETE, 40, 0, 0, shift=0.7, threshold_floor=25, threshold_ceiling=55),
    Bucket(SHORT, 72, 8, 12, shift=0.8, threshold_floor=58, threshold_ceiling=85,
           widen=0.2, span_floor=4, span_ceiling=8),
    Bucket(MEDIUM, 92, 13, 16, shift=0.5, threshold_floor=84, threshold_ceiling=97,
           widen=0.3, span_floor=3, span_ceiling=8),
    Bucket(LONG, 100, 17, 26, widen=0.6, span_floor=8, span_ceiling=18),
])

DEEP_PASS_TABLE = OutcomeTable.of("deep_pass", [
    Bucket(INCOMPLETE, 55, 0, 0, shift=0.6, threshold_floor=40, threshold_ceiling=70),
    Bucket(MEDIUM, 78, 18, 29, shift=0.7, threshold_floor=65, threshold_ceiling=90,
           widen=0.3, span_floor=9, span_ceiling=16),
    Bucket(LONG, 92, 30, 41, shift=0.5, threshold_floor=84, threshold_ceiling=97,
           widen=0.4, span_floor=9, span_ceiling=16),
    Bucket(BREAKAWAY, 100, 42, 61, widen=0.8, span_floor=14, span_ceiling=30),
])

WR_SCREEN_TABLE = OutcomeTable.of("wr_screen", [
    Bucket(INCOMPLETE, 8, 0, 0, shift=0.2, threshold_floor=4, threshold_ceiling=14),
    Bucket(LOSS, 18, -4, -2, shift=0.4, threshold_floor=10, threshold_ceiling=28,
           widen=-0.2, span_floor=2, span_ceiling=5),
    Bucket(SHORT, 32, 0, 3, shift=0.6, threshold_floor=22, threshold_ceiling=45,
           widen=0.1, span_floor=3, span_ceiling=5),
    Bucket(MEDIUM, 65, 4, 9, shift=0.8, threshold_floor=52, threshold_ceiling=78,
           widen=0.2, span_floor=4, span_ceiling=8),
    Bucket(LONG, 85, 10, 17, shift=0.5, threshold_floor=76, threshold_ceiling=93,
           widen=0.3, span_floor=6, span_ceiling=11),
    Bucket(BREAKAWAY, 100, 18, 37, widen=0.8, span_floor=14, span_ceiling=26),
])

RB_SCREEN_TABLE = OutcomeTable.of("rb_screen", [
    Bucket(INCOMPLETE, 6, 0, 0, shift=0.2, threshold_floor=3, threshold_ceiling=12),
    Bucket(LOSS, 12, -2, -1, shift=0.3, threshold_floor=7, threshold_ceiling=20,
           widen=-0.1, span_floor=1, span_ceiling=3),
    Bucket(SHORT, 28, 0, 4, shift=0.6, threshold_floor=18, threshold_ceiling=40,
           widen=0.1, span_floor=4, span_ceiling=6),
    Bucket(MEDIUM, 68, 5, 10, shift=0.8, threshold_floor=55, threshold_ceiling=80,
           widen=0.2, span_floor=5, span_ceiling=9),
    Bucket(LONG, 88, 11, 18, shift=0.5, threshold_floor=80, threshold_ceiling=95,
           widen=0.3, span_floor=6, span_ceiling=11),
    Bucket(BREAKAWAY, 100, 19, 34, widen=0.8, span_floor=12, span_ceiling=24),
])

HAIL_MARY_INCOMPLETE = 85
HAIL_MARY_CAUGHT = 97


def hail_mary_table(distance_to_goal: int) -> OutcomeTable:
    """
    Fixed-shape Hail Mary table for the current distance to goal.

    Mostly incomplete; a catch goes a quarter to three quarters of the way
    to the goal line; the rest are touchdowns.
    """
    distance = max(1, distance_to_goal)
    low = distance // 4
    high = max(low, low + distance // 2 - 1)
    return OutcomeTable.of("hail_mary", [
        Bucket(INCOMPLETE, HAIL_MARY_INCOMPLETE, 0, 0),
        Bucket(LONG, HAIL_MARY_CAUGHT, low, high),
        Bucket(SCORE, 100, distance, distance),
    ])


# =============================================================================
# Play constants
# =============================================================================

# 1-in-N turnover odds
FUMBLE_ODDS = {
    RunPlay.POWER: 50,
    RunPlay.INSIDE: 50,
    RunPlay.OUTSIDE: 50,
    RunPlay.JET_SWEEP: 50,
    RunPlay.READ_OPTION: 40,
    RunPlay.QB_RUN: 60,
}

INTERCEPTION_ODDS = {
    PassPlay.HAIL_MARY: 6,
    PassPlay.DEEP: 40,
    PassPlay.MEDIUM: 66,
    PassPlay.SHORT: 100,
    PassPlay.WR_SCREEN: 150,
    PassPlay.RB_SCREEN: 150,
}

# Seconds from snap to whistle
RUN_TIME = {
    RunPlay.POWER: (25, 40),
    RunPlay.INSIDE: (25, 45),
    RunPlay.OUTSIDE: (20, 45),
    RunPlay.JET_SWEEP: (15, 35),
    RunPlay.READ_OPTION: (20, 40),
    RunPlay.QB_RUN: (15, 45),
}

PASS_TIME = {
    PassPlay.HAIL_MARY: (8, 15),
    PassPlay.DEEP: (6, 15),
    PassPlay.MEDIUM: (5, 12),
    PassPlay.SHORT: (4, 11),
    PassPlay.WR_SCREEN: (6, 20),
    PassPlay.RB_SCREEN: (8, 24),
}

FIELD_GOAL_TIME = (4, 6)
PUNT_TIME = (12, 17)
BLOCKED_KICK_TIME = (3, 3)

# Chance a play ends with the clock stopped (out of bounds or incompletion)
RUN_STOP_CLOCK = {
    RunPlay.POWER: 0.05,
    RunPlay.INSIDE: 0.05,
    RunPlay.OUTSIDE: 0.15,
    RunPlay.JET_SWEEP: 0.15,
    RunPlay.READ_OPTION: 0.10,
    RunPlay.QB_RUN: 0.10,
}
COMPLETION_STOP_CLOCK = 0.40

# (longest kick in band, base success %, rating sensitivity)
FIELD_GOAL_BANDS = (
    (30, 88, 0.5),
    (40, 75, 0.75),
    (50, 58, 1.0),
    (60, 28, 1.25),
    (None, 12, 1.5),
)
KICKER_ACCURACY_FACTOR = 0.2  # Success % per accuracy point above average
FIELD_GOAL_PCT_BOUNDS = (1, 99)
FIELD_GOAL_BLOCK_ODDS = 100

# (distance to goal strictly greater than, punt range)
PUNT_BANDS = (
    (60, (40, 60)),
    (40, (35, 50)),
    (None, (25, 40)),
)
PUNTER_POWER_DIVISOR = 10  # Yards per 10 points of punt power over average
PUNT_BLOCK_ODDS = 200
BLOCKED_PUNT_YARDS = (-15, -5)


@dataclass(frozen=True)
class TableSet:
    """Everything the statistical resolver draws from, swappable as a unit."""

    run_tables: dict[RunPlay, OutcomeTable] = field(default_factory=lambda: {
        RunPlay.POWER: POWER_RUN_TABLE,
        RunPlay.INSIDE: INSIDE_RUN_TABLE,
        RunPlay.OUTSIDE: OUTSIDE_RUN_TABLE,
        RunPlay.JET_SWEEP: JET_SWEEP_TABLE,
        RunPlay.READ_OPTION: READ_OPTION_TABLE,
        RunPlay.QB_RUN: QB_RUN_TABLE,
    })
    pass_tables: dict[PassPlay, OutcomeTable] = field(default_factory=lambda: {
        PassPlay.DEEP: DEEP_PASS_TABLE,
        PassPlay.MEDIUM: MEDIUM_PASS_TABLE,
        PassPlay.SHORT: SHORT_PASS_TABLE,
        PassPlay.WR_SCREEN: WR_SCREEN_TABLE,
        PassPlay.RB_SCREEN: RB_SCREEN_TABLE,
    })
    goal_line_table: OutcomeTable = GOAL_LINE_TABLE
    fumble_odds: dict[RunPlay, int] = field(default_factory=lambda: dict(FUMBLE_ODDS))
    interception_odds: dict[PassPlay, int] = field(default_factory=lambda: dict(INTERCEPTION_ODDS))
    field_goal_block_odds: int = FIELD_GOAL_BLOCK_ODDS
    punt_block_odds: int = PUNT_BLOCK_ODDS

    def tables_by_name(self) -> dict[str, OutcomeTable]:
        """All shiftable tables keyed by their table name."""
        tables = {t.name: t for t in self.run_tables.values()}
        tables.update({t.name: t for t in self.pass_tables.values()})
        tables[self.goal_line_table.name] = self.goal_line_table
        return tables

    def with_table(self, table: OutcomeTable) -> "TableSet":
        """Copy with one named table swapped out."""
        if table.name == self.goal_line_table.name:
            return replace(self, goal_line_table=table)
        for play, current in self.run_tables.items():
            if current.name == table.name:
                return replace(self, run_tables={**self.run_tables, play: table})
        for play, current in self.pass_tables.items():
            if current.name == table.name:
                return replace(self, pass_tables={**self.pass_tables, play: table})
        raise ValueError(f"Unknown table: {table.name}")

    def table_for_run(self, run_play: RunPlay, goal_line: bool = False) -> OutcomeTable:
        """Table for a run subtype, with the goal-line override."""
        if goal_line:
            return self.goal_line_table
        return self.run_tables[run_play]

    def table_for_pass(self, pass_play: PassPlay, distance_to_goal: int) -> OutcomeTable:
        """Table for a pass subtype (Hail Mary is built per distance)."""
        if pass_play == PassPlay.HAIL_MARY:
            return hail_mary_table(distance_to_goal)
        return self.pass_tables[pass_play]


DEFAULT_TABLES = TableSet()


def field_goal_band(kick_distance: int) -> tuple[int, float]:
    """Base success percentage and rating sensitivity for a kick length."""
    for longest, base_pct, sensitivity in FIELD_GOAL_BANDS:
        if longest is None or kick_distance <= longest:
            return base_pct, sensitivity
    raise AssertionError("field goal bands must end with an open band")


def punt_range(distance_to_goal: int) -> tuple[int, int]:
    """Nominal punt distance range for the current field position."""
    for beyond, yards in PUNT_BANDS:
        if beyond is None or distance_to_goal > beyond:
            return yards
    raise AssertionError("punt bands must end with an open band")


def odds_hit(rng, odds: Optional[int]) -> bool:
    """True with probability 1-in-``odds`` (never for missing/zero odds)."""
    if not odds:
        return False
    return rng.randrange(odds) == 0
