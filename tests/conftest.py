"""Shared pytest fixtures for scrimmage tests."""

import random

import pytest

from scrimmage.config import SimulationConfig, reset_config, set_config
from scrimmage.core.enums import Position
from scrimmage.core.models.game import GameState, Side
from scrimmage.core.models.play import PlayResult
from scrimmage.core.models.player import Player, Roster


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config():
    """Every test sees default settings, whatever the environment says."""
    set_config(SimulationConfig(
        seed=None,
        log_level="WARNING",
        tuning_file=None,
        automatic_extra_point=True,
        record_breakdown=False,
    ))
    yield
    reset_config()


@pytest.fixture
def rng() -> random.Random:
    """Seeded generator so tests are reproducible."""
    return random.Random(20240917)


# =============================================================================
# Player Fixtures
# =============================================================================


@pytest.fixture
def qb_player() -> Player:
    """Create a test quarterback."""
    return Player.with_ratings(Position.QB, "Tom Brady", accuracy=90, pass_strength=80, evasion=40)


@pytest.fixture
def rb_player() -> Player:
    """Create a test running back."""
    return Player.with_ratings(Position.RB, "Derrick Henry", rush_power=95, rush_speed=80, evasion=70)


@pytest.fixture
def wr_player() -> Player:
    """Create a test wide receiver."""
    return Player.with_ratings(Position.WR, "Tyreek Hill", catching=85, route_running=80, speed=99)


@pytest.fixture
def cb_player() -> Player:
    """Create a test cornerback."""
    return Player.with_ratings(Position.CB, "Sauce Gardner", coverage=92, speed=90, tackling=70)


@pytest.fixture
def kicker() -> Player:
    """Create a test kicker."""
    return Player.with_ratings(Position.K, "Justin Tucker", leg_strength=90, accuracy=95, consistency=90)


# =============================================================================
# Roster Fixtures
# =============================================================================


@pytest.fixture
def average_offense() -> Roster:
    """Full roster of league-average players."""
    return Roster.uniform("Offense")


@pytest.fixture
def average_defense() -> Roster:
    """Full roster of league-average players."""
    return Roster.uniform("Defense")


@pytest.fixture
def star_offense() -> Roster:
    """Full roster rated 90 with a strong coordinator."""
    return Roster.uniform("Stars", 90, offensive_coordinator=90)


@pytest.fixture
def weak_defense() -> Roster:
    """Full roster rated 20 with a poor coordinator."""
    return Roster.uniform("Weak", 20, defensive_coordinator=10)


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def kickoff_state() -> GameState:
    """Opening state: Away ball, 1st & 10 at own 25."""
    return GameState.kickoff()


@pytest.fixture
def midfield_state() -> GameState:
    """Home ball, 2nd & 7 at midfield in the 2nd quarter."""
    return GameState(
        home_score=7,
        away_score=3,
        quarter=2,
        game_clock=420,
        down=2,
        yards_to_go=7,
        field_position=50,
        possession=Side.HOME,
    )


@pytest.fixture
def short_run() -> PlayResult:
    """A 4-yard run that keeps the clock running."""
    return PlayResult.rush(4, 30)
