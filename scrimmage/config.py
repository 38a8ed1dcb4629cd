"""
Simulation configuration.

Controls seeding, logging, the tuning file and a few rule knobs.
All settings can be overridden via environment variables.
"""

import logging
import os
import random
from dataclasses import dataclass, field
from typing import Optional


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class SimulationConfig:
    """Configuration for the play simulation core."""

    # Seed for generators built with make_rng() (None = nondeterministic)
    seed: Optional[int] = field(default_factory=lambda: _env_int("SCRIMMAGE_SEED"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("SCRIMMAGE_LOG_LEVEL", "WARNING"))

    # JSON file overriding outcome tables and turnover odds
    tuning_file: Optional[str] = field(default_factory=lambda: os.getenv("SCRIMMAGE_TUNING_FILE"))

    # Touchdowns score 7 (automatic try) instead of 6
    automatic_extra_point: bool = field(
        default_factory=lambda: _env_flag("SCRIMMAGE_AUTO_EXTRA_POINT", "true")
    )

    # Attach a calculation breakdown to every resolved play
    record_breakdown: bool = field(
        default_factory=lambda: _env_flag("SCRIMMAGE_BREAKDOWN", "false")
    )

    # Clock rules
    between_play_seconds: int = 25  # Runoff between snaps while the clock runs
    quarter_seconds: int = 900
    overtime_seconds: int = 600

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL,
        ):
            errors.append(f"SCRIMMAGE_LOG_LEVEL is not a logging level: {self.log_level}")
        if self.tuning_file and not os.path.isfile(self.tuning_file):
            errors.append(f"SCRIMMAGE_TUNING_FILE does not exist: {self.tuning_file}")
        if self.between_play_seconds < 0:
            errors.append("between_play_seconds must not be negative")
        if self.quarter_seconds <= 0 or self.overtime_seconds <= 0:
            errors.append("period lengths must be positive")
        return errors


# Singleton config instance
_config: Optional[SimulationConfig] = None


def get_config() -> SimulationConfig:
    """Get the global simulation configuration."""
    global _config
    if _config is None:
        _config = SimulationConfig.from_env()
    return _config


def set_config(config: SimulationConfig) -> None:
    """
    Replace the global configuration.

    Useful for testing or embedding with explicit settings.
    """
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() rereads the env."""
    global _config
    _config = None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """
    Build a generator for one game or batch.

    Uses ``seed`` when given, else the configured seed, else OS entropy.
    """
    if seed is None:
        seed = get_config().seed
    return random.Random(seed)


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging for command-line use."""
    logging.basicConfig(
        level=(level or get_config().log_level).upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
