"""
Tuning file support.

Lets the outcome tables and turnover odds be re-tuned from a JSON file
instead of code. A tuning file looks like:

    {
      "tables": {
        "inside_run": {"thresholds": [10, 18, 70, 90, 98, 100]},
        "short_pass": {"ranges": [[0, 0], [2, 6], [7, 11], [12, 24]]}
      },
      "fumble_odds": {"INSIDE": 60},
      "interception_odds": {"DEEP": 35}
    }

Only the entries present are changed; everything else keeps its default.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from scrimmage.core.enums import PassPlay, RunPlay
from scrimmage.simulation.tables import DEFAULT_TABLES, TableSet

logger = logging.getLogger(__name__)


class TuningError(ValueError):
    """Raised when a tuning file cannot be read or does not fit the tables."""


class TableOverride(BaseModel):
    """New nominal thresholds and/or ranges for one table."""

    thresholds: Optional[list[int]] = None
    ranges: Optional[list[tuple[int, int]]] = None

    @model_validator(mode="after")
    def check_shape(self) -> "TableOverride":
        if self.thresholds is not None:
            if any(b <= a for a, b in zip(self.thresholds, self.thresholds[1:])):
                raise ValueError("thresholds must be strictly ascending")
            if not self.thresholds or self.thresholds[-1] != 100:
                raise ValueError("last threshold must be 100")
        if self.ranges is not None:
            for low, high in self.ranges:
                if low > high:
                    raise ValueError(f"range {low}..{high} is inverted")
        return self


class TuningFile(BaseModel):
    """Top-level tuning document."""

    tables: dict[str, TableOverride] = Field(default_factory=dict)
    fumble_odds: dict[str, int] = Field(default_factory=dict)
    interception_odds: dict[str, int] = Field(default_factory=dict)
    field_goal_block_odds: Optional[int] = Field(default=None, ge=1)
    punt_block_odds: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_odds(self) -> "TuningFile":
        for name in self.fumble_odds:
            if name not in RunPlay.__members__:
                raise ValueError(f"unknown run play {name!r}")
        for name in self.interception_odds:
            if name not in PassPlay.__members__:
                raise ValueError(f"unknown pass play {name!r}")
        for odds in [*self.fumble_odds.values(), *self.interception_odds.values()]:
            if odds < 1:
                raise ValueError("turnover odds must be at least 1")
        return self


def load_tuning(path: Union[str, Path]) -> TuningFile:
    """Read and validate a tuning file."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
        return TuningFile.model_validate(json.loads(raw))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise TuningError(f"Could not load tuning file {path}: {e}") from e


def apply_tuning(tuning: TuningFile, base: TableSet = DEFAULT_TABLES) -> TableSet:
    """Return a table set with the tuning file's overrides applied."""
    tables = base.tables_by_name()
    result = base
    for name, override in tuning.tables.items():
        if name not in tables:
            raise TuningError(f"Unknown table {name!r}; known tables: {sorted(tables)}")
        try:
            table = tables[name].with_overrides(
                thresholds=override.thresholds,
                ranges=[tuple(r) for r in override.ranges] if override.ranges else None,
            )
        except ValueError as e:
            raise TuningError(str(e)) from e
        result = result.with_table(table)
        logger.info("Applied tuning override to %s", name)

    fumble_odds = dict(result.fumble_odds)
    fumble_odds.update({RunPlay[k]: v for k, v in tuning.fumble_odds.items()})
    interception_odds = dict(result.interception_odds)
    interception_odds.update({PassPlay[k]: v for k, v in tuning.interception_odds.items()})

    return TableSet(
        run_tables=result.run_tables,
        pass_tables=result.pass_tables,
        goal_line_table=result.goal_line_table,
        fumble_odds=fumble_odds,
        interception_odds=interception_odds,
        field_goal_block_odds=tuning.field_goal_block_odds or result.field_goal_block_odds,
        punt_block_odds=tuning.punt_block_odds or result.punt_block_odds,
    )


def load_tables(path: Optional[Union[str, Path]]) -> TableSet:
    """Default tables, with a tuning file applied when a path is given."""
    if not path:
        return DEFAULT_TABLES
    return apply_tuning(load_tuning(path))
