"""Tests for loading table overrides from a tuning file."""

import json

import pytest

from scrimmage.core.enums import PassPlay, RunPlay
from scrimmage.simulation.tables import DEFAULT_TABLES
from scrimmage.simulation.tuning import (
    TuningError,
    TuningFile,
    apply_tuning,
    load_tables,
    load_tuning,
)


@pytest.fixture
def write_tuning(tmp_path):
    """Write a dict as a tuning file and return its path."""
    def _write(data, name="tuning.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data) if not isinstance(data, str) else data)
        return path
    return _write


class TestLoadTables:
    """Tests for load_tables."""

    def test_no_path_is_defaults(self):
        assert load_tables(None) is DEFAULT_TABLES
        assert load_tables("") is DEFAULT_TABLES

    def test_threshold_override(self, write_tuning):
        path = write_tuning({"tables": {"inside_run": {"thresholds": [6, 16, 66, 88, 97, 100]}}})
        tables = load_tables(path)
        assert tables.run_tables[RunPlay.INSIDE].thresholds(0) == [6, 16, 66, 88, 97, 100]
        # Untouched tables keep their defaults
        assert tables.run_tables[RunPlay.POWER] is DEFAULT_TABLES.run_tables[RunPlay.POWER]

    def test_range_override(self, write_tuning):
        path = write_tuning({"tables": {"short_pass": {"ranges": [[0, 0], [2, 6], [7, 11], [12, 24]]}}})
        tables = load_tables(path)
        assert tables.pass_tables[PassPlay.SHORT].ranges(0)[1] == (2, 6)

    def test_goal_line_override(self, write_tuning):
        path = write_tuning({"tables": {"goal_line_run": {"thresholds": [10, 45, 85, 100]}}})
        assert load_tables(path).goal_line_table.thresholds(0) == [10, 45, 85, 100]

    def test_odds_override(self, write_tuning):
        path = write_tuning({
            "fumble_odds": {"INSIDE": 80},
            "interception_odds": {"DEEP": 25},
            "punt_block_odds": 500,
        })
        tables = load_tables(path)
        assert tables.fumble_odds[RunPlay.INSIDE] == 80
        assert tables.fumble_odds[RunPlay.POWER] == DEFAULT_TABLES.fumble_odds[RunPlay.POWER]
        assert tables.interception_odds[PassPlay.DEEP] == 25
        assert tables.punt_block_odds == 500
        assert tables.field_goal_block_odds == DEFAULT_TABLES.field_goal_block_odds

    def test_defaults_not_mutated(self, write_tuning):
        load_tables(write_tuning({"fumble_odds": {"INSIDE": 80}}))
        assert DEFAULT_TABLES.fumble_odds[RunPlay.INSIDE] == 50


class TestErrors:
    """Bad tuning files raise TuningError."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(TuningError):
            load_tuning(tmp_path / "missing.json")

    def test_bad_json(self, write_tuning):
        with pytest.raises(TuningError):
            load_tuning(write_tuning("{not json"))

    def test_descending_thresholds(self, write_tuning):
        with pytest.raises(TuningError):
            load_tuning(write_tuning({"tables": {"inside_run": {"thresholds": [50, 20, 100]}}}))

    def test_last_threshold_not_100(self, write_tuning):
        with pytest.raises(TuningError):
            load_tuning(write_tuning({"tables": {"inside_run": {"thresholds": [10, 20, 90]}}}))

    def test_unknown_play_name(self, write_tuning):
        with pytest.raises(TuningError):
            load_tuning(write_tuning({"fumble_odds": {"TRICK_PLAY": 10}}))

    def test_zero_odds(self, write_tuning):
        with pytest.raises(TuningError):
            load_tuning(write_tuning({"interception_odds": {"DEEP": 0}}))

    def test_unknown_table(self):
        tuning = TuningFile(tables={"flea_flicker": {"thresholds": [50, 100]}})
        with pytest.raises(TuningError):
            apply_tuning(tuning)

    def test_wrong_bucket_count(self):
        tuning = TuningFile(tables={"inside_run": {"thresholds": [50, 100]}})
        with pytest.raises(TuningError):
            apply_tuning(tuning)

    def test_tuning_error_is_value_error(self):
        assert issubclass(TuningError, ValueError)
