"""Play Calibration Tests.

Runs each archetype many times from a fixed situation with league-average
rosters and checks the aggregates against the tuned targets:

- Inside run: mean about 4 yards, losses about 1 in 8
- Short pass: about 3 in 4 complete, deep pass under half
- 25-yard field goal: good at least 85% of the time
- Interceptions: deep passes picked far more often than screens
"""

import numpy as np
import pytest

from scrimmage.core.enums import DefensivePlay, PassPlay, RunPlay
from scrimmage.core.models.game import GameState
from scrimmage.core.models.play import PlayCall
from scrimmage.core.models.player import Roster
from scrimmage.simulation import calibration
from scrimmage.simulation.calibration import CalibrationSummary, run_calibration


# =============================================================================
# Calibration Targets
# =============================================================================

TARGETS = {
    "inside_run_mean": (3.0, 5.5),
    "inside_run_loss_rate": (0.06, 0.20),
    "short_pass_incompletion": (0.15, 0.35),
    "deep_pass_incompletion": (0.45, 0.65),
    "field_goal_25_min": 0.85,
}

PLAYS = 5_000


def within(value, bounds):
    low, high = bounds
    return low <= value <= high


@pytest.fixture(scope="module")
def inside_run():
    return run_calibration(PlayCall.run(RunPlay.INSIDE), plays=PLAYS, seed=101)


class TestRunCalibration:
    """Run game aggregates."""

    def test_mean_yards(self, inside_run):
        assert within(inside_run.mean_yards, TARGETS["inside_run_mean"]), inside_run.mean_yards

    def test_loss_rate(self, inside_run):
        assert within(inside_run.loss_rate, TARGETS["inside_run_loss_rate"]), inside_run.loss_rate

    def test_skewed_right(self, inside_run):
        """Long runs pull the mean above the median."""
        assert inside_run.mean_yards > inside_run.median_yards
        assert inside_run.percentiles[90] > inside_run.percentiles[10]

    def test_runs_rarely_stop_clock(self, inside_run):
        assert inside_run.stop_clock_rate < 0.15
        assert inside_run.incompletion_rate == 0.0

    def test_stacked_box_hurts_runs(self, inside_run):
        stacked = run_calibration(PlayCall.run(RunPlay.INSIDE), DefensivePlay.STACK_THE_BOX,
                                  plays=PLAYS, seed=101)
        assert stacked.mean_yards < inside_run.mean_yards


class TestPassCalibration:
    """Pass game aggregates."""

    def test_short_pass_completion(self):
        summary = run_calibration(PlayCall.pass_play(PassPlay.SHORT), plays=PLAYS, seed=202)
        assert within(summary.incompletion_rate, TARGETS["short_pass_incompletion"])

    def test_deep_pass_completion(self):
        summary = run_calibration(PlayCall.pass_play(PassPlay.DEEP), plays=PLAYS, seed=203)
        assert within(summary.incompletion_rate, TARGETS["deep_pass_incompletion"])
        assert summary.explosive_rate > 0.2

    def test_interception_ordering(self):
        """Deep shots are intercepted more often than screens."""
        deep = run_calibration(PlayCall.pass_play(PassPlay.DEEP), plays=PLAYS, seed=204)
        screen = run_calibration(PlayCall.pass_play(PassPlay.WR_SCREEN), plays=PLAYS, seed=204)
        assert deep.turnover_rate > screen.turnover_rate

    def test_blitz_sacks(self):
        summary = run_calibration(PlayCall.pass_play(PassPlay.MEDIUM), DefensivePlay.BLITZ,
                                  plays=2_000, seed=205)
        assert 0.15 < summary.sack_rate < 0.35


class TestKickingCalibration:
    """Special teams aggregates."""

    def test_short_field_goal(self):
        """A 25-yard attempt (ball on the opponent 8) is good at least 85% of the time."""
        state = GameState(down=4, yards_to_go=8, field_position=92)
        summary = run_calibration(PlayCall.field_goal(), state=state, plays=PLAYS, seed=303)
        assert summary.score_rate >= TARGETS["field_goal_25_min"], summary.score_rate
        assert np.isclose(summary.score_rate + summary.turnover_rate, 1.0)

    def test_long_field_goal_harder(self):
        state = GameState(down=4, yards_to_go=8, field_position=62)
        summary = run_calibration(PlayCall.field_goal(), state=state, plays=2_000, seed=304)
        assert summary.score_rate < 0.65


class TestRunner:
    """Tests for the calibration runner itself."""

    def test_rejects_empty_run(self):
        with pytest.raises(ValueError):
            run_calibration(PlayCall.run(RunPlay.POWER), plays=0)

    def test_seeded_runs_repeat(self):
        call = PlayCall.run(RunPlay.OUTSIDE)
        first = run_calibration(call, plays=500, seed=9, batch_size=200)
        second = run_calibration(call, plays=500, seed=9, batch_size=200)
        assert first.mean_yards == second.mean_yards
        assert first.plays == 500

    def test_workers_match_single_process(self):
        """Batches are seeded independently, so parallel runs give the same numbers."""
        call = PlayCall.pass_play(PassPlay.SHORT)
        serial = run_calibration(call, plays=600, seed=17, batch_size=200)
        parallel = run_calibration(call, plays=600, seed=17, batch_size=200, workers=2)
        assert parallel.mean_yards == pytest.approx(serial.mean_yards)
        assert parallel.incompletion_rate == pytest.approx(serial.incompletion_rate)

    def test_empty_roster_kept(self, monkeypatch):
        """A roster with no players is used as given, not replaced."""
        requests = []

        def capture(request):
            requests.append(request)
            return []

        monkeypatch.setattr(calibration, "simulate_batch", capture)
        run_calibration(PlayCall.run(RunPlay.INSIDE), offense=Roster(name="Empty"), plays=10, seed=1)
        assert [len(r.offense) for r in requests] == [0]
        assert len(requests[0].defense) > 0

    def test_empty_summary(self):
        summary = CalibrationSummary.from_results("nothing", [])
        assert summary.plays == 0
        assert summary.mean_yards == 0.0

    def test_rows(self, inside_run):
        labels = [label for label, _ in inside_run.as_rows()]
        assert "Mean yards" in labels
        assert "P50" in labels
