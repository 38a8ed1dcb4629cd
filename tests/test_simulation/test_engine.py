"""Tests for SimulationEngine."""

import json
import random

import pytest

from scrimmage.config import SimulationConfig
from scrimmage.core.enums import DefensivePlay, PassPlay, PlayOutcome, PlayType, RunPlay
from scrimmage.core.models.game import GameState, Side
from scrimmage.core.models.play import PlayCall, PlayResult
from scrimmage.events.bus import EventBus
from scrimmage.events.types import (
    GameEndEvent,
    GameEvent,
    PlayCompletedEvent,
    QuarterEndEvent,
    ScoringEvent,
    TurnoverEvent,
)
from scrimmage.logging import PlayLog
from scrimmage.simulation.defense import DefensiveModifier
from scrimmage.simulation.engine import PlayReport, SimulationEngine
from scrimmage.simulation.resolvers.base import PlayResolver
from scrimmage.simulation.resolvers.statistical import StatisticalPlayResolver

PASS_CALL = PlayCall.pass_play(PassPlay.SHORT)
RUN_CALL = PlayCall.run(RunPlay.INSIDE)


class FixedResolver(PlayResolver):
    """Always returns the same result."""

    def __init__(self, result: PlayResult):
        self.result = result

    def resolve(self, call, offense, defense, state, rng, breakdown=None):
        return self.result


class NoDefense(DefensiveModifier):
    """Leaves every result alone."""

    def apply(self, base_result, offense_call, scheme, state, rng):
        return base_result


@pytest.fixture
def events():
    """Event bus that records everything it sees."""
    bus = EventBus()
    seen = []
    bus.subscribe_all(seen.append)
    return bus, seen


def fixed_engine(result, bus=None):
    return SimulationEngine(resolver=FixedResolver(result), modifier=NoDefense(), event_bus=bus)


def of_type(seen, event_type):
    return [e for e in seen if isinstance(e, event_type)]


# =============================================================================
# Construction
# =============================================================================


class TestSimulationEngineInit:
    """Tests for SimulationEngine initialization."""

    def test_default_initialization(self):
        """Engine should build the statistical core by default."""
        engine = SimulationEngine()
        assert isinstance(engine.resolver, StatisticalPlayResolver)
        assert isinstance(engine.modifier, DefensiveModifier)
        assert engine.event_bus is not None
        assert engine.game_id is not None

    def test_custom_event_bus(self):
        """Engine should accept custom event bus."""
        bus = EventBus()
        engine = SimulationEngine(event_bus=bus)
        assert engine.event_bus is bus

    def test_touchdown_without_try(self):
        """Turning off the automatic extra point makes touchdowns worth six."""
        engine = SimulationEngine(config=SimulationConfig(automatic_extra_point=False))
        assert engine.resolver.touchdown_points == 6
        assert engine.modifier.touchdown_points == 6

    def test_tuning_file(self, tmp_path):
        """Tables come from the configured tuning file."""
        path = tmp_path / "tuning.json"
        path.write_text(json.dumps({"fumble_odds": {"POWER": 500}}))
        engine = SimulationEngine(config=SimulationConfig(tuning_file=str(path)))
        assert engine.resolver.tables.fumble_odds[RunPlay.POWER] == 500

    def test_clock_settings(self):
        engine = SimulationEngine(config=SimulationConfig(quarter_seconds=300, between_play_seconds=10))
        assert engine.clock.quarter_seconds == 300
        assert engine.clock.between_play_seconds == 10


# =============================================================================
# Boundaries
# =============================================================================


class TestBoundaries:
    """Tests for resolve_play, advance_downs and tick_clock."""

    @pytest.mark.parametrize("scheme", list(DefensivePlay))
    def test_resolve_play(self, average_offense, average_defense, midfield_state, scheme):
        engine = SimulationEngine()
        for seed in range(25):
            result = engine.resolve_play(PASS_CALL, scheme, average_offense, average_defense,
                                         midfield_state, random.Random(seed))
            assert isinstance(result, PlayResult)
            assert result.yards_gained <= midfield_state.distance_to_goal

    def test_advance_and_tick(self, midfield_state, short_run):
        engine = SimulationEngine()
        after_downs = engine.advance_downs(midfield_state, short_run)
        assert (after_downs.down, after_downs.yards_to_go, after_downs.field_position) == (3, 3, 54)
        after_clock = engine.tick_clock(after_downs, short_run)
        assert after_clock.game_clock == midfield_state.game_clock - 30 - 25


# =============================================================================
# run_play
# =============================================================================


class TestRunPlay:
    """Tests for one full snap."""

    def test_returns_report(self, average_offense, average_defense, kickoff_state, rng):
        engine = SimulationEngine()
        report = engine.run_play(kickoff_state, RUN_CALL, DefensivePlay.BALANCED,
                                 average_offense, average_defense, rng)
        assert isinstance(report, PlayReport)
        assert report.state_before is kickoff_state
        assert report.offense_call is RUN_CALL
        assert report.breakdown is None
        assert report.state_after.game_clock < kickoff_state.game_clock

    def test_play_completed_event(self, events, average_offense, average_defense, midfield_state, rng):
        bus, seen = events
        engine = fixed_engine(PlayResult.pass_play(0, 6, complete=False), bus)
        engine.run_play(midfield_state, PASS_CALL, DefensivePlay.BALANCED, average_offense, average_defense, rng)

        plays = of_type(seen, PlayCompletedEvent)
        assert len(plays) == 1
        event = plays[0]
        assert event.down == 2
        assert event.yards_to_go == 7
        assert event.field_position == "50"
        assert event.offense == Side.HOME
        assert event.game_id == engine.game_id
        assert event.time_remaining == "06:54"

    def test_touchdown_event(self, events, average_offense, average_defense, rb_player):
        bus, seen = events
        state = GameState(down=1, yards_to_go=2, field_position=98, possession=Side.HOME)
        engine = fixed_engine(PlayResult.touchdown(PlayType.RUSH, 2, 5, primary_player=rb_player), bus)
        report = engine.run_play(state, RUN_CALL, DefensivePlay.BALANCED, average_offense, average_defense,
                                 random.Random(1))

        scores = of_type(seen, ScoringEvent)
        assert len(scores) == 1
        assert scores[0].side == Side.HOME
        assert scores[0].points == 7
        assert scores[0].scoring_type == "TD"
        assert scores[0].scorer_id == rb_player.id
        assert scores[0].home_score == 7
        assert report.state_after.possession == Side.AWAY
        assert report.state_after.field_position == 25

    def test_safety_event(self, events, average_offense, average_defense):
        bus, seen = events
        state = GameState(field_position=1, possession=Side.AWAY)
        engine = fixed_engine(PlayResult.safety(PlayType.RUSH, -2, 20), bus)
        engine.run_play(state, RUN_CALL, DefensivePlay.BALANCED, average_offense, average_defense,
                        random.Random(1))

        scores = of_type(seen, ScoringEvent)
        assert scores[0].side == Side.HOME
        assert scores[0].scoring_type == "Safety"
        assert scores[0].points == 2

    def test_turnover_on_downs_event(self, events, average_offense, average_defense):
        bus, seen = events
        state = GameState(down=4, yards_to_go=15, field_position=40, possession=Side.HOME)
        engine = fixed_engine(PlayResult.pass_play(0, 6, complete=False), bus)
        engine.run_play(state, PASS_CALL, DefensivePlay.BALANCED, average_offense, average_defense,
                        random.Random(1))

        turnovers = of_type(seen, TurnoverEvent)
        assert len(turnovers) == 1
        assert turnovers[0].turnover_type == "DOWNS"
        assert turnovers[0].losing_side == Side.HOME
        assert turnovers[0].gaining_side == Side.AWAY

    def test_interception_event(self, events, average_offense, average_defense, midfield_state):
        bus, seen = events
        pick = PlayResult.turnover(PlayType.PASS, 0, 6, outcome=PlayOutcome.INTERCEPTION)
        fixed_engine(pick, bus).run_play(midfield_state, PASS_CALL, DefensivePlay.BALANCED,
                                         average_offense, average_defense, random.Random(1))
        assert [e.turnover_type for e in of_type(seen, TurnoverEvent)] == ["INT"]

    def test_routine_punt_is_not_turnover_event(self, events, average_offense, average_defense):
        bus, seen = events
        state = GameState(down=4, yards_to_go=9, field_position=30)
        punt = PlayResult.turnover(PlayType.PUNT, 44, 14, outcome=PlayOutcome.PUNT_RESULT)
        report = fixed_engine(punt, bus).run_play(state, PlayCall.punt(), DefensivePlay.BALANCED,
                                                  average_offense, average_defense, random.Random(1))
        assert of_type(seen, TurnoverEvent) == []
        assert report.state_after.field_position == 26

    def test_game_over_raises(self, average_offense, average_defense, rng):
        engine = SimulationEngine()
        with pytest.raises(ValueError):
            engine.run_play(GameState(in_progress=False), RUN_CALL, DefensivePlay.BALANCED,
                            average_offense, average_defense, rng)

    def test_breakdown_recorded(self, average_offense, average_defense, kickoff_state, rng):
        engine = SimulationEngine(config=SimulationConfig(record_breakdown=True))
        report = engine.run_play(kickoff_state, RUN_CALL, DefensivePlay.BLITZ,
                                 average_offense, average_defense, rng)
        assert report.breakdown is not None
        assert report.breakdown.has_lines


# =============================================================================
# Period transitions
# =============================================================================


class TestPeriodEnd:
    """Tests for quarter and game end handling in run_play."""

    def incomplete_from(self, state, events, average_offense, average_defense):
        bus, seen = events
        engine = fixed_engine(PlayResult.pass_play(0, 6, complete=False), bus)
        report = engine.run_play(state, PASS_CALL, DefensivePlay.BALANCED, average_offense, average_defense,
                                 random.Random(1))
        return report, seen

    def test_next_quarter(self, events, average_offense, average_defense):
        report, seen = self.incomplete_from(GameState(quarter=1, game_clock=5), events,
                                            average_offense, average_defense)
        assert report.quarter_ended
        assert not report.game_ended
        assert (report.state_after.quarter, report.state_after.game_clock) == (2, 900)
        assert [e.quarter_ended for e in of_type(seen, QuarterEndEvent)] == [1]

    def test_game_ends_with_a_leader(self, events, average_offense, average_defense):
        state = GameState(quarter=4, game_clock=5, home_score=10, away_score=3)
        report, seen = self.incomplete_from(state, events, average_offense, average_defense)
        assert report.game_ended
        assert not report.state_after.in_progress
        finals = of_type(seen, GameEndEvent)
        assert len(finals) == 1
        assert finals[0].winner == Side.HOME
        assert finals[0].final_home_score == 10
        assert not finals[0].is_overtime

    def test_tie_goes_to_overtime(self, events, average_offense, average_defense):
        state = GameState(quarter=4, game_clock=5, home_score=14, away_score=14)
        report, seen = self.incomplete_from(state, events, average_offense, average_defense)
        assert not report.game_ended
        assert (report.state_after.quarter, report.state_after.game_clock) == (5, 600)
        assert of_type(seen, GameEndEvent) == []

    def test_overtime_can_end(self, events, average_offense, average_defense):
        state = GameState(quarter=5, game_clock=5, home_score=14, away_score=17)
        report, seen = self.incomplete_from(state, events, average_offense, average_defense)
        assert report.game_ended
        final = of_type(seen, GameEndEvent)[0]
        assert final.winner == Side.AWAY
        assert final.is_overtime

    def test_earlier_quarter_never_ends_game(self, events, average_offense, average_defense):
        state = GameState(quarter=2, game_clock=5, home_score=21, away_score=0)
        report, _ = self.incomplete_from(state, events, average_offense, average_defense)
        assert report.state_after.in_progress
        assert report.state_after.quarter == 3


# =============================================================================
# Whole games
# =============================================================================


class TestSimulatedGame:
    """Integration: many snaps through the real core."""

    def test_play_log_integration(self, average_offense, average_defense):
        bus = EventBus()
        log = PlayLog()
        log.connect_to_event_bus(bus)
        engine = SimulationEngine(event_bus=bus)
        rng = random.Random(5)

        state = GameState.kickoff()
        for _ in range(40):
            state = engine.run_play(state, PASS_CALL, DefensivePlay.BALANCED,
                                    average_offense, average_defense, rng).state_after

        assert log.play_count == 40
        assert sum(s.plays for s in log.stats.values()) == 40
        total_points = sum(p.points for p in log.get_scoring_summary())
        assert total_points == state.home_score + state.away_score

    def test_game_runs_to_completion(self, average_offense, average_defense):
        """Random calls from kickoff always reach a final whistle with legal states."""
        engine = SimulationEngine()
        rng = random.Random(2024)
        calls = [PlayCall.run(p) for p in RunPlay] + [PlayCall.pass_play(p) for p in PassPlay]

        state = GameState.kickoff()
        for _ in range(3000):
            if not state.in_progress:
                break
            if state.down == 4:
                call = PlayCall.field_goal() if state.distance_to_goal <= 35 else PlayCall.punt()
            else:
                call = rng.choice(calls)
            report = engine.run_play(state, call, rng.choice(list(DefensivePlay)),
                                     average_offense, average_defense, rng)
            after = report.state_after
            assert after.home_score >= state.home_score
            assert after.away_score >= state.away_score
            assert after.game_clock >= 0
            assert 1 <= after.down <= 4
            state = after

        assert not state.in_progress
        assert state.quarter >= 4
        assert not state.is_tied

    def test_subscriber_sees_every_event_type(self, average_offense, average_defense):
        bus = EventBus()
        seen_types = set()
        bus.subscribe(GameEvent, lambda e: seen_types.add(type(e)))
        engine = SimulationEngine(event_bus=bus)
        rng = random.Random(8)

        state = GameState.kickoff()
        while state.in_progress:
            call = PlayCall.punt() if state.down == 4 else PlayCall.pass_play(PassPlay.MEDIUM)
            state = engine.run_play(state, call, DefensivePlay.BALANCED,
                                    average_offense, average_defense, rng).state_after

        assert PlayCompletedEvent in seen_types
        assert QuarterEndEvent in seen_types
        assert GameEndEvent in seen_types
