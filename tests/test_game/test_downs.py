"""Tests for the down state machine."""

import random

import pytest

from scrimmage.core.enums import PlayOutcome, PlayType
from scrimmage.core.models.game import GameState, Side
from scrimmage.core.models.play import PlayResult
from scrimmage.game.downs import (
    DownStateMachine,
    effective_yards_to_go,
    field_position_description,
    is_goal_to_go,
    is_in_red_zone,
)
from scrimmage.simulation.rules import settle_play


class TestScenarios:
    """Reference transitions."""

    def test_short_gain_next_down(self):
        """1st & 10 at own 25, 4-yard run -> 2nd & 6 at own 29."""
        state = GameState(down=1, yards_to_go=10, field_position=25, possession=Side.AWAY)
        new_state = DownStateMachine.advance(state, PlayResult.rush(4, 30))
        assert new_state.down == 2
        assert new_state.yards_to_go == 6
        assert new_state.field_position == 29
        assert new_state.possession == Side.AWAY

    def test_turnover_on_downs(self):
        """4th & 15 at own 40, 6-yard gain -> other team at 54."""
        state = GameState(down=4, yards_to_go=15, field_position=40, possession=Side.HOME)
        new_state = DownStateMachine.advance(state, PlayResult.rush(6, 30))
        assert new_state.possession == Side.AWAY
        assert new_state.field_position == 54
        assert new_state.down == 1
        assert new_state.yards_to_go == 10

    def test_touchdown(self):
        """Touchdown from the 2 -> 7 points, other team at its 25."""
        state = GameState(down=1, yards_to_go=2, field_position=98, possession=Side.HOME, home_score=0)
        result = PlayResult.touchdown(PlayType.RUSH, 2, 5, points=7)
        new_state = DownStateMachine.advance(state, result)
        assert new_state.home_score == 7
        assert new_state.away_score == 0
        assert new_state.field_position == 25
        assert new_state.possession == Side.AWAY
        assert (new_state.down, new_state.yards_to_go) == (1, 10)


class TestTransitions:
    """Tests for each branch of advance()."""

    def test_first_down_resets_chains(self):
        state = GameState(down=3, yards_to_go=5, field_position=40)
        new_state = DownStateMachine.advance(state, PlayResult.rush(7, 30, is_first_down=True))
        assert (new_state.down, new_state.yards_to_go, new_state.field_position) == (1, 10, 47)

    def test_loss_adds_distance(self):
        state = GameState(down=1, yards_to_go=10, field_position=40)
        new_state = DownStateMachine.advance(state, PlayResult.rush(-3, 30))
        assert (new_state.down, new_state.yards_to_go, new_state.field_position) == (2, 13, 37)

    def test_incomplete_uses_a_down(self):
        state = GameState(down=2, yards_to_go=8, field_position=40)
        new_state = DownStateMachine.advance(state, PlayResult.pass_play(0, 6, complete=False))
        assert (new_state.down, new_state.yards_to_go, new_state.field_position) == (3, 8, 40)

    def test_interception_flips_at_spot(self):
        state = GameState(down=2, yards_to_go=8, field_position=35, possession=Side.HOME)
        result = PlayResult.turnover(PlayType.PASS, 0, 6, outcome=PlayOutcome.INTERCEPTION)
        new_state = DownStateMachine.advance(state, result)
        assert new_state.possession == Side.AWAY
        assert new_state.field_position == 65

    def test_punt_flips_downfield(self):
        state = GameState(down=4, yards_to_go=8, field_position=30)
        result = PlayResult.turnover(PlayType.PUNT, 45, 14, outcome=PlayOutcome.PUNT_RESULT)
        new_state = DownStateMachine.advance(state, result)
        assert new_state.field_position == 25
        assert new_state.possession == Side.HOME

    def test_touchback_spot(self):
        """A punt touchback leaves the receiving team at its 20."""
        state = GameState(down=4, yards_to_go=8, field_position=65)
        result = PlayResult.turnover(PlayType.PUNT, 35 - 20, 14, outcome=PlayOutcome.TOUCHBACK)
        assert DownStateMachine.advance(state, result).field_position == 20

    def test_missed_field_goal(self):
        state = GameState(down=4, yards_to_go=6, field_position=70, possession=Side.HOME)
        new_state = DownStateMachine.advance(state, PlayResult.field_goal(False, 5))
        assert new_state.possession == Side.AWAY
        assert new_state.field_position == 30

    def test_field_goal_scores_three(self):
        state = GameState(down=4, yards_to_go=6, field_position=70, possession=Side.AWAY)
        new_state = DownStateMachine.advance(state, PlayResult.field_goal(True, 5))
        assert new_state.away_score == 3
        assert new_state.possession == Side.HOME
        assert new_state.field_position == 25

    def test_safety_scores_for_defense(self):
        state = GameState(field_position=2, possession=Side.HOME)
        result = PlayResult.safety(PlayType.RUSH, -3, 20)
        new_state = DownStateMachine.advance(state, result)
        assert new_state.away_score == 2
        assert new_state.home_score == 0
        assert new_state.possession == Side.AWAY
        assert new_state.field_position == 25

    def test_game_over_is_noop(self, short_run):
        state = GameState(in_progress=False)
        assert DownStateMachine.advance(state, short_run) is state


class TestInvariants:
    """Random play sequences never leave the legal state space."""

    def test_random_sequence(self):
        rng = random.Random(11)
        state = GameState.kickoff()
        for _ in range(2000):
            outcome = rng.random()
            if outcome < 0.05:
                result = settle_play(PlayType.RUSH, rng.randint(-5, 20), 30, state,
                                     outcome=PlayOutcome.RUSH, turnover_outcome=PlayOutcome.FUMBLE_LOST)
            elif outcome < 0.35:
                result = settle_play(PlayType.PASS, 0, 6, state, outcome=PlayOutcome.INCOMPLETE,
                                     stop_reason="incomplete")
            else:
                result = settle_play(PlayType.RUSH, rng.randint(-8, 25), 30, state, outcome=PlayOutcome.RUSH)

            new_state = DownStateMachine.advance(state, result)
            assert 1 <= new_state.down <= 4
            assert 0 <= new_state.field_position <= 100
            assert new_state.yards_to_go >= 1
            assert new_state.home_score >= state.home_score
            assert new_state.away_score >= state.away_score
            if result.is_first_down:
                assert new_state.down == 1
                assert new_state.possession == state.possession
            state = new_state


class TestHelpers:
    """Tests for the situation helpers."""

    def test_red_zone(self):
        assert is_in_red_zone(GameState(field_position=80))
        assert not is_in_red_zone(GameState(field_position=79))

    def test_goal_to_go(self):
        assert is_goal_to_go(GameState(yards_to_go=10, field_position=93))
        assert not is_goal_to_go(GameState(yards_to_go=10, field_position=85))

    def test_effective_yards_to_go(self):
        assert effective_yards_to_go(GameState(yards_to_go=10, field_position=95)) == 5
        assert effective_yards_to_go(GameState(yards_to_go=4, field_position=50)) == 4

    @pytest.mark.parametrize("position,expected", [(25, "Own 25"), (50, "50"), (70, "Opp 30")])
    def test_description(self, position, expected):
        assert field_position_description(GameState(field_position=position)) == expected
