"""Main simulation engine."""

import logging
import random
from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

from scrimmage.config import SimulationConfig, get_config
from scrimmage.core.enums import DefensivePlay, PlayOutcome
from scrimmage.core.models import field
from scrimmage.core.models.breakdown import SimulationBreakdown
from scrimmage.core.models.game import REGULATION_QUARTERS, GameState, Side
from scrimmage.core.models.play import TOUCHDOWN_POINTS, TOUCHDOWN_WITH_TRY_POINTS, PlayCall, PlayResult
from scrimmage.core.models.player import Roster
from scrimmage.events.bus import EventBus
from scrimmage.events.types import (
    GameEndEvent,
    GameEvent,
    PlayCompletedEvent,
    QuarterEndEvent,
    ScoringEvent,
    TurnoverEvent,
)
from scrimmage.game.clock import ClockStateMachine
from scrimmage.game.downs import DownStateMachine
from scrimmage.simulation.defense import DefensiveModifier
from scrimmage.simulation.resolvers.base import PlayResolver
from scrimmage.simulation.resolvers.statistical import StatisticalPlayResolver
from scrimmage.simulation.tuning import load_tables

logger = logging.getLogger(__name__)

TURNOVER_TYPES = {
    PlayOutcome.INTERCEPTION: "INT",
    PlayOutcome.FUMBLE_LOST: "FUMBLE",
    PlayOutcome.FIELD_GOAL_MISSED: "MISSED_FG",
    PlayOutcome.FIELD_GOAL_BLOCKED: "BLOCKED_FG",
    PlayOutcome.PUNT_BLOCKED: "BLOCKED_PUNT",
}


@dataclass(frozen=True)
class PlayReport:
    """Everything that happened on one snap."""

    state_before: GameState
    offense_call: PlayCall
    defense_call: DefensivePlay
    result: PlayResult
    state_after: GameState
    quarter_ended: bool = False
    game_ended: bool = False
    breakdown: Optional[SimulationBreakdown] = None


class SimulationEngine:
    """
    Facade over the play core.

    Exposes the three boundaries a game loop needs (``resolve_play``,
    ``advance_downs``, ``tick_clock``) plus ``run_play``, which chains them,
    handles period ends and emits events on the bus.
    """

    def __init__(
        self,
        resolver: Optional[PlayResolver] = None,
        modifier: Optional[DefensiveModifier] = None,
        clock: Optional[ClockStateMachine] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[SimulationConfig] = None,
        game_id: Optional[UUID] = None,
    ) -> None:
        """
        Initialize simulation engine.

        Args:
            resolver: Play resolver (statistical, on the configured tables, if None)
            modifier: Defensive modifier
            clock: Clock state machine (configured period lengths if None)
            event_bus: Event bus for notifications (creates new if None)
            config: Settings; the global configuration if None
            game_id: Identifier stamped on emitted events
        """
        self.config = config or get_config()
        touchdown_points = TOUCHDOWN_WITH_TRY_POINTS if self.config.automatic_extra_point else TOUCHDOWN_POINTS

        self.resolver = resolver or StatisticalPlayResolver(
            load_tables(self.config.tuning_file),
            automatic_extra_point=self.config.automatic_extra_point,
        )
        self.modifier = modifier or DefensiveModifier(touchdown_points)
        self.clock = clock or ClockStateMachine(
            between_play_seconds=self.config.between_play_seconds,
            quarter_seconds=self.config.quarter_seconds,
            overtime_seconds=self.config.overtime_seconds,
        )
        self.event_bus = event_bus or EventBus()
        self.game_id = game_id or uuid4()

    # =========================================================================
    # Boundaries
    # =========================================================================

    def resolve_play(
        self,
        offense_call: PlayCall,
        defense_call: DefensivePlay,
        offense: Roster,
        defense: Roster,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown] = None,
    ) -> PlayResult:
        """Resolve the offensive call, then apply the defensive scheme."""
        base = self.resolver.resolve(offense_call, offense, defense, state, rng, breakdown)
        result = self.modifier.apply(base, offense_call, defense_call, state, rng)
        if breakdown is not None and result is not base:
            breakdown.calculation(
                f"{defense_call.display} defense",
                {"base": base.yards_gained},
                f"{result.yards_gained} ({result.display})",
            )
        return result

    def advance_downs(self, state: GameState, result: PlayResult) -> GameState:
        """Apply a result to down, distance, spot, score and possession."""
        return DownStateMachine.advance(state, result)

    def tick_clock(self, state: GameState, result: PlayResult) -> GameState:
        """Run the clock for a result."""
        return self.clock.tick(state, result)

    # =========================================================================
    # One snap
    # =========================================================================

    def run_play(
        self,
        state: GameState,
        offense_call: PlayCall,
        defense_call: DefensivePlay,
        offense: Roster,
        defense: Roster,
        rng: random.Random,
    ) -> PlayReport:
        """
        Run a full snap: resolve, apply both reducers, handle period end.

        A tie at the end of the fourth quarter or of an overtime period
        starts another overtime period instead of ending the game.

        Raises:
            ValueError: If the game is already over
        """
        if not state.in_progress:
            raise ValueError("Game is over; no more plays can be run")

        breakdown = SimulationBreakdown() if self.config.record_breakdown else None
        result = self.resolve_play(offense_call, defense_call, offense, defense, state, rng, breakdown)
        next_state = self.tick_clock(self.advance_downs(state, result), result)
        logger.debug("%s | %s | %s", state.display, offense_call.display, result.display)

        self._emit_play_events(state, offense_call, result, next_state)

        quarter_ended = self.clock.quarter_ended(next_state)
        game_ended = False
        if quarter_ended:
            self.event_bus.emit(QuarterEndEvent(
                **GameEvent.context(next_state, self.game_id), quarter_ended=next_state.quarter,
            ))
            if next_state.quarter >= REGULATION_QUARTERS and self.clock.should_end(next_state):
                next_state = self.clock.end_game(next_state)
                game_ended = True
                self._emit_game_end(next_state)
            else:
                next_state = self.clock.start_next_quarter(next_state)

        return PlayReport(
            state_before=state,
            offense_call=offense_call,
            defense_call=defense_call,
            result=result,
            state_after=next_state,
            quarter_ended=quarter_ended,
            game_ended=game_ended,
            breakdown=breakdown,
        )

    def _emit_play_events(
        self,
        state: GameState,
        call: PlayCall,
        result: PlayResult,
        next_state: GameState,
    ) -> None:
        context = GameEvent.context(next_state, self.game_id)
        self.event_bus.emit(PlayCompletedEvent(
            **context,
            call=call,
            result=result,
            down=state.down,
            yards_to_go=state.yards_to_go,
            field_position=field.describe(state.field_position),
            line_of_scrimmage=state.field_position,
            offense=state.possession,
        ))

        if result.is_score:
            if result.is_safety:
                side, scoring_type, scorer = state.defense, "Safety", result.defender
            elif result.outcome == PlayOutcome.FIELD_GOAL_GOOD:
                side, scoring_type, scorer = state.possession, "FG", result.primary_player
            else:
                side, scoring_type = state.possession, "TD"
                scorer = result.target or result.primary_player
            self.event_bus.emit(ScoringEvent(
                **context,
                side=side,
                points=result.points_scored,
                scoring_type=scoring_type,
                scorer_id=scorer.id if scorer else None,
                description=result.display,
            ))
            return

        turnover_type = TURNOVER_TYPES.get(result.outcome) if result.is_turnover else None
        if turnover_type is None and not result.is_turnover and next_state.possession != state.possession:
            turnover_type = "DOWNS"
        if turnover_type is not None:
            self.event_bus.emit(TurnoverEvent(
                **context,
                losing_side=state.possession,
                gaining_side=state.defense,
                turnover_type=turnover_type,
                player_who_lost_id=result.primary_player.id if result.primary_player else None,
                player_who_gained_id=result.defender.id if result.defender else None,
            ))

    def _emit_game_end(self, state: GameState) -> None:
        if state.home_score > state.away_score:
            winner: Optional[Side] = Side.HOME
        elif state.away_score > state.home_score:
            winner = Side.AWAY
        else:
            winner = None
        self.event_bus.emit(GameEndEvent(
            **GameEvent.context(state, self.game_id),
            winner=winner,
            final_home_score=state.home_score,
            final_away_score=state.away_score,
            is_overtime=state.is_overtime,
        ))
