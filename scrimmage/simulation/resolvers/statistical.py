"""Statistical play resolver using bucketed outcome tables."""

import logging
import random
from typing import Optional

from scrimmage.core.attributes import DEFAULT_RATING, AttributeResolver
from scrimmage.core.enums import (
    PassPlay,
    PlayOutcome,
    PlayType,
    Position,
    RunPlay,
    SpecialTeamsPlay,
)
from scrimmage.core.models import field
from scrimmage.core.models.breakdown import SimulationBreakdown
from scrimmage.core.models.game import GameState
from scrimmage.core.models.play import (
    TOUCHDOWN_POINTS,
    TOUCHDOWN_WITH_TRY_POINTS,
    PlayCall,
    PlayCoaching,
    PlayParticipants,
    PlayResult,
)
from scrimmage.core.models.player import Player, Roster
from scrimmage.simulation import advantage as archetypes
from scrimmage.simulation.advantage import AdvantageModel, AdvantageProfile, coaching_bonus
from scrimmage.simulation.distribution import BucketKind
from scrimmage.simulation.personnel import BACKS, select_participants
from scrimmage.simulation.resolvers.base import PlayResolver
from scrimmage.simulation.rules import settle_play
from scrimmage.simulation.tables import (
    BLOCKED_KICK_TIME,
    BLOCKED_PUNT_YARDS,
    COMPLETION_STOP_CLOCK,
    DEFAULT_TABLES,
    FIELD_GOAL_PCT_BOUNDS,
    FIELD_GOAL_TIME,
    KICKER_ACCURACY_FACTOR,
    PASS_TIME,
    PUNT_TIME,
    PUNTER_POWER_DIVISOR,
    RUN_STOP_CLOCK,
    RUN_TIME,
    TableSet,
    field_goal_band,
    odds_hit,
    punt_range,
)

logger = logging.getLogger(__name__)


class StatisticalPlayResolver(PlayResolver):
    """
    Play-by-play resolver driven by per-subtype outcome tables.

    Ratings enter through a single advantage number per play that shifts
    the table's thresholds and widens its ranges. Time, turnovers and
    clock stoppages are drawn independently of the yardage.
    """

    RUN_PROFILES: dict[RunPlay, AdvantageProfile] = {
        RunPlay.POWER: archetypes.POWER_RUN,
        RunPlay.INSIDE: archetypes.INSIDE_RUN,
        RunPlay.OUTSIDE: archetypes.PERIMETER_RUN,
        RunPlay.JET_SWEEP: archetypes.PERIMETER_RUN,
        RunPlay.READ_OPTION: archetypes.QUARTERBACK_RUN,
        RunPlay.QB_RUN: archetypes.QUARTERBACK_RUN,
    }

    # Hail Mary has no profile: its table is fixed
    PASS_PROFILES: dict[PassPlay, AdvantageProfile] = {
        PassPlay.DEEP: archetypes.DOWNFIELD_PASS,
        PassPlay.MEDIUM: archetypes.DOWNFIELD_PASS,
        PassPlay.SHORT: archetypes.SHORT_PASS,
        PassPlay.WR_SCREEN: archetypes.SCREEN_PASS,
        PassPlay.RB_SCREEN: archetypes.SCREEN_PASS,
    }

    def __init__(self, tables: TableSet = DEFAULT_TABLES, automatic_extra_point: bool = True):
        self.tables = tables
        self.touchdown_points = TOUCHDOWN_WITH_TRY_POINTS if automatic_extra_point else TOUCHDOWN_POINTS

    def resolve(
        self,
        call: PlayCall,
        offense: Roster,
        defense: Roster,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown] = None,
    ) -> PlayResult:
        """Resolve a play using the outcome tables."""
        participants = select_participants(call, offense, defense, rng)
        coaching = call.coaching or PlayCoaching(
            offensive_coordinator=offense.offensive_coordinator,
            defensive_coordinator=defense.defensive_coordinator,
            special_teams_coordinator=offense.special_teams_coordinator,
        )
        if breakdown is not None:
            breakdown.section(f"{call.display} from {field.describe(state.field_position)}")

        if call.is_run:
            result = self._resolve_run(call.subtype, participants, coaching, state, rng, breakdown)
        elif call.is_pass:
            result = self._resolve_pass(call.subtype, participants, coaching, state, rng, breakdown)
        elif call.subtype == SpecialTeamsPlay.FIELD_GOAL:
            result = self._resolve_field_goal(participants, coaching, state, rng, breakdown)
        else:
            result = self._resolve_punt(participants, state, rng, breakdown)

        logger.debug("%s -> %s", call.display, result.display)
        return result

    # =========================================================================
    # Runs
    # =========================================================================

    @staticmethod
    def _carrier_rating(carrier: Optional[Player], run_play: RunPlay) -> int:
        """The capability that matters for whoever ended up with the ball."""
        if carrier is None:
            return DEFAULT_RATING
        if carrier.position == Position.QB:
            attribute = "Evasion"
        elif carrier.position == Position.WR:
            attribute = "Speed"
        elif run_play.is_perimeter:
            attribute = "Rush Speed"
        else:
            attribute = "Rush Power"
        return AttributeResolver.for_player(carrier, attribute)

    def _resolve_run(
        self,
        run_play: RunPlay,
        participants: PlayParticipants,
        coaching: PlayCoaching,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown],
    ) -> PlayResult:
        goal_line = state.distance_to_goal <= field.GOAL_LINE_DISTANCE
        profile = archetypes.GOAL_LINE_RUN if goal_line else self.RUN_PROFILES[run_play]
        carrier = participants.skill_player
        carrier_rating = self._carrier_rating(carrier, run_play)

        advantage = AdvantageModel.for_ratings(
            profile,
            participants.defensive_line_rating,
            coaching.offensive_coordinator,
            coaching.defensive_coordinator,
            carrier=carrier_rating,
            line=participants.offensive_line_rating,
        )
        table = self.tables.table_for_run(run_play, goal_line)
        draw = table.draw(rng, advantage)
        time_elapsed = rng.randint(*RUN_TIME[run_play])
        fumble = odds_hit(rng, self.tables.fumble_odds.get(run_play))
        out_of_bounds = rng.random() < RUN_STOP_CLOCK[run_play]

        if breakdown is not None:
            breakdown.calculation(
                f"{profile.name} advantage",
                {"carrier": carrier_rating, "line": participants.offensive_line_rating,
                 "defense": participants.defensive_line_rating},
                advantage,
            )
            breakdown.calculation(
                f"{table.name} draw", {"roll": draw.roll, "range": f"{draw.low}..{draw.high}"},
                f"{draw.kind.name} {draw.yards}",
            )
            breakdown.calculation("clock", {"seconds": time_elapsed, "out_of_bounds": out_of_bounds},
                                  "fumble" if fumble else "secure")

        return settle_play(
            PlayType.RUSH,
            draw.yards,
            time_elapsed,
            state,
            outcome=PlayOutcome.RUSH,
            turnover_outcome=PlayOutcome.FUMBLE_LOST if fumble else None,
            stop_reason="out_of_bounds" if out_of_bounds else None,
            touchdown_points=self.touchdown_points,
            primary_player=carrier,
            defender=participants.defender,
        )

    # =========================================================================
    # Passes
    # =========================================================================

    def _pass_advantage(
        self,
        pass_play: PassPlay,
        participants: PlayParticipants,
        coaching: PlayCoaching,
    ) -> float:
        profile = self.PASS_PROFILES.get(pass_play)
        if profile is None:
            return 0.0
        receiver = participants.skill_player
        receiver_attribute = "Evasion" if receiver is not None and receiver.position in BACKS else "Catching"
        return AdvantageModel.for_ratings(
            profile,
            AttributeResolver.for_player(participants.defender, "Coverage"),
            coaching.offensive_coordinator,
            coaching.defensive_coordinator,
            passer=AttributeResolver.for_player(participants.quarterback, "Accuracy"),
            receiver=AttributeResolver.for_player(receiver, receiver_attribute),
        )

    def _resolve_pass(
        self,
        pass_play: PassPlay,
        participants: PlayParticipants,
        coaching: PlayCoaching,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown],
    ) -> PlayResult:
        advantage = self._pass_advantage(pass_play, participants, coaching)
        table = self.tables.table_for_pass(pass_play, state.distance_to_goal)
        draw = table.draw(rng, advantage)
        time_elapsed = rng.randint(*PASS_TIME[pass_play])
        intercepted = odds_hit(rng, self.tables.interception_odds.get(pass_play))
        complete = draw.kind != BucketKind.INCOMPLETE

        if pass_play == PassPlay.HAIL_MARY:
            stop_reason = "hail_mary"
        elif not complete:
            stop_reason = "incomplete"
        elif rng.random() < COMPLETION_STOP_CLOCK:
            stop_reason = "out_of_bounds"
        else:
            stop_reason = None

        if breakdown is not None:
            breakdown.calculation(f"{pass_play.name.lower()} advantage", {}, advantage)
            breakdown.calculation(
                f"{table.name} draw", {"roll": draw.roll, "range": f"{draw.low}..{draw.high}"},
                f"{draw.kind.name} {draw.yards}",
            )
            breakdown.calculation("clock", {"seconds": time_elapsed, "stop": stop_reason},
                                  "intercepted" if intercepted else "no pick")

        return settle_play(
            PlayType.PASS,
            0 if intercepted else draw.yards,
            time_elapsed,
            state,
            outcome=PlayOutcome.COMPLETE if complete else PlayOutcome.INCOMPLETE,
            turnover_outcome=PlayOutcome.INTERCEPTION if intercepted else None,
            stop_reason=stop_reason,
            touchdown_points=self.touchdown_points,
            primary_player=participants.quarterback,
            target=participants.skill_player,
            defender=participants.defender,
        )

    # =========================================================================
    # Special teams
    # =========================================================================

    def field_goal_probability(
        self,
        kick_distance: int,
        kicker: Optional[Player],
        special_teams_coordinator: Optional[int] = None,
    ) -> float:
        """
        Chance (0-1) that an unblocked kick from ``kick_distance`` is good.

        Kicker accuracy counts for more on long kicks; a special-teams
        coordinator above average adds up to two points.
        """
        base_pct, sensitivity = field_goal_band(kick_distance)
        accuracy = AttributeResolver.for_player(kicker, "Accuracy")
        pct = (
            base_pct
            + (accuracy - DEFAULT_RATING) * KICKER_ACCURACY_FACTOR * sensitivity
            + coaching_bonus(special_teams_coordinator) - coaching_bonus(None)
        )
        low, high = FIELD_GOAL_PCT_BOUNDS
        return max(low, min(high, pct)) / 100

    def _resolve_field_goal(
        self,
        participants: PlayParticipants,
        coaching: PlayCoaching,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown],
    ) -> PlayResult:
        kicker = participants.kicker
        kick_distance = field.field_goal_distance(state.field_position)
        probability = self.field_goal_probability(kick_distance, kicker, coaching.special_teams_coordinator)
        blocked = odds_hit(rng, self.tables.field_goal_block_odds)
        made = not blocked and rng.random() < probability

        if breakdown is not None:
            breakdown.calculation("field goal", {"distance": kick_distance, "probability": probability},
                                  "blocked" if blocked else ("good" if made else "no good"))

        kicker_name = kicker.display_name if kicker else "Kicker"
        if blocked:
            return PlayResult.field_goal(
                False, rng.randint(*BLOCKED_KICK_TIME), outcome=PlayOutcome.FIELD_GOAL_BLOCKED,
                primary_player=kicker, description=f"{kicker_name} {kick_distance}-yard field goal BLOCKED",
            )
        time_elapsed = rng.randint(*FIELD_GOAL_TIME)
        verdict = "is GOOD" if made else "is NO GOOD"
        return PlayResult.field_goal(
            made, time_elapsed, primary_player=kicker,
            description=f"{kicker_name} {kick_distance}-yard field goal {verdict}",
        )

    def _resolve_punt(
        self,
        participants: PlayParticipants,
        state: GameState,
        rng: random.Random,
        breakdown: Optional[SimulationBreakdown],
    ) -> PlayResult:
        punter = participants.punter
        punter_name = punter.display_name if punter else "Punter"

        if odds_hit(rng, self.tables.punt_block_odds):
            # Recovered by the defense behind the line, never past the own goal line
            yards = max(rng.randint(*BLOCKED_PUNT_YARDS), -state.field_position)
            if breakdown is not None:
                breakdown.calculation("punt", {"yards": yards}, "blocked")
            return PlayResult.turnover(
                PlayType.PUNT, yards, rng.randint(*BLOCKED_KICK_TIME), outcome=PlayOutcome.PUNT_BLOCKED,
                primary_player=punter, description=f"{punter_name} punt BLOCKED",
            )

        low, high = punt_range(state.distance_to_goal)
        power = AttributeResolver.for_player(punter, "Punt Power")
        distance = rng.randint(low, high) + (power - DEFAULT_RATING) // PUNTER_POWER_DIVISOR
        time_elapsed = rng.randint(*PUNT_TIME)

        if distance >= state.distance_to_goal:
            # Into the end zone: receiving team starts at its 20
            yards = state.distance_to_goal - field.TOUCHBACK_SPOT
            outcome = PlayOutcome.TOUCHBACK
            description = f"{punter_name} punts into the end zone, touchback"
        else:
            yards = distance
            outcome = PlayOutcome.PUNT_RESULT
            description = f"{punter_name} punts {distance} yards"

        if breakdown is not None:
            breakdown.calculation("punt", {"range": f"{low}..{high}", "power": power}, f"{outcome.name} {yards}")

        return PlayResult.turnover(
            PlayType.PUNT, yards, time_elapsed, outcome=outcome,
            clock_stop_reason="kick", primary_player=punter, description=description,
        )
