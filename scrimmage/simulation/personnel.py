"""Choose who takes part in a play when the call does not say."""

import dataclasses
import random
from typing import Optional, Sequence

from scrimmage.core.enums import (
    DEFENSIVE_LINE,
    LINEBACKERS,
    OFFENSIVE_LINE,
    SAFETIES,
    PassPlay,
    Position,
    PositionGroup,
    RunPlay,
    SpecialTeamsPlay,
)
from scrimmage.core.models.play import PlayCall, PlayParticipants
from scrimmage.core.models.player import Player, Roster

# Rotation depth: how many of the best players share the snaps
SKILL_ROTATION = 3
DEFENDER_ROTATION = 5

RECEIVERS = (Position.WR, Position.TE)
BACKS = (Position.RB, Position.FB)
CORNERS = (Position.CB,)
DEFENDERS = tuple(p for p in Position if p.group is PositionGroup.DEFENSE)


def pick(players: Sequence[Player], rng: random.Random, depth: int) -> Optional[Player]:
    """Pick uniformly among the first ``depth`` players (already ranked)."""
    if not players:
        return None
    return rng.choice(list(players[:depth]))


def select_quarterback(roster: Roster) -> Optional[Player]:
    """Starting quarterback: the best one on the roster."""
    ranked = roster.ranked((Position.QB,))
    return ranked[0] if ranked else None


def select_ball_carrier(roster: Roster, run_play: RunPlay, rng: random.Random) -> Optional[Player]:
    """Ball carrier for a run subtype."""
    if run_play == RunPlay.QB_RUN:
        return select_quarterback(roster)
    if run_play == RunPlay.READ_OPTION and rng.random() < 0.5:
        return select_quarterback(roster)  # Keeper
    if run_play == RunPlay.JET_SWEEP:
        return pick(roster.ranked((Position.WR,), "Speed"), rng, SKILL_ROTATION) or pick(
            roster.ranked(BACKS, "Rush Speed"), rng, SKILL_ROTATION
        )
    attribute = "Rush Speed" if run_play.is_perimeter else "Rush Power"
    return pick(roster.ranked(BACKS, attribute), rng, SKILL_ROTATION)


def select_receiver(roster: Roster, pass_play: PassPlay, rng: random.Random) -> Optional[Player]:
    """Intended target for a pass subtype."""
    if pass_play == PassPlay.RB_SCREEN:
        return pick(roster.ranked(BACKS, "Evasion"), rng, SKILL_ROTATION)
    if pass_play == PassPlay.WR_SCREEN:
        return pick(roster.ranked((Position.WR,), "Speed"), rng, SKILL_ROTATION)
    return pick(roster.ranked(RECEIVERS, "Catching"), rng, SKILL_ROTATION)


def defender_positions(call: PlayCall) -> tuple[Position, ...]:
    """Positions expected to make the play against this call."""
    if call.is_pass:
        if call.subtype.is_screen:
            return tuple(LINEBACKERS)
        if call.subtype.is_vertical:
            return (*SAFETIES, Position.CB)
        return CORNERS
    return (*LINEBACKERS, *DEFENSIVE_LINE)


def select_defender(roster: Roster, call: PlayCall, rng: random.Random) -> Optional[Player]:
    """Primary defender: a random pick from the best at the preferred positions."""
    attribute = "Coverage" if call.is_pass else "Tackling"
    preferred = roster.ranked(defender_positions(call), attribute)
    if not preferred:
        # Anybody on defense will do
        preferred = roster.ranked(DEFENDERS, attribute)
    return pick(preferred, rng, DEFENDER_ROTATION)


def select_specialist(roster: Roster, position: Position) -> Optional[Player]:
    """Best kicker or punter."""
    ranked = roster.ranked((position,))
    return ranked[0] if ranked else None


def select_from_rosters(
    call: PlayCall,
    offense: Roster,
    defense: Roster,
    rng: random.Random,
) -> PlayParticipants:
    """Pick every participant for a call from the rosters."""
    if call.is_special_teams:
        if call.subtype == SpecialTeamsPlay.FIELD_GOAL:
            return PlayParticipants(kicker=select_specialist(offense, Position.K))
        return PlayParticipants(punter=select_specialist(offense, Position.P))

    if call.is_run:
        skill = select_ball_carrier(offense, call.subtype, rng)
        line_attribute = "Run Blocking"
    else:
        skill = select_receiver(offense, call.subtype, rng)
        line_attribute = "Pass Blocking"

    return PlayParticipants(
        quarterback=select_quarterback(offense),
        skill_player=skill,
        defender=select_defender(defense, call, rng),
        offensive_line_rating=offense.unit_rating(OFFENSIVE_LINE, line_attribute),
        defensive_line_rating=defense.unit_rating(
            DEFENSIVE_LINE, "Run Defense" if call.is_run else "Pass Rush"
        ),
    )


def select_participants(
    call: PlayCall,
    offense: Roster,
    defense: Roster,
    rng: random.Random,
) -> PlayParticipants:
    """
    Resolve the players for a call.

    Participants already on the call win; anything left as ``None`` is
    picked from the rosters.
    """
    picked = select_from_rosters(call, offense, defense, rng)
    if call.participants is None:
        return picked

    supplied = {
        f.name: getattr(call.participants, f.name)
        for f in dataclasses.fields(PlayParticipants)
        if getattr(call.participants, f.name) is not None
    }
    return dataclasses.replace(picked, **supplied)
