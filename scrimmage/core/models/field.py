"""Field position helpers.

Field position is an int on a 0-100 scale where:
- 0 = the offense's own goal line
- 50 = midfield
- 100 = the opponent's goal line (touchdown)

Gains add, losses subtract. The scale is always relative to the team in
possession, so a change of possession mirrors it with ``flip``.
"""

from enum import Enum, auto

OWN_GOAL_LINE = 0
MIDFIELD = 50
OPPONENT_GOAL_LINE = 100

KICKOFF_RETURN_SPOT = 25  # Where the receiving team starts after a score
TOUCHBACK_SPOT = 20  # Where a punt that reaches the end zone is spotted
RED_ZONE_START = 80  # Opponent 20 and in
GOAL_LINE_DISTANCE = 5  # Distance to goal that triggers goal-line play
END_ZONE_DEPTH = 10
GOAL_POST_OFFSET = 7  # Holder spot behind the line of scrimmage


class FieldZone(Enum):
    """Field zones for situational awareness."""

    BACKED_UP = auto()  # Own 10 and in
    OWN_TERRITORY = auto()  # Own 11 to midfield
    OPPONENT_TERRITORY = auto()  # Midfield to opponent 21
    RED_ZONE = auto()  # Opponent 20 and in


def clamp(field_position: int) -> int:
    """Clamp a field position onto the 0-100 scale."""
    return max(OWN_GOAL_LINE, min(OPPONENT_GOAL_LINE, field_position))


def flip(field_position: int) -> int:
    """Mirror a field position for the other team."""
    return OPPONENT_GOAL_LINE - field_position


def distance_to_goal(field_position: int) -> int:
    """Yards needed to reach the opponent's end zone."""
    return OPPONENT_GOAL_LINE - field_position


def field_goal_distance(field_position: int) -> int:
    """
    Length of a field goal attempted from this line of scrimmage.

    Adds the end zone depth and the holder's spot behind the line.
    """
    return distance_to_goal(field_position) + END_ZONE_DEPTH + GOAL_POST_OFFSET


def zone(field_position: int) -> FieldZone:
    """Get the field zone for a position."""
    if field_position <= 10:
        return FieldZone.BACKED_UP
    elif field_position <= MIDFIELD:
        return FieldZone.OWN_TERRITORY
    elif field_position < RED_ZONE_START:
        return FieldZone.OPPONENT_TERRITORY
    else:
        return FieldZone.RED_ZONE


def describe(field_position: int) -> str:
    """
    Human-readable field position.

    Returns strings like "Own 25", "Opp 30", "50" (midfield).
    """
    if field_position == MIDFIELD:
        return "50"
    elif field_position < MIDFIELD:
        return f"Own {field_position}"
    else:
        return f"Opp {flip(field_position)}"
