"""Tests for field position helpers."""

import pytest

from scrimmage.core.models import field
from scrimmage.core.models.field import FieldZone


class TestFlip:
    """Tests for the field flip used on possession changes."""

    @pytest.mark.parametrize("position", range(0, 101))
    def test_flip_twice_is_identity(self, position):
        """Flipping twice always returns to the same spot."""
        assert field.flip(field.flip(position)) == position

    def test_flip_values(self):
        assert field.flip(46) == 54
        assert field.flip(0) == 100


class TestDistances:
    """Tests for distance helpers."""

    def test_distance_to_goal(self):
        assert field.distance_to_goal(25) == 75

    def test_field_goal_distance(self):
        """Kick length adds the end zone and the holder's spot."""
        assert field.field_goal_distance(92) == 25
        assert field.field_goal_distance(75) == 42

    def test_clamp(self):
        assert field.clamp(-4) == 0
        assert field.clamp(104) == 100
        assert field.clamp(37) == 37


class TestDescribe:
    """Tests for human-readable positions."""

    @pytest.mark.parametrize("position,expected", [
        (25, "Own 25"),
        (50, "50"),
        (70, "Opp 30"),
        (99, "Opp 1"),
    ])
    def test_describe(self, position, expected):
        assert field.describe(position) == expected

    @pytest.mark.parametrize("position,zone", [
        (5, FieldZone.BACKED_UP),
        (40, FieldZone.OWN_TERRITORY),
        (65, FieldZone.OPPONENT_TERRITORY),
        (80, FieldZone.RED_ZONE),
    ])
    def test_zone(self, position, zone):
        assert field.zone(position) == zone
