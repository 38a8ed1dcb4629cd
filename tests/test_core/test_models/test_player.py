"""Tests for Player and Roster."""

from scrimmage.core.enums import OFFENSIVE_LINE, Position, PositionGroup
from scrimmage.core.models.player import STANDARD_LINEUP, Player, Roster


class TestPosition:
    """Tests for Position helpers."""

    def test_groups(self):
        assert Position.QB.group is PositionGroup.OFFENSE
        assert Position.T.group is PositionGroup.OFFENSE
        assert Position.FS.group is PositionGroup.DEFENSE
        assert Position.K.group is PositionGroup.SPECIAL_TEAMS

    def test_parse(self):
        assert Position.parse(" wr ") is Position.WR
        assert Position.parse("XX") is None


class TestPlayer:
    """Tests for Player."""

    def test_with_ratings_maps_names_to_slots(self, qb_player):
        """Named capabilities land in the position's slots."""
        assert qb_player.ratings == [90, 80, 40]
        assert qb_player.rating("Accuracy") == 90
        assert qb_player.rating("Evasion") == 40

    def test_unknown_capability_is_average(self, qb_player):
        assert qb_player.rating("Punt Power") == 50

    def test_with_ratings_ignores_foreign_capabilities(self):
        player = Player.with_ratings(Position.CB, coverage=80, rush_power=99)
        assert player.ratings == [80, 50, 50]

    def test_names(self, rb_player):
        assert rb_player.full_name == "Derrick Henry"
        assert rb_player.display_name == "D. Henry"
        assert str(rb_player) == "RB D. Henry"

    def test_overall(self, wr_player):
        assert wr_player.overall == round((85 + 80 + 99) / 3)

    def test_capabilities(self, kicker):
        assert kicker.capabilities() == {"Leg Strength": 90, "Accuracy": 95, "Consistency": 90}


class TestRoster:
    """Tests for Roster lookups."""

    def test_add_and_remove(self, qb_player):
        roster = Roster.from_players([qb_player])
        assert len(roster) == 1
        assert roster.get_player(qb_player.id) is qb_player
        assert roster.remove_player(qb_player.id) is qb_player
        assert len(roster) == 0

    def test_ranked_by_attribute(self):
        slow = Player.with_ratings(Position.RB, "Slow Back", rush_speed=40)
        fast = Player.with_ratings(Position.RB, "Fast Back", rush_speed=90)
        roster = Roster.from_players([slow, fast])
        assert roster.ranked((Position.RB,), "Rush Speed") == [fast, slow]

    def test_unit_rating(self):
        roster = Roster.from_players([
            Player.with_ratings(Position.C, run_blocking=60),
            Player.with_ratings(Position.G, run_blocking=80),
        ])
        assert roster.unit_rating(OFFENSIVE_LINE, "Run Blocking") == 70

    def test_empty_unit_is_average(self):
        assert Roster().unit_rating(OFFENSIVE_LINE, "Run Blocking") == 50

    def test_uniform(self):
        roster = Roster.uniform("Test", 70, offensive_coordinator=80)
        assert len(roster) == sum(STANDARD_LINEUP.values())
        assert roster.offensive_coordinator == 80
        assert all(p.ratings == [70, 70, 70] for p in roster.players.values())
