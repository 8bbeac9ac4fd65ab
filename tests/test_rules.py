import unittest
from liars_party.core.player import Player
from liars_party.core.rules import active_players, count_matches, next_active_player, total_dice


def table(*hands):
    """Seat players 1..n holding the given dice; an empty hand is an eliminated player."""
    return tuple(Player(id=i, name=f"P{i}", dice_count=len(h), dice=tuple(h))
                 for i, h in enumerate(hands, start=1))


class TestCountMatches(unittest.TestCase):
    def test_ones_are_wild_for_other_pips(self):
        players = table([1, 2], [3, 2, 2])
        self.assertEqual(count_matches(players, 2), 4)
        self.assertEqual(count_matches(players, 3), 2)

    def test_counting_ones_counts_only_ones(self):
        players = table([1, 2], [1, 3, 2])
        self.assertEqual(count_matches(players, 1), 2)

    def test_six_fives_from_four_fives_and_two_ones(self):
        players = table([5, 5, 1], [5, 3, 2], [5, 1, 6])
        self.assertEqual(count_matches(players, 5), 6)

    def test_eliminated_players_stale_dice_are_ignored(self):
        out = Player(id=3, name="P3", dice_count=0, dice=(5, 5, 1))
        players = table([5, 4], [2, 2]) + (out,)
        self.assertEqual(count_matches(players, 5), 1)

    def test_zero_matches(self):
        self.assertEqual(count_matches(table([2, 3], [4, 6]), 5), 0)

    def test_wilds_never_lower_the_count(self):
        players = table([1, 1, 4], [4, 6, 1], [2, 3, 5])
        for pip in range(2, 7):
            literal = sum(1 for p in players for d in p.dice if d == pip)
            self.assertGreaterEqual(count_matches(players, pip), literal)


class TestRotation(unittest.TestCase):
    def test_next_wraps_around(self):
        players = table([2], [3], [4])
        self.assertEqual(next_active_player(1, players), 2)
        self.assertEqual(next_active_player(3, players), 1)

    def test_eliminated_player_is_skipped(self):
        players = table([2, 2], [], [4])
        self.assertEqual(next_active_player(1, players), 3)
        self.assertEqual(next_active_player(3, players), 1)

    def test_unknown_or_eliminated_start_falls_back_to_first_active(self):
        players = table([], [3], [4])
        self.assertEqual(next_active_player(1, players), 2)
        self.assertEqual(next_active_player(99, players), 2)
        self.assertEqual(next_active_player(None, players), 2)

    def test_no_active_players_returns_none(self):
        self.assertIsNone(next_active_player(1, table([], [], [])))
        self.assertIsNone(next_active_player(1, ()))

    def test_single_active_player_follows_themself(self):
        self.assertEqual(next_active_player(2, table([], [3], [])), 2)

    def test_helpers(self):
        players = table([2, 2], [], [4])
        self.assertEqual([p.id for p in active_players(players)], [1, 3])
        self.assertEqual(total_dice(players), 3)


if __name__ == '__main__':
    unittest.main()
