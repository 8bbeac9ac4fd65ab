import math
import unittest
from liars_party.core.bid import Bid, is_valid_bid, suggest_next_bid


class TestBidOrdering(unittest.TestCase):
    """
    Tests for the wild-ones bid ladder in `is_valid_bid` / `Bid.is_higher_than`.
    """

    def test_opening_bid_accepts_any_well_formed_bid(self):
        self.assertTrue(is_valid_bid(None, Bid(1, 2)))
        self.assertTrue(is_valid_bid(None, Bid(1, 1)))
        self.assertTrue(is_valid_bid(None, Bid(9, 6)))

    def test_malformed_candidate_is_invalid(self):
        self.assertFalse(is_valid_bid(None, Bid(0, 2)))
        self.assertFalse(is_valid_bid(None, Bid(2, None)))
        self.assertFalse(is_valid_bid(Bid(1, 2), Bid(3, 9)))
        self.assertFalse(is_valid_bid(None, None))

    def test_plain_faces_quantity_then_pip(self):
        self.assertTrue(is_valid_bid(Bid(2, 6), Bid(3, 2)))
        self.assertTrue(is_valid_bid(Bid(2, 3), Bid(2, 4)))
        self.assertFalse(is_valid_bid(Bid(2, 3), Bid(2, 3)))
        self.assertFalse(is_valid_bid(Bid(2, 4), Bid(2, 3)))
        self.assertFalse(is_valid_bid(Bid(3, 2), Bid(2, 6)))

    def test_leaving_ones_doubles_the_bar(self):
        self.assertFalse(is_valid_bid(Bid(3, 1), Bid(5, 6)))
        self.assertTrue(is_valid_bid(Bid(3, 1), Bid(6, 2)))
        self.assertTrue(is_valid_bid(Bid(3, 1), Bid(7, 2)))

    def test_moving_onto_ones_halves_rounded_up(self):
        self.assertTrue(is_valid_bid(Bid(5, 4), Bid(3, 1)))
        self.assertFalse(is_valid_bid(Bid(5, 4), Bid(2, 1)))
        self.assertTrue(is_valid_bid(Bid(4, 4), Bid(2, 1)))
        self.assertFalse(is_valid_bid(Bid(4, 4), Bid(1, 1)))

    def test_ones_on_ones_needs_strict_increase(self):
        self.assertFalse(is_valid_bid(Bid(2, 1), Bid(2, 1)))
        self.assertTrue(is_valid_bid(Bid(2, 1), Bid(3, 1)))
        self.assertFalse(is_valid_bid(Bid(3, 1), Bid(2, 1)))

    def test_rounding_edge_single_die_onto_ones(self):
        # 1 two -> 1 one: ceil(1/2) == 1, so the switch onto ones is allowed
        self.assertTrue(is_valid_bid(None, Bid(1, 2)))
        self.assertTrue(is_valid_bid(Bid(1, 2), Bid(1, 1)))

    def test_halving_and_doubling_thresholds_hold_for_every_quantity(self):
        for q in range(1, 13):
            for pip in range(2, 7):
                need = math.ceil(q / 2)
                self.assertTrue(is_valid_bid(Bid(q, pip), Bid(need, 1)))
                if need > 1:
                    self.assertFalse(is_valid_bid(Bid(q, pip), Bid(need - 1, 1)))
                self.assertTrue(is_valid_bid(Bid(q, 1), Bid(q * 2, pip)))
                self.assertFalse(is_valid_bid(Bid(q, 1), Bid(q * 2 - 1, pip)))

    def test_accepted_bids_cannot_be_reversed(self):
        sequence = [Bid(1, 2), Bid(1, 5), Bid(2, 4), Bid(2, 1), Bid(3, 1), Bid(7, 2), Bid(7, 6)]
        for prev, nxt in zip(sequence, sequence[1:]):
            self.assertTrue(is_valid_bid(prev, nxt), (prev, nxt))
            self.assertFalse(is_valid_bid(nxt, prev), (nxt, prev))

    def test_leaving_ones_at_exact_double_can_be_walked_back(self):
        # 1 one -> 2 twos doubles the bar; 2 twos -> 1 one halves it again
        self.assertTrue(is_valid_bid(Bid(1, 1), Bid(2, 2)))
        self.assertTrue(is_valid_bid(Bid(2, 2), Bid(1, 1)))

    def test_is_higher_than_matches_is_valid_bid(self):
        self.assertTrue(Bid(2, 3).is_higher_than(None))
        self.assertTrue(Bid(3, 1).is_higher_than(Bid(6, 6)))
        self.assertFalse(Bid(5, 6).is_higher_than(Bid(3, 1)))


class TestBidSuggestion(unittest.TestCase):
    def test_suggestions(self):
        self.assertEqual(suggest_next_bid(None), Bid(1, 2))
        self.assertEqual(suggest_next_bid(Bid(3, 1, bidder_id=2)), Bid(6, 2))
        self.assertEqual(suggest_next_bid(Bid(3, 5, bidder_id=2)), Bid(4, 5))
        self.assertIsNone(suggest_next_bid(Bid(3, 5, bidder_id=2)).bidder_id)

    def test_suggestion_is_always_a_legal_raise(self):
        self.assertTrue(is_valid_bid(None, suggest_next_bid(None)))
        for q in range(1, 16):
            for pip in range(1, 7):
                current = Bid(q, pip)
                self.assertTrue(is_valid_bid(current, suggest_next_bid(current)), current)


if __name__ == '__main__':
    unittest.main()
