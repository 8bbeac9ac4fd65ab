import unittest
from liars_party.core.bid import Bid, pip_label


class TestBidValidation(unittest.TestCase):
    """
    Tests for `Bid.validate` and `Bid.is_well_formed`: quantity must be at least one and the pip
    must be a face between 1 and 6.
    """

    def test_validate_rejects_bad_pip(self):
        with self.assertRaises(ValueError):
            Bid(1, 0).validate()
        with self.assertRaises(ValueError):
            Bid(1, 7).validate()
        with self.assertRaises(ValueError):
            Bid(1, None).validate()

    def test_validate_rejects_non_positive_quantity(self):
        with self.assertRaises(ValueError):
            Bid(0, 3).validate()
        with self.assertRaises(ValueError):
            Bid(-2, 3).validate()

    def test_validate_accepts_large_quantity(self):
        # no upper bound: bids past the dice on the table are legal bluffs
        Bid(40, 6).validate()

    def test_is_well_formed(self):
        self.assertTrue(Bid(1, 1).is_well_formed())
        self.assertTrue(Bid(3, 6).is_well_formed())
        self.assertFalse(Bid(0, 2).is_well_formed())
        self.assertFalse(Bid(2, None).is_well_formed())
        self.assertFalse(Bid(2, 7).is_well_formed())
        self.assertFalse(Bid(True, 2).is_well_formed())

    def test_with_bidder_keeps_claim(self):
        b = Bid(3, 4).with_bidder(2)
        self.assertEqual(b, Bid(3, 4, bidder_id=2))
        self.assertNotEqual(b, Bid(3, 4))

    def test_describe(self):
        self.assertEqual(pip_label(1), "ones (wild)")
        self.assertEqual(pip_label(5), "5s")
        self.assertEqual(Bid(6, 5).describe(), "6 5s")
        self.assertEqual(Bid(2, 1).describe(), "2 ones (wild)")


if __name__ == '__main__':
    unittest.main()
