"""
bid.py
Defines the Bid model for Liar's Party, including validation, the wild-ones ordering ladder and bid suggestion.
Related modules:
- actions.py: Uses Bid in BidAction.
- engine.py: Validates and compares bids to enforce game rules.
- resolution.py: Reads the bid being challenged.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

WILD_PIP = 1


def pip_label(pip: int) -> str:
    """Human readable face name, e.g. 'ones (wild)' or '5s'."""
    return "ones (wild)" if pip == WILD_PIP else f"{pip}s"


@dataclass(frozen=True)
class Bid:
    """
    Represents a bid: a public claim that at least 'quantity' dice across the table show 'pip'.
    Args:
        quantity (int): Number of dice claimed.
        pip (int): Face value claimed (1-6). Ones are also wild for every other pip.
        bidder_id (int|None): Player who placed the bid; None for candidates and suggestions.
    """
    quantity: int
    pip: Optional[int]
    bidder_id: Optional[int] = None

    def is_well_formed(self) -> bool:
        """
        True if quantity is a positive integer and pip is a face between 1 and 6.
        """
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            return False
        if not isinstance(self.pip, int) or isinstance(self.pip, bool):
            return False
        return self.quantity >= 1 and 1 <= self.pip <= 6

    def validate(self) -> None:
        """
        Validates the bid shape.
        Raises:
            ValueError: If the pip or quantity is out of bounds.
        """
        if not isinstance(self.pip, int) or not (1 <= self.pip <= 6):
            raise ValueError("pip must be between 1 and 6")
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("quantity must be at least 1")

    def is_higher_than(self, other: Optional['Bid']) -> bool:
        """
        Checks whether this bid may follow another bid, per the wild-ones ladder.
        Args:
            other (Bid): The standing bid to compare against (or None for an opening bid).
        Returns:
            bool: True if this bid is a legal raise, False otherwise.
        """
        if not self.is_well_formed():
            return False
        if other is None:
            return True
        if other.pip == WILD_PIP and self.pip != WILD_PIP:
            # leaving ones doubles the bar
            return self.quantity >= other.quantity * 2
        if other.pip != WILD_PIP and self.pip == WILD_PIP:
            # moving onto ones halves it, rounded up
            return self.quantity >= math.ceil(other.quantity / 2)
        if other.pip == WILD_PIP and self.pip == WILD_PIP:
            return self.quantity > other.quantity
        if self.quantity != other.quantity:
            return self.quantity > other.quantity
        return self.pip > other.pip

    def with_bidder(self, bidder_id: int) -> 'Bid':
        return replace(self, bidder_id=bidder_id)

    def describe(self) -> str:
        return f"{self.quantity} {pip_label(self.pip)}"


def is_valid_bid(current: Optional[Bid], candidate: Optional[Bid]) -> bool:
    """
    Checks a proposed bid against the standing one.
    Args:
        current (Bid|None): The active bid, or None at the start of bidding.
        candidate (Bid|None): The proposed bid.
    Returns:
        bool: True if the candidate is well formed and beats the current bid.
    """
    if candidate is None:
        return False
    return candidate.is_higher_than(current)


def suggest_next_bid(current: Optional[Bid]) -> Bid:
    """
    Cheapest sensible raise over the current bid, used to pre-fill host inputs.
    Not validated here; is_valid_bid stays authoritative.
    """
    if current is None:
        return Bid(1, 2)
    if current.pip == WILD_PIP:
        return Bid(current.quantity * 2, 2)
    return Bid(current.quantity + 1, current.pip)
