"""
actions.py
Defines the base Action type and concrete action classes for the Liar's Party engine.
Actions are what a host submits on a player's (or the table's) behalf; engine.apply_action dispatches them.
Related modules:
- bid.py: Defines the Bid model used in BidAction.
- engine.py: Consumes Action objects to produce the next GameState.
- session.py: Records applied actions in its turn log.
"""

from dataclasses import dataclass
from typing import Tuple

from .bid import Bid
from .resolution import CallType


class Action:
    """
    Base class for all game actions.
    """
    pass


@dataclass(frozen=True)
class StartGameAction(Action):
    """Seat a fresh table. names (tuple[str]): one entry per seat, in seating order."""
    names: Tuple[str, ...]


@dataclass(frozen=True)
class RollAction(Action):
    """Shake every active player's cup."""
    pass


@dataclass(frozen=True)
class AcknowledgeRevealAction(Action):
    """The player currently peeking has seen their dice and hides them again."""
    pass


@dataclass(frozen=True)
class BidAction(Action):
    """
    Represents a bid action: the current player claims there are at least 'quantity' dice showing 'pip'.
    Args:
        bid (Bid): The bid being placed; its bidder_id is filled in by the engine.
    """
    bid: Bid


@dataclass(frozen=True)
class CallAction(Action):
    """
    Challenge the standing bid.
    Args:
        call_type (CallType): LIAR or SPOT_ON.
    """
    call_type: CallType


@dataclass(frozen=True)
class FinalizeAction(Action):
    """Lift the cups and settle the pending challenge."""
    pass


@dataclass(frozen=True)
class NextRoundAction(Action):
    """Move on after a round; reset_to_full_roster starts a rematch with full dice."""
    reset_to_full_roster: bool = False


@dataclass(frozen=True)
class RestartAction(Action):
    pass
