"""
resolution.py
Settles LIAR and SPOT ON challenges against the hidden dice pool.
resolve_challenge is pure: it takes the roster and bid explicitly and returns a new roster inside a Resolution.
Related modules:
- rules.py: count_matches and next_active_player.
- engine.py: Calls resolve_challenge when a showdown is finalized.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .bid import Bid
from .player import Player
from .rules import active_players, count_matches, find_player, next_active_player

log = logging.getLogger(__name__)


class CallType(Enum):
    LIAR = "liar"
    SPOT_ON = "spot_on"


class Outcome(Enum):
    BID_STANDS = "bid_stands"
    BLUFF_CAUGHT = "bluff_caught"
    EXACT = "exact"
    MISSED = "missed"


DETAILS = {
    Outcome.BID_STANDS: "Bid holds. Caller loses a die.",
    Outcome.BLUFF_CAUGHT: "Caught the bluff. Bidder loses a die.",
    Outcome.EXACT: "Spot on! Everyone else drops a die.",
    Outcome.MISSED: "Not exact. Caller loses a die.",
}


@dataclass(frozen=True)
class Resolution:
    """
    Result of a settled challenge.
    Fields:
        call_type (CallType): LIAR or SPOT_ON.
        caller_id (int): Player who made the call.
        bid (Bid): The challenged bid.
        outcome (Outcome): Which branch of the rules applied.
        detail (str): One-line explanation for hosts.
        players (tuple[Player]): Roster after dice were taken, with every player's dice cleared.
        total_matches (int): Matching dice on the table, wild ones included.
        losers (tuple[int]): Ids of players that lost a die.
        eliminated (tuple[int]): Ids of players that lost their last die in this resolution.
        revealed (tuple): (player_id, dice) pairs for every active player as the cups were lifted.
        round_loser_id (int): Anchor for choosing the next starter.
        next_starter_id (int|None): Who opens the next round (the winner once the game is over).
        winner_id (int|None): Set when exactly one player has dice left.
    """
    call_type: CallType
    caller_id: int
    bid: Bid
    outcome: Outcome
    detail: str
    players: Tuple[Player, ...]
    total_matches: int
    losers: Tuple[int, ...]
    eliminated: Tuple[int, ...]
    revealed: Tuple[Tuple[int, Tuple[int, ...]], ...]
    round_loser_id: int
    next_starter_id: Optional[int]
    winner_id: Optional[int] = None

    @property
    def is_game_over(self) -> bool:
        return self.winner_id is not None


def _take_dice(players: Sequence[Player], loser_ids) -> Tuple[Player, ...]:
    return tuple(p.lose_die() if p.id in loser_ids else p for p in players)


def resolve_challenge(call_type: CallType, caller_id: int, bid: Bid,
                      players: Sequence[Player]) -> Resolution:
    """
    Resolve a challenge against the current bid.
    Args:
        call_type (CallType): LIAR or SPOT_ON.
        caller_id (int): Player making the call.
        bid (Bid): The standing bid; must carry its bidder_id.
        players (sequence): The roster with this round's dice.
    Returns:
        Resolution: Outcome, updated roster and the next starter.
    Raises:
        ValueError: If there is no bid, the bid has no bidder or the caller is not seated.
    """
    if bid is None:
        raise ValueError("No bid to challenge")
    if bid.bidder_id is None:
        raise ValueError("Challenged bid has no bidder")
    if find_player(players, caller_id) is None:
        raise ValueError(f"Unknown caller {caller_id}")

    total = count_matches(players, bid.pip)

    if call_type is CallType.LIAR:
        if total >= bid.quantity:
            outcome, loser_ids, round_loser = Outcome.BID_STANDS, (caller_id,), caller_id
        else:
            outcome, loser_ids, round_loser = Outcome.BLUFF_CAUGHT, (bid.bidder_id,), bid.bidder_id
    elif call_type is CallType.SPOT_ON:
        if total == bid.quantity:
            # the caller keeps all of their dice
            loser_ids = tuple(p.id for p in active_players(players) if p.id != caller_id)
            outcome, round_loser = Outcome.EXACT, caller_id
        else:
            outcome, loser_ids, round_loser = Outcome.MISSED, (caller_id,), caller_id
    else:
        raise ValueError(f"Unknown call type {call_type!r}")

    updated = tuple(p.cleared() for p in _take_dice(players, loser_ids))
    eliminated = tuple(
        p.id for p, before in zip(updated, players) if before.is_active and not p.is_active
    )

    remaining = active_players(updated)
    winner_id = remaining[0].id if len(remaining) == 1 else None
    if winner_id is not None:
        next_starter = winner_id
    elif find_player(remaining, round_loser) is not None:
        next_starter = round_loser
    else:
        next_starter = next_active_player(caller_id, updated)

    log.debug("%s on %s: %d matching, %s, losers=%s, next starter=%s",
              call_type.value, bid.describe(), total, outcome.value, loser_ids, next_starter)

    return Resolution(
        call_type=call_type,
        caller_id=caller_id,
        bid=bid,
        outcome=outcome,
        detail=DETAILS[outcome],
        players=updated,
        total_matches=total,
        losers=tuple(loser_ids),
        eliminated=eliminated,
        revealed=tuple((p.id, tuple(p.dice)) for p in active_players(players)),
        round_loser_id=round_loser,
        next_starter_id=next_starter,
        winner_id=winner_id,
    )
