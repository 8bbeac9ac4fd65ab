"""
dice.py
Dice rolling for the shake phase. Randomness is always passed in: production code hands over a
random.Random, tests hand over a scripted source with the same randint(a, b) method.
Related modules:
- engine.py: roll_round uses roll_table to refill every cup at once.
"""

import random
from typing import Sequence, Tuple

from .player import Player

FACES = 6


def roll_die(rng: random.Random) -> int:
    return rng.randint(1, FACES)


def roll_n(n: int, rng: random.Random) -> Tuple[int, ...]:
    """
    Roll n independent dice. Zero or fewer dice yields an empty tuple.
    """
    return tuple(roll_die(rng) for _ in range(max(0, n)))


def roll_table(players: Sequence[Player], rng: random.Random) -> Tuple[Player, ...]:
    """
    Give every active player dice_count fresh dice, in seating order.
    Args:
        players (sequence[Player]): The roster.
        rng (random.Random): Random source.
    Returns:
        tuple[Player]: The roster with new dice; eliminated players hold an empty sequence.
    """
    return tuple(p.with_dice(roll_n(p.dice_count, rng) if p.is_active else ()) for p in players)
