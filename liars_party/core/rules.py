"""
rules.py
Defines helper functions for Liar's Party rules: counting matches with wild ones and turn rotation.
Related modules:
- resolution.py: Uses count_matches and next_active_player to settle challenges.
- engine.py: Uses next_active_player to advance turns.
"""

from typing import List, Optional, Sequence

from .bid import WILD_PIP
from .player import Player


def active_players(players: Sequence[Player]) -> List[Player]:
    """Players still holding dice, in seating order."""
    return [p for p in players if p.is_active]


def find_player(players: Sequence[Player], player_id: Optional[int]) -> Optional[Player]:
    for p in players:
        if p.id == player_id:
            return p
    return None


def count_matches(players: Sequence[Player], pip: int) -> int:
    """
    Count the dice matching a given pip across all active players.
    Ones are wild for every pip except 1 itself; eliminated players' stale dice are ignored.
    Args:
        players (sequence): The roster.
        pip (int): Face value to count.
    Returns:
        int: Total count of matching dice.
    """
    count = 0
    for p in active_players(players):
        if pip == WILD_PIP:
            count += sum(1 for d in p.dice if d == WILD_PIP)
        else:
            count += sum(1 for d in p.dice if d == pip or d == WILD_PIP)
    return count


def next_active_player(from_id: Optional[int], players: Sequence[Player]) -> Optional[int]:
    """
    Find whose turn follows from_id among the players still holding dice.
    Args:
        from_id (int|None): The player acting now.
        players (sequence): The roster in seating order.
    Returns:
        int|None: The next active player's id, wrapping around the table. If from_id is not
        active (e.g. just eliminated) the first active player is returned. None if nobody
        has dice left.
    """
    active = active_players(players)
    if not active:
        return None
    ids = [p.id for p in active]
    if from_id not in ids:
        return ids[0]
    return ids[(ids.index(from_id) + 1) % len(ids)]


def total_dice(players: Sequence[Player]) -> int:
    return sum(p.dice_count for p in players)
