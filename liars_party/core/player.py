"""
player.py
Defines the Player record shared by the rules, resolution and state modules.
Players are immutable; every change produces a new record.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple


@dataclass(frozen=True)
class Player:
    """
    One seat at the table.
    Fields:
        id (int): Stable identifier assigned at game start (1-based seat number).
        name (str): Display name set in the lobby.
        dice_count (int): Dice currently owned; zero means eliminated.
        dice (tuple[int]): Faces rolled this round; empty before rolling and after resolution.
    """
    id: int
    name: str
    dice_count: int
    dice: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.dice_count > 0

    def lose_die(self) -> 'Player':
        return replace(self, dice_count=max(0, self.dice_count - 1))

    def with_dice(self, dice) -> 'Player':
        return replace(self, dice=tuple(dice))

    def cleared(self) -> 'Player':
        return replace(self, dice=())
