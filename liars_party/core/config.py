"""
config.py
Defines the GameConfig dataclass, which centralizes the numeric constants of the Liar's Party engine.
The ruleset itself is fixed (ones are always wild); only table sizes and seeding live here.
Related modules:
- engine.py: Uses GameConfig to build rosters and check player counts.
- session.py: Uses GameConfig to seed the dice RNG.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes numeric constraints for a hot-seat Liar's Dice game.
    Fields:
        starting_dice (int): Dice each player holds at game start and after a rematch.
        min_players (int): Smallest table allowed.
        max_players (int): Largest table allowed.
        faces (tuple): Allowed die faces.
        default_names (tuple): Names used for blank seats.
        rng_seed (int|None): Seed for deterministic games; None draws from system entropy.
    """
    starting_dice: int = 5
    min_players: int = 3
    max_players: int = 6
    faces: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
    default_names: Tuple[str, ...] = (
        "Player 1", "Player 2", "Player 3", "Player 4", "Player 5", "Player 6",
    )
    rng_seed: Optional[int] = None

    def make_rng(self) -> random.Random:
        """Build the random source used for rolling, honoring rng_seed."""
        return random.Random(self.rng_seed)

    def default_name(self, seat: int) -> str:
        # seat is 1-based
        if 1 <= seat <= len(self.default_names):
            return self.default_names[seat - 1]
        return f"Player {seat}"


DEFAULT_CONFIG = GameConfig()
