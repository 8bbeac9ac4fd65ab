"""
state.py
Defines the game state for Liar's Party: the Phase enumeration, one stage dataclass per phase and the GameState snapshot.
A GameState is never mutated; engine operations return a new one.
Related modules:
- engine.py: Builds successive GameState values.
- player.py, bid.py, resolution.py: Types carried by the stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union

from .bid import Bid, suggest_next_bid
from .player import Player
from .resolution import CallType, Resolution
from .rules import active_players, find_player, total_dice


class Phase(Enum):
    LOBBY = "lobby"
    SHAKE = "shake"
    REVEAL = "reveal"
    BIDDING = "bidding"
    SHOWDOWN = "showdown"
    ROUND_END = "round_end"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Lobby:
    phase: ClassVar[Phase] = Phase.LOBBY


@dataclass(frozen=True)
class Shake:
    phase: ClassVar[Phase] = Phase.SHAKE


@dataclass(frozen=True)
class Reveal:
    """Private peek: index points into the active players, in seating order."""
    phase: ClassVar[Phase] = Phase.REVEAL
    index: int = 0


@dataclass(frozen=True)
class Bidding:
    """
    Bidding is open.
    Fields:
        current_bid (Bid|None): Highest bid so far, with its bidder; None until the opening bid.
        suggested_bid (Bid): Pre-filled raise for the host's inputs. Display only.
    """
    phase: ClassVar[Phase] = Phase.BIDDING
    current_bid: Optional[Bid] = None
    suggested_bid: Bid = field(default_factory=lambda: suggest_next_bid(None))


@dataclass(frozen=True)
class Showdown:
    """A challenge has been called and is waiting to be finalized."""
    phase: ClassVar[Phase] = Phase.SHOWDOWN
    call_type: CallType
    caller_id: int
    bid: Bid


@dataclass(frozen=True)
class RoundEnd:
    phase: ClassVar[Phase] = Phase.ROUND_END
    resolution: Resolution


@dataclass(frozen=True)
class GameOver:
    phase: ClassVar[Phase] = Phase.GAME_OVER
    winner_id: int
    resolution: Optional[Resolution] = None


Stage = Union[Lobby, Shake, Reveal, Bidding, Showdown, RoundEnd, GameOver]


@dataclass(frozen=True)
class GameState:
    """
    Authoritative snapshot of a game.
    Fields:
        players (tuple[Player]): Roster in seating order; membership is fixed for the whole game.
        round (int): Round number, starting at 1.
        starting_player_id (int|None): Who opens bidding this round.
        current_turn_id (int|None): Who must bid or call next.
        stage (Stage): The current phase together with the data only that phase carries.
    """
    players: Tuple[Player, ...] = ()
    round: int = 1
    starting_player_id: Optional[int] = None
    current_turn_id: Optional[int] = None
    stage: Stage = field(default_factory=Lobby)

    @property
    def phase(self) -> Phase:
        return self.stage.phase

    @property
    def current_bid(self) -> Optional[Bid]:
        if isinstance(self.stage, Bidding):
            return self.stage.current_bid
        if isinstance(self.stage, Showdown):
            return self.stage.bid
        return None

    @property
    def resolution(self) -> Optional[Resolution]:
        if isinstance(self.stage, (RoundEnd, GameOver)):
            return self.stage.resolution
        return None

    @property
    def winner_id(self) -> Optional[int]:
        if isinstance(self.stage, GameOver):
            return self.stage.winner_id
        return None

    @property
    def active_players(self) -> List[Player]:
        return active_players(self.players)

    @property
    def total_dice(self) -> int:
        return total_dice(self.players)

    def player(self, player_id: Optional[int]) -> Optional[Player]:
        return find_player(self.players, player_id)
