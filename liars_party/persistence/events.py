"""
events.py
Defines GameEvent, the unit of the event stream a GameSession emits, and the closed set of event types.
Hosts drive animation and replays from these events instead of diffing states.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

EVENT_TYPES = (
    "GameStarted",
    "DiceRolled",
    "RevealAcknowledged",
    "BiddingOpened",
    "BidPlaced",
    "ChallengeCalled",
    "ChallengeResolved",
    "PlayerEliminated",
    "GameOver",
    "RoundStarted",
    "Restarted",
    "Rejected",
)


@dataclass
class GameEvent:
    """
    One thing that happened at the table.
    Fields:
        game_id (str): Session identifier.
        event_type (str): One of EVENT_TYPES.
        payload (dict): Event-specific data (ids, bids as (quantity, pip) pairs, dice lists).
        player_type (str|None): 'Human' when a seated player caused the event, None for table events.
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any]
    player_type: Optional[str] = None

    def __post_init__(self):
        if self.event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type {self.event_type!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
