"""
session.py
Implements GameSession, the stateful companion to the pure engine. A host keeps one session per table:
it holds the current GameState, applies actions through engine.apply_action, emits events and keeps a
per-action turn log that can be exported as JSON.
Related modules:
- engine.py: All rule decisions.
- actions.py: Actions accepted by apply().
- persistence/: GameEvent, InMemoryRecorder and the JSON serializer.
"""

import datetime
import hashlib
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from ..persistence.events import GameEvent
from ..persistence.recorder import InMemoryRecorder
from ..persistence import serializer
from .actions import (
    AcknowledgeRevealAction,
    Action,
    BidAction,
    CallAction,
    FinalizeAction,
    NextRoundAction,
    RestartAction,
    RollAction,
    StartGameAction,
)
from .bid import Bid
from .config import DEFAULT_CONFIG, GameConfig
from .engine import Rejected, Result, apply_action, player_view, restart, revealing_player
from .resolution import CallType
from .state import GameState, Phase

log = logging.getLogger(__name__)


def new_game_id() -> str:
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    raw_id = f"table_{timestamp}_{os.getpid()}"
    return hashlib.sha256(raw_id.encode()).hexdigest()[:16]


class GameSession:
    """
    Holds one table's GameState and replaces it with each accepted action's result.
    Rejected actions leave the state alone and are reported as a 'Rejected' event.
    """
    def __init__(self, config: Optional[GameConfig] = None, rng=None, game_id: Optional[str] = None):
        """
        Args:
            config (GameConfig|None): Table configuration; DEFAULT_CONFIG if None.
            rng: Random source for rolls; built from config.rng_seed if None.
            game_id (str|None): Identifier stamped on events; generated if None.
        """
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else self.config.make_rng()
        self.game_id = game_id or new_game_id()
        self.state: GameState = restart()
        self.recorder = InMemoryRecorder()
        self._pending: List[GameEvent] = []
        # turn_log contains per-action snapshots that can be serialized to JSON
        self.turn_log: List[Dict[str, Any]] = []

    def _emit(self, event_type: str, payload: Dict[str, Any], player_type: Optional[str] = None):
        event = GameEvent(game_id=self.game_id, event_type=event_type, payload=payload,
                          player_type=player_type)
        self.recorder.record(event)
        self._pending.append(event)

    def pop_events(self) -> List[GameEvent]:
        """
        Return and clear the events emitted since the last call.
        """
        ev = list(self._pending)
        self._pending.clear()
        return ev

    def get_events(self) -> List[GameEvent]:
        """All events emitted so far (does not clear)."""
        return self.recorder.events()

    def _snapshot(self, actor: Optional[int], action: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        state = self.state
        bid = state.current_bid
        snap = {
            "actor": actor,
            "action": action,
            "public": {
                "round": state.round,
                "phase": state.phase.value,
                "current_turn_id": state.current_turn_id,
                "starting_player_id": state.starting_player_id,
                "current_bid": None if bid is None else (bid.quantity, bid.pip, bid.bidder_id),
                "winner_id": state.winner_id,
            },
            "players": [
                {"id": p.id, "name": p.name, "dice_count": p.dice_count, "dice": list(p.dice)}
                for p in state.players
            ],
        }
        self.turn_log.append(snap)
        return snap

    def apply(self, action: Action) -> Result:
        """
        Apply an action to the current state.
        Args:
            action (Action): What to do.
        Returns:
            The new GameState, or the Rejected value (state unchanged).
        """
        before = self.state
        actor = before.current_turn_id if isinstance(action, (BidAction, CallAction)) else None
        result = apply_action(before, action, rng=self.rng, config=self.config)
        if isinstance(result, Rejected):
            self._emit("Rejected", {"action": type(action).__name__, "kind": result.kind.value,
                                    "reason": result.reason})
            return result

        self.state = result
        self._record(before, action, result)
        self._snapshot(actor=actor, action={"type": type(action).__name__, **_action_payload(action)})
        return result

    def _record(self, before: GameState, action: Action, after: GameState) -> None:
        if isinstance(action, StartGameAction):
            self.recorder.clear()
            self.turn_log.clear()
            self._emit("GameStarted", {"players": [(p.id, p.name) for p in after.players]})
        elif isinstance(action, RollAction):
            self._emit("DiceRolled", {"round": after.round,
                                      "dice": {p.id: list(p.dice) for p in after.active_players}})
        elif isinstance(action, AcknowledgeRevealAction):
            peeker = revealing_player(before)
            self._emit("RevealAcknowledged", {"player": peeker.id if peeker else None}, "Human")
            if after.phase is Phase.BIDDING:
                self._emit("BiddingOpened", {"starter": after.current_turn_id})
        elif isinstance(action, BidAction):
            bid = after.current_bid
            self._emit("BidPlaced", {"player": bid.bidder_id, "bid": (bid.quantity, bid.pip)}, "Human")
        elif isinstance(action, CallAction):
            stage = after.stage
            self._emit("ChallengeCalled", {"caller": stage.caller_id, "call": stage.call_type.value,
                                           "bid": (stage.bid.quantity, stage.bid.pip)}, "Human")
        elif isinstance(action, FinalizeAction):
            res = after.resolution
            self._emit("ChallengeResolved", {
                "call": res.call_type.value,
                "caller": res.caller_id,
                "bidder": res.bid.bidder_id,
                "bid": (res.bid.quantity, res.bid.pip),
                "outcome": res.outcome.value,
                "total_matches": res.total_matches,
                "losers": list(res.losers),
                "all_dice": {pid: list(dice) for pid, dice in res.revealed},
            })
            for pid in res.eliminated:
                self._emit("PlayerEliminated", {"player": pid})
            if after.phase is Phase.GAME_OVER:
                self._emit("GameOver", {"winner": after.winner_id, "rounds_played": after.round})
        elif isinstance(action, NextRoundAction):
            self._emit("RoundStarted", {"round": after.round, "starter": after.starting_player_id,
                                        "rematch": action.reset_to_full_roster})
        elif isinstance(action, RestartAction):
            self._emit("Restarted", {})
        log.debug("%s: %s -> %s", type(action).__name__, before.phase.value, after.phase.value)

    # Convenience wrappers used by hosts.

    def start(self, names: Sequence[str]) -> Result:
        return self.apply(StartGameAction(tuple(names)))

    def roll(self) -> Result:
        return self.apply(RollAction())

    def acknowledge_reveal(self) -> Result:
        return self.apply(AcknowledgeRevealAction())

    def bid(self, quantity: int, pip: int) -> Result:
        return self.apply(BidAction(Bid(quantity, pip)))

    def call(self, call_type: CallType, finalize: bool = True) -> Result:
        """
        Challenge the standing bid. With finalize=True the showdown is settled right away.
        """
        result = self.apply(CallAction(call_type))
        if finalize and not isinstance(result, Rejected):
            result = self.apply(FinalizeAction())
        return result

    def finalize(self) -> Result:
        return self.apply(FinalizeAction())

    def next_round(self, reset_to_full_roster: bool = False) -> Result:
        return self.apply(NextRoundAction(reset_to_full_roster))

    def restart(self) -> Result:
        return self.apply(RestartAction())

    def view(self, player_id: int) -> Dict[str, Any]:
        return player_view(self.state, player_id)

    def is_game_over(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    def export_log(self, indent: Optional[int] = None) -> str:
        """JSON dump of the event stream and turn log, for replay tooling."""
        return serializer.dumps({
            "game_id": self.game_id,
            "events": [e.to_dict() for e in self.recorder.events()],
            "turn_log": self.turn_log,
        }, indent=indent)


def _action_payload(action: Action) -> Dict[str, Any]:
    if isinstance(action, BidAction):
        return {"bid": (action.bid.quantity, action.bid.pip)}
    if isinstance(action, CallAction):
        return {"call": CallType(action.call_type).value}
    if isinstance(action, NextRoundAction):
        return {"reset_to_full_roster": action.reset_to_full_roster}
    if isinstance(action, StartGameAction):
        return {"names": list(action.names)}
    return {}
