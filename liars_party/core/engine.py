"""
engine.py
Implements the Liar's Party phase state machine as pure functions over GameState.
Every operation takes the current snapshot and returns the next one, or a Rejected value that carries the
unchanged state. Nothing here performs I/O, sleeps or keeps state between calls.
Related modules:
- state.py: GameState, Phase and the per-phase stage dataclasses.
- dice.py: roll_table for the shake.
- bid.py: Bid legality and suggestions.
- rules.py: Turn rotation.
- resolution.py: Challenge settlement.
- actions.py: Action objects dispatched by apply_action.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

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
from .bid import Bid, is_valid_bid, suggest_next_bid
from .config import DEFAULT_CONFIG, GameConfig
from .dice import roll_table
from .player import Player
from .resolution import CallType, resolve_challenge
from .rules import next_active_player
from .state import (
    Bidding,
    GameOver,
    GameState,
    Lobby,
    Phase,
    Reveal,
    RoundEnd,
    Shake,
    Showdown,
)

log = logging.getLogger(__name__)


class RejectionKind(Enum):
    ILLEGAL_INPUT = "illegal_input"
    ILLEGAL_PHASE = "illegal_phase"


@dataclass(frozen=True)
class Rejected:
    """
    Returned instead of a new state when an operation is refused.
    Fields:
        kind (RejectionKind): Bad input (e.g. a bid too low) or an operation outside its phase.
        reason (str): Human readable explanation.
        state (GameState): The untouched state the operation was given.
    """
    kind: RejectionKind
    reason: str
    state: GameState

    def __bool__(self) -> bool:
        return False


class IllegalMoveError(Exception):
    """
    Raised by unwrap() when an operation was rejected (invalid move, wrong phase, etc).
    """
    def __init__(self, rejection: Rejected):
        super().__init__(rejection.reason)
        self.rejection = rejection

    @property
    def kind(self) -> RejectionKind:
        return self.rejection.kind


class GameInvariantError(RuntimeError):
    """
    Raised when the state machine reaches a situation the rules make impossible,
    such as no active player being left to take a turn mid-game.
    """
    pass


Result = Union[GameState, Rejected]


def unwrap(result: Result) -> GameState:
    """
    Return the state from an operation result, raising IllegalMoveError if it was rejected.
    """
    if isinstance(result, Rejected):
        raise IllegalMoveError(result)
    return result


def _reject(state: GameState, kind: RejectionKind, reason: str) -> Rejected:
    log.info("Rejected in %s: %s", state.phase.value, reason)
    return Rejected(kind=kind, reason=reason, state=state)


def _wrong_phase(state: GameState, operation: str) -> Rejected:
    return _reject(state, RejectionKind.ILLEGAL_PHASE,
                   f"Cannot {operation} during {state.phase.value}")


def _first_active(players) -> Optional[int]:
    for p in players:
        if p.is_active:
            return p.id
    return None


def _require_active(state: GameState, player_id: Optional[int], role: str) -> int:
    p = state.player(player_id)
    if p is None or not p.is_active:
        raise GameInvariantError(f"{role} {player_id!r} is not an active player")
    return p.id


def _require_rotation(next_id: Optional[int], from_id: Optional[int]) -> int:
    if next_id is None:
        raise GameInvariantError(f"No active player left to follow {from_id!r}")
    return next_id


def start_game(names: Iterable[Optional[str]], config: GameConfig = DEFAULT_CONFIG) -> Result:
    """
    Seat a fresh table and move from LOBBY to SHAKE.
    Args:
        names (iterable[str]): One name per seat in seating order; blank names get the seat's default.
        config (GameConfig): Table size and starting dice.
    Returns:
        GameState in SHAKE with round 1 and the first seat as starter, or Rejected if the
        player count is outside the configured range.
    """
    names = list(names or [])
    lobby = GameState()
    if not (config.min_players <= len(names) <= config.max_players):
        return _reject(lobby, RejectionKind.ILLEGAL_INPUT,
                       f"Need {config.min_players}-{config.max_players} players, got {len(names)}")

    players = tuple(
        Player(id=seat, name=(name or "").strip() or config.default_name(seat),
               dice_count=config.starting_dice)
        for seat, name in enumerate(names, start=1)
    )
    starter = players[0].id
    log.debug("Game started with %s", [p.name for p in players])
    return GameState(players=players, round=1, starting_player_id=starter,
                     current_turn_id=starter, stage=Shake())


def roll_round(state: GameState, rng: Optional[random.Random] = None) -> Result:
    """
    Shake every cup: active players get dice_count fresh dice, eliminated players get none.
    Args:
        state (GameState): State in SHAKE.
        rng (random.Random|None): Random source; anything with randint(a, b). Defaults to system entropy.
    """
    if state.phase is not Phase.SHAKE:
        return _wrong_phase(state, "roll")
    if rng is None:
        rng = random.Random()
    players = roll_table(state.players, rng)
    log.debug("Round %d rolled", state.round)
    return replace(state, players=players, stage=Reveal(index=0))


def revealing_player(state: GameState) -> Optional[Player]:
    """The player whose turn it is to peek, or None outside REVEAL."""
    if not isinstance(state.stage, Reveal):
        return None
    active = state.active_players
    if state.stage.index < len(active):
        return active[state.stage.index]
    return None


def acknowledge_reveal(state: GameState) -> Result:
    """
    The peeking player is done. Advance to the next active player, or open bidding once everyone has looked.
    """
    if not isinstance(state.stage, Reveal):
        return _wrong_phase(state, "acknowledge a reveal")
    next_index = state.stage.index + 1
    if next_index < len(state.active_players):
        return replace(state, stage=Reveal(index=next_index))

    starter = state.starting_player_id
    starter_player = state.player(starter)
    if starter_player is None or not starter_player.is_active:
        starter = _first_active(state.players)
    starter = _require_rotation(starter, state.starting_player_id)
    log.debug("Bidding opens with player %s", starter)
    return replace(state, starting_player_id=starter, current_turn_id=starter,
                   stage=Bidding(current_bid=None, suggested_bid=suggest_next_bid(None)))


def place_bid(state: GameState, candidate: Bid) -> Result:
    """
    Record a bid for the player whose turn it is and pass the turn on.
    Args:
        state (GameState): State in BIDDING.
        candidate (Bid): Quantity and pip; any bidder_id on it is ignored.
    Returns:
        The next GameState, or Rejected if the bid is malformed or does not beat the current one.
    """
    if not isinstance(state.stage, Bidding):
        return _wrong_phase(state, "bid")
    if candidate is None or not candidate.is_well_formed():
        return _reject(state, RejectionKind.ILLEGAL_INPUT,
                       "Bid needs a quantity of at least 1 and a pip between 1 and 6")
    current = state.stage.current_bid
    if not is_valid_bid(current, candidate):
        return _reject(state, RejectionKind.ILLEGAL_INPUT,
                       f"{candidate.describe()} does not beat {current.describe()}")

    bidder = _require_active(state, state.current_turn_id, "Bidder")
    placed = Bid(candidate.quantity, candidate.pip, bidder_id=bidder)
    next_turn = _require_rotation(next_active_player(bidder, state.players), bidder)
    log.debug("Player %s bids %s", bidder, placed.describe())
    return replace(state, current_turn_id=next_turn,
                   stage=Bidding(current_bid=placed, suggested_bid=suggest_next_bid(placed)))


def _as_call_type(call_type: Any) -> Optional[CallType]:
    if isinstance(call_type, CallType):
        return call_type
    try:
        return CallType(call_type)
    except ValueError:
        return None


def call_challenge(state: GameState, call_type: Union[CallType, str]) -> Result:
    """
    The player whose turn it is challenges the standing bid; the game enters SHOWDOWN.
    The outcome is only applied by finalize_resolution.
    """
    if not isinstance(state.stage, Bidding):
        return _wrong_phase(state, "call a challenge")
    kind = _as_call_type(call_type)
    if kind is None:
        return _reject(state, RejectionKind.ILLEGAL_INPUT, f"Unknown call {call_type!r}")
    if state.stage.current_bid is None:
        return _reject(state, RejectionKind.ILLEGAL_PHASE, "No bid to challenge yet")
    caller = _require_active(state, state.current_turn_id, "Caller")
    log.debug("Player %s calls %s", caller, kind.value)
    return replace(state, stage=Showdown(call_type=kind, caller_id=caller,
                                         bid=state.stage.current_bid))


def finalize_resolution(state: GameState) -> Result:
    """
    Settle the pending challenge: take dice, choose the next starter and end the round or the game.
    """
    if not isinstance(state.stage, Showdown):
        return _wrong_phase(state, "resolve a challenge")
    showdown = state.stage
    resolution = resolve_challenge(showdown.call_type, showdown.caller_id, showdown.bid, state.players)
    starter = _require_rotation(resolution.next_starter_id, showdown.caller_id)

    if resolution.winner_id is not None:
        stage = GameOver(winner_id=resolution.winner_id, resolution=resolution)
        log.debug("Game over, player %s wins", resolution.winner_id)
    else:
        stage = RoundEnd(resolution=resolution)
    return replace(state, players=resolution.players, starting_player_id=starter,
                   current_turn_id=starter, stage=stage)


def call_and_resolve(state: GameState, call_type: Union[CallType, str]) -> Result:
    """call_challenge followed immediately by finalize_resolution, for hosts without a showdown animation."""
    called = call_challenge(state, call_type)
    if isinstance(called, Rejected):
        return called
    return finalize_resolution(called)


def next_round(state: GameState, reset_to_full_roster: bool = False,
               config: GameConfig = DEFAULT_CONFIG) -> Result:
    """
    Start the next round, or a rematch with the same roster.
    Args:
        state (GameState): State in ROUND_END, or GAME_OVER for a rematch.
        reset_to_full_roster (bool): Give every player config.starting_dice again and restart at round 1.
    Returns:
        GameState in SHAKE, or Rejected when continuing a finished game without a reset.
    """
    if state.phase is Phase.GAME_OVER and not reset_to_full_roster:
        return _reject(state, RejectionKind.ILLEGAL_PHASE,
                       "The game is over; start a rematch or restart")
    if state.phase not in (Phase.ROUND_END, Phase.GAME_OVER):
        return _wrong_phase(state, "start the next round")

    players = tuple(
        replace(p, dice=(), dice_count=config.starting_dice if reset_to_full_roster else p.dice_count)
        for p in state.players
    )
    starter = state.starting_player_id
    if not any(p.id == starter and p.is_active for p in players):
        starter = _first_active(players)
    starter = _require_rotation(starter, state.starting_player_id)
    new_round = 1 if reset_to_full_roster else state.round + 1
    log.debug("Round %d begins, starter %s", new_round, starter)
    return replace(state, players=players, round=new_round, starting_player_id=starter,
                   current_turn_id=starter, stage=Shake())


def restart() -> GameState:
    """Abort whatever is going on and return to an empty lobby."""
    return GameState(stage=Lobby())


def apply_action(state: GameState, action: Action, rng: Optional[random.Random] = None,
                 config: GameConfig = DEFAULT_CONFIG) -> Result:
    """
    Dispatch an Action to the matching operation.
    Args:
        state (GameState): Current state.
        action (Action): What the host wants to do.
        rng (random.Random|None): Used by RollAction only.
        config (GameConfig): Used by StartGameAction and NextRoundAction.
    """
    if isinstance(action, StartGameAction):
        if state.phase is not Phase.LOBBY:
            return _wrong_phase(state, "start a game")
        return start_game(action.names, config)
    if isinstance(action, RollAction):
        return roll_round(state, rng)
    if isinstance(action, AcknowledgeRevealAction):
        return acknowledge_reveal(state)
    if isinstance(action, BidAction):
        return place_bid(state, action.bid)
    if isinstance(action, CallAction):
        return call_challenge(state, action.call_type)
    if isinstance(action, FinalizeAction):
        return finalize_resolution(state)
    if isinstance(action, NextRoundAction):
        return next_round(state, action.reset_to_full_roster, config)
    if isinstance(action, RestartAction):
        return restart()
    return _reject(state, RejectionKind.ILLEGAL_INPUT, f"Unknown action {action!r}")


def player_view(state: GameState, player_id: int) -> Dict[str, Any]:
    """
    Get a player-specific view of the game (public info plus only that player's dice).
    Every player's dice become visible once a challenge has been called.
    Args:
        state (GameState): Current state.
        player_id (int): Whose view to build.
    Returns:
        dict: View for host rendering.
    """
    me = state.player(player_id)
    if isinstance(state.stage, Showdown):
        all_dice = {p.id: tuple(p.dice) for p in state.active_players}
    elif state.resolution is not None:
        all_dice = dict(state.resolution.revealed)
    else:
        all_dice = None
    return {
        "player_id": player_id,
        "phase": state.phase,
        "round": state.round,
        "current_bid": state.current_bid,
        "current_turn_id": state.current_turn_id,
        "starting_player_id": state.starting_player_id,
        "dice_counts": {p.id: p.dice_count for p in state.players},
        "my_dice": tuple(me.dice) if me is not None else (),
        "all_dice": all_dice,
    }
