import argparse
import logging
from typing import List, Optional

from liars_party.core.bid import pip_label
from liars_party.core.config import GameConfig
from liars_party.core.engine import Rejected, revealing_player
from liars_party.core.resolution import CallType
from liars_party.core.session import GameSession
from liars_party.core.state import Phase

CLEAR = "\n" * 40


def describe_player(session: GameSession, player_id: Optional[int]) -> str:
    p = session.state.player(player_id)
    return p.name if p is not None else "nobody"


def print_table(session: GameSession):
    """
    Print the public state: round, dice counts, current bid and whose turn it is.
    Args:
        session (GameSession): The running table.
    """
    state = session.state
    print("\n=== ROUND {round} ===".format(round=state.round))
    for p in state.players:
        marker = ">" if p.id == state.current_turn_id else " "
        status = f"{p.dice_count} dice" if p.is_active else "out"
        print(f" {marker} {p.name}: {status}")
    bid = state.current_bid
    if bid is None:
        print("No bids yet. Raise the stakes.")
    else:
        print(f"Current bid: {bid.describe()} by {describe_player(session, bid.bidder_id)}")


def show_rules(config: GameConfig):
    """
    Print the rules to the terminal.
    Args:
        config (GameConfig): The game configuration.
    """
    print("\n=== GAME RULES ===")
    print(f"Players: {config.min_players}-{config.max_players}, {config.starting_dice} dice each.")
    print("Goal: be the last player with dice. Lose a challenge -> lose exactly 1 die.")
    print("Bids read 'X of Y' and must beat the previous bid: higher quantity, or same quantity and higher pip.")
    print("Ones are wild for every pip except when the bid itself is on ones.")
    print("Switching onto ones halves the quantity (round up); switching off ones doubles it.")
    print("LIAR: bid false -> bidder loses a die; bid true -> caller loses a die.")
    print("SPOT ON: exact -> everyone else loses a die; not exact -> caller loses a die.")
    print("The challenge loser starts the next round if still in; players at 0 dice are skipped.")


def private_reveals(session: GameSession):
    """Pass the device around so every active player peeks at their own dice."""
    while session.state.phase is Phase.REVEAL:
        peeker = revealing_player(session.state)
        input(f"\nPass the device to {peeker.name} and press Enter...")
        print(f"{peeker.name}, your dice: {' '.join(str(d) for d in peeker.dice)}")
        input("Press Enter to hide them...")
        print(CLEAR)
        session.acknowledge_reveal()


def prompt_int(prompt: str) -> Optional[int]:
    raw = input(prompt).strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        print("Please enter a valid integer.")
        return None


def bidding_turn(session: GameSession):
    """
    Prompt the player whose turn it is for a bid, a LIAR call or a SPOT ON call.
    """
    state = session.state
    suggestion = state.stage.suggested_bid
    print(f"\n{describe_player(session, state.current_turn_id)}, choose action:")
    print(f"  1) Bid (suggested: {suggestion.describe()})")
    if state.current_bid is not None:
        print("  2) Call LIAR")
        print("  3) Call SPOT ON")
    choice = input("Enter choice: ").strip()
    if choice == "1":
        qty = prompt_int(f"Enter quantity [{suggestion.quantity}]: ")
        if qty is None:
            qty = suggestion.quantity
        pip = prompt_int(f"Enter pip 1-6 [{suggestion.pip}]: ")
        if pip is None:
            pip = suggestion.pip
        result = session.bid(qty, pip)
        if isinstance(result, Rejected):
            print(f"Invalid bid: {result.reason}")
        else:
            print(f"New high bid: {qty} {pip_label(pip)}")
    elif choice in ("2", "3"):
        call_type = CallType.LIAR if choice == "2" else CallType.SPOT_ON
        result = session.call(call_type)
        if isinstance(result, Rejected):
            print(f"Illegal move: {result.reason}")
    else:
        print("Choice not recognized.")


def print_resolution(session: GameSession):
    res = session.state.resolution
    print("\n--- " + ("LIAR!" if res.call_type is CallType.LIAR else "SPOT ON!") + " ---")
    for pid, dice in res.revealed:
        print(f"{describe_player(session, pid)}: {' '.join(str(d) for d in dice)}")
    print(f"Bid {res.bid.describe()}: {res.total_matches} matching on the table.")
    print(res.detail)
    for pid in res.eliminated:
        print(f"{describe_player(session, pid)} is out of dice.")


def play(session: GameSession, names: List[str]):
    """
    Run a hot-seat game on one terminal until the players quit.
    Args:
        session (GameSession): A fresh session.
        names (list[str]): Player names in seating order.
    """
    result = session.start(names)
    if isinstance(result, Rejected):
        print(result.reason)
        return
    while True:
        phase = session.state.phase
        if phase is Phase.SHAKE:
            input("\nPress Enter to shake the cups...")
            session.roll()
        elif phase is Phase.REVEAL:
            private_reveals(session)
        elif phase is Phase.BIDDING:
            print_table(session)
            bidding_turn(session)
        elif phase is Phase.ROUND_END:
            print_resolution(session)
            print(f"{describe_player(session, session.state.starting_player_id)} starts the next round.")
            input("Press Enter for the next round...")
            session.next_round()
        elif phase is Phase.GAME_OVER:
            print_resolution(session)
            print(f"\n{describe_player(session, session.state.winner_id)} wins!")
            again = input("Rematch with the same players? (y/N): ").strip().lower()
            if again != "y":
                session.restart()
                return
            session.next_round(reset_to_full_roster=True)
        else:
            return


def ask_names(config: GameConfig, count: int) -> List[str]:
    names = []
    for seat in range(1, count + 1):
        default = config.default_name(seat)
        name = input(f"Name for seat {seat} [{default}]: ").strip()
        names.append(name or default)
    return names


def main(argv=None):
    parser = argparse.ArgumentParser(description="Hot-seat Liar's Dice for 3-6 players on one terminal.")
    parser.add_argument("--players", type=int, default=3, help="Number of players (3-6)")
    parser.add_argument("--seed", type=int, default=None, help="Seed the dice for a reproducible game")
    parser.add_argument("--verbose", action="store_true", help="Log engine transitions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    cfg = GameConfig(rng_seed=args.seed)
    if not (cfg.min_players <= args.players <= cfg.max_players):
        parser.error(f"--players must be between {cfg.min_players} and {cfg.max_players}")

    print("Welcome to Liar's Dice (hot-seat)")
    while True:
        print("\nMenu:\n  1) Show rules\n  2) Play\n  3) Quit")
        sel = input("Choose: ").strip()
        if sel == "1":
            show_rules(cfg)
            continue
        if sel == "2":
            try:
                play(GameSession(cfg), ask_names(cfg, args.players))
            except KeyboardInterrupt:
                print("\nExiting play loop.")
            continue
        if sel == "3":
            print("Goodbye")
            break
        print("Unknown choice")


if __name__ == "__main__":
    main()
