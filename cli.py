#!/usr/bin/env python3
"""
CLI for playing the fixed-limit engine without the HTTP service.

Usage:
    python cli.py                        # 1 human + 3 medium bots, blinds 5/10
    python cli.py --bots 5               # 1 human + 5 bots
    python cli.py --bots 2 --difficulty hard
    python cli.py --blinds 25 50 --stack 5000
    python cli.py --watch                # all bots, no human (spectator mode)
    python cli.py --hands 10 --seed 7    # play 10 reproducible hands then stop
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional, Sequence

from holdem.ai.bot import RuleBot
from holdem.ai.decision import Decision, DecisionSource, play_turn
from holdem.core.card import Card
from holdem.core.hand_evaluator import evaluate_best_hand
from holdem.game.betting import ValidActions, get_valid_actions
from holdem.game.config import GameConfig, SeatConfig
from holdem.game.engine import create_game, get_game_winner, is_game_over, start_hand
from holdem.game.game_state import ActionType, GamePhase, GameState, Player, PlayerStatus


# -- ANSI colors ---------------------------------------------------------------

RESET  = "\033[0m"
BOLD   = "\033[1m"
DIM    = "\033[2m"
RED    = "\033[91m"
GREEN  = "\033[92m"
YELLOW = "\033[93m"
BLUE   = "\033[94m"
CYAN   = "\033[96m"
WHITE  = "\033[97m"

SUIT_SYMBOLS = {"c": "♣", "d": "♦", "h": "♥", "s": "♠"}
SUIT_COLORS  = {"c": GREEN, "d": BLUE, "h": RED, "s": WHITE}


def fmt_card(card: Optional[Card]) -> str:
    """Pretty-print a card like Ah → colored 'A♥'."""
    if card is None:
        return f"{DIM}[??]{RESET}"
    suit_ch = card.suit.symbol
    return f"{SUIT_COLORS[suit_ch]}{BOLD}{card.rank}{SUIT_SYMBOLS[suit_ch]}{RESET}"


def fmt_cards(cards: Sequence[Optional[Card]]) -> str:
    return " ".join(fmt_card(c) for c in cards)


def fmt_chips(n: int) -> str:
    return f"{YELLOW}${n:,}{RESET}"


# -- Display helpers -----------------------------------------------------------

def print_divider(label: str = "") -> None:
    if label:
        print(f"\n{DIM}{'─' * 20} {BOLD}{WHITE}{label} {DIM}{'─' * 20}{RESET}")
    else:
        print(f"{DIM}{'─' * 60}{RESET}")


def print_table(state: GameState, human_id: Optional[str] = None) -> None:
    if state.community_cards:
        print(f"\n  Board: {fmt_cards(state.community_cards)}")
    else:
        print(f"\n  Board: {DIM}(no community cards yet){RESET}")
    print(f"  Pot:   {fmt_chips(state.pot_total)}")
    print()

    contested = state.phase == GamePhase.SHOWDOWN and len(state.live_players) > 1
    for p in state.players:
        marker_parts = []
        if p.is_dealer:
            marker_parts.append(f"{YELLOW}D{RESET}")
        if p.status == PlayerStatus.FOLDED:
            marker_parts.append(f"{DIM}folded{RESET}")
        elif p.status == PlayerStatus.ALL_IN:
            marker_parts.append(f"{RED}{BOLD}ALL-IN{RESET}")
        elif p.status == PlayerStatus.OUT:
            marker_parts.append(f"{DIM}out{RESET}")
        markers = f" ({', '.join(marker_parts)})" if marker_parts else ""

        if p.hole_cards and (p.id == human_id or (contested and p.is_live)):
            cards = fmt_cards(p.hole_cards)
        elif p.hole_cards:
            cards = fmt_cards([None for _ in p.hole_cards])
        else:
            cards = ""

        bet_str = f"  bet {fmt_chips(p.current_bet)}" if p.current_bet > 0 else ""
        active = f"{CYAN}>{RESET} " if p.is_turn else "  "
        print(f"  {active}{p.name:<14} {fmt_chips(p.chips):>18}  {cards}{bet_str}{markers}")
    print()


def print_hand_result(state: GameState) -> None:
    live = state.live_players
    if len(live) > 1:
        print_divider("SHOWDOWN")
        for p in live:
            hand = evaluate_best_hand(p.hole_cards, state.community_cards)
            print(f"  {p.name:<14} {fmt_cards(p.hole_cards)}  {CYAN}{hand.name}{RESET}")
        print()

    for w in state.winners:
        player = state.get_player(w.player_id)
        how = w.hand.name if w.hand else "everyone else folded"
        print(f"  {GREEN}{BOLD}{player.name} wins {fmt_chips(w.amount)}{RESET}  ({how})")
    print()


# -- Human seat ----------------------------------------------------------------

class TerminalSeat:
    """DecisionSource reading the human player's choice from stdin."""

    def decide(self, state: GameState, player: Player) -> Decision:
        valid = get_valid_actions(state)
        print_table(state, player.id)
        if len(state.community_cards) >= 3:
            hand = evaluate_best_hand(player.hole_cards, state.community_cards)
            print(f"  Your hand: {CYAN}{hand.name}{RESET}")
        print("\n".join(_options(valid)))

        while True:
            try:
                raw = input(f"\n  {BOLD}Your action: {RESET}").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print()
                sys.exit(0)

            if raw in ("f", "fold"):
                return Decision(ActionType.FOLD)
            if raw in ("c", "call", "check"):
                return Decision(ActionType.CHECK if valid.can_check else ActionType.CALL)
            if raw in ("b", "bet") and valid.can_bet:
                return Decision(ActionType.BET)
            if raw in ("r", "raise") and valid.can_raise:
                return Decision(ActionType.RAISE)
            print(f"  {DIM}Enter one of the letters shown above{RESET}")


def _options(valid: ValidActions) -> List[str]:
    options = [f"  {RED}[f]{RESET} Fold"]
    if valid.can_check:
        options.append(f"  {GREEN}[c]{RESET} Check")
    elif valid.can_call:
        options.append(f"  {BLUE}[c]{RESET} Call {fmt_chips(valid.call_amount)}")
    if valid.can_bet:
        options.append(f"  {YELLOW}[b]{RESET} Bet {fmt_chips(valid.bet_amount)}")
    if valid.can_raise:
        options.append(f"  {YELLOW}[r]{RESET} Raise by {fmt_chips(valid.raise_amount)}")
    return options


# -- Game driver ---------------------------------------------------------------

class CLIGame:
    """Drive the pure engine from the terminal, one state at a time."""

    def __init__(
        self,
        num_bots: int = 3,
        difficulty: str = "medium",
        small_blind: int = 5,
        big_blind: int = 10,
        stack: int = 1000,
        watch: bool = False,
        max_hands: int = 0,
        seed: Optional[int] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.max_hands = max_hands
        self.human_id: Optional[str] = None

        seats = []
        if not watch:
            self.human_id = "human"
            seats.append(SeatConfig(id="human", name="You", model="human"))
        for i in range(num_bots):
            seats.append(SeatConfig(id=f"bot-{i}", name=f"Bot {i + 1}", model=f"rules/{difficulty}"))

        self.state = create_game(GameConfig(
            players=tuple(seats),
            starting_chips=stack,
            small_blind=small_blind,
            big_blind=big_blind,
        ))
        self.sources = {
            seat.id: TerminalSeat() if seat.id == self.human_id
            else RuleBot(difficulty=difficulty, rng=self.rng)
            for seat in seats
        }

    def run(self) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Texas Hold'em — Fixed-Limit  "
              f"({self.state.small_blind}/{self.state.big_blind}){RESET}")
        print(f"  {len(self.state.players)} players, "
              f"{fmt_chips(self.state.players[0].chips)} starting stack")
        if self.max_hands:
            print(f"  Playing {self.max_hands} hand(s)")
        print(f"{BOLD}{'=' * 60}{RESET}")

        while not is_game_over(self.state):
            if self.human_id:
                human = self.state.get_player(self.human_id)
                if human.chips == 0:
                    print(f"\n{RED}{BOLD}You're out of chips! Game over.{RESET}")
                    break
            if self.max_hands and self.state.hand_number >= self.max_hands:
                break
            self._play_hand()

        print_divider("FINAL STANDINGS")
        winner = get_game_winner(self.state)
        if winner:
            print(f"  {GREEN}{BOLD}{winner.name} takes the table{RESET}")
        standings = sorted(self.state.players, key=lambda p: p.chips, reverse=True)
        for i, p in enumerate(standings):
            marker = " (busted)" if p.chips == 0 else ""
            print(f"  {i + 1}. {p.name:<14} {fmt_chips(p.chips)}{marker}")
        print()

    def _play_hand(self) -> None:
        self.state = start_hand(self.state, rng=self.rng)
        if self.state.phase == GamePhase.COMPLETE:
            return

        state = self.state
        dealer = state.players[state.dealer_position]
        print_divider(f"HAND #{state.hand_number}")
        print(f"  Dealer: {dealer.name}")
        print_table(state, self.human_id)

        phase = state.phase
        while state.current_player is not None:
            player = state.current_player
            source: DecisionSource = self.sources[player.id]
            state = play_turn(state, source)
            last = state.action_log[-1]
            if player.id != self.human_id:
                amount = f" {fmt_chips(last.amount)}" if last.amount else ""
                print(f"  {DIM}{player.name}: {last.type.value}{amount}{RESET}")
            if state.phase != phase and state.phase != GamePhase.SHOWDOWN:
                phase = state.phase
                print_divider(phase.value.upper())
                print_table(state, self.human_id)

        self.state = state
        print_hand_result(state)


# -- Entry point ---------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Fixed-Limit Texas Hold'em — CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python cli.py                            1 human + 3 medium bots
  python cli.py --bots 5 --difficulty hard  1 human + 5 hard bots
  python cli.py --watch                     spectate bot-only game
  python cli.py --hands 5 --seed 42         play 5 reproducible hands
  python cli.py --blinds 50 100 --stack 10000
""",
    )
    parser.add_argument("--bots", type=int, default=3, help="number of bots (default: 3)")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"], default="medium")
    parser.add_argument("--blinds", nargs=2, type=int, metavar=("SB", "BB"), default=[5, 10])
    parser.add_argument("--stack", type=int, default=1000, help="starting stack (default: 1000)")
    parser.add_argument("--watch", action="store_true", help="spectate a bot-only game")
    parser.add_argument("--hands", type=int, default=0, help="number of hands to play (0=unlimited)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for deck and bots")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = CLIGame(
        num_bots=args.bots,
        difficulty=args.difficulty,
        small_blind=args.blinds[0],
        big_blind=args.blinds[1],
        stack=args.stack,
        watch=args.watch,
        max_hands=args.hands,
        seed=args.seed,
    )
    game.run()


if __name__ == "__main__":
    main()
