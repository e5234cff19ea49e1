"""
Soulstack CLI - Command-line interface for the engine.

Usage:
    soulstack play [--humans N] [--players N] [--seed S]    Play on the console against bots
    soulstack simulate [--games N] [--seed S] [--json]      Run bot-only games
    soulstack cards [--kickstarter] [--four-souls-plus]     List the card catalog

Every command accepts --config (a JSON GameConfig) and --log-level.
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .api.schemas import BoardView, GameSummary
from .bots import BotPolicy, BotDecision, GreedyPolicy, RandomPolicy
from .config import GameConfig, RuleSet, load_config
from .display import render_actions, render_board, render_catalog, render_choice, render_hand
from .games.four_souls import catalog_sections, new_game
from .session import GameLoop

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Soulstack - Four Souls rules engine",
        prog="soulstack",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--config", help="Path to a JSON game configuration")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play on the console against bots")
    play_parser.add_argument("--players", type=int, help="Seats at the table (2-4)")
    play_parser.add_argument("--humans", type=int, default=1, help="Number of human seats")
    play_parser.add_argument("--seed", type=int, help="Seed for shuffles and dice")
    _add_rule_flags(play_parser)

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run bot-only games")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of games")
    simulate_parser.add_argument("--players", type=int, help="Seats at the table (2-4)")
    simulate_parser.add_argument("--seed", type=int, help="Seed of the first game; later games count up")
    simulate_parser.add_argument("--bot", choices=["greedy", "random"], default="greedy")
    simulate_parser.add_argument("--json", action="store_true", help="Print JSON summaries")
    _add_rule_flags(simulate_parser)

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="List the card catalog")
    _add_rule_flags(cards_parser)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
    except (OSError, ValidationError, json.JSONDecodeError) as e:
        print(f"Error: invalid configuration: {e}")
        sys.exit(1)

    if args.command == "play":
        cmd_play(args, config)
    elif args.command == "simulate":
        cmd_simulate(args, config)
    elif args.command == "cards":
        cmd_cards(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def _add_rule_flags(subparser):
    subparser.add_argument("--kickstarter", action="store_true", help="Add the first expansion")
    subparser.add_argument("--four-souls-plus", action="store_true", help="Add Four Souls+")


def _build_config(args) -> GameConfig:
    """Config file first, then command-line overrides; validated by pydantic."""
    config = load_config(args.config) if args.config else GameConfig()
    data = config.model_dump()
    if getattr(args, "players", None) is not None:
        data["num_players"] = args.players
    if getattr(args, "seed", None) is not None:
        data["seed"] = args.seed
    if getattr(args, "kickstarter", False):
        data["rules"]["kickstarter"] = True
    if getattr(args, "four_souls_plus", False):
        data["rules"]["four_souls_plus"] = True
    return GameConfig.model_validate(data)


# =============================================================================
# Console player
# =============================================================================

class ConsolePolicy(BotPolicy):
    """A human at the keyboard. Invalid input is asked again."""

    def __init__(self, input_fn=input, output_fn=print):
        self.input = input_fn
        self.output = output_fn

    def select_action(self, board, player, legal_actions) -> BotDecision:
        if len(legal_actions) == 1:
            return BotDecision(action=legal_actions[0], explanation="Only option")
        self.output(render_board(BoardView.from_board(board)))
        if player.hand:
            self.output(f"{player.player_id}'s hand:")
            for row in render_hand(player.hand):
                self.output("  " + row)
        self.output(f"{player.player_id}, what would you like to do?")
        for row in render_actions(legal_actions):
            self.output("  " + row)
        return BotDecision(action=legal_actions[self._read_index(len(legal_actions))])

    def select_choice(self, board, choice) -> int:
        if len(choice.options) == 1:
            return 0
        lines = render_choice(choice)
        self.output(f"{choice.player_id}: {lines[0]}")
        for row in lines[1:]:
            self.output("  " + row)
        return self._read_index(len(choice.options))

    def _read_index(self, n: int) -> int:
        while True:
            raw = self.input("> ").strip()
            try:
                i = int(raw)
            except ValueError:
                self.output(f"Enter a number from 0 to {n - 1}")
                continue
            if 0 <= i < n:
                return i
            self.output(f"Enter a number from 0 to {n - 1}")


def _bot(kind: str, seed):
    if kind == "random":
        return RandomPolicy(seed)
    return GreedyPolicy()


# =============================================================================
# Commands
# =============================================================================

def cmd_play(args, config: GameConfig):
    """Play one game on the console."""
    board = new_game(config)
    humans = max(0, min(args.humans, config.num_players))
    agents = {}
    for i, player in enumerate(board.players):
        if i < humans:
            player.is_human = True
            agents[player.player_id] = ConsolePolicy()
        else:
            agents[player.player_id] = GreedyPolicy()

    print("Seats: " + ", ".join(
        f"{p.name}{' (you)' if p.is_human else ''}" for p in board.players
    ))
    loop = GameLoop(board, agents)
    try:
        result = loop.run(config.max_turns)
    except (KeyboardInterrupt, EOFError):
        print("\nGame abandoned.")
        sys.exit(1)

    print(render_board(BoardView.from_board(board)))
    if result.winners:
        print(f"Winner: {', '.join(result.winners)} after {result.turns_played} turns")
    else:
        print(f"No winner after {result.turns_played} turns ({result.reason})")


def cmd_simulate(args, config: GameConfig):
    """Run bot-only games and report the results."""
    summaries = []
    wins: dict[str, int] = {}
    for n in range(args.games):
        seed = None if config.seed is None else config.seed + n
        game_config = config.model_copy(update={"seed": seed})
        board = new_game(game_config)
        agents = {
            p.player_id: _bot(args.bot, None if seed is None else seed * 10 + i)
            for i, p in enumerate(board.players)
        }
        result = GameLoop(board, agents).run(config.max_turns)
        for winner in result.winners:
            wins[winner] = wins.get(winner, 0) + 1
        summaries.append(GameSummary(
            seed=seed,
            winners=result.winners,
            turns_played=result.turns_played,
            reason=result.reason,
            final_state=BoardView.from_board(board) if args.json else None,
        ))
        logger.info("Game %d: %s", n + 1, result.winners or result.reason)

    if args.json:
        print(json.dumps([s.model_dump() for s in summaries], indent=2))
        return

    for n, summary in enumerate(summaries, start=1):
        outcome = ", ".join(summary.winners) if summary.winners else f"no winner ({summary.reason})"
        print(f"Game {n}: {outcome} in {summary.turns_played} turns")
    if args.games > 1:
        print("Wins by seat: " + ", ".join(f"{pid} {count}" for pid, count in sorted(wins.items())))


def cmd_cards(args, config: GameConfig):
    """List the catalog for the configured expansions."""
    rules: RuleSet = config.rules
    print(render_catalog(catalog_sections(rules)))


if __name__ == "__main__":
    main()
