"""
cli.py - Command-line interface for the fourway engine

This module provides a hot-seat terminal game for any number of players and
a benchmark that plays random games to time the engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional, Sequence, Union

from fourway.debug import DebugLevel, debug
from fourway.errors import FourWayError, InvalidColumnError
from fourway.game.rules import GameSession, GameStatus
from fourway.utils import DEFAULT_HEIGHT, DEFAULT_PLAYERS, DEFAULT_WIDTH

QUIT = "quit"
RESTART = "restart"


def parse_players(value: str) -> List[str]:
    """Split a comma-separated roster. Commas inside rgb(...) are kept."""
    players, depth, current = [], 0, ""
    for ch in value:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            players.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        players.append(current.strip())
    return players


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect-four for any number of players')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        help='Set the logging level (overrides --debug)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a hot-seat game')
    benchmark_parser = subparsers.add_parser('benchmark', help='Time the engine on random games')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of games to play')
    benchmark_parser.add_argument('--seed', type=int, default=None,
                                  help='Random seed for reproducible runs')

    for sub in (play_parser, benchmark_parser):
        sub.add_argument('--players', type=parse_players, default=list(DEFAULT_PLAYERS),
                         help='Comma-separated player colours in turn order (e.g. red,gold,#00f)')
        sub.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of columns')
        sub.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of rows')

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Set the logging level from --debug or --debug_level."""
    if getattr(args, 'debug_level', None):
        debug.set_from_string(args.debug_level)
    elif getattr(args, 'debug', False):
        debug.configure(level=DebugLevel.DEBUG)


class SimpleCLI:
    """Terminal front end driving a GameSession."""

    def __init__(self, argv: Optional[Sequence[str]] = None):
        self.argv = argv
        self.args = None
        self.session: Optional[GameSession] = None

    def parse_args(self) -> None:
        """Parse command-line arguments."""
        self.args = build_parser().parse_args(self.argv)
        configure_debug(self.args)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments; returns the exit status."""
        if not self.args:
            self.parse_args()

        if self.args.command not in ('play', 'benchmark'):
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            self.session = GameSession(self.args.players, self.args.width, self.args.height)
        except FourWayError as e:
            debug.error(f"Could not start game: {e}", "cli")
            print(f"Could not start game: {e}")
            return 2

        if self.args.command == 'play':
            self.play_game()
        else:
            self.benchmark()
        return 0

    def play_game(self) -> None:
        """Play a game with every player at the same keyboard."""
        session = self.session
        width = session.board.width
        names = ", ".join(p.label for p in session.players)
        print(f"Starting a new game for {names}!")
        print(f"Enter a column number (0-{width - 1}) to move, 'r' to restart or 'q' to quit.")
        print(session.render())

        while True:
            move = self.get_human_move()

            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                session.reset()
                print("Game restarted.")
                print(session.render())
                continue

            try:
                outcome = session.apply_move(move)
            except InvalidColumnError as e:
                print(e)
                continue

            if not outcome.accepted:
                print(f"{outcome.reason} Pick another column.")
                continue

            print(session.render())

            if outcome.status == GameStatus.WON:
                print(f"{outcome.player.label} won!")
                return
            if outcome.status == GameStatus.TIED:
                print("We have a tie!")
                return

    def get_human_move(self) -> Optional[Union[int, str]]:
        """
        Read one move from standard input.

        Returns:
            Column index, QUIT or RESTART, or None if the input was not understood
        """
        player = self.session.active_player
        try:
            user_input = input(f"{player.label} to move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number, 'r' or 'q'.")
            return None

    def benchmark(self) -> None:
        """Play random games and report throughput and results."""
        session = self.session
        iterations = self.args.iterations
        rng = random.Random(self.args.seed)
        wins = {p.identity: 0 for p in session.players}
        ties = 0
        moves = 0

        print(f"Benchmarking {iterations} random games on a "
              f"{session.board.width}x{session.board.height} board...")

        start = time.perf_counter()
        for _ in range(iterations):
            session.reset()
            while not session.is_over:
                session.apply_move(rng.choice(session.valid_columns()))
                moves += 1
            if session.status == GameStatus.WON:
                wins[session.winner] += 1
            else:
                ties += 1
        elapsed = time.perf_counter() - start

        rate = iterations / elapsed if elapsed > 0 else float('inf')
        print(f"Played {iterations} games ({moves} moves) in {elapsed:.3f}s: {rate:.1f} games/s")
        for player in session.players:
            print(f"  {player.label}: {wins[player.identity]} wins")
        print(f"  Ties: {ties}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
