"""
cli.py - Command-line driver for dropfour

This module reads player names and moves from the terminal, prints the board
and reports the result. All game rules live in the engine; this module only
turns engine errors into messages and asks again.
"""

import argparse
import sys
import time
from typing import List, Optional, Sequence

from dropfour.ai.minimax import MinimaxPlayer, MinimaxSearch
from dropfour.debug import debug, DebugLevel
from dropfour.errors import DropFourError, IllegalMove
from dropfour.game.board import Board
from dropfour.game.players import NO_MOVE, HumanPlayer, Player
from dropfour.game.rules import GameState
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_SEARCH_DEPTH, DEFAULT_WIDTH, Token

PLAYER_KINDS = ('human', 'ai')
SEAT_TOKENS = (Token.RED, Token.YELLOW, Token.GREEN, Token.BLUE)


def parse_column(raw: str) -> Optional[int]:
    """Parse a typed column number, or return None if it is not an integer."""
    try:
        return int(raw.strip())
    except ValueError:
        return None


def prompt_for_column(state: GameState, player: Player) -> int:
    """
    Ask on the terminal until the player types an integer.

    Range and fullness are checked by the game state, which makes the
    driver ask again.
    """
    while True:
        column = parse_column(input(f"Player {player}, enter a column number [1, {state.width}]: "))
        if column is not None:
            return column
        print("Please enter a whole number.")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_player_kinds(value: str) -> List[str]:
    kinds = [kind.strip().lower() for kind in value.split(',') if kind.strip()]
    for kind in kinds:
        if kind not in PLAYER_KINDS:
            raise argparse.ArgumentTypeError(
                f"unknown player kind '{kind}', expected one of {', '.join(PLAYER_KINDS)}")
    if not 2 <= len(kinds) <= len(SEAT_TOKENS):
        raise argparse.ArgumentTypeError(f"between 2 and {len(SEAT_TOKENS)} players are supported")
    return kinds


class SimpleCLI:
    """Terminal front end: play games and benchmark the search."""

    def __init__(self, argv: Optional[Sequence[str]] = None):
        self.argv = argv
        self.args = None

    def parse_args(self) -> None:
        parser = argparse.ArgumentParser(description='dropfour - connect four in a row')
        parser.add_argument('--debug', action='store_true', help='Shortcut for --debug-level debug')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game in the terminal')
        play_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of columns')
        play_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of rows')
        play_parser.add_argument('--depth', type=positive_int, default=DEFAULT_SEARCH_DEPTH,
                                 help='Search depth of computer players')
        play_parser.add_argument('--players', type=parse_player_kinds, default=['human', 'ai'],
                                 help='Comma-separated seat kinds in turn order, e.g. human,ai')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time searches from the empty board')
        benchmark_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH)
        benchmark_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT)
        benchmark_parser.add_argument('--depth', type=positive_int, default=DEFAULT_SEARCH_DEPTH)
        benchmark_parser.add_argument('--iterations', type=positive_int, default=3,
                                      help='Number of searches to time')
        benchmark_parser.add_argument('--no-pruning', action='store_true',
                                      help='Search without alpha-beta cut-offs')

        self.args = parser.parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the chosen command and return a process exit code."""
        if not self.args:
            self.parse_args()

        try:
            if self.args.command == 'play':
                self.play_game()
            elif self.args.command == 'benchmark':
                self.benchmark()
            else:
                print("Please specify a command. Use --help for options.")
                return 1
        except DropFourError as e:
            debug.error(f"{type(e).__name__}: {e}", "cli")
            print(f"Error: {e}")
            return 1
        return 0

    def create_players(self) -> List[Player]:
        """Ask for a name for every seat and build the players."""
        players: List[Player] = []
        for seat, kind in enumerate(self.args.players, start=1):
            token = SEAT_TOKENS[seat - 1]
            name = input(f"Enter player {seat} name ({kind}, {token.glyph}): ").strip() or f"Player {seat}"
            if kind == 'ai':
                players.append(MinimaxPlayer(name, token, depth=self.args.depth))
            else:
                players.append(HumanPlayer(name, token, prompt_for_column))
        return players

    def play_game(self) -> Optional[Player]:
        """
        Play one game to the end.

        Returns:
            The winner, or None for a draw
        """
        print("Connect Four!")
        Board(self.args.width, self.args.height)  # bad dimensions fail before any name is asked
        state = GameState(self.args.width, self.args.height, self.create_players())
        print(state.render())

        while not state.is_terminal():
            player = state.current_player
            if isinstance(player, MinimaxPlayer):
                print(f"{player} is thinking...")

            move = player.get_next_move(state)
            if move is NO_MOVE:
                debug.warning(f"{player} found no move on a live board", "cli")
                break

            try:
                state.apply_move(move)
            except IllegalMove as e:
                print(f"Illegal move: {e}")
                continue

            print(f"{player} plays column {move.column}")
            print(state.render())

        winner = state.winner()
        if winner is not None:
            print(f"{winner.name} wins!")
        else:
            print("It's a draw!")
        return winner

    def benchmark(self) -> None:
        """Time full searches from the empty board."""
        engine = MinimaxSearch(depth=self.args.depth, pruning=not self.args.no_pruning)
        players = [MinimaxPlayer("Bench 1", Token.RED), MinimaxPlayer("Bench 2", Token.YELLOW)]
        state = GameState(self.args.width, self.args.height, players)

        print(f"Benchmarking depth {engine.depth} on {state.width}x{state.height} "
              f"({'pruned' if engine.pruning else 'unpruned'})")
        total_time = 0.0
        total_nodes = 0
        for i in range(self.args.iterations):
            start = time.perf_counter()
            result = engine.search(state)
            elapsed = time.perf_counter() - start
            total_time += elapsed
            total_nodes += result.nodes
            print(f"  Run {i + 1}: column {result.move.column}, {result.nodes} nodes, {elapsed:.3f}s")

        runs = self.args.iterations
        print(f"Average: {total_nodes / runs:.0f} nodes, {total_time / runs:.3f}s per search")


def main(argv: Optional[Sequence[str]] = None) -> int:
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
