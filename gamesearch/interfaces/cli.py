"""
cli.py - Command-line interface for playing against and inspecting the strategies

Commands:
    play       Play Connect Four against a search strategy
    analyze    Inspect a board position and show the strategy's choice
    benchmark  Time random playouts from the empty board
"""

import argparse
import sys
import time
from collections import Counter
from typing import List, Optional

import numpy as np

from gamesearch.ai.brute_force import BruteForce
from gamesearch.ai.mcts import MCTS
from gamesearch.debug import debug, DebugLevel
from gamesearch.errors import InvalidMoveError, MalformedBoardError
from gamesearch.game.connect_four import ConnectFour
from gamesearch.utils import ROWS, COLS, CONNECT_N, DEFAULT_ROLLOUTS, Player

STRATEGIES = ('mcts', 'brute')


class SimpleCLI:
    """Simple command-line interface for gamesearch."""

    def __init__(self, argv: Optional[List[str]] = None):
        """
        Initialize the CLI.

        Args:
            argv: Arguments to parse instead of sys.argv
        """
        self.argv = argv
        self.args = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        parser = argparse.ArgumentParser(description='Connect Four search strategies')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log-file', default=None, help='Also write log messages to this file')

        # Options shared by the commands that run a strategy
        search = argparse.ArgumentParser(add_help=False)
        search.add_argument('--strategy', choices=STRATEGIES, default='mcts',
                            help='Move-selection strategy')
        search.add_argument('--rollouts', type=int, default=DEFAULT_ROLLOUTS,
                            help='Random playouts per candidate move (mcts)')
        search.add_argument('--seed', type=int, default=None, help='Random seed (mcts)')
        search.add_argument('--workers', type=int, default=1,
                            help='Processes used to score candidate moves')
        search.add_argument('--connect', type=int, default=CONNECT_N, help='Run length needed to win')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[search], help='Play a game interactively')
        play_parser.add_argument('--rows', type=int, default=ROWS, help='Board height')
        play_parser.add_argument('--cols', type=int, default=COLS, help='Board width')
        play_parser.add_argument('--human-first', action='store_true',
                                 help='Make the first move yourself')

        analyze_parser = subparsers.add_parser('analyze', parents=[search], help='Analyze a board position')
        analyze_parser.add_argument('--position', required=True,
                                    help="Board rows from top to bottom separated by '/', e.g. '...../..XO.'")

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark random playouts')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of playouts to run')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')

        self.args = parser.parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel[self.args.debug_level.upper()])
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments and return an exit code."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def build_strategy(self):
        """Create the strategy selected on the command line."""
        if self.args.strategy == 'brute':
            return BruteForce(workers=self.args.workers)
        return MCTS(rollouts=self.args.rollouts, seed=self.args.seed, workers=self.args.workers)

    def play_game(self) -> int:
        """Play a game of Connect Four against the selected strategy."""
        strategy = self.build_strategy()
        state = ConnectFour.initial_state(self.args.rows, self.args.cols, self.args.connect)
        human = Player.ONE if self.args.human_first else Player.TWO

        print("Starting a new Connect Four game!")
        print(f"You play {'X' if human == Player.ONE else 'O'}. "
              f"Enter a column number (0-{state.cols - 1}); anything else quits.")
        print(state.render())

        while not state.is_game_over():
            if state.player_turn() == human:
                column = self.get_human_move(state)
                if column is None:
                    print("Quitting game.")
                    return 1
                try:
                    state = state.play_column(column)
                except InvalidMoveError as e:
                    print(e)
                    continue
            else:
                print("Computer is thinking...")
                state = strategy.make_move(state)
                print(f"Computer plays column {state.last_move[1]}")

            print(state.render())

        outcome = state.reward_value(human)
        print("Game over!")
        if outcome > 0:
            print("You win! Congratulations!")
        elif outcome < 0:
            print("Computer wins! Better luck next time.")
        else:
            print("It's a draw!")
        return 0

    def get_human_move(self, state: ConnectFour) -> Optional[int]:
        """
        Read a column from the user.

        Returns:
            Column index, or None if the input is not a column on the board
        """
        try:
            user_input = input(f"Your move (columns 0-{state.cols - 1}): ").strip()
        except EOFError:
            return None

        try:
            column = int(user_input)
        except ValueError:
            debug.debug(f"Unparseable input {user_input!r}", "cli")
            return None

        if not 0 <= column < state.cols:
            print(f"Column must be between 0 and {state.cols - 1}.")
            return None
        return column

    def analyze_position(self) -> int:
        """Report on a board position and the strategy's choice from it."""
        try:
            state = ConnectFour.from_string(self.args.position, connect_n=self.args.connect)
        except MalformedBoardError as e:
            print(f"Error parsing position: {e}")
            return 2

        print("Loaded position:")
        print(state.render())
        print(f"Player to move: {state.player_turn()}")
        print(f"Winning state: {state.is_winning_state()}")
        print(f"Game over: {state.is_game_over()}")

        if state.is_game_over():
            print(f"Reward for {Player.ONE}: {state.reward_value(Player.ONE)}")
            return 0

        columns = [column for _, column in state.open_rows()]
        print(f"Valid moves: {columns}")

        strategy = self.build_strategy()
        start = time.perf_counter()
        move = strategy.make_move(state)
        elapsed = time.perf_counter() - start

        print(f"Scores by column: {dict(zip(columns, strategy.last_scores))}")
        print(f"Best move: column {move.last_move[1]} ({elapsed:.3f} seconds)")
        return 0

    def benchmark(self) -> int:
        """Time random playouts from the empty board."""
        rng = np.random.default_rng(self.args.seed)
        state = ConnectFour.initial_state()
        outcomes = Counter()

        print(f"Running {self.args.iterations} random playouts...")
        start = time.perf_counter()
        for _ in range(self.args.iterations):
            outcomes[MCTS.play_out(state, rng)] += 1
        elapsed = time.perf_counter() - start

        print(f"Time: {elapsed:.3f} seconds "
              f"({self.args.iterations / elapsed if elapsed else float('inf'):.1f} playouts/second)")
        print(f"First player wins: {outcomes[1]}, second player wins: {outcomes[-1]}, draws: {outcomes[0]}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
