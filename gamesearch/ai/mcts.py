"""
mcts.py - Monte-Carlo move selection by random playouts

Each candidate move is scored by playing a fixed number of uniformly random
games from it to the end and summing the outcomes. There is no search tree
and no UCB selection: every candidate gets the same number of playouts.

Outcomes use one global convention (a win by FIRST_PLAYER is +1, a win by
the other player is -1, a draw is 0). The aggregate is negated when the
second player is choosing, so both players maximize.
"""

from typing import List, Optional

import numpy as np

from gamesearch.ai.base import first_max, map_children, require_moves
from gamesearch.debug import debug
from gamesearch.errors import PreconditionError
from gamesearch.game.contract import G, Game
from gamesearch.utils import DEFAULT_ROLLOUTS, FIRST_PLAYER

SEED_LIMIT = 2 ** 63 - 1


def _rollout_batch(child: Game, rollouts: int, seed: int) -> int:
    rng = np.random.default_rng(seed)
    return sum(MCTS.play_out(child, rng) for _ in range(rollouts))


class MCTS:
    """
    Random-rollout strategy.

    Results are statistical: the same position can yield different moves
    for different seeds. With the same seed the choice is reproducible,
    whatever the number of workers.
    """

    def __init__(self, rollouts: int = DEFAULT_ROLLOUTS,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None,
                 workers: int = 1):
        """
        Args:
            rollouts: Random playouts per candidate move
            rng: Random generator to draw from; built from `seed` when omitted
            seed: Seed for a new generator, ignored when `rng` is given
            workers: Number of processes used to run playout batches
        """
        if rollouts < 1:
            raise ValueError(f"rollouts must be positive, got {rollouts}")

        self.rollouts = rollouts
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.workers = workers
        self.last_scores: List[int] = []

    def reseed(self, seed: Optional[int]) -> None:
        """Replace the random generator with a freshly seeded one."""
        self.rng = np.random.default_rng(seed)

    @staticmethod
    def outcome(state: Game) -> int:
        """
        Score a finished game: +1 if FIRST_PLAYER won, -1 if the other player did, 0 for a draw.

        Raises:
            PreconditionError: If the game is not over, or if the game's own
                reward_value() disagrees about who won
        """
        if state.is_winning_state():
            winner = state.player_turn().other()
            if state.reward_value(winner) != 1:
                raise PreconditionError(
                    f"reward_value() does not award the win to {winner}, the player who just moved")
            return 1 if winner == FIRST_PLAYER else -1

        if not state.is_game_over():
            raise PreconditionError("outcome() requires a finished game")
        return 0

    @staticmethod
    def play_out(state: Game, rng: np.random.Generator) -> int:
        """Play uniformly random moves until the game ends and return its outcome()."""
        while not state.is_winning_state():
            children = state.possible_moves()
            if not children:
                break
            state = children[rng.integers(len(children))]
        return MCTS.outcome(state)

    def best_move(self, state: G) -> G:
        """
        Choose the successor whose playouts scored best for the player to move.

        Raises:
            PreconditionError: If the state has no legal moves
        """
        children = require_moves(state)
        mover = state.player_turn()

        seeds = self.rng.integers(0, SEED_LIMIT, size=len(children))
        totals = map_children(_rollout_batch,
                              [(child, self.rollouts, int(seed)) for child, seed in zip(children, seeds)],
                              self.workers)

        sign = 1 if mover == FIRST_PLAYER else -1
        self.last_scores = [sign * total for total in totals]

        best, score = first_max(zip(children, self.last_scores))
        debug.debug(f"MCTS scores {self.last_scores} over {self.rollouts} playouts each, "
                    f"chose score {score}", "search")
        return best

    def make_move(self, state: G) -> G:
        """Play the best-scoring move for the player whose turn it is."""
        debug.start_timer("mcts")
        move = self.best_move(state)
        debug.end_timer("mcts", "search")
        return move
