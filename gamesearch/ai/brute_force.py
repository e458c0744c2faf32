"""
brute_force.py - Exhaustive negamax search

BruteForce searches the full game tree below every candidate move with no
pruning, memoization or depth limit. It plays perfectly, but the cost grows
as branching_factor ** remaining_plies, so it is only practical near the end
of a game or on small boards.
"""

from typing import List, Tuple

from gamesearch.ai.base import first_max, map_children, require_moves
from gamesearch.debug import debug
from gamesearch.game.contract import G, Game
from gamesearch.utils import Player


def _negamax(state: Game, viewpoint: Player) -> Tuple[int, int]:
    """Return (value of `state` to `viewpoint`, positions visited)."""
    children = state.possible_moves()
    if not children:
        return state.reward_value(viewpoint), 1

    best = None
    nodes = 1
    opponent = viewpoint.other()
    for child in children:
        value, child_nodes = _negamax(child, opponent)
        nodes += child_nodes
        if best is None or -value > best:
            best = -value
    return best, nodes


def _score_child(child: Game, opponent: Player) -> Tuple[int, int]:
    value, nodes = _negamax(child, opponent)
    return -value, nodes


class BruteForce:
    """
    Picks the move with the best fully-searched negamax value.

    Among equally valued moves the earliest generated one is played.
    """

    def __init__(self, workers: int = 1):
        """
        Args:
            workers: Number of processes used to score candidate moves
        """
        self.workers = workers
        self.nodes_evaluated = 0  # For performance tracking
        self.last_scores: List[int] = []

    @staticmethod
    def score(state: Game, viewpoint: Player) -> int:
        """
        Value of a position to `viewpoint`, assuming perfect play by both sides.

        A terminal position is worth its reward; otherwise it is worth the best
        negated value of its children scored from the opponent's viewpoint.
        """
        value, _ = _negamax(state, viewpoint)
        return value

    def best_move(self, state: G) -> G:
        """
        Choose the successor with the greatest negamax value for the player to move.

        Raises:
            PreconditionError: If the state has no legal moves
        """
        children = require_moves(state)
        opponent = state.player_turn().other()

        results = map_children(_score_child, [(child, opponent) for child in children], self.workers)
        self.nodes_evaluated = 1 + sum(nodes for _, nodes in results)
        self.last_scores = [score for score, _ in results]

        best, value = first_max(zip(children, self.last_scores))
        debug.debug(f"BruteForce scores {self.last_scores}, "
                    f"chose value {value} after {self.nodes_evaluated} positions", "search")
        return best

    def make_move(self, state: G) -> G:
        """Play the best move for the player whose turn it is."""
        debug.start_timer("brute_force")
        move = self.best_move(state)
        debug.end_timer("brute_force", "search")
        return move
