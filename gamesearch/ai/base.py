"""
base.py - Shared pieces of the move-selection strategies

Strategies take a state satisfying gamesearch.game.contract.Game and return
the successor state they want to play.
"""

from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Iterable, List, Protocol, Sequence, Tuple, TypeVar

from gamesearch.errors import PreconditionError
from gamesearch.game.contract import G

T = TypeVar('T')
R = TypeVar('R')


class GameStrategy(Protocol):
    """Anything that can pick a move for the player whose turn it is."""

    def make_move(self, state: G) -> G:
        ...


def require_moves(state: G) -> List[G]:
    """
    Return the successors of a state that a strategy is asked to move from.

    Raises:
        PreconditionError: If the state is terminal
    """
    children = state.possible_moves()
    if not children:
        raise PreconditionError("Cannot choose a move from a finished game")
    return children


def first_max(scored: Iterable[Tuple[T, float]]) -> Tuple[T, float]:
    """
    Pick the item with the greatest score.

    Only a strictly greater score replaces the current best, so ties keep
    the earliest item.

    Raises:
        PreconditionError: If there is nothing to choose from
    """
    best = None
    for item, score in scored:
        if best is None or score > best[1]:
            best = (item, score)

    if best is None:
        raise PreconditionError("Cannot choose from an empty set of moves")
    return best


def map_children(func: Callable[..., R], argument_lists: Sequence[Sequence], workers: int) -> List[R]:
    """
    Apply a module-level function to each argument tuple, in order.

    With more than one worker the calls are spread over a process pool;
    results are returned in the order of the arguments either way.
    """
    if workers <= 1 or len(argument_lists) <= 1:
        return [func(*args) for args in argument_lists]

    with ProcessPoolExecutor(max_workers=min(workers, len(argument_lists))) as pool:
        return list(pool.map(func, *zip(*argument_lists)))
