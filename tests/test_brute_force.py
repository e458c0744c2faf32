import pytest

from gamesearch.ai.base import first_max, map_children
from gamesearch.ai.brute_force import BruteForce
from gamesearch.errors import PreconditionError
from gamesearch.game.connect_four import ConnectFour
from gamesearch.utils import Player

# X to move; dropping into column 0 completes the bottom row
IMMEDIATE_WIN = "..../..XO/.OOO/.XXX"


def test_first_max_keeps_earliest_tie():
    assert first_max([("a", 1), ("b", 3), ("c", 3), ("d", 2)]) == ("b", 3)

    with pytest.raises(PreconditionError):
        first_max([])


def test_map_children_preserves_order():
    arguments = [(n, 2) for n in range(5)]
    assert map_children(pow, arguments, workers=1) == [0, 1, 4, 9, 16]
    assert map_children(pow, arguments, workers=2) == [0, 1, 4, 9, 16]


def test_takes_immediate_win():
    state = ConnectFour.from_string(IMMEDIATE_WIN)
    assert state.player_turn() is Player.ONE

    strategy = BruteForce()
    move = strategy.make_move(state)

    assert move == state.play_column(0)
    assert move.is_winning_state()
    assert strategy.last_scores[0] == 1
    assert strategy.nodes_evaluated > len(strategy.last_scores)


def test_score_of_terminal_state_is_reward():
    state = ConnectFour.from_string(IMMEDIATE_WIN).play_column(0)
    assert BruteForce.score(state, Player.ONE) == 1
    assert BruteForce.score(state, Player.TWO) == -1


def test_score_is_negamax_of_children():
    state = ConnectFour.from_string(IMMEDIATE_WIN)
    children = state.possible_moves()
    expected = max(-BruteForce.score(child, Player.TWO) for child in children)
    assert BruteForce.score(state, Player.ONE) == expected == 1


def test_ties_keep_leftmost_move():
    # Four in a row is impossible on a 2x3 board, so every move draws
    state = ConnectFour.initial_state(rows=2, cols=3)
    strategy = BruteForce()

    assert strategy.best_move(state) == state.play_column(0)
    assert strategy.last_scores == [0, 0, 0]


def test_terminal_state_is_rejected():
    state = ConnectFour.from_string(IMMEDIATE_WIN).play_column(0)
    with pytest.raises(PreconditionError):
        BruteForce().make_move(state)


def test_parallel_search_matches_serial():
    state = ConnectFour.from_string(IMMEDIATE_WIN)
    serial = BruteForce(workers=1)
    parallel = BruteForce(workers=2)

    assert parallel.best_move(state) == serial.best_move(state)
    assert parallel.last_scores == serial.last_scores
    assert parallel.nodes_evaluated == serial.nodes_evaluated


@pytest.mark.parametrize("stones, remaining", [(7, 6), (5, 3), (4, 3), (2, 0)])
def test_plays_other_games(nim, stones, remaining):
    # Leaving a multiple of three stones wins Nim
    move = BruteForce().make_move(nim(stones))
    assert move.stones == remaining


def test_lost_nim_position_keeps_first_move(nim):
    strategy = BruteForce()
    move = strategy.make_move(nim(6))

    assert strategy.last_scores == [-1, -1]
    assert move.stones == 5
