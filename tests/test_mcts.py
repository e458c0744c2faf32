import numpy as np
import pytest

from gamesearch.ai.mcts import MCTS
from gamesearch.errors import PreconditionError
from gamesearch.game.connect_four import ConnectFour
from gamesearch.utils import DEFAULT_ROLLOUTS, Player

# X to move; column 3 completes the bottom row
X_WINS_RIGHT = "..../OX../OOO./XXX."

# O to move; column 3 completes the bottom row
O_WINS_RIGHT = "..../X.../XXX./OOO."


def test_play_out_scores_first_player_win():
    state = ConnectFour.from_string(X_WINS_RIGHT).play_column(3)
    assert MCTS.play_out(state, np.random.default_rng(0)) == 1


def test_play_out_scores_second_player_win():
    state = ConnectFour.from_string(O_WINS_RIGHT)
    assert state.player_turn() is Player.TWO

    state = state.play_column(3)
    assert MCTS.play_out(state, np.random.default_rng(0)) == -1


def test_play_out_scores_draw():
    state = ConnectFour.initial_state(rows=2, cols=3)
    assert MCTS.play_out(state, np.random.default_rng(0)) == 0


def test_play_out_reaches_a_result():
    rng = np.random.default_rng(1)
    outcomes = {MCTS.play_out(ConnectFour.initial_state(), rng) for _ in range(20)}
    assert outcomes <= {-1, 0, 1}


def test_outcome_requires_finished_game():
    with pytest.raises(PreconditionError):
        MCTS.outcome(ConnectFour.initial_state())


def test_inconsistent_reward_convention_is_reported(inverted_nim):
    with pytest.raises(PreconditionError, match="reward_value"):
        MCTS.play_out(inverted_nim(2), np.random.default_rng(0))


def test_immediate_win_is_chosen_in_most_trials():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    winning = state.play_column(3)

    trials = 60
    wins = sum(MCTS(rollouts=10, seed=trial).make_move(state) == winning for trial in range(trials))
    assert wins > trials // 2


def test_default_rollout_count():
    assert DEFAULT_ROLLOUTS == 1000
    assert MCTS().rollouts == DEFAULT_ROLLOUTS


def test_immediate_win_is_chosen_with_default_rollouts():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    winning = state.play_column(3)

    trials = 10
    wins = sum(MCTS(seed=trial).make_move(state) == winning for trial in range(trials))
    assert wins > trials // 2


def test_second_player_scores_are_flipped():
    state = ConnectFour.from_string(O_WINS_RIGHT)
    strategy = MCTS(rollouts=60, seed=0)

    move = strategy.make_move(state)

    assert move == state.play_column(3)
    assert strategy.last_scores[-1] == 60


def test_same_seed_same_choice():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    first, second = MCTS(rollouts=20, seed=11), MCTS(rollouts=20, seed=11)

    assert first.best_move(state) == second.best_move(state)
    assert first.last_scores == second.last_scores


def test_injected_generator():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    injected = MCTS(rollouts=20, rng=np.random.default_rng(5))
    seeded = MCTS(rollouts=20, seed=5)

    injected.best_move(state)
    seeded.best_move(state)
    assert injected.last_scores == seeded.last_scores


def test_reseed_restarts_sequence():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    strategy = MCTS(rollouts=20, seed=2)

    strategy.best_move(state)
    first = strategy.last_scores
    strategy.reseed(2)
    strategy.best_move(state)
    assert strategy.last_scores == first


def test_parallel_rollouts_match_serial():
    state = ConnectFour.from_string(X_WINS_RIGHT)
    serial = MCTS(rollouts=20, seed=3, workers=1)
    parallel = MCTS(rollouts=20, seed=3, workers=2)

    assert parallel.best_move(state) == serial.best_move(state)
    assert parallel.last_scores == serial.last_scores


@pytest.mark.parametrize("last_mover", [None, Player.ONE])
def test_plays_other_games(nim, last_mover):
    # Under random play, leaving three stones wins 75% of games, leaving two 50%
    move = MCTS(rollouts=200, seed=0).make_move(nim(4, last_mover))
    assert move.stones == 3


def test_terminal_state_is_rejected():
    state = ConnectFour.from_string(X_WINS_RIGHT).play_column(3)
    with pytest.raises(PreconditionError):
        MCTS(rollouts=5).make_move(state)


def test_rollouts_must_be_positive():
    with pytest.raises(ValueError):
        MCTS(rollouts=0)
