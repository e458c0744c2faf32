"""
env.py - Gymnasium environment for playing against a search strategy

The agent always plays Player.ONE. After each agent move the opponent
strategy replies as Player.TWO, so every observation shows the board with
the agent to move (or a finished game).
"""

from typing import Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gamesearch.ai.base import GameStrategy
from gamesearch.ai.mcts import MCTS
from gamesearch.debug import debug
from gamesearch.errors import InvalidMoveError
from gamesearch.game.connect_four import ConnectFour
from gamesearch.utils import ROWS, COLS, CONNECT_N, Player


class SearchOpponentEnv(gym.Env):
    """
    Connect Four against a move-selection strategy, following the Gymnasium interface.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, opponent: Optional[GameStrategy] = None,
                 render_mode: Optional[str] = None,
                 rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        """
        Initialize the environment.

        Args:
            opponent: Strategy that plays Player.TWO (defaults to MCTS)
            render_mode: Mode for rendering the environment
            rows: Board height
            cols: Board width
            connect_n: Run length needed to win
        """
        debug.debug("Initializing SearchOpponentEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.opponent = opponent if opponent is not None else MCTS(rollouts=100)
        self.render_mode = render_mode
        self.rows, self.cols, self.connect_n = rows, cols, connect_n

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

        self.state = ConnectFour.initial_state(rows, cols, connect_n)

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to the initial state.

        Args:
            seed: Random seed; also reseeds an opponent that supports it
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        if seed is not None and hasattr(self.opponent, 'reseed'):
            self.opponent.reseed(seed)

        self.state = ConnectFour.initial_state(self.rows, self.cols, self.connect_n)
        debug.debug("Environment reset", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        try:
            self.state = self.state.play_column(int(action))
        except InvalidMoveError as e:
            debug.warning(str(e), "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.state.is_game_over():
            self.state = self.opponent.make_move(self.state)

        terminated = self.state.is_game_over()
        if terminated:
            reward = float(self.state.reward_value(Player.ONE))
            debug.info(f"Episode finished with reward {reward}", "env")
        else:
            reward = self.reward_step

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.state.render()
        if self.render_mode == "human":
            print(self.state.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return np.array(self.state.grid, dtype=np.int8)

    def _get_info(self) -> Dict:
        return {
            'valid_moves': [column for _, column in self.state.open_rows()] if not self.state.is_game_over() else [],
            'current_player': self.state.player_turn().value,
            'last_move': self.state.last_move,
            'moves_made': self.state.move_count,
            'winner': self.state.last_mover.value if self.state.is_winning_state() else None,
        }
