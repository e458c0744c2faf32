"""
Shared fixtures for the gamesearch tests.

Nim is a second, minimal implementation of the game contract, used to check
that the strategies only rely on the contract and not on Connect Four.
"""

import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Make the package importable when the tests run from a source checkout
_root_path = str(Path(__file__).resolve().parent.parent)
if _root_path not in sys.path:
    sys.path.insert(0, _root_path)

from gamesearch.errors import PreconditionError  # noqa: E402
from gamesearch.utils import Player  # noqa: E402


class Nim:
    """Take one or two stones per turn; whoever takes the last stone wins."""

    def __init__(self, stones: int = 7, last_mover: Optional[Player] = None):
        self.stones = stones
        self.last_mover = last_mover

    @classmethod
    def initial_state(cls) -> 'Nim':
        return cls()

    def state_to_string(self) -> str:
        return "|" * self.stones

    def player_turn(self) -> Player:
        return Player.ONE if self.last_mover is None else self.last_mover.other()

    def copy(self) -> 'Nim':
        return Nim(self.stones, self.last_mover)

    def possible_moves(self) -> List['Nim']:
        return [Nim(self.stones - take, self.player_turn())
                for take in (1, 2) if take <= self.stones]

    def is_game_over(self) -> bool:
        return self.stones == 0

    def is_winning_state(self) -> bool:
        return self.stones == 0 and self.last_mover is not None

    def reward_value(self, player: Player) -> int:
        if not self.is_game_over():
            raise PreconditionError("game not over")
        return 1 if self.last_mover == player else -1

    def __eq__(self, other):
        return isinstance(other, Nim) and (self.stones, self.last_mover) == (other.stones, other.last_mover)

    def __hash__(self):
        return hash((self.stones, self.last_mover))


class InvertedNim(Nim):
    """Nim whose reward convention contradicts is_winning_state()."""

    def possible_moves(self) -> List['Nim']:
        return [InvertedNim(child.stones, child.last_mover) for child in super().possible_moves()]

    def reward_value(self, player: Player) -> int:
        return -super().reward_value(player)


@pytest.fixture
def nim():
    return Nim


@pytest.fixture
def inverted_nim():
    return InvertedNim
