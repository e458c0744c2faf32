"""
contract.py - The capability set a game must provide to be searchable

Strategies in gamesearch.ai are written against these protocols rather than
against a concrete game. Any class with matching methods conforms; no base
class is required. States are immutable values: every move yields a new
state, so states can be shared between workers without synchronization.
"""

from typing import List, Protocol, Type, TypeVar, runtime_checkable

from gamesearch.utils import Player

S = TypeVar('S', bound='GameState')


@runtime_checkable
class GameState(Protocol):
    """A position in a two-player game."""

    @classmethod
    def initial_state(cls: Type[S]) -> S:
        """The fixed starting position."""
        ...

    def state_to_string(self) -> str:
        """Human-readable serialization of the position."""
        ...

    def player_turn(self) -> Player:
        """The player who moves next."""
        ...

    def copy(self: S) -> S:
        """An independent value-equal state."""
        ...


@runtime_checkable
class GameRules(Protocol):
    """Move generation and outcome evaluation for a position."""

    def possible_moves(self) -> List['GameRules']:
        """Successor states reachable in one ply; empty exactly when the game is over."""
        ...

    def is_game_over(self) -> bool:
        ...

    def is_winning_state(self) -> bool:
        """True if the player who made the most recent move has won."""
        ...

    def reward_value(self, player: Player) -> int:
        """+1 if `player` won, -1 if the opponent won, 0 for a draw. Terminal states only."""
        ...


@runtime_checkable
class Game(GameState, GameRules, Protocol):
    """Full capability set consumed by the search strategies."""
    pass


G = TypeVar('G', bound=Game)
