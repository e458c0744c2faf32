"""
utils.py - Constants, enumerations and helper functions shared across gamesearch

This module provides the player model, the cell representation of the
Connect Four board, the generic transpose used by win detection, and the
ASCII rendering used by the command-line interface.
"""

from enum import Enum
from typing import Any, List, Sequence

import numpy as np

from gamesearch.errors import MalformedBoardError

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
DEFAULT_ROLLOUTS = 1000  # Random playouts per candidate move


class Player(Enum):
    """The two players of a turn-based game."""
    ONE = 1    # First mover
    TWO = 2    # Second mover

    def other(self) -> 'Player':
        """Get the other player."""
        return Player.TWO if self is Player.ONE else Player.ONE

    def __str__(self):
        return self.name


# Monte-Carlo playouts score a win by this player as +1
FIRST_PLAYER = Player.ONE


class Piece(Enum):
    """Contents of a single board cell."""
    EMPTY = 0
    ONE = 1
    TWO = 2

    @classmethod
    def for_player(cls, player: Player) -> 'Piece':
        return cls(player.value)

    @classmethod
    def from_marker(cls, marker: str) -> 'Piece':
        for piece, char in MARKERS.items():
            if char == marker:
                return piece
        raise MalformedBoardError(f"Unknown cell marker {marker!r}")

    @property
    def marker(self) -> str:
        return MARKERS[self]

    def __str__(self):
        return self.marker


MARKERS = {
    Piece.EMPTY: ".",
    Piece.ONE: "X",
    Piece.TWO: "O",
}


def check_rectangular(rows: Sequence[Sequence[Any]]) -> int:
    """
    Verify that every row has the same length.

    Returns:
        The common row length (0 for an empty grid)

    Raises:
        MalformedBoardError: If the rows have differing lengths
    """
    if len(rows) == 0:
        return 0

    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise MalformedBoardError(
                f"Row {index} has {len(row)} cells, expected {width}")
    return width


def transpose(rows: Sequence[Sequence[Any]]) -> List[List[Any]]:
    """
    Transpose a rectangular grid so that its columns become rows.

    Works for any sequence of equal-length sequences, including numpy arrays,
    and does not require the grid to be square.

    Args:
        rows: The grid to transpose

    Returns:
        A list of columns, in column order, each as a list

    Raises:
        MalformedBoardError: If the grid is not rectangular
    """
    width = check_rectangular(rows)
    return [[row[col] for row in rows] for col in range(width)]


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art with column numbers underneath.

    Args:
        board: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = board.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    result = [border]
    for row in range(rows):
        cells = [" " if cell == Piece.EMPTY.value else Piece(int(cell)).marker for cell in board[row]]
        result.append("|" + " ".join(cells) + "|")
    result.append(border)
    result.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(result)
