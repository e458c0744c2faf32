"""
connect_four.py - Immutable Connect Four state implementing the game contract

Every move produces a new ConnectFour instance; the grid of an existing state
is never written to. Win detection rescans the whole board and reduces all
four directions to a single horizontal-run check:

1. Rows are scanned directly.
2. Columns are scanned as the rows of the transposed board.
3. Diagonals are collected by bucketing cells on row + column and
   ordering each bucket by column.
4. The opposite diagonals are the step 3 diagonals of the board with
   every row mirrored.
"""

from collections import defaultdict
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gamesearch.debug import debug
from gamesearch.errors import InvalidMoveError, MalformedBoardError, PreconditionError
from gamesearch.utils import (ROWS, COLS, CONNECT_N, FIRST_PLAYER, Player, Piece,
                              check_rectangular, render_board_ascii, transpose)


def _restore_state(grid, last_mover, last_move, connect_n):
    return ConnectFour._from_trusted(np.array(grid, dtype=np.int8), last_mover, last_move, connect_n)


class ConnectFour:
    """
    A Connect Four position.

    Row 0 is the top of the board and the last row is the bottom; pieces
    fall towards the highest row index. The player who made the most recent
    move is stored explicitly and the player to move is derived from it.
    """

    __slots__ = ('_grid', '_last_mover', '_last_move', '_connect_n', '_won')

    def __init__(self, grid: Sequence[Sequence[int]],
                 last_mover: Optional[Player] = None,
                 last_move: Optional[Tuple[int, int]] = None,
                 connect_n: int = CONNECT_N):
        """
        Build a state from an explicit grid of Piece values.

        Args:
            grid: Rectangular grid of Piece values (or their integer values)
            last_mover: Player who made the most recent move; inferred from
                piece counts when omitted
            last_move: (row, column) of the most recent move, if known
            connect_n: Run length needed to win

        Raises:
            MalformedBoardError: If the grid is ragged, contains unknown
                values, has floating pieces or impossible piece counts
        """
        if isinstance(grid, np.ndarray):
            if grid.ndim != 2:
                raise MalformedBoardError(f"Board must be two-dimensional, got {grid.ndim} dimensions")
        else:
            check_rectangular(grid)
            grid = [[cell.value if isinstance(cell, Piece) else cell for cell in row] for row in grid]

        values = np.asarray(grid)
        if values.ndim != 2 or values.size == 0:
            raise MalformedBoardError("Board must have at least one row and one column")
        # Checked before the int8 cast, which would truncate or overflow
        if not np.issubdtype(values.dtype, np.integer):
            raise MalformedBoardError(f"Board values must be integers, got {values.dtype}")
        if not np.isin(values, [piece.value for piece in Piece]).all():
            raise MalformedBoardError("Board contains values that are not pieces")
        array = values.astype(np.int8)
        if connect_n < 1:
            raise MalformedBoardError(f"connect_n must be positive, got {connect_n}")

        self._check_gravity(array)
        last_mover = self._check_parity(array, last_mover)

        array.setflags(write=False)
        self._grid = array
        self._last_mover = last_mover
        self._last_move = last_move
        self._connect_n = connect_n
        self._won = None

    @classmethod
    def _from_trusted(cls, grid: np.ndarray, last_mover: Optional[Player],
                      last_move: Optional[Tuple[int, int]], connect_n: int) -> 'ConnectFour':
        """Build a successor without re-validating a grid produced by a legal move."""
        state = cls.__new__(cls)
        grid.setflags(write=False)
        state._grid = grid
        state._last_mover = last_mover
        state._last_move = last_move
        state._connect_n = connect_n
        state._won = None
        return state

    @staticmethod
    def _check_gravity(grid: np.ndarray) -> None:
        occupied = grid != Piece.EMPTY.value
        # A piece may only sit on the bottom row or on another piece
        floating = occupied[:-1] & ~occupied[1:]
        if floating.any():
            row, col = (int(i) for i in np.argwhere(floating)[0])
            raise MalformedBoardError(f"Piece at ({row}, {col}) has an empty cell beneath it")

    @staticmethod
    def _check_parity(grid: np.ndarray, last_mover: Optional[Player]) -> Optional[Player]:
        """Infer the last mover from piece counts unless it was given explicitly."""
        if last_mover is not None:
            return last_mover

        ones = int(np.count_nonzero(grid == Piece.ONE.value))
        twos = int(np.count_nonzero(grid == Piece.TWO.value))

        if ones == twos:
            return None if ones == 0 else Player.TWO
        if ones == twos + 1:
            return Player.ONE
        raise MalformedBoardError(
            f"Piece counts {ones} and {twos} cannot arise from alternating play; "
            f"pass last_mover explicitly")

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def initial_state(cls, rows: int = ROWS, cols: int = COLS,
                      connect_n: int = CONNECT_N) -> 'ConnectFour':
        """An empty board with the first player to move."""
        return cls(np.zeros((rows, cols), dtype=np.int8), connect_n=connect_n)

    @classmethod
    def from_string(cls, text: str, last_mover: Optional[Player] = None,
                    connect_n: int = CONNECT_N) -> 'ConnectFour':
        """
        Parse a board in the state_to_string() format.

        Rows may be separated by newlines or '/'. Blank lines and surrounding
        whitespace are ignored.

        Raises:
            MalformedBoardError: If the text does not describe a legal board
        """
        lines = [line.strip() for line in text.replace("/", "\n").splitlines()]
        rows = [[Piece.from_marker(char).value for char in line] for line in lines if line]
        if not rows:
            raise MalformedBoardError("Board text contains no rows")

        debug.debug(f"Parsed {len(rows)}x{len(rows[0])} board", "board")
        return cls(rows, last_mover=last_mover, connect_n=connect_n)

    def copy(self) -> 'ConnectFour':
        """Create an independent copy of this state."""
        return self._from_trusted(self._grid.copy(), self._last_mover, self._last_move, self._connect_n)

    def __reduce__(self):
        return (_restore_state, (self._grid, self._last_mover, self._last_move, self._connect_n))

    # ------------------------------------------------------------------
    # Accessors

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the board."""
        return self._grid

    @property
    def rows(self) -> int:
        return self._grid.shape[0]

    @property
    def cols(self) -> int:
        return self._grid.shape[1]

    @property
    def connect_n(self) -> int:
        return self._connect_n

    @property
    def last_mover(self) -> Optional[Player]:
        return self._last_mover

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self._last_move

    @property
    def move_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    def player_turn(self) -> Player:
        if self._last_mover is None:
            return FIRST_PLAYER
        return self._last_mover.other()

    # ------------------------------------------------------------------
    # Moves

    def open_row(self, column: int) -> Optional[int]:
        """The lowest empty row of a column, or None if the column is full."""
        empty = np.flatnonzero(self._grid[:, column] == Piece.EMPTY.value)
        if empty.size == 0:
            return None
        return int(empty[-1])

    def open_rows(self) -> List[Tuple[int, int]]:
        """(row, column) landing cells for every column with room, left to right."""
        cells = []
        for column in range(self.cols):
            row = self.open_row(column)
            if row is not None:
                cells.append((row, column))
        return cells

    def _place(self, row: int, column: int) -> 'ConnectFour':
        mover = self.player_turn()
        grid = self._grid.copy()
        grid[row, column] = Piece.for_player(mover).value
        return self._from_trusted(grid, mover, (row, column), self._connect_n)

    def possible_moves(self) -> List['ConnectFour']:
        """Successor states in left-to-right column order; empty once the game is over."""
        if self.is_game_over():
            return []
        return [self._place(row, column) for row, column in self.open_rows()]

    def play_column(self, column: int) -> 'ConnectFour':
        """
        Drop the current player's piece into a column.

        Args:
            column: The column to play (0-indexed)

        Returns:
            The resulting state

        Raises:
            InvalidMoveError: If the column is not an integer, is out of
                range or full, or the game is already over
        """
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise InvalidMoveError(column, "column must be an integer")
        if not 0 <= column < self.cols:
            raise InvalidMoveError(column, f"column must be between 0 and {self.cols - 1}")
        if self.is_game_over():
            raise InvalidMoveError(column, "the game is already over")

        row = self.open_row(column)
        if row is None:
            raise InvalidMoveError(column, "column is full")

        debug.trace(f"Player {self.player_turn()} plays ({row}, {column})", "board")
        return self._place(row, int(column))

    # ------------------------------------------------------------------
    # Outcome

    @staticmethod
    def _horizontal_win(rows: Sequence[Sequence[int]], piece: int, connect_n: int) -> bool:
        """True if any row holds connect_n consecutive cells equal to piece."""
        for row in rows:
            count = 0
            for cell in row:
                count = count + 1 if cell == piece else 0
                if count == connect_n:
                    return True
        return False

    @staticmethod
    def _diagonal_win(rows: Sequence[Sequence[int]], piece: int, connect_n: int) -> bool:
        """Run the horizontal check along every diagonal whose cells share row + column."""
        buckets = defaultdict(list)
        for row_num, row in enumerate(rows):
            for col_num, cell in enumerate(row):
                buckets[row_num + col_num].append((col_num, cell))

        diagonals = [[cell for _, cell in sorted(bucket, key=lambda item: item[0])]
                     for bucket in buckets.values()]
        return ConnectFour._horizontal_win(diagonals, piece, connect_n)

    def is_winning_state(self) -> bool:
        """True if the player who made the last move has connect_n in a row."""
        if self._won is None:
            self._won = self._scan_for_win()
        return self._won

    def _scan_for_win(self) -> bool:
        if self._last_mover is None:
            return False

        piece = Piece.for_player(self._last_mover).value
        rows = self._grid.tolist()
        n = self._connect_n

        if self._horizontal_win(rows, piece, n):
            return True

        # Columns of the original board are rows of the transpose
        if self._horizontal_win(transpose(rows), piece, n):
            return True

        if self._diagonal_win(rows, piece, n):
            return True

        # Mirroring every row turns the remaining diagonals into the ones checked above
        mirrored = [row[::-1] for row in rows]
        return self._diagonal_win(mirrored, piece, n)

    def is_board_full(self) -> bool:
        return not (self._grid == Piece.EMPTY.value).any()

    def is_game_over(self) -> bool:
        return self.is_board_full() or self.is_winning_state()

    def reward_value(self, player: Player) -> int:
        """
        Score a finished game from the point of view of `player`.

        Returns:
            +1 if `player` made the winning move, -1 if the opponent did,
            0 for a draw

        Raises:
            PreconditionError: If the game is not over
        """
        if not self.is_game_over():
            raise PreconditionError("reward_value() requires a finished game")

        if not self.is_winning_state():
            return 0
        return 1 if self._last_mover == player else -1

    # ------------------------------------------------------------------
    # Presentation

    def state_to_string(self) -> str:
        """One line per row, one marker per cell."""
        return "\n".join("".join(Piece(cell).marker for cell in row) for row in self._grid.tolist())

    def render(self) -> str:
        """Bordered board with column numbers, for display."""
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        board = "/".join(self.state_to_string().splitlines())
        return f"ConnectFour({board!r}, last_mover={self._last_mover}, last_move={self._last_move})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConnectFour):
            return NotImplemented
        return (self._last_mover == other._last_mover
                and self._connect_n == other._connect_n
                and np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash((self._grid.shape, self._grid.tobytes(), self._last_mover, self._connect_n))
