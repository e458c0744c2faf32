"""
errors.py - Exceptions raised by the game engine and search strategies
"""


class GameError(Exception):
    """Base class for all errors raised by gamesearch."""

    pass


class InvalidMoveError(GameError, ValueError):
    """Raised when a requested move is out of range, targets a full column, or the game is over."""

    def __init__(self, column, reason: str):
        self.column = column
        self.reason = reason
        super().__init__(f"Invalid move {column!r}: {reason}")


class PreconditionError(GameError, RuntimeError):
    """Raised when an operation is called on a state that violates its contract."""

    pass


class MalformedBoardError(GameError, ValueError):
    """Raised for grids that are not rectangular or could not arise from legal play."""

    pass
