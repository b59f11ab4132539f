"""Exceptions raised by the board engine and the layers around it."""

from typing import Optional


class LifeboardError(Exception):
    """Base class for all lifeboard errors."""


class InvalidBoardError(LifeboardError, ValueError):
    """Raised when a cell matrix is empty, jagged or holds non-boolean cells."""


class InvalidStepCountError(LifeboardError, ValueError):
    """Raised when a step count or attempt budget is negative or not an integer."""


class ConvergenceNotReachedError(LifeboardError, RuntimeError):
    """Raised when no generation repeats within the attempt budget.

    Attributes:
        attempts: Number of generations computed before giving up
    """

    def __init__(self, attempts: int, message: Optional[str] = None) -> None:
        self.attempts = attempts
        super().__init__(message or f"No repeated state reached after {attempts} attempts")


class BoardNotFoundError(LifeboardError, LookupError):
    """Raised when a board id is unknown to the store.

    Attributes:
        board_id: The id that was looked up
    """

    def __init__(self, board_id: str) -> None:
        self.board_id = board_id
        super().__init__(f"Board with id {board_id} not found")
