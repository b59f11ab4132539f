"""Conway's Game of Life boards on bounded grids."""

__version__ = "0.1.0"

from .core.grid import Grid
from .core.engine import StableResult, advance, find_stable, step
from .core.errors import (
    BoardNotFoundError,
    ConvergenceNotReachedError,
    InvalidBoardError,
    InvalidStepCountError,
    LifeboardError,
)

__all__ = [
    "Grid",
    "StableResult",
    "advance",
    "find_stable",
    "step",
    "BoardNotFoundError",
    "ConvergenceNotReachedError",
    "InvalidBoardError",
    "InvalidStepCountError",
    "LifeboardError",
]
