"""Core board logic."""

from .grid import Grid
from .engine import StableResult, advance, find_stable, step
from .board import Board
from .repository import BoardRepository, InMemoryBoardRepository, JsonBoardRepository
from .service import BoardService
from .patterns import Pattern, PatternLibrary

__all__ = [
    "Grid",
    "StableResult",
    "advance",
    "find_stable",
    "step",
    "Board",
    "BoardRepository",
    "InMemoryBoardRepository",
    "JsonBoardRepository",
    "BoardService",
    "Pattern",
    "PatternLibrary",
]
