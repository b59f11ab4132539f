"""Board storage: create, fetch and replace boards by id."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging
import os
import re
import tempfile
import threading

from .board import Board, new_board_id
from .errors import BoardNotFoundError, InvalidBoardError
from .grid import Grid

logger = logging.getLogger(__name__)

_BOARD_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class BoardRepository(ABC):
    """Keyed store holding exactly one current grid per board."""

    @abstractmethod
    def create(self, grid: Grid) -> Board:
        """Store ``grid`` under a newly generated id and return the board."""

    @abstractmethod
    def get(self, board_id: str) -> Optional[Board]:
        """Fetch a board, or None if the id is unknown."""

    @abstractmethod
    def replace(self, board_id: str, grid: Grid) -> Board:
        """Swap the current grid of an existing board.

        Raises:
            BoardNotFoundError: If the id is unknown
        """

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Ids of all stored boards."""


class InMemoryBoardRepository(BoardRepository):
    """Process-local store backed by a dictionary."""

    def __init__(self) -> None:
        self._boards: Dict[str, Board] = {}
        self._lock = threading.Lock()

    def create(self, grid: Grid) -> Board:
        board = Board(id=new_board_id(), grid=grid)
        with self._lock:
            self._boards[board.id] = board
        logger.info("Created board %s (%dx%d)", board.id, grid.rows, grid.cols)
        return board

    def get(self, board_id: str) -> Optional[Board]:
        with self._lock:
            return self._boards.get(board_id)

    def replace(self, board_id: str, grid: Grid) -> Board:
        with self._lock:
            board = self._boards.get(board_id)
            if board is None:
                raise BoardNotFoundError(board_id)
            board = board.with_grid(grid)
            self._boards[board_id] = board
        logger.debug("Replaced grid of board %s", board_id)
        return board

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._boards)


class JsonBoardRepository(BoardRepository):
    """Stores each board as ``<id>.json`` in a directory.

    Writes go through a temporary file followed by an atomic rename, so a
    reader sees either the previous grid or the new one.
    """

    def __init__(self, storage_dir: Union[str, Path]) -> None:
        """Initialize the store.

        Args:
            storage_dir: Directory holding board documents (created if missing)
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, board_id: str) -> Optional[Path]:
        if not isinstance(board_id, str) or not _BOARD_ID_PATTERN.match(board_id):
            return None
        return self.storage_dir / f"{board_id}.json"

    def _write(self, board: Board) -> None:
        path = self._path(board.id)
        if path is None:
            raise InvalidBoardError(f"Malformed board id: {board.id!r}")

        fd, tmp_name = tempfile.mkstemp(dir=self.storage_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(board.to_dict(), f)
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def create(self, grid: Grid) -> Board:
        board = Board(id=new_board_id(), grid=grid)
        self._write(board)
        logger.info("Created board %s (%dx%d) in %s", board.id, grid.rows, grid.cols, self.storage_dir)
        return board

    def get(self, board_id: str) -> Optional[Board]:
        path = self._path(board_id)
        if path is None or not path.exists():
            return None

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise InvalidBoardError(f"Board document {path.name} is not valid JSON: {e}") from e

        return Board.from_dict(data)

    def replace(self, board_id: str, grid: Grid) -> Board:
        path = self._path(board_id)
        if path is None or not path.exists():
            raise BoardNotFoundError(board_id)

        board = Board(id=board_id, grid=grid)
        self._write(board)
        logger.debug("Replaced grid of board %s", board_id)
        return board

    def list_ids(self) -> List[str]:
        return sorted(p.stem for p in self.storage_dir.glob("*.json") if _BOARD_ID_PATTERN.match(p.stem))
