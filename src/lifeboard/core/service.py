"""Board service: fetch a board, run the engine, store the result."""

from typing import Any, Optional, Sequence, Union
import logging

from ..config import ServiceConfig
from . import engine
from .board import Board
from .errors import BoardNotFoundError, ConvergenceNotReachedError
from .grid import Grid
from .repository import BoardRepository

logger = logging.getLogger(__name__)


class BoardService:
    """Orchestrates board storage around the generation engine.

    Engine errors propagate to the caller unchanged; nothing is retried here.
    """

    def __init__(self, repository: BoardRepository, config: Optional[ServiceConfig] = None) -> None:
        """Initialize the service.

        Args:
            repository: Store holding the boards
            config: Service configuration (defaults apply if omitted)
        """
        self.repository = repository
        self.config = config or ServiceConfig()

    def upload(self, rows: Union[Grid, Sequence[Sequence[Any]]]) -> Board:
        """Validate a cell matrix and store it as a new board.

        Raises:
            InvalidBoardError: If the matrix is empty or not rectangular
        """
        grid = rows if isinstance(rows, Grid) else Grid.from_rows(rows)
        return self.repository.create(grid)

    def get(self, board_id: str) -> Board:
        """Fetch a board.

        Raises:
            BoardNotFoundError: If the id is unknown
        """
        board = self.repository.get(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        return board

    def next_state(self, board_id: str) -> Grid:
        """Advance a board by one generation and store it."""
        board = self.get(board_id)
        grid = engine.step(board.grid)
        self.repository.replace(board_id, grid)
        logger.debug("Board %s advanced one generation", board_id)
        return grid

    def state_after(self, board_id: str, steps: int) -> Grid:
        """Advance a board by ``steps`` generations and store it.

        Raises:
            BoardNotFoundError: If the id is unknown
            InvalidStepCountError: If ``steps`` is negative
        """
        board = self.get(board_id)
        grid = engine.advance(board.grid, steps)
        self.repository.replace(board_id, grid)
        logger.debug("Board %s advanced %d generations", board_id, steps)
        return grid

    def final_state(self, board_id: str, max_attempts: Optional[int] = None) -> engine.StableResult:
        """Run a board until a generation repeats and store that generation.

        The stored grid is left unchanged if no repeat is found.

        Args:
            board_id: Board to run
            max_attempts: Attempt budget (config default if omitted)

        Raises:
            BoardNotFoundError: If the id is unknown
            ConvergenceNotReachedError: If no repeat occurs within the budget
        """
        if max_attempts is None:
            max_attempts = self.config.default_max_attempts

        board = self.get(board_id)
        try:
            result = engine.find_stable(board.grid, max_attempts)
        except ConvergenceNotReachedError:
            logger.warning("Board %s did not repeat within %d attempts", board_id, max_attempts)
            raise

        self.repository.replace(board_id, result.grid)
        logger.debug("Board %s repeated after %d attempts", board_id, result.attempts)
        return result
