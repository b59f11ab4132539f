"""Board entity: an identity holding a replaceable reference to a grid."""

from dataclasses import dataclass, replace
from typing import Any, Dict
import uuid

from .errors import InvalidBoardError
from .grid import Grid


def new_board_id() -> str:
    """Generate a fresh opaque board id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Board:
    """A board id paired with its current generation.

    Updating a board means building a new Board around a new Grid; cells
    are never modified in place.
    """

    id: str
    grid: Grid

    def with_grid(self, grid: Grid) -> "Board":
        """Return a copy of this board holding ``grid``."""
        return replace(self, grid=grid)

    def to_dict(self) -> Dict[str, Any]:
        """Convert board to dictionary for serialization."""
        return {"id": self.id, "grid": self.grid.to_list()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        """Create board from dictionary.

        Raises:
            InvalidBoardError: If the document is missing fields or holds an invalid grid
        """
        try:
            board_id = data["id"]
            rows = data["grid"]
        except (KeyError, TypeError) as e:
            raise InvalidBoardError(f"Malformed board document: {e}") from e

        if not isinstance(board_id, str) or not board_id:
            raise InvalidBoardError(f"Malformed board id: {board_id!r}")

        return cls(id=board_id, grid=Grid.from_rows(rows))
