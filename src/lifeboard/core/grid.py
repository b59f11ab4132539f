"""Immutable grid value for Conway's Game of Life on a bounded board."""

from collections import abc
from typing import Any, Iterable, List, Sequence, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .errors import InvalidBoardError

ALIVE_CHARS = "*#O1"
DEAD_CHARS = ".-_0"

# Moore neighborhood, center excluded
_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


def _is_cell_value(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return True
    if isinstance(value, (int, np.integer)):
        return value in (0, 1)
    return False


class Grid:
    """A rectangular boolean matrix representing one generation.

    Cells are stored in a read-only numpy array of shape (rows, cols), so a
    Grid never changes after construction. Edges do not wrap: positions
    outside the matrix simply do not exist.
    """

    def __init__(self, cells: np.ndarray) -> None:
        """Wrap a rectangular 2D array of booleans or 0/1 integers.

        Prefer :meth:`from_rows` or :meth:`from_array` for external input.

        Args:
            cells: 2D array of cell states

        Raises:
            InvalidBoardError: If the array is not two-dimensional or holds
                anything other than booleans and 0/1 integers
        """
        try:
            cells = np.asarray(cells)
        except ValueError as e:
            raise InvalidBoardError(f"Board state must be rectangular: {e}") from e
        if cells.ndim != 2:
            raise InvalidBoardError(f"Board state must be two-dimensional, got {cells.ndim} dimensions")
        if cells.dtype != bool:
            if not np.issubdtype(cells.dtype, np.integer) or not np.isin(cells, (0, 1)).all():
                raise InvalidBoardError("Board state must contain only booleans")
        cells = cells.astype(bool, copy=True)
        cells.flags.writeable = False
        self._cells = cells

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        """Build a grid from a nested sequence of booleans.

        Args:
            rows: One sequence per row; 0/1 integers are accepted as dead/alive

        Returns:
            New Grid

        Raises:
            InvalidBoardError: If there are no rows, the rows differ in length,
                or a cell is not a boolean
        """
        if isinstance(rows, np.ndarray):
            return cls.from_array(rows)
        if isinstance(rows, (str, bytes)) or not isinstance(rows, abc.Sequence):
            raise InvalidBoardError("Board state must be a list of rows")
        if len(rows) == 0:
            raise InvalidBoardError("Board state must contain at least one row")

        width = None
        for index, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, (abc.Sequence, np.ndarray)):
                raise InvalidBoardError(f"Row {index} is not a list of cells")
            if isinstance(row, np.ndarray) and row.ndim != 1:
                raise InvalidBoardError(f"Row {index} is not a list of cells")
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise InvalidBoardError(f"Row {index} has {len(row)} cells, expected {width}")
            for col, value in enumerate(row):
                if not _is_cell_value(value):
                    raise InvalidBoardError(f"Cell ({index}, {col}) is not a boolean: {value!r}")

        return cls(np.array([[bool(value) for value in row] for row in rows], dtype=bool).reshape(len(rows), width))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Grid":
        """Build a grid from a 2D numpy array of booleans or 0/1 integers."""
        grid = cls(array)
        if grid.rows == 0:
            raise InvalidBoardError("Board state must contain at least one row")
        return grid

    @classmethod
    def from_text(cls, lines: Iterable[str]) -> "Grid":
        """Parse a grid drawn with '*' (alive) and '.' (dead) characters.

        Blank lines are ignored. '#', 'O' and '1' also mark live cells;
        '-', '_' and '0' also mark dead ones.
        """
        rows: List[List[bool]] = []
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            row = []
            for char in line:
                if char in ALIVE_CHARS:
                    row.append(True)
                elif char in DEAD_CHARS:
                    row.append(False)
                else:
                    raise InvalidBoardError(f"Unexpected character {char!r} on line {line_number}")
            rows.append(row)
        return cls.from_rows(rows)

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        """Create an all-dead grid."""
        if rows < 0 or cols < 0:
            raise InvalidBoardError(f"Grid dimensions must be non-negative, got {rows}x{cols}")
        return cls(np.zeros((rows, cols), dtype=bool))

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def cols(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.rows * self.cols

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell array."""
        return self._cells

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def at(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If the coordinates are outside the grid
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self.rows}x{self.cols} grid")
        return bool(self._cells[row, col])

    def live_neighbors(self, row: int, col: int) -> int:
        """Count living neighbors of a single cell.

        Off-grid positions are absent and never counted.
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self.rows}x{self.cols} grid")

        count = 0
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if 0 <= nr < self.rows and 0 <= nc < self.cols:
                    count += int(self._cells[nr, nc])
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count living neighbors for every cell at once.

        Uses a zero-padded 3x3 convolution, so cells beyond the edges
        contribute nothing.

        Returns:
            Array of shape (rows, cols) with counts in 0..8
        """
        if self.size == 0:
            return np.zeros(self.shape, dtype=np.int8)

        source = torch.from_numpy(self._cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        neighbors = F.conv2d(source, _NEIGHBOR_KERNEL, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def fingerprint(self) -> bytes:
        """Canonical encoding of the full grid contents.

        The shape is encoded ahead of the bit-packed cells, so two grids share
        a fingerprint exactly when they are equal.
        """
        header = np.array(self.shape, dtype=np.int64).tobytes()
        return header + np.packbits(self._cells, axis=None).tobytes()

    def to_list(self) -> List[List[bool]]:
        """Convert to a nested list of booleans for serialization."""
        return self._cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash(self.fingerprint())

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, population={self.population})"

    def __str__(self) -> str:
        """Living cells as '*' and dead cells as '.', one line per row."""
        return "\n".join("".join("*" if alive else "." for alive in row) for row in self._cells)
