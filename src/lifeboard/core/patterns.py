"""Common Conway's Game of Life patterns used to seed boards."""

from typing import Dict, List, Optional, Tuple
import numpy as np

from .errors import InvalidBoardError
from .grid import Grid


class Pattern:
    """A named set of live cells."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "", category: str = "Custom") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, col) coordinates for living cells
            description: Optional description
            category: Library category (still life, oscillator, ...)
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.category = category

    @property
    def size(self) -> Tuple[int, int]:
        """Smallest (rows, cols) box containing every cell."""
        if not self.cells:
            return (0, 0)
        rows, cols = zip(*self.cells)
        return (max(rows) + 1, max(cols) + 1)

    @property
    def population(self) -> int:
        return len(self.cells)

    def to_grid(self, rows: Optional[int] = None, cols: Optional[int] = None, offset: Tuple[int, int] = (0, 0)) -> Grid:
        """Place this pattern on an otherwise dead grid.

        Cells that land outside the grid are skipped.

        Args:
            rows: Grid height (defaults to the pattern's own height plus offset)
            cols: Grid width (defaults to the pattern's own width plus offset)
            offset: (row, col) shift applied to every cell

        Returns:
            New Grid
        """
        row_offset, col_offset = offset
        height, width = self.size
        rows = height + row_offset if rows is None else rows
        cols = width + col_offset if cols is None else cols
        if rows <= 0 or cols < 0:
            raise InvalidBoardError(f"Cannot place pattern '{self.name}' on a {rows}x{cols} grid")

        cells = np.zeros((rows, cols), dtype=bool)
        for r, c in self.cells:
            r, c = r + row_offset, c + col_offset
            if 0 <= r < rows and 0 <= c < cols:
                cells[r, c] = True
        return Grid(cells)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, population={self.population})"


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block", "Still Life"))
        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life", "Still Life")
        )
        self.add_pattern(
            Pattern(
                "Loaf", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)], "Loaf still life", "Still Life"
            )
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator", "Oscillators"))
        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator", "Oscillators")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator", "Oscillators")
        )

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4", "Spaceships")
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
                "Methuselahs",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
                "Methuselahs",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name (case-insensitive), or None if not found."""
        pattern = self._patterns.get(name)
        if pattern is not None:
            return pattern
        for key, candidate in self._patterns.items():
            if key.lower() == name.lower():
                return candidate
        return None

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get pattern names grouped by category, in insertion order."""
        categories: Dict[str, List[str]] = {}
        for pattern in self._patterns.values():
            categories.setdefault(pattern.category, []).append(pattern.name)
        return categories
