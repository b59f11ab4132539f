"""Generation engine: Conway's rule, multi-step advance and repeat detection.

Every function here is pure. Grids go in, new grids come out, and the only
state kept is the visited set of a single :func:`find_stable` call.
"""

from dataclasses import dataclass
from typing import Dict
import logging
import numpy as np

from .errors import ConvergenceNotReachedError, InvalidStepCountError
from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StableResult:
    """Outcome of a successful :func:`find_stable` search.

    Attributes:
        grid: First generation whose state had already been seen
        attempts: Generations computed up to and including that repeat
        period: Generations between the repeat and its first occurrence
            (1 for a still life, 2 for a blinker)
    """

    grid: Grid
    attempts: int
    period: int


def _check_count(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidStepCountError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidStepCountError(f"{name} must be non-negative, got {value}")
    return int(value)


def step(grid: Grid) -> Grid:
    """Compute the next generation under Conway's rules.

    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Neighbors beyond the edges are absent; nothing wraps.

    Args:
        grid: Current generation (left untouched)

    Returns:
        New Grid with the next generation
    """
    if grid.size == 0:
        return grid

    neighbor_counts = grid.count_all_neighbors()
    cells = grid.cells

    survive_mask = cells & ((neighbor_counts == 2) | (neighbor_counts == 3))
    birth_mask = ~cells & (neighbor_counts == 3)

    return Grid(survive_mask | birth_mask)


def advance(grid: Grid, steps: int) -> Grid:
    """Apply :func:`step` ``steps`` times and return the last generation.

    Raises:
        InvalidStepCountError: If ``steps`` is negative or not an integer
    """
    steps = _check_count(steps, "Step count")

    current = grid
    for _ in range(steps):
        current = step(current)

    logger.debug("Advanced %dx%d grid by %d generations", grid.rows, grid.cols, steps)
    return current


def find_stable(grid: Grid, max_attempts: int) -> StableResult:
    """Step until a generation repeats an earlier one.

    The starting grid counts as seen. Each attempt computes one generation;
    the first generation whose fingerprint was already recorded ends the
    search, whether it is a fixed point or part of a longer cycle.

    Args:
        grid: Starting generation
        max_attempts: Upper bound on generations to compute

    Returns:
        StableResult with the repeated grid and the attempt it was found on

    Raises:
        InvalidStepCountError: If ``max_attempts`` is negative or not an integer
        ConvergenceNotReachedError: If no repeat occurs within ``max_attempts``
    """
    max_attempts = _check_count(max_attempts, "Attempt budget")

    # fingerprint -> generation it first appeared in
    seen: Dict[bytes, int] = {grid.fingerprint(): 0}
    current = grid

    for attempt in range(1, max_attempts + 1):
        current = step(current)
        key = current.fingerprint()

        first_seen = seen.get(key)
        if first_seen is not None:
            logger.debug("Repeat found after %d attempts (period %d)", attempt, attempt - first_seen)
            return StableResult(grid=current, attempts=attempt, period=attempt - first_seen)

        seen[key] = attempt

    logger.debug("No repeat within %d attempts", max_attempts)
    raise ConvergenceNotReachedError(max_attempts)
