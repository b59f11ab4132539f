#!/usr/bin/env python3
"""
Example usage of the lifeboard package.
"""

from lifeboard import ConvergenceNotReachedError, advance, find_stable, step
from lifeboard.core import BoardService, InMemoryBoardRepository, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifeboard package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    # Place a glider near the top-left corner of a bounded 8x8 board
    grid = glider.to_grid(8, 8, offset=(1, 1))
    print("Initial state:")
    print(grid)
    print()

    print("After one generation:")
    print(step(grid))
    print()

    print("After four generations:")
    print(advance(grid, 4))
    print()

    try:
        result = find_stable(grid, 200)
        print(f"Repeat found after {result.attempts} generations (period {result.period}):")
        print(result.grid)
    except ConvergenceNotReachedError as e:
        print(f"No repeat: {e}")

    # The same operations against a stored board
    service = BoardService(InMemoryBoardRepository())
    board = service.upload(library.get_pattern("Toad").to_grid(6, 6, offset=(2, 1)))
    service.next_state(board.id)
    final = service.final_state(board.id)
    print()
    print(f"Board {board.id} repeated after {final.attempts} attempts")
    print(service.get(board.id).grid)


if __name__ == "__main__":
    main()
