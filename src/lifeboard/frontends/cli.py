"""Command-line interface for stored Game of Life boards."""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional, TextIO

from ..config import ServiceConfig
from ..core.board import Board
from ..core.errors import BoardNotFoundError, ConvergenceNotReachedError, InvalidBoardError, LifeboardError
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.repository import JsonBoardRepository
from ..core.service import BoardService

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 3


def parse_board_input(text: str) -> Grid:
    """Parse an uploaded board.

    Accepts a JSON matrix of booleans (optionally wrapped as
    ``{"state": [...]}``) or a grid drawn with '*' and '.' characters.

    Raises:
        InvalidBoardError: If the input does not describe a valid grid
    """
    stripped = text.strip()
    if stripped.startswith("[") or stripped.startswith("{"):
        try:
            data: Any = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise InvalidBoardError(f"Invalid JSON board: {e}") from e
        if isinstance(data, dict):
            data = data.get("state", data.get("grid"))
        return Grid.from_rows(data)
    return Grid.from_text(stripped.splitlines())


class CLIBoardRunner:
    """Runs board commands against a service and prints the results."""

    def __init__(self, service: BoardService, as_json: bool = False, out: Optional[TextIO] = None) -> None:
        """Initialize CLI runner.

        Args:
            service: Board service to run commands against
            as_json: Print grids as JSON matrices instead of '*'/'.' text
            out: Output stream (defaults to stdout)
        """
        self.service = service
        self.as_json = as_json
        self.out = out or sys.stdout
        self.pattern_library = PatternLibrary()

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _print_grid(self, grid: Grid, **extra: Any) -> None:
        if self.as_json:
            self._print(json.dumps({"grid": grid.to_list(), **extra}))
            return
        for key, value in extra.items():
            self._print(f"{key.replace('_', ' ').capitalize()}: {value}")
        self._print(str(grid))

    def upload(self, path: Optional[str], pattern: Optional[str], rows: Optional[int], cols: Optional[int],
               offset_row: int = 0, offset_col: int = 0) -> Board:
        """Create a board from a file, stdin ('-') or a library pattern."""
        if pattern:
            found = self.pattern_library.get_pattern(pattern)
            if found is None:
                available = ", ".join(self.pattern_library.list_patterns())
                raise LifeboardError(f"Pattern '{pattern}' not found. Available patterns: {available}")
            grid = found.to_grid(rows, cols, offset=(offset_row, offset_col))
        elif path == "-":
            grid = parse_board_input(sys.stdin.read())
        elif path:
            with open(path, "r", encoding="utf-8") as f:
                try:
                    text = f.read()
                except UnicodeDecodeError as e:
                    raise InvalidBoardError(f"Board file {path} is not UTF-8 text: {e}") from e
            grid = parse_board_input(text)
        else:
            raise LifeboardError("Provide a board file or --pattern")

        board = self.service.upload(grid)
        if self.as_json:
            self._print(json.dumps(board.to_dict()))
        else:
            self._print(board.id)
        return board

    def show(self, board_id: str) -> Grid:
        grid = self.service.get(board_id).grid
        self._print_grid(grid)
        return grid

    def next_state(self, board_id: str) -> Grid:
        grid = self.service.next_state(board_id)
        self._print_grid(grid)
        return grid

    def state_after(self, board_id: str, steps: int) -> Grid:
        grid = self.service.state_after(board_id, steps)
        self._print_grid(grid)
        return grid

    def final_state(self, board_id: str, max_attempts: Optional[int]) -> Grid:
        result = self.service.final_state(board_id, max_attempts)
        self._print_grid(result.grid, attempts=result.attempts, period=result.period)
        return result.grid

    def list_patterns(self) -> None:
        """Print available patterns grouped by category."""
        self._print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            self._print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                rows, cols = pattern.size
                self._print(f"  {name}: {rows}x{cols}, {pattern.population} cells")
                if pattern.description:
                    self._print(f"    {pattern.description}")


def create_parser(config: Optional[ServiceConfig] = None) -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Args:
        config: Source of the option defaults (read from the environment if omitted)

    Returns:
        Configured ArgumentParser
    """
    if config is None:
        config = ServiceConfig.from_env()

    parser = argparse.ArgumentParser(
        prog="lifeboard-cli",
        description="Store Game of Life boards and advance them from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload a board drawn with '*' and '.' characters
  lifeboard-cli upload board.txt

  # Upload a glider on a 10x10 board
  lifeboard-cli upload --pattern Glider --rows 10 --cols 10

  # Next generation, 25 generations ahead, first repeated generation
  lifeboard-cli next 3f2a...
  lifeboard-cli states 3f2a... 25
  lifeboard-cli final 3f2a... --max-attempts 500
        """,
    )

    parser.add_argument(
        "--store",
        type=str,
        default=config.store_dir,
        help=f"Directory holding stored boards (default: {config.store_dir})",
    )
    parser.add_argument("--json", action="store_true", help="Print grids as JSON matrices")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Create a board and print its id")
    upload.add_argument("file", nargs="?", help="JSON matrix or '*'/'.' text file ('-' for stdin)")
    upload.add_argument("--pattern", type=str, help="Use a library pattern instead of a file")
    upload.add_argument("--rows", type=int, help="Board height for --pattern")
    upload.add_argument("--cols", type=int, help="Board width for --pattern")
    upload.add_argument("--offset-row", type=int, default=0, help="Row offset for --pattern (default: 0)")
    upload.add_argument("--offset-col", type=int, default=0, help="Column offset for --pattern (default: 0)")

    show = subparsers.add_parser("show", help="Print the current grid of a board")
    show.add_argument("board_id")

    next_cmd = subparsers.add_parser("next", help="Advance a board by one generation")
    next_cmd.add_argument("board_id")

    states = subparsers.add_parser("states", help="Advance a board by a number of generations")
    states.add_argument("board_id")
    states.add_argument("steps", type=int)

    final = subparsers.add_parser("final", help="Run a board until a generation repeats")
    final.add_argument("board_id")
    final.add_argument(
        "-m",
        "--max-attempts",
        type=int,
        default=config.default_max_attempts,
        help=f"Maximum generations to try (default: {config.default_max_attempts})",
    )

    subparsers.add_parser("patterns", help="List available patterns and exit")

    return parser


def run_command(args: argparse.Namespace, runner: CLIBoardRunner) -> None:
    """Dispatch parsed arguments to the runner."""
    if args.command == "upload":
        runner.upload(args.file, args.pattern, args.rows, args.cols, args.offset_row, args.offset_col)
    elif args.command == "show":
        runner.show(args.board_id)
    elif args.command == "next":
        runner.next_state(args.board_id)
    elif args.command == "states":
        runner.state_after(args.board_id, args.steps)
    elif args.command == "final":
        runner.final_state(args.board_id, args.max_attempts)
    elif args.command == "patterns":
        runner.list_patterns()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for an invalid request, 3 for an unknown board)
    """
    try:
        env_config = ServiceConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_ERROR

    parser = create_parser(env_config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = dataclasses.replace(env_config, store_dir=args.store)

    try:
        service = BoardService(JsonBoardRepository(config.store_dir), config)
        run_command(args, CLIBoardRunner(service, as_json=args.json))
    except BoardNotFoundError as e:
        print(f"Error: {e}")
        return EXIT_NOT_FOUND
    except ConvergenceNotReachedError as e:
        print(f"Error: {e}")
        print("Try increasing --max-attempts")
        return EXIT_ERROR
    except (LifeboardError, OSError) as e:
        print(f"Error: {e}")
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
