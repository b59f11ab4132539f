"""Frontend interfaces for stored boards."""

from .cli import CLIBoardRunner

__all__ = ["CLIBoardRunner"]
