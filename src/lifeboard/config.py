"""Runtime configuration for the board service and CLI."""

from dataclasses import dataclass
from typing import Mapping, Optional
import os

DEFAULT_STORE_DIR = "boards"
DEFAULT_MAX_ATTEMPTS = 100

STORE_DIR_ENV = "LIFEBOARD_STORE_DIR"
MAX_ATTEMPTS_ENV = "LIFEBOARD_MAX_ATTEMPTS"


@dataclass
class ServiceConfig:
    """Configuration for a board service."""

    store_dir: str = DEFAULT_STORE_DIR
    default_max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """Build a config from environment variables, falling back to defaults.

        Raises:
            ValueError: If LIFEBOARD_MAX_ATTEMPTS is not a non-negative integer
        """
        environ = os.environ if environ is None else environ

        store_dir = environ.get(STORE_DIR_ENV) or DEFAULT_STORE_DIR

        raw_attempts = environ.get(MAX_ATTEMPTS_ENV)
        if raw_attempts:
            try:
                max_attempts = int(raw_attempts)
            except ValueError:
                raise ValueError(f"{MAX_ATTEMPTS_ENV} must be an integer, got '{raw_attempts}'")
            if max_attempts < 0:
                raise ValueError(f"{MAX_ATTEMPTS_ENV} must be non-negative, got {max_attempts}")
        else:
            max_attempts = DEFAULT_MAX_ATTEMPTS

        return cls(store_dir=store_dir, default_max_attempts=max_attempts)
