"""Runtime configuration model for time shift runs.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DATA_DIR_ENV_VAR,
    DEFAULT_DATA_DIR,
    DEFAULT_WORKERS,
    PATHS_FILE_ENV_VAR,
    WORKERS_ENV_VAR,
)
from core.errors import TimeShiftConfigError


@dataclass(frozen=True)
class TimeShiftConfig:
    """Validated runtime configuration.

    Attributes:
        data_dir: Root directory walked for anchor date markers.
        workers: Number of files shifted concurrently per directory.
        paths_file: Optional YAML file replacing the packaged path table.
    """

    data_dir: Path
    workers: int
    paths_file: Path | None

    @classmethod
    def from_env(cls) -> "TimeShiftConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TimeShiftConfigError: If environment values are invalid.
        """
        data_dir_value = os.getenv(DATA_DIR_ENV_VAR, str(DEFAULT_DATA_DIR))
        workers_value = os.getenv(WORKERS_ENV_VAR, str(DEFAULT_WORKERS))
        paths_file_value = os.getenv(PATHS_FILE_ENV_VAR)
        return cls(
            data_dir=Path(data_dir_value).expanduser().resolve(),
            workers=parse_worker_count(workers_value),
            paths_file=Path(paths_file_value).expanduser().resolve() if paths_file_value else None,
        )


def parse_worker_count(raw_value: str) -> int:
    """Parse a worker count setting.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Parsed positive worker count.

    Raises:
        TimeShiftConfigError: If value is not a positive integer.
    """
    try:
        workers = int(raw_value)
    except ValueError as error:
        raise TimeShiftConfigError(
            f"Invalid {WORKERS_ENV_VAR} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {WORKERS_ENV_VAR} to a positive number."
        ) from error
    if workers < 1:
        raise TimeShiftConfigError(
            f"Invalid {WORKERS_ENV_VAR} value: expected at least 1, got {workers}."
        )
    return workers
