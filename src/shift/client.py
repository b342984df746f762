"""SDK client for time shift workflows.

This module binds runtime configuration to the shift operations.
CLI commands and library users share one entry point.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

from core.config import TimeShiftConfig
from core.types import AnchorRunSummary, DirectoryShiftResult, ShiftPlan
from schema.path_registry import PathSpecRegistry, resolve_registry
from shift.anchor_store import write_anchor_date
from shift.anchor_tracker import run_anchor_walk
from shift.file_shifter import shift_directory


class TimeShiftClient:
    """Primary SDK entry point for time shift workflows."""

    def __init__(self, config: TimeShiftConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.

        Raises:
            RegistryError: If the configured path table is invalid.
        """
        self._config = config or TimeShiftConfig.from_env()
        self._registry = resolve_registry(self._config.paths_file)

    @property
    def registry(self) -> PathSpecRegistry:
        """Return the temporal path registry in use."""
        return self._registry

    def run_anchor_walk(self, today: date | None = None, verbose: bool = False) -> AnchorRunSummary:
        """Shift every anchored directory under the configured data directory.

        Args:
            today: Reference date, the current UTC date when omitted.
            verbose: Log every changed value.

        Returns:
            Run summary.
        """
        return run_anchor_walk(
            self._config.data_dir,
            today=today,
            registry=self._registry,
            workers=self._config.workers,
            verbose=verbose,
        )

    def shift(
        self,
        input_dir: Path,
        plan: ShiftPlan,
        output_dir: Path | None = None,
        verbose: bool = False,
        dry_run: bool = False,
    ) -> DirectoryShiftResult:
        """Shift one directory tree by an explicit plan, ignoring anchors.

        Args:
            input_dir: Directory searched recursively for documents.
            plan: Signed amount and unit.
            output_dir: Destination root; in place when omitted.
            verbose: Log every changed value.
            dry_run: Compute changes without writing files.

        Returns:
            Directory result.
        """
        return shift_directory(
            input_dir,
            plan,
            output_dir=output_dir,
            registry=self._registry,
            workers=self._config.workers,
            verbose=verbose,
            dry_run=dry_run,
        )

    def set_anchor(self, directory: Path, anchor_date: date | None = None) -> Path:
        """Write a directory's anchor marker, today's UTC date by default."""
        return write_anchor_date(directory, anchor_date or datetime.now(timezone.utc).date())
