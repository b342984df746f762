"""Anchor-driven time shift over a data directory tree.

This module walks a data directory, and wherever a directory carries an
anchor date marker it shifts that directory's documents by the number of
days elapsed since the anchor, then moves the anchor to today. Nested
directories with their own marker are shifted only by their own anchor.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
import time

from core.constants import ANCHOR_FILE_NAME, ANCHOR_SHIFT_UNIT
from core.errors import AnchorDateError, DocumentIOError
from core.logging_config import get_logger
from core.types import AnchorRunSummary, DirectoryShiftResult, ShiftPlan
from schema.path_registry import PathSpecRegistry, default_registry
from shift.anchor_store import anchor_file_path, read_anchor_date, write_anchor_date
from shift.file_shifter import shift_directory

_LOGGER = get_logger(__name__)


class AnchorTracker:
    """Runner for one anchor walk over a data directory."""

    def __init__(
        self,
        data_dir: Path,
        today: date | None = None,
        registry: PathSpecRegistry | None = None,
        workers: int = 1,
        verbose: bool = False,
    ) -> None:
        self._data_dir = data_dir
        self._today = today or datetime.now(timezone.utc).date()
        self._registry = registry or default_registry()
        self._workers = workers
        self._verbose = verbose

    def run(self) -> AnchorRunSummary:
        """Walk the data directory and shift every directory with a due anchor.

        Returns:
            Summary of shifted and skipped directories.

        Raises:
            DocumentIOError: If the data directory does not exist or IO fails.
            RegistryError: If a document type is not registered.
            TemporalParseError: If a temporal value is malformed.
        """
        if not self._data_dir.is_dir():
            raise DocumentIOError(
                f"Data directory {self._data_dir} does not exist. "
                "Create it or point TIMESHIFT_DATA_DIR at an existing directory."
            )
        started_at = time.monotonic()
        _LOGGER.info("anchor_walk_started", data_dir=str(self._data_dir), today=str(self._today))
        shifted, skipped = self._visit(self._data_dir)
        summary = AnchorRunSummary(
            data_dir=self._data_dir,
            today=self._today,
            shifted_directories=tuple(shifted),
            skipped_directories=tuple(skipped),
            elapsed_seconds=time.monotonic() - started_at,
        )
        _LOGGER.info(
            "anchor_walk_completed",
            data_dir=str(self._data_dir),
            directories_shifted=summary.directories_shifted,
            directories_skipped=len(summary.skipped_directories),
            files_processed=summary.files_processed,
            values_shifted=summary.values_shifted,
            elapsed_seconds=round(summary.elapsed_seconds, 3),
        )
        return summary

    def _visit(self, directory: Path) -> tuple[list[DirectoryShiftResult], list[Path]]:
        """Shift a directory if due, then recurse into its children."""
        shifted: list[DirectoryShiftResult] = []
        try:
            anchor_date = read_anchor_date(directory)
        except AnchorDateError as error:
            _LOGGER.error(
                "anchor_invalid",
                directory=str(directory),
                anchor_file=str(anchor_file_path(directory)),
                error=str(error),
            )
            return shifted, [directory]
        if anchor_date is None:
            _LOGGER.info("anchor_missing", directory=str(directory))
        else:
            result = self._shift_anchored_directory(directory, anchor_date)
            if result is not None:
                shifted.append(result)
        skipped: list[Path] = []
        for child in _subdirectories(directory):
            child_shifted, child_skipped = self._visit(child)
            shifted.extend(child_shifted)
            skipped.extend(child_skipped)
        return shifted, skipped

    def _shift_anchored_directory(
        self,
        directory: Path,
        anchor_date: date,
    ) -> DirectoryShiftResult | None:
        """Shift one anchored directory and move its anchor to today."""
        diff = (self._today - anchor_date).days
        _LOGGER.info(
            "anchor_found",
            directory=str(directory),
            anchor_date=str(anchor_date),
            diff_days=diff,
        )
        if diff == 0:
            _LOGGER.info("anchor_shift_skipped", directory=str(directory), reason="anchor is today")
            return None
        _LOGGER.info("anchor_shift_started", directory=str(directory), diff_days=diff)
        result = shift_directory(
            directory,
            ShiftPlan(amount=diff, unit=ANCHOR_SHIFT_UNIT),
            registry=self._registry,
            workers=self._workers,
            verbose=self._verbose,
            exclude_dirs=_nested_anchored_dirs(directory),
        )
        write_anchor_date(directory, self._today)
        return result


def run_anchor_walk(
    data_dir: Path,
    today: date | None = None,
    registry: PathSpecRegistry | None = None,
    workers: int = 1,
    verbose: bool = False,
) -> AnchorRunSummary:
    """Shift every anchored directory under a data directory.

    Args:
        data_dir: Root directory to walk, itself included.
        today: Reference date, the current UTC date when omitted.
        registry: Path table, the packaged one when omitted.
        workers: Number of files processed concurrently per directory.
        verbose: Log every changed value.

    Returns:
        Run summary; ``directories_shifted == 0`` marks a no-op run.
    """
    tracker = AnchorTracker(data_dir, today, registry, workers, verbose)
    return tracker.run()


def _subdirectories(directory: Path) -> list[Path]:
    """Return sorted child directories."""
    return sorted(path for path in directory.iterdir() if path.is_dir())


def _nested_anchored_dirs(directory: Path) -> list[Path]:
    """Return descendants that carry their own anchor marker."""
    return sorted(
        marker.parent
        for marker in directory.rglob(ANCHOR_FILE_NAME)
        if marker.is_file() and marker.parent != directory
    )
