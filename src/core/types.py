"""Shared typed models.

This module defines immutable data models used by the schema, transform,
shift, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

from core.constants import DEFAULT_SHIFT_UNIT

PathSpec = tuple[str, ...]


@dataclass(frozen=True)
class ShiftPlan:
    """Signed time offset applied to every temporal value in one run.

    Attributes:
        amount: Signed number of units to add.
        unit: Unit name, e.g. "days" or "months".
    """

    amount: int
    unit: str = DEFAULT_SHIFT_UNIT


@dataclass(frozen=True)
class PathMatch:
    """One concrete location addressed by a path spec.

    Attributes:
        container: Dict holding the matched field.
        key: Field name inside the container.
        value: Current field value.
        path: Dot-joined resolved path, with list indexes.
    """

    container: dict[str, Any]
    key: str
    value: Any
    path: str


@dataclass(frozen=True)
class ValueChange:
    """One temporal value whose text changed."""

    path: str
    old_value: Any
    new_value: Any


@dataclass(frozen=True)
class FileShiftResult:
    """Outcome of shifting one document file.

    Attributes:
        source_path: File that was read.
        destination_path: File that was (or would be) written.
        changes: Values whose text changed, in rewrite order.
        written: Whether the destination file was written.
    """

    source_path: Path
    destination_path: Path
    changes: tuple[ValueChange, ...] = ()
    written: bool = True

    @property
    def values_shifted(self) -> int:
        """Return number of values whose text changed."""
        return len(self.changes)


@dataclass(frozen=True)
class DirectoryShiftResult:
    """Reduced outcome of shifting one directory tree.

    Attributes:
        input_dir: Directory whose documents were shifted.
        plan: Shift applied to every document.
        files: Per-file results in processing order.
    """

    input_dir: Path
    plan: ShiftPlan
    files: tuple[FileShiftResult, ...] = ()

    @property
    def file_count(self) -> int:
        """Return number of processed files."""
        return len(self.files)

    @property
    def values_shifted(self) -> int:
        """Return total changed values across files."""
        return sum(result.values_shifted for result in self.files)


@dataclass(frozen=True)
class AnchorRunSummary:
    """Totals for one anchor-driven walk over a data directory.

    Attributes:
        data_dir: Root directory that was walked.
        today: Date written to updated anchor markers.
        shifted_directories: Directory results, one per shifted anchor.
        skipped_directories: Directories with malformed anchor markers.
        elapsed_seconds: Wall time of the walk.
    """

    data_dir: Path
    today: date
    shifted_directories: tuple[DirectoryShiftResult, ...] = ()
    skipped_directories: tuple[Path, ...] = ()
    elapsed_seconds: float = 0.0

    @property
    def directories_shifted(self) -> int:
        """Return number of directories that received a shift."""
        return len(self.shifted_directories)

    @property
    def files_processed(self) -> int:
        """Return number of files processed across directories."""
        return sum(result.file_count for result in self.shifted_directories)

    @property
    def values_shifted(self) -> int:
        """Return total changed values across directories."""
        return sum(result.values_shifted for result in self.shifted_directories)
