"""Per-file and per-directory shift execution.

This module binds a shift plan to the document transformer, counts the
values each file actually changed, and writes results back to disk.
Files of one directory may be processed by a bounded thread pool; the
directory result is only returned once every file has completed.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

from core.constants import NARRATIVE_PATH
from core.errors import RegistryError, TemporalParseError
from core.logging_config import get_logger
from core.types import DirectoryShiftResult, FileShiftResult, ShiftPlan, ValueChange
from schema.path_registry import PathSpecRegistry, default_registry
from shift.document_io import list_document_files, read_document, write_document
from transforms.document_transformer import transform_document
from transforms.temporal_codec import shift_text, shift_value

_LOGGER = get_logger(__name__)


class ValueRewriter:
    """Rewrite callable applying one shift plan and recording changes."""

    def __init__(self, plan: ShiftPlan) -> None:
        self._plan = plan
        self.changes: list[ValueChange] = []

    def __call__(self, path: str, value: Any) -> Any:
        new_value = self._shift(path, value)
        if new_value != value:
            self.changes.append(ValueChange(path=path, old_value=value, new_value=new_value))
        return new_value

    def _shift(self, path: str, value: Any) -> Any:
        """Shift a string, narrative, or list of strings found at a path."""
        if isinstance(value, str):
            if path == NARRATIVE_PATH:
                return shift_text(value, self._plan)
            return shift_value(value, self._plan)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return [shift_value(item, self._plan) for item in value]
        raise TemporalParseError(
            f"Invalid temporal value at {path}: expected a string or list of strings, "
            f"got {type(value).__name__}."
        )


def shift_document(
    document: dict[str, Any],
    plan: ShiftPlan,
    registry: PathSpecRegistry | None = None,
) -> tuple[ValueChange, ...]:
    """Shift every temporal value of a parsed document in place.

    Args:
        document: Parsed JSON document.
        plan: Signed amount and unit.
        registry: Path table, the packaged one when omitted.

    Returns:
        Values whose text changed.
    """
    rewriter = ValueRewriter(plan)
    transform_document(document, rewriter, registry)
    return tuple(rewriter.changes)


def shift_document_file(
    source_path: Path,
    destination_path: Path,
    plan: ShiftPlan,
    registry: PathSpecRegistry | None = None,
    verbose: bool = False,
    dry_run: bool = False,
) -> FileShiftResult:
    """Shift one document file and write the result.

    Args:
        source_path: JSON file to read.
        destination_path: JSON file to write; may equal ``source_path``.
        plan: Signed amount and unit.
        registry: Path table, the packaged one when omitted.
        verbose: Log every changed value.
        dry_run: Compute changes without writing the destination.

    Returns:
        File result with the list of changed values.

    Raises:
        DocumentIOError: If the file cannot be read or written.
        RegistryError: If a document type is not registered.
        TemporalParseError: If a temporal value is malformed.
    """
    document = read_document(source_path)
    try:
        changes = shift_document(document, plan, registry)
    except (RegistryError, TemporalParseError) as error:
        raise type(error)(f"Failed to shift dates in {source_path}: {error}") from error
    if verbose:
        for change in changes:
            _LOGGER.info(
                "value_shifted",
                file=source_path.name,
                path=change.path,
                old_value=change.old_value,
                new_value=change.new_value,
            )
    if not dry_run:
        write_document(destination_path, document)
    _LOGGER.info(
        "document_shifted",
        file=source_path.name,
        values_shifted=len(changes),
        dry_run=dry_run,
    )
    return FileShiftResult(
        source_path=source_path,
        destination_path=destination_path,
        changes=changes,
        written=not dry_run,
    )


def shift_directory(
    input_dir: Path,
    plan: ShiftPlan,
    output_dir: Path | None = None,
    registry: PathSpecRegistry | None = None,
    workers: int = 1,
    verbose: bool = False,
    dry_run: bool = False,
    exclude_dirs: Iterable[Path] = (),
) -> DirectoryShiftResult:
    """Shift every document file under a directory tree.

    Args:
        input_dir: Directory searched recursively for ``.json`` files.
        plan: Signed amount and unit.
        output_dir: Destination root mirroring ``input_dir``; in place when omitted.
        registry: Path table, the packaged one when omitted.
        workers: Number of files processed concurrently.
        verbose: Log every changed value.
        dry_run: Compute changes without writing files.
        exclude_dirs: Subtrees left untouched.

    Returns:
        Directory result with per-file results in file order.

    Raises:
        DocumentIOError: If the input directory is missing or a file fails IO.
        RegistryError: If a document type is not registered.
        TemporalParseError: If a temporal value is malformed.
    """
    registry = registry or default_registry()
    output_root = output_dir or input_dir
    source_paths = list_document_files(input_dir, exclude_dirs)
    destinations = [output_root / path.relative_to(input_dir) for path in source_paths]
    if workers <= 1 or len(source_paths) <= 1:
        results = [
            shift_document_file(source, destination, plan, registry, verbose, dry_run)
            for source, destination in zip(source_paths, destinations)
        ]
    else:
        results = _shift_files_concurrently(
            source_paths, destinations, plan, registry, workers, verbose, dry_run
        )
    directory_result = DirectoryShiftResult(input_dir=input_dir, plan=plan, files=tuple(results))
    _LOGGER.info(
        "directory_shift_completed",
        input_dir=str(input_dir),
        output_dir=str(output_root),
        amount=plan.amount,
        unit=plan.unit,
        files=directory_result.file_count,
        values_shifted=directory_result.values_shifted,
        dry_run=dry_run,
    )
    return directory_result


def _shift_files_concurrently(
    source_paths: list[Path],
    destinations: list[Path],
    plan: ShiftPlan,
    registry: PathSpecRegistry,
    workers: int,
    verbose: bool,
    dry_run: bool,
) -> list[FileShiftResult]:
    """Shift files on a thread pool and return results in input order."""
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(
                shift_document_file, source, destination, plan, registry, verbose, dry_run
            )
            for source, destination in zip(source_paths, destinations)
        ]
        try:
            return [future.result() for future in futures]
        except Exception:
            for future in futures:
                future.cancel()
            raise
