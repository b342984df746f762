"""Anchor date marker persistence.

This module reads and writes the per-directory ``.anchorDate`` file
recording the date as of which a directory's documents were last shifted.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from core.constants import ANCHOR_DATE_FORMAT, ANCHOR_FILE_NAME
from core.errors import AnchorDateError, DocumentIOError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def anchor_file_path(directory: Path) -> Path:
    """Return the anchor marker path for a directory."""
    return directory / ANCHOR_FILE_NAME


def has_anchor(directory: Path) -> bool:
    """Return whether a directory carries an anchor marker."""
    return anchor_file_path(directory).is_file()


def read_anchor_date(directory: Path) -> date | None:
    """Read a directory's anchor date.

    Args:
        directory: Directory that may hold an anchor marker.

    Returns:
        Parsed anchor date, or None when the directory has no marker.

    Raises:
        AnchorDateError: If the marker does not hold a ``YYYY-MM-DD`` date.
        DocumentIOError: If the marker exists but cannot be read.
    """
    if not has_anchor(directory):
        return None
    anchor_file = anchor_file_path(directory)
    try:
        raw_value = anchor_file.read_text(encoding="utf-8").strip()
    except OSError as error:
        raise DocumentIOError(f"Failed to read anchor file {anchor_file}: {error}.") from error
    return parse_anchor_date(raw_value, str(anchor_file))


def parse_anchor_date(raw_value: str, source: str = "anchor date") -> date:
    """Strictly parse a ``YYYY-MM-DD`` anchor date.

    Raises:
        AnchorDateError: If the value does not match the layout.
    """
    try:
        parsed = datetime.strptime(raw_value, ANCHOR_DATE_FORMAT).date()
    except ValueError as error:
        raise AnchorDateError(
            f'Invalid anchor date "{raw_value}" in {source}. Expected format is "YYYY-MM-DD".'
        ) from error
    if parsed.strftime(ANCHOR_DATE_FORMAT) != raw_value:
        raise AnchorDateError(
            f'Invalid anchor date "{raw_value}" in {source}. Expected format is "YYYY-MM-DD".'
        )
    return parsed


def write_anchor_date(directory: Path, anchor_date: date) -> Path:
    """Write a directory's anchor marker.

    Args:
        directory: Directory receiving the marker.
        anchor_date: Date to record.

    Returns:
        Path of the written marker file.

    Raises:
        DocumentIOError: If the marker cannot be written.
    """
    anchor_file = anchor_file_path(directory)
    date_text = anchor_date.strftime(ANCHOR_DATE_FORMAT)
    try:
        anchor_file.write_text(date_text, encoding="utf-8")
    except OSError as error:
        raise DocumentIOError(
            f"Failed to write anchor file {anchor_file}: {error}. "
            "Check that the directory exists and is writable."
        ) from error
    _LOGGER.info("anchor_updated", anchor_file=str(anchor_file), anchor_date=date_text)
    return anchor_file
