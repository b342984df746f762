"""JSON document file helpers.

This module reads, writes, and discovers FHIR JSON document files.
It wraps filesystem and parse failures in traceable domain errors.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from core.constants import DOCUMENT_FILE_SUFFIX, DOCUMENT_JSON_INDENT
from core.errors import DocumentIOError


def read_document(document_path: Path) -> dict[str, Any]:
    """Read one JSON document from disk.

    Args:
        document_path: Path to a ``.json`` file.

    Returns:
        Parsed JSON object.

    Raises:
        DocumentIOError: If the file is unreadable or not a JSON object.
    """
    try:
        payload = json.loads(document_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise DocumentIOError(
            f"Failed to parse JSON document at {document_path}: {error.msg} "
            f"(line {error.lineno}). Fix the JSON syntax and retry."
        ) from error
    except OSError as error:
        raise DocumentIOError(
            f"Failed to read document file {document_path}: {error}."
        ) from error
    if not isinstance(payload, dict):
        raise DocumentIOError(
            f"Invalid document at {document_path}: expected a JSON object, "
            f"got {type(payload).__name__}."
        )
    return payload


def write_document(document_path: Path, document: dict[str, Any]) -> None:
    """Write one JSON document with four-space indentation.

    Args:
        document_path: Destination path; parent directories are created.
        document: JSON object to serialize.

    Raises:
        DocumentIOError: If the destination cannot be written.
    """
    try:
        document_path.parent.mkdir(parents=True, exist_ok=True)
        document_path.write_text(
            json.dumps(document, indent=DOCUMENT_JSON_INDENT, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as error:
        raise DocumentIOError(
            f"Failed to write document file {document_path}: {error}. "
            "Check that the destination is writable."
        ) from error


def list_document_files(directory: Path, exclude_dirs: Iterable[Path] = ()) -> list[Path]:
    """List JSON document files under a directory tree.

    Args:
        directory: Root directory to search recursively.
        exclude_dirs: Subtrees whose files are left out.

    Returns:
        Sorted document file paths.

    Raises:
        DocumentIOError: If the directory does not exist.
    """
    if not directory.is_dir():
        raise DocumentIOError(
            f"Failed to list documents under {directory}: directory does not exist. "
            "Provide an existing directory."
        )
    excluded = {path.resolve() for path in exclude_dirs}
    document_files: list[Path] = []
    for file_path in sorted(directory.rglob(f"*{DOCUMENT_FILE_SUFFIX}")):
        if not file_path.is_file():
            continue
        if excluded and any(parent in excluded for parent in file_path.resolve().parents):
            continue
        document_files.append(file_path)
    return document_files
