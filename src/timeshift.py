"""Public SDK surface for FHIR time shifting.

This module provides a stable import path for library users.
It re-exports the primary client, typed models, and engine entry points.
"""

from __future__ import annotations

from core.config import TimeShiftConfig
from core.types import (
    AnchorRunSummary,
    DirectoryShiftResult,
    FileShiftResult,
    ShiftPlan,
    ValueChange,
)
from schema.path_registry import PathSpecRegistry, default_registry, load_registry
from shift.anchor_tracker import run_anchor_walk
from shift.client import TimeShiftClient
from shift.document_io import list_document_files
from shift.file_shifter import shift_directory, shift_document, shift_document_file
from transforms.document_transformer import transform_document
from transforms.temporal_codec import shift_text, shift_value

__all__ = [
    "AnchorRunSummary",
    "DirectoryShiftResult",
    "FileShiftResult",
    "PathSpecRegistry",
    "ShiftPlan",
    "TimeShiftClient",
    "TimeShiftConfig",
    "ValueChange",
    "default_registry",
    "list_document_files",
    "load_registry",
    "run_anchor_walk",
    "shift_directory",
    "shift_document",
    "shift_document_file",
    "shift_text",
    "shift_value",
    "transform_document",
]
