"""Core constants used across time shift modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_DIR = Path("data")
DEFAULT_WORKERS = 1
ANCHOR_FILE_NAME = ".anchorDate"
ANCHOR_DATE_FORMAT = "%Y-%m-%d"
DOCUMENT_FILE_SUFFIX = ".json"
DOCUMENT_JSON_INDENT = 4
BUNDLE_RESOURCE_TYPE = "Bundle"
RESOURCE_TYPE_FIELD = "resourceType"
NARRATIVE_PATH = "text.div"
ANCHOR_SHIFT_UNIT = "days"
DEFAULT_SHIFT_UNIT = "days"
SUPPORTED_SHIFT_UNITS = ("years", "months", "weeks", "days", "hours", "minutes", "seconds")
RESOURCE_PATHS_FILE_NAME = "resource_paths.yaml"
DATA_DIR_ENV_VAR = "TIMESHIFT_DATA_DIR"
WORKERS_ENV_VAR = "TIMESHIFT_WORKERS"
PATHS_FILE_ENV_VAR = "TIMESHIFT_PATHS_FILE"
