"""Time shift exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TimeShiftError(Exception):
    """Base exception for all time shift failures."""


class TimeShiftConfigError(TimeShiftError):
    """Raised for invalid runtime configuration."""


class RegistryError(TimeShiftError):
    """Raised for invalid temporal path tables or path specs."""


class UnknownResourceTypeError(RegistryError):
    """Raised when a document type has no registered temporal paths."""


class TemporalParseError(TimeShiftError):
    """Raised when a temporal literal or shift unit cannot be handled."""


class AnchorDateError(TimeShiftError):
    """Raised for malformed anchor date marker files."""


class DocumentIOError(TimeShiftError):
    """Raised for document read, parse, and write failures."""
