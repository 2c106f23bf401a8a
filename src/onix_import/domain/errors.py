"""Exceptions raised for programming or caller errors.

Malformed ONIX input never raises; it is reported as data on the import result.
"""

from __future__ import annotations


class OnixImportError(Exception):
    """Base class for onix-import failures."""


class UnsupportedVersionError(OnixImportError, ValueError):
    """Raised when no parser exists for the requested ONIX version."""


class OwnershipSplitError(OnixImportError, ValueError):
    """Raised when caller-supplied ownership percentages are inconsistent."""
