"""CDI generator exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Dataset-level import failures share ``ImporterError`` so the import
orchestrator can convert them into a failed outcome in one place.
"""

from __future__ import annotations


class CdiError(Exception):
    """Base exception for all CDI generator failures."""


class CdiConfigError(CdiError):
    """Raised for invalid runtime configuration."""


class ImporterError(CdiError):
    """Raised for dataset retrieval, reformatting, and caching failures."""


class FetchError(ImporterError):
    """Raised when a data source cannot deliver data or metadata."""


class DataSetNotFoundError(ImporterError):
    """Raised when a dataset identifier is unknown to the data source."""

    def __init__(self, dataset_id: str) -> None:
        super().__init__(f"Data set {dataset_id} not found")
        self.dataset_id = dataset_id


class FormatError(ImporterError):
    """Raised when the header of a source data block cannot be identified."""


class PaddingError(ImporterError):
    """Raised when no padding rule can be determined for a column."""

    def __init__(self, column_index: int, reason: str) -> None:
        super().__init__(f"Cannot determine padding for column {column_index}: {reason}")
        self.column_index = column_index


class TemplateError(CdiError):
    """Raised for malformed or unreadable report templates."""


class UnrecognizedTagError(TemplateError):
    """Raised when a template tag has no value for the current dataset."""

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"Unrecognised template tag '{tag_name}'")
        self.tag_name = tag_name


class CdiOutputError(CdiError):
    """Raised for report naming and output write failures."""
