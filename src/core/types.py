"""Shared typed models.

This module defines the dataset model mutated during one import run
and the small immutable results passed between pipeline layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping


class OutputKind(Enum):
    """Kinds of NEMO file produced for one dataset."""

    REPORT = "report"
    SUMMARY = "summary"


class ImportStage(Enum):
    """Linear stages of one dataset import run."""

    START = "start"
    FETCH_DATA = "fetch_data"
    REFORMAT_DATA = "reformat_data"
    WRITE_DATA = "write_data"
    FETCH_METADATA = "fetch_metadata"
    PREPROCESS_METADATA = "preprocess_metadata"
    WRITE_METADATA = "write_metadata"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class Dataset:
    """In-memory state of one dataset for the duration of an import run.

    Attributes:
        dataset_id: Caller-supplied identifier, e.g. a DOI.
        raw_data: Data text; canonical once reformatted.
        raw_metadata: Metadata text as retrieved from the source.
        parsed_metadata: Flattened metadata values used to resolve template tags.
        internal_id: Source-internal identifier used in output file names.
        station_number: Non-negative station number used in output file names.
        nemo_data_type: Short NEMO data type code, e.g. ``CTD``.
        data_cached: Whether data was loaded from an existing cache file.
        metadata_cached: Whether metadata was loaded from an existing cache file.
        data_file: Cache file holding the canonical data.
        metadata_file: Cache file holding the metadata.
    """

    dataset_id: str
    raw_data: str | None = None
    raw_metadata: str | None = None
    parsed_metadata: Mapping[str, str] = field(default_factory=dict)
    internal_id: str | None = None
    station_number: int = 0
    nemo_data_type: str | None = None
    data_cached: bool = False
    metadata_cached: bool = False
    data_file: Path | None = None
    metadata_file: Path | None = None


@dataclass(frozen=True)
class ImportOutcome:
    """Result of one dataset import run.

    Attributes:
        dataset: Dataset state at the end of the run.
        success: Whether both cache files were written.
        stage: Last stage reached; ``DONE`` or ``ABORTED``.
        failed_stage: Stage in progress when the run aborted.
        message: Human-readable failure reason, empty on success.
    """

    dataset: Dataset
    success: bool
    stage: ImportStage
    failed_stage: ImportStage | None = None
    message: str = ""


@dataclass(frozen=True)
class GenerationResult:
    """Result of importing one dataset and writing its NEMO files.

    Attributes:
        dataset_id: Dataset identifier.
        success: Whether import and every requested file write succeeded.
        report_path: Written report file, if any.
        summary_path: Written summary file, if any.
        message: Human-readable failure reason, empty on success.
    """

    dataset_id: str
    success: bool
    report_path: Path | None = None
    summary_path: Path | None = None
    message: str = ""
