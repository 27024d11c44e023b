"""Public SDK surface for the CDI generator.

This module provides a stable import path for library users.
It re-exports the pipeline entry points and typed models.
"""

from __future__ import annotations

from core.config import CdiConfig
from core.types import Dataset, GenerationResult, ImportOutcome, ImportStage, OutputKind
from ingest.data_source import DataSource
from ingest.observer import ImportObserver, LoggingImportObserver
from ingest.pipeline import DatasetImporter
from output.naming import output_file_name, output_file_path
from reformat.header_detection import copy_first_lines, copy_through_marker, copy_until_blank_line
from reformat.padding import ColumnPaddingTable, PaddingRule, zero_pad
from reformat.reformatter import reformat_records
from report.generator import CdiGenerator
from report.nemo_writer import write_nemo_file
from sources.registry import available_sources, build_source
from templating.template_engine import populate_template

__all__ = [
    "CdiConfig",
    "CdiGenerator",
    "ColumnPaddingTable",
    "DataSource",
    "Dataset",
    "DatasetImporter",
    "GenerationResult",
    "ImportObserver",
    "ImportOutcome",
    "ImportStage",
    "LoggingImportObserver",
    "OutputKind",
    "PaddingRule",
    "available_sources",
    "build_source",
    "copy_first_lines",
    "copy_through_marker",
    "copy_until_blank_line",
    "output_file_name",
    "output_file_path",
    "populate_template",
    "reformat_records",
    "write_nemo_file",
    "zero_pad",
]
