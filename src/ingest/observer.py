"""Import progress observers.

The import orchestrator reports progress and per-dataset messages to an
observer and asks it about dataset id formats. It never reads user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from core.logging_config import get_logger
from ingest.data_source import DataSource

_LOGGER = get_logger(__name__)


class ImportObserver(Protocol):
    """Receiver of import progress and id-format questions."""

    def report_progress(self, message: str) -> None:
        """Show the current stage of the dataset being imported."""

    def log_message(self, dataset_id: str, message: str) -> None:
        """Record a message about one dataset."""

    def describe_id_kind(self) -> str:
        """Return the descriptive name of dataset ids, e.g. ``DOIs``."""

    def validate_id_format(self, dataset_id: str) -> bool:
        """Return whether an id has the expected format."""

    def id_format_description(self) -> str:
        """Return the expected id format for error messages."""


@dataclass
class LoggingImportObserver:
    """Observer writing progress lines and messages to the structured log.

    Attributes:
        source: Source answering id-format questions.
        progress: Number of datasets started so far.
        progress_max: Total number of datasets in the batch.
        current_dataset_id: Dataset currently being imported.
    """

    source: DataSource
    progress: int = 0
    progress_max: int = 0
    current_dataset_id: str = ""

    def start_batch(self, dataset_count: int) -> None:
        """Reset counters for a batch of ``dataset_count`` datasets."""
        self.progress = 0
        self.progress_max = dataset_count
        self.current_dataset_id = ""

    def start_dataset(self, dataset_id: str) -> None:
        """Advance the progress counter to the next dataset."""
        self.progress += 1
        self.current_dataset_id = dataset_id

    def report_progress(self, message: str) -> None:
        """Log a ``<n>/<max> <id>: <message>`` progress line."""
        _LOGGER.info(
            "import_progress",
            line=f"{self.progress}/{self.progress_max} {self.current_dataset_id}: {message}",
        )

    def log_message(self, dataset_id: str, message: str) -> None:
        _LOGGER.info("dataset_message", dataset_id=dataset_id, message=message)

    def describe_id_kind(self) -> str:
        return self.source.ids_descriptor

    def validate_id_format(self, dataset_id: str) -> bool:
        return self.source.validate_id_format(dataset_id)

    def id_format_description(self) -> str:
        return self.source.id_format
