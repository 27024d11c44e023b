"""Data source capability interface.

Every source family (PANGAEA, ...) implements this protocol. The import
orchestrator and report writer depend only on it, never on a concrete
source.
"""

from __future__ import annotations

from typing import Iterator, Protocol

from core.types import Dataset
from reformat.padding import PaddingRule


class DataSource(Protocol):
    """Source-specific fetch, format, and metadata capabilities."""

    @property
    def name(self) -> str:
        """Registry name of the source, e.g. ``pangaea``."""

    @property
    def id_descriptor(self) -> str:
        """Descriptive name of one dataset id, e.g. ``DOI``."""

    @property
    def ids_descriptor(self) -> str:
        """Descriptive name of several dataset ids, e.g. ``DOIs``."""

    @property
    def id_format(self) -> str:
        """Human-readable dataset id format."""

    @property
    def separator(self) -> str:
        """Field separator used by the source data format."""

    @property
    def nemo_output_format(self) -> str:
        """NEMO output format name, e.g. ``MEDATLAS``."""

    def validate_id_format(self, dataset_id: str) -> bool:
        """Return whether an id looks valid. It may still be unknown to the source."""

    def fetch_data(self, dataset_id: str) -> str | None:
        """Fetch raw data text.

        Raises:
            DataSetNotFoundError: If the id is unknown to the source.
            FetchError: If retrieval fails.
        """

    def fetch_metadata(self, dataset_id: str) -> str | None:
        """Fetch raw metadata text.

        Raises:
            DataSetNotFoundError: If the id is unknown to the source.
            FetchError: If retrieval fails.
        """

    def copy_header(self, lines: Iterator[str], output: list[str]) -> None:
        """Copy the leading header lines of the data block into ``output``.

        Raises:
            FormatError: If the header cannot be identified.
        """

    def padding_rule_for(self, column_index: int) -> PaddingRule | None:
        """Return the padding rule of a column, or None if unpadded.

        Raises:
            PaddingError: If no rule can be determined for the column.
        """

    def preprocess_data(self, dataset: Dataset) -> None:
        """Adjust canonical data in place before it is cached."""

    def preprocess_metadata(self, dataset: Dataset) -> None:
        """Parse metadata and fill the dataset's derived attributes.

        Raises:
            ImporterError: If the metadata cannot be interpreted.
        """

    def resolve_tag(self, dataset: Dataset, tag_name: str) -> str | None:
        """Return the value of a template tag for a dataset, or None if unknown."""
