"""In-memory data source and observer doubles for pipeline tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from core.types import Dataset
from reformat.header_detection import copy_first_lines
from reformat.padding import ColumnPaddingTable, PaddingRule, zero_pad


@dataclass
class FakeSource:
    """Comma-separated source with one header line and ``key=value`` metadata."""

    data: str | None = "id,name\n42,abc\n7,xyz\n"
    metadata: str | None = "internal_id=1234\nstation=7\ntitle=Demo profile\n"
    data_error: Exception | None = None
    metadata_error: Exception | None = None
    padding_table: ColumnPaddingTable = field(
        default_factory=lambda: ColumnPaddingTable(column_count=2, rules={0: zero_pad(6)})
    )
    fetched: list[str] = field(default_factory=list)

    name: str = "fake"
    id_descriptor: str = "ID"
    ids_descriptor: str = "IDs"
    id_format: str = "ds-n"
    separator: str = ","
    nemo_output_format: str = "MEDIATLAS"

    def validate_id_format(self, dataset_id: str) -> bool:
        return dataset_id.startswith("ds-")

    def fetch_data(self, dataset_id: str) -> str | None:
        self.fetched.append(f"data:{dataset_id}")
        if self.data_error is not None:
            raise self.data_error
        return self.data

    def fetch_metadata(self, dataset_id: str) -> str | None:
        self.fetched.append(f"metadata:{dataset_id}")
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata

    def copy_header(self, lines: Iterator[str], output: list[str]) -> None:
        copy_first_lines(1)(lines, output)

    def padding_rule_for(self, column_index: int) -> PaddingRule | None:
        return self.padding_table.rule_for(column_index)

    def preprocess_data(self, dataset: Dataset) -> None:
        return None

    def preprocess_metadata(self, dataset: Dataset) -> None:
        values = dict(
            line.split("=", 1) for line in (dataset.raw_metadata or "").splitlines() if "=" in line
        )
        dataset.parsed_metadata = values
        dataset.internal_id = values.get("internal_id")
        dataset.station_number = int(values.get("station", "0"))
        dataset.nemo_data_type = "CTD"

    def resolve_tag(self, dataset: Dataset, tag_name: str) -> str | None:
        if tag_name == "dataset_id":
            return dataset.dataset_id
        return dataset.parsed_metadata.get(tag_name)


@dataclass
class RecordingObserver:
    """Observer remembering every progress line and dataset message."""

    progress_messages: list[str] = field(default_factory=list)
    dataset_messages: list[tuple[str, str]] = field(default_factory=list)

    def report_progress(self, message: str) -> None:
        self.progress_messages.append(message)

    def log_message(self, dataset_id: str, message: str) -> None:
        self.dataset_messages.append((dataset_id, message))

    def describe_id_kind(self) -> str:
        return "IDs"

    def validate_id_format(self, dataset_id: str) -> bool:
        return dataset_id.startswith("ds-")

    def id_format_description(self) -> str:
        return "ds-n"
