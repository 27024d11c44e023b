"""PANGAEA data source.

Datasets are addressed by DOI and retrieved over HTTP from the PANGAEA
DOI resolver: tab-separated text for the data and metainfo XML for the
metadata. The data header is the ``/* ... */`` description block
followed by one column-name line.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ElementTree
from typing import Iterator

import requests

from core.config import CdiConfig
from core.constants import (
    DEFAULT_NEMO_DATA_TYPE,
    DEFAULT_NEMO_OUTPUT_FORMAT,
    PANGAEA_SOURCE_NAME,
)
from core.errors import DataSetNotFoundError, FetchError, ImporterError
from core.logging_config import get_logger
from core.types import Dataset
from reformat.header_detection import copy_through_marker
from reformat.padding import ColumnPaddingTable, PaddingRule

_LOGGER = get_logger(__name__)

_DOI_PATTERN = re.compile(r"^10\.1594/PANGAEA\.(\d+)$")
_TRAILING_DIGITS = re.compile(r"(\d+)$")
_DATA_FORMAT = "textfile"
_METADATA_FORMAT = "metainfo_xml"
_HEADER_END_MARKER = "*/"


class PangaeaSource:
    """PANGAEA DOI source backed by a ``requests`` session."""

    def __init__(
        self,
        config: CdiConfig,
        nemo_data_type: str = DEFAULT_NEMO_DATA_TYPE,
        nemo_output_format: str = DEFAULT_NEMO_OUTPUT_FORMAT,
        padding_table: ColumnPaddingTable | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = config.pangaea_base_url.rstrip("/")
        self._timeout = config.http_timeout_seconds
        self._nemo_data_type = nemo_data_type
        self._nemo_output_format = nemo_output_format
        self._padding_table = padding_table or ColumnPaddingTable()
        self._session = session or requests.Session()
        self._copy_header = copy_through_marker(_HEADER_END_MARKER, trailing_lines=1)

    @property
    def name(self) -> str:
        return PANGAEA_SOURCE_NAME

    @property
    def id_descriptor(self) -> str:
        return "DOI"

    @property
    def ids_descriptor(self) -> str:
        return "DOIs"

    @property
    def id_format(self) -> str:
        return "10.1594/PANGAEA.nnnnnn"

    @property
    def separator(self) -> str:
        return "\t"

    @property
    def nemo_output_format(self) -> str:
        return self._nemo_output_format

    def validate_id_format(self, dataset_id: str) -> bool:
        return _DOI_PATTERN.match(dataset_id.strip()) is not None

    def fetch_data(self, dataset_id: str) -> str | None:
        return self._get_text(dataset_id, _DATA_FORMAT)

    def fetch_metadata(self, dataset_id: str) -> str | None:
        return self._get_text(dataset_id, _METADATA_FORMAT)

    def copy_header(self, lines: Iterator[str], output: list[str]) -> None:
        self._copy_header(lines, output)

    def padding_rule_for(self, column_index: int) -> PaddingRule | None:
        return self._padding_table.rule_for(column_index)

    def preprocess_data(self, dataset: Dataset) -> None:
        """PANGAEA data needs no changes beyond reformatting."""

    def preprocess_metadata(self, dataset: Dataset) -> None:
        """Flatten the metainfo XML and derive naming attributes.

        Raises:
            ImporterError: If the metadata is not well-formed XML.
        """
        dataset.parsed_metadata = parse_metainfo_xml(dataset.raw_metadata or "")
        dataset.internal_id = _internal_id(dataset.dataset_id)
        dataset.station_number = _station_number(dataset.parsed_metadata.get("event.label"))
        dataset.nemo_data_type = self._nemo_data_type

    def resolve_tag(self, dataset: Dataset, tag_name: str) -> str | None:
        builtin_values = {
            "dataset_id": dataset.dataset_id,
            "internal_id": dataset.internal_id,
            "station_number": str(dataset.station_number),
            "nemo_data_type": dataset.nemo_data_type,
            "nemo_output_format": self._nemo_output_format,
            "data_file": str(dataset.data_file) if dataset.data_file else None,
        }
        if tag_name in builtin_values:
            return builtin_values[tag_name]
        return dataset.parsed_metadata.get(tag_name)

    def _get_text(self, dataset_id: str, format_name: str) -> str | None:
        """Download one representation of a dataset.

        Returns:
            Response text, or None when the body is empty.

        Raises:
            DataSetNotFoundError: On HTTP 404.
            FetchError: On transport errors and other HTTP failures.
        """
        url = f"{self._base_url}/{dataset_id}"
        _LOGGER.info("pangaea_request", url=url, format=format_name)
        try:
            response = self._session.get(
                url, params={"format": format_name}, timeout=self._timeout
            )
        except requests.RequestException as error:
            raise FetchError(
                f"Failed to retrieve {format_name} for {dataset_id}: {error}"
            ) from error
        if response.status_code == 404:
            raise DataSetNotFoundError(dataset_id)
        try:
            response.raise_for_status()
        except requests.HTTPError as error:
            raise FetchError(
                f"PANGAEA returned HTTP {response.status_code} for {dataset_id} ({format_name})"
            ) from error
        if response.encoding is None:
            response.encoding = "utf-8"
        return response.text or None


def parse_metainfo_xml(metadata_text: str) -> dict[str, str]:
    """Flatten metadata XML into dotted element paths.

    ``<MetaData><citation><title>T</title>`` becomes ``{"citation.title": "T"}``.
    Namespaces are dropped and the first occurrence of a path wins.

    Raises:
        ImporterError: If the text is not well-formed XML.
    """
    try:
        root = ElementTree.fromstring(metadata_text)
    except ElementTree.ParseError as error:
        raise ImporterError(f"Metadata is not valid XML: {error}") from error
    values: dict[str, str] = {}
    _flatten_element(root, "", values)
    return values


def _flatten_element(element: ElementTree.Element, prefix: str, values: dict[str, str]) -> None:
    for child in element:
        if not isinstance(child.tag, str):
            continue
        key = f"{prefix}{_local_name(child.tag)}"
        text = (child.text or "").strip()
        if text and key not in values:
            values[key] = text
        _flatten_element(child, f"{key}.", values)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _internal_id(dataset_id: str) -> str:
    match = _DOI_PATTERN.match(dataset_id.strip())
    if match is None:
        raise ImporterError(
            f"'{dataset_id}' is not a PANGAEA DOI. Use the form 10.1594/PANGAEA.nnnnnn."
        )
    return match.group(1)


def _station_number(event_label: str | None) -> int:
    if not event_label:
        return 0
    match = _TRAILING_DIGITS.search(event_label.strip())
    return int(match.group(1)) if match else 0
