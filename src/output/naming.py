"""Deterministic NEMO output file names.

Names follow ``<internal id>_<station:06d>_<data type>_<format>.txt``.
Report and summary files currently share the same pattern, so callers
must not assume the two kinds get distinct names.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import OUTPUT_FILE_EXTENSION, STATION_NUMBER_WIDTH
from core.errors import CdiOutputError
from core.types import Dataset, OutputKind


def output_file_name(
    kind: OutputKind,
    internal_id: str,
    station_number: int,
    nemo_data_type: str,
    output_format: str,
) -> str:
    """Build the NEMO file name for a dataset.

    Args:
        kind: Report or summary. Both resolve to the same pattern.
        internal_id: Source-internal dataset id.
        station_number: Non-negative station number, zero-padded to six digits.
        nemo_data_type: NEMO data type code.
        output_format: NEMO output format, lowercased in the name.

    Returns:
        File name with ``.txt`` extension.

    Raises:
        CdiOutputError: If the station number is negative.
    """
    if station_number < 0:
        raise CdiOutputError(
            f"Cannot name {kind.value} file: station number must be non-negative, "
            f"got {station_number}."
        )
    station = f"{station_number:0{STATION_NUMBER_WIDTH}d}"
    return (
        f"{internal_id}_{station}_{nemo_data_type}_{output_format.lower()}{OUTPUT_FILE_EXTENSION}"
    )


def output_file_path(
    output_dir: Path,
    kind: OutputKind,
    dataset: Dataset,
    output_format: str,
) -> Path:
    """Build the NEMO file path for an imported dataset.

    Raises:
        CdiOutputError: If the dataset lacks an internal id or data type.
    """
    if not dataset.internal_id or not dataset.nemo_data_type:
        raise CdiOutputError(
            f"Cannot name {kind.value} file for {dataset.dataset_id}: "
            "internal id and NEMO data type are only known after metadata import."
        )
    file_name = output_file_name(
        kind,
        dataset.internal_id,
        dataset.station_number,
        dataset.nemo_data_type,
        output_format,
    )
    return output_dir / file_name
