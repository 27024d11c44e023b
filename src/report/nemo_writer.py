"""Populated NEMO file writer."""

from __future__ import annotations

from functools import partial
from pathlib import Path

from core.constants import FILE_ENCODING
from core.logging_config import get_logger
from core.types import Dataset, OutputKind
from ingest.data_source import DataSource
from output.naming import output_file_path
from templating.template_engine import populate_template

_LOGGER = get_logger(__name__)


def write_nemo_file(
    kind: OutputKind,
    template: str,
    source: DataSource,
    dataset: Dataset,
    output_dir: Path,
) -> Path:
    """Populate a template for a dataset and write it to its NEMO path.

    The populated text is built completely before the file is opened.

    Args:
        kind: Report or summary.
        template: Template text.
        source: Source resolving template tags for the dataset.
        dataset: Imported dataset.
        output_dir: NEMO output directory.

    Returns:
        Written file path.

    Raises:
        TemplateError: If the template is malformed or a tag is unrecognised.
        CdiOutputError: If the dataset cannot be named.
    """
    populated = populate_template(template, partial(source.resolve_tag, dataset))
    target_path = output_file_path(output_dir, kind, dataset, source.nemo_output_format)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_text(populated, encoding=FILE_ENCODING)
    _LOGGER.info(
        "nemo_file_written",
        dataset_id=dataset.dataset_id,
        kind=kind.value,
        path=str(target_path),
    )
    return target_path
