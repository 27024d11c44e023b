"""Batch CDI generation.

This module imports datasets one at a time and writes the NEMO report
and summary files for each successful import. A failure affects only
the dataset it occurred in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.config import CdiConfig
from core.errors import CdiOutputError, TemplateError
from core.logging_config import get_logger
from core.types import Dataset, GenerationResult, OutputKind
from ingest.data_source import DataSource
from ingest.observer import LoggingImportObserver
from ingest.pipeline import DatasetImporter
from output.naming import output_file_path
from report.nemo_writer import write_nemo_file

_LOGGER = get_logger(__name__)


class CdiGenerator:
    """Sequential import and NEMO file generation for one source."""

    def __init__(
        self,
        source: DataSource,
        config: CdiConfig,
        observer: LoggingImportObserver | None = None,
    ) -> None:
        self._source = source
        self._config = config
        self._observer = observer or LoggingImportObserver(source)
        self._importer = DatasetImporter(source, config, self._observer)

    def run(
        self,
        dataset_ids: Iterable[str],
        report_template: str | None = None,
        summary_template: str | None = None,
    ) -> list[GenerationResult]:
        """Import every dataset and write its requested NEMO files.

        Args:
            dataset_ids: Validated dataset identifiers, processed in order.
            report_template: Report template text, or None to only import.
            summary_template: Summary template text, or None to skip summaries.

        Returns:
            One result per dataset id, in input order.
        """
        ids = list(dataset_ids)
        self._config.ensure_directories()
        self._observer.start_batch(len(ids))
        results = [
            self._generate_one(dataset_id, report_template, summary_template)
            for dataset_id in ids
        ]
        _LOGGER.info(
            "cdi_generation_completed",
            source=self._source.name,
            dataset_count=len(results),
            failed_count=sum(1 for result in results if not result.success),
        )
        return results

    def _generate_one(
        self,
        dataset_id: str,
        report_template: str | None,
        summary_template: str | None,
    ) -> GenerationResult:
        self._observer.start_dataset(dataset_id)
        outcome = self._importer.run_import(dataset_id)
        if not outcome.success:
            return GenerationResult(dataset_id=dataset_id, success=False, message=outcome.message)
        try:
            report_path = self._write_report(outcome.dataset, report_template)
            summary_path = self._write_summary(outcome.dataset, summary_template, report_path)
        except (TemplateError, CdiOutputError, OSError) as error:
            self._observer.report_progress(str(error))
            self._observer.log_message(dataset_id, f"Error generating NEMO files: {error}")
            return GenerationResult(dataset_id=dataset_id, success=False, message=str(error))
        self._observer.report_progress("Done")
        return GenerationResult(
            dataset_id=dataset_id,
            success=True,
            report_path=report_path,
            summary_path=summary_path,
        )

    def _write_report(self, dataset: Dataset, template: str | None) -> Path | None:
        if template is None:
            return None
        self._observer.report_progress("Writing NEMO report...")
        return write_nemo_file(
            OutputKind.REPORT, template, self._source, dataset, self._config.nemo_output_dir
        )

    def _write_summary(
        self,
        dataset: Dataset,
        template: str | None,
        report_path: Path | None,
    ) -> Path | None:
        if template is None:
            return None
        summary_path = output_file_path(
            self._config.nemo_output_dir,
            OutputKind.SUMMARY,
            dataset,
            self._source.nemo_output_format,
        )
        if summary_path == report_path:
            _LOGGER.warning(
                "nemo_summary_name_collision",
                dataset_id=dataset.dataset_id,
                path=str(summary_path),
            )
            return None
        self._observer.report_progress("Writing NEMO summary...")
        return write_nemo_file(
            OutputKind.SUMMARY, template, self._source, dataset, self._config.nemo_output_dir
        )
