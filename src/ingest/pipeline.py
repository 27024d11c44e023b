"""Import orchestration for one dataset.

This module sequences data retrieval, reformatting, metadata retrieval,
and caching as a linear stage machine. Every dataset-level failure is
converted into a failed outcome at this boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import CdiConfig
from core.errors import CdiError, DataSetNotFoundError
from core.logging_config import get_logger
from core.types import Dataset, ImportOutcome, ImportStage
from ingest.cache_store import DatasetCacheStore
from ingest.data_source import DataSource
from ingest.observer import ImportObserver
from reformat.reformatter import reformat_records

_LOGGER = get_logger(__name__)


@dataclass
class _RunState:
    """Mutable stage tracker for one import run."""

    dataset: Dataset
    stage: ImportStage = ImportStage.START


class _SoftFailure(Exception):
    """Raised internally when a fetch returns no content."""


class DatasetImporter:
    """Runs the fetch, reformat, and cache sequence for datasets of one source."""

    def __init__(
        self,
        source: DataSource,
        config: CdiConfig,
        observer: ImportObserver,
        cache_store: DatasetCacheStore | None = None,
    ) -> None:
        self._source = source
        self._config = config
        self._observer = observer
        self._cache = cache_store or DatasetCacheStore(config.temp_dir)

    @property
    def cache_store(self) -> DatasetCacheStore:
        return self._cache

    def import_dataset(self, dataset_id: str) -> bool:
        """Import one dataset and return whether both cache files were written."""
        return self.run_import(dataset_id).success

    def run_import(self, dataset_id: str) -> ImportOutcome:
        """Import one dataset and describe how far the run got.

        Args:
            dataset_id: Identifier understood by the source.

        Returns:
            Outcome holding the dataset state and the reached stage.
        """
        state = _RunState(dataset=Dataset(dataset_id=dataset_id))
        _LOGGER.info("dataset_import_started", dataset_id=dataset_id, source=self._source.name)
        try:
            self._import_data(state)
            self._import_metadata(state)
        except _SoftFailure as failure:
            self._observer.report_progress(str(failure))
            return self._abort(state, str(failure))
        except DataSetNotFoundError as error:
            self._observer.report_progress(str(error))
            return self._abort(state, "Data set not found")
        except (CdiError, OSError) as error:
            self._observer.report_progress(str(error))
            return self._abort(state, f"Error retrieving and storing data: {error}")
        except Exception as error:
            # Sources are pluggable; no error may escape one dataset's run.
            self._observer.report_progress(str(error))
            return self._abort(state, f"Error retrieving and storing data: {error}")
        state.stage = ImportStage.DONE
        _LOGGER.info(
            "dataset_import_completed",
            dataset_id=dataset_id,
            data_cached=state.dataset.data_cached,
            metadata_cached=state.dataset.metadata_cached,
        )
        return ImportOutcome(dataset=state.dataset, success=True, stage=ImportStage.DONE)

    def _import_data(self, state: _RunState) -> None:
        dataset = state.dataset
        if self._config.reuse_cache and self._cache.has_data(dataset.dataset_id):
            self._observer.report_progress("Using cached data")
            dataset.raw_data = self._cache.read_data(dataset.dataset_id)
            dataset.data_cached = True
            dataset.data_file = self._cache.data_path(dataset.dataset_id)
            return
        state.stage = ImportStage.FETCH_DATA
        self._observer.report_progress("Retrieving data...")
        raw_data = self._source.fetch_data(dataset.dataset_id)
        if not raw_data:
            raise _SoftFailure("Data retrieval failed. Aborting.")
        dataset.raw_data = raw_data
        state.stage = ImportStage.REFORMAT_DATA
        dataset.raw_data = reformat_records(
            raw_data,
            self._source.separator,
            self._source.copy_header,
            self._source.padding_rule_for,
        )
        self._source.preprocess_data(dataset)
        state.stage = ImportStage.WRITE_DATA
        dataset.data_file = self._cache.write_data(dataset.dataset_id, dataset.raw_data or "")

    def _import_metadata(self, state: _RunState) -> None:
        dataset = state.dataset
        if self._config.reuse_cache and self._cache.has_metadata(dataset.dataset_id):
            self._observer.report_progress("Using cached metadata")
            dataset.raw_metadata = self._cache.read_metadata(dataset.dataset_id)
            dataset.metadata_cached = True
            dataset.metadata_file = self._cache.metadata_path(dataset.dataset_id)
        else:
            state.stage = ImportStage.FETCH_METADATA
            self._observer.report_progress("Retrieving metadata...")
            raw_metadata = self._source.fetch_metadata(dataset.dataset_id)
            if not raw_metadata:
                raise _SoftFailure("Metadata retrieval failed. Aborting.")
            dataset.raw_metadata = raw_metadata
        state.stage = ImportStage.PREPROCESS_METADATA
        self._source.preprocess_metadata(dataset)
        if dataset.metadata_cached:
            return
        state.stage = ImportStage.WRITE_METADATA
        dataset.metadata_file = self._cache.write_metadata(
            dataset.dataset_id, dataset.raw_metadata or ""
        )

    def _abort(self, state: _RunState, message: str) -> ImportOutcome:
        dataset_id = state.dataset.dataset_id
        self._observer.log_message(dataset_id, message)
        _LOGGER.warning(
            "dataset_import_failed",
            dataset_id=dataset_id,
            stage=state.stage.value,
            reason=message,
        )
        return ImportOutcome(
            dataset=state.dataset,
            success=False,
            stage=ImportStage.ABORTED,
            failed_stage=state.stage,
            message=message,
        )
