"""Per-dataset cache files.

This module owns the ``<id>_data`` and ``<id>_metadata`` files in the
configured temp directory. Writes are whole-buffer so readers never see
a partially written stage.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import DATA_CACHE_SUFFIX, FILE_ENCODING, METADATA_CACHE_SUFFIX
from core.errors import ImporterError


class DatasetCacheStore:
    """Filesystem-backed cache of dataset data and metadata."""

    def __init__(self, temp_dir: Path) -> None:
        self._temp_dir = temp_dir.expanduser().resolve()

    def data_path(self, dataset_id: str) -> Path:
        """Return the cache path of a dataset's canonical data."""
        return self._cache_path(dataset_id, DATA_CACHE_SUFFIX)

    def metadata_path(self, dataset_id: str) -> Path:
        """Return the cache path of a dataset's metadata."""
        return self._cache_path(dataset_id, METADATA_CACHE_SUFFIX)

    def write_data(self, dataset_id: str, text: str) -> Path:
        """Write canonical data and return the cache path."""
        return _write_text(self.data_path(dataset_id), text)

    def write_metadata(self, dataset_id: str, text: str) -> Path:
        """Write metadata and return the cache path."""
        return _write_text(self.metadata_path(dataset_id), text)

    def read_data(self, dataset_id: str) -> str:
        return self.data_path(dataset_id).read_text(encoding=FILE_ENCODING)

    def read_metadata(self, dataset_id: str) -> str:
        return self.metadata_path(dataset_id).read_text(encoding=FILE_ENCODING)

    def has_data(self, dataset_id: str) -> bool:
        """Return whether a non-empty data cache file exists."""
        return _is_non_empty_file(self.data_path(dataset_id))

    def has_metadata(self, dataset_id: str) -> bool:
        """Return whether a non-empty metadata cache file exists."""
        return _is_non_empty_file(self.metadata_path(dataset_id))

    def _cache_path(self, dataset_id: str, suffix: str) -> Path:
        """Build a cache path, rejecting ids that escape the temp directory.

        DOIs contain ``/``, so a cache file may live in a subdirectory.

        Raises:
            ImporterError: If the id is empty or resolves outside the temp dir.
        """
        if not dataset_id.strip():
            raise ImporterError("Cannot cache a dataset with an empty id")
        cache_path = (self._temp_dir / f"{dataset_id}{suffix}").resolve()
        if self._temp_dir not in cache_path.parents:
            raise ImporterError(
                f"Dataset id '{dataset_id}' resolves outside the temp directory "
                f"{self._temp_dir}. Use a plain dataset identifier."
            )
        return cache_path


def _write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=FILE_ENCODING)
    return path


def _is_non_empty_file(path: Path) -> bool:
    return path.is_file() and path.stat().st_size > 0
