"""Unit tests for dataset cache files."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import ImporterError
from ingest.cache_store import DatasetCacheStore


def test_cache_paths_use_dataset_id_suffixes(tmp_path: Path) -> None:
    """Cache files should be named ``<id>_data`` and ``<id>_metadata``."""
    store = DatasetCacheStore(tmp_path)

    names = (store.data_path("abc").name, store.metadata_path("abc").name)

    assert names == ("abc_data", "abc_metadata")


def test_write_data_creates_doi_subdirectory(tmp_path: Path) -> None:
    """DOIs with slashes should be cached below the temp directory."""
    store = DatasetCacheStore(tmp_path)

    path = store.write_data("10.1594/PANGAEA.12345", "h\n1;2\n")

    assert path == (tmp_path / "10.1594" / "PANGAEA.12345_data").resolve()


def test_read_metadata_returns_written_text(tmp_path: Path) -> None:
    """Metadata should be read back as UTF-8 text."""
    store = DatasetCacheStore(tmp_path)
    store.write_metadata("abc", "Temperatur °C")

    assert store.read_metadata("abc") == "Temperatur °C"


def test_has_data_ignores_empty_files(tmp_path: Path) -> None:
    """Empty cache files should not count as cached."""
    store = DatasetCacheStore(tmp_path)
    store.write_data("abc", "")

    assert store.has_data("abc") is False


def test_cache_path_rejects_parent_traversal(tmp_path: Path) -> None:
    """Ids resolving outside the temp directory should be rejected."""
    store = DatasetCacheStore(tmp_path / "tmp")

    with pytest.raises(ImporterError):
        store.data_path("../outside")
