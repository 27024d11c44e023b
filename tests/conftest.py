"""Pytest configuration for repository test runs."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import sys

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def cdi_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Config with cache and output directories under ``tmp_path``."""
    from core.config import CdiConfig

    for name in ("CDI_REUSE_CACHE", "CDI_HTTP_TIMEOUT", "CDI_PANGAEA_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    return replace(
        CdiConfig.from_env(),
        temp_dir=tmp_path / "tmp",
        nemo_output_dir=tmp_path / "nemo",
    )
