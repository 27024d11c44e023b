"""Data source registry.

This module maps source names used on the command line onto factories.
"""

from __future__ import annotations

from typing import Any, Callable

from core.config import CdiConfig
from core.constants import PANGAEA_SOURCE_NAME
from core.errors import CdiConfigError
from ingest.data_source import DataSource
from sources.pangaea import PangaeaSource

SourceFactory = Callable[..., DataSource]

_SOURCE_FACTORIES: dict[str, SourceFactory] = {
    PANGAEA_SOURCE_NAME: PangaeaSource,
}


def available_sources() -> tuple[str, ...]:
    """Return registered source names in sorted order."""
    return tuple(sorted(_SOURCE_FACTORIES))


def build_source(name: str, config: CdiConfig, **options: Any) -> DataSource:
    """Create a data source by registry name.

    Args:
        name: Registered source name.
        config: Runtime configuration.
        **options: Source-specific keyword options.

    Returns:
        Configured data source.

    Raises:
        CdiConfigError: If the name is not registered.
    """
    factory = _SOURCE_FACTORIES.get(name)
    if factory is None:
        raise CdiConfigError(
            f"Unknown data source '{name}'. Available sources: {', '.join(available_sources())}."
        )
    return factory(config, **options)
