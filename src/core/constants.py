"""Core constants used across CDI generator modules.

This module centralizes format markers, file naming pieces, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

TEMPLATE_TAG_DELIMITER = "%%"
CANONICAL_SEPARATOR = ";"
DATA_CACHE_SUFFIX = "_data"
METADATA_CACHE_SUFFIX = "_metadata"
STATION_NUMBER_WIDTH = 6
OUTPUT_FILE_EXTENSION = ".txt"
FILE_ENCODING = "utf-8"
DEFAULT_TEMP_DIR = Path(".cdi") / "tmp"
DEFAULT_NEMO_OUTPUT_DIR = Path(".cdi") / "nemo"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_PANGAEA_BASE_URL = "https://doi.pangaea.de"
DEFAULT_NEMO_DATA_TYPE = "CTD"
DEFAULT_NEMO_OUTPUT_FORMAT = "MEDATLAS"
PANGAEA_SOURCE_NAME = "pangaea"
