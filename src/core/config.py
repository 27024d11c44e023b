"""Runtime configuration model for the CDI generator.

This module owns all environment variable and config-file parsing.
Other modules receive a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
import os
from pathlib import Path
from typing import Mapping

import yaml

from core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_NEMO_OUTPUT_DIR,
    DEFAULT_PANGAEA_BASE_URL,
    DEFAULT_TEMP_DIR,
    FILE_ENCODING,
)
from core.errors import CdiConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class CdiConfig:
    """Validated runtime configuration.

    Attributes:
        temp_dir: Directory holding per-dataset ``_data``/``_metadata`` cache files.
        nemo_output_dir: Directory receiving populated NEMO report files.
        reuse_cache: Skip fetching when a non-empty cache file already exists.
        http_timeout_seconds: Timeout applied to every source HTTP request.
        pangaea_base_url: Base URL used to resolve PANGAEA DOIs.
    """

    temp_dir: Path
    nemo_output_dir: Path
    reuse_cache: bool = False
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    pangaea_base_url: str = DEFAULT_PANGAEA_BASE_URL

    @classmethod
    def from_env(cls) -> "CdiConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CdiConfigError: If environment values are invalid.
        """
        temp_dir_value = os.getenv("CDI_TEMP_DIR", str(DEFAULT_TEMP_DIR))
        output_dir_value = os.getenv("CDI_NEMO_OUTPUT_DIR", str(DEFAULT_NEMO_OUTPUT_DIR))
        reuse_cache = _parse_bool("CDI_REUSE_CACHE", os.getenv("CDI_REUSE_CACHE", "false"))
        timeout = _parse_timeout(
            "CDI_HTTP_TIMEOUT", os.getenv("CDI_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        )
        base_url = os.getenv("CDI_PANGAEA_BASE_URL", DEFAULT_PANGAEA_BASE_URL)
        return cls(
            temp_dir=_resolve_path(temp_dir_value),
            nemo_output_dir=_resolve_path(output_dir_value),
            reuse_cache=reuse_cache,
            http_timeout_seconds=timeout,
            pangaea_base_url=base_url.rstrip("/"),
        )

    @classmethod
    def from_file(cls, config_path: str | Path) -> "CdiConfig":
        """Build config from a YAML file, falling back to environment values.

        Args:
            config_path: Path to a YAML mapping keyed by config field names.

        Returns:
            A validated config object.

        Raises:
            CdiConfigError: If the file is missing, malformed, or has unknown keys.
        """
        payload = _load_yaml_mapping(Path(config_path).expanduser().resolve())
        base = cls.from_env()
        return cls(
            temp_dir=_resolve_path(str(payload.get("temp_dir", base.temp_dir))),
            nemo_output_dir=_resolve_path(
                str(payload.get("nemo_output_dir", base.nemo_output_dir))
            ),
            reuse_cache=_parse_bool("reuse_cache", payload.get("reuse_cache", base.reuse_cache)),
            http_timeout_seconds=_parse_timeout(
                "http_timeout_seconds",
                payload.get("http_timeout_seconds", base.http_timeout_seconds),
            ),
            pangaea_base_url=str(payload.get("pangaea_base_url", base.pangaea_base_url)).rstrip(
                "/"
            ),
        )

    def ensure_directories(self) -> None:
        """Create the temp and output directories if they are missing."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        self.nemo_output_dir.mkdir(parents=True, exist_ok=True)


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _load_yaml_mapping(config_file: Path) -> Mapping[str, object]:
    """Read and validate the YAML config mapping.

    Args:
        config_file: Absolute config path.

    Returns:
        Parsed mapping with only known keys.

    Raises:
        CdiConfigError: If the file cannot be read or validated.
    """
    if not config_file.is_file():
        raise CdiConfigError(
            f"Config file does not exist at {config_file}. Provide a valid YAML file path."
        )
    try:
        payload = yaml.safe_load(config_file.read_text(encoding=FILE_ENCODING))
    except OSError as error:
        raise CdiConfigError(
            f"Failed to read config at {config_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise CdiConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise CdiConfigError(
            f"Config at {config_file} must be a mapping of settings, "
            f"got {type(payload).__name__}."
        )
    known_keys = {config_field.name for config_field in fields(CdiConfig)}
    unknown_keys = sorted(str(key) for key in payload if key not in known_keys)
    if unknown_keys:
        raise CdiConfigError(
            f"Unknown config keys in {config_file}: {', '.join(unknown_keys)}. "
            f"Supported keys: {', '.join(sorted(known_keys))}."
        )
    return payload


def _parse_bool(name: str, raw_value: object) -> bool:
    """Parse a boolean flag from env text or YAML value.

    Raises:
        CdiConfigError: If value is not a recognised boolean.
    """
    if isinstance(raw_value, bool):
        return raw_value
    normalized = str(raw_value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise CdiConfigError(
        f"Invalid {name} value: expected a boolean, got '{raw_value}'. "
        f"Use one of {', '.join(_TRUE_VALUES + _FALSE_VALUES[:-1])}."
    )


def _parse_timeout(name: str, raw_value: object) -> float:
    """Parse a positive timeout in seconds.

    Raises:
        CdiConfigError: If value is not a positive number.
    """
    try:
        timeout = float(str(raw_value))
    except ValueError as error:
        raise CdiConfigError(
            f"Invalid {name} value: expected seconds, got '{raw_value}'. "
            f"Set {name} to a positive number."
        ) from error
    if timeout <= 0:
        raise CdiConfigError(
            f"Invalid {name} value: expected a positive number of seconds, got {timeout}."
        )
    return timeout
