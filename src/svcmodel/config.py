"""Decoder configuration with file and environment precedence.

The decoder has two switches, held in :class:`DecoderConfig`:

* ``check_references`` -- fail decoding when a shape reference names a shape
  missing from the table (default on).
* ``normalize_documentation`` -- convert HTML documentation to Markdown
  (default on). When off, documentation strings are kept verbatim.

:func:`load_config` resolves the effective settings. Precedence (high to low):

    1. Environment variables (``SVCMODEL_CHECK_REFERENCES``,
       ``SVCMODEL_NORMALIZE_DOCUMENTATION``)
    2. JSON config file (explicit path, else ``SVCMODEL_CONFIG``, else
       ``./svcmodel.json`` when present)
    3. Defaults

:func:`~svcmodel.parser.decoder.decode_model` calls :func:`load_config` when no
config is passed, so the environment and project file apply there too.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from svcmodel.exceptions import ConfigError

logger = logging.getLogger(__name__)

_PROJECT_CONFIG_FILENAME = "svcmodel.json"
_CONFIG_PATH_ENV = "SVCMODEL_CONFIG"
_ENV_OVERRIDES = {
    "SVCMODEL_CHECK_REFERENCES": "check_references",
    "SVCMODEL_NORMALIZE_DOCUMENTATION": "normalize_documentation",
}
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class DecoderConfig(BaseModel):
    """Settings consumed by :func:`~svcmodel.parser.decoder.decode_model`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_references: bool = Field(
        default=True, description="Reject shape references to undefined shapes"
    )
    normalize_documentation: bool = Field(
        default=True, description="Convert HTML documentation to Markdown"
    )


def _config_file_path(path: Optional[str | Path]) -> Optional[Path]:
    """Pick the config file to read, or ``None`` when there is none."""
    if path is not None:
        explicit = Path(path)
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    env_path = os.environ.get(_CONFIG_PATH_ENV, "")
    if env_path:
        candidate = Path(env_path)
        if not candidate.is_file():
            raise ConfigError(
                f"Config file not found: {candidate} (from {_CONFIG_PATH_ENV})"
            )
        return candidate

    project = Path.cwd() / _PROJECT_CONFIG_FILENAME
    return project if project.is_file() else None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file at {path} must contain a JSON object")
    return data


def _parse_bool(var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {var} must be a boolean (got {raw!r})")


def load_config(path: Optional[str | Path] = None) -> DecoderConfig:
    """Resolve the effective :class:`DecoderConfig`.

    Args:
        path: Optional explicit config file. Overrides ``SVCMODEL_CONFIG``
            and the project-local ``svcmodel.json``.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If a config file is missing, is not valid JSON, holds
            unknown keys or wrong types, or an environment override is not a
            recognised boolean.
    """
    data: dict[str, Any] = {}

    config_path = _config_file_path(path)
    if config_path is not None:
        logger.debug("Reading decoder config from %s", config_path)
        data.update(_read_config_file(config_path))

    for var, field in _ENV_OVERRIDES.items():
        raw = os.environ.get(var)
        if raw is not None and raw != "":
            data[field] = _parse_bool(var, raw)

    try:
        return DecoderConfig.model_validate(data)
    except ValidationError as exc:
        source = config_path if config_path is not None else "environment"
        raise ConfigError(f"Invalid decoder config ({source}): {exc}") from exc
