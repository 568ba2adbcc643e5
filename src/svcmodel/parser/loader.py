"""Read raw service model documents from disk or over HTTP.

Published service models are UTF-8 JSON files. Hand-maintained fixtures are
sometimes kept as YAML instead, so a ``.yaml``/``.yml`` suffix on the file or
URL path selects the YAML parser; everything else is parsed as JSON.

:func:`load_document` only produces the raw mapping. Pass it to
:func:`~svcmodel.parser.decoder.decode_model`, or call
:func:`~svcmodel.parser.decoder.load_model` to do both.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from svcmodel.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_document(source: str | Path) -> dict[str, Any]:
    """Read *source* and parse it into a raw document mapping.

    Args:
        source: A local path, or an ``http://``/``https://`` URL.

    Returns:
        The top-level object of the document.

    Raises:
        DocumentLoadError: If *source* cannot be read, is not valid UTF-8
            JSON (or YAML), or its top level is not an object.
    """
    location = str(source)
    if location.startswith(("http://", "https://")):
        text = _fetch(location)
        suffix = Path(httpx.URL(location).path).suffix
    else:
        text = _read(Path(location))
        suffix = Path(location).suffix

    document = _parse(text, location, yaml_syntax=suffix.lower() in _YAML_SUFFIXES)
    if not isinstance(document, dict):
        raise DocumentLoadError(
            f"{location}: top level must be an object, not {type(document).__name__}"
        )
    logger.debug("Loaded model document %s (%d top-level keys)", location, len(document))
    return document


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentLoadError(f"{path}: no such file") from exc
    except UnicodeDecodeError as exc:
        raise DocumentLoadError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DocumentLoadError(f"{path}: {exc.strerror or exc}") from exc


def _fetch(url: str) -> str:
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise DocumentLoadError(f"{url}: {exc}") from exc
    return response.text


def _parse(text: str, location: str, *, yaml_syntax: bool) -> Any:
    if yaml_syntax:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"{location}: invalid YAML: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentLoadError(
            f"{location}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
        ) from exc
