"""Decode raw service model documents into typed :class:`~svcmodel.models.Model` values.

The public entry points are :func:`decode_model` (already-parsed data) and
:func:`load_model` (load and decode in one step).

Schema enforcement is delegated to the Pydantic models in
:mod:`svcmodel.models`; this module turns the first Pydantic error into a
:class:`~svcmodel.exceptions.DecodeError` whose ``path`` uses the raw
document's field names, then applies the model-wide reference check that no
single field validator can see.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from svcmodel.config import DecoderConfig, load_config
from svcmodel.exceptions import ROOT_PATH, DecodeError
from svcmodel.models import Model
from svcmodel.parser.loader import load_document

logger = logging.getLogger(__name__)

# Pydantic inserts the discriminator value into locations inside tagged unions
# (``shapes.Foo.structure.members``); those segments are not raw field names.
_UNION_TAGS = frozenset(
    {
        "structure",
        "string",
        "map",
        "list",
        "integer",
        "long",
        "double",
        "blob",
        "boolean",
        "timestamp",
    }
)


def decode_model(raw: Any, config: Optional[DecoderConfig] = None) -> Model:
    """Decode a raw document into a :class:`~svcmodel.models.Model`.

    Args:
        raw: The parsed document, as returned by
            :func:`~svcmodel.parser.loader.load_document` or ``json.loads``.
        config: Decoder settings. When omitted they are resolved with
            :func:`~svcmodel.config.load_config`, so the ``SVCMODEL_*``
            environment variables and a project ``svcmodel.json`` apply.

    Returns:
        The immutable decoded model.

    Raises:
        DecodeError: If a field is missing, malformed, or holds an
            unrecognised enum or shape tag, or (with ``check_references``)
            a shape reference names an undefined shape. ``path`` names the
            offending field.
        ConfigError: If *config* is omitted and the file or environment
            settings are invalid.

    Example::

        model = decode_model(json.loads(text))
        model.metadata.protocol  # Protocol.REST_JSON
    """
    if config is None:
        config = load_config()

    if not isinstance(raw, dict):
        raise DecodeError(
            f"Model document must be an object (got {type(raw).__name__})"
        )

    try:
        model = Model.model_validate(
            raw, context={"normalize_documentation": config.normalize_documentation}
        )
    except ValidationError as exc:
        raise _decode_error(exc) from exc

    if config.check_references:
        dangling = model.dangling_references()
        if dangling:
            path, ref = dangling[0]
            raise DecodeError(
                f"Shape reference '{ref.shape}' is not defined in the shapes table",
                path=f"{path}.shape",
            )

    logger.debug(
        "Decoded model %s (%d operations, %d shapes)",
        model.metadata.service_id,
        len(model.operations),
        len(model.shapes),
    )
    return model


def load_model(source: str | Path, config: Optional[DecoderConfig] = None) -> Model:
    """Load a document from *source* and decode it.

    Args:
        source: File path or http(s) URL; see
            :func:`~svcmodel.parser.loader.load_document`.
        config: Decoder settings; see :func:`decode_model`.

    Raises:
        DocumentLoadError: If the document cannot be read or parsed.
        DecodeError: If the document does not decode.
    """
    return decode_model(load_document(source), config)


def _decode_error(exc: ValidationError) -> DecodeError:
    """Convert the first Pydantic error into a :class:`DecodeError`."""
    first = exc.errors()[0]
    return DecodeError(first["msg"], path=_field_path(first["loc"]))


def _field_path(loc: tuple[Any, ...]) -> str:
    """Join a Pydantic location into a dotted raw-document path.

    Shape-variant tags are dropped when they follow a shape name, so
    ``("shapes", "Foo", "structure", "members")`` becomes
    ``"shapes.Foo.members"``. A structure member literally named after a tag
    is left alone because it sits under ``members`` rather than a shape name.
    """
    parts: list[str] = []
    for index, part in enumerate(loc):
        if index == 2 and loc[0] == "shapes" and part in _UNION_TAGS:
            continue
        parts.append(str(part))
    return ".".join(parts) or ROOT_PATH
