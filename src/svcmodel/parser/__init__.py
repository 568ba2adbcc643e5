"""Service model parser -- load, decode, and resolve shape references.

Typical usage::

    from svcmodel.parser import load_model, resolve_operation

    model = load_model("lambda.json")
    resolved = resolve_operation(model.operations["Invoke"], model.shapes)

Sub-modules:

* :mod:`~svcmodel.parser.loader` -- Reads a JSON (or YAML) document from a file
  or URL.
* :mod:`~svcmodel.parser.decoder` -- Validates the raw document into a
  :class:`~svcmodel.models.Model`, reporting failures by field path.
* :mod:`~svcmodel.parser.resolver` -- One-hop shape resolution for operations.
"""

from svcmodel.parser.decoder import decode_model, load_model
from svcmodel.parser.loader import load_document
from svcmodel.parser.resolver import resolve_operation, resolve_shape

__all__ = [
    "decode_model",
    "load_document",
    "load_model",
    "resolve_operation",
    "resolve_shape",
]
