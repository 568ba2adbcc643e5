"""svcmodel -- Parse and validate botocore-style service model documents.

This package turns a service model document (the JSON format SDK generators
use to describe REST/JSON/XML/query APIs) into immutable, type-checked Pydantic
models. Shapes reference one another by name, so the model keeps an explicit
name-to-shape table and resolves references on demand, one hop at a time.

Typical workflow::

    from svcmodel import load_model, resolve_operation

    model = load_model("lambda.json")
    op = resolve_operation(model.operations["CreateFunction"], model.shapes)

Modules:
    models: Pydantic models for the model document and resolved operations.
    http: HTTP method and status-code vocabulary checks.
    markup: HTML documentation to Markdown normalisation.
    config: Decoder settings with file and environment precedence.
    exceptions: Exception hierarchy.
    parser: Loading, decoding, and shape resolution.
"""

from svcmodel.exceptions import (
    BindingError,
    DecodeError,
    SvcModelError,
    UnresolvedShapeError,
)
from svcmodel.parser import decode_model, load_model, resolve_operation

__version__ = "0.1.0"

__all__ = [
    "BindingError",
    "DecodeError",
    "SvcModelError",
    "UnresolvedShapeError",
    "decode_model",
    "load_model",
    "resolve_operation",
]
