"""Canonical Pydantic models for service model documents.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Document models** -- decoded from the raw JSON document:
    :class:`Model`, :class:`Metadata`, :class:`Operation`,
    :class:`HttpBindings`, :class:`ShapeReference`, :class:`ShapeMember`,
    :class:`Location`.

**Shape variants** -- a closed union discriminated by the ``type`` field:
    :class:`StructureShape`, :class:`StringShape`, :class:`MapShape`,
    :class:`ListShape`, :class:`IntegerShape`, :class:`LongShape`,
    :class:`DoubleShape`, :class:`BlobShape`, :class:`BooleanShape`,
    :class:`TimestampShape`. The :data:`Shape` alias is the union itself.

**Resolver output** -- :class:`ResolvedOperation`.

Every model is frozen, and so are its collections: mappings are stored as
:class:`types.MappingProxyType` views and sequences as tuples. Raw keys are
camelCase (``apiVersion``, ``requestUri``); Python attributes are snake_case
and either spelling is accepted on construction. Shapes and shape references
keep unrecognised keys (``min``, ``pattern``, ``timestampFormat``,
``exception``, ...) in ``model_extra`` so forward-compatible metadata is not
lost.

Documentation fields use the :data:`Markdown` type, which runs
:func:`~svcmodel.markup.to_markdown` on every value unless the validation
context carries ``{"normalize_documentation": False}``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, Optional, TypeVar, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    WrapSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from svcmodel.http import HTTPMethod, parse_method, parse_status_code, status_phrase
from svcmodel.markup import to_markdown


def _normalize_documentation(value: str, info: ValidationInfo) -> str:
    if info.context and not info.context.get("normalize_documentation", True):
        return value
    return to_markdown(value)


Markdown = Annotated[str, AfterValidator(_normalize_documentation)]
"""Documentation text, normalised from HTML to canonical Markdown."""

_V = TypeVar("_V")


def _freeze(value: dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(value)


def _thaw(value: Mapping[str, Any], handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(value))


ReadOnlyDict = Annotated[dict[str, _V], AfterValidator(_freeze), WrapSerializer(_thaw)]
"""A ``dict`` field stored as a read-only mapping view after validation."""


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Metadata ---


class Protocol(str, enum.Enum):
    """Wire protocols a service model may declare."""

    REST_JSON = "rest-json"
    JSON = "json"
    REST_XML = "rest-xml"
    QUERY = "query"


class SignatureVersion(str, enum.Enum):
    """Request signing schemes a service model may declare."""

    V4 = "v4"


class Metadata(_Frozen):
    """Service-level metadata from the document's ``metadata`` object.

    ``protocol`` and ``signature_version`` only accept their enumerated values;
    anything else fails validation rather than falling back to a default.
    The optional fields appear in many, but not all, real documents.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    api_version: str
    endpoint_prefix: str
    protocol: Protocol
    service_full_name: str
    service_id: str
    signature_version: SignatureVersion
    service_abbreviation: Optional[str] = None
    signing_name: Optional[str] = None
    json_version: Optional[str] = None
    target_prefix: Optional[str] = None
    uid: Optional[str] = None
    global_endpoint: Optional[str] = None


# --- HTTP bindings ---


class HttpBindings(_Frozen):
    """Validated HTTP binding of an operation.

    ``method`` is always a standard :class:`~svcmodel.http.HTTPMethod` and
    ``response_code``, when present, lies in ``100..599``. Use
    :func:`~svcmodel.http.validate_http_bindings` to validate a raw record
    outside of a full document.
    """

    method: HTTPMethod
    request_uri: str = Field(alias="requestUri")
    response_code: Optional[int] = Field(default=None, alias="responseCode")

    @field_validator("method", mode="before")
    @classmethod
    def _validate_method(cls, value: Any) -> HTTPMethod:
        return parse_method(value)

    @field_validator("response_code", mode="before")
    @classmethod
    def _validate_response_code(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        return parse_status_code(value)

    @property
    def response_phrase(self) -> Optional[str]:
        """Reason phrase of ``response_code`` if it is a registered status."""
        if self.response_code is None:
            return None
        return status_phrase(self.response_code)


# --- Shape references ---


class ShapeReference(_Frozen):
    """A by-name pointer into a model's shapes table.

    Carries no ownership and means nothing outside the :class:`Model` whose
    ``shapes`` it names. Resolve it with
    :func:`~svcmodel.parser.resolver.resolve_shape`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    shape: str


class Location(_Frozen):
    """Where a structure member is bound on the wire.

    ``location`` is the binding kind (``uri``, ``querystring``, ``header``,
    ``headers``, ``statusCode``, ...) and ``location_name`` the wire name, which
    some kinds (``statusCode``) omit.
    """

    location: str
    location_name: Optional[str] = Field(default=None, alias="locationName")


class ShapeMember(ShapeReference):
    """A structure member: a shape reference plus member-level attributes.

    In the raw document ``location`` and ``locationName`` sit flat on the
    member; they are folded into a :class:`Location` when ``location`` is
    present. A bare ``locationName`` (a body field rename) stays in
    ``model_extra``.
    """

    documentation: Optional[Markdown] = None
    location: Optional[Location] = None
    streaming: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_location(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("location"), str):
            data = dict(data)
            data["location"] = {
                "location": data.pop("location"),
                "locationName": data.pop("locationName", None),
            }
        return data

    @property
    def reference(self) -> ShapeReference:
        """The bare reference this member embeds."""
        return ShapeReference(shape=self.shape)


# --- Shapes ---


class _ShapeBase(_Frozen):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    @property
    def extras(self) -> dict[str, Any]:
        """Unrecognised keys preserved from the raw shape (``min``, ``pattern``, ...)."""
        return dict(self.model_extra or {})


class StructureShape(_ShapeBase):
    """A structure with named members.

    ``required`` defaults to empty and may only name existing members.
    """

    type: Literal["structure"] = "structure"
    members: ReadOnlyDict[ShapeMember]
    documentation: Optional[Markdown] = None
    required: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_required(self) -> StructureShape:
        unknown = [name for name in self.required if name not in self.members]
        if unknown:
            raise ValueError(
                "required names unknown member(s): " + ", ".join(sorted(unknown))
            )
        return self


class MapShape(_ShapeBase):
    type: Literal["map"] = "map"
    key: ShapeReference
    value: ShapeReference


class ListShape(_ShapeBase):
    type: Literal["list"] = "list"
    member: ShapeReference


class StringShape(_ShapeBase):
    type: Literal["string"] = "string"


class IntegerShape(_ShapeBase):
    type: Literal["integer"] = "integer"


class LongShape(_ShapeBase):
    type: Literal["long"] = "long"


class DoubleShape(_ShapeBase):
    type: Literal["double"] = "double"


class BlobShape(_ShapeBase):
    type: Literal["blob"] = "blob"


class BooleanShape(_ShapeBase):
    type: Literal["boolean"] = "boolean"


class TimestampShape(_ShapeBase):
    type: Literal["timestamp"] = "timestamp"


Shape = Annotated[
    Union[
        StructureShape,
        StringShape,
        MapShape,
        ListShape,
        IntegerShape,
        LongShape,
        DoubleShape,
        BlobShape,
        BooleanShape,
        TimestampShape,
    ],
    Field(discriminator="type"),
]
"""Closed union of shape variants, discriminated by ``type``."""


# --- Operations and the model ---


class Operation(_Frozen):
    """One API action as declared in the document's ``operations`` map.

    ``errors`` keeps document order, which generated code follows.
    """

    name: str
    http: HttpBindings
    input: ShapeReference
    output: Optional[ShapeReference] = None
    errors: tuple[ShapeReference, ...]
    documentation: Markdown
    deprecated: bool = False


class Model(_Frozen):
    """A complete, decoded service model.

    Built once by :func:`~svcmodel.parser.decoder.decode_model`. Neither the
    model nor any collection inside it can be changed afterwards, so one
    instance is safe to share across threads.
    """

    version: str
    metadata: Metadata
    operations: ReadOnlyDict[Operation]
    shapes: ReadOnlyDict[Shape]
    documentation: Markdown

    def iter_references(self) -> Iterator[tuple[str, ShapeReference]]:
        """Yield ``(path, reference)`` for every shape reference in the model.

        Paths use the raw document's field names, e.g.
        ``"operations.CreateFunction.errors.0"`` or
        ``"shapes.FunctionList.member"``.
        """
        for op_name, operation in self.operations.items():
            prefix = f"operations.{op_name}"
            yield f"{prefix}.input", operation.input
            if operation.output is not None:
                yield f"{prefix}.output", operation.output
            for index, error in enumerate(operation.errors):
                yield f"{prefix}.errors.{index}", error

        for shape_name, shape in self.shapes.items():
            prefix = f"shapes.{shape_name}"
            if isinstance(shape, StructureShape):
                for member_name, member in shape.members.items():
                    yield f"{prefix}.members.{member_name}", member
            elif isinstance(shape, ListShape):
                yield f"{prefix}.member", shape.member
            elif isinstance(shape, MapShape):
                yield f"{prefix}.key", shape.key
                yield f"{prefix}.value", shape.value

    def dangling_references(self) -> list[tuple[str, ShapeReference]]:
        """Return every reference whose shape name is missing from ``shapes``."""
        return [
            (path, ref)
            for path, ref in self.iter_references()
            if ref.shape not in self.shapes
        ]


class ResolvedOperation(_Frozen):
    """An :class:`Operation` with its shape references replaced by shapes.

    Produced by :func:`~svcmodel.parser.resolver.resolve_operation`. Only the
    operation's own references are resolved; members of a resolved structure
    are still :class:`ShapeMember` references.
    """

    name: str
    http: HttpBindings
    input: Shape
    output: Optional[Shape] = None
    errors: tuple[Shape, ...] = ()
    documentation: str
