"""HTTP vocabulary checks for operation bindings.

Service models describe each operation's HTTP binding with a raw method token,
a request URI template, and an optional success status code. This module turns
those raw values into validated vocabulary values:

* :class:`HTTPMethod` -- the standard request methods, canonical uppercase.
* :func:`parse_method` -- raw token to :class:`HTTPMethod`.
* :func:`parse_status_code` -- raw number to a status code in ``100..599``.
* :func:`validate_http_bindings` -- a whole raw ``http`` record to
  :class:`~svcmodel.models.HttpBindings`.

Invalid input always raises :class:`~svcmodel.exceptions.BindingError`; nothing
is coerced, truncated, or defaulted.
"""

from __future__ import annotations

import enum
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from svcmodel.exceptions import BindingError

if TYPE_CHECKING:
    from svcmodel.models import HttpBindings

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


class HTTPMethod(str, enum.Enum):
    """Standard HTTP request methods (RFC 9110 plus PATCH)."""

    CONNECT = "CONNECT"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"
    TRACE = "TRACE"


def parse_method(token: Any) -> HTTPMethod:
    """Convert a raw method token into an :class:`HTTPMethod`.

    Matching is case-insensitive (``"get"`` and ``"GET"`` both yield
    :attr:`HTTPMethod.GET`), but the token must otherwise be exact.

    Raises:
        BindingError: If *token* is not a string or names no standard method.
    """
    if isinstance(token, HTTPMethod):
        return token
    if not isinstance(token, str):
        raise BindingError(
            f"HTTP method must be a string (got {type(token).__name__})"
        )
    if not token:
        raise BindingError("HTTP method must not be empty")
    try:
        return HTTPMethod(token.upper())
    except ValueError as exc:
        raise BindingError(f"Unrecognised HTTP method: {token!r}") from exc


def parse_status_code(value: Any) -> int:
    """Validate a raw response code.

    Only genuine integers in ``100..599`` are accepted. Booleans, floats, and
    numeric strings are rejected rather than converted.

    Raises:
        BindingError: If *value* is malformed or out of range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise BindingError(
            f"HTTP status code must be an integer (got {type(value).__name__})"
        )
    if not MIN_STATUS_CODE <= value <= MAX_STATUS_CODE:
        raise BindingError(
            f"HTTP status code {value} is out of range "
            f"({MIN_STATUS_CODE}-{MAX_STATUS_CODE})"
        )
    return int(value)


def status_phrase(code: int) -> Optional[str]:
    """Return the registered reason phrase for *code*, or ``None``."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return None


def validate_http_bindings(raw: Any) -> HttpBindings:
    """Validate a raw ``http`` record into :class:`~svcmodel.models.HttpBindings`.

    Args:
        raw: A mapping with ``method``, ``requestUri``, and an optional
            ``responseCode``.

    Returns:
        The validated bindings.

    Raises:
        BindingError: If the record is not a mapping, a required key is
            missing, or any value fails validation.

    Example::

        http = validate_http_bindings(
            {"method": "POST", "requestUri": "/2015-03-31/functions", "responseCode": 201}
        )
        assert http.method is HTTPMethod.POST
    """
    from svcmodel.models import HttpBindings

    if not isinstance(raw, dict):
        raise BindingError(
            f"HTTP binding must be an object (got {type(raw).__name__})"
        )
    try:
        return HttpBindings.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "http"
        raise BindingError(f"Invalid HTTP binding ({field}): {first['msg']}") from exc
