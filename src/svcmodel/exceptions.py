"""Exception hierarchy for svcmodel.

All exceptions inherit from :class:`SvcModelError`, so hosts can catch a single
type around loading, decoding, and resolution. Each subclass carries the extra
context needed to report the failure (a field path, a shape name).

Subclass hierarchy::

    SvcModelError
    +-- DocumentLoadError
    +-- DecodeError           (.path)
    +-- BindingError          (also a ValueError)
    +-- UnresolvedShapeError  (.key)
    +-- ConfigError
"""

from __future__ import annotations

ROOT_PATH = "<root>"


class SvcModelError(Exception):
    """Base exception for all svcmodel errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DocumentLoadError(SvcModelError):
    """Raised when a model document cannot be read or parsed as JSON/YAML."""


class DecodeError(SvcModelError):
    """Raised when a raw document does not match the service model schema.

    Args:
        message: Description of what is wrong with the field.
        path: Dotted path to the offending field, e.g.
            ``"operations.CreateFunction.http.method"``. The document root is
            reported as ``"<root>"``.
    """

    def __init__(self, message: str, path: str = ROOT_PATH):
        super().__init__(f"{path}: {message}")
        self.message = message
        self.path = path


class BindingError(SvcModelError, ValueError):
    """Raised for an invalid HTTP method token or status code.

    Subclasses :class:`ValueError` so that Pydantic validators report it as a
    field error, which the decoder then surfaces as a :class:`DecodeError`
    with the field path attached.
    """


class UnresolvedShapeError(SvcModelError):
    """Raised when a shape reference names a key absent from the shapes table.

    Args:
        key: The missing shape name.
    """

    def __init__(self, key: str):
        super().__init__(f"Shape '{key}' is not defined in the shapes table")
        self.key = key


class ConfigError(SvcModelError):
    """Raised for an invalid config file or environment override."""
