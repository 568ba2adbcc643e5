"""Resolve an operation's shape references against a model's shapes table.

Shapes refer to each other by name, and the graph may be cyclic (a structure
can contain a list of itself). Resolution therefore goes exactly one hop: the
operation's input, output, and error references are replaced by the shapes
they name, while member references inside those shapes stay references. A
host that needs to go deeper calls :func:`resolve_shape` on a member, one hop
at a time.

Both functions are pure. They read the shapes table and never modify it. Each
resolved shape is a new object, but its members, ``required`` names and other
collections are the read-only containers of the table entry, shared rather
than copied. Operations can therefore be resolved concurrently against one
shared :class:`~svcmodel.models.Model`.

Resolution is per operation. Whether one failure aborts a whole document or is
collected alongside successes is left to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping

from svcmodel.exceptions import UnresolvedShapeError
from svcmodel.models import Operation, ResolvedOperation, Shape, ShapeReference


def resolve_shape(reference: ShapeReference, shapes: Mapping[str, Shape]) -> Shape:
    """Look up the shape *reference* names.

    Args:
        reference: The reference (or :class:`~svcmodel.models.ShapeMember`)
            to resolve.
        shapes: The model's shapes table.

    Returns:
        A new shape equal to the table entry.

    Raises:
        UnresolvedShapeError: If the name is not in *shapes*.
    """
    try:
        shape = shapes[reference.shape]
    except KeyError:
        raise UnresolvedShapeError(reference.shape) from None
    return shape.model_copy()


def resolve_operation(
    operation: Operation, shapes: Mapping[str, Shape]
) -> ResolvedOperation:
    """Replace *operation*'s shape references with the shapes they name.

    Args:
        operation: A decoded operation.
        shapes: The shapes table of the model the operation belongs to.

    Returns:
        A :class:`~svcmodel.models.ResolvedOperation` with ``http`` and
        ``documentation`` carried over unchanged and ``errors`` in document
        order.

    Raises:
        UnresolvedShapeError: If the input, output, or any error reference
            names a shape missing from *shapes*.

    Example::

        op = resolve_operation(model.operations["CreateFunction"], model.shapes)
        op.input.members["FunctionName"].shape  # still a reference
    """
    return ResolvedOperation(
        name=operation.name,
        http=operation.http,
        input=resolve_shape(operation.input, shapes),
        output=(
            resolve_shape(operation.output, shapes)
            if operation.output is not None
            else None
        ),
        errors=[resolve_shape(error, shapes) for error in operation.errors],
        documentation=operation.documentation,
    )
