"""Error taxonomy for the graph core.

INVARIANT: Every failure of a graph operation raises a ``DigraphError``
subclass. Nothing is reported through sentinel return values.

Each error exposes a stable ``code`` (mirrored in ``ServiceError.code``)
and a ``detail`` dict naming the offending vertex keys.
"""

from __future__ import annotations

from typing import Any, ClassVar


class DigraphError(Exception):
    """Base class for all graph precondition violations."""

    code: ClassVar[str] = "DIGRAPH_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail

    def __str__(self) -> str:
        return self.message


class VertexNotFoundError(DigraphError, KeyError):
    """An operation referenced a vertex key absent from the graph."""

    code = "VERTEX_NOT_FOUND"

    def __init__(self, vertex: int) -> None:
        super().__init__(f"Vertex {vertex} does not exist", vertex=vertex)
        self.vertex = vertex


class VertexAlreadyExistsError(DigraphError):
    """``add_vertex`` referenced a key already present."""

    code = "VERTEX_ALREADY_EXISTS"

    def __init__(self, vertex: int) -> None:
        super().__init__(f"Vertex {vertex} already exists", vertex=vertex)
        self.vertex = vertex


class EdgeNotFoundError(DigraphError, KeyError):
    """An operation referenced an edge absent from the graph."""

    code = "EDGE_NOT_FOUND"

    def __init__(self, from_vertex: int, to_vertex: int) -> None:
        super().__init__(
            f"Edge {from_vertex} -> {to_vertex} does not exist",
            from_vertex=from_vertex,
            to_vertex=to_vertex,
        )
        self.from_vertex = from_vertex
        self.to_vertex = to_vertex


class EdgeAlreadyExistsError(DigraphError):
    """``add_edge`` referenced an ordered pair that is already connected."""

    code = "EDGE_ALREADY_EXISTS"

    def __init__(self, from_vertex: int, to_vertex: int) -> None:
        super().__init__(
            f"Edge {from_vertex} -> {to_vertex} already exists",
            from_vertex=from_vertex,
            to_vertex=to_vertex,
        )
        self.from_vertex = from_vertex
        self.to_vertex = to_vertex


class InvalidEdgeWeightError(DigraphError, ValueError):
    """A weight function returned a negative or NaN weight."""

    code = "INVALID_EDGE_WEIGHT"

    def __init__(self, from_vertex: int, to_vertex: int, weight: float) -> None:
        super().__init__(
            f"Edge {from_vertex} -> {to_vertex} has invalid weight {weight!r}",
            from_vertex=from_vertex,
            to_vertex=to_vertex,
            weight=weight,
        )
        self.from_vertex = from_vertex
        self.to_vertex = to_vertex
        self.weight = weight
