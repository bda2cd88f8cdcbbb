"""digraphkit — generic directed graphs with connectivity and shortest paths."""

from digraphkit.core.digraph import Digraph
from digraphkit.domain.errors import (
    DigraphError,
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    InvalidEdgeWeightError,
    VertexAlreadyExistsError,
    VertexNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "Digraph",
    "DigraphError",
    "EdgeAlreadyExistsError",
    "EdgeNotFoundError",
    "InvalidEdgeWeightError",
    "VertexAlreadyExistsError",
    "VertexNotFoundError",
]
