"""Digraph — generic directed graph stored as a mapping of mappings.

Each vertex key maps to a record holding the vertex payload and an
insertion-ordered ``dict`` of outgoing edges keyed by destination. A
reverse index of predecessors makes ``remove_vertex`` proportional to the
vertex's degree instead of the whole graph.

INVARIANT: every mutating method validates all of its preconditions before
touching storage, so a call that raises leaves the graph unchanged.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, overload

from digraphkit.algorithms import connectivity, paths
from digraphkit.domain.errors import (
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    VertexAlreadyExistsError,
    VertexNotFoundError,
)
from digraphkit.domain.types import EdgeKey, PredecessorMap, WeightFunc

logger = logging.getLogger(__name__)


@dataclass
class _VertexRecord[V, E]:
    info: V
    out: dict[int, E] = field(default_factory=dict)


class Digraph[V, E]:
    """Directed graph with integer vertex keys and opaque payloads.

    ``V`` is the vertex payload type and ``E`` the edge payload type. At most
    one edge exists per ordered pair of vertices. Vertex keys need not be
    contiguous, zero-based, or non-negative.

    There is no shallow copy: ``copy.copy(g)`` behaves like :meth:`copy`
    and deep-copies every payload, so the copy never shares state with *g*.

    Usage::

        g: Digraph[str, float] = Digraph()
        g.add_vertex(1, "a")
        g.add_vertex(2, "b")
        g.add_edge(1, 2, 3.5)
        g.find_shortest_paths(1, lambda w: w)  # {1: 1, 2: 1}
    """

    def __init__(self) -> None:
        self._vertices: dict[int, _VertexRecord[V, E]] = {}
        self._preds: dict[int, set[int]] = {}
        self._edge_count = 0

    # ------------------------------------------------------------------
    # Copy / move
    # ------------------------------------------------------------------

    def copy(self) -> Digraph[V, E]:
        """Return a fully independent deep copy.

        Payloads are copied with :func:`copy.deepcopy`. If copying any
        payload raises, the error propagates and no graph is returned.
        """
        return self._deep_copy({})

    def __copy__(self) -> Digraph[V, E]:
        return self._deep_copy({})

    def __deepcopy__(self, memo: dict[int, Any]) -> Digraph[V, E]:
        return self._deep_copy(memo)

    def _deep_copy(self, memo: dict[int, Any]) -> Digraph[V, E]:
        # Built entirely on locals; installed only once every payload copied.
        vertices: dict[int, _VertexRecord[V, E]] = {}
        for key, record in self._vertices.items():
            vertices[key] = _VertexRecord(
                info=copy.deepcopy(record.info, memo),
                out={to: copy.deepcopy(info, memo) for to, info in record.out.items()},
            )
        clone: Digraph[V, E] = Digraph()
        clone._vertices = vertices
        clone._preds = {key: set(preds) for key, preds in self._preds.items()}
        clone._edge_count = self._edge_count
        return clone

    def take(self) -> Digraph[V, E]:
        """Move this graph's storage into a new instance and leave this one empty."""
        moved: Digraph[V, E] = Digraph()
        moved._vertices, self._vertices = self._vertices, {}
        moved._preds, self._preds = self._preds, {}
        moved._edge_count, self._edge_count = self._edge_count, 0
        return moved

    def clear(self) -> None:
        """Remove every vertex and edge."""
        self._vertices = {}
        self._preds = {}
        self._edge_count = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertices(self) -> list[int]:
        """Return the keys of every vertex, in insertion order."""
        return list(self._vertices)

    @overload
    def edges(self) -> list[EdgeKey]: ...

    @overload
    def edges(self, vertex: int) -> list[EdgeKey]: ...

    def edges(self, vertex: int | None = None) -> list[EdgeKey]:
        """Return ``(from, to)`` pairs for all edges, or for those leaving *vertex*."""
        if vertex is None:
            return [(key, to) for key, record in self._vertices.items() for to in record.out]
        return [(vertex, to) for to in self._record(vertex).out]

    def vertex_info(self, vertex: int) -> V:
        """Return the payload of *vertex*."""
        return self._record(vertex).info

    def edge_info(self, from_vertex: int, to_vertex: int) -> E:
        """Return the payload of the edge *from_vertex* -> *to_vertex*."""
        record = self._record(from_vertex)
        self._require(to_vertex)
        try:
            return record.out[to_vertex]
        except KeyError:
            raise EdgeNotFoundError(from_vertex, to_vertex) from None

    def has_vertex(self, vertex: int) -> bool:
        return vertex in self._vertices

    def has_edge(self, from_vertex: int, to_vertex: int) -> bool:
        record = self._vertices.get(from_vertex)
        return record is not None and to_vertex in record.out

    def successors(self, vertex: int) -> list[int]:
        """Return destination keys of the edges leaving *vertex*."""
        return list(self._record(vertex).out)

    def predecessors(self, vertex: int) -> list[int]:
        """Return source keys of the edges entering *vertex*."""
        self._require(vertex)
        return sorted(self._preds[vertex])

    def out_edges(self, vertex: int) -> Iterator[tuple[int, E]]:
        """Yield ``(to, payload)`` for each edge leaving *vertex*."""
        yield from self._record(vertex).out.items()

    def vertex_count(self) -> int:
        return len(self._vertices)

    @overload
    def edge_count(self) -> int: ...

    @overload
    def edge_count(self, vertex: int) -> int: ...

    def edge_count(self, vertex: int | None = None) -> int:
        """Return the total edge count, or the out-degree of *vertex*."""
        if vertex is None:
            return self._edge_count
        return len(self._record(vertex).out)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: int, info: V) -> None:
        """Insert *vertex* with no outgoing edges."""
        if vertex in self._vertices:
            raise VertexAlreadyExistsError(vertex)
        self._vertices[vertex] = _VertexRecord(info=info)
        self._preds[vertex] = set()
        logger.debug("Added vertex %s", vertex)

    def add_edge(self, from_vertex: int, to_vertex: int, info: E) -> None:
        """Insert the edge *from_vertex* -> *to_vertex*."""
        record = self._record(from_vertex)
        self._require(to_vertex)
        if to_vertex in record.out:
            raise EdgeAlreadyExistsError(from_vertex, to_vertex)
        record.out[to_vertex] = info
        self._preds[to_vertex].add(from_vertex)
        self._edge_count += 1
        logger.debug("Added edge %s -> %s", from_vertex, to_vertex)

    def remove_vertex(self, vertex: int) -> None:
        """Delete *vertex* together with every incoming and outgoing edge."""
        record = self._record(vertex)
        removed = len(record.out)
        for to in record.out:
            self._preds[to].discard(vertex)
        for source in self._preds[vertex]:
            if source != vertex:
                del self._vertices[source].out[vertex]
                removed += 1
        del self._vertices[vertex]
        del self._preds[vertex]
        self._edge_count -= removed
        logger.debug("Removed vertex %s and %d incident edge(s)", vertex, removed)

    def remove_edge(self, from_vertex: int, to_vertex: int) -> None:
        """Delete the edge *from_vertex* -> *to_vertex*."""
        record = self._record(from_vertex)
        self._require(to_vertex)
        if to_vertex not in record.out:
            raise EdgeNotFoundError(from_vertex, to_vertex)
        del record.out[to_vertex]
        self._preds[to_vertex].discard(from_vertex)
        self._edge_count -= 1
        logger.debug("Removed edge %s -> %s", from_vertex, to_vertex)

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def is_strongly_connected(self) -> bool:
        """Return True if every vertex can reach every other vertex."""
        return connectivity.is_strongly_connected(self)

    def find_shortest_paths(self, start_vertex: int, edge_weight: WeightFunc[E]) -> PredecessorMap:
        """Return the Dijkstra predecessor tree rooted at *start_vertex*.

        Every vertex key maps to its predecessor on the cheapest path found.
        The start vertex and unreachable vertices map to themselves.
        """
        return paths.find_shortest_paths(self, start_vertex, edge_weight)

    # ------------------------------------------------------------------
    # Protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._vertices

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._vertices))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digraph):
            return NotImplemented
        if self._vertices.keys() != other._vertices.keys():
            return False
        for key, record in self._vertices.items():
            theirs = other._vertices[key]
            if record.info != theirs.info or record.out != theirs.out:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Digraph(vertices={self.vertex_count()}, edges={self.edge_count()})"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record(self, vertex: int) -> _VertexRecord[V, E]:
        try:
            return self._vertices[vertex]
        except KeyError:
            raise VertexNotFoundError(vertex) from None

    def _require(self, vertex: int) -> None:
        if vertex not in self._vertices:
            raise VertexNotFoundError(vertex)
